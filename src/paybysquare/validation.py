import logging
import math
import string

import schwifty
from schwifty.exceptions import SchwiftyException

from paybysquare import env
from paybysquare.errors import FieldTooLong, InvalidAmount, InvalidIban, InvalidSwift, MissingAccount
from paybysquare.models import PaymentRequest

logger = logging.getLogger(__name__)

ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)

# Checked in this order, first violation wins
FIELD_LIMITS = (
    ("invoice_id", 10),
    ("beneficiary_name", 70),
    ("beneficiary_address_1", 70),
    ("beneficiary_address_2", 70),
    ("variable_symbol", 10),
    ("constant_symbol", 4),
    ("specific_symbol", 10),
    ("originators_reference_information", 35),
    ("note", 140),
)


def validate_payment_request(payment: PaymentRequest, strict: bool | None = None) -> None:
    """Check that ``payment`` can be encoded.

    Raises the first violated rule as a :class:`~paybysquare.errors.ValidationFailed`
    subclass. With ``strict`` (defaults to ``STRICT_IBAN_CHECK``) IBANs and BICs
    are also verified by schwifty.
    """
    if strict is None:
        strict = env.STRICT_IBAN_CHECK

    if not math.isfinite(payment.amount) or payment.amount <= 0:
        raise InvalidAmount()

    if payment.iban is None and payment.bank_accounts is None:
        raise MissingAccount()

    if payment.iban is not None:
        validate_iban(payment.iban, strict)

    for account in payment.bank_accounts or ():
        validate_iban(account.iban, strict)
        if account.swift is not None:
            validate_swift(account.swift, strict)

    if payment.swift is not None:
        validate_swift(payment.swift, strict)

    for field, max_length in FIELD_LIMITS:
        value = getattr(payment, field)
        if value is not None:
            validate_length(field, value, max_length)


def validate_iban(iban: str, strict: bool = False) -> None:
    iban_clean = iban.replace(" ", "")

    if not 15 <= len(iban_clean) <= 34:
        raise InvalidIban("IBAN must be between 15 and 34 characters")
    if not all(c in string.ascii_letters for c in iban_clean[:2]):
        raise InvalidIban("IBAN must start with a 2-letter country code")
    if not all(c in string.digits for c in iban_clean[2:4]):
        raise InvalidIban("IBAN check digits must be numeric")
    if not ASCII_ALNUM.issuperset(iban_clean):
        raise InvalidIban("IBAN contains invalid characters")

    if strict:
        try:
            schwifty.IBAN(iban_clean)
        except SchwiftyException as e:
            logger.info("IBAN %s rejected by schwifty: %s", iban_clean, e)
            raise InvalidIban(str(e)) from e


def validate_swift(swift: str, strict: bool = False) -> None:
    swift_clean = swift.replace(" ", "")

    if len(swift_clean) not in (8, 11):
        raise InvalidSwift("SWIFT/BIC must be 8 or 11 characters")
    if not ASCII_ALNUM.issuperset(swift_clean):
        raise InvalidSwift("SWIFT/BIC contains invalid characters")

    if strict:
        try:
            schwifty.BIC(swift_clean)
        except SchwiftyException as e:
            logger.info("BIC %s rejected by schwifty: %s", swift_clean, e)
            raise InvalidSwift(str(e)) from e


def validate_length(field: str, value: str, max_length: int) -> None:
    # Limits are in UTF-8 bytes
    length = len(value.encode("utf-8", "surrogatepass"))
    if length > max_length:
        raise FieldTooLong(field, max_length, length)
