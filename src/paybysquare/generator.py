"""Encoding of a payment request into a PAY by square code.

The code is built in stages::

    fields  = "1\t100.50\tEUR\t..."            (17 tab separated fields)
    payload = crc32(fields) + fields           (CRC little endian)
    blob    = header + lzma(payload)           (4 byte header)
    code    = base32hex(blob)                  (no padding)
"""
import logging
import lzma
import struct
import zlib
from datetime import date

from paybysquare import env
from paybysquare.errors import CompressionFailed, SerializationFailed
from paybysquare.models import (
    DirectDebit,
    DirectDebitScheme,
    DirectDebitType,
    PaymentOption,
    PaymentRequest,
    Periodicity,
    StandingOrder,
)

logger = logging.getLogger(__name__)

BASE32HEX_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUV"

# Symbol type, version, document type, reserved
HEADER = bytes([0x00, 0x00, 0x00, 0x00])

LZMA_PRESET = 6

# LZMA1 parameters prescribed for raw streams
RAW_LZMA_FILTERS = [
    {
        "id": lzma.FILTER_LZMA1,
        "preset": LZMA_PRESET,
        "lc": 3,
        "lp": 0,
        "pb": 2,
        "dict_size": 128 * 1024,
    }
]

PAYMENT_OPTION_CODES = {
    PaymentOption.PAYMENT_ORDER: "1",
    PaymentOption.STANDING_ORDER: "2",
    PaymentOption.DIRECT_DEBIT: "3",
}

PERIODICITY_CODES = {
    Periodicity.DAILY: "D",
    Periodicity.WEEKLY: "W",
    Periodicity.MONTHLY: "M",
    Periodicity.QUARTERLY: "Q",
    Periodicity.HALF_YEARLY: "H",
    Periodicity.YEARLY: "Y",
}

DIRECT_DEBIT_SCHEME_CODES = {
    DirectDebitScheme.SEPA: "SEPA",
    DirectDebitScheme.OTHER: "OTHER",
}

DIRECT_DEBIT_TYPE_CODES = {
    DirectDebitType.ONE_OFF: "ONEOFF",
    DirectDebitType.RECURRENT: "RCUR",
}


def generate_pay_by_square_code(payment: PaymentRequest, lzma_format: str | None = None) -> str:
    """Encode an already validated payment request."""
    data = build_data_structure(payment)
    try:
        raw = data.encode("utf-8")
    except UnicodeEncodeError as e:
        raise SerializationFailed(str(e)) from e

    compressed = compress_lzma(with_checksum(raw), lzma_format)
    code = base32hex_encode(add_header(compressed))
    logger.debug("Encoded %d bytes of payment data into a %d character code", len(raw), len(code))
    return code


def build_data_structure(payment: PaymentRequest) -> str:
    fields = [
        _payment_options(payment.payment_options),
        f"{payment.amount:.2f}",
        payment.currency,
        format_date(payment.date),
        payment.variable_symbol or "",
        payment.constant_symbol or "",
        payment.specific_symbol or "",
        payment.originators_reference_information or "",
        payment.note or "",
        _bank_accounts(payment),
        payment.beneficiary_name or "",
        payment.beneficiary_address_1 or "",
        payment.beneficiary_address_2 or "",
        format_date(payment.payment_due_date),
        payment.invoice_id or "",
        _standing_order(payment.standing_order),
        _direct_debit(payment.direct_debit),
    ]
    return "\t".join(fields)


def format_date(value: date | None) -> str:
    if value is None:
        return ""
    return value.strftime("%Y%m%d")


def _payment_options(options: list[PaymentOption] | None) -> str:
    if options is None:
        # Plain payment order
        return PAYMENT_OPTION_CODES[PaymentOption.PAYMENT_ORDER]
    return ",".join(PAYMENT_OPTION_CODES[option] for option in options)


def _account(iban: str, swift: str | None) -> str:
    if swift is None:
        return iban
    return f"{iban}|{swift}"


def _bank_accounts(payment: PaymentRequest) -> str:
    if payment.bank_accounts is not None:
        return ",".join(_account(account.iban, account.swift) for account in payment.bank_accounts)
    if payment.iban is not None:
        return _account(payment.iban, payment.swift)
    return ""


def _standing_order(standing_order: StandingOrder | None) -> str:
    if standing_order is None:
        return ""
    return "|".join(
        [
            str(standing_order.day),
            ",".join(str(month) for month in standing_order.month),
            PERIODICITY_CODES[standing_order.periodicity],
            format_date(standing_order.last_date),
        ]
    )


def _direct_debit(direct_debit: DirectDebit | None) -> str:
    if direct_debit is None:
        return ""
    parts = [
        DIRECT_DEBIT_SCHEME_CODES[direct_debit.scheme],
        DIRECT_DEBIT_TYPE_CODES[direct_debit.debit_type],
    ]
    if direct_debit.mandate_id is not None:
        parts.append(direct_debit.mandate_id)
    if direct_debit.creditor_id is not None:
        parts.append(direct_debit.creditor_id)
    return "|".join(parts)


def with_checksum(data: bytes) -> bytes:
    return struct.pack("<I", zlib.crc32(data)) + data


def compress_lzma(data: bytes, lzma_format: str | None = None) -> bytes:
    """Compress with LZMA at preset 6.

    ``lzma_format`` is ``"xz"`` for an XZ container or ``"raw"`` for a bare
    LZMA1 stream, defaulting to ``LZMA_FORMAT``.
    """
    if lzma_format is None:
        lzma_format = env.LZMA_FORMAT
    try:
        if lzma_format == "xz":
            return lzma.compress(data, format=lzma.FORMAT_XZ, preset=LZMA_PRESET)
        if lzma_format == "raw":
            return lzma.compress(data, format=lzma.FORMAT_RAW, filters=RAW_LZMA_FILTERS)
    except lzma.LZMAError as e:
        raise CompressionFailed(str(e)) from e
    raise CompressionFailed(f"unsupported LZMA format {lzma_format!r}")


def add_header(data: bytes) -> bytes:
    return HEADER + data


def base32hex_encode(data: bytes) -> str:
    result = []
    bits = 0
    bit_count = 0
    for byte in data:
        bits = ((bits << 8) | byte) & 0xFFFF
        bit_count += 8
        while bit_count >= 5:
            bit_count -= 5
            result.append(BASE32HEX_ALPHABET[(bits >> bit_count) & 0x1F])
    if bit_count > 0:
        result.append(BASE32HEX_ALPHABET[(bits << (5 - bit_count)) & 0x1F])
    return "".join(result)
