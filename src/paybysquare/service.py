from paybysquare.generator import generate_pay_by_square_code
from paybysquare.models import PaymentRequest, QrOptions
from paybysquare.qr import add_frame, generate_qr_image
from paybysquare.validation import validate_payment_request


def generate_pay_by_square_qr(
    payment: PaymentRequest,
    opts: QrOptions | None = None,
    frame_data: bytes | None = None,
) -> bytes:
    """Validate ``payment`` and render its code as PNG, framed if requested."""
    opts = opts or QrOptions()
    code = generate_code_only(payment)
    qr_data = generate_qr_image(code, opts.qr_size)
    if opts.with_frame:
        return add_frame(qr_data, frame_data)
    return qr_data


def generate_code_only(payment: PaymentRequest) -> str:
    validate_payment_request(payment)
    return generate_pay_by_square_code(payment)
