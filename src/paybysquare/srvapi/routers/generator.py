from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter, Query, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse

from paybysquare import env
from paybysquare.models import MAX_QR_SIZE, CodeResponse, PaymentRequest, QrOptions
from paybysquare.service import generate_code_only, generate_pay_by_square_qr

PREFIX = "/pay-by-square-generator"

router = APIRouter()


@router.post(
    f"{PREFIX}/generate-qr",
    tags=["pay-by-square-generator"],
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "QR code image generated successfully"},
        400: {"description": "Invalid request data"},
        500: {"description": "Internal server error"},
    },
)
def generate_qr(
    request: Request,
    payment: PaymentRequest,
    with_frame: bool | None = None,
    qr_size: int | None = Query(None, gt=0, le=MAX_QR_SIZE),
) -> Response:
    """
    Generate a PAY by square QR code image (PNG).
    """
    opts = QrOptions(
        with_frame=env.WITH_FRAME if with_frame is None else with_frame,
        qr_size=env.QR_SIZE if qr_size is None else qr_size,
    )
    png = generate_pay_by_square_qr(payment, opts, request.app.state.frame_data)
    return Response(content=png, media_type="image/png")


@router.post(
    f"{PREFIX}/generate-code",
    tags=["pay-by-square-generator"],
    responses={400: {"description": "Invalid request data"}, 500: {"description": "Internal server error"}},
)
def generate_code(payment: PaymentRequest) -> CodeResponse:
    """
    Generate a PAY by square code as text.
    """
    return CodeResponse(code=generate_code_only(payment))


@router.get(f"{PREFIX}/version.txt", tags=["pay-by-square-generator"], response_class=PlainTextResponse)
def app_version() -> str:
    try:
        return version("pay-by-square-generator")
    except PackageNotFoundError:
        return "unknown"


@router.get("/health")
def health() -> dict:
    return {"status": "healthy", "service": "pay-by-square-generator"}


@router.get("/", include_in_schema=False)
def root_redirect() -> RedirectResponse:
    return RedirectResponse(f"{PREFIX}/docs", status_code=302)
