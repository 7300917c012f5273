import os

PORT = int(os.environ.get("PORT", "3000"))
HOST = os.environ.get("HOST", "0.0.0.0")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Image endpoint defaults, overridable per request
QR_SIZE = int(os.environ.get("QR_SIZE", "300"))
WITH_FRAME = os.environ.get("WITH_FRAME", "1").lower() not in ("", "0", "false", "no")

# PNG drawn behind the QR code. Without it the QR code is returned as-is,
# unless DEFAULT_FRAME asks for the built-in frame.
FRAME_PATH = os.environ.get("FRAME_PATH")
DEFAULT_FRAME = bool(os.environ.get("DEFAULT_FRAME", ""))

# Run IBAN and BIC through schwifty after the structural checks
STRICT_IBAN_CHECK = bool(os.environ.get("STRICT_IBAN_CHECK", ""))

# "xz" or "raw"
LZMA_FORMAT = os.environ.get("LZMA_FORMAT", "xz").lower()
