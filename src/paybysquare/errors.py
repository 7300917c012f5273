class PayBySquareError(Exception):
    """Base class for everything the encode pipeline can raise."""

    #: Whether the caller caused the failure and can fix it by changing the input
    client_error = False


class ValidationFailed(PayBySquareError):
    client_error = True


class InvalidIban(ValidationFailed):
    def __init__(self, reason: str):
        super().__init__(f"Invalid IBAN format: {reason}")
        self.reason = reason


class InvalidSwift(ValidationFailed):
    def __init__(self, reason: str):
        super().__init__(f"Invalid SWIFT/BIC format: {reason}")
        self.reason = reason


class InvalidAmount(ValidationFailed):
    def __init__(self):
        super().__init__("Amount must be greater than 0")


class MissingAccount(ValidationFailed):
    def __init__(self):
        super().__init__("Missing required field: either 'iban' or 'bank_accounts' must be provided")


class FieldTooLong(ValidationFailed):
    def __init__(self, field: str, max: int, actual: int):
        super().__init__(f"Field too long: {field} (max: {max}, got: {actual})")
        self.field = field
        self.max = max
        self.actual = actual


class CompressionFailed(PayBySquareError):
    def __init__(self, reason: str):
        super().__init__(f"Compression failed: {reason}")


class SerializationFailed(PayBySquareError):
    def __init__(self, reason: str):
        super().__init__(f"Serialization error: {reason}")


class QrGenerationFailed(PayBySquareError):
    def __init__(self, reason: str):
        super().__init__(f"QR generation failed: {reason}")


class ImageEncodingFailed(PayBySquareError):
    def __init__(self, reason: str):
        super().__init__(f"Image encoding failed: {reason}")


class ImageDecodingFailed(PayBySquareError):
    """Raised when one of the input images cannot be read.

    ``image`` is ``"source"`` for the rendered QR code and ``"frame"`` for the
    frame background.
    """

    def __init__(self, image: str, reason: str):
        super().__init__(f"Failed to load {image} image: {reason}")
        self.image = image
