class ImagePreparationError(ValueError):
    """Base class for input that cannot be turned into a puzzle image."""
    pass


class EmptyInputError(ImagePreparationError):
    """Raised when the raw byte buffer is empty, before any decoding."""
    pass


class DecodeError(ImagePreparationError):
    """Raised when the codec cannot parse the bytes (corrupt or unsupported)."""
    pass


class InvalidDimensionsError(ImagePreparationError):
    """Raised when a decoded image reports a non-positive width or height."""
    pass


class EncodeError(ImagePreparationError):
    """Raised when the encoder hands back an empty buffer."""
    pass
