"""Custom exceptions for the layer content view engine."""


class LayerViewError(Exception):
    """Base exception for all layer view errors."""

    pass


class InvalidInputError(LayerViewError):
    """Raised when the engine is called with input it cannot handle."""

    pass


class MalformedTreeError(LayerViewError):
    """Raised when a file tree references itself or nests too deep."""

    pass


class UpstreamError(LayerViewError):
    """Raised when the analysis backend fails or cannot be reached."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ClientClosedError(LayerViewError):
    """Raised when the client is used outside of its async context."""

    pass
