"""Error kinds raised by the document store and generation tracker."""


class JsonStudioError(Exception):
    """Base exception for store and generation operations."""

    pass


class Unauthenticated(JsonStudioError):
    """Raised when a write operation has no resolvable principal."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class NotFound(JsonStudioError):
    """Raised when a record is missing or owned by another principal.

    Both cases share one message so callers cannot probe for ids that belong
    to someone else.
    """

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class InvalidTransition(JsonStudioError):
    """Raised when a generation that already finished is closed again."""

    pass


class InvalidGeneratedContent(JsonStudioError):
    """Raised when generated text is not valid JSON."""

    pass


class ExternalServiceFailure(JsonStudioError):
    """Raised when the text generation provider call fails."""

    pass
