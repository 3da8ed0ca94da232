"""Blog search error types."""


class BlogSearchError(Exception):
    """Base error with an HTTP status code and message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"detail": self.message}


class InvalidConfiguration(BlogSearchError):
    """Search options that cannot be used (bad posts-per-page, unknown link target)."""

    status_code = 500


class StorageUnavailable(BlogSearchError):
    """Reading posts or categories from storage failed."""

    status_code = 503


class MalformedInput(BlogSearchError, ValueError):
    """A request value that cannot be parsed. Callers fall back to a default."""

    status_code = 400
