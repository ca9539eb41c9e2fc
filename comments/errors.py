class CommentError(Exception):
    pass


class InvalidIdentifier(CommentError, ValueError):
    """Raised when a string can't be turned into a comment/movie ObjectId."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid identifier: {value!r}")


class InvalidOperation(CommentError):
    """Raised when a write is rejected or can't be verified afterwards."""
