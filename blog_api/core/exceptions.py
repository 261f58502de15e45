# blog_api/core/exceptions.py
"""Domain errors raised by the service layer and translated to HTTP responses by the routes."""


class NotFoundError(LookupError):
    """The requested post or comment does not exist (or its id is malformed)."""

    def __init__(self, message: str, error_code: str = "POST_NOT_FOUND"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ForbiddenError(PermissionError):
    """The actor is neither the owner of the resource nor an administrator."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
        self.message = message
