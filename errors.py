class NotFoundError(LookupError):
    """Raised when a topic, reply, resource, lawyer or user id has no match."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(ValueError):
    """Raised when a well-formed request breaks a forum rule (e.g. reply depth)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
