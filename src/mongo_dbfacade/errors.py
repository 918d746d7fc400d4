"""
Exception types raised by the Mongo DB Facade.

Exactly two kinds of failure reach callers of the facade:

- ``InvalidArgument`` when a required argument fails its precondition
  check. Raised before any network interaction and never wrapped.
- ``ClientOperationFailed`` when the underlying driver raises during an
  operation. The original fault is preserved as ``cause`` and is also
  chained as ``__cause__`` when the facade re-raises it.
"""


class InvalidArgument(ValueError):
    """A required argument was missing or empty."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        """
        Initialize the error.

        Args:
            argument: Name of the offending argument
            message: Optional message overriding the default one
        """
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' must not be null or empty.")


class ClientOperationFailed(Exception):
    """
    A driver operation failed.

    Constructible either with a message and a cause, or with the cause
    alone, in which case a generic message is used.
    """

    DEFAULT_MESSAGE = "MongoDB client operation failed."

    def __init__(
        self,
        message: str | BaseException | None = None,
        cause: BaseException | None = None
    ) -> None:
        """
        Initialize the error.

        Args:
            message: Human readable context, or the cause when called
                with a single exception argument
            cause: The exception raised by the driver
        """
        if isinstance(message, BaseException) and cause is None:
            message, cause = None, message

        self.message = message or self.DEFAULT_MESSAGE
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} ({type(self.cause).__name__}: {self.cause})"
