"""
Precondition checks for facade arguments.

These run before any call into the driver so that bad input fails fast
without touching the network.
"""

from pydantic import BaseModel

from .errors import InvalidArgument


def require_not_empty(value: str | None, argument: str) -> str:
    """
    Ensure a string argument is present and non-empty.

    Args:
        value: The argument value
        argument: The argument name, used in the error message

    Returns:
        The value, unchanged

    Raises:
        InvalidArgument: If the value is None, not a string, or empty
    """
    if value is None or not isinstance(value, str) or value == "":
        raise InvalidArgument(argument)
    return value


def require_not_none(value: object, argument: str) -> object:
    """Ensure an argument is not None."""
    if value is None:
        raise InvalidArgument(argument, f"Argument '{argument}' must not be null.")
    return value


def require_document_type(document_type: object) -> type:
    """
    Ensure a document type is ``dict`` or a pydantic model class.

    Args:
        document_type: The type documents are read into

    Returns:
        The document type, unchanged

    Raises:
        InvalidArgument: If the type is neither
    """
    if document_type is dict or (
        isinstance(document_type, type) and issubclass(document_type, BaseModel)
    ):
        return document_type
    raise InvalidArgument(
        "document_type",
        "Argument 'document_type' must be dict or a subclass of pydantic BaseModel."
    )
