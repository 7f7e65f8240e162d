"""Errors raised while decoding Tree-Buf data."""


class DecodeError(Exception):
    """Base class for every failure to decode a Tree-Buf document."""

    default_message = "The document could not be decoded."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.default_message)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class SchemaMismatch(DecodeError):
    """The document is valid but does not hold the expected schema."""

    default_message = "The expected schema did not match that in the document."


class InvalidFormat(DecodeError):
    """The bytes are not a valid Tree-Buf document."""

    default_message = "The format was not a valid Tree-Buf"