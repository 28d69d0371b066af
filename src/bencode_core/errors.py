"""
Exceptions raised by the bencode decoder and encoder.
"""
__all__ = [
    "BencodeError",
    "DecodeError",
    "UnexpectedEndOfInput",
    "TruncatedStringBody",
    "UnterminatedList",
    "UnterminatedDictionary",
    "UnrecognizedMarker",
    "InvalidStringLength",
    "InvalidIntegerLiteral",
    "InvalidDictionaryKeyType",
    "DuplicateDictionaryKey",
    "UnsortedDictionaryKeys",
    "TrailingData",
    "NestingTooDeep",
    "EncodeError",
    "UnsupportedValueKind",
    "DuplicateMappingKey",
]


class BencodeError(ValueError):
    """Base class for every bencode error."""


class DecodeError(BencodeError):
    """Raised when bencoded input cannot be decoded."""
    def __init__(self, detail: str, position: int | None = None):
        self.detail = detail
        self.position = position
        if position is None:
            super().__init__(detail)
        else:
            super().__init__(f"{detail} (at byte {position})")


class UnexpectedEndOfInput(DecodeError):
    """Input ended before the current element was complete."""


class TruncatedStringBody(UnexpectedEndOfInput):
    """A byte string declared more bytes than the input holds."""
    def __init__(self, expected: int, available: int, position: int | None = None):
        self.expected = expected
        self.available = available
        super().__init__(
            f"String declares {expected} bytes but only {available} are available",
            position,
        )


class UnterminatedList(UnexpectedEndOfInput):
    pass


class UnterminatedDictionary(UnexpectedEndOfInput):
    pass


class UnrecognizedMarker(DecodeError):
    """The leading byte does not start any bencode element."""
    def __init__(self, marker: bytes, position: int | None = None):
        self.marker = marker
        super().__init__(f"Invalid token {marker!r}", position)


class InvalidStringLength(DecodeError):
    def __init__(self, literal: bytes, position: int | None = None):
        self.literal = literal
        super().__init__(f"Invalid string length {literal!r}", position)


class InvalidIntegerLiteral(DecodeError):
    def __init__(self, literal: bytes, position: int | None = None):
        self.literal = literal
        super().__init__(f"Invalid integer literal {literal!r}", position)


class InvalidDictionaryKeyType(DecodeError):
    """A dictionary key decoded to something other than a byte string."""


class DuplicateDictionaryKey(DecodeError):
    def __init__(self, key: bytes, position: int | None = None):
        self.key = key
        super().__init__(f"Duplicate dictionary key {key!r}", position)


class UnsortedDictionaryKeys(DecodeError):
    """Raised in strict mode when keys are not in ascending byte order."""
    def __init__(self, key: bytes, position: int | None = None):
        self.key = key
        super().__init__(f"Dictionary key {key!r} is out of order", position)


class TrailingData(DecodeError):
    pass


class NestingTooDeep(DecodeError):
    """Lists and dictionaries are nested deeper than the interpreter can follow."""


class EncodeError(BencodeError, TypeError):
    """Raised when a value cannot be bencoded."""


class UnsupportedValueKind(EncodeError):
    def __init__(self, kind: type):
        self.kind = kind
        super().__init__(f"Cannot bencode object of type {kind.__name__}")


class DuplicateMappingKey(EncodeError):
    """Two mapping keys collapse to the same byte string."""
    def __init__(self, key: bytes):
        self.key = key
        super().__init__(f"Duplicate dictionary key {key!r}")
