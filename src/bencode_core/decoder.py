"""
Bencode decoder for BitTorrent metainfo and tracker responses.
"""
import logging
import re
import sys

from .cursor import as_cursor
from .errors import (
    DecodeError,
    DuplicateDictionaryKey,
    InvalidDictionaryKeyType,
    InvalidIntegerLiteral,
    InvalidStringLength,
    NestingTooDeep,
    TrailingData,
    TruncatedStringBody,
    UnexpectedEndOfInput,
    UnrecognizedMarker,
    UnsortedDictionaryKeys,
    UnterminatedDictionary,
    UnterminatedList,
)
from .numeric import digits_to_int
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

INT_MARKER = ord("i")
LIST_MARKER = ord("l")
DICT_MARKER = ord("d")
END_MARKER = ord("e")
STRING_DELIMITER = ord(":")

_INT_LITERAL = re.compile(rb"-?(?:0|[1-9][0-9]*)")
_CANONICAL_LENGTH = re.compile(rb"0|[1-9][0-9]*")

# a string length with more digits cannot be a byte count on this platform
_MAX_LENGTH_DIGITS = len(str(sys.maxsize))


def _is_digit(b) -> bool:
    return b is not None and 0x30 <= b <= 0x39


class BencodeDecoder:
    """
    Decodes Bencoded bytes into BencodeType trees.

    The source may be bytes, a cursor or a binary stream. With strict=True
    only canonical input is accepted: dictionary keys must be in ascending
    byte order and string lengths must not carry leading zeros. Repeated
    dictionary keys are always rejected.
    """
    def __init__(self, source, strict: bool = False):
        self.cursor = as_cursor(source)
        self.strict = strict

    def decode(self) -> BencodeType:
        """Decodes one element and requires the source to end right after it."""
        result = self.decode_next()
        if not self.cursor.at_end():
            raise TrailingData("Extra data after decoding", self.cursor.position)
        return result

    def decode_next(self) -> BencodeType:
        """Decodes one element, leaving any following bytes unread."""
        try:
            return self._parse_value()
        except RecursionError:
            raise NestingTooDeep("Elements are nested too deeply", self.cursor.position) from None

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self) -> BencodeType:
        ch = self.cursor.peek()

        if ch is None:
            raise UnexpectedEndOfInput("Unexpected end of input", self.cursor.position)

        if _is_digit(ch):  # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == INT_MARKER:
            return self._parse_int()

        if ch == LIST_MARKER:
            return self._parse_list()

        if ch == DICT_MARKER:
            return self._parse_dict()

        raise UnrecognizedMarker(bytes((ch,)), self.cursor.position)

    def _parse_int(self) -> BencodeInt:
        """Parses an integer such as i-42e."""
        start = self.cursor.position
        self.cursor.read_byte()  # skip 'i'

        literal = self.cursor.read_until(END_MARKER)
        if literal is None:
            raise UnexpectedEndOfInput("Integer is missing its 'e' terminator", start)

        # no leading zeros, no "-0", and none of int()'s extras (+, _, spaces)
        if literal == b"-0" or not _INT_LITERAL.fullmatch(literal):
            raise InvalidIntegerLiteral(literal, start)

        return BencodeInt(digits_to_int(literal))

    def _parse_string(self) -> BencodeString:
        """Parses a length-prefixed byte string such as 4:spam."""
        start = self.cursor.position

        length_bytes = bytearray()
        while _is_digit(self.cursor.peek()):
            length_bytes.append(self.cursor.read_byte())

        delimiter = self.cursor.read_byte()
        if delimiter is None:
            raise UnexpectedEndOfInput("String length is missing its ':' delimiter", start)
        if delimiter != STRING_DELIMITER:
            raise InvalidStringLength(bytes(length_bytes) + bytes((delimiter,)), start)
        if self.strict and not _CANONICAL_LENGTH.fullmatch(length_bytes):
            raise InvalidStringLength(bytes(length_bytes), start)

        significant = bytes(length_bytes).lstrip(b"0") or b"0"
        if len(significant) > _MAX_LENGTH_DIGITS or int(significant) > sys.maxsize:
            raise InvalidStringLength(bytes(length_bytes), start)

        length = int(significant)
        body = self.cursor.read(length)
        if len(body) != length:
            raise TruncatedStringBody(length, len(body), start)

        return BencodeString(body)

    def _parse_list(self) -> BencodeList:
        """Parses a list such as l4:spami3ee."""
        start = self.cursor.position
        self.cursor.read_byte()  # skip 'l'
        items = []

        while True:
            ch = self.cursor.peek()
            if ch is None:
                raise UnterminatedList("List is missing its 'e' terminator", start)
            if ch == END_MARKER:
                break
            items.append(self._parse_value())

        self.cursor.read_byte()  # skip 'e'
        return BencodeList(items)

    def _parse_dict(self) -> BencodeDict:
        """Parses a dictionary such as d3:cow3:mooe."""
        start = self.cursor.position
        self.cursor.read_byte()  # skip 'd'
        obj = {}
        previous = None

        while True:
            ch = self.cursor.peek()
            if ch is None:
                raise UnterminatedDictionary("Dictionary is missing its 'e' terminator", start)
            if ch == END_MARKER:
                break

            # keys MUST be strings
            key_pos = self.cursor.position
            key = self._parse_value()
            if not isinstance(key, BencodeString):
                raise InvalidDictionaryKeyType(
                    f"Dictionary key must be a byte string, not {type(key).__name__}", key_pos
                )
            if key in obj:
                raise DuplicateDictionaryKey(key.value, key_pos)
            if self.strict and previous is not None and key < previous:
                raise UnsortedDictionaryKeys(key.value, key_pos)

            if self.cursor.peek() is None:
                raise UnterminatedDictionary(f"Dictionary key {key.value!r} has no value", start)
            obj[key] = self._parse_value()
            previous = key

        self.cursor.read_byte()  # skip 'e'
        return BencodeDict(obj)


def decode(data, *, strict: bool = False) -> BencodeType:
    """
    Decodes a complete Bencoded document.

    Raises a DecodeError subclass for empty, truncated or malformed input,
    including bytes left over after the first element.

    Checking for leftover bytes reads one byte past the element. On a socket
    or pipe that read blocks until the peer sends more or closes, so stream
    callers that expect more messages should use decode_from instead.
    """
    try:
        return BencodeDecoder(data, strict=strict).decode()
    except DecodeError as exc:
        logger.debug("bencode decode failed: %s", exc)
        raise


def decode_from(source, *, strict: bool = False) -> BencodeType:
    """
    Decodes a single element from a cursor or stream and stops after it.

    Whatever follows the element is left in the source for the caller.
    """
    try:
        return BencodeDecoder(source, strict=strict).decode_next()
    except DecodeError as exc:
        logger.debug("bencode decode failed: %s", exc)
        raise
