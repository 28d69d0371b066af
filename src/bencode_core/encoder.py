"""
Bencode encoder for BitTorrent metainfo and tracker responses.
"""
import io
import logging

from .errors import EncodeError, UnsupportedValueKind
from .numeric import int_to_digits
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, to_element

logger = logging.getLogger(__name__)


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""
    buf = io.BytesIO()
    encode_to(obj, buf)
    return buf.getvalue()


def encode_to(obj, sink) -> None:
    """
    Encodes obj and writes the result to sink, anything with write(bytes).

    Native values are converted first, so an unsupported value raises
    UnsupportedValueKind before a single byte is written.
    """
    try:
        element = to_element(obj)
    except EncodeError as exc:
        logger.debug("bencode encode failed: %s", exc)
        raise
    _write(element, sink)


def _write(element, sink) -> None:
    match element:
        case BencodeString():
            sink.write(encode_bytes(element.value))
        case BencodeInt():
            sink.write(encode_int(element.value))
        case BencodeList():
            sink.write(b"l")
            for item in element:
                _write(item, sink)
            sink.write(b"e")
        case BencodeDict():
            # keys are written in ascending raw byte order
            sink.write(b"d")
            for key, value in element.sorted_items():
                sink.write(encode_bytes(key.value))
                _write(value, sink)
            sink.write(b"e")
        case _:
            # a BencodeType subclass outside the four variants
            raise UnsupportedValueKind(type(element))


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return b"i" + int_to_digits(int(n)).encode("ascii") + b"e"


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode("ascii") + b":" + bytes(b)


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    return encode_bytes(s.encode("utf-8"))


def encode_list(lst) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    return encode(BencodeList([to_element(x) for x in lst]))


def encode_dict(d) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    return encode(to_element(dict(d)))
