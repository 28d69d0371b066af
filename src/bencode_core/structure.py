"""
Data structures for representing Bencoded types.

Every decoded element is one of four immutable variants: BencodeString,
BencodeInt, BencodeList and BencodeDict.
"""
from collections.abc import Mapping, Sequence
from functools import total_ordering
from types import MappingProxyType

from .errors import DuplicateMappingKey, UnsupportedValueKind
from .numeric import int_to_digits

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "to_element",
    "DEFAULT_ENCODING",
]

DEFAULT_ENCODING = "utf-8"


class BencodeType:
    """Base class for all Bencode data types."""
    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def to_native(self):
        """Converts the element into plain Python values."""
        raise NotImplementedError


class BencodeInt(BencodeType):
    """Represents a Bencoded integer."""
    __slots__ = ("_value",)

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        object.__setattr__(self, "_value", int(value))

    @property
    def value(self) -> int:
        return self._value

    def to_native(self) -> int:
        return self._value

    def __int__(self):
        return self._value

    def __index__(self):
        return self._value

    def __eq__(self, other):
        if not isinstance(other, BencodeInt):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash((BencodeInt, self._value))

    def __repr__(self):
        return f"BencodeInt({int_to_digits(self._value)})"


@total_ordering
class BencodeString(BencodeType):
    """
    Represents a Bencoded byte string.

    The bytes are copied on construction, so later changes to a bytearray or
    memoryview passed in are never visible through the value. Strings order by
    their raw bytes, which is the order dictionary keys take on the wire.
    """
    __slots__ = ("_value",)

    def __init__(self, value):
        if isinstance(value, str):
            value = value.encode(DEFAULT_ENCODING)
        elif not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("BencodeString requires bytes.")
        object.__setattr__(self, "_value", bytes(value))

    @property
    def value(self) -> bytes:
        return self._value

    def text(self, encoding: str = DEFAULT_ENCODING, errors: str = "strict") -> str:
        """Decodes the raw bytes as text. Use errors="replace" for a lossy view."""
        return self._value.decode(encoding, errors)

    def to_native(self) -> bytes:
        return self._value

    def __len__(self):
        return len(self._value)

    def __bytes__(self):
        return self._value

    def __str__(self):
        return self.text(errors="replace")

    def __eq__(self, other):
        if not isinstance(other, BencodeString):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, BencodeString):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return f"BencodeString({self._value!r})"


class BencodeList(BencodeType, Sequence):
    """Represents a Bencoded list."""
    __slots__ = ("_items",)

    def __init__(self, value=()):
        if isinstance(value, (str, bytes, bytearray, Mapping)):
            raise TypeError("BencodeList requires a sequence of elements.")
        items = tuple(value)
        for item in items:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode types, got {type(item).__name__}.")
        object.__setattr__(self, "_items", items)

    @property
    def value(self) -> tuple:
        return self._items

    def to_native(self) -> list:
        return [item.to_native() for item in self._items]

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BencodeList(self._items[index])
        return self._items[index]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __eq__(self, other):
        if not isinstance(other, BencodeList):
            return NotImplemented
        return self._items == other._items

    def __hash__(self):
        return hash((BencodeList, self._items))

    def __repr__(self):
        return f"BencodeList({list(self._items)!r})"


def _coerce_key(key) -> BencodeString:
    if isinstance(key, BencodeString):
        return key
    if isinstance(key, (str, bytes, bytearray, memoryview)):
        return BencodeString(key)
    raise TypeError(f"BencodeDict keys must be bytes, got {type(key).__name__}.")


class BencodeDict(BencodeType, Mapping):
    """
    Represents a Bencoded dictionary.

    Keys are BencodeString instances; lookups also accept bytes or str.
    Iteration follows the order the entries were given in, while equality
    ignores order entirely.
    """
    __slots__ = ("_entries",)

    def __init__(self, value=None):
        if value is None:
            value = {}
        if not isinstance(value, Mapping):
            raise TypeError("BencodeDict requires a mapping.")
        entries = {}
        for k, v in value.items():
            key = _coerce_key(k)
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode types, got {type(v).__name__}.")
            if key in entries:
                raise DuplicateMappingKey(key.value)
            entries[key] = v
        object.__setattr__(self, "_entries", entries)

    @property
    def value(self) -> Mapping:
        return MappingProxyType(self._entries)

    def to_native(self) -> dict:
        return {k.value: v.to_native() for k, v in self._entries.items()}

    def sorted_items(self) -> list:
        """Entries in canonical (ascending raw byte) key order."""
        return sorted(self._entries.items(), key=lambda kv: kv[0].value)

    def __getitem__(self, key):
        try:
            key = _coerce_key(key)
        except TypeError:
            raise KeyError(key) from None
        return self._entries[key]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __eq__(self, other):
        if not isinstance(other, BencodeDict):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self):
        return hash((BencodeDict, frozenset(self._entries.items())))

    def __repr__(self):
        return f"BencodeDict({self._entries!r})"


def to_element(obj) -> BencodeType:
    """
    Converts native Python values into Bencode types.

    Supports bytes-like objects, str (UTF-8), int, lists/tuples and mappings
    with str or bytes keys. Anything else, bool and None included, raises
    UnsupportedValueKind.
    """
    if isinstance(obj, BencodeType):
        return obj

    if isinstance(obj, bool):
        raise UnsupportedValueKind(type(obj))

    if isinstance(obj, int):
        return BencodeInt(obj)

    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return BencodeString(obj)

    if isinstance(obj, (list, tuple)):
        return BencodeList([to_element(x) for x in obj])

    if isinstance(obj, Mapping):
        entries = {}
        for k, v in obj.items():
            if not isinstance(k, (BencodeString, str, bytes, bytearray)):
                raise UnsupportedValueKind(type(k))
            key = _coerce_key(k)
            if key in entries:
                raise DuplicateMappingKey(key.value)
            entries[key] = to_element(v)
        return BencodeDict(entries)

    raise UnsupportedValueKind(type(obj))
