"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .cursor import BufferCursor, StreamCursor
from .decoder import BencodeDecoder, decode, decode_from
from .encoder import encode, encode_to
from .errors import (
    BencodeError,
    DecodeError,
    DuplicateDictionaryKey,
    DuplicateMappingKey,
    EncodeError,
    InvalidDictionaryKeyType,
    InvalidIntegerLiteral,
    InvalidStringLength,
    NestingTooDeep,
    TrailingData,
    TruncatedStringBody,
    UnexpectedEndOfInput,
    UnrecognizedMarker,
    UnsortedDictionaryKeys,
    UnsupportedValueKind,
    UnterminatedDictionary,
    UnterminatedList,
)
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_element

__all__ = [
    'decode', 'decode_from', 'encode', 'encode_to', 'to_element',
    'BencodeDecoder', 'BufferCursor', 'StreamCursor',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeError', 'DecodeError', 'EncodeError',
    'UnexpectedEndOfInput', 'TruncatedStringBody', 'UnterminatedList', 'UnterminatedDictionary',
    'UnrecognizedMarker', 'InvalidStringLength', 'InvalidIntegerLiteral',
    'InvalidDictionaryKeyType', 'DuplicateDictionaryKey', 'UnsortedDictionaryKeys', 'TrailingData', 'NestingTooDeep',
    'UnsupportedValueKind', 'DuplicateMappingKey',
]
