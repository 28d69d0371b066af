import pytest

from bencode_core import (
    BencodeDecoder,
    BufferCursor,
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
    decode,
    decode_from,
)
from bencode_core.structure import BencodeDict, BencodeInt, BencodeString


def test_empty_input():
    with pytest.raises(UnexpectedEndOfInput):
        decode(b"")


def test_unrecognized_marker():
    with pytest.raises(UnrecognizedMarker) as exc_info:
        decode(b"x4:spam")
    assert exc_info.value.marker == b"x"
    assert exc_info.value.position == 0


@pytest.mark.parametrize("raw", [b"i-0e", b"i03e", b"ie", b"i-e", b"i-03e", b"i+3e", b"i 3e", b"i1_000e", b"i3.5e", b"iabce"])
def test_invalid_integer_literals(raw):
    with pytest.raises(InvalidIntegerLiteral):
        decode(raw)


def test_invalid_integer_keeps_literal():
    with pytest.raises(InvalidIntegerLiteral) as exc_info:
        decode(b"i03e")
    assert exc_info.value.literal == b"03"


def test_unterminated_integer():
    with pytest.raises(UnexpectedEndOfInput):
        decode(b"i42")


def test_truncated_string():
    with pytest.raises(TruncatedStringBody) as exc_info:
        decode(b"10:abcde")
    assert exc_info.value.expected == 10
    assert exc_info.value.available == 5


def test_truncation_is_end_of_input():
    with pytest.raises(UnexpectedEndOfInput):
        decode(b"9999:ab")


def test_string_missing_delimiter():
    with pytest.raises(UnexpectedEndOfInput):
        decode(b"12")


@pytest.mark.parametrize("raw", [b"1-2:ab", b"4x:spam", b"3e"])
def test_invalid_string_length(raw):
    with pytest.raises(InvalidStringLength):
        decode(raw)


def test_unterminated_list():
    with pytest.raises(UnterminatedList):
        decode(b"l4:spam")


def test_unterminated_dict():
    with pytest.raises(UnterminatedDictionary):
        decode(b"d3:key3:val")
    with pytest.raises(UnterminatedDictionary):
        decode(b"d3:key")


def test_non_string_key():
    with pytest.raises(InvalidDictionaryKeyType):
        decode(b"di123e4:valuee")
    with pytest.raises(InvalidDictionaryKeyType):
        decode(b"dle4:valuee")


def test_duplicate_key_rejected():
    with pytest.raises(DuplicateDictionaryKey) as exc_info:
        decode(b"d3:cow3:moo3:cow4:oinke")
    assert exc_info.value.key == b"cow"


def test_unsorted_keys_allowed_by_default():
    obj = decode(b"d4:spam4:eggs3:cow3:mooe")
    assert obj[b"spam"] == BencodeString(b"eggs")
    assert obj[b"cow"] == BencodeString(b"moo")


def test_strict_mode_rejects_unsorted_keys():
    with pytest.raises(UnsortedDictionaryKeys) as exc_info:
        decode(b"d4:spam4:eggs3:cow3:mooe", strict=True)
    assert exc_info.value.key == b"cow"


def test_strict_mode_rejects_padded_length():
    assert decode(b"04:spam") == BencodeString(b"spam")
    with pytest.raises(InvalidStringLength):
        decode(b"04:spam", strict=True)


def test_strict_mode_accepts_canonical():
    raw = b"d3:cow3:moo4:spaml1:a0:ee"
    assert decode(raw, strict=True) == decode(raw)


def test_trailing_data():
    with pytest.raises(TrailingData):
        decode(b"i1eextra")


def test_decode_from_leaves_remainder():
    cursor = BufferCursor(b"i1e4:spam")
    assert decode_from(cursor) == BencodeInt(1)
    assert decode_from(cursor) == BencodeString(b"spam")
    assert cursor.at_end()


def test_decoder_object():
    decoder = BencodeDecoder(b"d1:ai1ee")
    assert decoder.decode() == BencodeDict({b"a": BencodeInt(1)})


def test_all_errors_are_decode_errors_and_value_errors():
    for raw in (b"", b"x", b"i03e", b"5:ab", b"l", b"d", b"di1ei1ee", b"i1ei2e"):
        with pytest.raises(DecodeError):
            decode(raw)
        with pytest.raises(ValueError):
            decode(raw)


def test_rejects_non_bytes_source():
    with pytest.raises(TypeError):
        decode(42)


def test_oversized_string_length():
    with pytest.raises(InvalidStringLength):
        decode(b"1" * 5000 + b":x")
    with pytest.raises(InvalidStringLength):
        decode(b"99999999999999999999999:x")


def test_padded_length_is_not_oversized():
    assert decode(b"0" * 50 + b"4:spam") == BencodeString(b"spam")


def test_deep_nesting_is_a_decode_error():
    with pytest.raises(NestingTooDeep):
        decode(b"l" * 100000)
    with pytest.raises(DecodeError):
        decode(b"d1:a" * 50000)
