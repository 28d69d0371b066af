"""
Decimal conversion for integers of any size.

CPython refuses int()/str() conversions beyond sys.get_int_max_str_digits()
digits. Both helpers split long values in halves so every builtin conversion
stays well below that limit.
"""
__all__ = ["digits_to_int", "int_to_digits"]

# digits handed to a single int()/str() call
CHUNK_DIGITS = 1000

_LOG10_2 = 0.30102999566398120


def digits_to_int(digits: bytes) -> int:
    """Parses a run of ASCII digits, optionally preceded by '-'."""
    if digits[:1] == b"-":
        return -_parse_unsigned(bytes(digits[1:]))
    return _parse_unsigned(bytes(digits))


def _parse_unsigned(digits: bytes) -> int:
    if len(digits) <= CHUNK_DIGITS:
        return int(digits)
    k = len(digits) // 2
    return _parse_unsigned(digits[:-k]) * 10 ** k + _parse_unsigned(digits[-k:])


def int_to_digits(n: int) -> str:
    """Formats n in decimal: no leading zeros, sign only when negative."""
    if n < 0:
        return "-" + _format_unsigned(-n)
    return _format_unsigned(n)


def _format_unsigned(n: int) -> str:
    if n.bit_length() * _LOG10_2 < CHUNK_DIGITS:
        return str(n)
    k = int(n.bit_length() * _LOG10_2) // 2
    high, low = divmod(n, 10 ** k)
    return _format_unsigned(high) + _format_unsigned(low).zfill(k)
