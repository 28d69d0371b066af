"""
Byte sources for the decoder.

Both cursors offer a one-byte lookahead that does not consume input, which is
how the decoder picks the element type before reading it.
"""
from typing import Optional

__all__ = ["BufferCursor", "StreamCursor", "as_cursor"]

# a declared string length is never trusted for a single allocation
READ_CHUNK = 64 * 1024


class BufferCursor:
    """Cursor over an in-memory buffer."""
    def __init__(self, data):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data to decode must be bytes")
        self.data = bytes(data)
        self.i = 0  # cursor index

    @property
    def position(self) -> int:
        return self.i

    def at_end(self) -> bool:
        return self.i >= len(self.data)

    def peek(self) -> Optional[int]:
        """Returns the next byte without consuming it, or None at end of input."""
        if self.i >= len(self.data):
            return None
        return self.data[self.i]

    def read_byte(self) -> Optional[int]:
        b = self.peek()
        if b is not None:
            self.i += 1
        return b

    def read(self, n: int) -> bytes:
        """Moves cursor forward by up to n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i + n]
        self.i += len(chunk)
        return chunk

    def read_until(self, delimiter: int) -> Optional[bytes]:
        """
        Returns the bytes before the next delimiter and consumes the delimiter.
        Returns None, consuming nothing, when the delimiter never appears.
        """
        end = self.data.find(bytes((delimiter,)), self.i)
        if end == -1:
            return None
        chunk = self.data[self.i:end]
        self.i = end + 1
        return chunk


class StreamCursor:
    """
    Cursor over a binary stream such as an open file or socket file.

    Lookahead is held in a one-byte pushback buffer, so the stream itself
    needs nothing beyond read(n).
    """
    def __init__(self, stream):
        if not callable(getattr(stream, "read", None)):
            raise TypeError("stream must provide read()")
        self.stream = stream
        self._pending: Optional[int] = None
        self._consumed = 0

    @property
    def position(self) -> int:
        return self._consumed

    def _fill(self) -> Optional[int]:
        if self._pending is None:
            chunk = self.stream.read(1)
            if chunk:
                self._pending = chunk[0]
        return self._pending

    def at_end(self) -> bool:
        return self._fill() is None

    def peek(self) -> Optional[int]:
        return self._fill()

    def read_byte(self) -> Optional[int]:
        b = self._fill()
        if b is not None:
            self._pending = None
            self._consumed += 1
        return b

    def read(self, n: int) -> bytes:
        if n <= 0:
            return b""
        out = bytearray()
        if self._fill() is not None:
            out.append(self._pending)
            self._pending = None
        while len(out) < n:
            chunk = self.stream.read(min(n - len(out), READ_CHUNK))
            if not chunk:
                break
            out += chunk
        self._consumed += len(out)
        return bytes(out)

    def read_until(self, delimiter: int) -> Optional[bytes]:
        # The scanned bytes cannot be pushed back, so a missing delimiter
        # leaves the stream at end of input.
        out = bytearray()
        while True:
            b = self.read_byte()
            if b is None:
                return None
            if b == delimiter:
                return bytes(out)
            out.append(b)


def as_cursor(source):
    """Wraps bytes-like data or a readable stream in the matching cursor."""
    if isinstance(source, (BufferCursor, StreamCursor)):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BufferCursor(source)
    if callable(getattr(source, "read", None)):
        return StreamCursor(source)
    raise TypeError(f"Cannot decode from object of type {type(source).__name__}")
