# -*- encoding: utf-8 -*-
# @File   : strview.py
# @Time   : 2024/11/02 21:52:40
# @Author : Kariko Lin

"""Zero-copy string views.

A `StrView` is just `(buffer, offset, length)` pointing into the text
an `IniDocument` owns. Nothing gets copied until you ask for it,
i.e. `bytes(view)` or `str(view)`.
"""

from typing import Self

from .consts import WHITESPACE


class StrView:
    __slots__ = ('_buf', '_start', '_len', '_codec')

    def __init__(
        self, buf: bytes, start: int = 0, length: int | None = None,
        encoding: str = 'utf-8'
    ) -> None:
        self._buf = buf
        self._start = start
        self._len = len(buf) - start if length is None else length
        self._codec = encoding

    @classmethod
    def from_str(cls, text: str | bytes, encoding: str = 'utf-8') -> Self:
        raw = text if isinstance(text, bytes) else text.encode(encoding)
        return cls(raw, 0, len(raw), encoding)

    @classmethod
    def empty(cls, encoding: str = 'utf-8') -> Self:
        return cls(b'', 0, 0, encoding)

    @property
    def start(self) -> int:
        """Offset into the owning buffer."""
        return self._start

    @property
    def encoding(self) -> str:
        return self._codec

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, idx: int) -> int:
        if idx < 0:
            idx += self._len
        if not 0 <= idx < self._len:
            raise IndexError(idx)
        return self._buf[self._start + idx]

    def __bytes__(self) -> bytes:
        return self._buf[self._start:self._start + self._len]

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        return f'StrView({bytes(self)!r})'

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StrView):
            return self.compare(self, other) == 0
        if isinstance(other, (bytes, bytearray)):
            return len(other) == self._len and bytes(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(bytes(self))

    def decode(self, errors: str = 'replace') -> str:
        return bytes(self).decode(self._codec, errors)

    def is_empty(self) -> bool:
        return self._len == 0

    def sub(self, begin: int, end: int) -> 'StrView':
        """Clamps instead of raising: `end` to length, `begin` to `end`."""
        end = max(0, min(end, self._len))
        begin = max(0, min(begin, end))
        return StrView(
            self._buf, self._start + begin, end - begin, self._codec)

    def trim(self) -> 'StrView':
        begin, end = self._start, self._start + self._len
        while begin < end and self._buf[begin] in WHITESPACE:
            begin += 1
        while end > begin and self._buf[end - 1] in WHITESPACE:
            end -= 1
        return StrView(self._buf, begin, end - begin, self._codec)

    def find(self, byte: int, begin: int = 0) -> int:
        """Relative offset of `byte`, or -1."""
        stop = self._start + self._len
        found = self._buf.find(byte, self._start + begin, stop)
        return -1 if found < 0 else found - self._start

    @staticmethod
    def compare(a: 'StrView', b: 'StrView') -> int:
        # length first; only ever used for equality checks.
        if len(a) != len(b):
            return -1 if len(a) < len(b) else 1
        lhs, rhs = bytes(a), bytes(b)
        return 0 if lhs == rhs else (-1 if lhs < rhs else 1)
