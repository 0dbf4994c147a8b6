# -*- encoding: utf-8 -*-
# @File   : scanner.py
# @Time   : 2024/11/02 22:10:05
# @Author : Kariko Lin

from .abstract import Seeker
from .consts import BLANK, WHITESPACE
from .strview import StrView


class Scanner(Seeker[bytes]):
    """Cursor over an immutable buffer.

    The buffer may hold `\\0` bytes. Only the first `length` bytes
    are ever looked at.
    """
    def __init__(
        self, buf: bytes, length: int | None = None,
        encoding: str = 'utf-8'
    ) -> None:
        self._buf = buf
        self._len = len(buf) if length is None else min(length, len(buf))
        self._cur = 0
        self._codec = encoding

    @property
    def offset(self) -> int:
        return self._cur

    @property
    def finished(self) -> bool:
        return self._cur >= self._len

    @property
    def seekable(self) -> bool:
        return not self.finished

    @property
    def current(self) -> bytes:
        return self._buf[self._cur:self._cur + 1] if self.seekable else b''

    def reset_seek(self) -> None:
        self._cur = 0

    def next(self) -> None:
        self.skip_one()

    def skip_one(self) -> None:
        if not self.finished:
            self._cur += 1

    def skip_whitespace(self) -> None:
        while self._cur < self._len and self._buf[self._cur] in WHITESPACE:
            self._cur += 1

    def skip_blank(self) -> None:
        """Spaces and tabs only, newlines stay."""
        while self._cur < self._len and self._buf[self._cur] in BLANK:
            self._cur += 1

    def advance_until(self, delim: int) -> None:
        found = self._buf.find(delim, self._cur, self._len)
        self._cur = self._len if found < 0 else found

    def take_until(self, delim: int) -> StrView:
        begin = self._cur
        self.advance_until(delim)
        return StrView(self._buf, begin, self._cur - begin, self._codec)

    def __str__(self) -> str:
        return f'<Scanner {self._cur}/{self._len}>'
