# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from collections.abc import Iterator
from os import PathLike, fspath
from typing import Generic, TypeVar

T = TypeVar('T')


class Seeker(Generic[T], metaclass=ABCMeta):
    """A forward-only cursor, like a `StringIO` without the reads.

    `seekable` stays `True` until the cursor runs off the end,
    and `current` is only meaningful while it does.
    """
    @abstractmethod
    def reset_seek(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def seekable(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def next(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def current(self) -> T:
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        # consumes the cursor.
        while self.seekable:
            yield self.current
            self.next()


class FileHandler(Generic[T], metaclass=ABCMeta):
    # no `write()`: documents are never serialized back.
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @property
    def filename(self) -> str:
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
