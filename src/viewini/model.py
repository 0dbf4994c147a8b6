# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/03 00:57:10
# @Author : Kariko Lin

"""Basically INI structure, but made of views into the source text.

There's no dict behind a table: keys may repeat (see `IniOptions`),
and the lookups below simply return the *first* hit in file order.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, fields
from typing import Self, overload

from .consts import ROOT
from .strview import StrView


@dataclass(frozen=True)
class IniOptions:
    """解析选项。字段为 `None` 即“未设置”，沿用 `DEFAULT_OPTIONS`。

    - `merge_duplicate_tables`: 同名小节合并到第一个小节里，而不是各建一个。
    - `override_duplicate_keys`: 同一小节里重复的键只保留最后的值。
    - `key_value_divider`: 键值分隔符，单字节，默认 `=`。
      空串或 `\\0` 同样视为未设置。
    """
    merge_duplicate_tables: bool | None = None
    override_duplicate_keys: bool | None = None
    key_value_divider: str | bytes | None = None

    def resolve(self, defaults: 'IniOptions | None' = None) -> 'IniOptions':
        """Field-wise merge against `defaults`, then validate."""
        if defaults is None:
            defaults = DEFAULT_OPTIONS
        merged = {
            f.name: (
                getattr(defaults, f.name)
                if _unset(getattr(self, f.name))
                else getattr(self, f.name))
            for f in fields(self)
        }
        if _unset(merged['key_value_divider']):
            merged['key_value_divider'] = '='
        _divider_byte(merged['key_value_divider'])
        return IniOptions(**merged)

    @property
    def divider(self) -> int:
        """The divider as a single byte value."""
        div = self.key_value_divider
        if _unset(div):
            div = DEFAULT_OPTIONS.key_value_divider
        return _divider_byte(div)


# a zero divider means "not set", as `None` does.
_UNSET_DIVIDERS = ('', b'', '\0', b'\0')


def _unset(value: object) -> bool:
    return value is None or (
        isinstance(value, (str, bytes)) and value in _UNSET_DIVIDERS)


def _divider_byte(div: str | bytes) -> int:
    raw = div.encode('utf-8') if isinstance(div, str) else bytes(div)
    if len(raw) != 1:
        raise ValueError(
            f'key_value_divider should be exactly one byte, got {div!r}')
    if raw in (b'\n', b'\r'):
        raise ValueError('key_value_divider cannot be a line break')
    return raw[0]


DEFAULT_OPTIONS = IniOptions(
    merge_duplicate_tables=False,
    override_duplicate_keys=False,
    key_value_divider='=',
)


@dataclass
class IniValue:
    key: StrView
    value: StrView

    def __repr__(self) -> str:
        return f'({bytes(self.key)!r} = {bytes(self.value)!r})'


@dataclass
class IniTable(Sequence[IniValue]):
    name: StrView
    values: list[IniValue] = field(default_factory=list)
    is_root: bool = False

    @overload
    def __getitem__(self, idx: int) -> IniValue: ...
    @overload
    def __getitem__(self, idx: slice) -> list[IniValue]: ...

    def __getitem__(self, idx):
        return self.values[idx]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[IniValue]:
        return iter(self.values)

    def __repr__(self) -> str:
        title = '<root>' if self.is_root else f'[{self.name.decode()}]'
        return '%s { .cnt = %d }' % (title, len(self.values))

    def find(self, key: StrView) -> IniValue | None:
        if key.is_empty():
            return None
        for i in self.values:
            if StrView.compare(i.key, key) == 0:
                return i
        return None

    def get(self, key: str | bytes) -> IniValue | None:
        """First entry whose key equals `key`, or `None`."""
        return self.find(StrView.from_str(key, self.name.encoding))

    def keys(self) -> list[str]:
        return [i.key.decode() for i in self.values]


class IniDocument(Sequence[IniTable]):
    """INI 文件表示。持有原始文本，所有视图都指向这段文本。

    `text` 为 `None` 时即为无效文档（读取失败或内容为空），
    此时没有任何小节，连 root 都没有。用前先 `is_valid()`。
    """
    def __init__(
        self, text: bytes | None = None, encoding: str = 'utf-8'
    ) -> None:
        self.text = text
        self.encoding = encoding
        self.tables: list[IniTable] = []
        if text is not None:
            # reserved: no header can produce an empty name.
            self.tables.append(
                IniTable(StrView.empty(encoding), is_root=True))

    @classmethod
    def invalid(cls) -> Self:
        return cls(None)

    def is_valid(self) -> bool:
        return self.text is not None

    def free(self) -> None:
        for i in self.tables:
            i.values.clear()
        self.tables.clear()
        self.text = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.free()

    @overload
    def __getitem__(self, idx: int) -> IniTable: ...
    @overload
    def __getitem__(self, idx: slice) -> list[IniTable]: ...

    def __getitem__(self, idx):
        return self.tables[idx]

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self) -> Iterator[IniTable]:
        return iter(self.tables)

    def __repr__(self) -> str:
        if not self.is_valid():
            return '<IniDocument (invalid)>'
        return '<IniDocument %s, %d tables>' % (
            self.encoding, len(self.tables))

    @property
    def root(self) -> IniTable | None:
        return self.tables[0] if self.tables else None

    def find_table(self, name: StrView) -> IniTable | None:
        if name.is_empty():
            return None
        for i in self.tables:
            if not i.is_root and StrView.compare(i.name, name) == 0:
                return i
        return None

    def get_table(self, name: str | bytes | None = ROOT) -> IniTable | None:
        """`ROOT` (i.e. `None`) gives the header table; it has no name."""
        if name is ROOT:
            return self.root
        return self.find_table(StrView.from_str(name, self.encoding))

    def table_names(self) -> list[str]:
        return [i.name.decode() for i in self.tables if not i.is_root]
