# -*- encoding: utf-8 -*-
# @File   : accessors.py
# @Time   : 2024/11/04 19:31:27
# @Author : Kariko Lin

"""Typed getters over `IniValue`.

All of them take `None` happily (that's what a failed lookup gives)
and fall back to an "empty" result: `None`, `[]`, `0` or `False`.
Note that `as_int()` etc. can't tell "missing" from "literally 0";
use `try_int()` and friends if that matters.
"""

from re import IGNORECASE
from re import compile as regex
from typing import NamedTuple

from .consts import (
    INT64_MAX, INT64_MIN, UINT64_MAX,
    IniErr, NumStatus, ROOT
)
from .model import IniDocument, IniTable, IniValue
from .strview import StrView

__all__ = [
    'get_table', 'get', 'as_str', 'as_array', 'as_int', 'as_uint',
    'as_num', 'as_bool', 'to_str', 'to_array', 'explain',
    'NumResult', 'try_int', 'try_uint', 'try_num'
]

# strtol(base=0) / strtod alike prefixes.
_INT_PREFIX = regex(
    rb'[ \t\n\r\x0b\x0c]*([+-]?)(0[xX][0-9a-fA-F]+|[1-9][0-9]*|0[0-7]*)')
_FLOAT_PREFIX = regex(
    rb'[ \t\n\r\x0b\x0c]*[+-]?(?:inf(?:inity)?|nan'
    rb'|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)',
    IGNORECASE)
_ESCAPED = regex(rb'\\([#;])')

_EXPLAIN = {
    IniErr.NO_ERR: 'no error',
    IniErr.INVALID_ARGS: 'invalid arguments',
    IniErr.BUFFER_TOO_SMALL: 'buffer too small',
}


class NumResult(NamedTuple):
    status: NumStatus
    value: int | float = 0

    def __bool__(self) -> bool:
        return self.status is NumStatus.PARSED


def get_table(
    doc: IniDocument | None, name: str | bytes | None = ROOT
) -> IniTable | None:
    return doc.get_table(name) if doc is not None else None


def get(table: IniTable | None, key: str | bytes) -> IniValue | None:
    return table.get(key) if table is not None else None


def _delimiter(delim: str | bytes | int | None) -> int:
    if not delim:
        return ord(' ')
    if isinstance(delim, int):
        return delim
    raw = delim.encode('utf-8') if isinstance(delim, str) else delim
    if len(raw) != 1:
        raise ValueError(f'delimiter should be one byte, got {delim!r}')
    return raw[0]


def _split(value: StrView, delim: int) -> list[StrView]:
    ret: list[StrView] = []
    begin = 0
    while (end := value.find(delim, begin)) >= 0:
        if not (seg := value.sub(begin, end).trim()).is_empty():
            ret.append(seg)
        begin = end + 1
    if not (last := value.sub(begin, len(value)).trim()).is_empty():
        ret.append(last)
    return ret


def _unescape(raw: bytes) -> bytes:
    return _ESCAPED.sub(rb'\1', raw)


def as_str(
    value: IniValue | None, remove_escape_chars: bool = False
) -> str | None:
    """Copy the value out as `str`.

    With `remove_escape_chars`, `\\#` and `\\;` become `#` and `;`.
    """
    if value is None:
        return None
    view = value.value.trim()
    raw = bytes(view)
    if remove_escape_chars:
        raw = _unescape(raw)
    return raw.decode(view.encoding, 'replace')


def as_array(
    value: IniValue | None, delim: str | bytes | int | None = None
) -> list[StrView]:
    """Split by `delim` (space by default), dropping empty items.

    Items are views, still pointing into the document.
    """
    if value is None or value.value.is_empty():
        return []
    return _split(value.value, _delimiter(delim))


def _strtoi(raw: bytes) -> tuple[int, bool] | None:
    """-> (value, whole text consumed), or `None` if no digits."""
    m = _INT_PREFIX.match(raw)
    if m is None:
        return None
    sign, digits = m.groups()
    if digits[:2] in (b'0x', b'0X'):
        num = int(digits[2:], 16)
    elif digits.startswith(b'0'):
        num = int(digits, 8)
    else:
        num = int(digits)
    if sign == b'-':
        num = -num
    return num, m.end() == len(raw.rstrip())


def _strtod(raw: bytes) -> tuple[float, bool] | None:
    m = _FLOAT_PREFIX.match(raw)
    if m is None:
        return None
    return float(m.group()), m.end() == len(raw.rstrip())


def try_int(value: IniValue | None) -> NumResult:
    if value is None or value.value.is_empty():
        return NumResult(NumStatus.ABSENT)
    parsed = _strtoi(bytes(value.value))
    if parsed is None or not parsed[1]:
        return NumResult(NumStatus.MALFORMED)
    if not INT64_MIN <= parsed[0] <= INT64_MAX:
        return NumResult(NumStatus.MALFORMED)
    return NumResult(NumStatus.PARSED, parsed[0])


def try_uint(value: IniValue | None) -> NumResult:
    if value is None or value.value.is_empty():
        return NumResult(NumStatus.ABSENT)
    parsed = _strtoi(bytes(value.value))
    if parsed is None or not parsed[1]:
        return NumResult(NumStatus.MALFORMED)
    if not 0 <= parsed[0] <= UINT64_MAX:
        return NumResult(NumStatus.MALFORMED)
    return NumResult(NumStatus.PARSED, parsed[0])


def try_num(value: IniValue | None) -> NumResult:
    if value is None or value.value.is_empty():
        return NumResult(NumStatus.ABSENT)
    parsed = _strtod(bytes(value.value))
    if parsed is None or not parsed[1]:
        return NumResult(NumStatus.MALFORMED)
    if parsed[0] in (float('inf'), float('-inf')):
        return NumResult(NumStatus.MALFORMED)
    return NumResult(NumStatus.PARSED, parsed[0])


def as_int(value: IniValue | None) -> int:
    if value is None or value.value.is_empty():
        return 0
    parsed = _strtoi(bytes(value.value))
    if parsed is None:
        return 0
    # strtoll saturates; saturated results read as 0 as well.
    if not INT64_MIN < parsed[0] < INT64_MAX:
        return 0
    return parsed[0]


def as_uint(value: IniValue | None) -> int:
    if value is None or value.value.is_empty():
        return 0
    parsed = _strtoi(bytes(value.value))
    if parsed is None or abs(parsed[0]) > UINT64_MAX:
        return 0
    # negative input wraps around like strtoull does,
    # and the saturated value reads as 0.
    num = parsed[0] % (UINT64_MAX + 1)
    return 0 if num == UINT64_MAX else num


def as_num(value: IniValue | None) -> float:
    if value is None or value.value.is_empty():
        return 0.0
    parsed = _strtod(bytes(value.value))
    if parsed is None or parsed[0] in (float('inf'), float('-inf')):
        return 0.0
    return parsed[0]


def as_bool(value: IniValue | None) -> bool:
    return value is not None and value.value == b'true'


def to_str(
    value: IniValue | None, buf: bytearray | None,
    remove_escape_chars: bool = False
) -> int:
    """Copy into `buf` with a trailing `\\0`, `len(buf)` counts it in.

    Returns the count written (without `\\0`), or a negative `IniErr`.
    `buf` is left untouched on failure.
    """
    if value is None or buf is None or len(buf) == 0:
        return IniErr.INVALID_ARGS
    raw = bytes(value.value.trim())
    if remove_escape_chars:
        raw = _unescape(raw)
    if len(buf) < len(raw) + 1:
        return IniErr.BUFFER_TOO_SMALL
    buf[:len(raw)] = raw
    buf[len(raw)] = 0
    return len(raw)


def to_array(
    value: IniValue | None, arr: list | None,
    delim: str | bytes | int | None = None
) -> int:
    """`as_array()` into a pre-sized list, without growing it."""
    if value is None or arr is None or len(arr) == 0:
        return IniErr.INVALID_ARGS
    if value.value.is_empty():
        return 0
    items = _split(value.value, _delimiter(delim))
    if len(items) > len(arr):
        return IniErr.BUFFER_TOO_SMALL
    arr[:len(items)] = items
    return len(items)


def explain(err: int) -> str:
    try:
        return _EXPLAIN[IniErr(err)]
    except (ValueError, KeyError):
        return 'unknown'
