# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/11/02 21:40:12
# @Author : Kariko Lin

from enum import Enum


class IniErr(int, Enum):
    NO_ERR = 0
    INVALID_ARGS = -1
    BUFFER_TOO_SMALL = -2


class NumStatus(str, Enum):
    PARSED = 'parsed'
    ABSENT = 'absent'
    MALFORMED = 'malformed'  # not a number, trailing junk, or overflow


# `get_table(doc, ROOT)` gives the implicit header table.
ROOT = None

# same set as C `isspace()` under the "C" locale.
WHITESPACE = frozenset(b' \t\n\r\x0b\x0c')
BLANK = frozenset(b' \t')
COMMENT_MARKS = frozenset(b'#;')
ESCAPE = ord('\\')

INT64_MAX = (1 << 63) - 1
INT64_MIN = -(1 << 63)
UINT64_MAX = (1 << 64) - 1
