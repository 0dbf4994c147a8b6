# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/03 01:16:53
# @Author : Kariko Lin

import logging

from .accessors import (
    NumResult,
    as_array,
    as_bool,
    as_int,
    as_num,
    as_str,
    as_uint,
    explain,
    get,
    get_table,
    to_array,
    to_str,
    try_int,
    try_num,
    try_uint,
)
from .consts import ROOT, IniErr, NumStatus
from .model import DEFAULT_OPTIONS, IniDocument, IniOptions, IniTable, IniValue
from .parser import IniParser, parse, parse_buf, parse_fp, parse_str
from .strview import StrView

__all__ = [
    'ROOT', 'IniErr', 'NumStatus', 'NumResult',
    'IniDocument', 'IniTable', 'IniValue', 'IniOptions', 'DEFAULT_OPTIONS',
    'StrView', 'IniParser',
    'parse', 'parse_str', 'parse_buf', 'parse_fp',
    'get_table', 'get',
    'as_str', 'as_array', 'as_int', 'as_uint', 'as_num', 'as_bool',
    'to_str', 'to_array', 'explain',
    'try_int', 'try_uint', 'try_num',
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
