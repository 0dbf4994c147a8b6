# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/03 01:04:45
# @Author : Kariko Lin

"""Single pass INI parser.

Supported form (comments start with `#` or `;`):

    ```ini
    name = web-server   ; goes to the root table
    [server]
    port = 8080
    motd = hello \\# not a comment
    ```

A blank line closes a table body. Malformed lines (no divider,
empty key, empty `[]`) are skipped and never raise.
"""

import logging
from codecs import (
    BOM_UTF8, BOM_UTF16_BE, BOM_UTF16_LE, BOM_UTF32_BE, BOM_UTF32_LE
)
from io import IOBase
from os import PathLike
from typing import BinaryIO, TextIO
from warnings import warn

from chardet import detect as guess_codec

from .abstract import FileHandler
from .consts import COMMENT_MARKS, ESCAPE
from .model import DEFAULT_OPTIONS, IniDocument, IniOptions, IniTable, IniValue
from .scanner import Scanner
from .strview import StrView

__all__ = [
    'IniParser', 'parse', 'parse_str', 'parse_buf', 'parse_fp',
    'guess_encoding'
]

_NEWLINE = ord('\n')
_CLOSE_BRACKET = ord(']')
# any ASCII-compatible codec encodes these to themselves.
_ASCII_SAMPLE = '[x]=#;\\\n'
# UTF-32 first: its LE mark starts with the UTF-16 one.
_BOMS = (
    (BOM_UTF32_LE, 'utf-32'), (BOM_UTF32_BE, 'utf-32'),
    (BOM_UTF8, 'utf-8-sig'),
    (BOM_UTF16_LE, 'utf-16'), (BOM_UTF16_BE, 'utf-16'),
)


def guess_encoding(raw: bytes) -> str:
    """Sniff with `chardet`; low confidence falls back to UTF-8."""
    codec = guess_codec(raw)
    encoding = codec.get('encoding')
    if encoding is None or codec['confidence'] < 0.8:
        encoding = 'utf-8'
    try:
        raw.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        warn(f'Text is not valid {encoding}, decoding as latin-1 instead.')
        encoding = 'latin-1'
    return encoding


def _fallback_codec(raw: bytes) -> str:
    try:
        raw.decode('utf-8')
    except UnicodeDecodeError:
        return 'latin-1'
    return 'utf-8'


def _ascii_compatible(encoding: str) -> bool:
    return _ASCII_SAMPLE.encode(encoding) == _ASCII_SAMPLE.encode('ascii')


def _sniff_bom(raw: bytes) -> str | None:
    for bom, codec in _BOMS:
        if raw.startswith(bom):
            return codec
    return None


def _normalize(raw: bytes, encoding: str | None) -> tuple[bytes, str]:
    """Make sure delimiters can be matched byte by byte.

    Only a BOM or an explicit encoding can make us transcode. A guess
    from chardet just picks the codec views are decoded with, since
    plain ASCII with `\\0` bytes easily reads as UTF-16 to it.
    """
    if encoding is None and (encoding := _sniff_bom(raw)) is None:
        encoding = guess_encoding(raw)
        if not _ascii_compatible(encoding):
            logging.debug(f'Ignoring guessed {encoding}, keeping raw bytes.')
            encoding = _fallback_codec(raw)
        return raw, encoding
    try:
        compatible = _ascii_compatible(encoding)
    except LookupError:
        warn(f'Unknown encoding {encoding!r}, fallback to utf-8.')
        return raw, 'utf-8'
    if compatible:
        return raw, encoding
    # UTF-16/32, BOM-prefixed UTF-8 and friends.
    logging.debug(f'Transcoding {encoding} input to utf-8.')
    return raw.decode(encoding, 'replace').encode('utf-8'), 'utf-8'


class _Builder:
    """State of one parse call. Never shared."""
    def __init__(self, doc: IniDocument, opts: IniOptions) -> None:
        self.doc = doc
        self.opts = opts
        self.divider = opts.divider
        self.scanner = Scanner(doc.text, encoding=doc.encoding)

    def run(self) -> IniDocument:
        scanner = self.scanner
        target: IniTable | None = self.doc.root
        scanner.skip_whitespace()
        while not scanner.finished:
            match scanner.current:
                case b'[':
                    # `[]` drops its own body only.
                    if (table := self.add_table()) is not None:
                        target = table
                case b'#' | b';':
                    scanner.advance_until(_NEWLINE)
                case _:
                    self.add_value(target)
            scanner.skip_whitespace()
        return self.doc

    def add_table(self) -> IniTable | None:
        scanner = self.scanner
        scanner.skip_one()  # [
        name = scanner.take_until(_CLOSE_BRACKET).trim()
        scanner.skip_one()  # ]

        table = None
        if name.is_empty():
            logging.debug(
                f'Empty table header at offset {scanner.offset}, '
                'its body will be dropped.')
        else:
            if self.opts.merge_duplicate_tables:
                table = self.doc.find_table(name)
            if table is None:
                table = IniTable(name)
                self.doc.tables.append(table)

        # anything after `]` on the same line is ignored.
        scanner.advance_until(_NEWLINE)
        scanner.skip_one()
        while not scanner.finished:
            scanner.skip_blank()
            match scanner.current:
                # blank line ends the body, a header starts the next one.
                case b'' | b'\n' | b'\r' | b'[':
                    break
                case b'#' | b';':
                    scanner.advance_until(_NEWLINE)
                    scanner.skip_one()
                case _:
                    self.add_value(table)
        return table

    def add_value(self, table: IniTable | None) -> None:
        scanner = self.scanner
        line = scanner.take_until(_NEWLINE)
        # value might run until EOF, nothing to skip then.
        if not scanner.finished:
            scanner.skip_one()

        pos = line.find(self.divider)
        if pos < 0:
            logging.debug(f'No divider in line {str(line)!r}, skipped.')
            return
        key = line.sub(0, pos).trim()
        if key.is_empty():
            logging.debug(f'Empty key in line {str(line)!r}, skipped.')
            return
        value = cut_comment(line.sub(pos + 1, len(line))).trim()

        if table is None:
            return
        exist = (
            table.find(key) if self.opts.override_duplicate_keys else None)
        if exist is not None:
            exist.value = value
        else:
            table.values.append(IniValue(key, value))


def cut_comment(value: StrView) -> StrView:
    """Truncate at the first `#` or `;` not preceded by a backslash."""
    for i in range(len(value)):
        if value[i] in COMMENT_MARKS:
            if i > 0 and value[i - 1] == ESCAPE:
                continue
            return value.sub(0, i)
    return value


def _parse_internal(
    text: bytes | None, options: IniOptions | None,
    encoding: str | None = None
) -> IniDocument:
    if not text:
        return IniDocument.invalid()
    opts = DEFAULT_OPTIONS if options is None else options.resolve()
    text, encoding = _normalize(text, encoding)
    return _Builder(IniDocument(text, encoding), opts).run()


def parse_buf(
    buf: bytes | bytearray | memoryview,
    options: IniOptions | None = None, *,
    length: int | None = None,
    encoding: str | None = None
) -> IniDocument:
    """Parse a byte buffer. It *can* contain `\\0`.

    `length` limits parsing to the first `length` bytes.
    The document keeps its own copy of the text.
    """
    raw = bytes(buf if length is None else buf[:max(length, 0)])
    return _parse_internal(raw, options, encoding)


def parse_str(text: str, options: IniOptions | None = None) -> IniDocument:
    return _parse_internal(text.encode('utf-8'), options, 'utf-8')


def parse_fp(
    fp: BinaryIO | TextIO, options: IniOptions | None = None, *,
    encoding: str | None = None
) -> IniDocument:
    """Read a stream up to EOF. Text streams are re-encoded as UTF-8."""
    data = fp.read()
    if isinstance(data, str):
        return _parse_internal(data.encode('utf-8'), options, 'utf-8')
    return _parse_internal(data, options, encoding)


def parse(
    filename: str | PathLike[str], options: IniOptions | None = None, *,
    encoding: str | None = None
) -> IniDocument:
    """Read and parse a file.

    Hint:
        If the file is NOT FOUND or NOT READABLE, a warning is logged
        and an invalid document (`is_valid() == False`) comes back.
    """
    return IniParser(filename, encoding, options).read()


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None,
        options: IniOptions | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self._opts = options

    def read(self, errmsg: str = 'Unable to read INI: ') -> IniDocument:
        """读取`IniParser`实例指定的文件。未指定编码时用 chardet 猜。"""
        try:
            with open(self._fn, 'rb') as fp:
                raw = fp.read()
        except OSError as e:
            logging.warning(f'{errmsg}\n  {e}')
            return IniDocument.invalid()
        return _parse_internal(raw, self._opts, self._codec)

    def readstream(self, fp: IOBase) -> IniDocument:
        """Same options and encoding, but from an opened stream."""
        return parse_fp(fp, self._opts, encoding=self._codec)

    def __str__(self) -> str:
        return f'INI file: {super().__str__()} ({self._codec or "auto"})'
