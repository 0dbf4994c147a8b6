"""Tests for the typed value accessors."""

import unittest

from viewini import (
    IniErr,
    NumStatus,
    as_array,
    as_bool,
    as_int,
    as_num,
    as_str,
    as_uint,
    explain,
    get,
    parse_str,
    to_array,
    to_str,
    try_int,
    try_num,
    try_uint,
)

SAMPLE = (
    "str = hello \\# world ; comment\n"
    "arr = 1 2  3\n"
    "arr delim = a, b,,c ,\n"
    "empty =\n"
    "int = 42\n"
    "neg = -17\n"
    "hex = 0x1F\n"
    "oct = 010\n"
    "num = 3.25\n"
    "sci = -1.5e3\n"
    "junk = 12abc\n"
    "word = abc\n"
    "huge = 99999999999999999999999\n"
    "inf = 1e999\n"
    "minus one = -1\n"
    "yes = true\n"
    "upper = TRUE\n"
    "one = 1\n"
)


class TestAccessors(unittest.TestCase):
    def setUp(self):
        self.doc = parse_str(SAMPLE)
        self.root = self.doc.root

    def value(self, key):
        return get(self.root, key)

    def test_as_str(self):
        self.assertEqual(as_str(self.value("str")), "hello \\# world")
        self.assertEqual(as_str(self.value("str"), True), "hello # world")
        self.assertEqual(as_str(self.value("empty")), "")
        self.assertIsNone(as_str(self.value("missing")))

    def test_as_str_is_a_copy(self):
        text = as_str(self.value("int"))
        self.doc.free()
        self.assertEqual(text, "42")

    def test_as_array(self):
        items = as_array(self.value("arr"))
        self.assertEqual([bytes(i) for i in items], [b"1", b"2", b"3"])
        self.assertEqual(as_array(self.value("arr"), 0), items)
        self.assertEqual(
            [str(i) for i in as_array(self.value("arr delim"), ",")],
            ["a", "b", "c"])
        self.assertEqual(as_array(self.value("empty")), [])
        self.assertEqual(as_array(self.value("missing")), [])

    def test_as_int(self):
        self.assertEqual(as_int(self.value("int")), 42)
        self.assertEqual(as_int(self.value("neg")), -17)
        self.assertEqual(as_int(self.value("hex")), 31)
        self.assertEqual(as_int(self.value("oct")), 8)
        self.assertEqual(as_int(self.value("junk")), 12)
        self.assertEqual(as_int(self.value("word")), 0)
        self.assertEqual(as_int(self.value("huge")), 0)
        self.assertEqual(as_int(self.value("empty")), 0)
        self.assertEqual(as_int(self.value("missing")), 0)

    def test_as_uint(self):
        self.assertEqual(as_uint(self.value("int")), 42)
        self.assertEqual(as_uint(self.value("minus one")), 0)
        self.assertEqual(as_uint(self.value("neg")), (1 << 64) - 17)
        self.assertEqual(as_uint(self.value("huge")), 0)
        self.assertEqual(as_uint(self.value("word")), 0)

    def test_as_num(self):
        self.assertEqual(as_num(self.value("num")), 3.25)
        self.assertEqual(as_num(self.value("sci")), -1500.0)
        self.assertEqual(as_num(self.value("int")), 42.0)
        self.assertEqual(as_num(self.value("junk")), 12.0)
        self.assertEqual(as_num(self.value("inf")), 0.0)
        self.assertEqual(as_num(self.value("word")), 0.0)
        self.assertEqual(as_num(self.value("missing")), 0.0)

    def test_as_bool(self):
        self.assertTrue(as_bool(self.value("yes")))
        self.assertFalse(as_bool(self.value("upper")))
        self.assertFalse(as_bool(self.value("one")))
        self.assertFalse(as_bool(self.value("missing")))


class TestBoundedCopy(unittest.TestCase):
    def setUp(self):
        self.root = parse_str("hello = world\nesc = a\\;b\narr = x y z\n").root

    def test_to_str(self):
        buf = bytearray(32)
        self.assertEqual(to_str(get(self.root, "hello"), buf), 5)
        self.assertEqual(bytes(buf[:6]), b"world\x00")

    def test_to_str_too_small(self):
        buf = bytearray(3)
        self.assertEqual(to_str(get(self.root, "hello"), buf),
                         IniErr.BUFFER_TOO_SMALL)
        self.assertEqual(len(buf), 3)
        self.assertEqual(bytes(buf), b"\x00\x00\x00")

    def test_to_str_exact_fit(self):
        buf = bytearray(6)
        self.assertEqual(to_str(get(self.root, "hello"), buf), 5)
        self.assertEqual(bytes(buf), b"world\x00")

    def test_to_str_escapes(self):
        buf = bytearray(4)
        self.assertEqual(to_str(get(self.root, "esc"), buf, True), 3)
        self.assertEqual(bytes(buf), b"a;b\x00")
        self.assertEqual(to_str(get(self.root, "esc"), buf),
                         IniErr.BUFFER_TOO_SMALL)

    def test_to_str_invalid(self):
        self.assertEqual(to_str(None, bytearray(8)), IniErr.INVALID_ARGS)
        self.assertEqual(to_str(get(self.root, "hello"), bytearray()),
                         IniErr.INVALID_ARGS)
        self.assertEqual(to_str(get(self.root, "hello"), None),
                         IniErr.INVALID_ARGS)

    def test_to_array(self):
        arr = [None] * 4
        self.assertEqual(to_array(get(self.root, "arr"), arr), 3)
        self.assertEqual([bytes(i) for i in arr[:3]], [b"x", b"y", b"z"])
        self.assertIsNone(arr[3])
        self.assertEqual(to_array(get(self.root, "arr"), [None] * 2),
                         IniErr.BUFFER_TOO_SMALL)
        self.assertEqual(to_array(get(self.root, "arr"), []),
                         IniErr.INVALID_ARGS)
        self.assertEqual(to_array(None, [None]), IniErr.INVALID_ARGS)

    def test_explain(self):
        self.assertEqual(explain(IniErr.NO_ERR), "no error")
        self.assertEqual(explain(-1), "invalid arguments")
        self.assertEqual(explain(IniErr.BUFFER_TOO_SMALL), "buffer too small")
        self.assertEqual(explain(7), "unknown")


class TestStrictNumbers(unittest.TestCase):
    def setUp(self):
        self.root = parse_str(
            "int = 42\nzero = 0\njunk = 12abc\nempty =\nnum = 2.5\n"
            "neg = -3\nbig = 18446744073709551615\n").root

    def test_try_int(self):
        self.assertEqual(try_int(get(self.root, "int")),
                         (NumStatus.PARSED, 42))
        self.assertTrue(try_int(get(self.root, "zero")))
        self.assertEqual(try_int(get(self.root, "junk")).status,
                         NumStatus.MALFORMED)
        self.assertEqual(try_int(get(self.root, "empty")).status,
                         NumStatus.ABSENT)
        self.assertEqual(try_int(None).status, NumStatus.ABSENT)
        self.assertEqual(try_int(get(self.root, "big")).status,
                         NumStatus.MALFORMED)

    def test_try_uint(self):
        self.assertEqual(try_uint(get(self.root, "big")).value, (1 << 64) - 1)
        self.assertEqual(try_uint(get(self.root, "neg")).status,
                         NumStatus.MALFORMED)

    def test_try_num(self):
        self.assertEqual(try_num(get(self.root, "num")),
                         (NumStatus.PARSED, 2.5))
        self.assertFalse(try_num(get(self.root, "junk")))


if __name__ == "__main__":
    unittest.main()
