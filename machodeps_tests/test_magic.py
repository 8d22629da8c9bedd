from unittest import TestCase

from machodeps import _magic
from machodeps._bytesource import ByteSource
from machodeps._errors import NotMachOError


class TestClassify(TestCase):
    def test_thin(self):
        self.assertIs(_magic.classify(b"\xfe\xed\xfa\xce"), _magic.MagicKind.THIN32)
        self.assertIs(_magic.classify(b"\xce\xfa\xed\xfe"), _magic.MagicKind.THIN32)
        self.assertIs(_magic.classify(b"\xfe\xed\xfa\xcf"), _magic.MagicKind.THIN64)
        self.assertIs(_magic.classify(b"\xcf\xfa\xed\xfe"), _magic.MagicKind.THIN64)

    def test_fat(self):
        self.assertIs(_magic.classify(b"\xca\xfe\xba\xbe"), _magic.MagicKind.FAT32)
        self.assertIs(_magic.classify(b"\xbe\xba\xfe\xca"), _magic.MagicKind.FAT32)
        self.assertIs(_magic.classify(b"\xca\xfe\xba\xbf"), _magic.MagicKind.FAT64)
        self.assertIs(_magic.classify(b"\xbf\xba\xfe\xca"), _magic.MagicKind.FAT64)

    def test_unrecognized(self):
        self.assertIs(_magic.classify(b"\x7fELF"), _magic.MagicKind.UNRECOGNIZED)
        self.assertIs(_magic.classify(b"MZ"), _magic.MagicKind.UNRECOGNIZED)
        self.assertIs(_magic.classify(b""), _magic.MagicKind.UNRECOGNIZED)

    def test_only_first_four_bytes(self):
        self.assertIs(
            _magic.classify(b"\xcf\xfa\xed\xfe\x07\x00\x00\x01"),
            _magic.MagicKind.THIN64,
        )

    def test_kind_properties(self):
        self.assertTrue(_magic.MagicKind.FAT32.is_fat)
        self.assertTrue(_magic.MagicKind.FAT64.is_fat)
        self.assertFalse(_magic.MagicKind.THIN64.is_fat)
        self.assertTrue(_magic.MagicKind.THIN32.is_thin)
        self.assertFalse(_magic.MagicKind.UNRECOGNIZED.is_thin)
        self.assertFalse(_magic.MagicKind.UNRECOGNIZED.is_fat)


class TestByteOrder(TestCase):
    def test_byte_order(self):
        self.assertEqual(_magic.byte_order(b"\xfe\xed\xfa\xce"), ">")
        self.assertEqual(_magic.byte_order(b"\xce\xfa\xed\xfe"), "<")
        self.assertEqual(_magic.byte_order(b"\xfe\xed\xfa\xcf"), ">")
        self.assertEqual(_magic.byte_order(b"\xcf\xfa\xed\xfe"), "<")

    def test_cigam_constants(self):
        self.assertEqual(_magic.FAT_CIGAM, 0xBEBAFECA)
        self.assertEqual(_magic.FAT_CIGAM_64, 0xBFBAFECA)


class TestDetect(TestCase):
    def test_detect(self):
        source = ByteSource.from_bytes(b"\x00" * 8 + b"\xcf\xfa\xed\xfe")
        self.assertIs(_magic.detect(source, 8), _magic.MagicKind.THIN64)

    def test_not_macho(self):
        source = ByteSource.from_bytes(b"#!/bin/sh\n", "script.sh")
        with self.assertRaisesRegex(NotMachOError, "script.sh: not a Mach-O file"):
            _magic.detect(source)

    def test_too_short(self):
        source = ByteSource.from_bytes(b"\xca\xfe", "short")
        with self.assertRaisesRegex(NotMachOError, "too short"):
            _magic.detect(source)
