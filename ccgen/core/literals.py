"""Literal formatter for ccgen

Converts primitive values into the exact C literal spelling that keeps
their type category and bit pattern:

- 64-bit unsigned: 12UL          - 64-bit signed: -12L
- narrower ints: no suffix       - address: 0x1234abcdUL
- float: 1.3F                    - double: -1.
- char and text: verbatim, never quoted or escaped
"""

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np


class LiteralKind(Enum):
    """Primitive value categories understood by the formatter"""

    U64 = "u64"
    U32 = "u32"
    U16 = "u16"
    U8 = "u8"
    I64 = "i64"
    I32 = "i32"
    I16 = "i16"
    I8 = "i8"
    F32 = "f32"
    F64 = "f64"
    ADDRESS = "address"
    CHAR = "char"
    STR = "str"


@dataclass(frozen=True)
class Literal:
    """A primitive value tagged with the C type category it stands for"""

    kind: LiteralKind
    value: Any

    def c_literal(self) -> str:
        """Spell this value as C source

        Returns:
            str: C literal text
        """
        return LiteralFormatter.format(self.kind, self.value)


class LiteralFormatter:
    """Spells primitive values as C literals"""

    ADDRESS_BITS = struct.calcsize("P") * 8

    _WIDTHS = {
        LiteralKind.U64: 64, LiteralKind.U32: 32, LiteralKind.U16: 16, LiteralKind.U8: 8,
        LiteralKind.I64: 64, LiteralKind.I32: 32, LiteralKind.I16: 16, LiteralKind.I8: 8,
    }

    @staticmethod
    def format(kind: LiteralKind, value: Any) -> str:
        """Format a value according to its literal kind

        Args:
            kind: Type category of the value
            value: Python value (int, float, str)

        Returns:
            C literal text
        """
        if kind in (LiteralKind.U64, LiteralKind.U32, LiteralKind.U16, LiteralKind.U8):
            bits = LiteralFormatter._WIDTHS[kind]
            return LiteralFormatter.unsigned(value, bits)
        elif kind in (LiteralKind.I64, LiteralKind.I32, LiteralKind.I16, LiteralKind.I8):
            bits = LiteralFormatter._WIDTHS[kind]
            return LiteralFormatter.signed(value, bits)
        elif kind == LiteralKind.F32:
            return LiteralFormatter.f32(value)
        elif kind == LiteralKind.F64:
            return LiteralFormatter.f64(value)
        elif kind == LiteralKind.ADDRESS:
            return LiteralFormatter.address(value)
        elif kind == LiteralKind.CHAR:
            return LiteralFormatter.char(value)
        else:
            return LiteralFormatter.text(value)

    @staticmethod
    def unsigned(value: int, bits: int = 64) -> str:
        """Format an unsigned integer of the given width

        Only the 64-bit width carries the UL suffix.
        """
        wrapped = int(value) & ((1 << bits) - 1)
        suffix = "UL" if bits == 64 else ""
        return f"{wrapped}{suffix}"

    @staticmethod
    def signed(value: int, bits: int = 64) -> str:
        """Format a signed integer of the given width

        Only the 64-bit width carries the L suffix.
        """
        wrapped = int(value) & ((1 << bits) - 1)
        if wrapped >= 1 << (bits - 1):
            wrapped -= 1 << bits
        suffix = "L" if bits == 64 else ""
        return f"{wrapped}{suffix}"

    @staticmethod
    def u64(value: int) -> str:
        return LiteralFormatter.unsigned(value, 64)

    @staticmethod
    def i64(value: int) -> str:
        return LiteralFormatter.signed(value, 64)

    @staticmethod
    def f32(value: float) -> str:
        """Format a single-precision float, always with an F suffix"""
        with np.errstate(over="ignore"):
            number = np.float32(value)
        return LiteralFormatter._float(number, "F")

    @staticmethod
    def f64(value: float) -> str:
        """Format a double-precision float, no suffix"""
        return LiteralFormatter._float(np.float64(value), "")

    @staticmethod
    def _float(number: Union[np.float32, np.float64], suffix: str) -> str:
        if np.isnan(number):
            return f"nan{suffix}"
        if np.isinf(number):
            sign = "-" if number < 0 else ""
            return f"{sign}inf{suffix}"

        text = np.format_float_positional(number, unique=True, trim=".")
        if "." not in text:
            text += "."
        return f"{text}{suffix}"

    @staticmethod
    def address(value: int) -> str:
        """Format a pointer-sized address as lowercase hex"""
        wrapped = int(value) & ((1 << LiteralFormatter.ADDRESS_BITS) - 1)
        return f"0x{wrapped:x}UL"

    @staticmethod
    def char(value: Union[str, int]) -> str:
        """Emit a character as-is; integer code points go through chr()"""
        if isinstance(value, int):
            return chr(value)
        return str(value)

    @staticmethod
    def text(value: str) -> str:
        return str(value)
