"""Field conversion helpers shared by all entity decoders.

Entity texts are flat strings split on a delimiter; each helper converts
one field and raises a FieldError subclass carrying the field index and
raw text on failure. Integer fields follow the editor's declared widths
and accept an optional sign followed by ASCII digits only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from javardry_spoiler.core.constants import LIST_DELIMITER
from javardry_spoiler.core.exceptions import (
    ArityError,
    BadBoolError,
    NumberError,
    UnknownEnumError,
    UnknownFlagBitError,
)
from javardry_spoiler.models.flags import MONSTER_RESIST_TRANSLATION, MaskFlag, ResistFlag


E = TypeVar("E", bound=IntEnum)
F = TypeVar("F", bound=MaskFlag)


# =============================================================================
# Integer Types
# =============================================================================


@dataclass(frozen=True)
class IntType:
    """A fixed-width integer type of the file format.

    Attributes:
        name: Type name used in error messages.
        minimum: Smallest accepted value.
        maximum: Largest accepted value.
    """

    name: str
    minimum: int
    maximum: int

    @property
    def signed(self) -> bool:
        """Whether negative values are representable."""
        return self.minimum < 0


U8 = IntType("u8", 0, 2**8 - 1)
U32 = IntType("u32", 0, 2**32 - 1)
I32 = IntType("i32", -(2**31), 2**31 - 1)
U64 = IntType("u64", 0, 2**64 - 1)

SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+")
UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")

DECIMAL_DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


# =============================================================================
# Splitting
# =============================================================================


def split_fields(
    raw: str,
    delimiter: str,
    *,
    what: str,
    expected: int | None = None,
    at_least: int | None = None,
    field_index: int | None = None,
) -> list[str]:
    """Split a text into fields and check the field count.

    Args:
        raw: Text to split.
        delimiter: Field delimiter.
        what: Name of the text for error messages (e.g., "race").
        expected: Exact field count required.
        at_least: Minimum field count required.
        field_index: Index of the enclosing field, for nested splits.

    Returns:
        The fields.

    Raises:
        ArityError: If the field count does not match.
    """
    fields = raw.split(delimiter)
    actual = len(fields)
    if expected is not None and actual != expected:
        raise ArityError(
            f"{what} text must have {expected} fields, got {actual}",
            expected=expected,
            actual=actual,
            field_index=field_index,
            raw=raw if field_index is not None else None,
        )
    if at_least is not None and actual < at_least:
        raise ArityError(
            f"{what} text must have at least {at_least} fields, got {actual}",
            expected=at_least,
            actual=actual,
            at_least=True,
            field_index=field_index,
            raw=raw if field_index is not None else None,
        )
    return fields


def parse_triple(raw: str, *, what: str, index: int) -> tuple[str, str, str]:
    """Split a comma-separated damage expression triple.

    Args:
        raw: Field text.
        what: Name of the expression for error messages.
        index: Field index.

    Returns:
        The three expression strings.

    Raises:
        ArityError: If the field does not have exactly three parts.
    """
    first, second, third = split_fields(
        raw, LIST_DELIMITER, what=what, expected=3, field_index=index
    )
    return first, second, third


# =============================================================================
# Scalars
# =============================================================================


def parse_int(raw: str, int_type: IntType, *, index: int | None = None) -> int:
    """Parse an integer of a declared width.

    Args:
        raw: Field text.
        int_type: Declared integer type.
        index: Field index.

    Returns:
        The parsed value.

    Raises:
        NumberError: If the text is not an integer or is out of range.
    """
    pattern = SIGNED_PATTERN if int_type.signed else UNSIGNED_PATTERN
    if pattern.fullmatch(raw) is None:
        raise NumberError(f"invalid {int_type.name} number: {raw!r}", field_index=index, raw=raw)
    value = int(raw)
    if not int_type.minimum <= value <= int_type.maximum:
        raise NumberError(f"{int_type.name} out of range: {raw}", field_index=index, raw=raw)
    return value


def parse_int_list(raw: str, int_type: IntType, *, index: int) -> tuple[int, ...]:
    """Parse a comma-separated list of integers.

    Args:
        raw: Field text.
        int_type: Declared type of each element.
        index: Field index.

    Returns:
        The parsed values in order.

    Raises:
        NumberError: If any element is not a valid integer.
    """
    return tuple(parse_int(part, int_type, index=index) for part in raw.split(LIST_DELIMITER))


def parse_bool(raw: str, *, index: int | None = None) -> bool:
    """Parse a boolean literal as written by the editor.

    Args:
        raw: Field text, ``true`` or ``false``.
        index: Field index.

    Returns:
        The parsed value.

    Raises:
        BadBoolError: If the text is neither literal.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise BadBoolError(f"invalid boolean: {raw!r}", field_index=index, raw=raw)


def parse_enum(raw: str, enum_type: type[E], *, what: str, index: int) -> E:
    """Parse a small integer code into an enum member.

    Args:
        raw: Field text.
        enum_type: Target enum.
        what: Name of the code for error messages (e.g., "item kind").
        index: Field index.

    Returns:
        The enum member.

    Raises:
        NumberError: If the text is not a u8.
        UnknownEnumError: If the code has no member.
    """
    value = parse_int(raw, U8, index=index)
    try:
        return enum_type(value)
    except ValueError:
        raise UnknownEnumError(
            f"invalid {what} value: {value}", value=value, field_index=index, raw=raw
        ) from None


# =============================================================================
# Flag Sets
# =============================================================================


def _digit_bits(raw: str, base: int, *, what: str, index: int) -> int:
    allowed = HEX_DIGITS if base == 16 else DECIMAL_DIGITS
    bits = 0
    for char in raw:
        if char not in allowed:
            raise NumberError(f"invalid {what} char: {char!r}", field_index=index, raw=raw)
        bits |= 1 << int(char, base)
    return bits


def parse_digit_flags(
    raw: str,
    flag_type: type[F],
    *,
    base: int,
    what: str,
    index: int,
) -> F:
    """Parse a flag set written as one digit per set bit.

    ``"13"`` in base 10 sets bits 1 and 3; ``"a"`` in base 16 sets bit 10.

    Args:
        raw: Field text.
        flag_type: Target flag type.
        base: 10 or 16.
        what: Name of the flag set for error messages.
        index: Field index.

    Returns:
        The validated flag set.

    Raises:
        NumberError: If a character is not a digit of ``base``.
        UnknownFlagBitError: If a digit names a bit the type does not define.
    """
    bits = _digit_bits(raw, base, what=what, index=index)
    return flag_type.from_bits(bits, field_index=index, raw=raw)


def parse_monster_resist(raw: str, *, index: int) -> ResistFlag:
    """Parse a monster resistance or vulnerability field.

    Monster fields order their columns differently from the generic
    layout, so each hex digit is a position in MONSTER_RESIST_TRANSLATION.

    Args:
        raw: Field text.
        index: Field index.

    Returns:
        The resistances in the generic layout.

    Raises:
        NumberError: If a character is not a hex digit.
        UnknownFlagBitError: If a position is outside the translation table.
    """
    positions = _digit_bits(raw, 16, what="element", index=index)
    flags = ResistFlag(0)
    for position, flag in enumerate(MONSTER_RESIST_TRANSLATION):
        if positions & (1 << position):
            flags |= flag
    unknown = positions >> len(MONSTER_RESIST_TRANSLATION) << len(MONSTER_RESIST_TRANSLATION)
    if unknown:
        raise UnknownFlagBitError(
            f"unknown monster resist position: {unknown:#b}",
            bits=unknown,
            field_index=index,
            raw=raw,
        )
    return flags


def parse_coded_flag(
    raw: str,
    table: Mapping[int, F],
    *,
    what: str,
    index: int,
) -> F:
    """Parse a flag set stored as a single value code.

    Args:
        raw: Field text.
        table: Code to flag set mapping.
        what: Name of the code for error messages.
        index: Field index.

    Returns:
        The flag set for the code.

    Raises:
        NumberError: If the text is not a u8.
        UnknownEnumError: If the code is not in ``table``.
    """
    value = parse_int(raw, U8, index=index)
    try:
        return table[value]
    except KeyError:
        raise UnknownEnumError(
            f"invalid {what} value: {value}", value=value, field_index=index, raw=raw
        ) from None


__all__ = [
    "I32",
    "U8",
    "U32",
    "U64",
    "IntType",
    "parse_bool",
    "parse_coded_flag",
    "parse_digit_flags",
    "parse_enum",
    "parse_int",
    "parse_int_list",
    "parse_monster_resist",
    "parse_triple",
    "split_fields",
]
