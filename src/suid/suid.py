"""Scoped Unique IDs - 52-bit distributed identifiers stored in a 64-bit int.

The bits are distributed over the 64-bit value as depicted below:

    0000 0000  0000 bbbb  bbbb bbbb  bbbb bbbb  bbbb bbbb  bbbb bbbb  bbbb bbbb  bbbb iiii

    0 = 12 reserved bits, always zero
    b = 48 block bits, handed out by the server(s)
    i = 4 ID bits, filled in by the client

Several hosts can hand out block numbers for the same scope by limiting the
numbers they generate (e.g. two shards both stepping by 2, one starting at 0
and the other at 1). No bits are reserved for sharding.

Suids are represented as lowercase base-36 strings, which are short and easy
for humans to read, write and pronounce.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING, Any, Self, final

from pydantic_core import CoreSchema, core_schema


if TYPE_CHECKING:
    from collections.abc import Iterable


# Base36 encoding: 0-9, a-z (36 characters). Canonical output is lowercase,
# the parser also accepts uppercase letters.
ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_BASE36_DECODE_MAP = {c: i for i, c in enumerate(ALPHABET)} | {
    c.upper(): i for i, c in enumerate(ALPHABET) if c.isalpha()
}

MASK_RESERVED = 0xFFF0000000000000
MASK_BLOCK = 0x000FFFFFFFFFFFF0
MASK_ID = 0x000000000000000F

COUNT_RESERVED = 12
COUNT_BLOCK = 48
COUNT_ID = 4

OFFSET_RESERVED = COUNT_BLOCK + COUNT_ID
OFFSET_BLOCK = COUNT_ID
OFFSET_ID = 0

BLOCK_COUNT = 1 << COUNT_BLOCK
IDS_PER_BLOCK = 1 << COUNT_ID

# ceiling(52 / log2(36)) = 11 base36 characters for the largest 52-bit value.
# At full length only a leading '0', '1' or '2' can stay (roughly) in range.
MAX_LENGTH = 11
_MAX_LEADING_INDEX = 2

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


class SuidError(ValueError):
    """Raised when a value cannot be turned into a Suid."""


class SuidFormatError(SuidError):
    """Raised when a string is not a valid base-36 suid."""


class SuidNullOperandError(TypeError):
    """Raised when a Suid is ordered against None."""


def _int_to_base36(num: int) -> str:
    """Convert integer to base36 string, without padding."""
    if num < 0:
        return "-" + _int_to_base36(-num)
    if num == 0:
        return ALPHABET[0]

    result: list[str] = []
    while num > 0:
        num, remainder = divmod(num, 36)
        result.append(ALPHABET[remainder])

    return "".join(reversed(result))


def _base36_to_int(s: str) -> int:
    """Convert a signed base36 string to a 64-bit integer.

    Raises:
        ValueError: If input has no digits or overflows a signed 64-bit integer.
        KeyError: If input contains invalid base36 characters.
    """
    sign = 1
    digits = s
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        digits = s[1:]
    if not digits:
        raise ValueError(f"Input {s!r} contains no digits")

    limit = -_INT64_MIN if sign < 0 else _INT64_MAX
    result = 0
    for char in digits:
        result = result * 36 + _BASE36_DECODE_MAP[char]
        if result > limit:
            raise ValueError(f"Input {s!r} overflows a signed 64-bit integer")
    return sign * result


def _reject_none(other: object) -> None:
    if other is None:
        raise SuidNullOperandError("Cannot compare Suid with None")


def looks_valid(value: object) -> bool:
    """Indicate whether `value` looks like a valid suid string.

    A `True` result only means the string is *probably* valid: strings of
    11 characters starting with '2' pass, although most of them exceed
    52 bits. Only the canonical lowercase alphabet is recognized.

    Never raises; `None` and non-strings return `False`.
    """
    if not isinstance(value, str):
        return False
    length = len(value)
    if length == 0 or length > MAX_LENGTH:
        return False
    if length == MAX_LENGTH and ALPHABET.find(value[0]) > _MAX_LEADING_INDEX:
        return False
    return all(char in ALPHABET for char in value)


@final
class Suid:
    """Scoped Unique ID: a 48-bit block number and 4 ID bits in a 64-bit int.

    A Suid is immutable. Its base-36 string is computed lazily and cached;
    the cache takes no part in equality, ordering, hashing or pickling.

    Example:
        >>> Suid(1903154)
        Suid('14she')
        >>> Suid.from_string("14she").value
        1903154
        >>> Suid.from_parts(118947, 2).block
        118947
    """

    __slots__ = ("_string", "_value")

    looks_valid = staticmethod(looks_valid)

    def __init__(self, value: int) -> None:
        """Initialize a Suid wrapping `value` verbatim.

        Reserved bits are not cleared: use `from_parts` to build a suid
        that is guaranteed to have them zeroed.

        Args:
            value: The raw value, a signed 64-bit integer.

        Raises:
            TypeError: If value is not an int.
            SuidError: If value does not fit in a signed 64-bit integer.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Suid value must be an int, got {type(value).__name__}")
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise SuidError(f"Suid value must fit in a signed 64-bit integer, got {value}")
        self._value = int(value)
        self._string: str | None = None

    @classmethod
    def from_string(cls, string: str | None) -> Self:
        """Parse a Suid from its base-36 string representation.

        Args:
            string: The base-36 string, case-insensitive, optionally signed.
                `None` yields the zero suid.

        Returns:
            A Suid instance.

        Raises:
            SuidFormatError: If the string holds characters outside the base-36
                alphabet, has no digits, or overflows a signed 64-bit integer.
        """
        if string is None:
            return cls(0)
        try:
            value = _base36_to_int(string)
        except (KeyError, ValueError) as e:
            raise SuidFormatError(f"Invalid base-36 suid: {string!r}") from e
        return cls(value)

    @classmethod
    def from_parts(cls, block: int, id: int) -> Self:  # noqa: A002
        """Build a Suid from its block and ID constituent parts.

        Bits that do not fit are masked off rather than rejected: only the
        low 48 bits of `block` and the low 4 bits of `id` are kept.
        """
        value = ~MASK_RESERVED & (
            (MASK_BLOCK & (block << OFFSET_BLOCK)) | (MASK_ID & (id << OFFSET_ID))
        )
        return cls(value)

    @property
    def value(self) -> int:
        """The underlying 64-bit value."""
        return self._value

    @property
    def block(self) -> int:
        """The 48-bit block number."""
        return (self._value & MASK_BLOCK) >> OFFSET_BLOCK

    @property
    def id(self) -> int:
        """The 4-bit ID number, in range 0..15."""
        return (self._value & MASK_ID) >> OFFSET_ID

    def __int__(self) -> int:
        return self._value

    def __float__(self) -> float:
        """Return the value as a float.

        Suids are limited to 52 bits, so every valid suid converts to a
        double without loss of precision.
        """
        return float(self._value)

    def to_int32(self) -> int:
        """Return the low 32 bits as a signed int. Lossy, prefer `value`."""
        low = self._value & 0xFFFFFFFF
        return low - (1 << 32) if low & 0x80000000 else low

    def to_float32(self) -> float:
        """Return the value rounded to single precision. Lossy, prefer `float()`."""
        return struct.unpack("<f", struct.pack("<f", float(self._value)))[0]

    def __len__(self) -> int:
        """Length of the string representation, `len(str(self))`."""
        return len(str(self))

    def __getitem__(self, index: int | slice) -> str:
        """Character or substring of the string representation."""
        return str(self)[index]

    def __str__(self) -> str:
        """Return the base-36 representation, 1 to 11 characters for valid suids."""
        if self._string is None:
            self._string = _int_to_base36(self._value)
        return self._string

    def __repr__(self) -> str:
        return f"Suid({str(self)!r})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other: object) -> bool:
        """Check equality with another Suid."""
        if isinstance(other, Suid):
            return self._value == other._value
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Suid):
            return self._value < other._value
        _reject_none(other)
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, Suid):
            return self._value <= other._value
        _reject_none(other)
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, Suid):
            return self._value > other._value
        _reject_none(other)
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, Suid):
            return self._value >= other._value
        _reject_none(other)
        return NotImplemented

    def __copy__(self) -> Self:
        """Return self (Suids are immutable)."""
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        """Return self (Suids are immutable)."""
        return self

    def __reduce__(self) -> tuple[type[Self], tuple[int]]:
        """Pickle the raw value only, never the cached string."""
        return (type(self), (self._value,))

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,  # noqa: ANN401
        handler: Any,  # noqa: ANN401
    ) -> CoreSchema:
        """Pydantic integration: validates from strings, serializes to strings.

        Suids always cross a serialization boundary as their base-36 string,
        never as a number.
        """

        def validate(v: Suid | str) -> Suid:
            if isinstance(v, Suid):
                return v
            if isinstance(v, str):
                return cls.from_string(v)
            raise SuidError(f"Expected Suid or str, got {type(v).__name__}")

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(validate),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )


def to_ints(ids: Iterable[Suid]) -> list[int]:
    """Convert suids to their raw integer values, preserving order."""
    return [suid.value for suid in ids]


def to_strings(ids: Iterable[Suid]) -> list[str]:
    """Convert suids to their base-36 strings, preserving order."""
    return [str(suid) for suid in ids]


def from_ints(values: Iterable[int]) -> list[Suid]:
    """Convert raw integer values to suids, preserving order."""
    return [Suid(value) for value in values]


def from_strings(values: Iterable[str]) -> list[Suid]:
    """Convert base-36 strings to suids, preserving order.

    Raises:
        SuidFormatError: For the first string that fails to parse; no
            partial result is returned.
    """
    return [Suid.from_string(value) for value in values]
