"""Shared test values and Hypothesis strategies."""

from __future__ import annotations

from hypothesis import strategies as st

from suid import ALPHABET, Suid


# =============================================================================
# Common Values
# =============================================================================

# 1903154 is "14she" in base36
KNOWN_VALUE = 1903154
KNOWN_STRING = "14she"
KNOWN_VALUES = [1903154, 1903155, 1903156]
KNOWN_STRINGS = ["14she", "14shf", "14shg"]

MAX_VALID_VALUE = (1 << 52) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


# =============================================================================
# Hypothesis Strategies
# =============================================================================

# Values with the reserved bits cleared
valid_value_strategy = st.integers(min_value=0, max_value=MAX_VALID_VALUE)

# Any value a Suid can wrap
int64_strategy = st.integers(min_value=INT64_MIN, max_value=INT64_MAX)

block_strategy = st.integers(min_value=0, max_value=(1 << 48) - 1)
id_strategy = st.integers(min_value=0, max_value=15)

suid_strategy = valid_value_strategy.map(Suid)

# Canonical strings: no leading zeros, within 52 bits
canonical_string_strategy = valid_value_strategy.map(lambda v: str(Suid(v)))

base36_char_strategy = st.sampled_from(ALPHABET)
