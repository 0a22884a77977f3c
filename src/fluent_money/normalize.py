"""
normalize.py — Numeric input normalization and fixed-convention rendering

================================================================================
WHY A SINGLE NORMALIZATION POINT
================================================================================

MoneyValue accepts loosely typed input: floats, ints, Decimals, and strings
copied from forms or spreadsheets ("1,234.50"). Instead of sprinkling
try/except around every arithmetic call, every input goes through one
function with one fallback policy:

    normalize("1,234.50")  -> 1234.5
    normalize("12abc")     -> 0.0      (malformed)
    normalize(None)        -> 0.0
    normalize(float("inf"))-> 0.0      (non-finite)

Fallbacks never raise. They are logged at DEBUG so that a caller who wants
to know can turn the logger on.

================================================================================
RENDERING CONVENTION
================================================================================

    format_amount(1234.5, 2)    -> "1.234,50"
    format_amount(-0.001, 2)    -> "0,00"
    format_amount(1.005, 2)     -> "1,01"

Thousands separator "." and decimal separator "," are fixed.
Rounding is half away from zero on the shortest decimal representation of
the float, so 1.005 rounds up even though its binary value is 1.00499...

================================================================================
"""

from __future__ import annotations
from decimal import Context, Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any
import logging
import math
import re


logger = logging.getLogger(__name__)


GROUPING_SEPARATOR = ","
OUTPUT_THOUSANDS_SEPARATOR = "."
OUTPUT_DECIMAL_SEPARATOR = ","

# Plain decimal literal. Python-only spellings ("1_000", "nan", "inf") are
# not accepted.
_NUMERIC_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


# ==============================================================================
# NORMALIZATION
# ==============================================================================

def normalize(value: Any) -> float:
    """
    Convert a number or grouped numeric string to a finite float.

    Grouping commas are stripped before parsing, so "1,000" is 1000.0.
    Anything that cannot be read as a finite number becomes 0.0.
    """
    if value is None:
        return 0.0

    if isinstance(value, (Real, Decimal)):
        try:
            result = float(value)
        except (OverflowError, ValueError):
            # Overflowing ints/Fractions, signaling Decimal NaN
            logger.debug("Numeric input %r has no float value, using 0", value)
            return 0.0
        return _finite_or_zero(result, value)

    if isinstance(value, (bytes, bytearray)):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            logger.debug("Non-ASCII bytes input %r normalized to 0", value)
            return 0.0

    if isinstance(value, str):
        cleaned = value.replace(GROUPING_SEPARATOR, "").strip()
        if not cleaned:
            return 0.0
        if not _NUMERIC_LITERAL.fullmatch(cleaned):
            logger.debug("Malformed numeric string %r normalized to 0", value)
            return 0.0
        return _finite_or_zero(float(cleaned), value)

    logger.debug(
        "Unsupported input type %s normalized to 0", type(value).__name__
    )
    return 0.0


def _finite_or_zero(result: float, original: Any) -> float:
    if math.isfinite(result):
        return result
    logger.debug("Non-finite numeric input %r normalized to 0", original)
    return 0.0


# ==============================================================================
# RENDERING
# ==============================================================================

def format_amount(value: float, decimals: int) -> str:
    """
    Render value with `decimals` fractional digits, "." grouping and "," decimals.

    Raises:
        ValueError: if decimals < 0 or value is not finite
    """
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got: {decimals}")
    if not math.isfinite(value):
        raise ValueError(f"Cannot render non-finite amount: {value!r}")

    # repr() gives the shortest string that round-trips: that is the number
    # the reader expects to see rounded.
    exact = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-decimals)
    # Large floats need more digits than the default 28-digit context.
    context = Context(prec=max(28, exact.adjusted() + decimals + 2))
    rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP, context=context)

    if rounded.is_zero():
        rounded = abs(rounded)

    # Decimal's format spec groups with "," and separates with "."; swap them.
    rendered = f"{rounded:,.{decimals}f}"
    return rendered.translate(str.maketrans({
        ",": OUTPUT_THOUSANDS_SEPARATOR,
        ".": OUTPUT_DECIMAL_SEPARATOR,
    }))
