"""
fluent_money — Chainable money math with locale-decorated output

A small mutable value object for readable money arithmetic: sums,
discounts, tax add/remove, and rendering as "1.234,50" with an optional
currency marker. Floating point on purpose; use a Decimal-based library
when you need arbitrary precision.

================================================================================
QUICK START
================================================================================

Basic usage:

    from fluent_money import MoneyValue

    price = MoneyValue.create(100).add_tax()       # default rate 18%
    price.get()        # "118,00"
    price.get_tax()    # 18.0

String input with grouping commas:

    MoneyValue.create().sum("1,000", "500").get()   # "1.500,00"

Backing tax out of a tax-inclusive total:

    net = MoneyValue.create(118).remove_tax(18)
    net.get()          # "100,00"
    net.get_tax()      # ~18.0

Locale marker:

    (
        MoneyValue.create(1234.5)
        .set_locale_code("€")
        .set_locale_position("suffix")
        .set_locale_active(True)
        .get()
    )                  # "1.234,50€"

Fallbacks (never raise, logged at DEBUG on the "fluent_money" logger):

    MoneyValue.create(50).divide(0).get()       # "0,00"
    MoneyValue.create().sum("abc").get()        # "0,00"

================================================================================
"""

import logging

from .core import (
    MoneyValue,
    LocalePosition,
    DEFAULT_TAX_RATE,
    DEFAULT_DECIMALS,
    DEFAULT_LOCALE_CODE,
    DEFAULT_LOCALE_POSITION,
)
from .normalize import normalize, format_amount

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    "MoneyValue",
    "LocalePosition",
    "DEFAULT_TAX_RATE",
    "DEFAULT_DECIMALS",
    "DEFAULT_LOCALE_CODE",
    "DEFAULT_LOCALE_POSITION",
    "normalize",
    "format_amount",
]
