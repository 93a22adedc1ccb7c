"""
Cart and checkout arithmetic.

One rule set is used everywhere: tax is a flat rate on the subtotal (18 %
unless the venue carries its own rate), the default tip is 20 % of
subtotal plus tax, and the guest can add a tip on top. Amounts are rounded
to cents only when reported.
"""

import math
import re

TAX_RATE = 0.18
DEFAULT_TIP_RATE = 0.20

_TIP_PATTERN = re.compile(r"^\d*\.?\d{0,2}$")


def _cents(value):
    return round(value, 2)


def subtotal(items):
    """Sum of totalPrice * quantity over item dicts."""
    return sum(float(i.get("totalPrice", i.get("price", 0))) * int(i.get("quantity", 0)) for i in items)


def clamp_tip(value):
    if value is None or value == "":
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not _TIP_PATTERN.match(value):
            raise ValueError(f"invalid tip amount {value!r}")
        if value in ("", "."):
            return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"invalid tip amount {value!r}") from None
    if not math.isfinite(amount):
        raise ValueError(f"invalid tip amount {value!r}")
    if amount < 0:
        raise ValueError("tip cannot be negative")
    return _cents(amount)


def summarize(items, tax_rate=TAX_RATE, tip_rate=DEFAULT_TIP_RATE, additional_tip=0.0):
    sub = subtotal(items)
    tax = sub * tax_rate
    default_tip = (sub + tax) * tip_rate
    extra = clamp_tip(additional_tip)
    total_tip = default_tip + extra
    return {
        "subtotal": _cents(sub),
        "taxRate": tax_rate,
        "tax": _cents(tax),
        "tipRate": tip_rate,
        "defaultTip": _cents(default_tip),
        "additionalTip": extra,
        "totalTip": _cents(total_tip),
        "total": _cents(sub + tax + total_tip),
    }


def venue_tax_rate(venue, default=TAX_RATE):
    if venue and venue.get("taxRate") is not None:
        return float(venue["taxRate"])
    return default


def minimum_spend(venue, table):
    if not venue or not table:
        return 0.0
    rules = venue.get("pricingRules") or {}
    section = table.get("section")
    if isinstance(rules, dict) and section in rules:
        return float(rules[section])
    by_category = venue.get("minimumSpend") or {}
    return float(by_category.get(table.get("category"), 0) or 0)


def can_checkout(sub, minimum, has_prior_order=False):
    # Minimum spend only gates the first order placed at a table.
    if has_prior_order:
        return True
    return sub >= minimum
