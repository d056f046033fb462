"""Application-wide constants and default configuration values.

Centralizes pricing rates and storage defaults so the pricing engine,
the view and the configuration loader agree on the same numbers.
"""
from decimal import Decimal

# ============== STORAGE ==============
# Bump the version suffix when the persisted layout changes.
CART_STORAGE_KEY = "shopcart:cart:v1"
CART_TTL_SECONDS = 0  # 0 = record never expires

# ============== PRICING ==============
TAX_RATE = Decimal("0.102")
MEMBER_DISCOUNT_RATE = Decimal("0.15")
SHIPPING_FLAT_RATE = Decimal("25.00")

# Keeps line totals and invoice amounts well inside the 28-digit decimal context
MAX_PRICE = Decimal("1000000000")
MAX_QUANTITY = 1_000_000

# (min, max, rate) closed intervals on the item subtotal; max None = unbounded
VOLUME_TIERS = (
    (Decimal("0.00"), Decimal("49.99"), Decimal("0.00")),
    (Decimal("50.00"), Decimal("99.99"), Decimal("0.05")),
    (Decimal("100.00"), Decimal("199.99"), Decimal("0.10")),
    (Decimal("200.00"), None, Decimal("0.15")),
)

# ============== DISPLAY ==============
CURRENCY_SYMBOL = "$"
MONEY_PLACES = Decimal("0.01")
EMPTY_CART_MESSAGE = "Your cart is empty."
BADGE_TEMPLATE = "Qty: {qty}"
DISCOUNT_PROMPT = "Only one discount may be applied. Type 'M' for Member or 'V' for Volume:"
