"""
Walk price computation, applied when a booking is accepted.

    total = base - discount + extra_dogs_fee + addons_total

The discount applies to the base (walker) price only. Amounts are Decimal,
rounded half-up to cents.
"""
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")

PriceQuote = namedtuple(
    "PriceQuote",
    ["base_price", "extra_dogs_fee", "addons_total", "discount_amount", "total_price"],
)


def to_money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def extra_dogs_fee(dog_count: int, max_dogs_per_walk: int, fee_per_dog) -> Decimal:
    extra = max(0, dog_count - (max_dogs_per_walk or 0))
    return to_money(extra * to_money(fee_per_dog))


def discount_amount(base_price, discount_percent) -> Decimal:
    if not discount_percent:
        return Decimal("0.00")
    return to_money(to_money(base_price) * Decimal(discount_percent) / Decimal(100))


def quote(price_per_30min, max_dogs_per_walk, extra_dog_fee_per_dog, dog_count, addon_prices=(),
          discount_percent=None) -> PriceQuote:
    base = to_money(price_per_30min)
    extra = extra_dogs_fee(dog_count, max_dogs_per_walk, extra_dog_fee_per_dog)
    addons = to_money(sum((to_money(p) for p in addon_prices), Decimal("0")))
    discount = discount_amount(base, discount_percent)
    total = base - discount + extra + addons
    return PriceQuote(base, extra, addons, discount, total)


def quote_for_walker(walker, dog_count, addon_prices=(), discount_percent=None) -> PriceQuote:
    return quote(
        walker.price_per_30min,
        walker.max_dogs_per_walk,
        walker.extra_dog_fee_per_dog,
        dog_count,
        addon_prices,
        discount_percent,
    )
