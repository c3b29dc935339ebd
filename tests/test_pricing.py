from decimal import Decimal

from services import pricing


def test_extra_dogs_charged_beyond_walker_maximum():
    q = pricing.quote("20", 1, "5", dog_count=3)

    assert q.base_price == Decimal("20.00")
    assert q.extra_dogs_fee == Decimal("10.00")
    assert q.discount_amount == Decimal("0.00")
    assert q.addons_total == Decimal("0.00")
    assert q.total_price == Decimal("30.00")


def test_subscription_discount_applies_to_base_only():
    q = pricing.quote("20", 1, "5", dog_count=2, addon_prices=["4.50"], discount_percent=10)

    assert q.discount_amount == Decimal("2.00")
    assert q.total_price == Decimal("20.00") - Decimal("2.00") + Decimal("5.00") + Decimal("4.50")


def test_single_dog_with_ten_percent_subscription():
    q = pricing.quote("20", 1, "5", dog_count=1, discount_percent=10)

    assert q.extra_dogs_fee == Decimal("0.00")
    assert q.total_price == Decimal("18.00")


def test_dogs_within_maximum_have_no_extra_fee():
    assert pricing.extra_dogs_fee(2, 3, "7.25") == Decimal("0.00")


def test_addon_snapshots_are_summed():
    q = pricing.quote("15.00", 2, "0", dog_count=1, addon_prices=[Decimal("3.10"), "2.20"])

    assert q.addons_total == Decimal("5.30")
    assert q.total_price == Decimal("20.30")


def test_discount_rounds_half_up_to_cents():
    # 12.25 * 15% = 1.8375
    assert pricing.discount_amount("12.25", 15) == Decimal("1.84")


def test_total_is_sum_of_components():
    q = pricing.quote("19.99", 1, "3.33", dog_count=4, addon_prices=["1.01"], discount_percent=20)

    assert q.total_price == q.base_price - q.discount_amount + q.extra_dogs_fee + q.addons_total
