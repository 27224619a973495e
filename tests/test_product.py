import pytest

from paymentwall.product import PeriodType, Product, ProductType


def test_fixed_rounding_and_type():
    product = Product("p1", 9.999, "USD", "Product", ProductType.FIXED)
    assert product.amount == 10.00
    assert product.type is ProductType.FIXED
    assert product.is_recurring() is False


def test_subscription_and_recurring():
    trial = Product(
        "trial", 0.99, "EUR", "Trial", ProductType.SUBSCRIPTION, 1, PeriodType.WEEK
    )
    main = Product(
        "sub1",
        12.345,
        "USD",
        "Subs",
        ProductType.SUBSCRIPTION,
        1,
        PeriodType.MONTH,
        True,
        trial,
    )
    assert main.amount == 12.35
    assert main.type is ProductType.SUBSCRIPTION
    assert main.is_recurring() is True
    assert main.trial_product is not None
    assert main.trial_product.id == "trial"


def test_invalid_type():
    with pytest.raises(ValueError, match="invalid product type: invalidType"):
        Product("x", 1.23, "USD", "Bad", "invalidType")


def test_invalid_period():
    with pytest.raises(ValueError, match="invalid period type: invalidPeriod"):
        Product("x", 1.23, "USD", "Bad", ProductType.SUBSCRIPTION, 1, "invalidPeriod")


def test_trial_ignored_when_not_recurring():
    trial = Product(
        "trial", 0.10, "USD", "Trial", ProductType.SUBSCRIPTION, 1, PeriodType.WEEK
    )
    product = Product(
        "p2",
        5.00,
        "USD",
        "NonRec",
        ProductType.SUBSCRIPTION,
        1,
        PeriodType.WEEK,
        False,
        trial,
    )
    assert product.trial_product is None


def test_trial_ignored_for_fixed_product():
    trial = Product("trial", 1, "USD", "Trial")
    product = Product("p3", 5, "USD", "Fixed", ProductType.FIXED, recurring=True,
                      trial_product=trial)
    assert product.trial_product is None


def test_string_types_are_coerced():
    product = Product("p4", 1, "USD", "S", "subscription", 3, "year")
    assert product.type is ProductType.SUBSCRIPTION
    assert product.period_type is PeriodType.YEAR
    assert product.period_type == "year"


def test_empty_period_type_means_none():
    product = Product("p5", 1, "USD", "F", ProductType.FIXED, 0, "")
    assert product.period_type is None


@pytest.mark.parametrize(
    "amount, expected",
    [(0.125, 0.13), (2.5, 2.5), (1, 1.0), (0, 0.0), (-0.125, -0.13)],
)
def test_amount_rounding(amount, expected):
    assert Product("p", amount).amount == expected


def test_defaults():
    product = Product("only-id")
    assert product.amount == 0.0
    assert product.type is ProductType.FIXED
    assert product.currency_code == ""
    assert product.period_length == 0