from urllib.parse import parse_qs, urlsplit

import pytest

from paymentwall.client import APIType, Client, PaymentwallError, SignatureVersion
from paymentwall.product import PeriodType, Product, ProductType
from paymentwall.widget import Widget


def make_client(api_type):
    return Client("placeholder", "secret", api_type)


def test_get_params_vc():
    client = make_client(APIType.VC)
    widget = Widget(client, "user123", "vc1", None, {"email": "u@example.com"})
    params = widget.get_params()
    assert params["key"] == "placeholder"
    assert params["uid"] == "user123"
    assert params["email"] == "u@example.com"
    assert params["sign_version"] == 3
    core = {k: v for k, v in params.items() if k != "sign"}
    assert params["sign"] == client.calculate_signature(core, SignatureVersion.V3)


def test_get_params_goods_single_product():
    client = make_client(APIType.GOODS)
    product = Product("p1", 2.5, "USD", "Name", ProductType.FIXED)
    params = Widget(client, "u1", "w1", [product]).get_params()
    assert params["ag_external_id"] == "p1"
    assert params["amount"] == 2.5
    assert params["ag_type"] == "fixed"
    assert "ag_period_length" not in params


def test_get_params_goods_trial_subscription():
    client = make_client(APIType.GOODS)
    trial = Product("trial", 0.99, "EUR", "Trial", ProductType.SUBSCRIPTION, 1, PeriodType.WEEK)
    main = Product(
        "sub1", 12.345, "USD", "Subs", ProductType.SUBSCRIPTION, 1, PeriodType.MONTH, True, trial
    )
    params = Widget(client, "u1", "p1", [main]).get_params()
    assert params["ag_external_id"] == "trial"
    assert params["amount"] == 0.99
    assert params["ag_period_type"] == "week"
    assert params["ag_recurring"] == 0
    assert params["ag_trial"] == 1
    assert params["ag_post_trial_external_id"] == "sub1"
    assert params["ag_post_trial_period_type"] == "month"
    assert params["post_trial_amount"] == 12.35
    assert params["post_trial_currencyCode"] == "USD"


def test_get_params_goods_invalid_count():
    client = make_client(APIType.GOODS)
    products = [
        Product("p1", 1, "USD", "A", ProductType.FIXED),
        Product("p2", 2, "USD", "B", ProductType.FIXED),
    ]
    with pytest.raises(PaymentwallError):
        Widget(client, "u2", "w2", products).get_params()
    assert (
        "only one product allowed for API Checkout and empty products for API Goods"
        in client.error_summary()
    )


def test_get_params_cart():
    client = make_client(APIType.CART)
    products = [
        Product("a", 1.1, "EUR", "A", ProductType.FIXED),
        Product("b", 0, "", "B", ProductType.FIXED),
    ]
    params = Widget(client, "u3", "c1", products).get_params()
    assert params["external_ids[0]"] == "a"
    assert params["external_ids[1]"] == "b"
    assert params["prices[0]"] == 1.1
    assert params["currencies[0]"] == "EUR"
    assert "prices[1]" not in params
    assert "currencies[1]" not in params
    assert params["sign_version"] == 2


def test_sign_version_override():
    client = make_client(APIType.VC)
    params = Widget(client, "u", "v1", extra_params={"sign_version": "2"}).get_params()
    assert params["sign_version"] == 2
    core = {k: v for k, v in params.items() if k != "sign"}
    assert params["sign"] == client.calculate_signature(core, SignatureVersion.V2)


def test_unsupported_sign_version_raises():
    client = make_client(APIType.VC)
    widget = Widget(client, "u", "v1", extra_params={"sign_version": 9})
    with pytest.raises(PaymentwallError):
        widget.get_params()


def test_empty_secret_raises():
    client = Client("placeholder", "", APIType.VC)
    with pytest.raises(PaymentwallError):
        Widget(client, "u", "v1").get_params()


def test_get_url_and_html():
    client = make_client(APIType.VC)
    widget = Widget(client, "u4", "v1", extra_params={"foo": "bar"})
    url = widget.get_url()
    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://api.paymentwall.com/api/ps"
    query = parse_qs(parts.query)
    assert query["uid"] == ["u4"]
    assert query["foo"] == ["bar"]
    assert query["sign_version"] == ["3"]

    html = widget.get_html_code({"width": "600"})
    assert html.startswith("<iframe src=")
    assert 'width="600"' in html
    assert 'height="800"' in html
    assert 'frameborder="0"' in html


@pytest.mark.parametrize(
    "api_type, code, controller",
    [
        (APIType.VC, "v1", "ps"),
        (APIType.VC, "w1", "cart"),
        (APIType.GOODS, "p1", "subscription"),
        (APIType.GOODS, "mw1", "cart"),
        (APIType.CART, "p1", "cart"),
    ],
)
def test_url_controller(api_type, code, controller):
    url = Widget(make_client(api_type), "u", code).get_url()
    assert urlsplit(url).path == f"/api/{controller}"