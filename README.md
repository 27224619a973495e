# paymentwall

A small library for working with Paymentwall. It has no dependencies
outside the standard library. It can:

- compute request signatures (v1 MD5, v2 MD5, v3 SHA-256),
- describe one-time and subscription products,
- build widget parameters, URLs and iframe HTML,
- validate incoming pingback notifications.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Client and signatures

```python
from paymentwall.client import Client, APIType, SignatureVersion

client = Client("placeholder", "secret", APIType.GOODS)
sig = client.calculate_signature({"uid": "user"}, SignatureVersion.V1)
```

`Client(app_key, secret_key, api_type=APIType.VC)` holds the keys, the API
mode (`APIType.VC`, `APIType.GOODS` or `APIType.CART`) and a list of recorded
errors. Use `append_error` to add to that list and `error_summary` to read it
back. `error_summary` returns the errors joined by newlines.

`calculate_signature(params, version)` works as follows:

- `V1` hashes the `uid` value followed by the secret key with MD5.
- `V2` and `V3` sort the parameters by key and join them as `key=value` pairs.
  A list value becomes `key[0]=...`, `key[1]=...` and so on. The secret key
  is appended, and the result is hashed with MD5 (`V2`) or SHA-256 (`V3`).

It raises `PaymentwallError` if the client has no secret key or the version is
not 1, 2 or 3.

## Products

```python
from paymentwall.product import Product, ProductType, PeriodType

trial = Product("trial", 0.99, "EUR", "Trial", ProductType.SUBSCRIPTION, 1, PeriodType.WEEK)
plan = Product(
    "sub1", 12.345, "USD", "Monthly plan", ProductType.SUBSCRIPTION,
    1, PeriodType.MONTH, recurring=True, trial_product=trial,
)
plan.amount          # 12.35, rounded to two decimals
plan.is_recurring()  # True
```

The product type and period type may be given as enum members or as their
string values (`"fixed"`, `"subscription"`; `"day"`, `"week"`, `"month"`,
`"year"`). An empty period type becomes `None`. An unknown product type or
period type raises `ValueError`. A trial product is kept only on recurring
subscriptions. On any other product it is set to `None`.

## Widgets

```python
from paymentwall.widget import Widget

widget = Widget(client, "user123", "p1", [plan], {"email": "user@example.com"})
params = widget.get_params()   # includes "sign_version" and "sign"
url = widget.get_url()
html = widget.get_html_code({"width": "600"})
```

Each API mode uses products differently:

- **Digital Goods:** the widget accepts at most one product. With more than
  one, `get_params` records an error on the client and raises
  `PaymentwallError`. If the product carries a trial, the trial's fields are
  sent and the main product is sent as the post-trial product.
- **Cart:** the widget takes any number of products. They are sent as
  `external_ids[i]`, with `prices[i]` and `currencies[i]` where these are set.
- **Virtual Currency:** the widget sends no product fields.

Extra parameters are merged into the widget parameters last. A
`sign_version` among them overrides the default signature version. The
default is 3, or 2 for the Cart API.

`get_url` builds a URL under `https://api.paymentwall.com/api`, with the
parameters sorted by name. The path is `ps` for Virtual Currency, or
`subscription` for Digital Goods, when the widget code does not start with
`w`, `s` or `mw`. In every other case the path is `cart`.

`get_html_code(attrs=None)` wraps the URL in an `<iframe>`. The default
attributes are `frameborder="0" width="750" height="800"`, and `attrs`
overrides or adds to them.

## Pingbacks

In the example below, `deliver` and `revoke` stand for your own application's
functions.

```python
from paymentwall.pingback import Pingback

pingback = Pingback(client, request_params, remote_ip)
if pingback.validate(skip_ip_whitelist=False):
    if pingback.is_deliverable():
        deliver(pingback.user_id(), pingback.product())
    elif pingback.is_cancelable():
        revoke(pingback.reference_id())
else:
    print(pingback.error_summary())
```

`validate` runs three checks in order:

1. The required parameters are present.
2. The source IP is on Paymentwall's whitelist. Pass `skip_ip_whitelist=True`
   to skip this check.
3. The signature is correct.

`validate` stops at the first failure, records the reason in
`pingback.errors` and returns `False`.

The signature version comes from the `sign_version` parameter. Without it,
version 1 is used, or version 2 for the Cart API. Version 1 signs only a fixed
set of fields for each API mode.

Accessors:

- `user_id()`, `vc_amount()`, `product_id()` and `reference_id()` return the
  matching parameters as strings.
- `type()` returns the pingback type as an integer. It raises `ValueError` if
  the type is not an integer.
- `is_deliverable()` is true for types 0, 1 and 201.
- `is_cancelable()` is true for types 2 and 202.
- `is_under_review()` is true for type 200.
- `pingback_unique_id()` returns `"<ref>_<type>"`.
- `product()` rebuilds a product from `goodsid`, `slength` and `speriod`.
- `products()` returns one fixed product for each `goodsid` entry of a Cart
  pingback.

## What this package does not do

This package makes no network requests and runs no server. To receive
pingbacks, run your own web endpoint and pass the request parameters and the
client's IP address to `Pingback`. Storing deliveries or transactions is left
to the application.