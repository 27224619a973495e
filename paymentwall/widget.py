"""Widget URL and iframe construction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import urlencode

from .client import (
    BASE_URL,
    CART_CONTROLLER,
    GOODS_CONTROLLER,
    VC_CONTROLLER,
    APIType,
    Client,
    PaymentwallError,
    SignatureVersion,
    _format_value,
)
from .product import Product, ProductType

_WIDGET_CODE_PATTERN = re.compile(r"^(w|s|mw)")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DEFAULT_ATTRS = {"frameborder": "0", "width": "750", "height": "800"}


def _parse_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        return None
    return number


def _enum_text(value: Any) -> Any:
    if value is None:
        return ""
    return getattr(value, "value", value)


@dataclass
class Widget:
    """Builds the parameters, URL and HTML of a payment widget."""

    client: Client
    user_id: str
    widget_code: str
    products: list[Product] = field(default_factory=list)
    extra_params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.products is None:
            self.products = []
        if self.extra_params is None:
            self.extra_params = {}

    def _default_signature_version(self) -> int:
        if self.client.api_type == APIType.CART:
            return SignatureVersion.V2
        return SignatureVersion.V3

    def _goods_params(self) -> dict[str, Any]:
        if len(self.products) > 1:
            self.client.append_error(
                "only one product allowed for API Checkout and empty products for API Goods"
            )
            raise PaymentwallError(f"invalid product count: {len(self.products)}")
        if not self.products:
            return {}

        product = self.products[0]
        post_trial = None
        if product.trial_product is not None:
            post_trial = product
            product = product.trial_product

        params: dict[str, Any] = {
            "amount": product.amount,
            "currencyCode": product.currency_code,
            "ag_name": product.name,
            "ag_external_id": product.id,
            "ag_type": _enum_text(product.type),
        }
        if product.type == ProductType.SUBSCRIPTION:
            params["ag_period_length"] = product.period_length
            params["ag_period_type"] = _enum_text(product.period_type)
            params["ag_recurring"] = 1 if product.recurring else 0
            if post_trial is not None:
                params.update(
                    {
                        "ag_trial": 1,
                        "ag_post_trial_external_id": post_trial.id,
                        "ag_post_trial_period_length": post_trial.period_length,
                        "ag_post_trial_period_type": _enum_text(post_trial.period_type),
                        "ag_post_trial_name": post_trial.name,
                        "post_trial_amount": post_trial.amount,
                        "post_trial_currencyCode": post_trial.currency_code,
                    }
                )
        return params

    def _cart_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        for index, product in enumerate(self.products):
            params[f"external_ids[{index}]"] = product.id
            if product.amount > 0:
                params[f"prices[{index}]"] = product.amount
            if product.currency_code:
                params[f"currencies[{index}]"] = product.currency_code
        return params

    def get_params(self) -> dict[str, Any]:
        """Return the widget parameters including ``sign_version`` and ``sign``."""
        params: dict[str, Any] = {
            "key": self.client.app_key,
            "uid": self.user_id,
            "widget": self.widget_code,
        }
        if self.client.api_type == APIType.GOODS:
            params.update(self._goods_params())
        elif self.client.api_type == APIType.CART:
            params.update(self._cart_params())

        params.update(self.extra_params)

        version = self._default_signature_version()
        if "sign_version" in self.extra_params:
            parsed = _parse_int(_format_value(self.extra_params["sign_version"]))
            if parsed is not None:
                version = parsed
        params["sign_version"] = int(version)
        params["sign"] = self.client.calculate_signature(params, version)
        return params

    def _controller(self) -> str:
        matches = bool(_WIDGET_CODE_PATTERN.match(self.widget_code))
        if self.client.api_type == APIType.VC and not matches:
            return VC_CONTROLLER
        if self.client.api_type == APIType.GOODS and not matches:
            return GOODS_CONTROLLER
        return CART_CONTROLLER

    def get_url(self) -> str:
        """Return the full widget URL."""
        params = self.get_params()
        query = urlencode(
            [(key, _format_value(params[key])) for key in sorted(params)]
        )
        return f"{BASE_URL}/{self._controller()}?{query}"

    def get_html_code(self, attrs: Mapping[str, str] | None = None) -> str:
        """Return an iframe element that embeds the widget."""
        src = self.get_url()
        merged = {**_DEFAULT_ATTRS, **(attrs or {})}
        attributes = " ".join(f'{key}="{value}"' for key, value in merged.items())
        return f'<iframe src="{src}" {attributes}></iframe>'