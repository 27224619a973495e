"""Validation and inspection of pingback (webhook) notifications."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .client import APIType, Client, PaymentwallError, SignatureVersion, _format_value
from .product import Product, ProductType

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_IP_WHITELIST = frozenset(
    [
        "174.36.92.186",
        "174.36.96.66",
        "174.36.92.187",
        "174.36.92.192",
        "174.37.14.28",
    ]
    + [f"216.127.71.{octet}" for octet in range(256)]
)

_DELIVERABLE_TYPES = frozenset({0, 1, 201})
_CANCELABLE_TYPES = frozenset({2, 202})
_UNDER_REVIEW_TYPE = 200


def _atoi(text: str) -> int:
    """Parse a strict decimal integer, raising ValueError otherwise."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return number


def _required_params(api_type: APIType) -> tuple[str, ...]:
    if api_type == APIType.VC:
        return ("uid", "currency", "type", "ref", "sig")
    return ("uid", "goodsid", "type", "ref", "sig")


def _v1_signed_fields(api_type: APIType) -> tuple[str, ...]:
    if api_type == APIType.VC:
        return ("uid", "currency", "type", "ref")
    if api_type == APIType.GOODS:
        return ("uid", "goodsid", "slength", "speriod", "type", "ref")
    return ("uid", "goodsid", "type", "ref")


@dataclass
class Pingback:
    """A pingback notification together with the checks run against it."""

    client: Client
    params: dict[str, Any]
    ip_address: str
    errors: list[str] = field(default_factory=list)

    def validate(self, skip_ip_whitelist: bool = False) -> bool:
        """Check parameters, source address and signature; record what fails."""
        if not self._params_valid():
            self.errors.append("Missing parameters")
            return False
        if not skip_ip_whitelist and self.ip_address not in _IP_WHITELIST:
            self.errors.append("IP address is not whitelisted")
            return False
        if not self._signature_valid():
            self.errors.append("Wrong signature")
            return False
        return True

    def _params_valid(self) -> bool:
        missing = [
            key for key in _required_params(self.client.api_type) if key not in self.params
        ]
        self.errors.extend(f"Parameter {key} is missing" for key in missing)
        return not missing

    def _signature_version(self) -> int:
        if "sign_version" in self.params:
            try:
                return _atoi(_format_value(self.params["sign_version"]))
            except ValueError:
                return SignatureVersion.V1
        if self.client.api_type == APIType.CART:
            return SignatureVersion.V2
        return SignatureVersion.V1

    def _signature_valid(self) -> bool:
        version = self._signature_version()
        signed = {key: value for key, value in self.params.items() if key != "sig"}
        if version == SignatureVersion.V1:
            signed = {
                name: signed[name]
                for name in _v1_signed_fields(self.client.api_type)
                if name in signed
            }
        try:
            expected = self.client.calculate_signature(signed, version)
        except PaymentwallError:
            return False
        return _format_value(self.params.get("sig")) == expected

    def _text(self, key: str) -> str:
        return _format_value(self.params.get(key))

    def user_id(self) -> str:
        """Return the ``uid`` parameter."""
        return self._text("uid")

    def type(self) -> int:
        """Return the pingback type; raises ValueError if it is not an integer."""
        return _atoi(self._text("type"))

    def vc_amount(self) -> str:
        """Return the virtual currency amount."""
        return self._text("currency")

    def product_id(self) -> str:
        """Return the product identifier from ``goodsid``."""
        return self._text("goodsid")

    def product(self) -> Product:
        """Rebuild the product described by the pingback."""
        try:
            length = _atoi(self._text("slength"))
        except ValueError:
            length = 0
        kind = ProductType.SUBSCRIPTION if length > 0 else ProductType.FIXED
        return Product(
            id=self._text("goodsid"),
            type=kind,
            period_length=length,
            period_type=self._text("speriod"),
        )

    def products(self) -> list[Product]:
        """Return the products of a Cart API pingback."""
        goods = self.params.get("goodsid")
        if not isinstance(goods, (list, tuple)):
            return []
        return [Product(id=_format_value(item)) for item in goods]

    def _type_or_none(self) -> int | None:
        try:
            return self.type()
        except ValueError:
            return None

    def is_deliverable(self) -> bool:
        """Return True if the goods should be delivered."""
        return self._type_or_none() in _DELIVERABLE_TYPES

    def is_cancelable(self) -> bool:
        """Return True if the purchase was cancelled."""
        return self._type_or_none() in _CANCELABLE_TYPES

    def is_under_review(self) -> bool:
        """Return True if the payment is under review."""
        return self._type_or_none() == _UNDER_REVIEW_TYPE

    def error_summary(self) -> str:
        """Return the recorded errors, one per line."""
        return "\n".join(self.errors)

    def reference_id(self) -> str:
        """Return the ``ref`` parameter."""
        return self._text("ref")

    def pingback_unique_id(self) -> str:
        """Return an identifier made of the reference and the type."""
        ref = self.reference_id()
        kind = self._type_or_none()
        if kind is None:
            return ref
        return f"{ref}_{kind}"