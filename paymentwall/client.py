"""Client configuration and request signing."""

from __future__ import annotations

import hashlib
import math
from dataclasses import dataclass, field
from decimal import Decimal
from enum import IntEnum
from typing import Any, Mapping

VC_CONTROLLER = "ps"
GOODS_CONTROLLER = "subscription"
CART_CONTROLLER = "cart"
BASE_URL = "https://api.paymentwall.com/api"
VERSION = "0.1.1"


class APIType(IntEnum):
    """Paymentwall API mode."""

    VC = 1  # Virtual Currency
    GOODS = 2  # Digital Goods
    CART = 3  # Cart API


class SignatureVersion(IntEnum):
    """Version of the signature algorithm."""

    V1 = 1  # MD5(uid + secret)
    V2 = 2  # MD5(sorted params + secret)
    V3 = 3  # SHA256(sorted params + secret)


class PaymentwallError(Exception):
    """Raised when a request cannot be signed or built."""


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    sci_exp = len(digits) + exponent - 1
    if sci_exp < -4 or sci_exp >= 21:
        mantissa = "".join(map(str, digits))
        if len(mantissa) > 1:
            mantissa = f"{mantissa[0]}.{mantissa[1:]}"
        exp_sign = "-" if sci_exp < 0 else "+"
        text = f"{mantissa}e{exp_sign}{abs(sci_exp):02d}"
        return f"-{text}" if sign else text
    return format(number, "f")


def _format_value(value: Any) -> str:
    """Render a parameter value the way it appears in signed strings and URLs."""
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_format_value(item) for item in value) + "]"
    return str(value)


def _md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@dataclass
class Client:
    """Holds the application keys, API mode and recorded errors."""

    app_key: str
    secret_key: str
    api_type: APIType = APIType.VC
    errors: list[str] = field(default_factory=list)

    def append_error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def error_summary(self) -> str:
        """Return all recorded errors, one per line."""
        return "\n".join(self.errors)

    def calculate_signature(
        self, params: Mapping[str, Any], version: SignatureVersion | int
    ) -> str:
        """Compute the signature of ``params`` with the given algorithm version."""
        if not self.secret_key:
            raise PaymentwallError("secret key cannot be empty")
        try:
            version = SignatureVersion(version)
        except ValueError:
            raise PaymentwallError(
                f"unsupported signature version: {version}"
            ) from None

        if version is SignatureVersion.V1:
            uid = params.get("uid")
            if not isinstance(uid, str):
                uid = ""
            return _md5(uid + self.secret_key)

        parts = []
        for key in sorted(params):
            value = params[key]
            if isinstance(value, (list, tuple)):
                parts.extend(
                    f"{key}[{index}]={_format_value(item)}"
                    for index, item in enumerate(value)
                )
            else:
                parts.append(f"{key}={_format_value(value)}")
        base = "".join(parts) + self.secret_key

        if version is SignatureVersion.V2:
            return _md5(base)
        return _sha256(base)