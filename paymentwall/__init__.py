"""Signatures, products, widget URLs and pingback validation for Paymentwall."""

__version__ = "0.1.1"

__all__ = ["client", "product", "pingback", "widget"]