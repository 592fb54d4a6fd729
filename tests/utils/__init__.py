"""Test utilities and helpers."""

from tests.utils.builders import ServiceBuilder, envelope, paginated

__all__ = [
    "ServiceBuilder",
    "envelope",
    "paginated",
]
