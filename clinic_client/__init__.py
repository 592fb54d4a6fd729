"""
Async client library for the clinic platform REST API.
"""

from clinic_client.core.container import ClientContainer

__all__ = ["ClientContainer"]

__version__ = "0.1.0"
