from clinic_client.core.http import BearerTokenAuth, TokenStore, create_http_client
from clinic_client.core.logging_config import setup_logging

__all__ = [
    "BearerTokenAuth",
    "TokenStore",
    "create_http_client",
    "setup_logging",
]
