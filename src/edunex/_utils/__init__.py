from ._logs import setup_logging
from ._request_spec import RequestSpec
from ._ssl_context import get_httpx_client_kwargs
from ._url import ensure_trailing_slash, is_public_endpoint, normalize_url_path

__all__ = [
    "RequestSpec",
    "ensure_trailing_slash",
    "get_httpx_client_kwargs",
    "is_public_endpoint",
    "normalize_url_path",
    "setup_logging",
]
