import os
import ssl
from typing import Any, Optional

import certifi
import httpx


def _env_path(name: str) -> Optional[str]:
    value = os.environ.get(name)
    if not value:
        return None
    return os.path.expanduser(os.path.expandvars(value))


def create_ssl_context() -> ssl.SSLContext:
    """CA bundle from SSL_CERT_FILE or REQUESTS_CA_BUNDLE, else certifi."""
    cafile = _env_path("SSL_CERT_FILE") or _env_path("REQUESTS_CA_BUNDLE")
    return ssl.create_default_context(
        cafile=cafile or certifi.where(),
        capath=_env_path("SSL_CERT_DIR"),
    )


def get_httpx_client_kwargs(timeout: float) -> dict[str, Any]:
    """Shared kwargs for every httpx client the SDK builds (SSL, timeout, redirects)."""
    return {
        "verify": create_ssl_context(),
        "timeout": httpx.Timeout(timeout),
        "follow_redirects": True,
    }
