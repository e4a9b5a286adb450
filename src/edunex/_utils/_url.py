from typing import Iterable


def ensure_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else f"{url}/"


def normalize_url_path(path: str) -> str:
    """Strip the leading slash so the path joins cleanly onto the base URL."""
    return path[1:] if path.startswith("/") else path


def is_public_endpoint(path: str, public_endpoints: Iterable[str]) -> bool:
    """Check whether ``path`` targets an endpoint reachable without a session.

    Matching is by substring containment against the path with its leading
    slash restored, so ``auth/login`` and ``/auth/login?x=1`` both match the
    ``/auth/login`` entry.
    """
    rooted = "/" + normalize_url_path(path)
    return any(endpoint in rooted for endpoint in public_endpoints)
