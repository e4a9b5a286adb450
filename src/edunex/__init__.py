from ._config import Config
from ._edunex import EduNex
from ._services import (
    AuthenticatedRequestClient,
    DotenvTokenStore,
    InMemoryTokenStore,
    RefreshCoordinator,
    TokenStore,
)
from ._utils import RequestSpec
from .learning_path import CoursePath, score_quiz
from .models import (
    AuthorizationExpired,
    AuthorizationPermanentlyDenied,
    Credential,
    EduNexError,
    OtherHttpError,
    RefreshEndpointFailure,
    TransientNetworkError,
)

__all__ = [
    "AuthenticatedRequestClient",
    "AuthorizationExpired",
    "AuthorizationPermanentlyDenied",
    "Config",
    "CoursePath",
    "Credential",
    "DotenvTokenStore",
    "EduNex",
    "EduNexError",
    "InMemoryTokenStore",
    "OtherHttpError",
    "RefreshCoordinator",
    "RefreshEndpointFailure",
    "RequestSpec",
    "TokenStore",
    "TransientNetworkError",
    "score_quiz",
]
