from ._base_service import BaseService
from ._refresh_coordinator import RefreshCoordinator
from ._request_client import AuthenticatedRequestClient
from ._token_store import DotenvTokenStore, InMemoryTokenStore, TokenStore
from .auth_service import AuthService
from .courses_service import CoursesService
from .enrollments_service import EnrollmentsService
from .modules_service import ModulesService
from .progress_service import ProgressService
from .quizzes_service import QuizzesService

__all__ = [
    "AuthService",
    "AuthenticatedRequestClient",
    "BaseService",
    "CoursesService",
    "DotenvTokenStore",
    "EnrollmentsService",
    "InMemoryTokenStore",
    "ModulesService",
    "ProgressService",
    "QuizzesService",
    "RefreshCoordinator",
    "TokenStore",
]
