from .auth import Credential, LoginUrls, TokenResponse, User
from .courses import (
    Course,
    CourseStatus,
    Enrollment,
    Module,
    ModuleProgress,
    ModuleType,
    Quiz,
    QuizAnswer,
    QuizQuestion,
    QuizResult,
    QuizScore,
)
from .errors import (
    AuthorizationExpired,
    AuthorizationPermanentlyDenied,
    EduNexError,
    OtherHttpError,
    RefreshEndpointFailure,
    TransientNetworkError,
)

__all__ = [
    "AuthorizationExpired",
    "AuthorizationPermanentlyDenied",
    "Course",
    "CourseStatus",
    "Credential",
    "EduNexError",
    "Enrollment",
    "LoginUrls",
    "Module",
    "ModuleProgress",
    "ModuleType",
    "OtherHttpError",
    "Quiz",
    "QuizAnswer",
    "QuizQuestion",
    "QuizResult",
    "QuizScore",
    "RefreshEndpointFailure",
    "TokenResponse",
    "TransientNetworkError",
    "User",
]
