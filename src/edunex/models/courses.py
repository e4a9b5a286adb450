"""Models for courses, modules, quizzes, enrollments and progress."""

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Identifier = Union[int, str]


class ModuleType(str, Enum):
    """Enumeration of module content types."""

    VIDEO = "VIDEO"
    PDF = "PDF"
    QUIZ = "QUIZ"


class CourseStatus(str, Enum):
    PUBLISHED = "PUBLISHED"
    DRAFT = "DRAFT"


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )


class Module(_ApiModel):
    """A single unit of course content."""

    id: Optional[Identifier] = None
    title: Optional[str] = None
    type: Optional[ModuleType] = None
    coins_required: Optional[int] = None
    content_url: Optional[str] = None
    module_order: int = 0
    course_id: Optional[Identifier] = None
    course_name: Optional[str] = None
    quiz_id: Optional[Identifier] = None
    completed: bool = False
    progress_percentage: Optional[float] = None


class Course(_ApiModel):
    id: Optional[Identifier] = None
    title: Optional[str] = None
    description: Optional[str] = None
    instructor_id: Optional[str] = None
    instructor_name: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    module_count: Optional[int] = None
    enrollment_count: Optional[int] = None
    completion_percentage: Optional[float] = None
    modules: list[Module] = Field(default_factory=list)
    user_enrolled: Optional[bool] = None


class QuizAnswer(_ApiModel):
    id: Optional[Identifier] = None
    question_id: Optional[Identifier] = None
    answer_text: Optional[str] = None
    is_correct: bool = False


class QuizQuestion(_ApiModel):
    id: Optional[Identifier] = None
    quiz_id: Optional[Identifier] = None
    question_text: Optional[str] = None
    answers: list[QuizAnswer] = Field(default_factory=list)


class Quiz(_ApiModel):
    id: Optional[Identifier] = None
    title: Optional[str] = None
    description: Optional[str] = None
    module_id: Optional[Identifier] = None
    questions: list[QuizQuestion] = Field(default_factory=list)


class QuizResult(_ApiModel):
    id: Optional[Identifier] = None
    quiz_id: Optional[Identifier] = None
    score: Optional[int] = None
    submitted_at: Optional[datetime] = None


class Enrollment(_ApiModel):
    id: Optional[Identifier] = None
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    course_id: Optional[Identifier] = None
    course_title: Optional[str] = None
    enrolled_at: Optional[datetime] = None
    completion_percentage: Optional[float] = None


class ModuleProgress(_ApiModel):
    id: Optional[Identifier] = None
    module_id: Optional[Identifier] = None
    completed: bool = False
    completed_at: Optional[datetime] = None


class QuizScore(BaseModel):
    """Outcome of grading a set of answers against a quiz."""

    correct: int
    total: int
    percent: int
    passed: bool
