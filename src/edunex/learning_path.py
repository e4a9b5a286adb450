"""Sequential module unlocking, course progress and quiz grading.

Students work through a course in module order: the first module is always
open and each later one unlocks once every module before it is completed.
Instructors can open any module. A quiz is passed at ``PASSING_SCORE`` percent.
"""

import math
from typing import Iterable, Mapping, Optional

from ._utils.constants import PASSING_SCORE, ROLE_INSTRUCTOR, ROLE_STUDENT
from .models.courses import Identifier, Module, Quiz, QuizScore


def _percent(part: int, whole: int) -> int:
    # half-up, so 62.5 becomes 63 rather than banker's 62
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


class CoursePath:
    """Read-only view of a course's modules in the order they must be taken."""

    def __init__(self, modules: Iterable[Module], role: str = ROLE_STUDENT) -> None:
        self._modules = sorted(modules, key=lambda m: m.module_order)
        self._role = role
        self._index = {m.id: i for i, m in enumerate(self._modules)}

    @property
    def modules(self) -> list[Module]:
        return list(self._modules)

    @property
    def role(self) -> str:
        return self._role

    def can_access(self, module_id: Identifier) -> bool:
        if module_id not in self._index:
            raise KeyError(f"Module {module_id!r} is not part of this course")

        if self._role == ROLE_INSTRUCTOR:
            return True

        position = self._index[module_id]
        return all(m.completed for m in self._modules[:position])

    def progress_percent(self) -> int:
        completed = sum(1 for m in self._modules if m.completed)
        return _percent(completed, len(self._modules))

    def current_module(self) -> Optional[Module]:
        """First incomplete module, or the first module once all are done."""
        if not self._modules:
            return None
        return next((m for m in self._modules if not m.completed), self._modules[0])

    def is_complete(self) -> bool:
        return bool(self._modules) and all(m.completed for m in self._modules)

    def mark_completed(self, module_id: Identifier) -> "CoursePath":
        if module_id not in self._index:
            raise KeyError(f"Module {module_id!r} is not part of this course")

        modules = [
            m.model_copy(update={"completed": True}) if m.id == module_id else m
            for m in self._modules
        ]
        return CoursePath(modules, role=self._role)


def score_quiz(
    quiz: Quiz,
    answers: Mapping[Identifier, Identifier],
    passing_score: int = PASSING_SCORE,
) -> QuizScore:
    """Grade a quiz attempt.

    Args:
        quiz (Quiz): The quiz, including its questions and their answers.
        answers (Mapping): Selected answer id per question id. Unanswered
            questions score zero.
        passing_score (int): Minimum percentage needed to pass.

    Returns:
        QuizScore: Correct count, total, rounded percentage and pass flag.
    """
    correct = 0
    for question in quiz.questions:
        selected = answers.get(question.id) if question.id is not None else None
        if selected is None:
            continue
        if any(a.id == selected and a.is_correct for a in question.answers):
            correct += 1

    total = len(quiz.questions)
    percent = _percent(correct, total)
    return QuizScore(
        correct=correct,
        total=total,
        percent=percent,
        passed=total > 0 and percent >= passing_score,
    )
