from typing import Mapping

from .._utils import RequestSpec
from ..learning_path import score_quiz
from ..models.courses import Identifier, Module, ModuleProgress, Quiz, QuizScore
from ._base_service import BaseService
from .quizzes_service import QuizzesService


class ProgressService(BaseService):
    """Service for tracking module completion and course progress."""

    async def mark_module_completed(self, module_id: Identifier) -> ModuleProgress:
        spec = RequestSpec(
            method="POST", endpoint=f"/progress/module/{module_id}/complete"
        )
        return ModuleProgress.model_validate(await self.request_json(spec) or {})

    async def is_module_completed(self, module_id: Identifier) -> bool:
        spec = RequestSpec(method="GET", endpoint=f"/progress/user/module/{module_id}")
        body = await self.request_json(spec)
        return bool(body and body.get("completed"))

    async def list_completed_modules(self) -> list[Identifier]:
        """Ids of every module the signed-in user has completed."""
        spec = RequestSpec(method="GET", endpoint="/progress/user")
        body = await self.request_json(spec) or []
        progress = [ModuleProgress.model_validate(item) for item in body]
        return [
            p.module_id for p in progress if p.completed and p.module_id is not None
        ]

    async def get_course_progress(self, course_id: Identifier) -> float:
        spec = RequestSpec(method="GET", endpoint=f"/progress/course/{course_id}/stats")
        body = await self.request_json(spec) or {}
        return float(body.get("completionPercentage") or 0)

    async def complete_quiz(
        self,
        module: Module,
        quiz: Quiz,
        answers: Mapping[Identifier, Identifier],
    ) -> QuizScore:
        """Grade a quiz attempt, record it, and complete the module if it passed.

        Args:
            module (Module): The quiz module being taken.
            quiz (Quiz): The quiz with its questions and answers.
            answers (Mapping): Selected answer id per question id.

        Returns:
            QuizScore: The graded attempt.
        """
        quiz_id = quiz.id if quiz.id is not None else module.quiz_id
        if quiz_id is None:
            raise ValueError(f"Module {module.id} has no quiz to submit")

        score = score_quiz(quiz, answers)
        await QuizzesService(self._client).submit_result(quiz_id, score.percent)

        if score.passed and module.id is not None:
            await self.mark_module_completed(module.id)
        else:
            self._logger.info(
                f"Quiz {quiz_id} scored {score.percent}%, module {module.id} "
                "stays incomplete"
            )

        return score
