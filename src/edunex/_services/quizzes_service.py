from typing import Any, List

from .._utils import RequestSpec
from ..models.courses import Identifier, Quiz, QuizAnswer, QuizQuestion, QuizResult
from ._base_service import BaseService


class QuizzesService(BaseService):
    """Service for quizzes, their questions and answers."""

    async def list(self) -> List[Quiz]:
        spec = RequestSpec(method="GET", endpoint="/quizzes")
        return [Quiz.model_validate(item) for item in await self.request_json(spec)]

    async def retrieve(self, quiz_id: Identifier) -> Quiz:
        spec = RequestSpec(method="GET", endpoint=f"/quizzes/{quiz_id}")
        return Quiz.model_validate(await self.request_json(spec))

    async def list_by_module(self, module_id: Identifier) -> List[Quiz]:
        spec = RequestSpec(method="GET", endpoint=f"/quizzes/module/{module_id}")
        return [Quiz.model_validate(item) for item in await self.request_json(spec)]

    async def create(self, **fields: Any) -> Quiz:
        spec = RequestSpec(method="POST", endpoint="/quizzes", json=fields)
        return Quiz.model_validate(await self.request_json(spec))

    async def update(self, quiz_id: Identifier, **fields: Any) -> Quiz:
        spec = RequestSpec(method="PUT", endpoint=f"/quizzes/{quiz_id}", json=fields)
        return Quiz.model_validate(await self.request_json(spec))

    async def delete(self, quiz_id: Identifier) -> None:
        await self.request(RequestSpec(method="DELETE", endpoint=f"/quizzes/{quiz_id}"))

    async def list_questions(self, quiz_id: Identifier) -> List[QuizQuestion]:
        spec = RequestSpec(method="GET", endpoint=f"/quiz-questions/quiz/{quiz_id}")
        return [
            QuizQuestion.model_validate(item) for item in await self.request_json(spec)
        ]

    async def create_question(self, **fields: Any) -> QuizQuestion:
        spec = RequestSpec(method="POST", endpoint="/quiz-questions", json=fields)
        return QuizQuestion.model_validate(await self.request_json(spec))

    async def create_answer(self, **fields: Any) -> QuizAnswer:
        spec = RequestSpec(method="POST", endpoint="/quiz-answers", json=fields)
        return QuizAnswer.model_validate(await self.request_json(spec))

    async def submit_result(self, quiz_id: Identifier, score: int) -> QuizResult:
        """Record a graded attempt for the signed-in student.

        Args:
            quiz_id: The quiz that was taken.
            score (int): Percentage score, 0-100.
        """
        spec = RequestSpec(
            method="POST",
            endpoint=f"/quizzes/{quiz_id}/results",
            json={"quizId": quiz_id, "score": score},
        )
        return QuizResult.model_validate(await self.request_json(spec) or {})
