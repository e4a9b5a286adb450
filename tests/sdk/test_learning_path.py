import pytest

from edunex.learning_path import CoursePath, score_quiz
from edunex.models.courses import Module, Quiz


def make_modules(*completed: bool) -> list[Module]:
    # handed over out of order to check sorting
    modules = [
        Module(id=index + 1, module_order=index + 1, completed=done)
        for index, done in enumerate(completed)
    ]
    return list(reversed(modules))


def make_quiz(question_count: int) -> Quiz:
    return Quiz.model_validate(
        {
            "id": 1,
            "questions": [
                {
                    "id": q,
                    "answers": [
                        {"id": q * 10, "isCorrect": True},
                        {"id": q * 10 + 1, "isCorrect": False},
                    ],
                }
                for q in range(1, question_count + 1)
            ],
        }
    )


class TestCoursePath:
    def test_modules_are_ordered(self):
        path = CoursePath(make_modules(False, False, False))

        assert [m.id for m in path.modules] == [1, 2, 3]

    def test_first_module_is_always_open(self):
        path = CoursePath(make_modules(False, False))

        assert path.can_access(1)
        assert not path.can_access(2)

    def test_module_unlocks_once_previous_ones_are_completed(self):
        path = CoursePath(make_modules(True, True, False, False))

        assert path.can_access(3)
        assert not path.can_access(4)

    def test_gap_in_completion_keeps_later_modules_locked(self):
        path = CoursePath(make_modules(True, False, True, False))

        assert not path.can_access(3)
        assert not path.can_access(4)

    def test_instructor_can_access_everything(self):
        path = CoursePath(make_modules(False, False, False), role="INSTRUCTOR")

        assert path.can_access(3)

    def test_unknown_module(self):
        path = CoursePath(make_modules(False))

        with pytest.raises(KeyError):
            path.can_access(99)

    def test_progress_and_current_module(self):
        path = CoursePath(make_modules(True, False, False))

        assert path.progress_percent() == 33
        assert path.current_module().id == 2
        assert not path.is_complete()

    def test_completed_course(self):
        path = CoursePath(make_modules(True, True))

        assert path.progress_percent() == 100
        assert path.is_complete()
        assert path.current_module().id == 1

    def test_empty_course(self):
        path = CoursePath([])

        assert path.progress_percent() == 0
        assert path.current_module() is None
        assert not path.is_complete()

    def test_mark_completed_returns_new_path(self):
        path = CoursePath(make_modules(False, False))

        updated = path.mark_completed(1)

        assert updated.can_access(2)
        assert not path.can_access(2)


class TestScoreQuiz:
    def test_all_correct(self):
        score = score_quiz(make_quiz(4), {1: 10, 2: 20, 3: 30, 4: 40})

        assert score.correct == 4
        assert score.percent == 100
        assert score.passed

    def test_exactly_passing_score(self):
        score = score_quiz(make_quiz(4), {1: 10, 2: 20, 3: 30, 4: 41})

        assert score.percent == 75
        assert score.passed

    def test_below_passing_score(self):
        score = score_quiz(make_quiz(3), {1: 10, 2: 20, 3: 31})

        assert score.percent == 67
        assert not score.passed

    def test_unanswered_questions_score_zero(self):
        score = score_quiz(make_quiz(2), {})

        assert score.correct == 0
        assert score.total == 2
        assert not score.passed

    def test_half_up_rounding(self):
        # 5 of 8 is 62.5%
        answers = {q: q * 10 for q in range(1, 6)}

        score = score_quiz(make_quiz(8), answers)

        assert score.percent == 63

    def test_empty_quiz_never_passes(self):
        score = score_quiz(make_quiz(0), {}, passing_score=0)

        assert score.percent == 0
        assert not score.passed

    def test_custom_passing_score(self):
        score = score_quiz(make_quiz(2), {1: 10}, passing_score=50)

        assert score.passed
