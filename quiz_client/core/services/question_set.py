"""Service normalizing a freshly loaded question set before an attempt starts."""

from __future__ import annotations

from collections.abc import Iterable

from quiz_client.core.models import AnswerOption, Question, SelectMode


def decide_select_mode(options: Iterable[AnswerOption], declared_multiple: bool | None = None) -> SelectMode:
    """Arity is decided once, at load time.

    An explicit flag from the server wins. Otherwise a question with more
    than one option flagged correct is multi-select.
    """
    if declared_multiple is not None:
        return SelectMode.MULTIPLE if declared_multiple else SelectMode.SINGLE
    correct_count = sum(1 for option in options if option.is_correct is True)
    return SelectMode.MULTIPLE if correct_count > 1 else SelectMode.SINGLE


class QuestionSet:
    """Ordered, validated, read-only list of questions for one quiz."""

    def __init__(self, questions: Iterable[Question]) -> None:
        self._questions: tuple[Question, ...] = tuple(
            self._prepare_question(q) for q in sorted(questions, key=lambda q: (q.position, q.id))
        )
        ids = [q.id for q in self._questions]
        if len(ids) != len(set(ids)):
            raise ValueError("Question ids must be unique within a quiz.")

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @staticmethod
    def _prepare_question(question: Question) -> Question:
        cleaned_text = question.text.strip()
        if not cleaned_text:
            raise ValueError(f"Question {question.id} has no text.")
        if not question.options:
            raise ValueError(f"Question {question.id} has no answer options.")

        options = tuple(sorted(question.options, key=lambda o: (o.position, o.id)))
        option_ids = [o.id for o in options]
        if len(option_ids) != len(set(option_ids)):
            raise ValueError(f"Question {question.id} repeats an answer option id.")

        return Question(
            id=question.id,
            position=question.position,
            text=cleaned_text,
            options=tuple(AnswerOption(o.id, o.text.strip(), o.position, o.is_correct) for o in options),
            select_mode=question.select_mode,
        )
