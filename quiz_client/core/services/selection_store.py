"""Service holding the participant's in-progress answer choices."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import MappingProxyType
from typing import Mapping

from quiz_client.core.models import MultiSelection, Question, Selection, SingleSelection

logger = logging.getLogger(__name__)


class AnswerSelectionStore:
    """Maps question ids to the participant's current selection.

    Only input that matches a known question, one of its options and the
    question's select mode is recorded. Anything else is ignored.
    """

    def __init__(self, questions: Sequence[Question]) -> None:
        self._questions: dict[int, Question] = {q.id: q for q in questions}
        self._order: list[int] = [q.id for q in sorted(questions, key=lambda q: q.position)]
        self._selections: dict[int, Selection] = {}

    def select(self, question_id: int, option_id: int) -> None:
        """Record or replace the chosen option of a single-select question."""
        question = self._resolve(question_id, option_id)
        if question is None:
            return
        if question.is_multiple:
            logger.debug("select() ignored for multi-select question %s", question_id)
            return
        self._selections[question_id] = SingleSelection(option_id)

    def toggle(self, question_id: int, option_id: int) -> None:
        """Add or remove an option of a multi-select question."""
        question = self._resolve(question_id, option_id)
        if question is None:
            return
        if not question.is_multiple:
            logger.debug("toggle() ignored for single-select question %s", question_id)
            return

        current = self._selections.get(question_id)
        chosen = set(current.option_ids) if current is not None else set()
        if option_id in chosen:
            chosen.remove(option_id)
        else:
            chosen.add(option_id)

        if chosen:
            self._selections[question_id] = MultiSelection(frozenset(chosen))
        else:
            self._selections.pop(question_id, None)

    def clear(self, question_id: int) -> None:
        self._selections.pop(question_id, None)

    def selection_for(self, question_id: int) -> Selection | None:
        return self._selections.get(question_id)

    def is_selected(self, question_id: int, option_id: int) -> bool:
        selection = self._selections.get(question_id)
        return selection is not None and option_id in selection.option_ids

    def is_answered(self, question_id: int) -> bool:
        selection = self._selections.get(question_id)
        return selection is not None and bool(selection.option_ids)

    def is_complete(self) -> bool:
        return all(self.is_answered(question_id) for question_id in self._order)

    def answered_count(self) -> int:
        return sum(1 for question_id in self._order if self.is_answered(question_id))

    def unanswered_questions(self) -> list[Question]:
        return [self._questions[qid] for qid in self._order if not self.is_answered(qid)]

    def snapshot(self) -> Mapping[int, Selection]:
        """Read-only copy of the current selections."""
        return MappingProxyType(dict(self._selections))

    def to_payload(self) -> tuple[tuple[int, int | tuple[int, ...]], ...]:
        """Selections as ordered ``(question_id, answer)`` pairs for submission."""
        pairs: list[tuple[int, int | tuple[int, ...]]] = []
        for question_id in self._order:
            selection = self._selections.get(question_id)
            if selection is None:
                continue
            if isinstance(selection, SingleSelection):
                pairs.append((question_id, selection.option_id))
            else:
                pairs.append((question_id, tuple(sorted(selection.option_ids))))
        return tuple(pairs)

    def _resolve(self, question_id: int, option_id: int) -> Question | None:
        question = self._questions.get(question_id)
        if question is None:
            logger.debug("Ignoring selection for unknown question %s", question_id)
            return None
        if not question.has_option(option_id):
            logger.debug("Ignoring unknown option %s for question %s", option_id, question_id)
            return None
        return question
