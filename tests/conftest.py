from __future__ import annotations

import pytest

from quiz_client.core.models import (
    AnswerOption,
    MultiSelection,
    Participant,
    Question,
    QuizInfo,
    SingleSelection,
)
from quiz_client.core.services.question_set import decide_select_mode


def build_question(qid: int, *flags: bool | None, position: int | None = None, multiple: bool | None = None) -> Question:
    """Question ``qid`` whose options get ids ``qid*10 + 1``, ``qid*10 + 2``, ..."""
    options = tuple(
        AnswerOption(id=qid * 10 + idx, text=f"Q{qid} option {idx}", position=idx, is_correct=flag)
        for idx, flag in enumerate(flags, start=1)
    )
    return Question(
        id=qid,
        position=position if position is not None else qid,
        text=f"Question {qid}",
        options=options,
        select_mode=decide_select_mode(options, multiple),
    )


@pytest.fixture
def make_question():
    return build_question


@pytest.fixture
def single_questions() -> list[Question]:
    # Correct options: 12, 21, 33
    return [
        build_question(1, False, True, False),
        build_question(2, True, False, False),
        build_question(3, False, False, True),
    ]


@pytest.fixture
def mixed_questions() -> list[Question]:
    # Question 2 is multi-select with correct options 21 and 23
    return [
        build_question(1, False, True, False),
        build_question(2, True, False, True),
    ]


@pytest.fixture
def correct_single_selections() -> dict[int, SingleSelection]:
    return {1: SingleSelection(12), 2: SingleSelection(21), 3: SingleSelection(33)}


@pytest.fixture
def participant() -> Participant:
    return Participant(first_name="Ada", last_name="Lovelace")


@pytest.fixture
def quiz_info() -> QuizInfo:
    return QuizInfo(id=7, title="Arithmetic", access_code="ABC123", passing_score=50.0)


def multi(*option_ids: int) -> MultiSelection:
    return MultiSelection(frozenset(option_ids))
