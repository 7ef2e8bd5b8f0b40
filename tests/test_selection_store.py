from __future__ import annotations

import pytest

from quiz_client.core.models import MultiSelection, SingleSelection
from quiz_client.core.services.selection_store import AnswerSelectionStore


def test_select_records_and_replaces_single_choice(single_questions):
    store = AnswerSelectionStore(single_questions)

    store.select(1, 11)
    store.select(1, 12)

    assert store.selection_for(1) == SingleSelection(12)
    assert store.is_selected(1, 12)
    assert not store.is_selected(1, 11)
    assert store.answered_count() == 1


def test_toggle_adds_and_removes_multi_choices(mixed_questions):
    store = AnswerSelectionStore(mixed_questions)

    store.toggle(2, 21)
    store.toggle(2, 23)
    assert store.selection_for(2) == MultiSelection(frozenset({21, 23}))

    store.toggle(2, 21)
    assert store.selection_for(2) == MultiSelection(frozenset({23}))


def test_removing_last_multi_choice_leaves_question_unanswered(mixed_questions):
    store = AnswerSelectionStore(mixed_questions)

    store.toggle(2, 22)
    store.toggle(2, 22)

    assert store.selection_for(2) is None
    assert not store.is_answered(2)


def test_input_with_wrong_arity_is_ignored(mixed_questions):
    store = AnswerSelectionStore(mixed_questions)

    store.select(2, 21)
    store.toggle(1, 12)

    assert store.snapshot() == {}


@pytest.mark.parametrize(("question_id", "option_id"), [(99, 11), (1, 99), (1, 21)])
def test_unknown_question_or_option_is_ignored(single_questions, question_id, option_id):
    store = AnswerSelectionStore(single_questions)

    store.select(question_id, option_id)

    assert store.answered_count() == 0


def test_snapshot_is_read_only_copy(single_questions):
    store = AnswerSelectionStore(single_questions)
    store.select(1, 11)

    snapshot = store.snapshot()
    store.select(2, 21)

    assert dict(snapshot) == {1: SingleSelection(11)}
    with pytest.raises(TypeError):
        snapshot[3] = SingleSelection(31)  # type: ignore[index]


def test_completion_and_unanswered_questions(single_questions):
    store = AnswerSelectionStore(single_questions)
    store.select(2, 22)

    assert not store.is_complete()
    assert [q.id for q in store.unanswered_questions()] == [1, 3]

    store.select(1, 11)
    store.select(3, 31)
    assert store.is_complete()

    store.clear(3)
    assert [q.id for q in store.unanswered_questions()] == [3]


def test_payload_follows_question_order_and_sorts_multi_ids(make_question):
    questions = [
        make_question(5, True, False, position=2),
        make_question(4, True, True, False, position=1),
    ]
    store = AnswerSelectionStore(questions)
    store.select(5, 51)
    store.toggle(4, 43)
    store.toggle(4, 41)

    assert store.to_payload() == ((4, (41, 43)), (5, 51))
