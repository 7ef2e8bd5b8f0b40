"""Turns the questions, the participant's selections and whatever grading data
the authority returned into one reconciled result.

Priority order:

1. Per-question grading records from the authority are used verbatim.
2. Without them, every question is re-graded locally from the option
   correctness flags that came with the question set. Questions whose chosen
   or correct options cannot be resolved are left out of the breakdown.
3. Score numbers supplied by the authority always win over local counts;
   only the ones it left out are computed locally.

The functions here are pure: same inputs, same output, inputs untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from quiz_client.core.models import (
    AggregateOnlyGrading,
    AnswerDetail,
    AnswerOption,
    FullGrading,
    GradingAggregate,
    GradingRecord,
    GradingResponse,
    Question,
    ReconciledResult,
    ResultSource,
    Selection,
)

logger = logging.getLogger(__name__)


def reconcile(
    questions: Sequence[Question],
    selections: Mapping[int, Selection],
    grading: GradingResponse,
    passing_score: float | None = None,
) -> ReconciledResult:
    """Build the display-ready result of a submitted attempt."""
    ordered = sorted(questions, key=lambda q: q.position)

    if isinstance(grading, FullGrading) and grading.records:
        details = _details_from_records(ordered, grading.records)
        source = ResultSource.AUTHORITY
    else:
        if isinstance(grading, FullGrading):
            logger.debug("Grading response had an empty record list; regrading locally")
        details = _details_from_local_flags(ordered, selections)
        source = ResultSource.LOCAL

    aggregate = complete_aggregate(_supplied_aggregate(grading), details, len(ordered))

    return ReconciledResult(
        score=aggregate.score,
        total_questions=aggregate.total_questions,
        percentage=aggregate.percentage,
        details=details,
        source=source,
        passing_score=passing_score,
    )


def compute_aggregate(details: Sequence[AnswerDetail], total_questions: int) -> GradingAggregate:
    score = sum(1 for detail in details if detail.is_correct)
    return GradingAggregate(
        score=score,
        total_questions=total_questions,
        percentage=percentage_of(score, total_questions),
    )


def complete_aggregate(
    supplied: GradingAggregate | None,
    details: Sequence[AnswerDetail],
    question_count: int,
) -> GradingAggregate:
    """Keep every number the authority supplied and fill in the rest.

    A missing score is counted from the details, a missing total is the
    number of questions, and a missing percentage is derived from the
    resolved score and total.
    """
    computed = compute_aggregate(details, question_count)
    if supplied is None:
        return computed
    score = supplied.score if supplied.score is not None else computed.score
    total = supplied.total_questions if supplied.total_questions is not None else question_count
    percentage = supplied.percentage if supplied.percentage is not None else percentage_of(score, total)
    return GradingAggregate(score=score, total_questions=total, percentage=percentage)


def percentage_of(score: int, total_questions: int) -> float:
    if total_questions <= 0:
        return 0.0
    return score / total_questions * 100


def is_selection_correct(
    question: Question,
    chosen: Sequence[AnswerOption],
    correct: Sequence[AnswerOption],
) -> bool:
    """Two-step correctness policy shared by single- and multi-select questions.

    Step one trusts the flags declared on the chosen options when every chosen
    option carries one. Step two compares chosen and correct option ids.
    """
    declared = [option.is_correct for option in chosen]
    if chosen and all(flag is not None for flag in declared):
        if not question.is_multiple:
            return bool(declared[0])
        return all(declared) and len(chosen) == len(correct)
    return {option.id for option in chosen} == {option.id for option in correct}


def _supplied_aggregate(grading: GradingResponse) -> GradingAggregate | None:
    if isinstance(grading, (FullGrading, AggregateOnlyGrading)):
        return grading.aggregate
    return None


def _details_from_records(
    questions: Sequence[Question],
    records: Sequence[GradingRecord],
) -> tuple[AnswerDetail, ...]:
    by_id = {question.id: question for question in questions}
    position_of = {question.id: idx for idx, question in enumerate(questions)}

    seen: set[int] = set()
    known: list[tuple[int, AnswerDetail]] = []
    unknown: list[AnswerDetail] = []
    for record in records:
        if record.question_id in seen:
            logger.warning("Dropping duplicate grading record for question %s", record.question_id)
            continue
        seen.add(record.question_id)

        correct_texts = tuple(answer.text for answer in record.correct)
        question = by_id.get(record.question_id)
        if not correct_texts and question is not None:
            correct_texts = tuple(option.text for option in question.correct_options())
            logger.debug("Filled correct answer for question %s from local flags", record.question_id)

        detail = AnswerDetail(
            question_id=record.question_id,
            question_text=record.question_text or (question.text if question else ""),
            participant_answers=tuple(answer.text for answer in record.chosen),
            correct_answers=correct_texts,
            is_correct=record.is_correct,
        )
        if question is None:
            unknown.append(detail)
        else:
            known.append((position_of[record.question_id], detail))

    known.sort(key=lambda item: item[0])
    return tuple(detail for _, detail in known) + tuple(unknown)


def _details_from_local_flags(
    questions: Sequence[Question],
    selections: Mapping[int, Selection],
) -> tuple[AnswerDetail, ...]:
    details: list[AnswerDetail] = []
    for question in questions:
        selection = selections.get(question.id)
        if selection is None:
            continue

        chosen = [
            option
            for option in question.options
            if option.id in selection.option_ids
        ]
        correct = list(question.correct_options())
        if not chosen or not correct:
            logger.debug(
                "Omitting question %s from the breakdown (chosen=%d, correct=%d)",
                question.id,
                len(chosen),
                len(correct),
            )
            continue

        details.append(
            AnswerDetail(
                question_id=question.id,
                question_text=question.text,
                participant_answers=tuple(option.text for option in chosen),
                correct_answers=tuple(option.text for option in correct),
                is_correct=is_selection_correct(question, chosen, correct),
            )
        )
    return tuple(details)

