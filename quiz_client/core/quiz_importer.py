"""Utilities for importing practice quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    TITLE: Quiz title (optional, first block only)
    Q: Question text (supports markdown + LaTeX). Additional lines until the
       next marker are treated as part of the question.
    A: First option text
    B: Second option text
    ...                (between two and eight options, A-H)
    CORRECT: B         (optional; several letters such as "A, C" make the
                        question multi-select, omit to withhold grading)

Example:

    TITLE: Arithmetic warm-up

    Q: What is $2 + 2$?
    A: 3
    B: 4
    C: 5
    CORRECT: B

    Q: Which numbers are even?
    A: 2
    B: 3
    C: 8
    CORRECT: A, C

Questions and options receive sequential ids in file order, so a practice
quiz behaves exactly like one loaded from the server.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from quiz_client.core.errors import QuizClientError
from quiz_client.core.models import AnswerOption, Question
from quiz_client.core.services.question_set import decide_select_mode

logger = logging.getLogger(__name__)


class QuizImportError(QuizClientError):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    title: str
    questions: list[Question]


_OPTION_ORDER = ["A", "B", "C", "D", "E", "F", "G", "H"]
_MIN_OPTIONS = 2


@dataclass(slots=True)
class _ParsedBlock:
    title: str | None
    question_text: str
    options: list[str]
    correct_letters: list[str] | None


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuizImportError(f"Could not read quiz file: {exc}") from exc
    quiz = parse_quiz_text(text, source_path=file_path)
    logger.info("Imported %d questions from %s", len(quiz.questions), file_path)
    return quiz


def parse_quiz_text(text: str, source_path: Path | None = None) -> ImportedQuiz:
    source_path = source_path or Path("<memory>")
    parsed_blocks: list[_ParsedBlock] = []
    title: str | None = None
    for number, block in enumerate(_split_blocks(text), start=1):
        try:
            parsed = _parse_block(block, allow_title=number == 1)
        except QuizImportError as exc:
            raise QuizImportError(f"Block {number}: {exc}") from exc
        if parsed.title is not None:
            title = parsed.title
        if parsed.question_text:
            parsed_blocks.append(parsed)

    if not parsed_blocks:
        raise QuizImportError("Quiz file did not contain any questions.")

    questions: list[Question] = []
    next_option_id = 1
    for position, parsed in enumerate(parsed_blocks, start=1):
        question = _build_question(position, next_option_id, parsed)
        next_option_id += len(question.options)
        questions.append(question)

    return ImportedQuiz(
        source_path=source_path,
        title=title or source_path.stem,
        questions=questions,
    )


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _parse_block(block: str, *, allow_title: bool) -> _ParsedBlock:
    title: str | None = None
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letters: list[str] | None = None
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("TITLE:"):
            if not allow_title:
                raise QuizImportError("TITLE is only allowed in the first block.")
            title = line.split(":", 1)[1].strip()
            if not title:
                raise QuizImportError("TITLE cannot be empty.")
            current_section = None
            continue

        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_letters = _parse_correct(line.split(":", 1)[1])
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            if letter in options:
                raise QuizImportError(f"Option {letter} is defined twice.")
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        if title is not None and not options and correct_letters is None:
            # Title-only header block
            return _ParsedBlock(title=title, question_text="", options=[], correct_letters=None)
        raise QuizImportError("Question text missing (Q: ...)")

    expected = _OPTION_ORDER[: len(options)]
    if sorted(options) != expected:
        raise QuizImportError(f"Options must be consecutive letters starting at A (got {', '.join(sorted(options))}).")
    if len(options) < _MIN_OPTIONS:
        raise QuizImportError("Each question needs at least two options.")

    option_list = [options[letter].strip() for letter in expected]
    if any(not option for option in option_list):
        raise QuizImportError("Option text cannot be empty.")

    if correct_letters is not None:
        unknown = [letter for letter in correct_letters if letter not in expected]
        if unknown:
            raise QuizImportError(f"CORRECT refers to undefined option(s): {', '.join(unknown)}.")

    return _ParsedBlock(
        title=title,
        question_text=question_text,
        options=option_list,
        correct_letters=correct_letters,
    )


def _parse_correct(raw_value: str) -> list[str]:
    letters = [part.strip().upper() for part in raw_value.replace(";", ",").split(",")]
    letters = [letter for letter in letters if letter]
    if not letters:
        raise QuizImportError("CORRECT must name at least one option letter.")
    if any(letter not in _OPTION_ORDER for letter in letters):
        raise QuizImportError("CORRECT must use option letters A-H.")
    if len(set(letters)) != len(letters):
        raise QuizImportError("CORRECT lists the same option twice.")
    return letters


def _build_question(position: int, first_option_id: int, parsed: _ParsedBlock) -> Question:
    options = tuple(
        AnswerOption(
            id=first_option_id + index,
            text=text,
            position=index + 1,
            is_correct=None if parsed.correct_letters is None else _OPTION_ORDER[index] in parsed.correct_letters,
        )
        for index, text in enumerate(parsed.options)
    )
    return Question(
        id=position,
        position=position,
        text=parsed.question_text,
        options=options,
        select_mode=decide_select_mode(options),
    )
