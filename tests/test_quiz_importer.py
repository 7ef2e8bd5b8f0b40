from __future__ import annotations

from pathlib import Path

import pytest

from quiz_client.core.models import SelectMode
from quiz_client.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_text

SAMPLE = """\
TITLE: Angles

Q: What is $30^o$ in radians?
A: \\frac{\\pi}{2}
B: \\frac{\\pi}{6}
C: \\frac{\\pi}{3}
CORRECT: B

---
Q: Which angles are acute?
Pick all that apply.
A: $45^o$
B: $120^o$
C: $10^o$
D: $90^o$
CORRECT: A, c

Q: Warm-up, not graded
A: yes
B: no
"""


def test_parses_title_questions_and_arity():
    quiz = parse_quiz_text(SAMPLE)

    assert quiz.title == "Angles"
    assert [q.id for q in quiz.questions] == [1, 2, 3]
    first, second, third = quiz.questions

    assert first.select_mode is SelectMode.SINGLE
    assert [o.is_correct for o in first.options] == [False, True, False]

    assert second.text == "Which angles are acute?\nPick all that apply."
    assert second.select_mode is SelectMode.MULTIPLE
    assert [o.text for o in second.correct_options()] == ["$45^o$", "$10^o$"]

    assert third.select_mode is SelectMode.SINGLE
    assert all(o.is_correct is None for o in third.options)


def test_option_ids_are_sequential_across_the_quiz():
    quiz = parse_quiz_text(SAMPLE)

    ids = [o.id for q in quiz.questions for o in q.options]
    assert ids == list(range(1, len(ids) + 1))
    assert [o.position for o in quiz.questions[1].options] == [1, 2, 3, 4]


def test_option_text_may_continue_on_following_lines():
    quiz = parse_quiz_text("Q: Pick one\nA: first line\nsecond line\nB: other\nCORRECT: A")

    assert quiz.questions[0].options[0].text == "first line\nsecond line"


def test_title_defaults_to_file_stem(tmp_path: Path):
    quiz_file = tmp_path / "week3_practice.txt"
    quiz_file.write_text("Q: 1 + 1?\nA: 2\nB: 3\nCORRECT: A\n", encoding="utf-8")

    quiz = load_quiz_from_file(quiz_file)

    assert quiz.title == "week3_practice"
    assert quiz.source_path == quiz_file
    assert len(quiz.questions) == 1


def test_missing_file_raises_import_error(tmp_path: Path):
    with pytest.raises(QuizImportError):
        load_quiz_from_file(tmp_path / "missing.txt")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("", "did not contain any questions"),
        ("TITLE: Only a title", "did not contain any questions"),
        ("Q: Lonely\nA: only option", "at least two options"),
        ("Q: Gap\nA: one\nC: three", "consecutive letters"),
        ("Q: Dup\nA: one\nA: again\nB: two", "defined twice"),
        ("Q: Bad key\nA: one\nB: two\nCORRECT: C", "undefined option"),
        ("Q: Bad key\nA: one\nB: two\nCORRECT: Z", "letters A-H"),
        ("Q: Empty key\nA: one\nB: two\nCORRECT:", "at least one option"),
        ("A: one\nB: two", "Question text missing"),
        ("stray text\nQ: x\nA: 1\nB: 2", "outside of a known section"),
        ("Q: first\nA: 1\nB: 2\n\nTITLE: late\nQ: second\nA: 1\nB: 2", "first block"),
    ],
)
def test_malformed_files_are_rejected(text, message):
    with pytest.raises(QuizImportError, match=message):
        parse_quiz_text(text)


def test_errors_name_the_failing_block():
    with pytest.raises(QuizImportError, match="Block 2"):
        parse_quiz_text("Q: fine\nA: 1\nB: 2\n\nQ: broken\nA: 1")
