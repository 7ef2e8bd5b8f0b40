from __future__ import annotations

from quiz_client.core.markdown_math_renderer import MarkdownMathRenderer
from quiz_client.core.models import AnswerDetail, ReconciledResult, ResultSource
from quiz_client.ui.question_renderer import render_question_with_options
from quiz_client.ui.result_renderer import format_score_line, render_result_details


def _result(details=(), **overrides) -> ReconciledResult:
    values = dict(score=1, total_questions=2, percentage=50.0, details=details, source=ResultSource.AUTHORITY)
    values.update(overrides)
    return ReconciledResult(**values)


def test_fragment_renders_markdown_and_escapes_raw_html():
    renderer = MarkdownMathRenderer()

    html = renderer.render_fragment("**bold** <script>alert(1)</script>")

    assert "<strong>bold</strong>" in html
    assert "<script>" not in html


def test_empty_fragment_has_placeholder():
    assert "No content provided" in MarkdownMathRenderer().render_fragment("   ")


def test_question_document_lists_lettered_options_and_marks_selection(single_questions):
    question = single_questions[0]

    html = render_question_with_options(question, {12}, position=1, total=3, font_size=18)

    assert "Question 1 of 3" in html
    assert "<strong>A.</strong> Q1 option 1" in html
    assert '<p class="option selected"><strong>B.</strong>' in html
    assert "font-size: 18pt" in html
    assert "mathjax" in html.lower()


def test_result_document_shows_score_and_verdicts():
    details = (
        AnswerDetail(1, "What is $1+1$?", ("2",), ("2",), True),
        AnswerDetail(2, "Pick evens", ("2",), ("2", "4"), False),
    )

    html = render_result_details(_result(details))

    assert format_score_line(_result(details)) == "1/2 correct (50%)"
    assert "1/2 correct (50%)" in html
    assert 'class="detail correct"' in html
    assert 'class="detail incorrect"' in html
    assert "Correct answer: 2, 4" in html


def test_result_document_without_breakdown():
    html = render_result_details(_result(score=0, total_questions=0, percentage=0.0))

    assert "No per-question breakdown" in html
