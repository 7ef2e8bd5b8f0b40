"""HTML rendering of a reconciled quiz result."""

from __future__ import annotations

from html import escape

from quiz_client.core.markdown_math_renderer import renderer
from quiz_client.core.models import AnswerDetail, ReconciledResult
from quiz_client.styling.color_palette import Theme
from quiz_client.styling.styles import Styles


def format_score_line(result: ReconciledResult) -> str:
    return f"{result.score}/{result.total_questions} correct ({result.percentage:.0f}%)"


def render_result_details(
    result: ReconciledResult,
    *,
    font_size: int = 14,
    theme: Theme = Theme.LIGHT,
) -> str:
    """Render the per-question answer breakdown as a full HTML document."""
    if not result.details:
        body = "<p><em>No per-question breakdown is available for this attempt.</em></p>"
    else:
        body = "\n".join(_render_detail(number, detail) for number, detail in enumerate(result.details, start=1))
    return renderer.wrap_with_mathjax(
        f"<h2>{escape(format_score_line(result))}</h2>\n{body}",
        title="Result",
        font_size=font_size,
        extra_css=Styles.get_result_css(theme),
    )


def _render_detail(number: int, detail: AnswerDetail) -> str:
    verdict = "Correct" if detail.is_correct else "Incorrect"
    css = "correct" if detail.is_correct else "incorrect"
    chosen = _answer_list(detail.participant_answers) or "<em>No answer</em>"
    correct = _answer_list(detail.correct_answers) or "<em>Not available</em>"
    return (
        f'<div class="detail {css}">'
        f'<p class="verdict">{number}. {verdict}</p>'
        f"{renderer.render_fragment(detail.question_text)}"
        f'<p class="answers">Your answer: {chosen}</p>'
        f'<p class="answers">Correct answer: {correct}</p>'
        "</div>"
    )


def _answer_list(answers: tuple[str, ...]) -> str:
    return ", ".join(renderer.render_inline(answer) for answer in answers if answer.strip())
