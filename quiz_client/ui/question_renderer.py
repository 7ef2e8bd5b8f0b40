"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from collections.abc import Collection

from quiz_client.core.markdown_math_renderer import renderer
from quiz_client.core.models import Question
from quiz_client.styling.styles import Styles


def option_letter(index: int) -> str:
    return chr(ord("A") + index)


def render_question_with_options(
    question: Question,
    selected_ids: Collection[int] = (),
    *,
    position: int | None = None,
    total: int | None = None,
    font_size: int = 14,
) -> str:
    """Render a quiz question with its options as HTML.

    Args:
        question: The question to show (text supports Markdown and LaTeX)
        selected_ids: Option ids currently chosen, shown in bold
        position: 1-based position shown in the heading, if given
        total: Number of questions in the quiz
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    parts: list[str] = []
    if position is not None and total is not None:
        parts.append(f"<h3>Question {position} of {total}</h3>")
    parts.append(renderer.render_fragment(question.text))
    parts.append('<div class="options">')
    for idx, option in enumerate(question.options):
        css = "option selected" if option.id in selected_ids else "option"
        parts.append(
            f'<p class="{css}"><strong>{option_letter(idx)}.</strong> {renderer.render_inline(option.text)}</p>'
        )
    parts.append("</div>")
    return renderer.wrap_with_mathjax(
        "\n".join(parts),
        title=f"Question {position}" if position is not None else "Question",
        font_size=font_size,
        extra_css=Styles.get_result_css(),
    )
