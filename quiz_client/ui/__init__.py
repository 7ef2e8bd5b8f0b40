"""Qt UI components for the participant application.

Widgets live in submodules and are imported explicitly so that the HTML
renderers can be used without loading Qt.
"""

from .question_renderer import render_question_with_options
from .result_renderer import render_result_details

__all__ = [
    "render_question_with_options",
    "render_result_details",
]
