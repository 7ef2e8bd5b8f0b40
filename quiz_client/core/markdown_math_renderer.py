"""Markdown + LaTeX rendering for question, option and result text.

The renderer converts source markup into HTML and relies on MathJax at
display time inside ``QWebEngineView``. Question text coming from the server
is rendered with raw HTML disabled, so authored markup cannot inject script.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (an answer option) without the wrapping paragraph."""

        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return "<em>(empty)</em>"
        return self._markdown.renderInline(sanitized)

    def wrap_with_mathjax(
        self,
        body_html: str,
        title: str = "Quiz",
        *,
        font_size: int = 14,
        extra_css: str = "",
    ) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{escape(title)}</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; color: #1f2433; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      {extra_css}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    <div class=\"question-html\">{body_html}</div>
  </body>
</html>"""


# Shared instance; rendering only reads the parser state.
renderer = MarkdownMathRenderer()
