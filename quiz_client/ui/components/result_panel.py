"""Component showing the reconciled result of a submitted attempt."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from quiz_client.constants.ui_constants import (
    DEFAULT_QUIZ_FONT_SIZE,
    FAILED_MESSAGE,
    NEW_QUIZ_BUTTON,
    PASSED_MESSAGE,
    RESULT_TITLE,
)
from quiz_client.core.models import ReconciledResult, ResultSource
from quiz_client.styling.color_palette import Theme
from quiz_client.styling.styles import Styles
from quiz_client.ui.result_renderer import format_score_line, render_result_details


class ResultPanel(QWidget):
    """UI component for the score, pass/fail verdict and answer breakdown."""

    def __init__(self, on_done: Callable[[], None], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_done = on_done
        self.result: ReconciledResult | None = None
        self._quiz_font_size: int = DEFAULT_QUIZ_FONT_SIZE
        self._theme = Theme.LIGHT
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(RESULT_TITLE, self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        summary_row = QHBoxLayout()
        self.score_label = QLabel("", self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        summary_row.addWidget(self.score_label)
        summary_row.addStretch()
        self.verdict_label = QLabel("", self)
        self.verdict_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        summary_row.addWidget(self.verdict_label)
        layout.addLayout(summary_row)

        self.source_label = QLabel("", self)
        self.source_label.setWordWrap(True)
        layout.addWidget(self.source_label)

        self.details_view = QWebEngineView(self)
        layout.addWidget(self.details_view, stretch=1)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.done_button = QPushButton(NEW_QUIZ_BUTTON, self)
        self.done_button.clicked.connect(lambda: self.on_done())
        button_row.addWidget(self.done_button)
        layout.addLayout(button_row)

    def show_result(self, title: str, result: ReconciledResult) -> None:
        self.result = result
        self.title_label.setText(f"{title}: {RESULT_TITLE.lower()}")
        self.score_label.setText(format_score_line(result))

        passed = result.passed
        self.verdict_label.setVisible(passed is not None)
        if passed is not None:
            self.verdict_label.setText(
                f"{PASSED_MESSAGE if passed else FAILED_MESSAGE} (pass mark {result.passing_score:.0f}%)"
            )
            self.verdict_label.setStyleSheet(Styles.get_status_style(passed, self._theme))

        if result.source is ResultSource.LOCAL:
            self.source_label.setText("Graded on this device from the answer key shipped with the quiz.")
        else:
            self.source_label.setText("")
        self._render_details()

    def _render_details(self) -> None:
        if self.result is None:
            self.details_view.setHtml("")
            return
        self.details_view.setHtml(
            render_result_details(self.result, font_size=self._quiz_font_size, theme=self._theme)
        )

    def set_quiz_font_size(self, size: int) -> None:
        self._quiz_font_size = size
        self._render_details()

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self._render_details()
