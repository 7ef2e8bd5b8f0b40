"""Component presenting one question at a time during an attempt."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_client.constants.ui_constants import (
    DEFAULT_QUIZ_FONT_SIZE,
    FINISH_BUTTON,
    FINISH_BUTTON_BUSY,
    LEAVE_BUTTON,
    MULTIPLE_HINT,
    NEXT_BUTTON,
    PREVIOUS_BUTTON,
    RETRY_BUTTON,
    SINGLE_HINT,
    UNANSWERED_MESSAGE,
)
from quiz_client.core.attempt_manager import QuizAttempt
from quiz_client.styling.styles import Styles
from quiz_client.ui.question_renderer import option_letter, render_question_with_options


class AttemptPanel(QWidget):
    """UI component for answering the questions of a loaded attempt."""

    def __init__(
        self,
        on_finish: Callable[[], None],
        on_retry: Callable[[], None],
        on_leave: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_finish = on_finish
        self.on_retry = on_retry
        self.on_leave = on_leave

        self.attempt: QuizAttempt | None = None
        self._quiz_font_size: int = DEFAULT_QUIZ_FONT_SIZE
        self._submitting = False
        self.option_buttons: list[QPushButton] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label, stretch=1)
        self.leave_button = QPushButton(LEAVE_BUTTON, self)
        self.leave_button.clicked.connect(lambda: self.on_leave())
        header_row.addWidget(self.leave_button)
        layout.addLayout(header_row)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(True)
        layout.addWidget(self.progress_bar)

        self.hint_label = QLabel("", self)
        layout.addWidget(self.hint_label)

        self.question_view = QWebEngineView(self)
        layout.addWidget(self.question_view, stretch=1)

        self.options_row = QHBoxLayout()
        layout.addLayout(self.options_row)

        self.status_label = QLabel("", self)
        self.status_label.setWordWrap(True)
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)

        nav_row = QHBoxLayout()
        self.previous_button = QPushButton(PREVIOUS_BUTTON, self)
        self.previous_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.previous_button)
        nav_row.addStretch()

        self.retry_button = QPushButton(RETRY_BUTTON, self)
        self.retry_button.setVisible(False)
        self.retry_button.clicked.connect(self._handle_retry)
        nav_row.addWidget(self.retry_button)

        self.next_button = QPushButton(NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)

        self.finish_button = QPushButton(FINISH_BUTTON, self)
        self.finish_button.clicked.connect(self._handle_finish)
        nav_row.addWidget(self.finish_button)
        layout.addLayout(nav_row)

    # --- Attempt lifecycle ---

    def show_attempt(self, attempt: QuizAttempt) -> None:
        self.attempt = attempt
        self._submitting = False
        self.title_label.setText(attempt.quiz.title)
        self.retry_button.setVisible(False)
        self.clear_status()
        self.refresh()

    def clear_attempt(self) -> None:
        self.attempt = None
        self._clear_option_buttons()
        self.question_view.setHtml("")

    def refresh(self) -> None:
        attempt = self.attempt
        if attempt is None:
            return
        question = attempt.current_question
        selected = {option.id for option in question.options if attempt.is_selected(option.id)}

        self.progress_bar.setValue(round(attempt.progress))
        self.progress_bar.setFormat(f"Question {attempt.position} of {attempt.total}")
        self.hint_label.setText(MULTIPLE_HINT if question.is_multiple else SINGLE_HINT)
        self.question_view.setHtml(
            render_question_with_options(
                question,
                selected,
                position=attempt.position,
                total=attempt.total,
                font_size=self._quiz_font_size,
            )
        )
        self._rebuild_option_buttons(selected)
        self._update_navigation()

    def _rebuild_option_buttons(self, selected: set[int]) -> None:
        self._clear_option_buttons()
        question = self.attempt.current_question
        locked = self.attempt.is_completed() or self._submitting
        for idx, option in enumerate(question.options):
            button = QPushButton(option_letter(idx), self)
            button.setCheckable(True)
            button.setChecked(option.id in selected)
            button.setEnabled(not locked)
            button.setStyleSheet(f"font-size: {self._quiz_font_size}pt; padding: 8px 18px;")
            button.clicked.connect(lambda _checked=False, option_id=option.id: self._handle_choose(option_id))
            self.options_row.addWidget(button)
            self.option_buttons.append(button)

    def _clear_option_buttons(self) -> None:
        for button in self.option_buttons:
            self.options_row.removeWidget(button)
            button.deleteLater()
        self.option_buttons = []

    def _update_navigation(self) -> None:
        attempt = self.attempt
        completed = attempt.is_completed()
        is_last = attempt.is_last()
        self.previous_button.setEnabled(not attempt.is_first() and not completed and not self._submitting)
        self.next_button.setVisible(not is_last)
        self.next_button.setEnabled(not completed)
        self.finish_button.setVisible(is_last)
        self.finish_button.setEnabled(not self._submitting and not completed)
        self.finish_button.setText(FINISH_BUTTON_BUSY if self._submitting else FINISH_BUTTON)

    # --- Handlers ---

    def _handle_choose(self, option_id: int) -> None:
        if self.attempt is None:
            return
        self.attempt.choose(option_id)
        self.clear_status()
        self.refresh()

    def _handle_next(self) -> None:
        if self.attempt is None:
            return
        if not self.attempt.next():
            self.set_status(UNANSWERED_MESSAGE, ok=None)
            return
        self.clear_status()
        self.refresh()

    def _handle_previous(self) -> None:
        if self.attempt is not None and self.attempt.previous():
            self.clear_status()
            self.refresh()

    def _handle_finish(self) -> None:
        if self.attempt is not None:
            self.on_finish()

    def _handle_retry(self) -> None:
        if self.attempt is not None:
            self.on_retry()

    # --- Feedback from the window ---

    def set_submitting(self, submitting: bool) -> None:
        self._submitting = submitting
        if submitting:
            self.retry_button.setVisible(False)
            self.clear_status()
        self.refresh()

    def show_submission_failed(self, message: str) -> None:
        self._submitting = False
        self.set_status(f"Your answers could not be submitted: {message}", ok=False)
        self.refresh()
        self.retry_button.setVisible(True)
        self.retry_button.setEnabled(True)

    def set_status(self, message: str, ok: bool | None = False) -> None:
        self.status_label.setText(message)
        self.status_label.setStyleSheet(Styles.get_status_style(ok))

    def clear_status(self) -> None:
        self.status_label.setText("")

    def set_quiz_font_size(self, size: int) -> None:
        self._quiz_font_size = size
        self.refresh()
