"""Qt main window implementing the join, attempt and result modes."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quiz_client.api.quiz_api_client import QuizApiClient, QuizApiError, QuizLoadError
from quiz_client.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION, HELP_TEXT
from quiz_client.constants.ui_constants import (
    DEFAULT_QUIZ_FONT_SIZE,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    WINDOW_TITLE,
)
from quiz_client.core.attempt_loader import build_participant, start_online_attempt, start_practice_attempt
from quiz_client.core.attempt_manager import AttemptState, QuizAttempt
from quiz_client.core.errors import (
    AttemptStateError,
    IncompleteAttemptError,
    NoContentError,
    SubmissionError,
)
from quiz_client.core.models import Credential, ReconciledResult
from quiz_client.core.quiz_importer import ImportedQuiz, QuizImportError, load_quiz_from_file
from quiz_client.styling.color_palette import Theme
from quiz_client.styling.styles import Styles
from quiz_client.ui.async_runner import AsyncRunner
from quiz_client.ui.components.attempt_panel import AttemptPanel
from quiz_client.ui.components.join_panel import JoinPanel
from quiz_client.ui.components.result_panel import ResultPanel
from quiz_client.ui.dialog_helpers import confirm_leave_attempt, show_error, show_info
from quiz_client.ui.settings_dialog import SettingsDialog

logger = logging.getLogger(__name__)


class ParticipantMode(Enum):
    """High-level UI mode for the participant window."""

    JOIN = auto()
    ATTEMPT = auto()
    RESULT = auto()


def describe_load_error(exc: Exception) -> str:
    """Message shown on the join screen when an attempt cannot start."""
    if isinstance(exc, QuizApiError):
        if exc.is_unauthorized:
            return "You are not allowed to take this quiz. Please sign in again."
        if exc.is_connection_problem:
            return "Could not reach the quiz server. Check your connection and try again."
        return str(exc)
    if isinstance(exc, NoContentError):
        return str(exc)
    logger.exception("Unexpected error while loading the quiz", exc_info=exc)
    return "Something went wrong while loading the quiz."


class ParticipantMainWindow(QMainWindow):
    """Main Qt window orchestrating the three participant modes."""

    def __init__(
        self,
        api: QuizApiClient,
        credential: Credential | None = None,
        practice_file: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(960, 720)

        self.api = api
        self.credential = credential
        self.attempt: QuizAttempt | None = None
        self._practice_quiz: ImportedQuiz | None = None
        self._runner = AsyncRunner(self)

        self._mode = ParticipantMode.JOIN
        self._ui_font_size: int = 10
        self._quiz_font_size: int = DEFAULT_QUIZ_FONT_SIZE
        self._theme = Theme.LIGHT

        self._build_ui()
        self._apply_styles()
        if practice_file is not None:
            self._auto_load_practice_quiz(practice_file)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_header_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.join_panel = JoinPanel(
            on_join=self._handle_join,
            on_practice=self._handle_practice,
            parent=self,
        )
        self.attempt_panel = AttemptPanel(
            on_finish=self._handle_finish,
            on_retry=self._handle_retry,
            on_leave=self._handle_leave,
            parent=self,
        )
        self.result_panel = ResultPanel(on_done=self._handle_done, parent=self)

        self.mode_stack.addWidget(self.join_panel)
        self.mode_stack.addWidget(self.attempt_panel)
        self.mode_stack.addWidget(self.result_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(ParticipantMode.JOIN)

    def _build_header_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: ParticipantMode) -> None:
        self._mode = mode
        index_map = {
            ParticipantMode.JOIN: 0,
            ParticipantMode.ATTEMPT: 1,
            ParticipantMode.RESULT: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    # --- Join ---

    def _handle_join(self, first_name: str, last_name: str, access_code: str) -> None:
        if self._runner.busy:
            return
        try:
            participant = build_participant(first_name, last_name)
        except ValueError as exc:
            self.join_panel.set_status(str(exc))
            return
        if not access_code.strip():
            self.join_panel.set_status("Please enter the quiz code.")
            return

        self.join_panel.set_busy(True)
        self._runner.run(
            lambda: start_online_attempt(self.api, access_code, participant, self.credential),
            self._on_attempt_loaded,
            self._on_attempt_load_failed,
        )

    def _handle_practice(self, first_name: str, last_name: str) -> None:
        try:
            participant = build_participant(first_name, last_name)
        except ValueError as exc:
            self.join_panel.set_status(str(exc))
            return

        imported = self._practice_quiz
        if imported is None:
            file_path, _ = QFileDialog.getOpenFileName(
                self,
                IMPORT_DIALOG_TITLE,
                str(Path.home()),
                IMPORT_FILE_FILTER,
            )
            if not file_path:
                return
            try:
                imported = load_quiz_from_file(Path(file_path))
            except QuizImportError as exc:
                show_error(self, "Import failed", str(exc))
                return

        try:
            attempt = start_practice_attempt(imported, participant)
        except (QuizLoadError, NoContentError) as exc:
            show_error(self, "Quiz rejected", str(exc))
            return
        self._on_attempt_loaded(attempt)

    def _on_attempt_loaded(self, attempt: QuizAttempt) -> None:
        self.join_panel.set_busy(False)
        self.attempt = attempt
        self.attempt_panel.show_attempt(attempt)
        self._set_mode(ParticipantMode.ATTEMPT)

    def _on_attempt_load_failed(self, exc: Exception) -> None:
        self.join_panel.set_busy(False)
        self.join_panel.set_status(describe_load_error(exc))
        self._set_mode(ParticipantMode.JOIN)

    def _auto_load_practice_quiz(self, practice_file: Path) -> None:
        try:
            self._practice_quiz = load_quiz_from_file(practice_file)
        except QuizImportError as exc:
            logger.warning("Practice quiz %s not loaded: %s", practice_file, exc)
            return
        self.join_panel.set_practice_quiz_title(self._practice_quiz.title)

    # --- Attempt ---

    def _handle_finish(self) -> None:
        attempt = self.attempt
        if attempt is None or self._runner.busy:
            return
        self.attempt_panel.set_submitting(True)
        self._runner.run(attempt.finish, self._on_submitted, self._on_submit_failed)

    def _handle_retry(self) -> None:
        attempt = self.attempt
        if attempt is None or self._runner.busy:
            return
        self.attempt_panel.set_submitting(True)
        self._runner.run(attempt.retry_submission, self._on_submitted, self._on_submit_failed)

    def _on_submitted(self, result: ReconciledResult) -> None:
        attempt = self.attempt
        self.attempt_panel.set_submitting(False)
        if attempt is None:
            return
        self.result_panel.show_result(attempt.quiz.title, result)
        self.attempt_panel.clear_attempt()
        self._set_mode(ParticipantMode.RESULT)

    def _on_submit_failed(self, exc: Exception) -> None:
        if isinstance(exc, IncompleteAttemptError):
            self.attempt_panel.set_submitting(False)
            self.attempt_panel.set_status(str(exc), ok=None)
        elif isinstance(exc, SubmissionError):
            self.attempt_panel.show_submission_failed(str(exc))
        elif isinstance(exc, AttemptStateError):
            self.attempt_panel.set_submitting(False)
            self.attempt_panel.set_status(str(exc))
        else:
            logger.exception("Unexpected error while submitting", exc_info=exc)
            self.attempt_panel.show_submission_failed("unexpected error")

    def _handle_leave(self) -> None:
        if self._confirm_discard():
            self._return_to_join()

    def _confirm_discard(self) -> bool:
        attempt = self.attempt
        if attempt is None or attempt.state is not AttemptState.IN_PROGRESS:
            return True
        if not confirm_leave_attempt(self, attempt.answered_count(), attempt.total):
            return False
        attempt.discard()
        return True

    # --- Result ---

    def _handle_done(self) -> None:
        self._return_to_join()

    def _return_to_join(self) -> None:
        self.attempt = None
        self.attempt_panel.clear_attempt()
        self.join_panel.reset_code()
        self._set_mode(ParticipantMode.JOIN)

    # --- Window chrome ---

    def _handle_about(self) -> None:
        show_info(self, f"About {APP_NAME}", f"{APP_NAME} v{APP_VERSION}\n\n{APP_ABOUT_TEXT}")

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._quiz_font_size,
            self._theme is Theme.DARK,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._quiz_font_size = dialog.get_quiz_font_size()
            self._theme = Theme.DARK if dialog.get_dark_theme() else Theme.LIGHT
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style(self._theme))

        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in (self.about_button, self.help_button, self.settings_button):
            button.setStyleSheet(ui_style)

        self.join_panel.apply_font_size(self._ui_font_size)
        self.attempt_panel.set_quiz_font_size(self._quiz_font_size)
        self.result_panel.set_quiz_font_size(self._quiz_font_size)
        self.result_panel.set_theme(self._theme)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        if self._mode is ParticipantMode.ATTEMPT and not self._confirm_discard():
            event.ignore()
            return
        event.accept()
