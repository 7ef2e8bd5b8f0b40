"""Application entry point for the quiz participant client."""

from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from quiz_client.api.quiz_api_client import QuizApiClient
from quiz_client.core.config import settings
from quiz_client.core.models import Credential
from quiz_client.ui.participant_main_window import ParticipantMainWindow
from quiz_client.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, build the API client, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting quiz participant client against %s", settings.api_base_url)

    credential = Credential(settings.api_token) if settings.api_token else None
    practice_file = Path(settings.offline_quiz_file) if settings.offline_quiz_file else None

    app = QApplication(sys.argv)
    window = ParticipantMainWindow(
        api=QuizApiClient(settings.api_base_url),
        credential=credential,
        practice_file=practice_file,
    )
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
