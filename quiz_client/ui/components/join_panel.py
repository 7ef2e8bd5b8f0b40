"""Component where the participant enters their name and the quiz code."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quiz_client.constants.ui_constants import (
    ACCESS_CODE_PLACEHOLDER,
    FIRST_NAME_PLACEHOLDER,
    JOIN_BUTTON,
    JOIN_BUTTON_BUSY,
    JOIN_TITLE,
    LAST_NAME_PLACEHOLDER,
    PRACTICE_BUTTON,
)
from quiz_client.styling.styles import Styles


class JoinPanel(QWidget):
    """UI component for joining an online quiz or starting a practice run."""

    def __init__(
        self,
        on_join: Callable[[str, str, str], None],
        on_practice: Callable[[str, str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_join = on_join
        self.on_practice = on_practice
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        title = QLabel(JOIN_TITLE, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        form_group = QGroupBox(self)
        form = QFormLayout()
        form_group.setLayout(form)

        self.first_name_input = QLineEdit(self)
        self.first_name_input.setPlaceholderText(FIRST_NAME_PLACEHOLDER)
        self.first_name_input.setMaxLength(50)
        form.addRow("First name:", self.first_name_input)

        self.last_name_input = QLineEdit(self)
        self.last_name_input.setPlaceholderText(LAST_NAME_PLACEHOLDER)
        self.last_name_input.setMaxLength(50)
        form.addRow("Last name:", self.last_name_input)

        self.code_input = QLineEdit(self)
        self.code_input.setPlaceholderText(ACCESS_CODE_PLACEHOLDER)
        self.code_input.setMaxLength(12)
        self.code_input.returnPressed.connect(self._handle_join)
        form.addRow("Quiz code:", self.code_input)

        layout.addWidget(form_group)

        button_row = QHBoxLayout()
        self.practice_button = QPushButton(PRACTICE_BUTTON, self)
        self.practice_button.clicked.connect(self._handle_practice)
        button_row.addWidget(self.practice_button)
        button_row.addStretch()
        self.join_button = QPushButton(JOIN_BUTTON, self)
        self.join_button.setDefault(True)
        self.join_button.clicked.connect(self._handle_join)
        button_row.addWidget(self.join_button)
        layout.addLayout(button_row)

        self.status_label = QLabel("", self)
        self.status_label.setWordWrap(True)
        self.status_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.status_label)

        self.practice_label = QLabel("", self)
        self.practice_label.setAlignment(Qt.AlignCenter)
        self.practice_label.setVisible(False)
        layout.addWidget(self.practice_label)

        layout.addStretch()

    def _handle_join(self) -> None:
        self.on_join(
            self.first_name_input.text(),
            self.last_name_input.text(),
            self.code_input.text(),
        )

    def _handle_practice(self) -> None:
        self.on_practice(self.first_name_input.text(), self.last_name_input.text())

    def set_busy(self, busy: bool) -> None:
        self.join_button.setEnabled(not busy)
        self.practice_button.setEnabled(not busy)
        self.join_button.setText(JOIN_BUTTON_BUSY if busy else JOIN_BUTTON)
        if busy:
            self.clear_status()

    def set_status(self, message: str, ok: bool | None = False) -> None:
        self.status_label.setText(message)
        self.status_label.setStyleSheet(Styles.get_status_style(ok))

    def clear_status(self) -> None:
        self.status_label.setText("")

    def set_practice_quiz_title(self, title: str | None) -> None:
        self.practice_label.setVisible(bool(title))
        self.practice_label.setText(f"Practice quiz ready: {title}" if title else "")

    def reset_code(self) -> None:
        self.code_input.clear()
        self.code_input.setFocus()

    def apply_font_size(self, size: int) -> None:
        style = f"font-size: {size}pt;"
        for widget in (
            self.first_name_input,
            self.last_name_input,
            self.code_input,
            self.join_button,
            self.practice_button,
            self.status_label,
        ):
            widget.setStyleSheet(style)
