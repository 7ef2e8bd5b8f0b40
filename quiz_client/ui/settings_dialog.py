"""Settings dialog for display preferences of the participant client."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring font sizes and theme."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        quiz_font_size: int = 14,
        dark_theme: bool = False,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(360)

        self._ui_font_size = ui_font_size
        self._quiz_font_size = quiz_font_size
        self._dark_theme = dark_theme

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        self.ui_font_spinbox = self._add_spin_row(
            font_layout, "UI Font Size (buttons, labels):", 8, 24, self._ui_font_size
        )
        self.quiz_font_spinbox = self._add_spin_row(
            font_layout, "Quiz Font Size (questions, results):", 10, 32, self._quiz_font_size
        )
        layout.addWidget(font_group)

        self.dark_theme_checkbox = QCheckBox("Use dark theme")
        self.dark_theme_checkbox.setChecked(self._dark_theme)
        layout.addWidget(self.dark_theme_checkbox)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _add_spin_row(self, layout: QVBoxLayout, text: str, minimum: int, maximum: int, value: int) -> QSpinBox:
        row = QHBoxLayout()
        label = QLabel(text)
        spinbox = QSpinBox()
        spinbox.setRange(minimum, maximum)
        spinbox.setValue(max(minimum, min(maximum, value)))
        spinbox.setSuffix(" pt")
        row.addWidget(label)
        row.addStretch()
        row.addWidget(spinbox)
        layout.addLayout(row)
        return spinbox

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()

    def get_quiz_font_size(self) -> int:
        return self.quiz_font_spinbox.value()

    def get_dark_theme(self) -> bool:
        return self.dark_theme_checkbox.isChecked()
