"""Helper functions for common dialog patterns in the participant UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def confirm_leave_attempt(parent: QWidget, answered: int, total: int) -> bool:
    """Ask before abandoning an attempt that has not been submitted.

    Args:
        parent: Parent widget for the dialog
        answered: Number of questions answered so far
        total: Number of questions in the quiz

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Leave Quiz",
        f"You have answered {answered}/{total} questions. "
        "Leaving now discards your answers and nothing is submitted. Continue?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog."""
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
        font_point_size: Optional font size for the dialog text
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    if font_point_size is not None and font_point_size > 0:
        msg_box.setStyleSheet(
            f"QLabel {{ font-size: {font_point_size}pt; }}\n"
            f"QPushButton {{ font-size: {font_point_size}pt; }}"
        )
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
