"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QLineEdit {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_status_style(ok: bool | None, theme: Theme = Theme.LIGHT) -> str:
        """Label style for pass/fail and inline error messages. ``None`` is a warning."""
        if ok is None:
            color = ColorPalette.WARNING.get(theme)
        elif ok:
            color = ColorPalette.CORRECT.get(theme)
        else:
            color = ColorPalette.INCORRECT.get(theme)
        return f"color: {color}; font-weight: bold;"

    @staticmethod
    def get_result_css(theme: Theme = Theme.LIGHT) -> str:
        """CSS injected into the HTML answer breakdown."""
        return f"""
      .detail {{ border-radius: 6px; padding: 0.5rem 0.8rem; margin-bottom: 0.6rem; }}
      .detail.correct {{ background: {ColorPalette.CORRECT_BG.get(theme)}; border-left: 4px solid {ColorPalette.CORRECT.get(theme)}; }}
      .detail.incorrect {{ background: {ColorPalette.INCORRECT_BG.get(theme)}; border-left: 4px solid {ColorPalette.INCORRECT.get(theme)}; }}
      .detail .verdict {{ font-weight: bold; }}
      .detail .answers {{ color: {ColorPalette.TEXT_SECONDARY.get(theme)}; }}
      .option.selected {{ font-weight: bold; }}
"""
