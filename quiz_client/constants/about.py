"""Static metadata describing the participant client."""

APP_NAME = "Quiz Participant"
APP_VERSION = "0.1.0"
APP_ABOUT_TEXT = (
    "Quiz Participant lets you join a quiz with its access code, answer the questions "
    "one at a time and review your graded result. Questions support Markdown and LaTeX."
)

HELP_TEXT = (
    "Enter your first name, last name and the quiz code given by your teacher, then press Join.\n\n"
    "To practice offline, open a .txt quiz file written in this format:\n\n"
    "TITLE: Angles\n\n"
    "Q: What is $30^o$ in radians?\n"
    "A: \\frac{\\pi}{2}\nB: \\frac{\\pi}{6}\nC: \\frac{\\pi}{3}\n"
    "CORRECT: B\n\n"
    "Q: Which angles are acute?\n"
    "A: $45^o$\nB: $120^o$\nC: $10^o$\n"
    "CORRECT: A, C"
)
