"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Quiz Participant"
DEFAULT_QUIZ_FONT_SIZE: int = 14

JOIN_TITLE: str = "Join a quiz"
JOIN_BUTTON: str = "Join"
JOIN_BUTTON_BUSY: str = "Loading quiz..."
PRACTICE_BUTTON: str = "Practice from file..."
FIRST_NAME_PLACEHOLDER: str = "First name"
LAST_NAME_PLACEHOLDER: str = "Last name"
ACCESS_CODE_PLACEHOLDER: str = "Quiz code (e.g. ABC123)"

PREVIOUS_BUTTON: str = "Previous"
NEXT_BUTTON: str = "Next"
FINISH_BUTTON: str = "Finish quiz"
FINISH_BUTTON_BUSY: str = "Submitting..."
RETRY_BUTTON: str = "Retry submission"
LEAVE_BUTTON: str = "Leave quiz"
MULTIPLE_HINT: str = "Select every correct answer."
SINGLE_HINT: str = "Select one answer."
UNANSWERED_MESSAGE: str = "Please choose an answer before continuing."

RESULT_TITLE: str = "Your result"
NEW_QUIZ_BUTTON: str = "Join another quiz"
PASSED_MESSAGE: str = "Passed"
FAILED_MESSAGE: str = "Not passed"

IMPORT_DIALOG_TITLE: str = "Select quiz file"
IMPORT_FILE_FILTER: str = "Quiz files (*.txt);;All files (*.*)"
