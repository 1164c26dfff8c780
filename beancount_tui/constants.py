DEFAULT_FLAG = "*"
POSTING_INDENT = " " * 4
POSTING_COLUMN_SEP = " " * 4
METADATA_LABELS = ("Date", "Flag", "Payee", "Narration")
POSTING_LABELS = ("Account", "Amount", "Currency")
CONFIG_FILE = ".beancount_tui.yaml"
APP_TITLE = "Beancount editor"
DEFAULT_EXIT_MESSAGE = "Quit and hand off the edited transactions?"
