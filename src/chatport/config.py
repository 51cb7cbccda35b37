"""Central configuration for defaults and constants."""

import os

# Log level for the CLI — override with CHATPORT_LOG_LEVEL env var
LOG_LEVEL = os.environ.get("CHATPORT_LOG_LEVEL", "WARNING").upper()

# Defaults for conversations imported from Markdown
DEFAULT_TITLE = "Imported from Markdown"
DEFAULT_GROUP = "Imported from Markdown"
IMPORTED_PROVIDER = "Imported"
MARKDOWN_MODEL = "markdown"

# Synthetic spacing between messages that carry no timestamp of their own
MESSAGE_SPACING_MS = 100

# Dates
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"  # Used for export and front matter
DATE_INPUT_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
)

# Export
EXPORT_HEADING = "Chat History Export"
HIDDEN_MODEL_NAMES = {"markdown", "unknown"}  # Not worth a "*Model:*" line
