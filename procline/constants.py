"""
Centralized constants for procline.
"""

# Output decoding
DEFAULT_ENCODING = "utf-8"
DEFAULT_ERRORS = "strict"

# Tokenizer character classes (POSIX sh)
WHITESPACE = " \t\n\r\f\v"
SINGLE_QUOTE = "'"
DOUBLE_QUOTE = '"'
ESCAPE = "\\"
LINE_CONTINUATION = "\n"
NUL = "\0"

# Characters a backslash escapes inside a double-quoted span
DOUBLE_QUOTE_ESCAPABLE = '"\\$`\n'

# CLI exit codes (shell conventions)
EXIT_USAGE = 2
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128
