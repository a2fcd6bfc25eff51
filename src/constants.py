import os
import string
from enum import Enum

# Whitespace separating words; newline is a token of its own.
WHITESPACE = frozenset(" \t\v\f")
DIGITS = frozenset(string.digits)

# Characters that end a word in progress.
WORD_BREAKS = WHITESPACE | frozenset("&;<>\n")

ESCAPE = "\\"

# Permission bits for files created by redirection, before umask.
CREATE_MODE = 0o666

# Exit statuses
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_SYNTAX = 2
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127
SIGNAL_STATUS_BASE = 128


class RedirMode(Enum):
    """ How a redirection target is opened; the value is the os.open flags. """
    READ = os.O_RDONLY
    TRUNCATE = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
    APPEND = os.O_WRONLY | os.O_CREAT | os.O_APPEND

    @property
    def default_fd(self) -> int:
        return 0 if self is RedirMode.READ else 1

    @property
    def operator(self) -> str:
        if self is RedirMode.READ:
            return "<"
        if self is RedirMode.APPEND:
            return ">>"
        return ">"
