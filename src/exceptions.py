""" Exceptions used for shell control flow and error reporting. """


def error_text(error: Exception) -> str:
    """ System error text, or the message of errors that carry none (bad arguments). """
    return getattr(error, "strerror", None) or str(error)


class ShellExit(Exception):
    """ Raised by the exit builtin to terminate the shell. """
    def __init__(self, status=0):
        super().__init__(status)
        self.status = status


class ShellExec(Exception):
    """ Raised by the exec builtin to replace the shell with a program. """
    def __init__(self, argv):
        super().__init__(argv)
        self.argv = argv


class ParseError(SyntaxError):
    """ A command line could not be turned into a command. """


class RedirectionError(Exception):
    """ A redirection target could not be opened. """
    def __init__(self, path, error: Exception):
        super().__init__(path, error)
        self.path = path
        self.error = error

    def __str__(self):
        return f"{self.path}: {error_text(self.error)}"
