""" Command to be executed. """
from dataclasses import dataclass

from constants import RedirMode
from lexer import quote_word


@dataclass(frozen=True)
class Redirection:
    fd: int
    mode: RedirMode
    path: str

    @property
    def operator(self) -> str:
        prefix = "" if self.fd == self.mode.default_fd else str(self.fd)
        return prefix + self.mode.operator

    def __str__(self):
        return f"{self.operator}{quote_word(self.path)}"


class Command:
    """ A parsed command: arguments, redirections and the detached flag. """
    def __init__(self, argv=None, redirections=None, detached=False):
        self.argv: list[str] = argv if argv is not None else []
        self.redirections: list[Redirection] = redirections if redirections is not None else []
        self.detached = detached

    @property
    def name(self):
        return self.argv[0] if self.argv else None

    @property
    def args(self):
        return self.argv[1:]

    def is_empty(self) -> bool:
        return not self.argv

    def to_line(self) -> str:
        """ Rebuild an input line that parses back to this command. """
        parts = [quote_word(arg) for arg in self.argv]
        parts += [str(r) for r in reversed(self.redirections)]
        line = " ".join(parts)
        if self.detached:
            line += " &"
        return line

    def __repr__(self):
        return f"Command({self.to_line()!r})"
