""" Lexical analysis for shell commands. """
from dataclasses import dataclass
from enum import Enum, auto

from constants import DIGITS, ESCAPE, WHITESPACE, WORD_BREAKS, RedirMode


class TokenKind(Enum):
    WORD = auto()
    REDIRECT = auto()
    DETACH = auto()
    SEPARATOR = auto()
    END_OF_LINE = auto()
    END_OF_INPUT = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""
    fd: int | None = None
    mode: RedirMode | None = None

    @classmethod
    def word(cls, text):
        return cls(TokenKind.WORD, text)

    @classmethod
    def redirect(cls, fd, mode):
        prefix = "" if fd == mode.default_fd else str(fd)
        return cls(TokenKind.REDIRECT, prefix + mode.operator, fd, mode)


DETACH = Token(TokenKind.DETACH, "&")
SEPARATOR = Token(TokenKind.SEPARATOR, ";")
END_OF_LINE = Token(TokenKind.END_OF_LINE, "\n")
END_OF_INPUT = Token(TokenKind.END_OF_INPUT)


def quote_word(text: str) -> str:
    """ Escape characters that would otherwise end or split a word. """
    return "".join(ESCAPE + c if c in WORD_BREAKS or c == ESCAPE else c for c in text)


class Lexer:
    """
    Split a character stream into tokens.

    The stream is read one character at a time and at most one character is
    pushed back, so a lexer can sit on an interactive terminal and return a
    command as soon as its line is complete.
    """
    def __init__(self, stream):
        self.stream = stream
        self._pending = None
        # True when nothing of the current physical line has been consumed.
        self.at_line_start = True

    def _getc(self) -> str:
        if self._pending is not None:
            c, self._pending = self._pending, None
            return c
        return self.stream.read(1)

    def _ungetc(self, c: str):
        if c:
            self._pending = c

    def reset(self):
        """ Forget any pushed back character. """
        self._pending = None
        self.at_line_start = True

    def discard_line(self):
        """ Skip the rest of the current physical line. """
        if self.at_line_start:
            return
        c = self._getc()
        while c and c != "\n":
            c = self._getc()
        self.at_line_start = True

    def next_token(self) -> Token:
        token = self._scan()
        self.at_line_start = token.kind in (TokenKind.END_OF_LINE, TokenKind.END_OF_INPUT)
        return token

    def _scan(self) -> Token:
        c = self._skip_blanks()

        if not c:
            return END_OF_INPUT
        if c == "\n":
            return END_OF_LINE
        if c == "&":
            return DETACH
        if c == ";":
            return SEPARATOR
        if c == "<":
            return Token.redirect(0, RedirMode.READ)
        if c == ">":
            return self._output_redirect(1)

        if c in DIGITS:
            nxt = self._getc()
            if nxt == "<":
                return Token.redirect(int(c), RedirMode.READ)
            if nxt == ">":
                return self._output_redirect(int(c))
            # Plain word text after all.
            return self._read_word([c], nxt)

        buf = []
        c = self._escape(c, buf)
        return self._read_word(buf, c)

    def _skip_blanks(self) -> str:
        """ Skip whitespace and line continuations; return the next character. """
        while True:
            c = self._getc()
            if c and c in WHITESPACE:
                continue
            if c == ESCAPE:
                nxt = self._getc()
                if nxt == "\n":
                    continue
                self._ungetc(nxt)
            return c

    def _escape(self, c: str, buf: list) -> str:
        """
        Copy c into buf, resolving a backslash escape, and return the
        character following it.
        """
        if c == ESCAPE:
            nxt = self._getc()
            if nxt and nxt != "\n":
                buf.append(nxt)
        else:
            buf.append(c)
        return self._getc()

    def _read_word(self, buf: list, c: str) -> Token:
        while c and c not in WORD_BREAKS:
            c = self._escape(c, buf)
        # Whitespace after a word is consumed, other terminators are kept.
        if c and c not in WHITESPACE:
            self._ungetc(c)
        return Token.word("".join(buf))

    def _output_redirect(self, fd: int) -> Token:
        c = self._getc()
        if c == ">":
            return Token.redirect(fd, RedirMode.APPEND)
        self._ungetc(c)
        return Token.redirect(fd, RedirMode.TRUNCATE)
