""" Parse shell commands. """
import logging

from command import Command, Redirection
from exceptions import ParseError
from lexer import Lexer, TokenKind

logger = logging.getLogger(__name__)

# Tokens that end a command without marking it detached.
TERMINATORS = (TokenKind.SEPARATOR, TokenKind.END_OF_LINE)


def read_redirection(lexer: Lexer, operator) -> Redirection:
    """ Pair a redirection operator with the word naming its target. """
    target = lexer.next_token()
    if target.kind is not TokenKind.WORD:
        raise ParseError(f"syntax error: expected filename after '{operator.text}'")
    return Redirection(operator.fd, operator.mode, target.text)


def read_command(lexer: Lexer) -> Command:
    """
    Read tokens up to the end of one command.

    Returns a Command whose argv is empty for a blank line. Raises EOFError
    when the input is exhausted before any token of a new command, and
    ParseError for a malformed command; nothing of a failed command is kept.
    """
    argv = []
    redirections = []
    started = False

    while True:
        tok = lexer.next_token()

        if tok.kind is TokenKind.WORD:
            argv.append(tok.text)
        elif tok.kind is TokenKind.REDIRECT:
            # Later redirections go first, so the earliest written is applied last.
            redirections.insert(0, read_redirection(lexer, tok))
        elif tok.kind is TokenKind.DETACH:
            return Command(argv, redirections, detached=True)
        elif tok.kind in TERMINATORS:
            return Command(argv, redirections)
        elif tok.kind is TokenKind.END_OF_INPUT:
            if not started:
                raise EOFError
            logger.debug("input ended inside command %r", argv)
            raise ParseError("syntax error: unexpected end of input")

        started = True
