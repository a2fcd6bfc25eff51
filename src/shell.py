""" Implement the core of the shell. """
import contextlib
import logging
import sys
import termios

from constants import EXIT_FAILURE, EXIT_SYNTAX
from exceptions import ParseError, ShellExit
from lexer import Lexer
from parser import read_command
from runner import execute_command
from shell_state import ShellState

logger = logging.getLogger(__name__)

PROMPT = "$ "


class Shell:
    """ Read commands from a stream and run them until input runs out. """
    def __init__(self, stream, state=None):
        self.state = state if state is not None else ShellState()
        self.lexer = Lexer(stream)

    def prompt(self):
        # Once per physical line, so "a; b" prompts only once.
        if self.state.interactive and self.lexer.at_line_start:
            sys.stdout.write(PROMPT)
            sys.stdout.flush()

    def discard_input(self):
        """ Drop whatever the user has typed but the shell has not read. """
        self.lexer.reset()
        with contextlib.suppress(OSError, ValueError, termios.error):
            termios.tcflush(self.lexer.stream.fileno(), termios.TCIFLUSH)

    def run(self) -> int:
        while True:
            self.prompt()
            try:
                cmd = read_command(self.lexer)
            except EOFError:
                if self.state.interactive:
                    print()
                return self.state.last_status
            except ParseError as e:
                print(self.state.error_prefix(str(e)), file=sys.stderr)
                self.state.set_status(EXIT_SYNTAX)
                if not self.state.interactive:
                    return EXIT_SYNTAX
                self.lexer.discard_line()
                continue
            except OSError as e:
                if not self.state.interactive:
                    print(self.state.error_prefix(f"read error: {e.strerror}"), file=sys.stderr)
                    return EXIT_FAILURE
                logger.debug("read error, discarding input: %s", e)
                print()
                self.discard_input()
                continue

            if cmd.is_empty():
                continue

            logger.debug("running %r", cmd)
            try:
                status = execute_command(cmd, self.state)
            except ShellExit as e:
                return e.status
            self.state.set_status(status)
