""" Execute a shell command. """
import errno
import logging
import os
import signal
import sys

from command import Command
from constants import (EXIT_CANNOT_EXECUTE, EXIT_FAILURE, EXIT_NOT_FOUND,
                       EXIT_SUCCESS, SIGNAL_STATUS_BASE)
from exceptions import RedirectionError, ShellExec, error_text
from redirect import flush_std_streams, redirected
from shell_builtins import BUILTINS
from shell_state import ShellState

logger = logging.getLogger(__name__)


def init_signals(state: ShellState):
    """ Set the shell's own signal dispositions once at startup. """
    if state.interactive:
        # Only foreground children can be interrupted, never the shell.
        signal.signal(signal.SIGINT, signal.SIG_IGN)
    else:
        # A script shell dies from the signal like its children do.
        signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_IGN)


def set_child_signals(state: ShellState, detached: bool):
    if detached:
        signal.signal(signal.SIGINT, signal.SIG_IGN)
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    elif state.interactive:
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.signal(signal.SIGQUIT, signal.SIG_DFL)
    else:
        signal.signal(signal.SIGQUIT, signal.SIG_DFL)
    # Python ignores SIGPIPE; an ignored disposition survives exec.
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def wait_for(pid: int) -> int:
    """ Block until the given child terminates and return its status. """
    _, status = os.waitpid(pid, 0)
    if os.WIFSIGNALED(status):
        return SIGNAL_STATUS_BASE + os.WTERMSIG(status)
    return os.WEXITSTATUS(status)


def run_child(cmd: Command, state: ShellState):
    """ Turn a freshly forked child into cmd's program. Never returns. """
    status = EXIT_CANNOT_EXECUTE
    try:
        set_child_signals(state, cmd.detached)
        os.execvp(cmd.name, cmd.argv)
    except (OSError, ValueError) as e:
        if getattr(e, "errno", None) == errno.ENOENT:
            status = EXIT_NOT_FOUND
        # Straight to descriptor 2 so the message follows any redirection.
        msg = f"{state.progname}: {cmd.name}: {error_text(e)}\n"
        os.write(2, msg.encode(errors="replace"))
    finally:
        os._exit(status)


def launch(cmd: Command, state: ShellState) -> int:
    """ Run an external program in a new process. """
    flush_std_streams()
    try:
        pid = os.fork()
    except OSError as e:
        print(f"{state.progname}: fork: {e.strerror}", file=sys.stderr)
        return EXIT_FAILURE

    if pid == 0:
        run_child(cmd, state)

    if cmd.detached:
        logger.debug("started %s as pid %d, not waiting", cmd.name, pid)
        return EXIT_SUCCESS

    status = wait_for(pid)
    logger.debug("pid %d (%s) finished with status %d", pid, cmd.name, status)
    return status


def replace_process(argv: list[str], state: ShellState) -> int:
    """
    Replace the shell with argv. Only returns if the program could not be
    executed, in which case the shell carries on with a failure status.
    """
    resets = [signal.SIGPIPE]
    if state.interactive:
        resets += [signal.SIGINT, signal.SIGQUIT]
    previous = {sig: signal.signal(sig, signal.SIG_DFL) for sig in resets}

    flush_std_streams()
    logger.debug("exec %s", argv)
    try:
        os.execvp(argv[0], argv)
    except (OSError, ValueError) as e:
        for sig, handler in previous.items():
            if handler is not None:
                signal.signal(sig, handler)
        print(f"exec: {argv[0]}: {error_text(e)}", file=sys.stderr)
        return EXIT_FAILURE


def run_builtin(builtin, cmd: Command, state: ShellState) -> int:
    try:
        return builtin(cmd.argv, state)
    except ShellExec as e:
        return replace_process(e.argv, state)


def execute_command(cmd: Command, shell_state: ShellState) -> int:
    """
    Run one parsed command and return its exit status.

    The command's redirections are in force while it runs and undone
    afterwards. ShellExit from the exit builtin propagates to the caller.
    """
    if cmd.is_empty():
        return EXIT_SUCCESS

    try:
        with redirected(cmd.redirections):
            builtin = BUILTINS.get(cmd.name)
            if builtin is not None:
                return run_builtin(builtin, cmd, shell_state)
            return launch(cmd, shell_state)
    except RedirectionError as e:
        print(shell_state.error_prefix(str(e)), file=sys.stderr)
        return EXIT_FAILURE
