""" Commands run inside the shell process itself. """
import os
import sys

from constants import EXIT_FAILURE, EXIT_SUCCESS, EXIT_SYNTAX
from exceptions import ShellExec, ShellExit, error_text


def builtin_cd(argv, state):
    args = argv[1:]
    if len(args) > 1:
        print("cd: usage: cd [directory]", file=sys.stderr)
        return EXIT_FAILURE

    if args:
        target = args[0]
    else:
        target = os.environ.get("HOME")
        if target is None:
            print("cd: HOME not set", file=sys.stderr)
            return EXIT_FAILURE

    try:
        os.chdir(target)
    except (OSError, ValueError) as e:
        print(f"cd: {target}: {error_text(e)}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_SUCCESS


def builtin_exec(argv, state):
    """ Replace the shell with a program; the executor carries it out. """
    if len(argv) < 2:
        print("exec: usage: exec command [args...]", file=sys.stderr)
        return EXIT_FAILURE
    raise ShellExec(argv[1:])


def builtin_exit(argv, state):
    args = argv[1:]
    if len(args) > 1:
        print("exit: usage: exit [code]", file=sys.stderr)
        return EXIT_FAILURE

    try:
        status = int(args[0]) & 0xFF if args else EXIT_SUCCESS
    except ValueError:
        print(f"exit: {args[0]}: numeric argument required", file=sys.stderr)
        status = EXIT_SYNTAX
    raise ShellExit(status)


# The set of builtins is closed; looked up by exact name.
BUILTINS = {
    "exit": builtin_exit,
    "exec": builtin_exec,
    "cd": builtin_cd,
}
