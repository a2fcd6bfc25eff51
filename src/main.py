""" Command line entry point. """
import argparse
import logging
import os
import sys

from runner import init_signals
from shell import Shell
from shell_state import ShellState

DEBUG_ENV = "TVSH_DEBUG"


def build_arg_parser():
    parser = argparse.ArgumentParser(
        description="A small command interpreter. Reads commands from SCRIPT, "
                    "or from standard input when no script is given."
    )
    parser.add_argument("script", nargs="?", help="file of commands to run")
    parser.add_argument("--debug", action="store_true",
                        help=f"log internals to standard error (also ${DEBUG_ENV})")
    return parser


def configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    debug = args.debug or bool(os.environ.get(DEBUG_ENV))
    configure_logging(debug)

    if args.script is None:
        stream = sys.stdin
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(errors="surrogateescape")
        interactive = sys.stdin.isatty() and sys.stderr.isatty()
    else:
        try:
            stream = open(args.script, "r", errors="surrogateescape")
        except OSError as e:
            print(f"{parser.prog}: {args.script}: {e.strerror}", file=sys.stderr)
            return 1
        interactive = False

    state = ShellState(parser.prog, interactive, debug)
    init_signals(state)
    try:
        return Shell(stream, state).run()
    finally:
        if stream is not sys.stdin:
            stream.close()


if __name__ == "__main__":
    sys.exit(main())
