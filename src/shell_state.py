""" Current state of the shell. """


class ShellState:
    """
    Settings fixed at startup plus the status of the last command.

    One instance is created by main() and handed to everything that needs
    to know how the shell was started.
    """
    def __init__(self, progname="tvsh", interactive=False, debug=False):
        self.progname = progname
        self.interactive = interactive
        self.debug = debug
        self.last_status = 0

    def set_status(self, status: int):
        # normalize like shells do
        self.last_status = int(status) if status is not None else 0

    def error_prefix(self, detail: str) -> str:
        return f"{self.progname}: {detail}"
