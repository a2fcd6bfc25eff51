""" Apply and undo I/O redirections on the shell's own descriptors. """
import contextlib
import errno
import fcntl
import logging
import os
import sys

from command import Redirection
from constants import CREATE_MODE
from exceptions import RedirectionError

# Saved copies live at or above this number, clear of any descriptor a
# redirection can name.
SAVE_FD_MIN = 10

logger = logging.getLogger(__name__)


class SavedDescriptor:
    """ What a descriptor was before a redirection replaced it. """
    def __init__(self, fd: int, copy: int | None):
        self.fd = fd
        self.copy = copy        # duplicate of the original, None if it was closed
        self.was_closed = copy is None
        self.consumed = False


def flush_std_streams():
    """ Push buffered Python-level output to the descriptors it belongs to. """
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            with contextlib.suppress(OSError, ValueError):
                stream.flush()


def save_descriptor(fd: int) -> SavedDescriptor:
    try:
        copy = fcntl.fcntl(fd, fcntl.F_DUPFD_CLOEXEC, SAVE_FD_MIN)
    except OSError as e:
        if e.errno != errno.EBADF:
            raise
        copy = None
    return SavedDescriptor(fd, copy)


def apply_redirection(redir: Redirection) -> SavedDescriptor:
    """ Point redir.fd at redir.path; return the state needed to undo it. """
    saved = save_descriptor(redir.fd)
    try:
        new = os.open(redir.path, redir.mode.value, CREATE_MODE)
    except (OSError, ValueError) as e:
        restore_descriptor(saved)
        raise RedirectionError(redir.path, e) from e

    if new == redir.fd:
        # The target was closed and open() reused its number.
        os.set_inheritable(new, True)
    else:
        os.dup2(new, redir.fd)
        os.close(new)
    logger.debug("redirected fd %d to %s (%s)", redir.fd, redir.path, redir.mode.name)
    return saved


def apply_redirections(redirections) -> list[SavedDescriptor]:
    """
    Apply every redirection in order.

    If any target cannot be opened, the redirections already applied are
    undone before RedirectionError propagates, leaving the descriptors as
    they were on entry.
    """
    saved = []
    flush_std_streams()
    try:
        for redir in redirections:
            saved.append(apply_redirection(redir))
    except BaseException:
        restore_redirections(saved)
        raise
    return saved


def restore_descriptor(saved: SavedDescriptor):
    """ Undo one redirection. Errors are ignored so that restoring never stops part way. """
    if saved.consumed:
        return
    saved.consumed = True
    try:
        if saved.was_closed:
            os.close(saved.fd)
        else:
            os.dup2(saved.copy, saved.fd)
    except OSError as e:
        logger.debug("restoring fd %d: %s", saved.fd, e)
    if saved.copy is not None:
        with contextlib.suppress(OSError):
            os.close(saved.copy)
        saved.copy = None


def restore_redirections(saved: list[SavedDescriptor]):
    """ Undo applied redirections, most recent first. Each state is consumed. """
    flush_std_streams()
    while saved:
        restore_descriptor(saved.pop())


@contextlib.contextmanager
def redirected(redirections):
    """ Keep the redirections in force for the body of a with statement. """
    saved = apply_redirections(redirections)
    try:
        yield saved
    finally:
        restore_redirections(saved)
