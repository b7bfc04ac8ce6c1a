#!/usr/bin/env python3
"""
Socket layer used by the establishers: create/connect/bind/destroy on top of
the stdlib socket module, plus the peer/local name pass-throughs.
"""

import logging, socket

from error_strings import error_text
from name_resolver import FAMILY_NAMES, ResolutionFailed, resolve_reverse

logger = logging.getLogger(__name__)


class SocketHandle:
    """
    Holds at most one OS socket. The OS socket is created for the family of
    the first address it is used with and re-created when a later address
    has another family or a previous connect left it unusable.
    """

    def __init__(self, type: int = socket.SOCK_STREAM, blocking: bool = True):
        self.type = type
        self.blocking = blocking
        self.sock = None
        self.family = None
        self.stale = False

    def create(self, family: int) -> None:
        self.destroy()
        self.sock = socket.socket(family, self.type)
        self.family = family
        self.stale = False
        self._apply_blocking()
        logger.debug("created %s socket fd=%s", FAMILY_NAMES.get(family, family), self.sock.fileno())

    def _apply_blocking(self):
        if self.sock is not None:
            self.sock.settimeout(None if self.blocking else 0.0)

    def set_nonblocking(self, flag: bool = True) -> None:
        self.blocking = not flag
        self._apply_blocking()

    def destroy(self) -> None:
        if self.sock is not None:
            self.sock.close()
        self.sock = None
        self.family = None
        self.stale = False

    def listen(self, backlog: int = 32) -> None:
        self.sock.listen(backlog)

    def fileno(self) -> int:
        return -1 if self.sock is None else self.sock.fileno()

    @property
    def closed(self) -> bool:
        return self.sock is None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.destroy()
        return False

    def __repr__(self):
        if self.sock is None:
            return "<SocketHandle closed>"
        return f"<SocketHandle {FAMILY_NAMES.get(self.family, self.family)} fd={self.sock.fileno()}>"


def socket_create(family: int, type: int = socket.SOCK_STREAM) -> SocketHandle:
    handle = SocketHandle(type)
    handle.create(family)
    return handle


def socket_connect(handle: SocketHandle, endpoint, timeout=None) -> None:
    """
    Connect handle to endpoint within timeout.remaining().
    Raises OSError (TimeoutError on expiry).
    """
    if handle.sock is None or handle.stale or handle.family != endpoint.family:
        handle.create(endpoint.family)
    left = None if timeout is None else timeout.remaining()
    if left is not None and left <= 0.0:
        raise TimeoutError("timeout")
    handle.sock.settimeout(left)
    try:
        handle.sock.connect(endpoint.sockaddr)
    except OSError:
        handle.stale = True
        raise
    finally:
        handle._apply_blocking()


def socket_bind(handle: SocketHandle, endpoint, reuseaddr: bool = False) -> None:
    if handle.sock is None or handle.family != endpoint.family:
        handle.create(endpoint.family)
    if reuseaddr:
        handle.sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    handle.sock.bind(endpoint.sockaddr)


def socket_destroy(handle: SocketHandle) -> None:
    handle.destroy()


def get_peer_name(handle: SocketHandle):
    """(address, port, family) of the connected peer, or (None, error)."""
    if handle.sock is None:
        return None, "closed"
    try:
        sockaddr = handle.sock.getpeername()
        host, port = resolve_reverse(sockaddr, want_numeric_host=True, want_numeric_service=True)
    except ResolutionFailed as e:
        return None, e.reason
    except OSError as e:
        return None, error_text(e)
    return host, int(port), FAMILY_NAMES.get(handle.family, "unknown family")


def get_sock_name(handle: SocketHandle):
    """(address, port, family) of the local end, or (None, error)."""
    if handle.family not in FAMILY_NAMES:
        return None, "unknown family"
    try:
        sockaddr = handle.sock.getsockname()
    except OSError:
        return None, "getsockname failed"
    return sockaddr[0], sockaddr[1], FAMILY_NAMES[handle.family]


def get_hostname():
    """Local machine name, or (None, error)."""
    try:
        return socket.gethostname(), None
    except OSError:
        return None, "gethostname failed"
