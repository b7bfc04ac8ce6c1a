#!/usr/bin/env python3
"""
Connect and bind establishers.

Both resolve the target into candidates, try them strictly in resolver
order and stop at the first success. Only the last candidate's error is
reported as the outcome; the per-candidate trail is kept in `attempts`
for diagnostics.
"""

import logging, socket
from dataclasses import dataclass, field

from error_strings import error_text
from name_resolver import BIND_HINTS, CONNECT_HINTS, Hints, ResolutionFailed, ResolvedEndpoint, resolve_by_name_or_address
from sockets import SocketHandle, socket_bind, socket_connect, socket_create, socket_destroy

logger = logging.getLogger(__name__)

WILDCARD = "*"
EPHEMERAL_PORT = "0"


@dataclass(frozen=True)
class Attempt:
    endpoint: ResolvedEndpoint
    error: str | None = None


@dataclass
class EstablishResult:
    handle: SocketHandle | None = None
    endpoint: ResolvedEndpoint | None = None
    error: str | None = None
    attempts: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self):
        # unpacks as (handle, None) or (None, error)
        if self.ok:
            return iter((self.handle, None))
        return iter((None, self.error))


def try_create(family: int, type: int = socket.SOCK_STREAM):
    try:
        return socket_create(family, type), None
    except OSError as e:
        return None, error_text(e)


def try_connect(handle: SocketHandle, address: str, service, timeout=None, hints: Hints = CONNECT_HINTS) -> EstablishResult:
    """
    Connect handle to the first reachable candidate of address/service.

    The timeout's start marker is reset before every attempt, so each
    candidate gets its own block window while a total deadline still
    bounds the whole sequence. The handle is not destroyed between
    attempts; the socket layer decides whether it must be re-created.
    """
    try:
        candidates = resolve_by_name_or_address(address, service, hints)
    except ResolutionFailed as e:
        logger.info("connect %s:%s: %s", address, service, e.reason)
        return EstablishResult(error=e.reason)

    result = EstablishResult()
    try:
        for endpoint in candidates:
            if timeout is not None:
                timeout.mark_start()
            try:
                socket_connect(handle, endpoint, timeout)
            except OSError as e:
                result.error = error_text(e)
                result.attempts.append(Attempt(endpoint, result.error))
                logger.debug("connect to %s failed: %s", endpoint, result.error)
                continue
            result.error = None
            result.attempts.append(Attempt(endpoint))
            result.handle, result.endpoint = handle, endpoint
            logger.debug("connected to %s", endpoint)
            break
    finally:
        candidates.release()
    return result


def try_bind(handle: SocketHandle, address: str | None, service=None, hints: Hints = BIND_HINTS, reuseaddr: bool = False) -> EstablishResult:
    """
    Bind handle to the first usable candidate of address/service.

    "*" binds to any local interface and an absent service lets the
    system pick an ephemeral port. A failed bind destroys the socket
    before the next candidate is tried.
    """
    if address == WILDCARD:
        address = None
    if service is None:
        service = EPHEMERAL_PORT

    try:
        candidates = resolve_by_name_or_address(address, service, hints)
    except ResolutionFailed as e:
        logger.info("bind %s:%s: %s", address, service, e.reason)
        return EstablishResult(error=e.reason)

    result = EstablishResult()
    try:
        for endpoint in candidates:
            try:
                socket_bind(handle, endpoint, reuseaddr=reuseaddr)
            except OSError as e:
                result.error = error_text(e)
                result.attempts.append(Attempt(endpoint, result.error))
                logger.debug("bind to %s failed: %s", endpoint, result.error)
                socket_destroy(handle)
                continue
            result.error = None
            result.attempts.append(Attempt(endpoint))
            result.handle, result.endpoint = handle, endpoint
            logger.debug("bound to %s", endpoint)
            break
    finally:
        candidates.release()
    return result
