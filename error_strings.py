#!/usr/bin/env python3
"""
Error code -> text tables, one per error domain.

Resolver failures (getaddrinfo EAI_* codes), legacy host lookups (h_errno)
and OS socket errors (errno) each get their own explicit table so the
translation is a pure function of the code.
"""

import errno, os, socket

# pseudo-codes used by the socket layer, outside the errno range
IO_TIMEOUT = -1
IO_CLOSED = -2


def _table(module, names: dict) -> dict:
    # skip constants the platform does not define
    return {getattr(module, k): v for k, v in names.items() if hasattr(module, k)}


GAI_ERRORS = _table(socket, {
    "EAI_AGAIN": "temporary failure in name resolution",
    "EAI_BADFLAGS": "invalid value for ai_flags",
    "EAI_FAIL": "non-recoverable failure in name resolution",
    "EAI_FAMILY": "ai_family not supported",
    "EAI_MEMORY": "memory allocation failure",
    "EAI_NODATA": "no address associated with hostname",
    "EAI_OVERFLOW": "argument buffer overflow",
    "EAI_PROTOCOL": "resolved protocol is unknown",
    "EAI_SERVICE": "service not supported for socket type",
    "EAI_SOCKTYPE": "ai_socktype not supported",
    "EAI_ADDRFAMILY": "address family for hostname not supported",
    # the real reason lives in errno; error_text prefers the OS text
    "EAI_SYSTEM": "system error",
    # last, so it wins where a platform aliases EAI_NODATA to it
    "EAI_NONAME": "host or service not provided, or not known",
})

HOST_ERRORS = {
    1: "host not found",  # HOST_NOT_FOUND
    2: "temporary failure in name resolution",  # TRY_AGAIN
    3: "non-recoverable failure in name resolution",  # NO_RECOVERY
    4: "no address associated with hostname",  # NO_DATA
}

SOCKET_ERRORS = _table(errno, {
    "EADDRINUSE": "address already in use",
    "EISCONN": "already connected",
    "EACCES": "permission denied",
    "ECONNREFUSED": "connection refused",
    "ECONNABORTED": "closed",
    "ECONNRESET": "closed",
    "ETIMEDOUT": "timeout",
})
SOCKET_ERRORS[IO_TIMEOUT] = "timeout"
SOCKET_ERRORS[IO_CLOSED] = "closed"


def socket_strerror(code) -> str | None:
    if not code:
        return None
    if code in SOCKET_ERRORS:
        return SOCKET_ERRORS[code]
    return os.strerror(code).lower()


def gai_strerror(code) -> str | None:
    if not code:
        return None
    if code in GAI_ERRORS:
        return GAI_ERRORS[code]
    return f"unknown resolver error ({code})"


def host_strerror(code) -> str | None:
    if not code:
        return None
    return HOST_ERRORS.get(code, f"unknown host lookup error ({code})")


def error_text(exc: BaseException) -> str:
    """
    Translate a caught resolver/socket exception into its table text.
    Falls back to str(exc) when the exception carries no usable code.
    """
    code = exc.errno if isinstance(exc, OSError) else None
    if isinstance(exc, socket.gaierror):
        if code == getattr(socket, "EAI_SYSTEM", None) and exc.strerror:
            return exc.strerror.lower()
        return gai_strerror(code) or str(exc)
    if isinstance(exc, socket.herror):
        return host_strerror(code) or str(exc)
    if isinstance(exc, TimeoutError) and code is None:
        return SOCKET_ERRORS[IO_TIMEOUT]
    if isinstance(exc, OSError) and code:
        return socket_strerror(code)
    return str(exc) or exc.__class__.__name__
