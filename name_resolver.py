#!/usr/bin/env python3
"""
Resolver adapter: host identifier + service -> ordered candidate endpoints.

Literal numeric addresses never reach the system resolver; everything else
goes through socket.getaddrinfo and comes back in exactly the order the
platform returned it.
"""

import ipaddress, logging, socket
from dataclasses import dataclass

from error_strings import error_text, gai_strerror

logger = logging.getLogger(__name__)

FAMILY_NAMES = {socket.AF_INET: "inet", socket.AF_INET6: "inet6"}
FAMILY_CODES = {"any": socket.AF_UNSPEC, "unspec": socket.AF_UNSPEC,
                "inet": socket.AF_INET, "inet6": socket.AF_INET6}


class ResolutionFailed(Exception):
    """The resolver rejected the identifier/service pair."""

    def __init__(self, reason: str, code=None):
        super().__init__(reason)
        self.reason = reason
        self.code = code


@dataclass(frozen=True)
class Hints:
    family: int = socket.AF_UNSPEC
    socktype: int = socket.SOCK_STREAM
    protocol: int = 0
    flags: int = 0


CONNECT_HINTS = Hints()
BIND_HINTS = Hints(flags=socket.AI_PASSIVE)


@dataclass(frozen=True)
class ResolvedEndpoint:
    family: int
    socktype: int
    protocol: int
    sockaddr: tuple
    canonname: str = ""
    numeric_host: str | None = None

    @property
    def family_name(self) -> str:
        return FAMILY_NAMES.get(self.family, "unknown family")

    @property
    def port(self) -> int:
        return self.sockaddr[1]

    def __str__(self):
        host = self.numeric_host or self.sockaddr[0]
        if self.family == socket.AF_INET6:
            return f"[{host}]:{self.port}"
        return f"{host}:{self.port}"


class CandidateResultSet:
    """
    Ordered, immutable collection of endpoints from one resolution call.
    The owner releases it exactly once; it is never empty.
    """

    def __init__(self, endpoints):
        endpoints = tuple(endpoints)
        if not endpoints:
            raise ResolutionFailed(gai_strerror(socket.EAI_NONAME), socket.EAI_NONAME)
        self._endpoints = endpoints
        self.released = False

    def _check(self):
        if self.released:
            raise ValueError("candidate result set already released")

    def __iter__(self):
        self._check()
        return iter(self._endpoints)

    def __len__(self):
        self._check()
        return len(self._endpoints)

    def __getitem__(self, index):
        self._check()
        return self._endpoints[index]

    def release(self) -> None:
        self._endpoints = ()
        self.released = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.release()
        return False

    def __repr__(self):
        state = "released" if self.released else f"{len(self._endpoints)} candidates"
        return f"<CandidateResultSet {state}>"


def is_literal_address(identifier) -> int | None:
    """Family of a literal IPv4/IPv6 address, or None for symbolic names."""
    if not identifier or not isinstance(identifier, str):
        return None
    try:
        ip = ipaddress.ip_address(identifier)
    except ValueError:
        return None
    return socket.AF_INET if ip.version == 4 else socket.AF_INET6


def _bad_service() -> ResolutionFailed:
    return ResolutionFailed(gai_strerror(socket.EAI_SERVICE), socket.EAI_SERVICE)


def _service_port(service, socktype: int) -> int:
    if service is None:
        return 0
    if isinstance(service, int):
        port = service
    else:
        service = str(service)
        if not (service.isascii() and service.isdigit()):
            proto = "udp" if socktype == socket.SOCK_DGRAM else "tcp"
            try:
                return socket.getservbyname(service, proto)
            except (OSError, UnicodeError):
                raise _bad_service() from None
        port = int(service)
    if not 0 <= port <= 65535:
        raise _bad_service()
    return port


def _literal_candidates(identifier: str, family: int, service, hints: Hints) -> CandidateResultSet:
    if hints.family not in (socket.AF_UNSPEC, family):
        code = getattr(socket, "EAI_ADDRFAMILY", socket.EAI_FAMILY)
        raise ResolutionFailed(gai_strerror(code), code)
    port = _service_port(service, hints.socktype)
    host = str(ipaddress.ip_address(identifier))
    sockaddr = (host, port) if family == socket.AF_INET else (host, port, 0, 0)
    socktype = hints.socktype or socket.SOCK_STREAM
    return CandidateResultSet([
        ResolvedEndpoint(family, socktype, hints.protocol, sockaddr, "", host)
    ])


def resolve_by_name_or_address(identifier, service, hints: Hints = CONNECT_HINTS) -> CandidateResultSet:
    """
    Produce the candidate endpoints for identifier/service under hints.
    Ownership of the returned set passes to the caller.
    Raises ResolutionFailed with the translated resolver reason.
    """
    family = is_literal_address(identifier)
    if family is not None and "%" not in identifier:
        logger.debug("literal %s address %s, skipping resolver", FAMILY_NAMES[family], identifier)
        return _literal_candidates(identifier, family, service, hints)

    flags = hints.flags
    if family is not None:
        # scoped IPv6 literal; still numeric only
        flags |= socket.AI_NUMERICHOST
    if isinstance(service, int):
        service = str(service)
    try:
        infos = socket.getaddrinfo(identifier, service, hints.family, hints.socktype, hints.protocol, flags)
    except socket.gaierror as e:
        reason = error_text(e)
        logger.debug("resolving %r/%r failed: %s", identifier, service, reason)
        raise ResolutionFailed(reason, e.errno) from e
    except UnicodeError as e:
        # idna encoding rejected the name
        code = socket.EAI_NONAME
        raise ResolutionFailed(gai_strerror(code), code) from e

    endpoints = [
        ResolvedEndpoint(fam, stype, proto, tuple(sockaddr), canonname or "", str(sockaddr[0]))
        for fam, stype, proto, canonname, sockaddr in infos
    ]
    logger.debug("resolved %r/%r -> %d candidate(s)", identifier, service, len(endpoints))
    return CandidateResultSet(endpoints)


def resolve_reverse(sockaddr, want_numeric_host: bool = False, want_numeric_service: bool = False):
    """
    Render a socket address back into (host, service) strings.
    Raises ResolutionFailed.
    """
    flags = 0
    if want_numeric_host:
        flags |= socket.NI_NUMERICHOST
    if want_numeric_service:
        flags |= socket.NI_NUMERICSERV
    try:
        return socket.getnameinfo(tuple(sockaddr), flags)
    except OSError as e:
        # gaierror, or plain OSError for malformed sockaddrs
        raise ResolutionFailed(error_text(e), e.errno) from e
