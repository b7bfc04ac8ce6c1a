#!/usr/bin/env python3
"""
Host lookups exposed to the troubleshooter: address <-> name records,
numeric candidate listings and name-info queries.

Every function here answers with a two-valued result: the value plus None,
or None plus the translated error text.
"""

import logging, socket
from dataclasses import dataclass

from error_strings import error_text, host_strerror
from name_resolver import CONNECT_HINTS, FAMILY_NAMES, ResolutionFailed, resolve_by_name_or_address, resolve_reverse
from sockets import get_hostname

logger = logging.getLogger(__name__)

__all__ = [
    "HostRecord", "NameInfo", "MissingRequiredArgument", "marshal",
    "to_ip", "to_hostname", "get_addr_info", "get_name_info", "get_hostname",
]


class MissingRequiredArgument(ValueError):
    pass


@dataclass(frozen=True)
class HostRecord:
    name: str
    aliases: tuple = ()
    addresses: tuple = ()

    @property
    def primary_address(self) -> str | None:
        return self.addresses[0] if self.addresses else None

    def as_table(self) -> dict:
        """
        Boundary form: alias and ip listings keyed from 1, in resolver order.
        {"name": "localhost", "alias": {1: "ip6-localhost"}, "ip": {1: "127.0.0.1"}}
        """
        return {
            "name": self.name,
            "alias": {i: a for i, a in enumerate(self.aliases, 1)},
            "ip": {i: a for i, a in enumerate(self.addresses, 1)},
        }


@dataclass(frozen=True)
class NameInfo:
    hosts: tuple | None = None
    service: str | None = None


def marshal(hostent) -> HostRecord:
    """(name, aliaslist, addresslist) as returned by the host database -> HostRecord."""
    name, aliases, addresses = hostent
    return HostRecord(name, tuple(aliases or ()), tuple(addresses or ()))


def _is_inet_literal(address: str) -> bool:
    # dotted-quad forms accepted by inet_aton, shorthand included
    try:
        socket.inet_aton(address)
    except (OSError, ValueError):
        return False
    return True


def _gethost(address: str):
    try:
        if _is_inet_literal(address):
            hostent = socket.gethostbyaddr(address)
        else:
            hostent = socket.gethostbyname_ex(address)
    except (OSError, UnicodeError) as e:
        reason = error_text(e)
        logger.debug("host lookup for %r failed: %s", address, reason)
        return None, reason
    return marshal(hostent), None


def to_ip(address: str):
    """Resolve host to address: (primary address, HostRecord) or (None, error)."""
    record, err = _gethost(address)
    if err:
        return None, err
    if record.primary_address is None:
        # HOST_NOT_FOUND
        return None, host_strerror(1)
    return record.primary_address, record


def to_hostname(address: str):
    """Resolve address to host name: (canonical name, HostRecord) or (None, error)."""
    record, err = _gethost(address)
    if err:
        return None, err
    return record.name, record


def get_addr_info(host: str):
    """
    Every candidate for host as {"family": "inet"|"inet6", "addr": numeric},
    in resolver order. Returns (listing, None) or (None, error).
    """
    try:
        candidates = resolve_by_name_or_address(host, None, CONNECT_HINTS)
    except ResolutionFailed as e:
        return None, e.reason
    try:
        listing = []
        for endpoint in candidates:
            entry = {"addr": endpoint.numeric_host}
            if endpoint.family in FAMILY_NAMES:
                entry["family"] = FAMILY_NAMES[endpoint.family]
            listing.append(entry)
    finally:
        candidates.release()
    return listing, None


def get_name_info(host: str | None = None, service: str | None = None):
    """
    Host names for every candidate of host and/or the name of service.
    Only the halves that were asked for are filled in.
    """
    if host is None and service is None:
        raise MissingRequiredArgument("You have to specify a hostname, a service, or both")

    # the resolver wants both halves; stand-ins fill the missing one
    try:
        candidates = resolve_by_name_or_address(
            host if host is not None else "127.0.0.1",
            service if service is not None else "7",
            CONNECT_HINTS,
        )
    except ResolutionFailed as e:
        return None, e.reason

    hosts, service_name, reason = [], None, None
    try:
        for endpoint in candidates:
            try:
                name, service_name = resolve_reverse(endpoint.sockaddr)
            except ResolutionFailed as e:
                # skip the candidate, keep listing the rest
                reason = e.reason
                logger.debug("name info for %s failed: %s", endpoint, reason)
                continue
            hosts.append(name)
    finally:
        candidates.release()

    if not hosts:
        return None, reason

    return NameInfo(
        hosts=tuple(hosts) if host is not None else None,
        service=service_name if service is not None else None,
    ), None
