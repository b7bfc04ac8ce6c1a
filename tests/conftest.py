import socket

import pytest

from name_resolver import CandidateResultSet, ResolvedEndpoint

# getaddrinfo tuples: (family, type, proto, canonname, sockaddr)
GAI_V4 = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 80))
GAI_V4_2 = (socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.35", 80))
GAI_V6 = (socket.AF_INET6, socket.SOCK_STREAM, 6, "", ("2606:2800:220:1:248:1893:25c8:1946", 80, 0, 0))


def endpoint(info) -> ResolvedEndpoint:
    family, stype, proto, canonname, sockaddr = info
    return ResolvedEndpoint(family, stype, proto, sockaddr, canonname, sockaddr[0])


@pytest.fixture
def candidates():
    """IPv6 first, then two IPv4 addresses, as a resolver might order them."""
    return CandidateResultSet([endpoint(GAI_V6), endpoint(GAI_V4), endpoint(GAI_V4_2)])


@pytest.fixture
def listener():
    """A loopback TCP server socket; yields its port."""
    srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    srv.bind(("127.0.0.1", 0))
    srv.listen(8)
    yield srv.getsockname()[1]
    srv.close()


@pytest.fixture
def closed_port():
    """A loopback port nothing is listening on."""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port
