"""Tests for the DNS checks."""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from dns import exception

from dns_checker import resolve_hostnames
from host_record import HostRecord

_RECORD = HostRecord("example.com", ("www.example.com",), ("93.184.216.34",))


@pytest.fixture
def dns_resolver():
    with patch("dns_checker.resolver.Resolver") as mock_cls:
        mock_cls.return_value.resolve.side_effect = exception.DNSException()
        yield mock_cls.return_value


@patch("dns_checker.to_hostname", return_value=("example.com", _RECORD))
@patch("dns_checker.get_addr_info", return_value=([
    {"family": "inet6", "addr": "2606:2800:220:1:248:1893:25c8:1946"},
    {"family": "inet", "addr": "93.184.216.34"},
], None))
@patch("dns_checker.to_ip", return_value=("93.184.216.34", _RECORD))
def test_resolved_host(_to_ip, _gai, mock_reverse, dns_resolver) -> None:
    out = resolve_hostnames(["example.com"], timeout=1.0)

    info = out["example.com"]
    assert info["resolved"] is True
    assert info["error"] is None
    assert info["canonical_name"] == "example.com"
    assert info["aliases"] == ["www.example.com"]
    assert info["addresses"] == ["93.184.216.34", "2606:2800:220:1:248:1893:25c8:1946"]
    assert info["round_trip_ok"] is True
    assert info["cname"] == []
    assert info["ptr"] == []
    mock_reverse.assert_called_once_with("93.184.216.34")


@patch("dns_checker.get_addr_info", return_value=(None, "host or service not provided, or not known"))
@patch("dns_checker.to_ip", return_value=(None, "host not found"))
def test_unresolved_host(_to_ip, _gai, dns_resolver) -> None:
    info = resolve_hostnames(["nonexistent.invalid"])["nonexistent.invalid"]

    assert info["resolved"] is False
    assert info["error"] == "host not found"
    assert info["addresses"] == []
    assert "round_trip_ok" not in info


@patch("dns_checker.to_hostname", return_value=("other.example.org", _RECORD))
@patch("dns_checker.get_addr_info", return_value=([{"family": "inet", "addr": "93.184.216.34"}], None))
@patch("dns_checker.to_ip", return_value=("93.184.216.34", _RECORD))
def test_ptr_and_mismatch(_to_ip, _gai, _reverse, dns_resolver) -> None:
    def answer(qname, rtype, raise_on_no_answer=False):
        if rtype == "PTR":
            return [SimpleNamespace(target="other.example.org.")]
        raise exception.DNSException()

    dns_resolver.resolve.side_effect = answer

    info = resolve_hostnames(["example.com"])["example.com"]

    assert info["ptr"] == ["other.example.org"]
    assert info["reverse_name"] == "other.example.org"
    assert info["round_trip_ok"] is False


@patch("dns_checker.get_addr_info", return_value=([{"family": "inet", "addr": "127.0.0.1"}], None))
@patch("dns_checker.to_ip", return_value=("127.0.0.1", HostRecord("localhost", (), ("127.0.0.1",))))
def test_reverse_check_disabled(_to_ip, _gai, dns_resolver) -> None:
    with patch("dns_checker.to_hostname") as mock_reverse:
        info = resolve_hostnames(["localhost"], reverse_check=False)["localhost"]

    assert info["resolved"] is True
    mock_reverse.assert_not_called()
