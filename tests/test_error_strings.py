"""Tests for the error translation tables."""

import errno
import os
import socket

from error_strings import (
    IO_CLOSED, IO_TIMEOUT, error_text, gai_strerror, host_strerror, socket_strerror,
)


class TestGaiStrerror:

    def test_success_is_none(self) -> None:
        assert gai_strerror(0) is None
        assert gai_strerror(None) is None

    def test_noname(self) -> None:
        assert gai_strerror(socket.EAI_NONAME) == "host or service not provided, or not known"

    def test_service(self) -> None:
        assert gai_strerror(socket.EAI_SERVICE) == "service not supported for socket type"

    def test_unknown_code_mentions_code(self) -> None:
        assert "12345" in gai_strerror(12345)


class TestSocketStrerror:

    def test_table_entries(self) -> None:
        assert socket_strerror(errno.ECONNREFUSED) == "connection refused"
        assert socket_strerror(errno.EADDRINUSE) == "address already in use"
        assert socket_strerror(errno.ECONNRESET) == "closed"

    def test_pseudo_codes(self) -> None:
        assert socket_strerror(IO_TIMEOUT) == "timeout"
        assert socket_strerror(IO_CLOSED) == "closed"

    def test_falls_back_to_os_text(self) -> None:
        assert socket_strerror(errno.ENOENT) == os.strerror(errno.ENOENT).lower()

    def test_success_is_none(self) -> None:
        assert socket_strerror(0) is None


def test_host_strerror() -> None:
    assert host_strerror(1) == "host not found"
    assert host_strerror(0) is None


class TestErrorText:

    def test_gaierror(self) -> None:
        exc = socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        assert error_text(exc) == "host or service not provided, or not known"

    def test_herror(self) -> None:
        assert error_text(socket.herror(1, "Unknown host")) == "host not found"

    def test_timeout_without_errno(self) -> None:
        assert error_text(TimeoutError("timed out")) == "timeout"

    def test_oserror(self) -> None:
        exc = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")
        assert error_text(exc) == "connection refused"

    def test_plain_message(self) -> None:
        assert error_text(OSError("weird")) == "weird"
