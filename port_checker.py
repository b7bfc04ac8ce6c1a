#!/usr/bin/env python3
import time, socket

from establisher import try_bind, try_connect
from host_record import get_addr_info
from name_resolver import BIND_HINTS, FAMILY_CODES, Hints
from sockets import SocketHandle, get_peer_name, get_sock_name, socket_destroy
from timeouts import Timeout

def _family(cfg: dict) -> int:
    name = (cfg.get("family") or "any").lower()
    if name not in FAMILY_CODES:
        raise ValueError(f"unknown address family {name!r} (expected any, inet or inet6)")
    return FAMILY_CODES[name]

def _attempts(result) -> list[dict]:
    return [{"endpoint": str(a.endpoint), "family": a.endpoint.family_name, "error": a.error}
            for a in result.attempts]

def run_connect_check(conn_cfg: dict) -> dict:
    """
    conn_cfg example:
    {
      "name": "web",
      "host": "example.com",
      "port": 80,
      "timeout": 3.0,
      "total_timeout": 10.0,
      "family": "any"
    }
    """
    host = conn_cfg["host"]
    port = conn_cfg.get("port")
    hints = Hints(family=_family(conn_cfg), socktype=socket.SOCK_STREAM)
    budget = Timeout(block=conn_cfg.get("timeout", 5.0), total=conn_cfg.get("total_timeout"))
    handle = SocketHandle()

    start = time.time()
    peer = None
    try:
        result = try_connect(handle, host, None if port is None else str(port), budget, hints)
        if result.ok:
            name = get_peer_name(handle)
            peer = None if name[0] is None else {"address": name[0], "port": name[1], "family": name[2]}
    finally:
        socket_destroy(handle)
    latency_ms = int((time.time() - start) * 1000)

    return {
        "name": conn_cfg.get("name", f"{host}:{port}"),
        "host": host,
        "port": port,
        "passed": result.ok,
        "endpoint": None if result.endpoint is None else str(result.endpoint),
        "family": None if result.endpoint is None else result.endpoint.family_name,
        "peer": peer,
        "attempts": _attempts(result),
        "latency_ms": latency_ms,
        "error": result.error
    }

def run_bind_check(bind_cfg: dict) -> dict:
    """
    bind_cfg example:
    {
      "name": "ephemeral",
      "host": "*",
      "port": null,
      "family": "any",
      "reuseaddr": false
    }
    """
    host = bind_cfg.get("host", "*")
    port = bind_cfg.get("port")
    hints = Hints(family=_family(bind_cfg), socktype=socket.SOCK_STREAM, flags=BIND_HINTS.flags)
    handle = SocketHandle()

    start = time.time()
    local = None
    try:
        result = try_bind(handle, host, None if port is None else str(port), hints,
                          reuseaddr=bind_cfg.get("reuseaddr", False))
        if result.ok:
            name = get_sock_name(handle)
            local = None if name[0] is None else {"address": name[0], "port": name[1], "family": name[2]}
    finally:
        socket_destroy(handle)
    latency_ms = int((time.time() - start) * 1000)

    return {
        "name": bind_cfg.get("name", f"{host}:{port}"),
        "host": host,
        "port": port,
        "passed": result.ok,
        "endpoint": None if result.endpoint is None else str(result.endpoint),
        "family": None if result.endpoint is None else result.endpoint.family_name,
        "local": local,
        "attempts": _attempts(result),
        "latency_ms": latency_ms,
        "error": result.error
    }

def enumerate_candidates(hosts: list[str]) -> dict:
    """host -> {candidates: [{family, addr}], error}"""
    out = {}
    for host in hosts:
        start = time.time()
        listing, err = get_addr_info(host)
        out[host] = {
            "candidates": listing or [],
            "error": err,
            "latency_ms": int((time.time() - start) * 1000)
        }
    return out
