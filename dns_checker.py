#!/usr/bin/env python3
import time
from dns import exception, resolver, reversename

from host_record import get_addr_info, to_hostname, to_ip

def _norm(name):
    return str(name).rstrip(".").lower() if name else None

def _dns_names(res, qname, rtype) -> list[str]:
    try:
        ans = res.resolve(qname, rtype, raise_on_no_answer=False)
    except exception.DNSException:
        return []
    if not ans:
        return []
    return [str(a.target).rstrip(".") for a in ans]

def check_round_trip(record, res=None) -> dict:
    """
    Forward record -> primary address -> reverse lookup.
    The canonical names match for any host with a single PTR mapping.
    """
    out = {"reverse_name": None, "ptr": [], "round_trip_ok": None, "reverse_error": None}
    primary = record.primary_address
    if not primary:
        return out
    name, rev = to_hostname(primary)
    if name is None:
        out["reverse_error"] = rev
    else:
        out["reverse_name"] = name
        out["round_trip_ok"] = _norm(name) == _norm(record.name)
    if res is not None:
        out["ptr"] = _dns_names(res, reversename.from_address(primary), "PTR")
    return out

def resolve_hostnames(hostnames: list[str], timeout: float = 3.0, reverse_check: bool = True) -> dict:
    """
    Returns map of hostname -> {resolved: bool, canonical_name, aliases: [], addresses: [],
    cname: [], ptr: [], round_trip_ok, latency_ms: int, error: str|None}
    """
    out = {}
    res = resolver.Resolver()
    res.lifetime = timeout
    res.timeout = timeout

    for host in hostnames:
        start = time.time()
        info = {"resolved": False, "canonical_name": None, "aliases": [], "addresses": [],
                "cname": [], "latency_ms": None, "error": None}
        try:
            address, record = to_ip(host)
            if address is None:
                info["error"] = record
            else:
                info["canonical_name"] = record.name
                info["aliases"] = list(record.aliases)
                info["addresses"] = list(record.addresses)

            # legacy host lookups are IPv4 only; fill in from the candidate listing
            listing, err = get_addr_info(host)
            if listing:
                for entry in listing:
                    if entry["addr"] not in info["addresses"]:
                        info["addresses"].append(entry["addr"])
            elif info["error"] is None:
                info["error"] = err

            info["cname"] = _dns_names(res, host, "CNAME")

            if reverse_check and info["canonical_name"]:
                info.update(check_round_trip(record, res))

            info["resolved"] = len(info["addresses"]) > 0
            if info["resolved"]:
                info["error"] = None
        except Exception as e:
            info["error"] = str(e)
        finally:
            info["latency_ms"] = int((time.time() - start) * 1000)
            out[host] = info

    return out
