#!/usr/bin/env python3
"""
Orchestrates DNS, candidate, connect and bind checks from a single config file.
Generates console summary + CSV/JSON reports.
"""

import argparse, json, logging, os, traceback
import pandas as pd
from datetime import datetime, timezone
from dns_checker import resolve_hostnames
from port_checker import enumerate_candidates, run_bind_check, run_connect_check
from sockets import get_hostname

def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

def write_json(path, obj):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)

def ensure_dir(path):
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def utcnow():
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

def run_checks(cfg: dict) -> dict:
    hostname, _ = get_hostname()
    results = {
        "meta": {
            "started_at": utcnow(),
            "hostname": hostname or "unknown",
            "tool": "endpoint-troubleshooter",
            "version": "1.0.0"
        },
        "dns": {},
        "addrinfo": {},
        "connect": [],
        "bind": [],
        "errors": []
    }

    # DNS
    try:
        dns_cfg = cfg.get("dns", {})
        hostnames = dns_cfg.get("hostnames", [])
        if hostnames:
            results["dns"] = resolve_hostnames(hostnames, timeout=dns_cfg.get("timeout", 3.0),
                                               reverse_check=dns_cfg.get("reverse_check", True))
    except Exception as e:
        results["errors"].append(f"DNS error: {e}")
        traceback.print_exc()

    # Candidate listing
    try:
        hosts = cfg.get("addrinfo", {}).get("hosts", [])
        if hosts:
            results["addrinfo"] = enumerate_candidates(hosts)
    except Exception as e:
        results["errors"].append(f"Addrinfo error: {e}")
        traceback.print_exc()

    # Connect
    for conn_cfg in cfg.get("connect", []):
        try:
            results["connect"].append(run_connect_check(conn_cfg))
        except Exception as e:
            results["errors"].append(f"Connect error ({conn_cfg.get('name', conn_cfg.get('host'))}): {e}")
            traceback.print_exc()

    # Bind
    for bind_cfg in cfg.get("bind", []):
        try:
            results["bind"].append(run_bind_check(bind_cfg))
        except Exception as e:
            results["errors"].append(f"Bind error ({bind_cfg.get('name', bind_cfg.get('host'))}): {e}")
            traceback.print_exc()

    results["meta"]["finished_at"] = utcnow()
    return results

def flatten(results: dict) -> list[dict]:
    rows = []
    # DNS rows
    for host, info in results.get("dns", {}).items():
        rows.append({
            "component": "dns",
            "name": host,
            "status": "ok" if info.get("resolved") else "fail",
            "details": json.dumps(info, ensure_ascii=False),
            "latency_ms": info.get("latency_ms", "")
        })
    # Candidate rows
    for host, info in results.get("addrinfo", {}).items():
        rows.append({
            "component": "gai",
            "name": host,
            "status": "ok" if info.get("candidates") else "fail",
            "details": json.dumps(info, ensure_ascii=False),
            "latency_ms": info.get("latency_ms", "")
        })
    # Connect / bind rows
    for component in ("connect", "bind"):
        for item in results.get(component, []):
            rows.append({
                "component": component,
                "name": item.get("name"),
                "status": "ok" if item.get("passed") else "fail",
                "details": json.dumps({
                    "endpoint": item.get("endpoint"),
                    "family": item.get("family"),
                    "attempts": item.get("attempts"),
                    "error": item.get("error")
                }, ensure_ascii=False),
                "latency_ms": item.get("latency_ms", "")
            })
    return rows

def main(argv=None):
    parser = argparse.ArgumentParser(description="Endpoint Resolution & Establishment Troubleshooter")
    parser.add_argument("--config", required=True, help="Path to config JSON")
    parser.add_argument("--out-json", default="report.json", help="Output JSON report")
    parser.add_argument("--out-csv", default="report.csv", help="Output CSV report (flat)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every resolution and attempt")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    cfg = read_json(args.config)
    results = run_checks(cfg)

    # Persist JSON
    ensure_dir(args.out_json)
    write_json(args.out_json, results)

    # Flatten to CSV
    rows = flatten(results)
    df = pd.DataFrame(rows, columns=["component", "name", "status", "details", "latency_ms"])
    ensure_dir(args.out_csv)
    df.to_csv(args.out_csv, index=False)

    # Console summary
    print("=== Endpoint Troubleshooter ===")
    for r in rows:
        print(f"[{r['component'].upper():7}] {str(r['name']):<30} {r['status'].upper():<5} {r['latency_ms']} ms")
    if results["errors"]:
        print("\nErrors captured:")
        for e in results["errors"]:
            print(" -", e)
    print(f"\nSaved: {args.out_json} and {args.out_csv}")
    return 0 if not results["errors"] else 1

if __name__ == "__main__":
    raise SystemExit(main())
