from __future__ import annotations

import argparse
import json
from dataclasses import replace
from pathlib import Path
from typing import Any

from .config import ValidatorSettings
from .models import ParsedHostname
from .parser import PortParseError
from .suffix_list import SuffixListFetchError
from .utils.io import read_lines, write_jsonl
from .utils.logging import log, warn
from .validator import HostnameValidator


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="hostname-validator",
        description="Split hostnames into host / registrable domain / public suffix using the Public Suffix List.",
    )
    src = p.add_argument_group("Input")
    src.add_argument("hosts", nargs="*", help="Hostnames (host[:port]) or URLs (scheme://host[:port]/...).")
    src.add_argument("--input", type=str, default=None, help="Path to a newline-delimited list of hostnames/URLs (# comments allowed).")

    rules = p.add_argument_group("Suffix list")
    rules.add_argument("--suffix-list", type=str, default=None, help="Read rules from a local public_suffix_list.dat instead of fetching.")
    rules.add_argument("--url", type=str, default=None, help="Suffix list URL (overrides HOSTNAME_VALIDATOR_SUFFIX_LIST_URL).")
    rules.add_argument("--timeout", type=float, default=None, help="Fetch timeout in seconds.")

    out = p.add_argument_group("Output")
    out.add_argument("--format", type=str, default="json", choices=["json", "xml"], help="Printed record format. Default: json")
    out.add_argument("--out", type=str, default=None, help="Write JSONL records to this path instead of printing.")
    return p.parse_args(argv)


def _load_hosts(args: argparse.Namespace) -> list[str]:
    hosts = [h for h in args.hosts if h.strip()]
    if args.input:
        hosts.extend(read_lines(args.input))
    return hosts


def _settings(args: argparse.Namespace) -> ValidatorSettings:
    settings = ValidatorSettings.from_env()
    if args.url:
        settings = replace(settings, suffix_list_url=args.url)
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ValueError("--timeout must be > 0")
        settings = replace(settings, timeout_s=args.timeout)
    return settings


def _parse_one(validator: HostnameValidator, raw: str) -> tuple[ParsedHostname | None, dict[str, Any]]:
    try:
        res = validator.parse_url(raw) if "://" in raw else validator.parse(raw)
    except PortParseError as e:
        warn(f"Skipping {raw!r}: {e}")
        return None, {"input": raw, "valid": False, "error": str(e)}
    rec = res.to_dict()
    rec["input"] = raw
    return res, rec


def run(args: argparse.Namespace) -> int:
    try:
        validator = HostnameValidator(_settings(args))
        hosts = _load_hosts(args)
        if args.suffix_list:
            validator.load_suffix_text(Path(args.suffix_list).read_text(encoding="utf-8"))
        else:
            validator.refresh_suffix_database()
    except (SuffixListFetchError, ValueError, OSError) as e:
        warn(f"error: {e}")
        return 2

    if not hosts:
        warn("No hostnames given.")
        return 0

    parsed = [_parse_one(validator, h) for h in hosts]
    if args.out:
        n = write_jsonl(args.out, (rec for _, rec in parsed))
        log(f"Wrote {n} records to {args.out}")
        return 0

    for res, rec in parsed:
        if args.format == "xml" and res is not None:
            print(res.to_xml_string())
        else:
            print(json.dumps(rec, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> None:
    raise SystemExit(run(_parse_args(argv)))


if __name__ == "__main__":
    main()
