"""Hostname -> (host, registrable domain, eTLD) split against a SuffixStore."""
from __future__ import annotations

import re
from typing import Union
from urllib.parse import ParseResult, SplitResult, urlsplit

from .models import ParsedHostname
from .suffix_store import SuffixStore

UrlLike = Union[SplitResult, ParseResult]

_PORT_RE = re.compile(r"^[0-9]+$")


class PortParseError(ValueError):
    pass


class StoreNotReadyError(RuntimeError):
    pass


def split_port(source: str) -> tuple[str, int | None]:
    """Split "host[:port]" on the last colon. Raises PortParseError on a bad port."""
    if ":" not in source:
        return source.strip().lower(), None
    head, _, tail = source.rpartition(":")
    tail = tail.strip()
    if not _PORT_RE.match(tail):
        raise PortParseError(f"invalid port {tail!r} in {source!r}")
    return head.strip().lower(), int(tail)


def split_labels(source: str) -> list[str]:
    return [p.strip() for p in source.split(".") if p.strip()]


class HostnameParser:
    def __init__(self, store: SuffixStore) -> None:
        self.store = store

    def parse(self, source: str | UrlLike) -> ParsedHostname:
        if isinstance(source, str):
            host, port = split_port(source)
            return self._build(host, port=port)
        return self._parse_url(source)

    def parse_url(self, url: str) -> ParsedHostname:
        """Parse a URL string; scheme-less input ("example.com:80/x") is accepted."""
        text = url.strip()
        if "//" not in text:
            text = "//" + text
        return self._parse_url(urlsplit(text))

    def _parse_url(self, url: UrlLike) -> ParsedHostname:
        try:
            port = url.port
        except ValueError as e:
            raise PortParseError(str(e)) from e
        host = (url.hostname or "").lower()
        return self._build(host, port=port, protocol=url.scheme or None)

    def match_suffix(self, labels: list[str]) -> int:
        """
        Number of trailing labels forming the first known suffix, or 0.

        Candidates grow one label at a time from the right and the walk stops
        at the first hit. At most len(labels) - 1 labels are tried so that one
        label is always left over for the registrable domain.
        """
        if self.store.is_empty():
            raise StoreNotReadyError("suffix store is empty; refresh it before parsing")
        rules = self.store.snapshot()
        for n in range(1, len(labels)):
            candidate = ".".join(labels[-n:]).lower()
            if candidate in rules:
                return n
        return 0

    def _build(self, source: str, *, port: int | None = None, protocol: str | None = None) -> ParsedHostname:
        labels = split_labels(source)
        n = self.match_suffix(labels)
        if not n:
            return ParsedHostname(source=source, port=port, protocol=protocol)

        tld = ".".join(labels[-n:]).lower()
        domain = ".".join(labels[-n - 1:]).lower()
        host = ".".join(labels[:-n - 1]).lower()
        return ParsedHostname(
            source=source,
            is_valid=True,
            port=port,
            top_level_domain=tld,
            domain=domain,
            host=host,
            protocol=protocol,
        )
