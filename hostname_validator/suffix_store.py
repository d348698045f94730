"""In-memory public suffix rule snapshot.

The store never mutates a set that readers may hold: every refresh builds a
new frozenset and swaps the reference under a lock, so a lookup sees either the
previous rules or the new ones in full.
"""
from __future__ import annotations

import inspect
import threading
from typing import Any, Awaitable, Callable, Iterable, Iterator

RuleCallback = Callable[[str, str], Any]

# Removed in this order; "*" and "!" last so "!." / "*." lose their dot too.
_MARKERS = ("!.", "*.", "*", "!")


def is_rule_line(line: str) -> bool:
    s = line.strip()
    if not s:
        return False
    return not (s.startswith("//") or s.startswith("#"))


def sanitize_line(line: str) -> str:
    """Flatten a PSL line into a plain lowercase suffix (wildcard/exception markers dropped)."""
    s = line.strip()
    for marker in _MARKERS:
        s = s.replace(marker, "")
    return s.strip().lower()


def iter_rules(raw_text: str) -> Iterator[tuple[str, str]]:
    """Yield (normalized, original_line) for every rule line in `raw_text`."""
    for line in raw_text.splitlines():
        if not is_rule_line(line):
            continue
        rule = sanitize_line(line)
        if not rule:
            continue
        yield rule, line


class SuffixStore:
    def __init__(self, rules: Iterable[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._rules: frozenset[str] = frozenset(rules or ())

    def snapshot(self) -> frozenset[str]:
        return self._rules

    def contains(self, label: str) -> bool:
        return label in self._rules

    def __contains__(self, label: object) -> bool:
        return label in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def is_empty(self) -> bool:
        return not self._rules

    def _swap(self, rules: set[str]) -> int:
        snap = frozenset(rules)
        with self._lock:
            self._rules = snap
        return len(snap)

    def replace_all(self, raw_text: str, on_each_rule: RuleCallback | None = None) -> int:
        """
        Replace the whole rule set with the rules parsed from `raw_text`.

        `on_each_rule(normalized, original)` runs once per rule, in file order.
        If it raises, the exception propagates and the previous snapshot stays
        in place. Returns the number of distinct rules now held.
        """
        rules: set[str] = set()
        for rule, line in iter_rules(raw_text):
            rules.add(rule)
            if on_each_rule is not None:
                on_each_rule(rule, line)
        return self._swap(rules)

    async def replace_all_async(
        self,
        raw_text: str,
        on_each_rule: Callable[[str, str], Awaitable[Any] | Any] | None = None,
    ) -> int:
        """Like `replace_all`, awaiting the callback before moving to the next line."""
        rules: set[str] = set()
        for rule, line in iter_rules(raw_text):
            rules.add(rule)
            if on_each_rule is not None:
                res = on_each_rule(rule, line)
                if inspect.isawaitable(res):
                    await res
        return self._swap(rules)
