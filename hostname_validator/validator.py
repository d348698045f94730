"""Wires a SuffixStore, SuffixListClient, HostnameParser and refresh worker together."""
from __future__ import annotations

import asyncio
import threading
from typing import Any, Awaitable, Callable

from .config import ValidatorSettings
from .models import ParsedHostname
from .parser import HostnameParser, UrlLike
from .refresh_worker import SuffixRefreshWorker
from .suffix_list import SuffixListClient
from .suffix_store import RuleCallback, SuffixStore
from .utils.logging import log


class HostnameValidator:
    def __init__(
        self,
        settings: ValidatorSettings | None = None,
        *,
        store: SuffixStore | None = None,
        client: SuffixListClient | None = None,
        bootstrap_on_demand: bool = False,
    ) -> None:
        self.settings = settings or ValidatorSettings()
        self.store = store if store is not None else SuffixStore()
        self.client = client or SuffixListClient(
            url=self.settings.suffix_list_url,
            timeout_s=self.settings.timeout_s,
            user_agent=self.settings.user_agent,
        )
        self.parser = HostnameParser(self.store)
        self.bootstrap_on_demand = bootstrap_on_demand
        self._bootstrap_lock = threading.Lock()
        self._bootstrap_lock_async = asyncio.Lock()

    def load_suffix_text(self, raw_text: str, on_each_rule: RuleCallback | None = None) -> int:
        count = self.store.replace_all(raw_text, on_each_rule)
        log(f"Loaded {count} suffix rules.")
        return count

    def refresh_suffix_database(self, on_each_rule: RuleCallback | None = None) -> int:
        text = self.client.fetch()
        count = self.store.replace_all(text, on_each_rule)
        log(f"Loaded {count} suffix rules from {self.client.url}.")
        return count

    async def refresh_suffix_database_async(
        self,
        on_each_rule: Callable[[str, str], Awaitable[Any] | Any] | None = None,
    ) -> int:
        text = await self.client.fetch_async()
        count = await self.store.replace_all_async(text, on_each_rule)
        log(f"Loaded {count} suffix rules from {self.client.url}.")
        return count

    def ensure_ready(self) -> None:
        """Fetch the suffix list once if the store is still empty."""
        if not self.store.is_empty():
            return
        with self._bootstrap_lock:
            if self.store.is_empty():
                self.refresh_suffix_database()

    async def ensure_ready_async(self) -> None:
        if not self.store.is_empty():
            return
        async with self._bootstrap_lock_async:
            if self.store.is_empty():
                await self.refresh_suffix_database_async()

    def parse(self, source: str | UrlLike) -> ParsedHostname:
        if self.bootstrap_on_demand:
            self.ensure_ready()
        return self.parser.parse(source)

    def parse_url(self, url: str) -> ParsedHostname:
        if self.bootstrap_on_demand:
            self.ensure_ready()
        return self.parser.parse_url(url)

    def worker(self, interval_s: float | None = None) -> SuffixRefreshWorker:
        return SuffixRefreshWorker(
            self.refresh_suffix_database_async,
            interval_s=interval_s if interval_s is not None else self.settings.refresh_interval_s,
        )
