"""Small HTTP client for the Public Suffix List text."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

import aiohttp
import requests

PUBLIC_SUFFIX_LIST_URL = "https://publicsuffix.org/list/public_suffix_list.dat"
DEFAULT_USER_AGENT = "hostname-validator/0.1 (+https://publicsuffix.org)"


class SuffixListFetchError(RuntimeError):
    pass


@dataclass
class SuffixListClient:
    url: str = PUBLIC_SUFFIX_LIST_URL
    timeout_s: float = 30.0
    user_agent: str | None = DEFAULT_USER_AGENT

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent} if self.user_agent else {}

    def fetch(self) -> str:
        try:
            resp = requests.get(self.url, headers=self._headers(), timeout=self.timeout_s)
        except requests.RequestException as e:
            raise SuffixListFetchError(f"fetching {self.url} failed: {e}") from e
        if resp.status_code >= 400:
            raise SuffixListFetchError(f"fetching {self.url} failed: HTTP {resp.status_code}")
        resp.encoding = "utf-8"
        return self._check_body(resp.text)

    async def fetch_async(self) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout_s)
        try:
            async with aiohttp.ClientSession(headers=self._headers(), timeout=timeout) as session:
                async with session.get(self.url, allow_redirects=True) as resp:
                    if resp.status >= 400:
                        raise SuffixListFetchError(f"fetching {self.url} failed: HTTP {resp.status}")
                    raw = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SuffixListFetchError(f"fetching {self.url} failed: {e}") from e
        return self._check_body(raw.decode("utf-8", errors="replace"))

    def _check_body(self, text: str) -> str:
        if not text or not text.strip():
            raise SuffixListFetchError(f"empty suffix list from {self.url}")
        return text
