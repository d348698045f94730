"""Public Suffix List based hostname splitting."""

from .config import ValidatorSettings
from .models import ParsedHostname
from .parser import HostnameParser, PortParseError, StoreNotReadyError
from .refresh_worker import SuffixRefreshWorker
from .suffix_list import PUBLIC_SUFFIX_LIST_URL, SuffixListClient, SuffixListFetchError
from .suffix_store import SuffixStore, iter_rules, sanitize_line
from .validator import HostnameValidator

__all__ = [
    "HostnameParser",
    "HostnameValidator",
    "ParsedHostname",
    "PortParseError",
    "PUBLIC_SUFFIX_LIST_URL",
    "StoreNotReadyError",
    "SuffixListClient",
    "SuffixListFetchError",
    "SuffixRefreshWorker",
    "SuffixStore",
    "ValidatorSettings",
    "iter_rules",
    "sanitize_line",
]
