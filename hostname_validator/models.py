from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any

XML_ROOT = "validatedHostname"


@dataclass(frozen=True)
class ParsedHostname:
    """Result of parsing one hostname against the suffix store."""

    source: str
    is_valid: bool = False
    port: int | None = None
    top_level_domain: str | None = None
    domain: str | None = None
    host: str | None = None
    protocol: str | None = None

    def fully_qualified_name(self) -> str | None:
        if not self.is_valid:
            return None
        if self.host and self.host.strip():
            return f"{self.host}.{self.domain}"
        return self.domain

    def wildcard_domain(self) -> str | None:
        if not self.is_valid:
            return None
        return f"*.{self.domain}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "host": self.host,
            "valid": self.is_valid,
            "port": self.port,
            "protocol": self.protocol,
            "source": self.source,
            "tld": self.top_level_domain,
        }

    def to_xml(self) -> ET.Element:
        el = ET.Element(XML_ROOT)
        for key, value in self.to_dict().items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            el.set(key, str(value))
        return el

    def to_xml_string(self) -> str:
        return ET.tostring(self.to_xml(), encoding="unicode")
