"""
Parsed analysis inputs.

Pages are parsed exactly once into ParsedPage objects. Every rubric reads
from these and never mutates them, so they can be shared across worker
threads.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import cached_property
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from models.schemas import PageSnapshot, SiteResources
from utils.html import body_text, json_ld_blocks, json_ld_types, parse_html, raw_json_ld

logger = logging.getLogger(__name__)


@dataclass
class ParsedPage:
    """
    A page snapshot with its parsed forms.

    Attributes:
        snapshot: Original crawler snapshot
        soup: lxml-backed BeautifulSoup tree
        text: Visible body text, whitespace collapsed
        json_ld: Decoded JSON-LD blocks (invalid blocks dropped)
        json_ld_raw: All JSON-LD script text joined, for substring checks
        headers: Response headers with lower-cased names
        scheme: Lower-cased URL scheme, empty when the URL is unparsable
    """
    snapshot: PageSnapshot
    soup: BeautifulSoup
    text: str
    json_ld: List[Any] = field(default_factory=list)
    json_ld_raw: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    scheme: str = ""

    @classmethod
    def from_snapshot(cls, snapshot: PageSnapshot) -> "ParsedPage":
        try:
            scheme = urlparse(snapshot.url).scheme.lower()
        except ValueError:
            logger.debug(f"Unparsable page URL: {snapshot.url!r}")
            scheme = ""

        soup = parse_html(snapshot.html)
        return cls(
            snapshot=snapshot,
            soup=soup,
            text=body_text(soup),
            json_ld=json_ld_blocks(soup),
            json_ld_raw="\n".join(raw_json_ld(soup)),
            headers={k.lower(): v for k, v in snapshot.headers.items()},
            scheme=scheme,
        )

    @property
    def url(self) -> str:
        return self.snapshot.url

    @property
    def html(self) -> str:
        return self.snapshot.html

    @property
    def title(self) -> str:
        if self.snapshot.title:
            return self.snapshot.title
        if self.soup.title is not None:
            return self.soup.title.get_text(strip=True)
        return ""

    @property
    def load_time_ms(self) -> float:
        return self.snapshot.load_time_ms

    @cached_property
    def schema_types(self) -> List[str]:
        return json_ld_types(self.json_ld)

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


@dataclass
class SiteContext:
    """
    Everything a site-level rubric may look at.

    Attributes:
        pages: Parsed pages in crawl order (homepage first)
        resources: robots.txt, llms.txt, OpenAPI and origin
        now: Reference time for freshness checks
    """
    pages: List[ParsedPage]
    resources: SiteResources
    now: datetime

    @classmethod
    def from_inputs(
        cls,
        pages: List[PageSnapshot],
        resources: SiteResources,
        now: Optional[datetime] = None,
    ) -> "SiteContext":
        parsed = [ParsedPage.from_snapshot(page) for page in pages]
        logger.debug(f"Parsed {len(parsed)} page(s) for {resources.origin}")
        return cls(pages=parsed, resources=resources, now=now or datetime.now(timezone.utc))

    @property
    def origin(self) -> str:
        return self.resources.origin

    @cached_property
    def all_text(self) -> str:
        """Body text of every page joined by spaces."""
        return " ".join(page.text for page in self.pages)

    @cached_property
    def all_text_lower(self) -> str:
        return self.all_text.lower()

    @cached_property
    def all_schema_types(self) -> List[str]:
        types = []
        for page in self.pages:
            types.extend(page.schema_types)
        return types

    @cached_property
    def all_json_ld_raw(self) -> str:
        return "\n".join(page.json_ld_raw for page in self.pages)

    @property
    def urls(self) -> List[str]:
        return [page.url for page in self.pages]
