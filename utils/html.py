"""
HTML and JSON-LD helpers shared by every rubric.

Parsing always goes through BeautifulSoup with the lxml parser. Malformed
markup never raises; it simply yields fewer elements.
"""

import json
import logging
from typing import Any, Iterator, List, Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements whose text never reaches a reader
_INVISIBLE_TAGS = {"script", "style", "noscript", "template"}

MAIN_CONTENT_SELECTOR = 'main, article, [role="main"], .content, .post, .entry-content'


def parse_html(html: Optional[str]) -> BeautifulSoup:
    """Parse raw markup with lxml."""
    return BeautifulSoup(html or "", "lxml")


def element_text(element: Optional[Tag]) -> str:
    """
    Visible text of an element with whitespace collapsed.

    Script, style and template contents are skipped.
    """
    if element is None:
        return ""
    parts = []
    for string in element.find_all(string=True):
        if string.parent is not None and string.parent.name in _INVISIBLE_TAGS:
            continue
        parts.append(string)
    return " ".join(" ".join(parts).split())


def body_text(soup: BeautifulSoup) -> str:
    """Visible text of <body>, or of the whole document when there is no body."""
    return element_text(soup.body or soup)


def word_count(text: str) -> int:
    return len(text.split())


def main_content(soup: BeautifulSoup, selector: str = MAIN_CONTENT_SELECTOR) -> Optional[Tag]:
    """First element matching selector, or None."""
    return soup.select_one(selector)


def meta_content(soup: BeautifulSoup, name: str = None, prop: str = None) -> str:
    """Content of <meta name=...> or <meta property=...>, stripped."""
    if name:
        tag = soup.find("meta", attrs={"name": name})
    else:
        tag = soup.find("meta", attrs={"property": prop})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def raw_json_ld(soup: BeautifulSoup) -> List[str]:
    """Raw text of every application/ld+json script block."""
    return [
        script.string or script.get_text()
        for script in soup.find_all("script", attrs={"type": "application/ld+json"})
    ]


def json_ld_blocks(soup: BeautifulSoup) -> List[Any]:
    """
    Decoded JSON-LD blocks.

    Blocks that are not valid JSON are skipped and logged at DEBUG.
    """
    blocks = []
    for raw in raw_json_ld(soup):
        try:
            blocks.append(json.loads(raw))
        except (TypeError, ValueError) as e:
            logger.debug(f"Skipping invalid JSON-LD block: {e}")
    return blocks


def iter_json_ld_nodes(blocks: List[Any]) -> Iterator[dict]:
    """
    Yield every entity object in the decoded blocks.

    Top-level objects, arrays of objects and @graph members are all visited.
    """
    stack = list(reversed(blocks))
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            stack.extend(reversed(item))
        elif isinstance(item, dict):
            yield item
            graph = item.get("@graph")
            if isinstance(graph, list):
                stack.extend(reversed(graph))


def node_types(node: dict) -> List[str]:
    """The @type of a node as a list of strings."""
    value = node.get("@type")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [t for t in value if isinstance(t, str)]
    return []


def json_ld_types(blocks: List[Any]) -> List[str]:
    """Every @type found across the blocks, duplicates kept."""
    types = []
    for node in iter_json_ld_nodes(blocks):
        types.extend(node_types(node))
    return types


def nodes_of_type(blocks: List[Any], *type_names: str) -> List[dict]:
    """Nodes whose @type intersects type_names."""
    wanted = set(type_names)
    return [node for node in iter_json_ld_nodes(blocks) if wanted.intersection(node_types(node))]
