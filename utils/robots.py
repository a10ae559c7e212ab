"""
robots.txt interpretation for AI crawler access.

Each crawler is evaluated with urllib.robotparser against the site root,
so per-agent groups, wildcard groups and Allow overrides are honoured.
"""

import logging
import re
from typing import Iterable, List
from urllib.robotparser import RobotFileParser

from models.enums import AI_CRAWLERS

logger = logging.getLogger(__name__)

SITEMAP_DIRECTIVE = re.compile(r"^\s*sitemap\s*:", re.IGNORECASE | re.MULTILINE)


def blocked_crawlers(
    robots_txt: str,
    origin: str,
    crawlers: Iterable[str] = AI_CRAWLERS,
) -> List[str]:
    """
    List the crawlers that may not fetch the site root.

    Args:
        robots_txt: Raw robots.txt contents
        origin: Site origin, e.g. https://example.com
        crawlers: User agents to check

    Returns:
        Blocked user agents, in the order given
    """
    parser = RobotFileParser()
    parser.parse(robots_txt.splitlines())
    root = origin.rstrip("/") + "/"

    blocked = [bot for bot in crawlers if not parser.can_fetch(bot, root)]
    if blocked:
        logger.debug(f"robots.txt blocks AI crawlers: {', '.join(blocked)}")
    return blocked


def has_sitemap_directive(robots_txt: str) -> bool:
    return bool(SITEMAP_DIRECTIVE.search(robots_txt))
