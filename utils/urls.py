"""
URL validation and path utilities.

This module provides deterministic URL handling for the audit:
1. Only http/https origins are accepted
2. URLs are normalized consistently
3. Path helpers never raise on malformed input
"""

import logging
import re
from typing import List, Optional, Tuple
from urllib.parse import urljoin, urlparse, urlunparse

logger = logging.getLogger(__name__)

# A path made only of word characters, hyphens and slashes
CLEAN_PATH_PATTERN = re.compile(r"^/[\w\-/]*$")


def validate_url(url: str) -> Tuple[bool, str, Optional[str]]:
    """
    Validate a site origin or page URL.

    Performs the following checks:
    1. Parses URL structure
    2. Validates scheme (http/https only)
    3. Ensures hostname is present

    Args:
        url: URL string to validate

    Returns:
        Tuple of (is_valid, normalized_url_or_original, error_message)
        If valid, returns (True, normalized_url, warning_or_None)
        If invalid, returns (False, original_url, error_message)
    """
    if not url:
        return False, url, "URL is required"

    url = url.strip()

    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, url, f"Invalid URL format: {str(e)}"

    if parsed.scheme not in ("http", "https"):
        if not parsed.scheme:
            url = f"https://{url}"
            try:
                parsed = urlparse(url)
            except ValueError:
                return False, url, "Could not parse URL even with https:// prefix"
        else:
            return False, url, f"Invalid scheme: {parsed.scheme}. Only http and https are allowed"

    try:
        hostname = parsed.hostname
    except ValueError:
        hostname = None
    if not hostname:
        return False, url, "URL must have a valid hostname"

    normalized = normalize_url(parsed)

    warning = None
    if parsed.scheme == "http":
        warning = "HTTP URL detected. HTTPS is recommended for security."

    return True, normalized, warning


def normalize_url(parsed) -> str:
    """
    Normalize a parsed URL.

    Normalization rules:
    1. Lowercase scheme and hostname
    2. Remove default ports (80 for http, 443 for https)
    3. Remove trailing slash from path (except for root)
    4. Drop the fragment

    Args:
        parsed: ParseResult from urlparse

    Returns:
        Normalized URL string
    """
    scheme = parsed.scheme.lower()
    hostname = parsed.hostname.lower() if parsed.hostname else ""

    port = parsed.port
    if port:
        if (scheme == "http" and port == 80) or (scheme == "https" and port == 443):
            port = None

    netloc = hostname
    if port:
        netloc = f"{hostname}:{port}"

    path = parsed.path or "/"
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/")

    return urlunparse((scheme, netloc, path, "", parsed.query, ""))


def extract_domain(url: str) -> Optional[str]:
    """
    Extract the lower-cased hostname from a URL.

    Returns None if extraction fails.
    """
    try:
        parsed = urlparse(url)
        return parsed.hostname.lower() if parsed.hostname else None
    except ValueError:
        return None


def url_path(url: str) -> Optional[str]:
    """Path component of a URL, "/" for an empty path, None if unparsable."""
    try:
        parsed = urlparse(url)
    except ValueError:
        logger.debug(f"Unparsable URL skipped: {url!r}")
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed.path or "/"


def path_segments(url: str) -> List[str]:
    """Non-empty path segments, e.g. /shop/shoes/ -> ["shop", "shoes"]."""
    path = url_path(url) or ""
    return [segment for segment in path.split("/") if segment]


def is_clean_path(url: str, max_length: int) -> bool:
    """True when the path is hierarchical, query-free and shorter than max_length."""
    path = url_path(url)
    if path is None:
        return False
    return bool(CLEAN_PATH_PATTERN.match(path)) and len(path) < max_length


def is_internal_link(href: str, page_url: str) -> bool:
    """
    True when href resolves to the same host as page_url.

    Fragment-only and javascript: links are not counted as links at all.
    """
    href = (href or "").strip()
    if not href or href.startswith("#") or href.lower().startswith("javascript:"):
        return False
    if href.startswith("/") and not href.startswith("//"):
        return True
    try:
        resolved = urljoin(page_url, href)
    except ValueError:
        return False
    target = extract_domain(resolved)
    return target is not None and target == extract_domain(page_url)


def is_external_link(href: str, page_url: str) -> bool:
    """True for http(s) links, absolute or protocol-relative, to a different host."""
    href = (href or "").strip()
    if href.startswith("//"):
        # Only the host is compared, so the scheme is immaterial
        href = f"https:{href}"
    if not href.lower().startswith(("http://", "https://")):
        return False
    target = extract_domain(href)
    return target is not None and target != extract_domain(page_url)
