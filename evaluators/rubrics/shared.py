"""
Integration categories shared by every archetype (llms.txt and
machine-readable sitemaps) plus small page-scanning helpers the
archetype rubrics build on.
"""

import re
from typing import Callable, List, Pattern

from evaluators.context import ParsedPage, SiteContext
from evaluators.rubric import Rubric
from models.enums import AI_CRAWLERS, FindingStatus
from models.schemas import CategoryScore
from utils.robots import blocked_crawlers, has_sitemap_directive
from utils.urls import is_clean_path

LLMS_H1 = re.compile(r"^#\s+\S", re.MULTILINE)
LLMS_H2 = re.compile(r"^##\s+", re.MULTILINE)
LLMS_URL = re.compile(r"https?://\S+")

BREADCRUMB_SELECTOR = '[itemtype*="BreadcrumbList"], nav[aria-label="breadcrumb"], .breadcrumb'

IntegrationEvaluator = Callable[[SiteContext, float], CategoryScore]


def pages_with_url(ctx: SiteContext, pattern: Pattern) -> List[ParsedPage]:
    """Pages whose URL matches pattern."""
    return [page for page in ctx.pages if pattern.search(page.url)]


def any_page_selects(ctx: SiteContext, selector: str) -> bool:
    """True when at least one page has an element matching the CSS selector."""
    return any(page.soup.select_one(selector) is not None for page in ctx.pages)


def ratio(part: int, whole: int) -> float:
    return part / whole if whole else 0


def evaluate_llms_txt(ctx: SiteContext, weight: float) -> CategoryScore:
    """Presence and structure of /llms.txt and /llms-full.txt."""
    rubric = Rubric()
    llms_txt = ctx.resources.llms_txt

    if not rubric.binary(
        "/llms.txt file exists", llms_txt is not None, "llms.txt found", 25,
        miss_details="No llms.txt file at site root",
    ):
        rubric.recommend(
            "Create an /llms.txt file at your domain root. It gives LLMs a structured, "
            "token-efficient summary of your site."
        )

    if llms_txt:
        rubric.binary(
            "H1 heading with site name", bool(LLMS_H1.search(llms_txt)), "H1 heading found", 15,
            miss_details="Missing required H1 heading",
        )
        rubric.binary(
            "Summary blockquote", ">" in llms_txt, "Summary blockquote found", 15,
            miss_details="Missing summary blockquote",
        )
        sections = len(LLMS_H2.findall(llms_txt))
        rubric.tiered(
            "H2 sections with categorized links", sections, f"{sections} H2 section(s) found", 15,
            pass_at=2, partial_at=1, partial_points=8,
        )
        urls = len(LLMS_URL.findall(llms_txt))
        rubric.tiered(
            "URL links present", urls, f"{urls} URL(s) in llms.txt", 15,
            pass_at=5, partial_at=2, partial_points=8,
        )
    else:
        for check in ("H1 heading", "Summary blockquote", "H2 sections", "URL links"):
            rubric.add(check, FindingStatus.FAIL, "N/A: no llms.txt file", 0, 15)

    if not rubric.binary(
        "/llms-full.txt companion file", ctx.resources.llms_full_txt is not None,
        "llms-full.txt found", 15, miss_details="No llms-full.txt file",
    ):
        rubric.recommend(
            "Create an /llms-full.txt with your complete site content in a single Markdown file "
            "for AI agents to ingest."
        )

    return rubric.score(weight)


def evaluate_machine_readable_sitemaps(ctx: SiteContext, weight: float) -> CategoryScore:
    """robots.txt crawler access, sitemap discovery and navigable markup."""
    rubric = Rubric()
    robots_txt = ctx.resources.robots_txt

    if not rubric.binary(
        "robots.txt exists", robots_txt is not None, "robots.txt found", 15,
        miss_details="No robots.txt",
    ):
        rubric.recommend(
            "Publish a robots.txt that explicitly allows AI crawlers and points at your sitemap."
        )

    if robots_txt:
        blocked = blocked_crawlers(robots_txt, ctx.origin)
        if not blocked:
            rubric.add("AI bot access (robots.txt)", FindingStatus.PASS, "All major AI bots allowed", 20, 20)
        else:
            status = FindingStatus.PARTIAL if len(blocked) <= 2 else FindingStatus.FAIL
            points = (len(AI_CRAWLERS) - len(blocked)) * 4
            rubric.add("AI bot access (robots.txt)", status, f"Blocked: {', '.join(blocked)}", points, 20)
            rubric.recommend(f"Unblock AI crawlers in robots.txt. Currently blocked: {', '.join(blocked)}.")

        rubric.binary(
            "Sitemap referenced in robots.txt", has_sitemap_directive(robots_txt),
            "Sitemap directive found", 10, miss_details="No Sitemap directive in robots.txt",
        )
    else:
        rubric.add("AI bot access", FindingStatus.PARTIAL, "Cannot check: no robots.txt", 10, 20)
        rubric.add("Sitemap in robots.txt", FindingStatus.FAIL, "No robots.txt", 0, 10)

    rubric.binary(
        "llms.txt present", bool(ctx.resources.llms_txt), "llms.txt available", 15,
        miss_details="No llms.txt",
    )

    rubric.binary(
        "Breadcrumb navigation", any_page_selects(ctx, BREADCRUMB_SELECTOR),
        "Breadcrumb navigation found", 10, miss_details="No breadcrumbs detected",
    )

    has_semantic = any(
        page.soup.find("nav") is not None and page.soup.select_one('main, [role="main"]') is not None
        for page in ctx.pages
    )
    rubric.binary(
        "Semantic HTML (<nav>, <main>)", has_semantic, "Semantic HTML elements used", 15,
        miss_details="Missing semantic HTML elements",
    )

    clean = sum(1 for url in ctx.urls if is_clean_path(url, 80))
    clean_ratio = ratio(clean, len(ctx.pages))
    rubric.tiered(
        "Clean URL structure", clean_ratio,
        f"{round(clean_ratio * 100)}% of URLs are clean and hierarchical", 15,
        pass_at=0.8, partial_at=0.5, partial_points=8,
    )

    return rubric.score(weight)
