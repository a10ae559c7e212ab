"""
Integration rubric for content publishers (blogs, newsrooms, magazines).

Rewards the signals answer engines use to pick citable sources: named
authors, a visible taxonomy, a steady publishing rhythm, feeds and
original reporting.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from evaluators.context import SiteContext
from evaluators.rubric import Rubric
from evaluators.rubrics.shared import (
    IntegrationEvaluator,
    any_page_selects,
    evaluate_llms_txt,
    evaluate_machine_readable_sitemaps,
    pages_with_url,
    ratio,
)
from models.schemas import CategoryScore
from utils.html import element_text, iter_json_ld_nodes, meta_content
from utils.urls import is_external_link

logger = logging.getLogger(__name__)

AUTHOR_PAGE_URL = re.compile(r"/author/|/contributor/|/writer/|/team/", re.IGNORECASE)
TAXONOMY_URL = re.compile(r"/category/|/topic/|/tag/|/section/", re.IGNORECASE)
ARCHIVE_URL = re.compile(r"/archive|/all-posts|/all-articles|/sitemap|/index", re.IGNORECASE)
NEWSLETTER_URL = re.compile(r"/newsletter|/subscribe|/email", re.IGNORECASE)

BYLINE_TEXT = re.compile(r"by\s+[A-Z][a-z]+\s+[A-Z][a-z]+|author:\s*[A-Z]", re.IGNORECASE)
BYLINE_SELECTOR = '[rel="author"], .author, .byline, [class*="author"]'
AUTHOR_CREDENTIALS = re.compile(
    r"phd|md|certified|years of experience|founder|editor|journalist|correspondent|senior writer|expert",
    re.IGNORECASE,
)
RELATED_LINK = re.compile(r"related|similar|more on|also read|see also", re.IGNORECASE)
DATED_SELECTOR = 'time[datetime], [class*="date"], [class*="publish"]'

ARTICLE_CONTAINER = 'main, article, [role="main"], .content, .post-content'
CONTENT_CONTAINER = 'main, article, [role="main"], .content'
FIRST_HAND = re.compile(
    r"\bwe found\b|\bwe discovered\b|\bwe tested\b|\bour experience\b|\bwe reviewed\b|"
    r"\bwe analyzed\b|\bI tried\b|\bI tested\b|\bmy experience\b",
    re.IGNORECASE,
)
PROPRIETARY_DATA = re.compile(
    r"our data|our research|our analysis|our survey|our study|proprietary|exclusive data", re.IGNORECASE
)
ATTRIBUTED_QUOTE = re.compile(
    r"[\"“”].*[\"“”],?\s*(said|says|told|explains|according to)\s|according to \w+ \w+", re.IGNORECASE
)
ANALYSIS_LANGUAGE = re.compile(
    r"our research shows|our analysis reveals|we concluded|the data suggests|based on our", re.IGNORECASE
)
ATTRIBUTION = re.compile(
    r"according to|as reported by|study by|research from|data from|published in", re.IGNORECASE
)


def parse_date(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string.

    Naive values are taken as UTC. Returns None when the value is not a date.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _container(page, selector: str):
    return page.soup.select_one(selector) or page.soup.body or page.soup


def evaluate_author_credentials(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    raw = ctx.all_json_ld_raw
    has_person = bool(re.search(r"\"Person\"|author", raw, re.IGNORECASE))
    has_social = any(
        re.search(r"sameAs", page.json_ld_raw, re.IGNORECASE)
        and re.search(r"twitter|linkedin|facebook|github", page.json_ld_raw, re.IGNORECASE)
        for page in ctx.pages
    )
    bylines = 0
    for page in ctx.pages:
        if BYLINE_TEXT.search(page.text):
            bylines += 1
        if page.soup.select_one(BYLINE_SELECTOR) is not None:
            bylines += 1

    if not rubric.binary("Person schema for authors", has_person, "Person schema found", 20,
                         miss_details="No Person schema for authors"):
        rubric.recommend(
            "Add Person schema for article authors. Author identity is a core trust signal when "
            "engines choose which sources to cite."
        )
    rubric.tiered("Bylines on articles", bylines, f"{bylines} page(s) with author bylines", 20,
                  pass_at=3, partial_at=1, partial_points=10)
    rubric.binary("Author bio pages", bool(pages_with_url(ctx, AUTHOR_PAGE_URL)), "Author/contributor pages found", 20,
                  miss_details="No dedicated author pages")
    rubric.binary("Author social profile links", has_social, "Social profile links in author schema", 20,
                  miss_details="No author social profiles linked")
    rubric.binary("Author credentials/expertise", bool(AUTHOR_CREDENTIALS.search(ctx.all_text)),
                  "Author credential language found", 20,
                  miss_details="No author credentials or expertise mentioned")

    return rubric.score(weight)


def evaluate_content_taxonomy(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    taxonomy_pages = pages_with_url(ctx, TAXONOMY_URL)
    rubric.tiered("Category/tag URL structure", len(taxonomy_pages),
                  f"{len(taxonomy_pages)} category/tag page(s) found", 25,
                  pass_at=3, partial_at=1, partial_points=12)
    if not taxonomy_pages:
        rubric.recommend("Organise articles into category and tag pages so topic coverage is explicit.")

    rubric.binary("BreadcrumbList schema", bool(re.search(r"BreadcrumbList", ctx.all_json_ld_raw, re.IGNORECASE)),
                  "BreadcrumbList schema found", 25, miss_details="No BreadcrumbList schema")

    clustered = 0
    for page in ctx.pages:
        related = sum(
            1 for anchor in page.soup.find_all("a")
            if RELATED_LINK.search(anchor.get_text() or (anchor.parent.get_text() if anchor.parent else ""))
        )
        if related >= 2:
            clustered += 1
    rubric.tiered("Topic cluster internal linking", clustered, f"{clustered} page(s) with related content links", 25,
                  pass_at=3, partial_at=1, partial_points=12)

    rubric.binary(
        "Tag/category navigation",
        any_page_selects(ctx, '.tags, .tag-cloud, [class*="tag-list"], [class*="category-list"]'),
        "Tag or category navigation found", 25, miss_details="No tag/category navigation detected",
    )

    return rubric.score(weight)


def _publication_dates(ctx: SiteContext):
    """(schema datePublished count, every parseable publication date)."""
    schema_dated = 0
    dates: List[datetime] = []
    for page in ctx.pages:
        for node in iter_json_ld_nodes(page.json_ld):
            value = node.get("datePublished")
            parsed = parse_date(value)
            if parsed is not None:
                schema_dated += 1
                dates.append(parsed)
            elif value:
                logger.debug(f"Unparsable datePublished {value!r} on {page.url}")
        for el in page.soup.select(DATED_SELECTOR):
            parsed = parse_date(el.get("datetime") or el.get_text())
            if parsed is not None and parsed.year >= 2000:
                dates.append(parsed)
    return schema_dated, dates


def evaluate_publishing_cadence(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    now = ctx.now if ctx.now.tzinfo else ctx.now.replace(tzinfo=timezone.utc)

    schema_dated, dates = _publication_dates(ctx)
    rubric.tiered("datePublished in structured data", schema_dated,
                  f"{schema_dated} article(s) with datePublished", 25,
                  pass_at=3, partial_at=1, partial_points=12)
    if not schema_dated:
        rubric.recommend("Add datePublished to article schema. Recency weighs heavily in source selection.")

    this_year = sum(1 for d in dates if d.year == now.year)
    rubric.tiered("Content from current year", this_year, f"{this_year} article(s) from {now.year}", 25,
                  pass_at=3, partial_at=1, partial_points=12)

    cutoff = now - timedelta(days=180)
    months = {(d.year, d.month) for d in dates if d >= cutoff}
    rubric.tiered("Consistent publishing frequency", len(months),
                  f"Content published across {len(months)} month(s) in last 6 months", 25,
                  pass_at=4, partial_at=2, partial_points=12)

    spread_days = (max(dates) - min(dates)).total_seconds() / 86400 if len(dates) >= 2 else 0
    details = (
        f"Content spans {round(spread_days)} days" if spread_days > 0 else "Unable to determine content date range"
    )
    rubric.tiered("Long-term content archive", spread_days, details, 25,
                  pass_at=365, partial_at=90, partial_points=12)

    return rubric.score(weight)


def evaluate_syndication_readiness(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    has_feed = any_page_selects(ctx, 'link[type="application/rss+xml"], link[type="application/atom+xml"]')
    complete_og = sum(
        1 for page in ctx.pages
        if all(meta_content(page.soup, prop=tag) for tag in ("og:title", "og:description", "og:image"))
    )
    has_excerpts = any(
        meta_content(page.soup, name="description")
        or page.soup.select_one('[class*="excerpt"], [class*="summary"]') is not None
        for page in ctx.pages
    )
    has_twitter = any_page_selects(ctx, 'meta[name="twitter:card"], meta[property="twitter:card"]')

    if not rubric.binary("RSS/Atom feed present", has_feed, "RSS/Atom feed found", 30,
                         miss_details="No RSS/Atom feed detected"):
        rubric.recommend("Publish an RSS or Atom feed and link it from every page's <head>.")
    og_ratio = ratio(complete_og, len(ctx.pages))
    rubric.tiered(
        "Complete OpenGraph tags on articles", og_ratio,
        f"{round(og_ratio * 100)}% of pages have complete OG tags (title, description, image)", 30,
        pass_at=0.7, partial_at=0.3, partial_points=15,
    )
    rubric.binary("Clean excerpt generation", has_excerpts, "Excerpt/summary content found", 20,
                  miss_details="No excerpts or summaries detected")
    rubric.binary("Twitter Card meta tags", has_twitter, "Twitter Card tags found", 20,
                  miss_details="No Twitter Card tags")

    return rubric.score(weight)


def evaluate_original_reporting(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    counts = {"first_hand": 0, "data": 0, "quotes": 0, "analysis": 0}
    for page in ctx.pages:
        text = element_text(_container(page, ARTICLE_CONTAINER))
        counts["first_hand"] += bool(FIRST_HAND.search(text))
        counts["data"] += bool(PROPRIETARY_DATA.search(text))
        counts["quotes"] += bool(ATTRIBUTED_QUOTE.search(text))
        counts["analysis"] += bool(ANALYSIS_LANGUAGE.search(text))

    rubric.tiered("First-person experience signals", counts["first_hand"],
                  f"{counts['first_hand']} page(s) with first-person experience language", 25,
                  pass_at=3, partial_at=1, partial_points=12)
    if not counts["first_hand"]:
        rubric.recommend('Describe first-hand experience in articles ("we tested", "in our experience").')
    rubric.tiered("Proprietary data/research", counts["data"],
                  f"{counts['data']} page(s) with original research signals", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.tiered("Original quotes", counts["quotes"], f"{counts['quotes']} page(s) with original quotes", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.tiered("Original analysis patterns", counts["analysis"],
                  f"{counts['analysis']} page(s) with analysis/conclusion language", 25,
                  pass_at=2, partial_at=1, partial_points=12)

    return rubric.score(weight)


def evaluate_source_citation(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    external = 0
    attributions = 0
    referenced = 0
    for page in ctx.pages:
        container = _container(page, CONTENT_CONTAINER)
        external += sum(
            1 for anchor in container.select('a[href^="http"]')
            if is_external_link(anchor.get("href"), ctx.origin)
        )
        attributions += len(ATTRIBUTION.findall(element_text(container)))
        if page.soup.select_one(
            '.footnotes, .references, [class*="footnote"], [class*="source"], sup a[href^="#"]'
        ) is not None:
            referenced += 1

    rubric.tiered("External reference links", external, f"{external} external link(s) found in content", 25,
                  pass_at=10, partial_at=3, partial_points=12)
    if external < 3:
        rubric.recommend("Link out to credible primary sources from every article.")
    rubric.tiered('"According to" attribution patterns', attributions,
                  f"{attributions} attribution pattern(s) found", 25,
                  pass_at=5, partial_at=2, partial_points=12)
    rubric.tiered("Footnotes or references sections", referenced,
                  f"{referenced} page(s) with footnote/reference sections", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.binary(
        "Methodology disclosure",
        bool(re.search(r"methodology|how we|our process|our approach|how we rate|how we score|"
                       r"editorial process|fact.check", ctx.all_text, re.IGNORECASE)),
        "Methodology or editorial process found", 25, miss_details="No methodology disclosure detected",
    )

    return rubric.score(weight)


def evaluate_archive_discoverability(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    archives = pages_with_url(ctx, ARCHIVE_URL)
    rubric.binary("Archive/index pages", bool(archives), f"{len(archives)} archive/index page(s) found", 25,
                  miss_details="No archive or index pages")
    if not rubric.binary(
        "Search functionality",
        any_page_selects(ctx, 'input[type="search"], [role="search"], .search, #search, form[action*="search"]'),
        "Search functionality found", 25, miss_details="No search functionality detected",
    ):
        rubric.recommend("Add site search so readers and agents can reach older articles.")
    related = sum(
        1 for page in ctx.pages
        if page.soup.select_one(
            '[class*="related"], [class*="recommended"], [class*="more-posts"], [class*="also-like"]'
        ) is not None
    )
    rubric.tiered("Related posts/recommended content", related, f"{related} page(s) with related content sections", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.binary(
        "Pagination/previous-next navigation",
        any_page_selects(ctx, '[class*="pagination"], [class*="pager"], a[rel="next"], a[rel="prev"], .page-numbers'),
        "Pagination found", 25, miss_details="No pagination detected",
    )

    return rubric.score(weight)


def evaluate_multimedia_integration(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    images = 0
    described = 0
    has_video = False
    has_visuals = False
    for page in ctx.pages:
        container = _container(page, CONTENT_CONTAINER)
        for img in container.find_all("img"):
            images += 1
            if len(img.get("alt") or "") >= 5:
                described += 1
        has_video |= container.select_one(
            'video, iframe[src*="youtube"], iframe[src*="vimeo"], iframe[src*="wistia"], [class*="video"]'
        ) is not None
        has_visuals |= bool(re.search(r"infographic|data visualization|chart|diagram", element_text(container),
                                      re.IGNORECASE))

    alt_ratio = ratio(described, images)
    details = f"{round(alt_ratio * 100)}% of images have descriptive alt text" if images else "No content images found"
    if not rubric.tiered("Article images with alt text", alt_ratio, details, 25,
                         pass_at=0.7, partial_at=0.4, partial_points=12):
        rubric.recommend("Give every article image descriptive alt text.")
    rubric.binary("Embedded video content", has_video, "Video content found", 25,
                  miss_details="No embedded video detected")
    rubric.binary("Infographics/data visualizations", has_visuals, "Infographic/visualization references found", 25,
                  miss_details="No infographics or data visualizations detected")
    average = ratio(images, len(ctx.pages))
    rubric.tiered("Image density per article", average, f"Average {round(average, 1)} image(s) per page", 25,
                  pass_at=2, partial_at=1, partial_points=12)

    return rubric.score(weight)


def evaluate_newsletter_presence(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    signup = False
    archive = False
    proof = False
    for page in ctx.pages:
        soup = page.soup
        if soup.select_one(
            'input[type="email"], form[action*="subscribe"], form[action*="newsletter"], '
            'form[action*="mailchimp"], form[action*="convertkit"]'
        ) is not None:
            signup = True
        if re.search(r"subscribe|sign up|newsletter|join.*list|get.*inbox", page.text, re.IGNORECASE) and (
            soup.find(["input", "form"]) is not None
        ):
            signup = True
        archive |= bool(re.search(r"newsletter archive|past issues|previous newsletters|newsletter history",
                                  page.text, re.IGNORECASE))
        proof |= bool(re.search(r"\d[\d,]*\s*subscribers?|\d[\d,]*\s*readers?|join\s+\d[\d,]*",
                                page.text, re.IGNORECASE))

    if not rubric.binary("Email signup form", signup, "Newsletter signup form found", 30,
                         miss_details="No email signup form detected"):
        rubric.recommend("Add a newsletter signup form to article pages.")
    rubric.binary("Dedicated newsletter page", bool(pages_with_url(ctx, NEWSLETTER_URL)), "Newsletter page found", 25,
                  miss_details="No dedicated newsletter page")
    rubric.binary("Newsletter archive", archive, "Newsletter archive found", 25,
                  miss_details="No newsletter archive detected")
    rubric.binary("Subscriber social proof", proof, "Subscriber count/social proof found", 20,
                  miss_details="No subscriber count displayed")

    return rubric.score(weight)


CATEGORIES: Dict[str, IntegrationEvaluator] = {
    "author_credentials": evaluate_author_credentials,
    "content_taxonomy": evaluate_content_taxonomy,
    "publishing_cadence": evaluate_publishing_cadence,
    "syndication_readiness": evaluate_syndication_readiness,
    "original_reporting": evaluate_original_reporting,
    "source_citation": evaluate_source_citation,
    "llms_txt": evaluate_llms_txt,
    "machine_readable_sitemaps": evaluate_machine_readable_sitemaps,
    "archive_discoverability": evaluate_archive_discoverability,
    "multimedia_integration": evaluate_multimedia_integration,
    "newsletter_presence": evaluate_newsletter_presence,
}
