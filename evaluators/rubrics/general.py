"""
Condensed integration rubric for sites that match no specific archetype.
"""

import re
from typing import Dict

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
from utils.html import element_text, meta_content, word_count
from utils.urls import is_clean_path

INFO_URL = re.compile(r"/docs|/documentation|/guide|/reference|/help|/faq|/about", re.IGNORECASE)
ABOUT_URL = re.compile(r"/about", re.IGNORECASE)
PRIVACY_URL = re.compile(r"/privacy", re.IGNORECASE)
TERMS_URL = re.compile(r"/terms", re.IGNORECASE)
SOCIAL_LINKS = (
    'a[href*="twitter.com"], a[href*="x.com"], a[href*="linkedin.com"], '
    'a[href*="facebook.com"], a[href*="github.com"], a[href*="instagram.com"]'
)


def evaluate_documentation_structure(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    info_pages = pages_with_url(ctx, INFO_URL)
    rubric.tiered("Information pages exist", len(info_pages), f"{len(info_pages)} informational page(s) found", 20,
                  pass_at=2, partial_at=1, partial_points=10)
    if not info_pages:
        rubric.recommend("Create informational pages (about, FAQ, guides) that explain what the site offers.")

    sample = ctx.pages[:10]
    consistent = sum(
        1 for page in sample
        if len(page.soup.find_all("h1")) == 1 and len(page.soup.find_all("h2")) >= 2
    )
    heading_ratio = ratio(consistent, len(sample))
    if not rubric.tiered(
        "Consistent heading hierarchy", heading_ratio,
        f"{round(heading_ratio * 100)}% of pages have consistent heading structure", 20,
        pass_at=0.8, partial_at=0.5, partial_points=10,
    ):
        rubric.recommend("Use a single H1 and several H2s on every page.")

    has_navigation = any(
        sum(len(el.find_all("a")) for el in page.soup.select('nav, aside, .sidebar, .toc, [role="navigation"]')) > 5
        for page in ctx.pages
    )
    rubric.binary("Navigation structure", has_navigation, "Navigation structure detected", 20,
                  miss_details="No navigation structure found")

    clean = sum(1 for url in ctx.urls if is_clean_path(url, 100))
    clean_ratio = ratio(clean, len(ctx.pages))
    rubric.tiered("Clean URL structure", clean_ratio,
                  f"{round(clean_ratio * 100)}% of pages have clean URL structure", 20,
                  pass_at=0.8, partial_at=0.5, partial_points=10)

    rubric.binary(
        "Search functionality",
        any_page_selects(ctx, 'input[type="search"], [role="search"], .search, #search'),
        "Search functionality detected", 20, miss_details="No search functionality found",
    )

    return rubric.score(weight)


def evaluate_content_quality(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    total_words = 0
    substantive = 0
    structured = 0
    with_schema = 0
    described = 0
    for page in ctx.pages:
        soup = page.soup
        main = soup.select_one('main, article, [role="main"], .content')
        words = word_count(element_text(main) if main is not None else page.text)
        total_words += words
        if words >= 300:
            substantive += 1
        if len(soup.select("ul li, ol li")) >= 3 and len(soup.select("h2, h3")) >= 2:
            structured += 1
        if page.json_ld_raw:
            with_schema += 1
        if len(meta_content(soup, name="description")) >= 50:
            described += 1

    average = round(ratio(total_words, len(ctx.pages)))
    rubric.tiered("Content depth (word count)", average, f"Average {average} words per page", 20,
                  pass_at=500, partial_at=200, partial_points=10)
    if average < 300:
        rubric.recommend("Expand thin pages. Engines prefer citing detailed, comprehensive content.")
    rubric.tiered("Pages with substantive content (300+ words)", substantive,
                  f"{substantive} page(s) with 300+ words of content", 20,
                  pass_at=5, partial_at=2, partial_points=10)
    rubric.tiered("Structured content (headings + lists)", structured,
                  f"{structured} page(s) with well-structured content", 20,
                  pass_at=3, partial_at=1, partial_points=10)
    rubric.tiered("Structured data present", with_schema, f"{with_schema} page(s) with JSON-LD structured data", 20,
                  pass_at=3, partial_at=1, partial_points=10)
    meta_ratio = ratio(described, len(ctx.pages))
    rubric.tiered("Meta descriptions quality", meta_ratio,
                  f"{round(meta_ratio * 100)}% of pages have quality meta descriptions", 20,
                  pass_at=0.8, partial_at=0.5, partial_points=10)

    return rubric.score(weight)


def evaluate_trust_signals(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    if not rubric.binary("About page exists", bool(pages_with_url(ctx, ABOUT_URL)), "About page found", 20,
                         miss_details="No about page detected"):
        rubric.recommend("Publish an about page describing who runs the site and why it can be trusted.")

    has_privacy = bool(pages_with_url(ctx, PRIVACY_URL)) or bool(re.search(r"privacy policy", text, re.IGNORECASE))
    has_terms = bool(pages_with_url(ctx, TERMS_URL)) or bool(
        re.search(r"terms of service|terms of use|terms and conditions", text, re.IGNORECASE)
    )
    details = f"Privacy: {'found' if has_privacy else 'missing'}, Terms: {'found' if has_terms else 'missing'}"
    rubric.tiered("Privacy policy and terms", int(has_privacy) + int(has_terms), details, 20,
                  pass_at=2, partial_at=1, partial_points=10)

    rubric.binary(
        "Contact information visible",
        bool(re.search(r"contact us|phone|email|address|\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", text, re.IGNORECASE)),
        "Contact information found", 20, miss_details="No contact information detected",
    )
    rubric.binary(
        "Social media presence",
        any(len(page.soup.select(SOCIAL_LINKS)) >= 2 for page in ctx.pages),
        "Social media links found", 20, miss_details="No social media links detected",
    )
    rubric.binary(
        "Trust indicators (certifications, history)",
        bool(re.search(r"certified|accredited|award|established|founded|since \d{4}|trusted by|used by",
                       text, re.IGNORECASE)),
        "Trust indicators found", 20, miss_details="No trust indicators detected",
    )

    return rubric.score(weight)


CATEGORIES: Dict[str, IntegrationEvaluator] = {
    "documentation_structure": evaluate_documentation_structure,
    "llms_txt": evaluate_llms_txt,
    "machine_readable_sitemaps": evaluate_machine_readable_sitemaps,
    "content_quality": evaluate_content_quality,
    "trust_signals": evaluate_trust_signals,
}
