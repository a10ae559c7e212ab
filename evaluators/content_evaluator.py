"""
Page-level content (GEO) evaluator.

Scores a single page across 11 categories that describe how easily a
generative answer engine can extract, trust and cite its content. Each
category is a pure function of (page, now, weight); the registry at the
bottom fixes the category order.
"""

import logging
import re
from datetime import datetime
from typing import Callable, Dict, List

from evaluators.context import ParsedPage
from evaluators.patterns import DEFINITION
from evaluators.rubric import Rubric
from models.enums import CONTENT_WEIGHTS, FindingStatus
from models.schemas import CategoryScore, ContentProfile, PageAnalysis
from utils.html import MAIN_CONTENT_SELECTOR, element_text, iter_json_ld_nodes, meta_content, node_types, word_count
from utils.urls import is_external_link, is_internal_link

logger = logging.getLogger(__name__)

HEADING_TAG = re.compile(r"^h[1-6]$")
FAQ_HEADING = re.compile(r"faq|frequently asked|common questions", re.IGNORECASE)
CHANGELOG_HEADING = re.compile(r"changelog|updates|what's new|revision|version history", re.IGNORECASE)

STATISTIC = re.compile(r"\d+(?:\.\d+)?%|\$[\d,]+(?:\.\d+)?|\d+x\s|\d{1,3}(?:,\d{3})+")
INLINE_ATTRIBUTION = re.compile(
    r"[\"“]([^\"“”]+)[\"”].*?(?:said|according to|states|notes|explains|argues)",
    re.IGNORECASE,
)
CITATION_PHRASE = re.compile(
    r"according to|source:|study|research|report|survey|data from|published in|cited in",
    re.IGNORECASE,
)
VISIBLE_DATE = re.compile(
    r"(?:updated|modified|published|posted|last updated)[\s:]*(?:on\s+)?"
    r"(?:january|february|march|april|may|june|july|august|september|october|november|december|"
    r"\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}|\d{4}[/\-]\d{1,2}[/\-]\d{1,2})",
    re.IGNORECASE,
)
LANGUAGE_DEFINITION = re.compile(
    r"(?:\b\w+\b\s+)?(?:is defined as|refers to|is a\s+\w+\s+that|is the process of|"
    r"describes the|means that|can be described as)",
    re.IGNORECASE,
)
SENTENCE_SPLIT = re.compile(r"[.!?]+")
PASSIVE_VOICE = re.compile(r"\b(?:was|were|is|are|been|being|be)\s+\w+ed\b", re.IGNORECASE)
HEDGING = re.compile(
    r"\b(?:might|perhaps|could be|possibly|arguably|it seems|it appears|may or may not|sort of|kind of)\b",
    re.IGNORECASE,
)
EXPERIENCE = re.compile(
    r"\b(?:we tested|in our experience|we found that|our team|we built|we discovered|"
    r"our data shows|we analyzed|our research|we implemented)\b",
    re.IGNORECASE,
)
RESEARCH = re.compile(
    r"\b(?:our survey|our analysis|our benchmark|our study|we surveyed|we analyzed \d|"
    r"our dataset|proprietary data|original research)\b",
    re.IGNORECASE,
)
FRAMEWORK = re.compile(
    r"\b(?:our framework|our methodology|our approach|our model|our system|our process|"
    r"step[- ]by[- ]step|our \d+[- ]step)\b",
    re.IGNORECASE,
)
CREDENTIALS = re.compile(
    r"\b(?:certified|licensed|ph\.?d|board[- ]certified|years of experience|award[- ]winning|"
    r"expert in|specialist|accredited)\b",
    re.IGNORECASE,
)
EDITORIAL_POLICY = re.compile(
    r"editorial (?:policy|guidelines|standards)|fact[- ]check|reviewed by|medically reviewed",
    re.IGNORECASE,
)
ABOUT_OR_CONTACT_HREF = re.compile(r"/(?:about|contact|team)\b", re.IGNORECASE)

PRIORITY_SCHEMA_TYPES = [
    "Article", "BlogPosting", "WebPage", "Organization", "FAQPage",
    "HowTo", "Person", "Product", "SoftwareApplication",
]
ARTICLE_TYPES = {"Article", "BlogPosting", "TechArticle"}
OG_TAGS = ["og:title", "og:description", "og:image", "og:type", "og:url"]


def _paragraphs(page: ParsedPage, min_chars: int) -> List[str]:
    texts = (element_text(p) for p in page.soup.find_all("p"))
    return [t for t in texts if len(t) > min_chars]


def evaluate_content_structure(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    h1_count = len(soup.find_all("h1"))
    h2s = soup.find_all("h2")

    if not rubric.binary(
        "Single H1 tag", h1_count == 1,
        "Page has exactly one H1 heading", 15,
        miss_details=f"Page has {h1_count} H1 heading(s); should have exactly 1",
    ):
        rubric.recommend("Ensure each page has exactly one H1 heading that clearly describes the page topic.")

    levels = [int(tag.name[1]) for tag in soup.find_all(HEADING_TAG)]
    hierarchy_valid = all(cur <= prev + 1 for prev, cur in zip(levels, levels[1:]))
    if not rubric.binary(
        "Heading hierarchy (no skipped levels)", hierarchy_valid,
        "Heading levels follow correct hierarchy", 15,
        miss_details="Heading hierarchy skips levels (e.g. H1 followed by H3)",
    ):
        rubric.recommend(
            "Fix heading hierarchy so no level is skipped (H1, H2, H3 in order). "
            "LLMs use headings as a roadmap of the page."
        )

    if not rubric.tiered(
        "Multiple content sections (3+ H2s)", len(h2s),
        f"Page has {len(h2s)} H2 heading(s)", 15,
        pass_at=3, partial_at=2, partial_points=8,
    ):
        rubric.recommend(
            "Structure content with 3+ H2 sections for comprehensive topic coverage. "
            "Each section should address a distinct sub-topic."
        )

    paragraphs = _paragraphs(page, 20)
    lengths = [len(p.split()) for p in paragraphs]
    long_count = sum(1 for n in lengths if n > 100)
    avg_words = sum(lengths) / len(lengths) if lengths else 0
    good_length = long_count == 0 and 20 <= avg_words <= 80
    details = f"Average paragraph: {round(avg_words)} words, {long_count} overly long paragraph(s)"
    if good_length:
        rubric.add("Paragraph length optimization", FindingStatus.PASS, details, 15, 15)
    elif long_count <= 2:
        rubric.add("Paragraph length optimization", FindingStatus.PARTIAL, details, 8, 15)
    else:
        rubric.add("Paragraph length optimization", FindingStatus.FAIL, details, 0, 15)
    if not good_length:
        rubric.recommend(
            "Keep paragraphs to 60-100 words (3-4 sentences). AI systems rarely extract long "
            "text blocks, so each paragraph should hold one complete idea."
        )

    capsules = 0
    for h2 in h2s:
        following = h2.find_next_sibling()
        if following is not None and following.name == "p":
            words = len(element_text(following).split())
            if 15 <= words <= 80:
                capsules += 1
    capsule_ratio = capsules / len(h2s) if h2s else 0
    if not rubric.tiered(
        "Answer capsules (summary after H2 headings)", capsule_ratio,
        f"{capsules} of {len(h2s)} H2 sections have concise answer capsules", 15,
        pass_at=0.7, partial_at=0.4, partial_points=8,
    ):
        rubric.recommend(
            "Add a 2-4 sentence summary (answer capsule) immediately after each H2 heading. "
            "This gives AI engines an extractable answer block."
        )

    has_faq = any(FAQ_HEADING.search(element_text(h)) for h in soup.find_all(["h2", "h3"]))
    if not rubric.binary(
        "FAQ section present", has_faq, "FAQ section detected", 10,
        miss_details="No FAQ section found",
    ):
        rubric.recommend(
            "Add an FAQ section. Keep answers self-contained at 2-4 sentences each so they "
            "can be quoted directly."
        )

    return rubric.score(weight)


def _article_complete(page: ParsedPage) -> bool:
    for node in iter_json_ld_nodes(page.json_ld):
        if ARTICLE_TYPES.intersection(node_types(node)):
            return bool(node.get("author") and node.get("datePublished") and node.get("headline"))
    return False


def evaluate_schema_markup(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    types = set(page.schema_types)

    block_count = len(page.json_ld)
    if not rubric.binary(
        "JSON-LD structured data present", block_count > 0,
        f"{block_count} JSON-LD block(s) found", 20,
        miss_details="No JSON-LD structured data detected",
    ):
        rubric.recommend(
            "Add JSON-LD structured data. Start with Article, Organization, and FAQPage schemas."
        )

    found = [t for t in PRIORITY_SCHEMA_TYPES if t in types]
    if not rubric.tiered(
        "Priority schema types", len(found),
        f"Found: {', '.join(found)}" if found else "No priority schema types detected", 20,
        pass_at=3, partial_at=1, partial_points=10,
    ):
        rubric.recommend(
            f"Implement more schema types. Currently found: {', '.join(found) or 'none'}. "
            "Add Article for content pages, Organization for your brand, FAQPage for Q&A "
            "sections and Person for author credentials."
        )

    if not rubric.binary(
        "FAQPage schema", "FAQPage" in types, "FAQPage schema implemented", 15,
        miss_details="FAQPage schema not found",
    ):
        rubric.recommend("Add FAQPage schema markup for all Q&A content.")

    has_article = bool(ARTICLE_TYPES.intersection(types))
    complete = has_article and _article_complete(page)
    if complete:
        rubric.add(
            "Article schema with author/date/headline", FindingStatus.PASS,
            "Article schema has author, date, and headline", 15, 15,
        )
    elif has_article:
        rubric.add(
            "Article schema with author/date/headline", FindingStatus.PARTIAL,
            "Article schema found but missing key properties", 8, 15,
        )
    else:
        rubric.add(
            "Article schema with author/date/headline", FindingStatus.FAIL,
            "No Article/BlogPosting schema", 0, 15,
        )
    if not complete:
        rubric.recommend(
            "Add complete Article schema with author, datePublished, dateModified, and headline "
            "properties. This signals content type and freshness to AI engines."
        )

    has_org = "Organization" in types or "LocalBusiness" in types
    if not rubric.binary(
        "Organization schema", has_org, "Organization/LocalBusiness schema found", 10,
        miss_details="No Organization schema",
    ):
        rubric.recommend(
            "Add Organization schema with name, URL, logo, and sameAs links to social profiles. "
            "This establishes entity recognition across AI platforms."
        )

    if not rubric.binary(
        "BreadcrumbList schema", "BreadcrumbList" in types, "Breadcrumb schema found", 10,
        miss_details="No BreadcrumbList schema",
    ):
        rubric.recommend(
            "Add BreadcrumbList schema to help AI engines understand your site hierarchy."
        )

    has_other_formats = bool(page.soup.select_one("[itemscope], [typeof]"))
    rubric.binary(
        "Additional structured data (Microdata/RDFa)", has_other_formats,
        "Additional structured data formats found", 10, miss_points=5,
        miss_details="Only JSON-LD format used (acceptable)",
    )

    return rubric.score(weight)


def evaluate_topical_authority(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    hrefs = [anchor["href"] for anchor in soup.find_all("a", href=True)]
    internal_links = sum(1 for href in hrefs if is_internal_link(href, page.url))
    external_links = sum(1 for href in hrefs if is_external_link(href, page.url))

    if not rubric.tiered(
        "Internal linking", internal_links, f"{internal_links} internal link(s) found", 20,
        pass_at=10, partial_at=5, partial_points=12, floor=3,
    ):
        rubric.recommend(
            "Increase internal linking to 10+ links per page. Internal links help AI engines "
            "understand how your content relates."
        )

    container = soup.select_one(MAIN_CONTENT_SELECTOR)
    content_links = len(container.find_all("a", href=True)) if container is not None else 0
    if not rubric.tiered(
        "Contextual links within content", content_links,
        f"{content_links} link(s) within main content area", 20,
        pass_at=5, partial_at=2, partial_points=10,
    ):
        rubric.recommend(
            "Add contextual links within your content body, not just navigation. Link to related "
            "articles, guides, and resources."
        )

    words = word_count(page.text)
    if not rubric.tiered(
        "Content depth (word count)", words, f"{words} words on page", 20,
        pass_at=1500, partial_at=800, partial_points=12, floor=3,
    ):
        rubric.recommend("Increase content depth. Aim for 1,500+ words on key topic pages.")

    if not rubric.tiered(
        "External reference links", external_links, f"{external_links} external link(s) found", 20,
        pass_at=5, partial_at=2, partial_points=10,
    ):
        rubric.recommend(
            "Add external reference links to credible sources. Citing sources is especially "
            "effective for lower-authority sites."
        )

    topics = {
        " ".join(element_text(h).lower().split()[:3])
        for h in soup.find_all(["h2", "h3"])
    }
    if not rubric.tiered(
        "Topic coverage breadth", len(topics), f"{len(topics)} distinct sub-topic(s) covered", 20,
        pass_at=5, partial_at=3, partial_points=12, floor=3,
    ):
        rubric.recommend(
            "Expand topic coverage with more sub-sections. Covering a topic cluster thoroughly "
            "signals expertise to LLMs."
        )

    return rubric.score(weight)


def evaluate_citation_worthiness(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup
    text = page.text

    stats = len(STATISTIC.findall(text))
    if not rubric.tiered(
        "Statistics and quantitative data", stats, f"{stats} statistical data point(s) found", 25,
        pass_at=5, partial_at=2, partial_points=12,
    ):
        rubric.recommend(
            "Add more statistics and quantitative data. Replace qualitative claims with concrete "
            "numbers (e.g. \"73% of teams adopted the tool within a year\")."
        )

    quote_elements = len(soup.find_all(["blockquote", "q"]))
    attributions = len(INLINE_ATTRIBUTION.findall(text))
    quotes = quote_elements + attributions
    if not rubric.tiered(
        "Expert quotations", quotes,
        f"{quotes} quotation(s) found ({quote_elements} blockquote elements, {attributions} inline attributions)",
        25, pass_at=3, partial_at=1, partial_points=12,
    ):
        rubric.recommend(
            "Add expert quotations. Include 2-3 direct quotes from recognized authorities per "
            "content piece."
        )

    citation_phrases = len(CITATION_PHRASE.findall(text))
    footnote_links = len(soup.select('a[href*="reference"], a[href*="source"], a[href*="cite"], sup a'))
    citations = citation_phrases + footnote_links
    if not rubric.tiered(
        "Source citations", citations, f"{citations} citation/reference pattern(s) found", 25,
        pass_at=5, partial_at=2, partial_points=12,
    ):
        rubric.recommend(
            "Add inline citations from credible sources, with links to the original study or report."
        )

    tables = len(soup.find_all("table"))
    if not rubric.tiered(
        "Data tables", tables, f"{tables} data table(s) found", 15,
        pass_at=2, partial_at=1, partial_points=8,
    ):
        rubric.recommend(
            "Add comparison tables. Convert prose comparisons into structured tables wherever possible."
        )

    definitions = len(DEFINITION.findall(text))
    if not rubric.tiered(
        "Definitional statements", definitions, f"{definitions} definitional statement(s) found", 10,
        pass_at=3, partial_at=1, partial_points=5,
    ):
        rubric.recommend(
            "Add clear definitional statements (e.g. \"[Term] is [definition]\"). LLMs prefer "
            "content with extractable definitions."
        )

    return rubric.score(weight)


def _schema_date(page: ParsedPage, key: str):
    for node in iter_json_ld_nodes(page.json_ld):
        value = node.get(key)
        if value:
            return str(value)
    return None


def evaluate_content_freshness(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    date_modified = _schema_date(page, "dateModified")
    if not rubric.binary(
        "dateModified in schema", bool(date_modified), f"Last modified: {date_modified}", 25,
        miss_details="No dateModified in structured data",
    ):
        rubric.recommend(
            "Add dateModified to your Article/WebPage schema. Answer engines strongly favour "
            "recently updated pages."
        )

    date_elements = len(soup.select("time, [datetime], .date, .published, .updated, .modified"))
    has_date_text = bool(VISIBLE_DATE.search(page.text))
    if date_elements:
        details = f"{date_elements} date element(s) found"
    elif has_date_text:
        details = "Date text found in content"
    else:
        details = "No visible date found"
    if not rubric.binary("Visible date on page", bool(date_elements) or has_date_text, details, 20):
        rubric.recommend(
            "Add visible publication and last-updated dates. Visible timestamps signal freshness "
            "to crawlers and readers."
        )

    date_published = _schema_date(page, "datePublished")
    if not rubric.binary(
        "datePublished in schema", bool(date_published), f"Published: {date_published}", 15,
        miss_details="No datePublished in structured data",
    ):
        rubric.recommend("Add datePublished to your schema so AI engines can place content on a timeline.")

    last_modified = page.header("last-modified")
    if not rubric.binary(
        "HTTP Last-Modified header", bool(last_modified), f"Last-Modified: {last_modified}", 15,
        miss_details="No Last-Modified header",
    ):
        rubric.recommend("Configure your server to send Last-Modified headers.")

    current_year = str(now.year)
    previous_year = str(now.year - 1)
    if current_year in page.text:
        rubric.add(
            "Current year references in content", FindingStatus.PASS,
            f"References to {current_year} found", 15, 15,
        )
    else:
        if previous_year in page.text:
            rubric.add(
                "Current year references in content", FindingStatus.PARTIAL,
                f"Only references to {previous_year} found", 8, 15,
            )
        else:
            rubric.add(
                "Current year references in content", FindingStatus.FAIL,
                "No recent year references found", 0, 15,
            )
        rubric.recommend(f"Update content with current {current_year} references.")

    has_changelog = any(CHANGELOG_HEADING.search(element_text(h)) for h in soup.find_all(["h2", "h3"]))
    rubric.binary(
        "Changelog or update history", has_changelog, "Changelog/update section found", 10,
        miss_details="No changelog section found",
    )

    return rubric.score(weight)


def evaluate_language_patterns(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup
    text = page.text

    definitions = len(LANGUAGE_DEFINITION.findall(text))
    if not rubric.tiered(
        "Definitional statements", definitions, f"{definitions} definitional pattern(s) found", 20,
        pass_at=3, partial_at=1, partial_points=10,
    ):
        rubric.recommend(
            "Add more definitional statements. LLMs prefer clear \"[Subject] is [definition]\" patterns."
        )

    sentences = [s for s in SENTENCE_SPLIT.split(text) if len(s.strip()) > 10]
    avg_sentence = word_count(text) / len(sentences) if sentences else 0
    details = f"Average sentence length: {round(avg_sentence)} words (optimal: 15-25)"
    if 12 <= avg_sentence <= 25:
        rubric.add("Sentence length optimization", FindingStatus.PASS, details, 20, 20)
    else:
        status = FindingStatus.PARTIAL if avg_sentence < 12 else FindingStatus.FAIL
        rubric.add("Sentence length optimization", status, details, 10, 20)
        rubric.recommend("Optimize sentence length to 15-25 words on average.")

    passive = len(PASSIVE_VOICE.findall(text))
    passive_ratio = passive / len(sentences) if sentences else 0
    details = f"Passive voice ratio: {round(passive_ratio * 100)}% (target: <15%)"
    if passive_ratio < 0.15:
        rubric.add("Active voice usage", FindingStatus.PASS, details, 15, 15)
    else:
        if passive_ratio < 0.3:
            rubric.add("Active voice usage", FindingStatus.PARTIAL, details, 8, 15)
        else:
            rubric.add("Active voice usage", FindingStatus.FAIL, details, 0, 15)
        rubric.recommend(
            "Reduce passive voice to under 15%. Use clear subject-verb-object construction."
        )

    hedges = len(HEDGING.findall(text))
    details = f"{hedges} hedging phrase(s) found"
    if hedges <= 3:
        rubric.add("Assertive/declarative tone", FindingStatus.PASS, details, 15, 15)
    else:
        if hedges <= 8:
            rubric.add("Assertive/declarative tone", FindingStatus.PARTIAL, details, 8, 15)
        else:
            rubric.add("Assertive/declarative tone", FindingStatus.FAIL, details, 0, 15)
        rubric.recommend(
            "Reduce hedging language (\"might\", \"perhaps\", \"could be\") and make definitive, "
            "well-supported claims."
        )

    list_items = len(soup.find_all("li"))
    prose = len(_paragraphs(page, 30))
    total = list_items + prose
    list_ratio = list_items / total if total else 0
    details = f"List-to-prose ratio: {round(list_ratio * 100)}% (optimal: 20-40%)"
    if 0.2 <= list_ratio <= 0.5:
        rubric.add("List-to-prose ratio", FindingStatus.PASS, details, 15, 15)
    elif list_ratio > 0:
        rubric.add("List-to-prose ratio", FindingStatus.PARTIAL, details, 8, 15)
    else:
        rubric.add("List-to-prose ratio", FindingStatus.FAIL, details, 0, 15)
    if list_ratio < 0.2:
        rubric.recommend(
            "Add more structured lists. Convert applicable prose into bullet points or numbered lists."
        )

    subheadings = soup.find_all(["h2", "h3"])
    questions = sum(1 for h in subheadings if element_text(h).endswith("?"))
    if not rubric.tiered(
        "Question-format headings", questions,
        f"{questions} of {len(subheadings)} headings use question format", 15,
        pass_at=2, partial_at=1, partial_points=8,
    ):
        rubric.recommend(
            "Use question-format headings (e.g. \"What is GEO?\" instead of \"GEO Overview\"). "
            "This matches how users query AI engines."
        )

    return rubric.score(weight)


def evaluate_meta_information(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    title = soup.title.get_text(strip=True) if soup.title is not None else ""
    if 30 <= len(title) <= 70:
        rubric.add("Title tag (50-60 characters)", FindingStatus.PASS, f"\"{title}\" ({len(title)} chars)", 20, 20)
    elif title:
        rubric.add("Title tag (50-60 characters)", FindingStatus.PARTIAL, f"\"{title}\" ({len(title)} chars)", 10, 20)
        rubric.recommend(f"Optimize title tag length to 50-60 characters. Current: {len(title)} characters.")
    else:
        rubric.add("Title tag (50-60 characters)", FindingStatus.FAIL, "No title tag found", 0, 20)
        rubric.recommend("Add a descriptive title tag.")

    description = meta_content(soup, name="description")
    if 120 <= len(description) <= 160:
        rubric.add("Meta description (150-160 chars)", FindingStatus.PASS, f"{len(description)} characters", 20, 20)
    else:
        if description:
            rubric.add("Meta description (150-160 chars)", FindingStatus.PARTIAL, f"{len(description)} characters", 10, 20)
        else:
            rubric.add("Meta description (150-160 chars)", FindingStatus.FAIL, "No meta description found", 0, 20)
        rubric.recommend(
            "Optimize meta description to 150-160 characters and make it answer-oriented."
        )

    found_og = [tag for tag in OG_TAGS if soup.find("meta", attrs={"property": tag})]
    if not rubric.tiered(
        "Open Graph tags", len(found_og),
        f"{len(found_og)}/{len(OG_TAGS)} OG tags found: {', '.join(found_og) or 'none'}", 20,
        pass_at=4, partial_at=2, partial_points=10,
    ):
        missing = [tag for tag in OG_TAGS if tag not in found_og]
        rubric.recommend(f"Add missing Open Graph tags: {', '.join(missing)}.")

    has_twitter = bool(soup.select_one('meta[name="twitter:card"], meta[property="twitter:card"]'))
    rubric.binary("Twitter Card tags", has_twitter, "Twitter Card tags found", 10, miss_details="No Twitter Card tags")

    canonical = soup.find("link", rel="canonical")
    if not rubric.binary(
        "Canonical URL", canonical is not None,
        f"Canonical: {canonical.get('href') if canonical is not None else ''}", 10,
        miss_details="No canonical URL set",
    ):
        rubric.recommend("Add a canonical URL tag to prevent duplicate content issues.")

    html_tag = soup.find("html")
    lang = html_tag.get("lang") if html_tag is not None else None
    rubric.binary(
        "HTML language attribute", lang is not None, f"Language: {lang}", 10,
        miss_details="No lang attribute on <html>",
    )

    robots = meta_content(soup, name="robots")
    blocked = "noindex" in robots.lower()
    if blocked:
        rubric.add("Robots meta (not blocking indexing)", FindingStatus.FAIL, "Page has noindex directive", 0, 10)
        rubric.recommend(
            "Remove the noindex directive. It prevents search engines and AI crawlers from "
            "indexing your content."
        )
    else:
        details = f"Robots: {robots}" if robots else "No restrictive robots directives"
        rubric.add("Robots meta (not blocking indexing)", FindingStatus.PASS, details, 10, 10)

    return rubric.score(weight)


def evaluate_technical_health(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    load_time = page.load_time_ms
    details = f"{load_time / 1000:.1f}s (target: <2.5s)"
    if load_time < 2000:
        rubric.add("Page load time", FindingStatus.PASS, details, 25, 25)
    else:
        if load_time < 4000:
            rubric.add("Page load time", FindingStatus.PARTIAL, details, 12, 25)
        else:
            rubric.add("Page load time", FindingStatus.FAIL, details, 0, 25)
        rubric.recommend(
            "Improve page load time to under 2.5 seconds. Slow pages create poor extraction experiences."
        )

    is_https = page.scheme == "https" or page.header("strict-transport-security") is not None
    if not rubric.binary(
        "HTTPS", is_https, "Site served over HTTPS", 15,
        miss_details="Page is not served over HTTPS",
    ):
        rubric.recommend("Serve every page over HTTPS and send a Strict-Transport-Security header.")

    body = soup.body
    has_ssr_content = len(page.text) > 200
    empty_body = body is None or (len(body.find_all(recursive=False)) < 3 and len(page.text) < 100)
    rendered = has_ssr_content and not empty_body
    if not rubric.binary(
        "Server-side rendered content", rendered, "Page has server-rendered content", 25,
        miss_details="Page appears to rely on client-side rendering",
    ):
        rubric.recommend(
            "Implement server-side rendering. AI crawlers such as GPTBot and ClaudeBot do not "
            "execute JavaScript, so dynamically loaded content is invisible to them."
        )

    content_type = page.header("content-type") or ""
    rubric.binary(
        "Content-Type header", "text/html" in content_type,
        f"Content-Type: {content_type or 'not set'}", 10, miss_points=5,
    )

    rubric.binary(
        "Mobile viewport", soup.find("meta", attrs={"name": "viewport"}) is not None,
        "Viewport meta tag present", 10, miss_details="No viewport meta tag",
    )

    encoding = page.header("content-encoding")
    rubric.binary(
        "Content compression", encoding is not None, f"Compression: {encoding}", 15,
        miss_points=5, miss_details="No content compression detected",
    )

    return rubric.score(weight)


def evaluate_content_uniqueness(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = page.text

    experience = len(EXPERIENCE.findall(text))
    if not rubric.tiered(
        "First-person experience signals", experience, f"{experience} experience signal(s) found", 25,
        pass_at=3, partial_at=1, partial_points=12,
    ):
        rubric.recommend(
            "Add first-person experience signals (\"we tested\", \"our data shows\", \"in our "
            "experience\") that demonstrate real-world expertise."
        )

    research = len(RESEARCH.findall(text))
    if not rubric.tiered(
        "Original research / proprietary data", research, f"{research} original research signal(s) found", 25,
        pass_at=2, partial_at=1, partial_points=12,
    ):
        rubric.recommend(
            "Include original research, surveys, or proprietary data analysis. Publish benchmarks "
            "nobody else has."
        )

    frameworks = len(FRAMEWORK.findall(text))
    if not rubric.tiered(
        "Unique frameworks or methodologies", frameworks,
        f"{frameworks} framework/methodology reference(s) found", 25,
        pass_at=2, partial_at=1, partial_points=12,
    ):
        rubric.recommend(
            "Develop unique frameworks, methodologies, or mental models. They add information "
            "gain that AI systems prefer to cite."
        )

    container = page.soup.select_one('main, article, [role="main"]')
    words = word_count(element_text(container)) if container is not None else word_count(text)
    if not rubric.tiered(
        "Content depth for uniqueness", words, f"{words} words in main content", 25,
        pass_at=2000, partial_at=1000, partial_points=12, floor=3,
    ):
        rubric.recommend("Deepen content to 2,000+ words with original insights.")

    return rubric.score(weight)


def evaluate_multi_format_content(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    tables = soup.find_all("table")
    structured = [t for t in tables if t.find(["thead", "th"]) is not None]
    details = f"{len(tables)} table(s) found, {len(structured)} with proper headers"
    if structured:
        rubric.add("Data tables", FindingStatus.PASS, details, 20, 20)
    elif tables:
        rubric.add("Data tables", FindingStatus.PARTIAL, details, 10, 20)
    else:
        rubric.add("Data tables", FindingStatus.FAIL, details, 0, 20)
        rubric.recommend("Add HTML tables with proper <thead> and <th> elements.")

    ordered = len(soup.find_all("ol"))
    rubric.binary("Ordered lists (step-by-step)", ordered >= 1, f"{ordered} ordered list(s) found", 15)

    unordered = sum(1 for ul in soup.find_all("ul") if ul.find_parent(["nav", "header", "footer"]) is None)
    rubric.tiered(
        "Unordered lists (in content)", unordered,
        f"{unordered} content list(s) found (excluding navigation)", 10,
        pass_at=2, partial_at=1, partial_points=5,
    )

    code_blocks = len(soup.find_all(["pre", "code"]))
    rubric.binary("Code blocks", code_blocks >= 1, f"{code_blocks} code block(s) found", 15, miss_points=5)

    images = soup.find_all("img")
    with_alt = sum(1 for img in images if (img.get("alt") or "").strip())
    alt_ratio = with_alt / len(images) if images else 1
    if not rubric.tiered(
        "Images with descriptive alt text", alt_ratio,
        f"{with_alt}/{len(images)} images have alt text ({round(alt_ratio * 100)}%)", 15,
        pass_at=0.9, partial_at=0.5, partial_points=8,
    ):
        rubric.recommend("Add descriptive alt text to all images.")

    blockquotes = len(soup.find_all("blockquote"))
    if not rubric.binary("Blockquotes (expert citations)", blockquotes >= 1, f"{blockquotes} blockquote(s) found", 10):
        rubric.recommend("Add blockquote elements for expert citations.")

    videos = len(soup.select('video, iframe[src*="youtube"], iframe[src*="vimeo"], iframe[src*="wistia"]'))
    rubric.binary("Embedded video content", videos >= 1, f"{videos} video embed(s) found", 10, miss_points=3)

    definition_lists = len(soup.find_all("dl"))
    rubric.binary("Definition lists", definition_lists >= 1, f"{definition_lists} definition list(s) found", 5, miss_points=2)

    return rubric.score(weight)


def _has_person_author(page: ParsedPage) -> bool:
    for node in iter_json_ld_nodes(page.json_ld):
        if "Person" in node_types(node):
            return True
        authors = node.get("author")
        if isinstance(authors, dict):
            authors = [authors]
        if isinstance(authors, list):
            if any(isinstance(a, dict) and "Person" in node_types(a) for a in authors):
                return True
    return False


def _has_same_as(page: ParsedPage) -> bool:
    for node in iter_json_ld_nodes(page.json_ld):
        if {"Organization", "LocalBusiness", "Person"}.intersection(node_types(node)) and node.get("sameAs"):
            return True
    return False


def evaluate_eeat_signals(page: ParsedPage, now: datetime, weight: float) -> CategoryScore:
    rubric = Rubric()
    soup = page.soup

    has_byline = bool(
        soup.select_one('[rel~="author"], .author, .byline, [itemprop="author"]')
        or meta_content(soup, name="author")
    )
    if not rubric.binary(
        "Author byline present", has_byline, "Author byline found", 20,
        miss_details="No author byline or author meta tag",
    ):
        rubric.recommend(
            "Show a named author byline on every article. Answer engines weigh who wrote a page "
            "when deciding whether to cite it."
        )

    if not rubric.binary(
        "Person schema for author", _has_person_author(page), "Person schema found", 20,
        miss_details="No Person schema for the author",
    ):
        rubric.recommend(
            "Add Person schema for the author with name, jobTitle, and sameAs links to "
            "professional profiles."
        )

    trust_links = sum(1 for a in soup.find_all("a", href=True) if ABOUT_OR_CONTACT_HREF.search(a["href"]))
    if not rubric.binary(
        "About/contact links", trust_links > 0, f"{trust_links} about/contact link(s) found", 15,
        miss_details="No links to about or contact pages",
    ):
        rubric.recommend("Link to your about and contact pages from every page.")

    credentials = len(CREDENTIALS.findall(page.text))
    if not rubric.tiered(
        "Credentials or expertise language", credentials,
        f"{credentials} credential/expertise mention(s) found", 15,
        pass_at=2, partial_at=1, partial_points=8,
    ):
        rubric.recommend(
            "State author and organisation credentials (certifications, years of experience, "
            "areas of expertise) in bios and on the page."
        )

    if not rubric.binary(
        "Organization sameAs profiles", _has_same_as(page), "sameAs profile links found", 15,
        miss_details="No sameAs links in Organization or Person schema",
    ):
        rubric.recommend(
            "Add sameAs links to your Organization schema pointing at official social and "
            "directory profiles."
        )

    has_policy = bool(EDITORIAL_POLICY.search(page.text))
    rubric.binary(
        "Editorial or review policy", has_policy, "Editorial or review policy referenced", 15,
        miss_details="No editorial policy or reviewer attribution",
    )

    return rubric.score(weight)


CategoryEvaluator = Callable[[ParsedPage, datetime, float], CategoryScore]

# Registry in profile order
CONTENT_EVALUATORS: Dict[str, CategoryEvaluator] = {
    "content_structure": evaluate_content_structure,
    "schema_markup": evaluate_schema_markup,
    "topical_authority": evaluate_topical_authority,
    "citation_worthiness": evaluate_citation_worthiness,
    "content_freshness": evaluate_content_freshness,
    "language_patterns": evaluate_language_patterns,
    "meta_information": evaluate_meta_information,
    "technical_health": evaluate_technical_health,
    "content_uniqueness": evaluate_content_uniqueness,
    "multi_format_content": evaluate_multi_format_content,
    "eeat_signals": evaluate_eeat_signals,
}


def analyze_page(page: ParsedPage, now: datetime) -> PageAnalysis:
    """
    Run every content category against one page.

    Args:
        page: Parsed page
        now: Reference time for freshness checks

    Returns:
        PageAnalysis with the page's ContentProfile
    """
    categories = {
        key: evaluator(page, now, CONTENT_WEIGHTS[key])
        for key, evaluator in CONTENT_EVALUATORS.items()
    }
    logger.debug(f"Analyzed page {page.url}")
    return PageAnalysis(url=page.url, title=page.title, geo=ContentProfile(**categories))
