"""
Integration rubric for local businesses.

Focuses on what assistants need to answer "near me" queries: a
LocalBusiness entity, consistent name/address/phone, reviews, hours and
location cues.
"""

import json
import re
from typing import Dict

from evaluators.context import SiteContext
from evaluators.patterns import LOCAL_BUSINESS_SCHEMA_TYPES
from evaluators.rubric import Rubric
from evaluators.rubrics.shared import (
    IntegrationEvaluator,
    evaluate_llms_txt,
    evaluate_machine_readable_sitemaps,
    pages_with_url,
    ratio,
)
from models.enums import FindingStatus
from models.schemas import CategoryScore
from utils.html import element_text, main_content, nodes_of_type, word_count

NAP_PHONE = re.compile(r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")
NAP_ADDRESS = re.compile(
    r"\d+\s+[\w\s]+(?:street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|court|ct|place|pl)"
    r"[\s,]+[\w\s]+,?\s*[A-Z]{2}\s*\d{5}",
    re.IGNORECASE,
)
FOOTER_ADDRESS = re.compile(r"\d+\s+\w+.*(?:street|st|avenue|ave|road|rd|blvd|drive|dr)", re.IGNORECASE)
SERVICE_URL = re.compile(r"/services?/|/treatments?/|/offerings?/|/specialties?/", re.IGNORECASE)
CONTACT_URL = re.compile(r"/contact|/reach|/get-in-touch", re.IGNORECASE)
TEAM_URL = re.compile(r"/about|/team|/our-team|/staff|/providers", re.IGNORECASE)
LOCAL_NEWS_URL = re.compile(r"/blog|/news|/updates|/articles", re.IGNORECASE)
MAP_SELECTOR = 'iframe[src*="google.com/maps"], iframe[src*="maps.google"], .google-map, #map, [data-map]'
GALLERY_SELECTOR = '.gallery, .portfolio, [class*="gallery"], [class*="portfolio"], [data-gallery]'


def _consistency(rubric: Rubric, check: str, distinct: int, noun: str) -> None:
    """One distinct value passes, two is partial, none or more than two fails."""
    if distinct == 1:
        rubric.add(check, FindingStatus.PASS, f"1 unique {noun} detected", 25, 25)
    elif distinct == 2:
        rubric.add(check, FindingStatus.PARTIAL, f"2 unique {noun}s detected", 12, 25)
    elif distinct == 0:
        rubric.add(check, FindingStatus.FAIL, f"No {noun}s found", 0, 25)
    else:
        rubric.add(check, FindingStatus.FAIL, f"{distinct} unique {noun}s detected", 0, 25)


def evaluate_local_schema(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    has_schema = False
    present = {"name": False, "address": False, "phone": False, "hours": False, "geo": False}
    for page in ctx.pages:
        for node in nodes_of_type(page.json_ld, *LOCAL_BUSINESS_SCHEMA_TYPES):
            has_schema = True
            dumped = json.dumps(node)
            present["name"] |= "name" in node
            present["address"] |= bool(re.search(r"streetAddress|postalCode|addressLocality", dumped))
            present["phone"] |= bool(re.search(r"telephone", dumped, re.IGNORECASE))
            present["hours"] |= bool(re.search(r"openingHours|OpeningHoursSpecification", dumped))
            present["geo"] |= bool(re.search(r"latitude|longitude|\"geo\"", dumped))

    if not rubric.binary("LocalBusiness JSON-LD schema", has_schema, "LocalBusiness (or subtype) schema found", 20,
                         miss_details="No LocalBusiness schema detected"):
        rubric.recommend(
            "Add LocalBusiness JSON-LD using your specific business type (Restaurant, Dentist and so on). "
            "Assistants rely on it for local recommendations."
        )
    rubric.binary("Business name in schema", present["name"], "Business name found in schema", 15,
                  miss_details="No name in schema")
    rubric.binary("Address in schema", present["address"], "Address data found in schema", 20,
                  miss_details="No structured address in schema")
    rubric.binary("Phone number in schema", present["phone"], "Phone number in schema", 15,
                  miss_details="No phone in schema")
    if not rubric.binary("Opening hours in schema", present["hours"], "Opening hours found", 15,
                         miss_details="No opening hours in schema"):
        rubric.recommend(
            'Include openingHoursSpecification so assistants can answer "is it open now?" queries.'
        )
    rubric.binary("Geo coordinates in schema", present["geo"], "Geo coordinates found", 15,
                  miss_details="No geo coordinates in schema")

    return rubric.score(weight)


def evaluate_nap_consistency(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    phones = set()
    addresses = set()
    pages_with_phone = 0
    pages_with_address = 0
    for page in ctx.pages:
        found_phones = NAP_PHONE.findall(page.text)
        if found_phones:
            pages_with_phone += 1
            phones.update(re.sub(r"[\s\-().]", "", phone) for phone in found_phones)
        found_addresses = NAP_ADDRESS.findall(page.text)
        if found_addresses:
            pages_with_address += 1
            addresses.update(address.strip().lower() for address in found_addresses)

    rubric.tiered("Phone number on multiple pages", pages_with_phone,
                  f"Phone number found on {pages_with_phone} page(s)", 25,
                  pass_at=3, partial_at=1, partial_points=12)
    if not pages_with_phone:
        rubric.recommend("Show the same phone number in the header or footer of every page.")
    _consistency(rubric, "Phone number consistency", len(phones), "phone number")

    rubric.tiered("Address on multiple pages", pages_with_address,
                  f"Address found on {pages_with_address} page(s)", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    _consistency(rubric, "Address consistency", len(addresses), "address format")
    if len(addresses) > 2:
        rubric.recommend(
            "Use one address format across all pages. Inconsistent name, address and phone details "
            "lower trust in local recommendations."
        )

    return rubric.score(weight)


def evaluate_review_presence(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    raw = ctx.all_json_ld_raw
    text = ctx.all_text

    if not rubric.binary("AggregateRating schema", bool(re.search(r"AggregateRating", raw, re.IGNORECASE)),
                         "AggregateRating schema found", 30, miss_details="No AggregateRating schema"):
        rubric.recommend("Add AggregateRating schema. Ratings are used to rank local businesses.")
    rubric.binary("Review count in schema", bool(re.search(r"reviewCount|ratingCount", raw, re.IGNORECASE)),
                  "Review count found in schema", 25, miss_details="No review count in schema")
    if not rubric.binary(
        "Google review link/widget",
        bool(re.search(r"google\.com/maps|g\.co/|google review|review us on google|write a review", text, re.IGNORECASE)),
        "Google review references found", 25, miss_details="No Google review link detected",
    ):
        rubric.recommend("Link to your Google reviews or embed a review widget.")
    rubric.binary(
        "Third-party review platforms",
        bool(re.search(r"yelp|tripadvisor|bbb|angi|homeadvisor|healthgrades|zocdoc|avvo", text, re.IGNORECASE)),
        "Third-party review platform references found", 20, miss_details="No third-party review references",
    )

    return rubric.score(weight)


def evaluate_service_pages(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    service_pages = pages_with_url(ctx, SERVICE_URL)
    rubric.tiered("Dedicated service pages", len(service_pages),
                  f"{len(service_pages)} dedicated service page(s) found", 25,
                  pass_at=3, partial_at=1, partial_points=12)
    if not service_pages:
        rubric.recommend(
            "Create one page per service (e.g. /services/teeth-whitening) so specific queries have a "
            "specific answer."
        )

    sampled = service_pages[:5]
    deep = sum(
        1 for page in sampled
        if word_count(element_text(main_content(page.soup, 'main, article, [role="main"], .content')) or page.text) >= 200
    )
    details = (
        f"{deep}/{len(sampled)} service page(s) with 200+ words" if sampled else "No service pages to evaluate"
    )
    rubric.tiered("Service page content depth", deep, details, 25, pass_at=2, partial_at=1, partial_points=12)

    rubric.binary(
        "Service schema markup",
        bool(re.search(r"Service|hasOfferCatalog|serviceType", ctx.all_json_ld_raw)),
        "Service-related schema found", 25, miss_details="No Service schema markup",
    )
    rubric.binary(
        "Service pricing information",
        bool(re.search(r"\$\d|pricing|cost|fee|starting at|from \$", ctx.all_text, re.IGNORECASE)),
        "Pricing information found", 25, miss_points=8, miss_details="No service pricing visible",
    )

    return rubric.score(weight)


def evaluate_location_signals(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    footer_address = any(
        FOOTER_ADDRESS.search(" ".join(element_text(footer) for footer in page.soup.find_all("footer")))
        for page in ctx.pages
    )
    has_map = any(page.soup.select_one(MAP_SELECTOR) is not None for page in ctx.pages)
    service_area = any(
        re.search(r"service area|serving|we serve|coverage area|areas we serve", page.text, re.IGNORECASE)
        for page in ctx.pages
    )
    geo_targeted = any(
        re.search(r"neighborhood|community|local|near\s(?:you|me)|in\s(?:your\s)?area", page.text, re.IGNORECASE)
        for page in ctx.pages
    )

    if not rubric.binary("Address in footer", footer_address, "Address found in footer", 25,
                         miss_details="No address detected in footer area"):
        rubric.recommend("Put your full street address in the site footer.")
    rubric.binary("Google Maps embed or link", has_map, "Maps embed/widget detected", 25,
                  miss_details="No Google Maps embed found")
    rubric.binary("Service area mentions", service_area, "Service area content found", 25,
                  miss_details="No service area mentions detected")
    rubric.binary("Geo-targeted content", geo_targeted, "Location-targeted language detected", 25,
                  miss_details="No geo-targeted content found")

    return rubric.score(weight)


def evaluate_contact_accessibility(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    tel_link = any(page.soup.select_one('a[href^="tel:"]') is not None for page in ctx.pages)
    contact_form = any(
        re.search(r"contact|message|inquiry|email|name", form.get_text(), re.IGNORECASE)
        for page in ctx.pages
        for form in page.soup.find_all("form")
    )
    hours = any(
        re.search(r"hours|open|closed|mon|tue|wed|thu|fri|sat|sun|monday|tuesday", page.text, re.IGNORECASE)
        for page in ctx.pages
    )

    if not rubric.binary("Clickable phone number (tel: link)", tel_link, "Clickable tel: link found", 25,
                         miss_details="No clickable phone link detected"):
        rubric.recommend("Wrap phone numbers in tel: links.")
    rubric.binary("Contact form present", contact_form, "Contact form detected", 25,
                  miss_details="No contact form found")
    rubric.binary("Dedicated contact page", bool(pages_with_url(ctx, CONTACT_URL)), "Contact page found", 25,
                  miss_details="No dedicated contact page")
    if not rubric.binary("Business hours displayed", hours, "Business hours information found", 25,
                         miss_details="No business hours displayed"):
        rubric.recommend("Display business hours on every page, for example in the footer.")

    return rubric.score(weight)


def evaluate_trust_signals(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    if not rubric.binary(
        "Certifications and licenses",
        bool(re.search(r"certified|licensed|accredited|board certified|credential|certification|license #|lic\.",
                       text, re.IGNORECASE)),
        "Certification/license references found", 25, miss_details="No certifications or licenses mentioned",
    ):
        rubric.recommend("List professional certifications and licence numbers on the site.")
    rubric.binary(
        "Awards and recognition",
        bool(re.search(r"award|recognition|best of|top rated|winner|#1|number one", text, re.IGNORECASE)),
        "Awards/recognition mentions found", 25, miss_details="No awards or recognition mentioned",
    )
    rubric.binary(
        "Industry association membership",
        bool(re.search(r"association|member of|affiliated|chamber of commerce|bbb|better business", text, re.IGNORECASE)),
        "Association/membership references found", 25, miss_details="No industry association mentions",
    )
    rubric.binary("Team/about page", bool(pages_with_url(ctx, TEAM_URL)), "Team or about page found", 25,
                  miss_details="No team/about page detected")

    return rubric.score(weight)


def evaluate_local_content(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    if not rubric.binary(
        "Neighborhood/area mentions",
        bool(re.search(r"neighborhood|district|downtown|midtown|uptown|east side|west side|north|south|suburb",
                       text, re.IGNORECASE)),
        "Neighborhood/area references found", 25, miss_details="No neighborhood content detected",
    ):
        rubric.recommend("Mention the neighbourhoods and areas you serve by name.")
    rubric.binary(
        "Community/local event references",
        bool(re.search(r"event|community|sponsoring|hosting|local|charity|fundraiser|annual", text, re.IGNORECASE)),
        "Local event or community references found", 25, miss_details="No community involvement content",
    )
    rubric.binary(
        "Location-specific keyword content",
        bool(re.search(r"near me|in \w+ city|serving \w+|located in|based in", text, re.IGNORECASE)),
        "Location-specific keywords found", 25, miss_details="No location-specific content patterns",
    )
    rubric.binary("Local blog/news content", bool(pages_with_url(ctx, LOCAL_NEWS_URL)), "Blog or news section found", 25,
                  miss_details="No blog or news content")

    return rubric.score(weight)


def evaluate_photo_evidence(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    total = 0
    described = 0
    gallery = False
    team_photos = False
    for page in ctx.pages:
        for img in page.soup.find_all("img"):
            total += 1
            if len(img.get("alt") or "") >= 5:
                described += 1
        gallery |= page.soup.select_one(GALLERY_SELECTOR) is not None
        team_photos |= bool(re.search(r"team photo|our team|staff|doctor|provider|meet our", page.text, re.IGNORECASE))

    alt_ratio = ratio(described, total)
    details = (
        f"{round(alt_ratio * 100)}% of images have descriptive alt text ({described}/{total})"
        if total else "No images found"
    )
    if not rubric.tiered("Images with descriptive alt text", alt_ratio, details, 30,
                         pass_at=0.7, partial_at=0.4, partial_points=15):
        rubric.recommend("Give every image descriptive alt text.")
    rubric.binary("Photo gallery/portfolio", gallery, "Gallery or portfolio section found", 25,
                  miss_details="No gallery/portfolio detected")
    rubric.binary("Team/staff photos", team_photos, "Team photo references found", 25,
                  miss_details="No team photo content detected")
    rubric.tiered("Sufficient image count", total, f"{total} image(s) found across site", 20,
                  pass_at=15, partial_at=5, partial_points=10)

    return rubric.score(weight)


CATEGORIES: Dict[str, IntegrationEvaluator] = {
    "local_schema": evaluate_local_schema,
    "nap_consistency": evaluate_nap_consistency,
    "review_presence": evaluate_review_presence,
    "service_pages": evaluate_service_pages,
    "location_signals": evaluate_location_signals,
    "contact_accessibility": evaluate_contact_accessibility,
    "trust_signals": evaluate_trust_signals,
    "llms_txt": evaluate_llms_txt,
    "machine_readable_sitemaps": evaluate_machine_readable_sitemaps,
    "local_content": evaluate_local_content,
    "photo_evidence": evaluate_photo_evidence,
}
