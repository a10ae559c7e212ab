"""
Integration rubric for online stores.

Looks at what AI shopping assistants need to recommend a product:
structured product data, reviews, availability and policies.
"""

import json
import re
from typing import Dict

from evaluators.context import SiteContext
from evaluators.rubric import Rubric
from evaluators.rubrics.shared import (
    IntegrationEvaluator,
    evaluate_llms_txt,
    evaluate_machine_readable_sitemaps,
    pages_with_url,
    ratio,
)
from models.schemas import CategoryScore
from utils.html import meta_content, nodes_of_type
from utils.urls import path_segments

COMPARISON_URL = re.compile(r"\bvs\.?\b|versus|compared to|comparison", re.IGNORECASE)
COMPARISON_TITLE = re.compile(r"\bvs\.?\b|versus", re.IGNORECASE)
COMPARISON_TABLE = re.compile(r"yes|no|✓|✗|✔|✘|included|not included", re.IGNORECASE)
PURCHASE_CTA = re.compile(r"add to cart|buy now|shop now|order now|purchase", re.IGNORECASE)
LOGIN_GATED_PRICE = re.compile(r"sign in to see price|login for pricing|log in to view", re.IGNORECASE)
FAQ_URL = re.compile(r"/faq|/help|/support|/questions", re.IGNORECASE)
CATEGORY_URL = re.compile(r"/category/|/collections/|/department/|/shop/", re.IGNORECASE)


def evaluate_product_schema(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    products = 0
    fields = {"price": False, "availability": False, "image": False, "identifier": False, "review": False}
    for page in ctx.pages:
        for node in nodes_of_type(page.json_ld, "Product", "Offer"):
            products += 1
            dumped = json.dumps(node)
            fields["price"] |= bool(re.search(r"price|priceCurrency", dumped, re.IGNORECASE))
            fields["availability"] |= bool(re.search(r"availability|InStock|OutOfStock", dumped, re.IGNORECASE))
            fields["image"] |= bool(re.search(r"image", dumped, re.IGNORECASE))
            fields["identifier"] |= bool(re.search(r"sku|gtin|mpn|isbn", dumped, re.IGNORECASE))
            fields["review"] |= bool(re.search(r"aggregateRating|review", dumped, re.IGNORECASE))

    rubric.tiered(
        "Product/Offer JSON-LD present", products,
        f"Product schema found on {products} page(s)" if products else "No Product/Offer JSON-LD detected", 25,
        pass_at=2, partial_at=1, partial_points=15,
    )
    if not products:
        rubric.recommend(
            "Add Product JSON-LD to every product page. AI shopping assistants rely on structured "
            "product data to recommend items accurately."
        )

    rubric.binary("Price in product schema", fields["price"], "Price data found in schema", 20,
                  miss_details="No price data in product schema")
    rubric.binary("Availability status in schema", fields["availability"], "Availability data found", 15,
                  miss_details="No availability status in schema")
    rubric.binary("Product images in schema", fields["image"], "Image references in product schema", 15,
                  miss_details="No images in product schema")
    if not rubric.binary("SKU/GTIN identifiers", fields["identifier"], "Product identifiers (SKU/GTIN/MPN) found", 10,
                         miss_details="No product identifiers in schema"):
        rubric.recommend("Include SKU, GTIN or MPN identifiers so assistants can match products across retailers.")
    rubric.binary("Reviews in product schema", fields["review"], "Review/rating data in product schema", 15,
                  miss_details="No review data in product schema")

    return rubric.score(weight)


def evaluate_review_markup(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    raw = ctx.all_json_ld_raw
    has_aggregate = bool(re.search(r"AggregateRating", raw, re.IGNORECASE))
    has_reviews = bool(re.search(r"\"Review\"", raw, re.IGNORECASE))
    has_stars = bool(re.search(r"ratingValue", raw, re.IGNORECASE))
    has_count = bool(re.search(r"reviewCount|ratingCount", raw, re.IGNORECASE))
    for page in ctx.pages:
        has_aggregate |= page.soup.select_one('[itemtype*="AggregateRating"]') is not None
        has_reviews |= page.soup.select_one('[itemtype*="Review"]') is not None
        has_stars |= page.soup.select_one('.star-rating, .stars, [class*="rating"], [data-rating]') is not None

    if not rubric.binary("AggregateRating schema", has_aggregate, "AggregateRating markup found", 30,
                         miss_details="No AggregateRating schema detected"):
        rubric.recommend(
            "Add AggregateRating schema to product pages. Assistants favour products with clear rating signals."
        )
    rubric.binary("Individual Review schema", has_reviews, "Individual Review markup found", 25,
                  miss_details="No individual Review schema")
    rubric.binary("Star ratings visible", has_stars, "Star/rating display detected", 25,
                  miss_details="No visible star ratings found")
    if not rubric.binary("Review count displayed", has_count, "Review count found in schema", 20,
                         miss_details="No review count in markup"):
        rubric.recommend("Include reviewCount in rating schema so review volume is machine-readable.")

    return rubric.score(weight)


def evaluate_inventory_signals(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    raw = ctx.all_json_ld_raw
    text = ctx.all_text

    if not rubric.binary(
        "Availability in structured data",
        bool(re.search(r"InStock|OutOfStock|PreOrder|availability", raw, re.IGNORECASE)),
        "Stock availability found in schema", 30, miss_details="No availability signals in structured data",
    ):
        rubric.recommend(
            "Add availability (InStock/OutOfStock) to product schema. Unavailable products are "
            "filtered out of assistant recommendations."
        )
    rubric.binary("Price currency specified", bool(re.search(r"priceCurrency", raw, re.IGNORECASE)),
                  "Price currency found in schema", 25, miss_details="No price currency in structured data")
    rubric.binary(
        "Shipping information visible",
        bool(re.search(r"shipping|delivery|free shipping|ships in|dispatch", text, re.IGNORECASE)),
        "Shipping information detected", 25, miss_details="No shipping information found",
    )
    if not rubric.binary(
        "Return policy accessible",
        bool(re.search(r"return policy|returns|refund|money.back", text, re.IGNORECASE)),
        "Return policy content found", 20, miss_details="No return policy detected",
    ):
        rubric.recommend("Make the return policy easy to find and link it from product pages.")

    return rubric.score(weight)


def evaluate_merchant_feed(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    canonical = 0
    complete = 0
    og_product = False
    for page in ctx.pages:
        if page.soup.find("link", rel="canonical") is not None:
            canonical += 1
        if re.search(r"product", meta_content(page.soup, prop="og:type"), re.IGNORECASE):
            og_product = True
        raw = page.json_ld_raw
        if all(re.search(word, raw, re.IGNORECASE) for word in ("Product", "price", "name", "image")):
            complete += 1

    canonical_ratio = ratio(canonical, len(ctx.pages))
    rubric.tiered(
        "Canonical URLs on all pages", canonical_ratio,
        f"{round(canonical_ratio * 100)}% of pages have canonical URLs", 25,
        pass_at=0.8, partial_at=0.5, partial_points=12,
    )
    rubric.tiered(
        "Complete product structured data", complete,
        f"{complete} page(s) with complete product data (name, price, image)", 30,
        pass_at=2, partial_at=1, partial_points=15,
    )
    if not complete:
        rubric.recommend(
            "Make product structured data include name, price and image at minimum. Merchant "
            "feeds and shopping agents require these fields."
        )
    rubric.binary("OpenGraph product tags", og_product, "og:type product tags found", 20,
                  miss_details="No OpenGraph product type tags")
    rubric.binary(
        "Product identifier codes (GTIN/UPC)",
        bool(re.search(r"gtin|upc|ean|isbn|mpn", ctx.all_text, re.IGNORECASE)),
        "Product identifier codes referenced", 25, miss_details="No GTIN/UPC/EAN identifiers found",
    )

    return rubric.score(weight)


def evaluate_comparison_content(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    vs_pages = 0
    tables = 0
    matrices = 0
    pros_cons = 0
    for page in ctx.pages:
        if COMPARISON_URL.search(page.url) or COMPARISON_TITLE.search(page.title):
            vs_pages += 1
        tables += sum(1 for table in page.soup.find_all("table") if COMPARISON_TABLE.search(table.get_text()))
        if re.search(r"feature comparison|feature matrix|compare plans|compare products", page.text, re.IGNORECASE):
            matrices += 1
        if re.search(r"\bpros\b.*\bcons\b|\badvantages\b.*\bdisadvantages\b", page.text, re.IGNORECASE):
            pros_cons += 1

    rubric.tiered('Comparison or "vs" pages', vs_pages, f"{vs_pages} comparison/vs page(s) found", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    if not vs_pages:
        rubric.recommend(
            'Create comparison pages (e.g. "Product A vs Product B"). Assistants cite them for '
            "purchase-decision queries."
        )
    rubric.tiered("Comparison tables", tables, f"{tables} comparison table(s) detected", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.binary("Feature matrix content", matrices >= 1, f"{matrices} feature matrix section(s) found", 25,
                  miss_details="No feature comparison matrices found")
    rubric.binary("Pros/cons or advantage sections", pros_cons >= 1, f"{pros_cons} pros/cons section(s) found", 25,
                  miss_details="No pros/cons content detected")

    return rubric.score(weight)


def evaluate_customer_evidence(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    if not rubric.binary(
        "Testimonials present",
        bool(re.search(r"testimonial|customer review|customer feedback|what our customers say|client testimonial",
                       text, re.IGNORECASE)),
        "Customer testimonials found", 25, miss_details="No testimonials detected",
    ):
        rubric.recommend("Add customer testimonials. Assistants cite social proof when recommending products.")

    counted = sum(1 for page in ctx.pages if re.search(r"\d+\s*reviews?|\d+\s*ratings?", page.text, re.IGNORECASE))
    rubric.tiered("Review count visibility", counted, f"{counted} page(s) showing review counts", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.binary(
        "User-generated content signals",
        bool(re.search(r"user generated|customer photo|customer video|real customer|verified purchase|verified buyer",
                       text, re.IGNORECASE)),
        "UGC signals found", 25, miss_details="No user-generated content signals",
    )
    rubric.binary(
        "Trust badges (TrustPilot, BBB, etc.)",
        bool(re.search(r"trustpilot|bbb|better business bureau|shopper approved|google reviews|yelp|verified|trust badge",
                       text, re.IGNORECASE)),
        "Trust badges/seals detected", 25, miss_details="No trust badge references found",
    )

    return rubric.score(weight)


def evaluate_purchase_simplicity(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    with_cta = sum(
        1 for page in ctx.pages
        if any(PURCHASE_CTA.search(el.get_text()) for el in page.soup.select('button, a, [role="button"]'))
    )
    rubric.tiered("Clear purchase CTAs", with_cta, f"{with_cta} page(s) with purchase CTAs", 25,
                  pass_at=2, partial_at=1, partial_points=12)

    if not rubric.binary(
        "Pricing clearly visible", bool(re.search(r"\$\d|€\d|£\d|price|pricing", text, re.IGNORECASE)),
        "Pricing information visible", 25, miss_details="No visible pricing detected",
    ):
        rubric.recommend("Show prices on product pages. Assistants skip products whose price they cannot confirm.")

    gated = any(LOGIN_GATED_PRICE.search(page.text) for page in ctx.pages)
    rubric.binary("No login wall before pricing", not gated, "No login-gated pricing detected", 25,
                  miss_details="Pricing appears to be behind login wall")
    rubric.binary(
        "Shipping/return policies findable",
        bool(re.search(r"shipping policy|return policy|free returns|satisfaction guarantee", text, re.IGNORECASE)),
        "Shipping/return policies found", 25, miss_details="No shipping/return policy content detected",
    )

    return rubric.score(weight)


def evaluate_faq_content(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    has_schema = bool(re.search(r"FAQPage", ctx.all_json_ld_raw, re.IGNORECASE))
    faq_sections = sum(1 for page in ctx.pages if re.search(r"frequently asked|faq", page.text, re.IGNORECASE))
    product_faqs = sum(
        1 for page in ctx.pages
        if re.search(r"product.*faq|faq.*product|shipping.*question|return.*question", page.text, re.IGNORECASE)
    )

    if not rubric.binary("FAQPage schema markup", has_schema, "FAQPage JSON-LD found", 30,
                         miss_details="No FAQPage schema markup"):
        rubric.recommend("Add FAQPage schema to pages with question and answer content.")
    rubric.tiered("FAQ content sections", faq_sections, f"{faq_sections} page(s) with FAQ content", 25,
                  pass_at=2, partial_at=1, partial_points=12)
    rubric.binary("Product-specific FAQs", product_faqs >= 1, f"{product_faqs} page(s) with product-specific Q&A", 25,
                  miss_details="No product-specific FAQ content")
    faq_pages = pages_with_url(ctx, FAQ_URL)
    rubric.binary("Dedicated FAQ/help pages", bool(faq_pages), f"{len(faq_pages)} FAQ/help page(s) found", 20,
                  miss_details="No dedicated FAQ page detected")

    return rubric.score(weight)


def evaluate_category_taxonomy(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    has_breadcrumbs = bool(re.search(r"BreadcrumbList", ctx.all_json_ld_raw, re.IGNORECASE)) or any(
        page.soup.select_one('[itemtype*="BreadcrumbList"]') is not None for page in ctx.pages
    )
    if not rubric.binary("BreadcrumbList schema", has_breadcrumbs, "BreadcrumbList schema found", 30,
                         miss_details="No BreadcrumbList schema"):
        rubric.recommend("Add BreadcrumbList JSON-LD so the category hierarchy is explicit.")

    category_pages = pages_with_url(ctx, CATEGORY_URL)
    rubric.tiered("Category URL hierarchy", len(category_pages), f"{len(category_pages)} category URL(s) found", 25,
                  pass_at=2, partial_at=1, partial_points=12)

    hierarchical = sum(1 for url in ctx.urls if 2 <= len(path_segments(url)) <= 4)
    hierarchy_ratio = ratio(hierarchical, len(ctx.pages))
    rubric.tiered(
        "Clean hierarchical URL paths", hierarchy_ratio,
        f"{round(hierarchy_ratio * 100)}% of pages have clean hierarchical URLs", 25,
        pass_at=0.6, partial_at=0.3, partial_points=12,
    )

    has_nav = any(len(page.soup.select('nav a, [role="navigation"] a')) >= 5 for page in ctx.pages[:3])
    rubric.binary("Category navigation structure", has_nav, "Category navigation detected", 20,
                  miss_details="No category navigation structure found")

    return rubric.score(weight)


CATEGORIES: Dict[str, IntegrationEvaluator] = {
    "product_schema": evaluate_product_schema,
    "review_markup": evaluate_review_markup,
    "inventory_signals": evaluate_inventory_signals,
    "merchant_feed": evaluate_merchant_feed,
    "comparison_content": evaluate_comparison_content,
    "customer_evidence": evaluate_customer_evidence,
    "purchase_simplicity": evaluate_purchase_simplicity,
    "llms_txt": evaluate_llms_txt,
    "machine_readable_sitemaps": evaluate_machine_readable_sitemaps,
    "faq_content": evaluate_faq_content,
    "category_taxonomy": evaluate_category_taxonomy,
}
