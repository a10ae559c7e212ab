"""
Copy-paste remediation snippets.

Keyed by (category_key, check name). Templates use string.Template
placeholders: $origin and $site_name.
"""

from string import Template
from typing import Dict, Optional, Tuple

from models.enums import FindingStatus
from models.schemas import CategoryScore, CodeSnippet
from utils.urls import extract_domain

_ORGANIZATION = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Organization",
  "name": "$site_name",
  "url": "$origin",
  "logo": "$origin/logo.png",
  "sameAs": [
    "https://www.linkedin.com/company/$site_name",
    "https://x.com/$site_name"
  ]
}
</script>""")

_FAQ_PAGE = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "FAQPage",
  "mainEntity": [
    {
      "@type": "Question",
      "name": "What does $site_name do?",
      "acceptedAnswer": {
        "@type": "Answer",
        "text": "A one or two sentence answer that can be quoted verbatim."
      }
    }
  ]
}
</script>""")

_BREADCRUMBS = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "BreadcrumbList",
  "itemListElement": [
    {"@type": "ListItem", "position": 1, "name": "Home", "item": "$origin/"},
    {"@type": "ListItem", "position": 2, "name": "Section", "item": "$origin/section/"}
  ]
}
</script>""")

_ARTICLE = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Article",
  "headline": "Article headline",
  "datePublished": "2024-01-15",
  "dateModified": "2024-06-01",
  "author": {"@type": "Person", "name": "Author Name", "url": "$origin/authors/author-name"},
  "publisher": {"@type": "Organization", "name": "$site_name", "url": "$origin"}
}
</script>""")

_PERSON = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Person",
  "name": "Author Name",
  "jobTitle": "Senior Editor",
  "url": "$origin/authors/author-name",
  "worksFor": {"@type": "Organization", "name": "$site_name"},
  "sameAs": ["https://www.linkedin.com/in/author-name"]
}
</script>""")

_LLMS_TXT = Template("""# $site_name

> One paragraph describing what $site_name offers and who it is for.

## Docs

- [Getting started]($origin/docs/getting-started): First steps
- [Reference]($origin/docs/reference): Full reference

## Optional

- [Blog]($origin/blog): Announcements and guides
""")

_ROBOTS_TXT = Template("""User-agent: GPTBot
Allow: /

User-agent: ClaudeBot
Allow: /

User-agent: PerplexityBot
Allow: /

User-agent: Google-Extended
Allow: /

User-agent: OAI-SearchBot
Allow: /

User-agent: *
Allow: /

Sitemap: $origin/sitemap.xml
""")

_OPENAPI = Template("""{
  "openapi": "3.1.0",
  "info": {"title": "$site_name API", "version": "1.0.0"},
  "servers": [{"url": "$origin/api"}],
  "paths": {}
}""")

_LOCAL_BUSINESS = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "LocalBusiness",
  "name": "$site_name",
  "url": "$origin",
  "telephone": "+1-555-555-0100",
  "address": {
    "@type": "PostalAddress",
    "streetAddress": "123 Main Street",
    "addressLocality": "City",
    "addressRegion": "ST",
    "postalCode": "00000"
  },
  "geo": {"@type": "GeoCoordinates", "latitude": 0.0, "longitude": 0.0},
  "openingHoursSpecification": [
    {"@type": "OpeningHoursSpecification", "dayOfWeek": ["Monday", "Friday"], "opens": "09:00", "closes": "17:00"}
  ]
}
</script>""")

_PRODUCT = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Product",
  "name": "Product name",
  "image": "$origin/images/product.jpg",
  "sku": "SKU-0001",
  "brand": {"@type": "Brand", "name": "$site_name"},
  "offers": {
    "@type": "Offer",
    "url": "$origin/products/product-name",
    "price": "49.00",
    "priceCurrency": "USD",
    "availability": "https://schema.org/InStock"
  }
}
</script>""")

_AGGREGATE_RATING = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "Organization",
  "name": "$site_name",
  "aggregateRating": {
    "@type": "AggregateRating",
    "ratingValue": "4.8",
    "reviewCount": "125"
  }
}
</script>""")

_FEED_LINK = Template("""<link rel="alternate" type="application/rss+xml"
      title="$site_name" href="$origin/feed.xml">""")

_DATE_MODIFIED = Template("""<script type="application/ld+json">
{
  "@context": "https://schema.org",
  "@type": "WebPage",
  "url": "$origin/",
  "datePublished": "2024-01-15",
  "dateModified": "2024-06-01"
}
</script>""")

# (category_key, check) -> (language, label, template)
SNIPPETS: Dict[Tuple[str, str], Tuple[str, str, Template]] = {
    ("schema_markup", "FAQPage schema"): ("html", "FAQPage JSON-LD", _FAQ_PAGE),
    ("schema_markup", "Organization schema"): ("html", "Organization JSON-LD", _ORGANIZATION),
    ("schema_markup", "BreadcrumbList schema"): ("html", "BreadcrumbList JSON-LD", _BREADCRUMBS),
    ("schema_markup", "Article schema with author/date/headline"): ("html", "Article JSON-LD", _ARTICLE),
    ("content_freshness", "dateModified in schema"): ("html", "dateModified in JSON-LD", _DATE_MODIFIED),
    ("faq_content", "FAQPage schema markup"): ("html", "FAQPage JSON-LD", _FAQ_PAGE),
    ("llms_txt", "/llms.txt file exists"): ("markdown", "/llms.txt", _LLMS_TXT),
    ("machine_readable_sitemaps", "robots.txt exists"): ("text", "/robots.txt", _ROBOTS_TXT),
    ("machine_readable_sitemaps", "AI bot access (robots.txt)"): ("text", "/robots.txt", _ROBOTS_TXT),
    ("api_documentation", "OpenAPI/Swagger specification"): ("json", "/openapi.json skeleton", _OPENAPI),
    ("local_schema", "LocalBusiness JSON-LD schema"): ("html", "LocalBusiness JSON-LD", _LOCAL_BUSINESS),
    ("product_schema", "Product/Offer JSON-LD present"): ("html", "Product JSON-LD", _PRODUCT),
    ("author_credentials", "Person schema for authors"): ("html", "Person JSON-LD", _PERSON),
    ("eeat_signals", "Person schema for author"): ("html", "Person JSON-LD", _PERSON),
    ("review_markup", "AggregateRating schema"): ("html", "AggregateRating JSON-LD", _AGGREGATE_RATING),
    ("review_presence", "AggregateRating schema"): ("html", "AggregateRating JSON-LD", _AGGREGATE_RATING),
    ("syndication_readiness", "RSS/Atom feed present"): ("html", "Feed discovery link", _FEED_LINK),
}


def site_name_for(origin: str) -> str:
    """Bare domain used as a placeholder site name, e.g. example.com."""
    return extract_domain(origin) or origin


def snippet_for(category_key: str, category: CategoryScore, origin: str) -> Optional[CodeSnippet]:
    """
    First registered snippet for a failing check in the category.

    Returns None when no failing check has a template.
    """
    for finding in category.findings:
        if finding.status != FindingStatus.FAIL:
            continue
        entry = SNIPPETS.get((category_key, finding.check))
        if entry is None:
            continue
        language, label, template = entry
        code = template.substitute(origin=origin, site_name=site_name_for(origin))
        return CodeSnippet(language=language, code=code, label=label)
    return None
