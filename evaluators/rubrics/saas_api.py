"""
Integration rubric for SaaS and API platforms.

Measures how well an autonomous coding agent could discover, authenticate
against and integrate with the platform from its public documentation.
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
from models.enums import FindingStatus
from models.schemas import CategoryScore
from utils.urls import url_path

DOCS_URL = re.compile(r"/docs|/documentation|/guide|/reference|/api", re.IGNORECASE)
API_REFERENCE_URL = re.compile(r"/api|/reference|/endpoint", re.IGNORECASE)
AUTH_URL = re.compile(r"auth|authentication|api[- ]key|token|oauth", re.IGNORECASE)
AUTH_DOCS_URL = re.compile(r"auth|authentication|api[- ]key|security", re.IGNORECASE)
AUTH_TEXT = re.compile(r"authentication|api[- ]key|bearer token|authorization header", re.IGNORECASE)
QUICKSTART_URL = re.compile(r"quickstart|quick-start|getting-started|get-started|hello-world", re.IGNORECASE)
QUICKSTART_VARIANT_URL = re.compile(r"quickstart|getting-started", re.IGNORECASE)
CHANGELOG_URL = re.compile(r"changelog|release|what's-new|whats-new|updates", re.IGNORECASE)
MIGRATION_URL = re.compile(r"migrat|upgrade", re.IGNORECASE)
INTEGRATION_URL = re.compile(r"integrat|connect|plugin|extension|third-party", re.IGNORECASE)
MCP_URL = re.compile(r"mcp", re.IGNORECASE)
VERSIONED_URL = re.compile(r"/v\d|/version|version-selector|docs-version", re.IGNORECASE)
VERSIONED_HTML = re.compile(r"/v\d", re.IGNORECASE)
DOCS_PATH = re.compile(r"^/[\w\-/]+$")

CODE_LANGUAGE_CLASS = re.compile(r"language-(\w+)|lang-(\w+)|highlight-(\w+)")
COMPLETE_EXAMPLE = re.compile(r"import\s|require\(|from\s|pip install|npm install|using\s")
EXAMPLE_OUTPUT = re.compile(r"output|response|result|returns|=>|#\s*\{", re.IGNORECASE)
EXAMPLE_ERROR_HANDLING = re.compile(r"try\s*\{|try:|except|catch\s*\(|\.catch\(|error handling", re.IGNORECASE)
JSON_OR_HTTP_EXAMPLE = re.compile(r"\{[\s\S]*\"")
HTTP_CLIENT = re.compile(r"curl|fetch|axios|request", re.IGNORECASE)

SEMVER = re.compile(r"v?\d+\.\d+\.\d+", re.IGNORECASE)
FRAMEWORKS = [
    "Next.js", "React", "Vue", "Angular", "Django", "Rails",
    "Laravel", "Express", "FastAPI", "Flask", "Spring", "Node.js",
]
SDK_LANGUAGES = [
    "JavaScript", "TypeScript", "Python", "Go", "Java", "Ruby",
    "PHP", "C#", ".NET", "Rust", "Swift", "Kotlin",
]


def _mentions(text: str, names) -> list:
    return [name for name in names if re.search(re.escape(name), text, re.IGNORECASE)]


def evaluate_documentation_structure(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    doc_pages = pages_with_url(ctx, DOCS_URL)
    if not rubric.binary(
        "Documentation section exists", bool(doc_pages),
        f"{len(doc_pages)} documentation page(s) found", 20,
        miss_details="No dedicated documentation section found",
    ):
        rubric.recommend(
            "Create a dedicated documentation section (/docs). AI agents rely on well-structured "
            "docs to understand and integrate with your platform."
        )

    sample = (doc_pages or ctx.pages)[:10]
    consistent = sum(
        1 for page in sample
        if len(page.soup.find_all("h1")) == 1 and len(page.soup.find_all("h2")) >= 2
    )
    heading_ratio = ratio(consistent, len(sample))
    if not rubric.tiered(
        "Consistent heading hierarchy across pages", heading_ratio,
        f"{round(heading_ratio * 100)}% of pages have consistent heading structure", 15,
        pass_at=0.8, partial_at=0.5, partial_points=8,
    ):
        rubric.recommend(
            "Use a consistent heading hierarchy (single H1, multiple H2s) across all documentation pages."
        )

    has_search = any_page_selects(
        ctx, 'input[type="search"], [role="search"], .search, #search, [data-docsearch], .algolia'
    )
    rubric.binary("Documentation search", has_search, "Search functionality detected", 10,
                  miss_details="No search functionality found")

    has_navigation = any(
        sum(len(el.find_all("a")) for el in page.soup.select('nav, aside, .sidebar, .toc, [role="navigation"]')) > 5
        for page in ctx.pages
    )
    rubric.binary("Navigation sidebar/TOC", has_navigation, "Navigation structure detected", 15,
                  miss_details="No navigation sidebar/TOC found")

    cross_refs = 0
    for page in sample:
        container = page.soup.select_one('main, article, [role="main"], .content') or page.soup.body or page.soup
        for anchor in container.find_all("a", href=True):
            href = anchor["href"]
            if href.startswith("/docs") or "/guide" in href or "/reference" in href:
                cross_refs += 1
    avg_refs = ratio(cross_refs, len(sample))
    if not rubric.tiered(
        "Cross-references between docs pages", avg_refs,
        f"Average {round(avg_refs)} cross-reference(s) per page", 15,
        pass_at=3, partial_at=1, partial_points=8,
    ):
        rubric.recommend(
            "Add more cross-references between documentation pages (3+ per page) so agents can "
            "discover related content."
        )

    versioned = any(VERSIONED_URL.search(page.url) or VERSIONED_HTML.search(page.html) for page in ctx.pages)
    rubric.binary("Versioned documentation", versioned, "Version indicators found", 10,
                  miss_points=3, miss_details="No explicit versioning detected")

    clean = 0
    for url in ctx.urls:
        path = url_path(url)
        if path and DOCS_PATH.match(path) and len(path) < 100:
            clean += 1
    clean_ratio = ratio(clean, len(ctx.pages))
    if not rubric.tiered(
        "Clean, hierarchical URL structure", clean_ratio,
        f"{round(clean_ratio * 100)}% of pages have clean URL structure", 15,
        pass_at=0.8, partial_at=0.5, partial_points=8,
    ):
        rubric.recommend(
            "Use clean, hierarchical URL paths (e.g. /docs/api/payments/create instead of "
            "/docs/article-42)."
        )

    return rubric.score(weight)


def evaluate_api_documentation(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    if not rubric.binary(
        "OpenAPI/Swagger specification", bool(ctx.resources.openapi_spec),
        "OpenAPI specification found", 25,
        miss_details="No OpenAPI/Swagger spec found at standard paths",
    ):
        rubric.recommend(
            "Publish an OpenAPI 3.0+ specification at /openapi.json. It is the single most useful "
            "machine-readable asset for agents integrating with your API."
        )

    api_pages = pages_with_url(ctx, API_REFERENCE_URL)
    if not rubric.tiered(
        "API reference documentation pages", len(api_pages),
        f"{len(api_pages)} API reference page(s) found", 20,
        pass_at=3, partial_at=1, partial_points=10,
    ):
        rubric.recommend(
            "Create API reference pages with endpoint details, parameters, and response schemas."
        )

    has_examples = False
    for page in api_pages[:5]:
        code = " ".join(el.get_text() for el in page.soup.select("pre, code"))
        if code and (JSON_OR_HTTP_EXAMPLE.search(code) or HTTP_CLIENT.search(code)):
            has_examples = True
            break
    if not rubric.binary(
        "Request/response examples", has_examples, "API examples with code/JSON found", 15,
        miss_details="No API examples detected in documentation",
    ):
        rubric.recommend(
            "Add request/response examples for every API endpoint with complete JSON payloads."
        )

    has_auth_docs = any(AUTH_URL.search(page.url) or AUTH_TEXT.search(page.html) for page in ctx.pages)
    if not rubric.binary(
        "Authentication documentation", has_auth_docs, "Authentication documentation found", 15,
        miss_details="No authentication documentation found",
    ):
        rubric.recommend(
            "Create dedicated authentication documentation covering every supported auth method "
            "with a code example for each."
        )

    has_rate_limits = any(
        re.search(r"rate limit|throttl|quota|requests per", page.text, re.IGNORECASE) for page in ctx.pages
    )
    rubric.binary("Rate limiting documentation", has_rate_limits, "Rate limit documentation found", 10,
                  miss_details="No rate limit documentation found")

    has_error_docs = any(
        re.search(r"error code|error response|status code|error handling", page.text, re.IGNORECASE)
        for page in ctx.pages
    )
    if not rubric.binary(
        "Error codes documentation", has_error_docs, "Error documentation found", 15,
        miss_details="No error codes documentation found",
    ):
        rubric.recommend("Document every error code with its meaning, cause, and resolution steps.")

    return rubric.score(weight)


def evaluate_code_examples(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    total_blocks = 0
    complete = 0
    errors = 0
    languages = []
    highlighted = 0
    with_output = 0
    for page in ctx.pages:
        for el in page.soup.select("pre code, pre"):
            total_blocks += 1
            code = el.get_text()
            match = CODE_LANGUAGE_CLASS.search(" ".join(el.get("class") or []))
            if match:
                language = next(group for group in match.groups() if group)
                if language not in languages:
                    languages.append(language)
            if COMPLETE_EXAMPLE.search(code):
                complete += 1
            if EXAMPLE_ERROR_HANDLING.search(code):
                errors += 1
        highlighted += len(page.soup.select('pre code[class*="language-"], pre[class*="highlight"], .shiki, .prism'))
        with_output += sum(1 for el in page.soup.select("pre, code") if EXAMPLE_OUTPUT.search(el.get_text()))

    if not rubric.tiered(
        "Code examples present", total_blocks,
        f"{total_blocks} code block(s) found across {len(ctx.pages)} page(s)", 20,
        pass_at=10, partial_at=3, partial_points=10,
    ):
        rubric.recommend("Add code examples to every documentation page that describes an operation.")

    completeness = ratio(complete, total_blocks)
    if not rubric.tiered(
        "Copy-paste readiness (complete with imports)", completeness,
        f"{round(completeness * 100)}% of examples include imports/initialization", 25,
        pass_at=0.5, partial_at=0.25, partial_points=12,
    ):
        rubric.recommend(
            "Make examples copy-paste ready, including imports, client initialization, and "
            "install commands."
        )

    details = f"{len(languages)} language(s) detected: {', '.join(languages) or 'unknown'}"
    if len(languages) >= 3:
        rubric.add("Multi-language coverage", FindingStatus.PASS, details, 20, 20)
    elif len(languages) == 2:
        rubric.add("Multi-language coverage", FindingStatus.PARTIAL, details, 12, 20)
    else:
        rubric.add("Multi-language coverage", FindingStatus.FAIL, details, 5 if languages else 0, 20)
        rubric.recommend("Provide examples in at least three languages (e.g. cURL, Python, JavaScript).")

    rubric.binary("Syntax highlighting", highlighted > 0, f"{highlighted} highlighted code block(s)", 10)

    rubric.tiered(
        "Expected output shown", with_output, f"{with_output} example(s) include expected output", 15,
        pass_at=3, partial_at=1, partial_points=8,
    )
    rubric.tiered(
        "Error handling in examples", errors, f"{errors} example(s) include error handling", 10,
        pass_at=2, partial_at=1, partial_points=5,
    )

    return rubric.score(weight)


def evaluate_sdk_quality(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    managers = [
        name for name, pattern in (
            ("npm", r"npm install|yarn add|pnpm add"),
            ("pip", r"pip install"),
            ("go", r"go get "),
        )
        if re.search(pattern, text, re.IGNORECASE)
    ]
    if not rubric.tiered(
        "SDK/package availability", len(managers),
        f"Packages for: {', '.join(managers)}" if managers else "No package manager install commands found", 25,
        pass_at=2, partial_at=1, partial_points=15,
    ):
        rubric.recommend("Publish official SDKs to npm and PyPI and show the install command in the docs.")

    has_types = bool(re.search(r"typescript|\.d\.ts|type\s+\w+\s*=|interface\s+\w+", text, re.IGNORECASE))
    rubric.binary("TypeScript type definitions", has_types, "TypeScript type support detected", 20,
                  miss_details="No TypeScript types references found")

    has_install = any(
        re.search(r"installation|getting started|quick start|setup",
                  " ".join(h.get_text() for h in page.soup.find_all(["h1", "h2", "h3"])), re.IGNORECASE)
        for page in ctx.pages
    )
    if not rubric.binary("Installation guide", has_install, "Installation guide found", 15,
                         miss_details="No installation guide detected"):
        rubric.recommend("Add an installation guide section for each SDK.")

    rubric.binary("Semantic versioning", bool(SEMVER.search(text)), "Version numbers detected (SemVer pattern)", 15,
                  miss_points=5, miss_details="No version numbers detected")

    has_errors = bool(re.search(r"Error|Exception|error code|error handling|try.*catch|except", text, re.IGNORECASE))
    rubric.binary("Error handling documentation", has_errors, "Error handling patterns documented", 15,
                  miss_details="No error handling documentation found")

    has_naming = bool(re.search(r"camelCase|snake_case|PascalCase|naming convention", text, re.IGNORECASE))
    rubric.binary("Naming convention documentation", has_naming, "Naming conventions documented", 10,
                  miss_points=3, miss_details="No explicit naming conventions")

    return rubric.score(weight)


def evaluate_auth_simplicity(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    has_api_key = bool(re.search(r"api[- ]key|api_key|apikey|bearer token|authorization: bearer", text, re.IGNORECASE))
    if not rubric.binary("API key authentication", has_api_key, "API key authentication referenced", 25,
                         miss_details="No API key authentication found"):
        rubric.recommend("Offer simple API key authentication so agents can get started without OAuth flows.")

    has_auth_page = bool(pages_with_url(ctx, AUTH_DOCS_URL))
    rubric.binary("Dedicated authentication docs", has_auth_page, "Auth documentation page found", 20,
                  miss_details="No dedicated auth docs page")

    has_auth_example = any(
        re.search(r"authorization|api[_-]key|bearer|token", el.get_text(), re.IGNORECASE)
        for page in ctx.pages
        for el in page.soup.select("pre, code")
    )
    if not rubric.binary("Authentication code example", has_auth_example, "Auth code example found", 20,
                         miss_details="No authentication code example"):
        rubric.recommend("Show a complete authenticated request in code, including the Authorization header.")

    has_free_tier = bool(re.search(r"free tier|free plan|sandbox|test mode|trial|no credit card", text, re.IGNORECASE))
    rubric.binary("Free tier or sandbox environment", has_free_tier, "Free/sandbox tier mentioned", 20,
                  miss_details="No free tier or sandbox mentioned")

    has_token_docs = bool(re.search(
        r"token refresh|token expiration|token rotation|revoke.*token|refresh.*token", text, re.IGNORECASE
    ))
    rubric.binary("Token management documentation", has_token_docs, "Token management documented", 15,
                  miss_points=5, miss_details="No token lifecycle documentation")

    return rubric.score(weight)


def evaluate_quickstart_guide(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()

    quickstarts = pages_with_url(ctx, QUICKSTART_URL)
    if not rubric.binary(
        "Quickstart/Getting Started page exists", bool(quickstarts),
        f"{len(quickstarts)} quickstart page(s) found", 20,
        miss_details="No quickstart page detected",
    ):
        rubric.recommend(
            "Create a quickstart guide that takes a developer from zero to a first successful API "
            "call in under five minutes."
        )

    if quickstarts:
        page = quickstarts[0]
        text = page.text
        rubric.binary(
            "Prerequisites listed",
            bool(re.search(r"prerequisite|requirement|before you begin|you'll need|you will need", text, re.IGNORECASE)),
            "Prerequisites section found", 15, miss_details="No prerequisites listed",
        )
        has_steps = page.soup.find("ol") is not None or bool(re.search(r"step\s*\d", text, re.IGNORECASE))
        rubric.binary("Numbered step-by-step format", has_steps, "Step-by-step format found", 15,
                      miss_details="No numbered steps detected")
        blocks = len(page.soup.select("pre, code"))
        rubric.tiered("Copy-paste ready commands", blocks, f"{blocks} code block(s) in quickstart", 20,
                      pass_at=3, partial_at=1, partial_points=10)
        rubric.binary(
            "Expected output shown",
            bool(re.search(r"output|response|result|you should see|expected|returns", text, re.IGNORECASE)),
            "Expected output shown", 15, miss_details="No expected output found",
        )
        variants = len(pages_with_url(ctx, QUICKSTART_VARIANT_URL))
        rubric.tiered("Multiple language/platform quickstarts", variants, f"{variants} quickstart variation(s)", 15,
                      pass_at=3, partial_at=2, partial_points=8, floor=3)
    else:
        for check in ("Prerequisites", "Numbered steps", "Code blocks", "Expected output", "Multi-platform"):
            rubric.add(check, FindingStatus.FAIL, "N/A: no quickstart page", 0, 16)

    return rubric.score(weight)


def evaluate_error_messages(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    if not rubric.binary(
        "Error documentation exists",
        bool(re.search(r"error code|error response|error handling|troubleshooting", text, re.IGNORECASE)),
        "Error documentation found", 25, miss_details="No error documentation",
    ):
        rubric.recommend("Publish an errors page listing every error code an agent can receive.")

    rubric.binary(
        "HTTP status codes documented",
        bool(re.search(r"400|401|403|404|429|500|status code", text, re.IGNORECASE)),
        "HTTP status codes referenced", 20, miss_details="No HTTP status codes found",
    )
    if not rubric.binary(
        "Actionable resolution guidance",
        bool(re.search(r"how to fix|resolution|solution|to resolve|try.*instead", text, re.IGNORECASE)),
        "Resolution guidance found in error docs", 25,
        miss_details="No resolution guidance in error documentation",
    ):
        rubric.recommend(
            "Pair every documented error with a concrete resolution. Agents cannot guess their way "
            "past ambiguous errors."
        )
    rubric.binary(
        "Retry guidance for rate limits",
        bool(re.search(r"retry|retry-after|backoff", text, re.IGNORECASE)),
        "Retry guidance found", 15, miss_details="No retry guidance",
    )
    rubric.binary(
        "Structured error format (JSON)",
        bool(re.search(r"error_code|error_type|\"message\"|\"error\"|\"detail\"|\"status\"", text, re.IGNORECASE)),
        "Structured error format patterns found", 15,
        miss_points=5, miss_details="No structured error format detected",
    )

    return rubric.score(weight)


def evaluate_changelog_versioning(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    has_changelog = bool(pages_with_url(ctx, CHANGELOG_URL))
    if not rubric.binary("Changelog page exists", has_changelog, "Changelog page found", 30,
                         miss_details="No changelog page detected"):
        rubric.recommend("Publish a changelog page with dated, versioned entries.")

    versions = len(SEMVER.findall(text))
    rubric.tiered("Semantic version numbers", versions, f"{versions} version number(s) found", 20,
                  pass_at=3, partial_at=1, partial_points=10)

    rubric.binary(
        "Breaking change / deprecation notices",
        bool(re.search(r"breaking change|deprecat|migration guide|upgrade guide|sunset", text, re.IGNORECASE)),
        "Breaking change/deprecation patterns found", 25,
        miss_points=10, miss_details="No breaking change documentation",
    )

    has_migration = bool(pages_with_url(ctx, MIGRATION_URL))
    if not rubric.binary("Migration/upgrade guides", has_migration, "Migration guide found", 25,
                         miss_details="No migration guide detected"):
        rubric.recommend("Write migration guides for every major version.")

    return rubric.score(weight)


def evaluate_mcp_server(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    has_mcp = bool(re.search(r"mcp|model context protocol", text, re.IGNORECASE))
    if not rubric.binary("MCP server referenced", has_mcp, "MCP server references found", 35,
                         miss_details="No MCP server references"):
        rubric.recommend(
            "Ship a Model Context Protocol (MCP) server so AI agents can call your API as a tool."
        )

    has_mcp_page = bool(pages_with_url(ctx, MCP_URL))
    if has_mcp_page:
        rubric.add("MCP documentation page", FindingStatus.PASS, "MCP documentation page found", 20, 20)
    elif has_mcp:
        rubric.add("MCP documentation page", FindingStatus.PARTIAL, "No dedicated MCP documentation", 10, 20)
    else:
        rubric.add("MCP documentation page", FindingStatus.FAIL, "No dedicated MCP documentation", 0, 20)

    rubric.binary(
        "AI agent integration docs",
        bool(re.search(r"ai agent|coding assistant|copilot|cursor|windsurf|agentic", text, re.IGNORECASE)),
        "AI agent integration references found", 20, miss_details="No AI agent integration docs",
    )
    if not rubric.binary(
        "AI rules/context files",
        bool(re.search(r"\.cursor|claude\.md|agents\.md|\.mdc|ai[- ]rules|cursor[- ]rules", text, re.IGNORECASE)),
        "AI rules/context file references found", 25, miss_details="No AI rules files referenced",
    ):
        rubric.recommend("Publish AI rules files (AGENTS.md, .cursor rules) describing how to use your SDK.")

    return rubric.score(weight)


def evaluate_integration_guides(ctx: SiteContext, weight: float) -> CategoryScore:
    rubric = Rubric()
    text = ctx.all_text

    integration_pages = pages_with_url(ctx, INTEGRATION_URL)
    if not rubric.tiered(
        "Integration guide pages", len(integration_pages),
        f"{len(integration_pages)} integration page(s) found", 25,
        pass_at=3, partial_at=1, partial_points=12,
    ):
        rubric.recommend("Write integration guides for the most common frameworks and platforms.")

    frameworks = _mentions(text, FRAMEWORKS)
    rubric.tiered(
        "Framework integration coverage", len(frameworks),
        f"{len(frameworks)} framework(s) mentioned: {', '.join(frameworks) or 'none'}", 20,
        pass_at=5, partial_at=3, partial_points=12, floor=5,
    )

    rubric.binary(
        "Webhook documentation",
        bool(re.search(r"webhook|callback url|event notification", text, re.IGNORECASE)),
        "Webhook documentation found", 15, miss_points=5, miss_details="No webhook documentation",
    )

    sdks = _mentions(text, SDK_LANGUAGES)
    rubric.tiered(
        "SDK language ecosystem", len(sdks),
        f"{len(sdks)} SDK language(s): {', '.join(sdks) or 'none'}", 20,
        pass_at=4, partial_at=2, partial_points=10, floor=5,
    )

    rubric.binary(
        "Community/open-source presence",
        bool(re.search(r"github|open source|community|contributing|discord|slack channel", text, re.IGNORECASE)),
        "Community/open-source references found", 20, miss_details="No community/open-source signals",
    )

    return rubric.score(weight)


CATEGORIES: Dict[str, IntegrationEvaluator] = {
    "documentation_structure": evaluate_documentation_structure,
    "api_documentation": evaluate_api_documentation,
    "code_examples": evaluate_code_examples,
    "llms_txt": evaluate_llms_txt,
    "sdk_quality": evaluate_sdk_quality,
    "auth_simplicity": evaluate_auth_simplicity,
    "quickstart_guide": evaluate_quickstart_guide,
    "error_messages": evaluate_error_messages,
    "changelog_versioning": evaluate_changelog_versioning,
    "mcp_server": evaluate_mcp_server,
    "integration_guides": evaluate_integration_guides,
    "machine_readable_sitemaps": evaluate_machine_readable_sitemaps,
}
