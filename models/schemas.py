"""
Pydantic schemas for the AI Readiness Auditor API.

Defines input snapshots, rubric results and the final site analysis.
Result models are frozen: once a rubric has produced them they never change.
"""

from typing import Annotated, Dict, Iterator, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import Archetype, Dimension, Effort, FindingStatus, Grade, Priority


class PageSnapshot(BaseModel):
    """
    One fetched page as delivered by the crawler.

    Header names are matched case-insensitively during analysis.
    """
    url: str = Field(..., min_length=1, max_length=2048, description="Absolute page URL")
    html: str = Field("", description="Raw HTML markup")
    title: str = Field("", description="Document title reported by the crawler")
    headers: Dict[str, str] = Field(default_factory=dict, description="HTTP response headers")
    load_time_ms: float = Field(0, ge=0, description="Time to fetch the page in milliseconds")
    status_code: int = Field(200, description="HTTP status code of the fetch")


class SiteResources(BaseModel):
    """Site-wide text resources fetched alongside the pages."""
    origin: str = Field(..., description="Site origin, e.g. https://example.com")
    robots_txt: Optional[str] = Field(None, description="Contents of /robots.txt")
    llms_txt: Optional[str] = Field(None, description="Contents of /llms.txt")
    llms_full_txt: Optional[str] = Field(None, description="Contents of /llms-full.txt")
    openapi_spec: Optional[str] = Field(None, description="Discovered OpenAPI/Swagger document")

    @field_validator("origin")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")


class Finding(BaseModel):
    """
    Result of a single rubric check.

    page_urls is only set when findings from several pages were merged.
    """
    model_config = ConfigDict(frozen=True)

    check: str = Field(..., description="Check name")
    status: FindingStatus
    details: str = Field("", description="Human-readable evidence")
    points: int = Field(..., ge=0, description="Points earned")
    max_points: int = Field(..., gt=0, description="Points available")
    page_urls: Optional[List[str]] = Field(None, description="Pages that produced this finding")

    @model_validator(mode="after")
    def points_within_max(self) -> "Finding":
        if self.points > self.max_points:
            raise ValueError(
                f"points ({self.points}) exceed max_points ({self.max_points}) for '{self.check}'"
            )
        return self


class CategoryScore(BaseModel):
    """Rolled-up score for one rubric category."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100, description="Category score (0-100)")
    grade: Grade
    weight: float = Field(..., ge=0, le=1, description="Weight of this category in its profile")
    findings: List[Finding] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class _Profile(BaseModel):
    """Shared behaviour for fixed-shape collections of category scores."""
    model_config = ConfigDict(frozen=True)

    def categories(self) -> Iterator[Tuple[str, CategoryScore]]:
        """Yield (category_key, CategoryScore) in declaration order."""
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, CategoryScore):
                yield name, value


class ContentProfile(_Profile):
    """Page-level (or aggregated) content readiness across 11 categories."""
    content_structure: CategoryScore
    schema_markup: CategoryScore
    topical_authority: CategoryScore
    citation_worthiness: CategoryScore
    content_freshness: CategoryScore
    language_patterns: CategoryScore
    meta_information: CategoryScore
    technical_health: CategoryScore
    content_uniqueness: CategoryScore
    multi_format_content: CategoryScore
    eeat_signals: CategoryScore


class SaasApiIntegration(_Profile):
    archetype: Literal["saas-api"] = "saas-api"
    documentation_structure: CategoryScore
    api_documentation: CategoryScore
    code_examples: CategoryScore
    llms_txt: CategoryScore
    sdk_quality: CategoryScore
    auth_simplicity: CategoryScore
    quickstart_guide: CategoryScore
    error_messages: CategoryScore
    changelog_versioning: CategoryScore
    mcp_server: CategoryScore
    integration_guides: CategoryScore
    machine_readable_sitemaps: CategoryScore


class EcommerceIntegration(_Profile):
    archetype: Literal["ecommerce"] = "ecommerce"
    product_schema: CategoryScore
    review_markup: CategoryScore
    inventory_signals: CategoryScore
    merchant_feed: CategoryScore
    comparison_content: CategoryScore
    customer_evidence: CategoryScore
    purchase_simplicity: CategoryScore
    llms_txt: CategoryScore
    machine_readable_sitemaps: CategoryScore
    faq_content: CategoryScore
    category_taxonomy: CategoryScore


class LocalBusinessIntegration(_Profile):
    archetype: Literal["local-business"] = "local-business"
    local_schema: CategoryScore
    nap_consistency: CategoryScore
    review_presence: CategoryScore
    service_pages: CategoryScore
    location_signals: CategoryScore
    contact_accessibility: CategoryScore
    trust_signals: CategoryScore
    llms_txt: CategoryScore
    machine_readable_sitemaps: CategoryScore
    local_content: CategoryScore
    photo_evidence: CategoryScore


class ContentPublisherIntegration(_Profile):
    archetype: Literal["content-publisher"] = "content-publisher"
    author_credentials: CategoryScore
    content_taxonomy: CategoryScore
    publishing_cadence: CategoryScore
    syndication_readiness: CategoryScore
    original_reporting: CategoryScore
    source_citation: CategoryScore
    llms_txt: CategoryScore
    machine_readable_sitemaps: CategoryScore
    archive_discoverability: CategoryScore
    multimedia_integration: CategoryScore
    newsletter_presence: CategoryScore


class GeneralIntegration(_Profile):
    archetype: Literal["general"] = "general"
    documentation_structure: CategoryScore
    llms_txt: CategoryScore
    machine_readable_sitemaps: CategoryScore
    content_quality: CategoryScore
    trust_signals: CategoryScore


IntegrationProfile = Annotated[
    Union[
        SaasApiIntegration,
        EcommerceIntegration,
        LocalBusinessIntegration,
        ContentPublisherIntegration,
        GeneralIntegration,
    ],
    Field(discriminator="archetype"),
]

INTEGRATION_MODELS = {
    Archetype.SAAS_API: SaasApiIntegration,
    Archetype.ECOMMERCE: EcommerceIntegration,
    Archetype.LOCAL_BUSINESS: LocalBusinessIntegration,
    Archetype.CONTENT_PUBLISHER: ContentPublisherIntegration,
    Archetype.GENERAL: GeneralIntegration,
}


class PageAnalysis(BaseModel):
    """Content readiness of a single page."""
    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    geo: ContentProfile


class CodeSnippet(BaseModel):
    """Copy-paste remediation attached to a recommendation."""
    model_config = ConfigDict(frozen=True)

    language: str = Field(..., description="Snippet language, e.g. json, html, text")
    code: str
    label: str = Field(..., description="Short caption for the snippet")


class Recommendation(BaseModel):
    """A prioritized remediation action."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Category display label")
    category_key: str = Field(..., description="Category key, e.g. schema_markup")
    dimension: Dimension
    priority: Priority
    effort: Effort
    title: str
    description: str
    current_score: int = Field(..., ge=0, le=100)
    potential_score: int = Field(..., ge=0, le=100)
    impact: str = Field(..., description="Estimated overall improvement")
    code_snippet: Optional[CodeSnippet] = None


class BenchmarkPosition(BaseModel):
    """Where the overall score sits among sites of the same archetype."""
    model_config = ConfigDict(frozen=True)

    percentile: int = Field(..., ge=0, le=99)
    label: str
    median: int
    top10: int


class SiteAnalysis(BaseModel):
    """
    Complete audit result for one site.

    This is a presentation-ready response - the frontend should render
    this structure directly without implementing any scoring logic.
    """
    model_config = ConfigDict(frozen=True)

    url: str
    crawled_at: str = Field(..., description="ISO 8601 timestamp of the analysis")
    pages_analyzed: int = Field(..., ge=1)
    archetype: Archetype
    page_analyses: List[PageAnalysis]
    geo_score: int = Field(..., ge=0, le=100, description="Content readiness score")
    geo_grade: Grade
    aeo_score: int = Field(..., ge=0, le=100, description="Integration readiness score")
    aeo_grade: Grade
    overall_score: int = Field(..., ge=0, le=100)
    overall_grade: Grade
    geo: ContentProfile
    aeo: IntegrationProfile
    top_recommendations: List[Recommendation] = Field(default_factory=list)
    ai_insights: str = ""
    benchmark: Optional[BenchmarkPosition] = None


class AnalyzeRequest(BaseModel):
    """Request schema for POST /audit/analyze."""
    pages: List[PageSnapshot] = Field(..., description="Fetched pages, homepage first")
    resources: SiteResources
    client_request_id: Optional[str] = Field(
        None,
        max_length=100,
        description="Optional client-provided request ID for tracing"
    )


class ServiceStatus(BaseModel):
    """Configuration of the analysis pipeline."""
    content_categories: int = Field(..., description="Number of content rubric categories")
    archetypes: List[str] = Field(..., description="Archetypes with a registered integration rubric")
    max_workers: int = Field(..., description="Worker threads used for per-page analysis")
    max_pages: int = Field(..., description="Maximum pages accepted per request")


class HealthResponse(BaseModel):
    """Response schema for GET /audit/health."""
    status: str = Field(default="healthy", description="Overall health status")
    version: str = Field(..., description="API version")
    services: ServiceStatus = Field(..., description="Pipeline configuration status")


class ErrorResponse(BaseModel):
    """Standardized error response."""
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict] = Field(None, description="Additional error details")
    request_id: Optional[str] = Field(None, description="Client request ID if provided")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_code": "NO_PAGES",
                "message": "At least one page is required for analysis",
                "details": None,
                "request_id": "abc-123",
            }
        }
    )
