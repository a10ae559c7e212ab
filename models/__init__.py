"""Models package for the AI Readiness Auditor."""

from .schemas import (
    PageSnapshot,
    SiteResources,
    Finding,
    CategoryScore,
    ContentProfile,
    SaasApiIntegration,
    EcommerceIntegration,
    LocalBusinessIntegration,
    ContentPublisherIntegration,
    GeneralIntegration,
    IntegrationProfile,
    PageAnalysis,
    CodeSnippet,
    Recommendation,
    BenchmarkPosition,
    SiteAnalysis,
    AnalyzeRequest,
    HealthResponse,
    ServiceStatus,
    ErrorResponse,
)
from .enums import (
    Archetype,
    Grade,
    FindingStatus,
    Priority,
    Effort,
    Dimension,
)

__all__ = [
    "PageSnapshot",
    "SiteResources",
    "Finding",
    "CategoryScore",
    "ContentProfile",
    "SaasApiIntegration",
    "EcommerceIntegration",
    "LocalBusinessIntegration",
    "ContentPublisherIntegration",
    "GeneralIntegration",
    "IntegrationProfile",
    "PageAnalysis",
    "CodeSnippet",
    "Recommendation",
    "BenchmarkPosition",
    "SiteAnalysis",
    "AnalyzeRequest",
    "HealthResponse",
    "ServiceStatus",
    "ErrorResponse",
    "Archetype",
    "Grade",
    "FindingStatus",
    "Priority",
    "Effort",
    "Dimension",
]
