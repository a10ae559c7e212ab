"""
Compiled text patterns shared by the classifier and several rubrics.
"""

import re

STREET_ADDRESS = re.compile(
    r"\d{1,5}\s+\w+\s+(street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|court|ct)\b",
    re.IGNORECASE,
)
PHONE_NUMBER = re.compile(r"(\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})")

# URL sections used for archetype detection
API_URL = re.compile(r"/(docs|api|reference|sdk)(/|$|\?|#)", re.IGNORECASE)
SHOP_URL = re.compile(r"/(products|shop|cart|checkout)(/|$|\?|#)", re.IGNORECASE)
LOCAL_URL = re.compile(r"/(locations|contact|about-us)(/|$|\?|#)", re.IGNORECASE)
CONTENT_URL = re.compile(r"/(blog|articles|news|posts)(/|$|\?|#)", re.IGNORECASE)

ECOMMERCE_SCHEMA_TYPES = frozenset({
    "Product", "Offer", "AggregateOffer", "IndividualProduct", "ProductGroup",
})
ARTICLE_SCHEMA_TYPES = frozenset({
    "Article", "BlogPosting", "NewsArticle", "TechArticle", "ScholarlyArticle", "Report",
})
LOCAL_BUSINESS_SCHEMA_TYPES = frozenset({
    "LocalBusiness", "Restaurant", "MedicalBusiness",
    "Dentist", "Attorney", "AutoRepair", "BarOrPub",
    "BeautySalon", "CafeOrCoffeeShop", "DayCare",
    "Electrician", "EmergencyService", "FinancialService",
    "FoodEstablishment", "GasStation", "HealthAndBeautyBusiness",
    "HomeAndConstructionBusiness", "InternetCafe", "LegalService",
    "LodgingBusiness", "MedicalClinic", "Optician",
    "ProfessionalService", "RealEstateAgent", "Store",
    "VeterinaryCare",
})

# Language signals
DEFINITION = re.compile(
    r"is defined as|refers to|is a |means that|is the process of|describes the",
    re.IGNORECASE,
)
