"""Base schema types for configuration."""

from enum import Enum


class SourceType(str, Enum):
    """Editorial classification of a publisher.

    Primary: first-hand announcements (vendor blogs, agencies, docs)
    Trade: specialist trade press
    Mainstream: general news outlets
    Analyst: analyst notes and research firms
    Research: papers and research groups
    Influencer: individual creators and newsletters
    Social: social media posts
    """

    PRIMARY = "Primary"
    TRADE = "Trade"
    MAINSTREAM = "Mainstream"
    ANALYST = "Analyst"
    RESEARCH = "Research"
    INFLUENCER = "Influencer"
    SOCIAL = "Social"


class Subdomain(str, Enum):
    """Fixed subdomains of the AI briefing."""

    MODEL_RELEASES = "model_releases"
    AI_REGULATION = "ai_regulation"
    AI_SECURITY = "ai_security"
    AI_INFRA = "ai_infra"
    AI_APPS_TOOLS = "ai_apps_tools"
    AI_BUSINESS_MARKET = "ai_business_market"


class Confidence(str, Enum):
    """Coarse trust label attached to every topic."""

    LOW = "Low"
    MED = "Med"
    HIGH = "High"
