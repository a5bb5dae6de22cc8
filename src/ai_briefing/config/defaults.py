"""Built-in rule tables for the AI briefing domain.

These are the production tables. A YAML file with the same shape
(see ``RulesConfig``) replaces them wholesale; tables are never merged.
"""

from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.rules import (
    AliasRule,
    EntityRule,
    RulesConfig,
    SubdomainRule,
    TitleRule,
)


DEFAULT_ALIASES: list[AliasRule] = [
    AliasRule(pattern=r"clawd\s*bot|clawdbot|clawed\s*bot|moltbot", canonical="OpenClaw"),
    AliasRule(pattern=r"openclaw", canonical="OpenClaw"),
    AliasRule(pattern=r"claude\s*code", canonical="Claude Code"),
    AliasRule(pattern=r"copilot", canonical="Copilot"),
]

DEFAULT_ENTITIES: list[EntityRule] = [
    EntityRule(pattern=r"\bopenai\b", name="OpenAI"),
    EntityRule(pattern=r"\bdeepmind\b", name="DeepMind"),
    EntityRule(pattern=r"\bgoogle\b", name="Google"),
    EntityRule(pattern=r"\banthropic\b", name="Anthropic"),
    EntityRule(pattern=r"\bmicrosoft\b", name="Microsoft"),
    EntityRule(pattern=r"\bnvidia\b", name="NVIDIA"),
    EntityRule(pattern=r"\bhugging\s*face\b", name="Hugging Face"),
    EntityRule(pattern=r"\barxiv\b", name="arXiv"),
    EntityRule(pattern=r"\beu\b|\beuropean\s+union\b", name="EU"),
    EntityRule(pattern=r"\bftc\b", name="FTC"),
    EntityRule(pattern=r"\bdoj\b", name="DOJ"),
]

# Security and regulation are checked before the generic model-release
# group so that e.g. a jailbreak of a named model lands in security.
DEFAULT_SUBDOMAINS: list[SubdomainRule] = [
    SubdomainRule(
        subdomain=Subdomain.AI_SECURITY,
        pattern=r"(sec|vuln|exploit|breach|jailbreak|prompt injection|injection)",
    ),
    SubdomainRule(
        subdomain=Subdomain.AI_REGULATION,
        pattern=(
            r"(regulat|policy|\blaw\b|\bact\b|compliance|agency|\beu\b|\bftc\b"
            r"|\bdoj\b|white house|executive order)"
        ),
    ),
    SubdomainRule(
        subdomain=Subdomain.AI_INFRA,
        pattern=(
            r"(gpu|nvidia|amd|accelerator|cuda|inference|training|cluster"
            r"|datacenter|h100|b200|chip)"
        ),
    ),
    SubdomainRule(
        subdomain=Subdomain.AI_APPS_TOOLS,
        pattern=(
            r"(copilot|workspace|m365|office|slack|zoom|notion|productivity"
            r"|admin|audit|governance)"
        ),
    ),
    SubdomainRule(
        subdomain=Subdomain.AI_BUSINESS_MARKET,
        pattern=(
            r"(pricing|price|tier|billing|cost|enterprise|contract|acquis|ipo"
            r"|funding|revenue)"
        ),
    ),
    SubdomainRule(
        subdomain=Subdomain.MODEL_RELEASES,
        pattern=(
            r"(model|llm|gpt|claude|gemini|openai|anthropic|meta|llama|mistral"
            r"|release|preview|benchmark)"
        ),
    ),
]

DEFAULT_STOPWORDS: list[str] = [
    "the", "and", "for", "with", "from", "this", "that", "your", "into",
    "over", "about", "new", "today", "you", "are", "was", "were", "will",
    "its", "it", "how", "why", "what", "a", "an", "to", "of", "in", "on",
    "at", "by", "as", "or", "not", "be", "can", "may", "via", "vs", "is",
    "we", "our", "their", "they", "i", "my",
    "chapter", "part", "episode", "live", "stream", "watch", "review",
    # feed boilerplate
    "which", "built", "class", "using", "used", "make", "makes", "making",
    "like", "than", "then", "here", "there", "also", "best", "good",
]  # fmt: skip

DEFAULT_ENTITY_DENYLIST: list[str] = [
    "Which",
    "Read",
    "Article",
    "Enables",
    "Built",
    "Unveils",
]

DEFAULT_ENTITY_FILLERS: list[str] = [
    "The", "A", "An", "In", "On", "At", "For", "With", "From", "By", "And",
    "Or", "To", "Of",
]  # fmt: skip

DEFAULT_TITLE_RULES: list[TitleRule] = [
    TitleRule(
        patterns=[r"openclaw|clawdbot"],
        title="OpenClaw-style always-on agent workflows trend",
    ),
    TitleRule(
        patterns=[r"prompt injection|injection"],
        title="Prompt-injection risks resurface for tool-using AI agents",
    ),
    TitleRule(
        patterns=[r"open\s*source", r"model"],
        title="Open-source model momentum shifts competitive baseline",
    ),
    TitleRule(
        patterns=[r"deepfake"],
        title="Real-time deepfake tooling spreads via open-source releases",
    ),
    TitleRule(
        patterns=[r"gpu|accelerator|h100|b200|nvidia"],
        title="AI accelerator roadmap updates reshape capacity planning",
    ),
    TitleRule(
        patterns=[r"pricing|tier|billing|cost"],
        title="AI vendor pricing changes force renewed cost planning",
    ),
    TitleRule(
        patterns=[r"regulat|policy|\blaw\b|\bact\b|compliance|agency"],
        title="Policy guidance tightens around enterprise AI use",
    ),
]


def default_rules() -> RulesConfig:
    """Build the built-in rule tables.

    Returns:
        RulesConfig with the production AI briefing tables.
    """
    return RulesConfig(
        aliases=list(DEFAULT_ALIASES),
        entities=list(DEFAULT_ENTITIES),
        subdomains=list(DEFAULT_SUBDOMAINS),
        default_subdomain=Subdomain.AI_BUSINESS_MARKET,
        stopwords=list(DEFAULT_STOPWORDS),
        entity_denylist=list(DEFAULT_ENTITY_DENYLIST),
        entity_fillers=list(DEFAULT_ENTITY_FILLERS),
        title_rules=list(DEFAULT_TITLE_RULES),
    )
