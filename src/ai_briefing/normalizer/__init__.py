"""Text normalization: alias folding, classification and extraction."""

from ai_briefing.normalizer.constants import OTHER_ENTITY
from ai_briefing.normalizer.models import Fingerprint
from ai_briefing.normalizer.normalizer import Normalizer
from ai_briefing.normalizer.patterns import CompiledRules, compile_rules


__all__ = [
    "OTHER_ENTITY",
    "CompiledRules",
    "Fingerprint",
    "Normalizer",
    "compile_rules",
]
