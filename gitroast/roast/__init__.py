"""
Roast generation: prompt, backend client and the fallback-safe critique service.
"""

from .models import FALLBACK_CRITIQUE, CritiqueResult
from .roast_service import GenerationOutcome, RoastService, parse_critique

__all__ = ["CritiqueResult", "FALLBACK_CRITIQUE", "GenerationOutcome", "RoastService", "parse_critique"]
