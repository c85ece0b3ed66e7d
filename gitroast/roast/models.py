from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class CritiqueResult:
    """Backend output: two-paragraph roast, 0-100 severity score, 3-4 nicknames."""

    roast: str
    score: int
    titles: List[str] = field(default_factory=list)

    @property
    def verdict(self) -> str:
        """Display label for the score band."""
        if self.score < 30:
            return "IRRELEVANT"
        if self.score < 60:
            return "DISAPPOINTMENT"
        if self.score < 85:
            return "FAILURE"
        return "ABSOLUTE GARBAGE"

    def to_dict(self) -> Dict[str, Any]:
        return {"roast": self.roast, "score": self.score, "titles": list(self.titles)}


FALLBACK_CRITIQUE = CritiqueResult(
    roast=(
        "You are so irrelevant that even the AI refused to roast you. "
        "Your code is probably broken just like this request. Go away."
    ),
    score=0,
    titles=["Error 404", "Ignored", "Nobody"],
)
