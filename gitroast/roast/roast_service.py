"""
GitHub Roast Service

Turns a profile, its recent repositories, an activity summary and a language
histogram into a CritiqueResult by asking the generative backend for a
schema-constrained roast.

`RoastService.generate` never raises: every failure (network, non-success
response, empty body, output that does not match the schema) is captured as a
GenerationFailure in a GenerationOutcome and replaced by FALLBACK_CRITIQUE.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from json_repair import repair_json

from gitroast.errors import GenerationFailure
from gitroast.github.models import ActivitySummary, LanguageHistogram, Profile, Repository
from gitroast.utils.timing import elapsed_ms, now_perf

from .models import FALLBACK_CRITIQUE, CritiqueResult
from .prompts import ROAST_SCHEMA, build_roast_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOutcome:
    """Either a parsed CritiqueResult or the GenerationFailure that prevented one."""

    result: Optional[CritiqueResult] = None
    failure: Optional[GenerationFailure] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    def unwrap_or_fallback(self) -> CritiqueResult:
        if self.result is not None:
            return self.result
        return FALLBACK_CRITIQUE


def load_json(text: Any) -> Any:
    """Best-effort JSON parse: strips markdown fences, then falls back to json-repair."""
    if text is None:
        return None
    if isinstance(text, (dict, list)):
        return text

    raw = str(text).strip()
    if not raw:
        return None

    if "```" in raw:
        match = re.search(r"```(?:json)?\s*(.*?)\s*```", raw, flags=re.IGNORECASE | re.DOTALL)
        if match:
            raw = match.group(1).strip()

    try:
        return json.loads(raw)
    except ValueError:
        return json.loads(repair_json(raw))


def parse_critique(text: Any) -> CritiqueResult:
    """
    Validate backend output against the roast schema.

    The score is converted to an int but deliberately not clamped to 0-100.

    Raises:
        GenerationFailure: the output is not JSON or violates the schema
    """
    try:
        data = load_json(text)
    except ValueError as e:
        raise GenerationFailure(f"unparseable backend output: {e}") from e

    if not isinstance(data, dict):
        raise GenerationFailure("backend output is not a JSON object")

    roast = data.get("roast")
    if not isinstance(roast, str) or not roast.strip():
        raise GenerationFailure("backend output is missing 'roast'")

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise GenerationFailure(f"backend output has invalid 'score': {score!r}")

    titles = data.get("titles")
    if not isinstance(titles, list) or not all(isinstance(t, str) for t in titles):
        raise GenerationFailure("backend output has invalid 'titles'")

    return CritiqueResult(roast=roast.strip(), score=int(round(score)), titles=[t.strip() for t in titles])


class RoastService:
    """Critique generator on top of a chat client exposing `structured_chat`."""

    def __init__(self, chat_client: Any):
        self.ai = chat_client

    async def attempt(
        self,
        profile: Profile,
        repositories: Sequence[Repository],
        activity: ActivitySummary,
        languages: LanguageHistogram,
    ) -> GenerationOutcome:
        prompt = build_roast_prompt(profile, repositories, activity, languages)
        start = now_perf()
        try:
            text = await self.ai.structured_chat(prompt, ROAST_SCHEMA, "github_roast")
            result = parse_critique(text)
        except GenerationFailure as e:
            return GenerationOutcome(failure=e)
        except Exception as e:  # noqa: BLE001
            failure = GenerationFailure(f"{e.__class__.__name__}: {e}")
            failure.__cause__ = e
            return GenerationOutcome(failure=failure)

        logger.info("Generated roast for %s in %sms (score=%s)", profile.login, elapsed_ms(start), result.score)
        return GenerationOutcome(result=result)

    async def generate(
        self,
        profile: Profile,
        repositories: Sequence[Repository],
        activity: ActivitySummary,
        languages: LanguageHistogram,
    ) -> CritiqueResult:
        outcome = await self.attempt(profile, repositories, activity, languages)
        if outcome.failure is not None:
            logger.error(f"Roast generation failed for {profile.login}: {outcome.failure.message}")
        return outcome.unwrap_or_fallback()

    async def close(self) -> None:
        close = getattr(self.ai, "close", None)
        if close is not None:
            await close()
