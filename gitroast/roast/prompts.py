"""Prompt and output schema for the GitHub roast."""
from __future__ import annotations

import json
from typing import Any, Dict, Sequence

from gitroast.github.models import ActivitySummary, LanguageHistogram, Profile, Repository

ROAST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "roast": {
            "type": "string",
            "description": "A strict 2-paragraph, simple English, brutal roast.",
        },
        "score": {
            "type": "number",
            "description": "A number from 0 to 100. 100 means they are absolute trash.",
        },
        "titles": {
            "type": "array",
            "items": {"type": "string"},
            "description": "3-4 abusive nicknames (e.g. 'Code Monkey', 'Copy-Paste Idiot').",
        },
    },
    "required": ["roast", "score", "titles"],
    "additionalProperties": False,
}

ROAST_INSTRUCTIONS = """
Task: DESTROY THIS PERSON.

Persona: You are a hateful, toxic bully. You are NOT a professional. You are just mean.

Tone Requirements:
- Simple English: short, punchy sentences, like a schoolyard bully.
- Dark and brutal: hopeless and depressing.
- Abusive: call them "idiot", "loser", "trash", "useless".
- No mercy: do not be constructive, do not be nice.

Specific Instructions:
1. Look at their 'Language Usage'. If it is mostly HTML/CSS, call them a fake developer who is not a real engineer. If they use Python, call them slow. If JavaScript, call them garbage.
2. Look at 'Activity'. If it is low, say they are lazy and should quit.
3. Look at 'Recent Repos'. Call their projects "useless junk".

Format:
- EXACTLY TWO PARAGRAPHS. No more.
- Use Markdown.
- Return only a JSON object with the fields "roast", "score" and "titles".
"""


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def build_roast_prompt(
    profile: Profile,
    repositories: Sequence[Repository],
    activity: ActivitySummary,
    languages: LanguageHistogram,
) -> str:
    return (
        f"Profile: {_dumps(profile.to_dict())}\n"
        f"Recent Repos: {_dumps([repo.to_prompt_dict() for repo in repositories])}\n"
        f"Activity Stats (Last 50 events): {_dumps(activity.to_dict())}\n"
        f"Language Usage: {_dumps(languages)}\n"
        f"{ROAST_INSTRUCTIONS}"
    )
