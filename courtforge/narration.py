"""Optional obituary embellishment.

The deterministic obituary written at a ruler's death is always kept as
the fallback; the model only ever replaces it with a longer telling.
"""
from __future__ import annotations

import logging
from typing import Optional

from . import llm_client
from .characters import Character
from .traits import describe_trait

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are the court chronicler of a small realm. Rewrite the obituary you are "
    "given as two or three sentences of period prose. Keep every fact: the name, "
    "the title, the years reigned and the cause of death."
)
SCHEMA_HINT = '{"obituary": "string"}'


def _portrait(ruler: Character) -> str:
    traits = ruler.traits
    return ", ".join(
        [
            describe_trait("ambition", traits.ambition),
            describe_trait("cruelty", traits.cruelty),
            describe_trait("wisdom", traits.wisdom),
        ]
    )


def embellish_obituary(ruler: Character) -> Optional[str]:
    """Ask the model for a richer obituary and store it on the reign summary.

    Returns the new text, or None when narration is disabled, the ruler has
    no reign summary, or the model reply is unusable.
    """
    summary = ruler.reign_summary
    if summary is None:
        return None

    data = llm_client.chat_json(
        SYSTEM_PROMPT,
        [
            {
                "role": "user",
                "content": f"Obituary: {summary.obituary}\nThe ruler was {_portrait(ruler)}.",
            }
        ],
        SCHEMA_HINT,
    )
    if not data:
        return None
    text = data.get("obituary")
    if not isinstance(text, str) or not text.strip():
        logger.debug("narration reply missing obituary for %s", ruler.name)
        return None

    summary.obituary = text.strip()
    return summary.obituary
