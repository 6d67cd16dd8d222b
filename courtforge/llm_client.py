"""Minimal OpenAI chat client wrapper for Courtforge.

Optional. If USE_LLM_NARRATION is false or no OPENAI_API_KEY is provided,
all helpers return None and callers keep their deterministic text.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional

from openai import OpenAI

from . import config as cfg
from .config import _bool_from_env

logger = logging.getLogger(__name__)

_client: Optional[OpenAI] = None


def get_client() -> Optional[OpenAI]:
    """Return a cached OpenAI client if narration is enabled and configured.

    Returns None when USE_LLM_NARRATION is off or OPENAI_API_KEY is unset.
    """
    global _client
    # read at call time so tests can toggle with monkeypatch.setenv
    if not _bool_from_env("USE_LLM_NARRATION", default=False):
        return None
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        logger.debug("LLM narration enabled but OPENAI_API_KEY not set; using templates")
        return None
    if _client is None:
        _client = OpenAI(api_key=api_key)
    return _client


def chat_json(system_prompt: str, messages: List[Dict[str, str]], schema_hint: str) -> Optional[dict]:
    """Call the model and parse one JSON object from its reply.

    Returns None if the client is unavailable, the call fails, or the reply
    is not a JSON object.
    """
    client = get_client()
    if client is None:
        return None

    try:
        completion = client.chat.completions.create(
            model=os.getenv("LLM_MODEL_NAME", cfg.LLM_MODEL_NAME),
            messages=[
                {"role": "system", "content": system_prompt + "\nSchema: " + schema_hint},
                *messages,
            ],
            temperature=0.7,
            max_tokens=256,
        )
    except Exception as e:  # network / auth / model errors
        logger.debug("LLM call failed: %s", e)
        return None

    content = (completion.choices[0].message.content or "").strip()
    try:
        data = json.loads(content)
    except ValueError:
        logger.debug("LLM content was not valid JSON; keeping template. content=%r", content[:200])
        return None
    return data if isinstance(data, dict) else None
