"""Optional insight text from an OpenAI-compatible chat-completions API.

Nothing in the engine depends on this. Every failure path returns None so
callers can skip the insight and carry on.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from founder_pulse.config.settings import (
    INSIGHTS_API_KEY,
    INSIGHTS_API_URL,
    INSIGHTS_MODEL,
    INSIGHTS_TIMEOUT_SECONDS,
)
from founder_pulse.models.assessment import PsychologicalScores

logger = logging.getLogger(__name__)

MIN_INSIGHT_LENGTH = 50
MAX_TOKENS = 500
TEMPERATURE = 0.7


def build_prompt(scores: PsychologicalScores, archetype: str) -> str:
    return (
        "You are a supportive founder psychologist. A young founder (age 16-24) "
        "just completed a psychological assessment. Here are their scores "
        "(0-100, higher = more intense):\n\n"
        f"- Imposter Syndrome: {scores.imposter_syndrome}\n"
        f"- Founder Doubt: {scores.founder_doubt}\n"
        f"- Identity Fusion: {scores.identity_fusion}\n"
        f"- Fear of Rejection: {scores.fear_of_rejection}\n"
        f"- Risk Tolerance: {scores.risk_tolerance}\n"
        f"- Motivation Type: {scores.motivation_type}\n"
        f"- Isolation Level: {scores.isolation_level}\n\n"
        f"Their archetype is: {archetype}\n\n"
        "Provide:\n"
        "1. A brief assessment of their psychological state (2-3 sentences)\n"
        "2. 3 specific, actionable recommendations\n"
        "3. 1 warning sign to watch for\n\n"
        "Tone: Warm, supportive, non-clinical. Speak directly to the founder. "
        "Keep response under 300 words."
    )


async def fetch_insights(
    scores: PsychologicalScores,
    archetype: str,
    api_key: str = INSIGHTS_API_KEY,
) -> Optional[str]:
    """Ask the model for a short personalised write-up, or None."""
    if not api_key:
        return None

    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(
                INSIGHTS_API_URL,
                headers={"Authorization": f"Bearer {api_key}"},
                json={
                    "model": INSIGHTS_MODEL,
                    "messages": [{"role": "user", "content": build_prompt(scores, archetype)}],
                    "max_tokens": MAX_TOKENS,
                    "temperature": TEMPERATURE,
                },
                timeout=INSIGHTS_TIMEOUT_SECONDS,
            )
    except httpx.HTTPError as exc:
        logger.warning("Insights request failed: %s", exc)
        return None

    if resp.status_code != 200:
        logger.warning("Insights API returned %d", resp.status_code)
        return None

    try:
        content = resp.json()["choices"][0]["message"]["content"] or ""
    except (ValueError, KeyError, IndexError, TypeError):
        logger.warning("Insights API returned an unexpected payload")
        return None

    if len(content) < MIN_INSIGHT_LENGTH:
        logger.warning("Insights API returned too little content (%d chars)", len(content))
        return None
    return content
