from __future__ import annotations

import json
import logging

from openai import OpenAIError

from ..config import settings
from ..knowledge.base import Jurisdiction
from . import llm
from .models import EligibilityResult

logger = logging.getLogger(__name__)


async def explain_result(
    result: EligibilityResult, jurisdiction: Jurisdiction
) -> str:
    """Plain-language summary of a screening result.

    Uses the LLM when an API key is configured and falls back to the
    deterministic reasoning lines otherwise, or when the call fails.
    """
    if not llm.is_configured():
        return fallback_explanation(result)

    try:
        text = await llm.chat_text(
            _build_prompt(result, jurisdiction),
            [
                {
                    "role": "user",
                    "content": "Explain these screening results to me.",
                }
            ],
        )
    except OpenAIError as exc:
        logger.error("LLM explanation failed: %s", exc)
        return fallback_explanation(result)

    text = text.strip()
    if not text:
        return fallback_explanation(result)
    return f"{text}\n\n{result.disclaimer}"


def fallback_explanation(result: EligibilityResult) -> str:
    lines = list(result.reasoning)
    for verdict in result.verdicts:
        label = verdict.verdict.replace("_", " ")
        lines.append(f"{verdict.name}: {label}. {'; '.join(verdict.reasons)}")
    lines.append(result.disclaimer)
    return "\n".join(lines)


def _build_prompt(result: EligibilityResult, jurisdiction: Jurisdiction) -> str:
    verdict_block = json.dumps(
        [
            {
                "relief": v.name,
                "verdict": v.verdict,
                "reasons": list(v.reasons),
                "waiting_period_ends": (
                    v.waiting_period_ends.isoformat() if v.waiting_period_ends else None
                ),
            }
            for v in result.verdicts
        ],
        indent=2,
    )
    programs = ", ".join(
        jurisdiction.special_program(p).name for p in result.special_programs
    ) or "none"

    return (
        f"You are the plain-language assistant for {settings.app_name}, a free "
        f"record-clearing screener for {jurisdiction.name}.\n\n"
        f"OFFENSE: {result.offense_name or 'not classified'}\n"
        f"SCREENED ON: {result.as_of.isoformat()}\n\n"
        "RESULTS PER RELIEF TYPE:\n"
        f"{verdict_block}\n\n"
        f"SPECIAL PROGRAMS TO LOOK INTO: {programs}\n\n"
        "RULES:\n"
        "- Write 4-6 short sentences a non-lawyer can follow.\n"
        "- Only restate what the results say. Do not add rules or dates.\n"
        "- Never say the person IS eligible or will get relief. Say they may "
        "qualify and that a court decides.\n"
        "- Suggest talking to an attorney or legal aid when anything needs "
        "more information.\n"
    )
