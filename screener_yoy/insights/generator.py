"""Qualitative company insight from an OpenAI chat completion.

The model is asked for a fixed JSON object. Its reply is never allowed to fail
the run: anything that does not parse as a JSON object becomes
:meth:`Insight.fallback`, and individual missing fields become ``"N/A"``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from screener_yoy.config import DEFAULT_OPENAI_MODEL, setup_logging
from screener_yoy.insights.prompts import RESPONSE_FIELDS, build_insight_prompt

logger = setup_logging(__name__)

NOT_AVAILABLE = "N/A"

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


@dataclass(frozen=True)
class Insight:
    """Sector classification and concall digest for one company."""

    sector: str = NOT_AVAILABLE
    sub_sector: str = NOT_AVAILABLE
    concall_summary: str = NOT_AVAILABLE
    guidance: str = NOT_AVAILABLE

    @classmethod
    def fallback(cls) -> Insight:
        """Insight with ``"N/A"`` in every field."""
        return cls()


def _field_text(value: Any) -> str:
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, str):
        return value.strip() or NOT_AVAILABLE
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_insight_response(content: str | None) -> Insight:
    """Parse the model reply into an :class:`Insight`.

    Parameters
    ----------
    content : str | None
        Raw completion text. A single surrounding Markdown code fence is
        removed before parsing.

    Returns
    -------
    Insight
        Parsed insight; :meth:`Insight.fallback` when ``content`` is empty,
        not JSON, or not a JSON object.
    """
    if not content:
        logger.warning("Empty AI response, using fallback insight")
        return Insight.fallback()

    text = content.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("AI response is not valid JSON, using fallback insight")
        logger.debug("Unparseable AI response: %s", content)
        return Insight.fallback()

    if not isinstance(payload, dict):
        logger.warning("AI response is not a JSON object, using fallback insight")
        return Insight.fallback()

    return Insight(**{attr: _field_text(payload.get(key)) for key, attr in RESPONSE_FIELDS.items()})


def generate_insight(
    client: Any,
    symbol: str,
    description: str,
    transcript: str,
    model: str = DEFAULT_OPENAI_MODEL,
) -> Insight:
    """Ask the model for sector, sub-sector, concall summary and guidance.

    Parameters
    ----------
    client : openai.OpenAI
        Chat completion client from :func:`screener_yoy.config.get_openai_client`.
    symbol : str
        Company symbol.
    description : str
        Company profile text (already truncated).
    transcript : str
        Transcript excerpt or ``"Transcript not available"``.
    model : str, optional
        Chat model name.

    Returns
    -------
    Insight
        Always fully populated.

    Raises
    ------
    openai.OpenAIError
        If the API request itself fails.
    """
    prompt = build_insight_prompt(symbol, description, transcript)
    logger.debug("Insight prompt: %d characters", len(prompt))

    response = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        temperature=0,
    )
    return parse_insight_response(response.choices[0].message.content)
