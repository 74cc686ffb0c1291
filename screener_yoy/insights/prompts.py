"""Prompt template for the company insight request."""

from __future__ import annotations

INSIGHT_PROMPT_TEMPLATE = """
You are a financial research assistant. Extract:
1. Sector (short)
2. Sub-sector (short)
3. Detailed summary of the conference call with focus on financial performance, margin guidance, how different business segments are doing, management guidance for the future along with numbers, and key risks.

Return JSON: {{ "sector": "", "subSector": "", "concallSummary": "", "guidance": "" }}

Company: {symbol}
About: {description}
Transcript: {transcript}
"""

# JSON keys requested from the model, mapped to Insight attributes
RESPONSE_FIELDS = {
    "sector": "sector",
    "subSector": "sub_sector",
    "concallSummary": "concall_summary",
    "guidance": "guidance",
}


def build_insight_prompt(symbol: str, description: str, transcript: str) -> str:
    """Render the single user message sent to the model."""
    return INSIGHT_PROMPT_TEMPLATE.format(
        symbol=symbol,
        description=description,
        transcript=transcript,
    )
