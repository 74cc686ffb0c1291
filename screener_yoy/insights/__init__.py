"""Insights module: LLM-generated sector and concall digest."""

from screener_yoy.insights.generator import (
    NOT_AVAILABLE,
    Insight,
    generate_insight,
    parse_insight_response,
)
from screener_yoy.insights.prompts import build_insight_prompt

__all__ = [
    "NOT_AVAILABLE",
    "Insight",
    "build_insight_prompt",
    "generate_insight",
    "parse_insight_response",
]
