"""Validation of raw LLM output into Insight objects."""

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from .insight_schema import Insight, InsightResponse

logger = logging.getLogger(__name__)


def _strip_code_fence(text: str) -> str:
    # Handle cases like: ```json\n[...]\n``` or just [...]
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].strip().startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        text = "\n".join(lines).strip()
    return text


def parse_insights(llm_response: Optional[str]) -> Optional[List[Insight]]:
    """Extract and validate insights from an LLM response.

    Accepts a bare JSON array or an object with an "insights" array.

    Returns:
        Validated insights, or None if anything in the response is off
    """
    if not llm_response:
        return None

    try:
        data = json.loads(_strip_code_fence(llm_response))
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON from LLM: {e}")
        return None

    if isinstance(data, list):
        data = {"insights": data}
    if not isinstance(data, dict):
        logger.warning(f"Unexpected JSON type from LLM: {type(data).__name__}")
        return None

    try:
        return InsightResponse.model_validate(data).insights
    except ValidationError as e:
        logger.warning(f"Insight schema validation failed: {e.error_count()} error(s)")
        return None
