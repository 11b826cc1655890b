"""Insight Schema - strict JSON structure for LLM output validation.

Any deviation in any element rejects the whole response; partial lists are
never accepted.
"""

import math
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, StrictFloat, StrictStr, field_validator


class InsightType(str, Enum):
    """Allowed insight tags - FIXED, cannot be extended by LLM."""
    TREND = "TREND"
    ALERT = "ALERT"
    OPPORTUNITY = "OPPORTUNITY"


class Insight(BaseModel):
    """One business observation for the clinic owner."""
    title: StrictStr = Field(min_length=1)
    description: StrictStr
    type: InsightType
    confidence: StrictFloat  # a JSON number; "0.9" or true is a schema mismatch

    @field_validator("confidence")
    @classmethod
    def finite_confidence(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("confidence must be a finite number")
        return v


class InsightResponse(BaseModel):
    """JSON mode returns an object, so the array travels under "insights"."""
    insights: List[Insight]
