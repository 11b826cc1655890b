"""AI module for Groq LLM integration.

Turns a snapshot of sales and stock into structured business insights.
It never touches clinic state: callers pass the data in and get validated
Insight objects back, or nothing at all.
"""

from .groq_client import GroqClient, get_groq_client
from .insight_parser import parse_insights
from .insight_schema import Insight, InsightType

__all__ = ["GroqClient", "get_groq_client", "parse_insights", "Insight", "InsightType"]
