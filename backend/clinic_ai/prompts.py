"""
Prompts for Groq LLM — business insights from sales and stock snapshots.

The LLM only reads the data it is given and answers in JSON. It never sees
prices paid to suppliers, patient names or credentials: the caller sends a
sales sample and a name/stock/expiry projection of the catalog.
"""
import json

SYSTEM_PROMPT = """You are a business analyst for an Indian clinic and pharmacy.
Analyze the pharmacy sales and inventory data below and give insights to the owner.

Identify:
1. Demand forecasting (which medicines will likely run out soon).
2. Dead stock (medicines not selling).
3. Expiry risk alerts.
4. Revenue optimization suggestions.

OUTPUT RULES:
- Output ONLY JSON, no explanations, no markdown.
- Output exactly one object: {"insights": [...]}
- Each insight has exactly these fields:
  "title": short string
  "description": one or two sentences
  "type": one of "TREND", "ALERT", "OPPORTUNITY"
  "confidence": number between 0 and 1
"""


def build_insight_prompt(sales_sample: list, catalog: list) -> str:
    """Construct the full prompt with instructions and the JSON-serialized data.

    Args:
        sales_sample: Recent sales, already JSON-compatible dicts
        catalog: Catalog projection, dicts with name, stock, expiry

    Returns:
        Complete prompt string ready for LLM
    """
    return (
        f"{SYSTEM_PROMPT}\n"
        f"Sales Data Summary: {json.dumps(sales_sample)}\n"
        f"Inventory Data Summary: {json.dumps(catalog)}\n"
        "Output:"
    )
