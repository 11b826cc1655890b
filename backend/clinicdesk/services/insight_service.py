"""
Insight gateway: forwards a sales/catalog snapshot to a text-generation
provider and returns validated insights.

The gateway never raises into its caller. Network errors, timeouts, malformed
JSON and schema mismatches all come back as an empty list.
"""
import asyncio
import logging
from typing import List, Optional, Protocol, Sequence

from clinic_ai import get_groq_client, parse_insights
from clinic_ai.groq_client import GroqClient
from clinic_ai.insight_schema import Insight
from clinic_ai.prompts import build_insight_prompt
from clinicdesk.core.config import settings
from clinicdesk.schemas.catalog import CatalogEntry, Medicine
from clinicdesk.schemas.ledger import Sale

logger = logging.getLogger(__name__)


class InsightSummarizer(Protocol):
    """Provider interface. Implementations may raise; the gateway absorbs it."""

    def is_available(self) -> bool: ...

    def summarize(self, payload: dict) -> List[Insight]: ...


class GroqInsightSummarizer:
    """Summarizer backed by the Groq chat-completions API."""

    def __init__(self, client: Optional[GroqClient] = None):
        self.client = client or get_groq_client()

    def is_available(self) -> bool:
        return self.client.is_available()

    def summarize(self, payload: dict) -> List[Insight]:
        prompt = build_insight_prompt(payload["sales"], payload["inventory"])
        raw = self.client.complete_json(prompt)
        insights = parse_insights(raw)
        if insights is None:
            raise ValueError("LLM response did not match the insight schema")
        return insights


def build_payload(
    sales: Sequence[Sale],
    medicines: Sequence[Medicine],
    sample_size: int = settings.INSIGHT_SALES_SAMPLE,
) -> dict:
    """The most recent sales (newest first) and a name/stock/expiry view of the catalog."""
    recent = sorted(sales, key=lambda s: s.timestamp, reverse=True)[:sample_size]
    return {
        "sales": [s.model_dump(mode="json") for s in recent],
        "inventory": [
            CatalogEntry(name=m.name, stock=m.stock, expiry=m.expiry_date).model_dump(mode="json")
            for m in medicines
        ],
    }


class InsightGateway:
    def __init__(self, summarizer: Optional[InsightSummarizer] = None,
                 timeout: Optional[float] = None):
        self._summarizer = summarizer
        self.timeout = timeout if timeout is not None else settings.INSIGHT_TIMEOUT_SECONDS

    @property
    def summarizer(self) -> InsightSummarizer:
        # Built lazily so importing the API does not initialise the Groq SDK
        if self._summarizer is None:
            self._summarizer = GroqInsightSummarizer()
        return self._summarizer

    def get_insights(self, sales: Sequence[Sale], medicines: Sequence[Medicine]) -> List[Insight]:
        """Blocking call. Returns [] on any failure."""
        try:
            if not self.summarizer.is_available():
                logger.debug("Insight provider not configured - returning no insights")
                return []
            insights = self.summarizer.summarize(build_payload(sales, medicines))
            logger.info(f"Generated {len(insights)} insights")
            return insights
        except Exception as e:
            logger.error(f"Insight generation failed: {type(e).__name__}: {e}")
            return []

    async def get_insights_async(
        self,
        sales: Sequence[Sale],
        medicines: Sequence[Medicine],
    ) -> List[Insight]:
        """
        Run get_insights in a worker thread, bounded by the configured timeout.

        The snapshot is copied first so later mutations of the state do not
        leak into a request already in flight.
        """
        snapshot_sales = list(sales)
        snapshot_medicines = [m.model_copy() for m in medicines]
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.get_insights, snapshot_sales, snapshot_medicines),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Insight generation timed out after {self.timeout}s")
            return []
