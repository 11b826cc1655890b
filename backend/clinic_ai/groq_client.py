"""
Groq API Client — wrapper for LLM insight generation.

This client calls a Groq chat model for ONE purpose:
- Turn a sales/stock snapshot into a JSON list of insights

THIS CLIENT DOES NOT:
- Read or write clinic state
- Validate the response (see insight_parser)
- Raise on API failures: every error becomes None

CONSTRAINTS:
- Temperature 0 (same snapshot, same answer)
- JSON mode (response_format json_object)
- Bounded timeout per request, short retry on timeouts and rate limits
"""

import logging
import time
from typing import Optional

from groq import Groq, APIError, APITimeoutError, RateLimitError

from clinicdesk.core.config import settings

# Configure logging (NEVER log API keys)
logger = logging.getLogger(__name__)


class GroqClient:
    """Minimal wrapper for the Groq chat-completions API."""

    TEMPERATURE = 0
    MAX_TOKENS = 1024

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[float] = None):
        api_key = settings.GROQ_API_KEY if api_key is None else api_key
        self.model = model or settings.GROQ_MODEL
        self.timeout = timeout if timeout is not None else settings.INSIGHT_TIMEOUT_SECONDS

        if not api_key:
            logger.warning(
                "GROQ_API_KEY not found in environment. "
                "AI insights will be DISABLED. "
                "Add your key to backend/.env file."
            )
            self.client = None
        else:
            try:
                # Retries are handled below so the backoff is visible in logs
                self.client = Groq(api_key=api_key, timeout=self.timeout, max_retries=0)
                logger.info("Groq client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize Groq client: {e}")
                self.client = None

    def is_available(self) -> bool:
        """Check if Groq client is ready to use."""
        return self.client is not None

    def complete_json(self, prompt: str, max_retries: int = 1) -> Optional[str]:
        """
        Send the prompt and return the raw JSON text of the answer.

        Args:
            prompt: Complete prompt with instructions and data
            max_retries: Number of retries for timeouts and rate limits

        Returns:
            Raw response string from LLM, or None on any error
        """
        if not self.is_available():
            logger.debug("Groq client not available - skipping LLM call")
            return None

        for attempt in range(max_retries + 1):
            try:
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {
                            "role": "user",
                            "content": prompt
                        }
                    ],
                    temperature=self.TEMPERATURE,
                    max_tokens=self.MAX_TOKENS,
                    response_format={"type": "json_object"},
                    stream=False
                )

                if response.choices and len(response.choices) > 0:
                    content = response.choices[0].message.content
                    logger.debug(f"LLM response received: {len(content or '')} chars (attempt {attempt+1})")
                    return content
                logger.warning("LLM returned empty response")
                return None

            except APITimeoutError:
                if attempt < max_retries:
                    wait_time = 0.5 * (2 ** attempt)
                    logger.warning(f"Groq timeout, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning(f"Groq API timeout after {max_retries} retries")
                    return None

            except RateLimitError:
                if attempt < max_retries:
                    wait_time = 1.0 * (2 ** attempt)
                    logger.warning(f"Groq rate limit, retry {attempt+1}/{max_retries} after {wait_time}s")
                    time.sleep(wait_time)
                else:
                    logger.warning("Groq API rate limit exceeded after retries")
                    return None

            except APIError as e:
                logger.error(f"Groq API error (permanent): {e}")
                return None

            except Exception as e:
                logger.error(f"Unexpected error calling Groq: {e}")
                return None

        return None


# Singleton instance
_groq_client: Optional[GroqClient] = None


def get_groq_client() -> GroqClient:
    """Get or create singleton Groq client instance."""
    global _groq_client
    if _groq_client is None:
        _groq_client = GroqClient()
    return _groq_client
