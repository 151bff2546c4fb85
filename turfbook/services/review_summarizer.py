"""AI review summarizer.

Sends a turf's reviews to an OpenAI-compatible chat completions endpoint and
returns the model's summary. This is a single request with no retries; any
failure degrades to a fixed fallback message.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from turfbook.core.config import settings

logger = logging.getLogger(__name__)

NO_REVIEWS_MESSAGE = "Not enough reviews yet to generate an AI summary. Be the first to review!"
EMPTY_OUTPUT_MESSAGE = (
    "The AI summary could not be generated at this time. Please check individual reviews."
)
FAILURE_MESSAGE = (
    "The AI couldn't whip up a summary this time due to a temporary issue. "
    "Maybe try checking the individual reviews?"
)

SYSTEM_PROMPT = "You are an AI that analyzes customer reviews for turfs (sports fields)."

PROMPT_TEMPLATE = """Given the following reviews for turf with ID {turf_id}, generate a summary that includes:

- Overall sentiment (positive, negative, mixed).
- Common themes or opinions mentioned in the reviews.
- Specific examples from the reviews to support your analysis.

Reviews:
{reviews}
"""


def build_prompt(turf_id: int, reviews: List[Dict[str, Any]]) -> str:
    """Render the summary prompt for a list of review dicts."""
    lines = []
    for review in reviews:
        lines.append(
            f"- User ID: {review['user_id']}\n"
            f"  Rating: {review['rating']}\n"
            f"  Comment: {review['comment']}\n"
            f"  Created At: {review['created_at']}"
        )
    return PROMPT_TEMPLATE.format(turf_id=turf_id, reviews="\n".join(lines))


class ReviewSummarizer:
    """Client for the review summary model."""

    def __init__(self):
        """Initialize the summarizer from settings."""
        self.base_url = settings.LLM_API_BASE_URL.rstrip("/")
        self.api_key = settings.LLM_API_KEY
        self.model = settings.LLM_MODEL
        self.timeout = settings.LLM_TIMEOUT_SECONDS

    async def _complete(self, prompt: str) -> Optional[str]:
        """
        Make one chat completions request.

        Args:
            prompt: User prompt

        Returns:
            The first choice's message content, or None if empty

        Raises:
            httpx.HTTPError: If the request fails
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": 0.3,
                },
            )
            response.raise_for_status()
            data = response.json()

        choices = data.get("choices") or []
        if not choices:
            return None
        content = (choices[0].get("message") or {}).get("content")
        return content.strip() if content else None

    async def summarize(self, turf_id: int, reviews: List[Dict[str, Any]]) -> str:
        """
        Summarize reviews for a turf.

        Args:
            turf_id: Turf ID
            reviews: Dicts with user_id, rating, comment and created_at

        Returns:
            Summary text, or a fallback message. Never raises.
        """
        if not reviews:
            return NO_REVIEWS_MESSAGE

        if not self.api_key:
            logger.warning("LLM_API_KEY is not set, returning fallback summary")
            return EMPTY_OUTPUT_MESSAGE

        logger.info(f"Summarizing {len(reviews)} review(s) for turf {turf_id}")

        try:
            summary = await self._complete(build_prompt(turf_id, reviews))
        except Exception as e:
            logger.error(f"Failed to summarize reviews for turf {turf_id}: {e}")
            return FAILURE_MESSAGE

        if not summary:
            logger.warning(f"Empty summary for turf {turf_id}")
            return EMPTY_OUTPUT_MESSAGE

        return summary


# Singleton instance
review_summarizer = ReviewSummarizer()
