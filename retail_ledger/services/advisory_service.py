"""
Advisory service — business insights from a hosted text model.

Best effort only. The dashboard asks for a few lines of advice
based on the current stock and recent sales; if the call fails
for any reason the caller gets a fixed fallback message and the
rest of the system carries on.
"""

import logging

import httpx

from retail_ledger.schemas.snapshot import Snapshot

logger = logging.getLogger(__name__)


FALLBACK_MESSAGE = "Unable to load AI insights at this time."
RECENT_TRANSACTION_COUNT = 5


def build_prompt(snapshot: Snapshot) -> str:
    """Summarize stock levels and the most recent transactions for the model."""
    product_summary = ", ".join(
        f"{p.name} (Stock: {p.stock})" for p in snapshot.products
    )
    # Transactions are stored most-recent-first
    recent = ", ".join(
        f"{t.type.value}: PKR {t.total}"
        for t in snapshot.transactions[:RECENT_TRANSACTION_COUNT]
    )

    return (
        "Act as a business consultant for a retail/wholesale store in Pakistan. "
        "Analyze this snapshot:\n"
        f"Products: {product_summary}\n"
        f"Recent Transactions: {recent}\n"
        f"Total Products: {len(snapshot.products)}\n"
        f"Total Transactions: {len(snapshot.transactions)}\n"
        "\n"
        "Provide 3 concise insights:\n"
        "1. A sales optimization tip based on recent data.\n"
        "2. A stock management alert for low items.\n"
        "3. A financial health comment based on PKR figures.\n"
        "Keep it professional and encouraging. Format as bullet points."
    )


class AdvisoryService:

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout)

    def _generate(self, prompt: str) -> str:
        response = self.client.post(
            f"{self.base_url}/models/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        body = response.json()
        return body["candidates"][0]["content"]["parts"][0]["text"]

    def get_insights(self, snapshot: Snapshot) -> str:
        """
        Ask the model for insights about this snapshot.

        Never raises: a missing key, a network or HTTP error, or a
        response in an unexpected shape all yield FALLBACK_MESSAGE.
        """
        if not self.api_key:
            logger.info("No advisory API key configured")
            return FALLBACK_MESSAGE

        try:
            text = self._generate(build_prompt(snapshot))
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            logger.error("AI insights failed: %s", e)
            return FALLBACK_MESSAGE

        return text.strip() or FALLBACK_MESSAGE

    def close(self) -> None:
        self.client.close()
