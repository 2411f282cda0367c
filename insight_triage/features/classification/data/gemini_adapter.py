import json
import logging
from typing import Optional

from insight_triage.core.config.settings import settings
from insight_triage.core.errors import ClassificationError, ConfigurationError
from ..domain.interfaces import IClassificationProvider
from ..domain.models import ClassificationRequest

logger = logging.getLogger(__name__)


class GeminiClassificationProvider(IClassificationProvider):
    """
    Gemini adapter using google-genai structured JSON output.

    Example:
        >>> provider = GeminiClassificationProvider()
        >>> provider.classify(ClassificationRequest("Shipping was late"))
        {'sentiment': 'Negative', 'topic': 'Shipping'}
    """

    def __init__(self,
                 api_key: Optional[str] = None,
                 model_name: Optional[str] = None,
                 client=None):
        """
        Args:
            api_key: Gemini API key (falls back to GEMINI_API_KEY / API_KEY / GOOGLE_API_KEY).
            model_name: Gemini model to use (default: settings.GEMINI_MODEL).
            client: Pre-built genai.Client, skips SDK configuration.
        """
        self.model_name = model_name or settings.GEMINI_MODEL

        if client is not None:
            self._client = client
            return

        key = api_key or settings.GEMINI_API_KEY
        if not key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable not set (API_KEY and GOOGLE_API_KEY are also accepted)."
            )

        from google import genai

        self._client = genai.Client(api_key=key)

    def classify(self, request: ClassificationRequest) -> dict:
        config = {
            "response_mime_type": "application/json",
            "response_schema": request.response_schema(),
            "temperature": 0.0,
        }

        try:
            response = self._client.models.generate_content(
                model=self.model_name,
                contents=request.build_prompt(),
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini request failed ({self.model_name}): {e}")
            raise ClassificationError(f"Classification provider request failed: {e}") from e

        return self._parse_response(response)

    def _parse_response(self, response) -> dict:
        try:
            text = response.text
        except (AttributeError, ValueError) as e:
            # Blocked or empty candidates have no text part.
            raise ClassificationError(f"Classification provider returned no text: {e}") from e

        if not text or not text.strip():
            raise ClassificationError("Classification provider returned an empty response.")

        try:
            data = json.loads(text.strip())
        except ValueError as e:
            logger.error(f"Failed to parse Gemini JSON response: {e}. Raw response: {text}")
            raise ClassificationError(f"Classification response is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ClassificationError(f"Classification response must be a JSON object, got {type(data).__name__}")

        return data
