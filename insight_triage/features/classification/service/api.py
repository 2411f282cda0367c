import logging
from typing import Optional

from insight_triage.core.common.enums import Sentiment, Topic
from insight_triage.core.errors import ClassificationError, InvalidLabelError
from ..domain.interfaces import IClassificationProvider
from ..domain.models import ClassificationRequest, Suggestion

logger = logging.getLogger(__name__)


class ClassificationGateway:
    """
    Facade for label suggestions.
    Stateless: never reads or writes insight collections.
    """

    def __init__(self, provider: Optional[IClassificationProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> IClassificationProvider:
        # Built on first use so a missing key surfaces as ConfigurationError at call time.
        if self._provider is None:
            from ..data.gemini_adapter import GeminiClassificationProvider
            self._provider = GeminiClassificationProvider()
        return self._provider

    def suggest(self, content: str) -> Suggestion:
        """
        Asks the provider for a (sentiment, topic) pair and validates it.

        Raises:
            ClassificationError: Provider failure, malformed response, or labels outside the enumerations.
            ConfigurationError: Missing provider credential.
        """
        request = ClassificationRequest(content=content)
        raw = self.provider.classify(request)

        if not isinstance(raw, dict):
            raise ClassificationError(f"Unexpected classification result type: {type(raw).__name__}")

        try:
            suggestion = Suggestion(
                sentiment=Sentiment.from_wire(raw.get("sentiment")),
                topic=Topic.from_wire(raw.get("topic")),
            )
        except InvalidLabelError as e:
            logger.warning(f"Rejected classification result {raw}: {e}")
            raise ClassificationError(f"Invalid label received from provider: {e}") from e

        logger.debug(f"Suggested {suggestion.sentiment.value}/{suggestion.topic.value}")
        return suggestion
