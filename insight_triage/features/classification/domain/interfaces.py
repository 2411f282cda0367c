from abc import ABC, abstractmethod
from .models import ClassificationRequest


class IClassificationProvider(ABC):
    """
    Contract for the external text-classification service.
    Abstracts away the vendor SDK from the gateway.
    """

    @abstractmethod
    def classify(self, request: ClassificationRequest) -> dict:
        """
        Sends one classification request and returns the parsed response object.
        The result is untrusted; the gateway validates it.

        Raises:
            ClassificationError: If the provider is unreachable or the response can't be parsed.
            ConfigurationError: If the provider credential is missing.
        """
        pass
