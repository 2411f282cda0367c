from abc import ABC, abstractmethod


class IIdGenerator(ABC):
    @abstractmethod
    def generate(self, source_url: str, raw_content: str, timestamp: str) -> str:
        """Derives the id of a new insight from its content and creation time."""
        pass
