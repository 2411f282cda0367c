from dataclasses import dataclass, field
from typing import List

from insight_triage.core.common.enums import Sentiment, Topic


@dataclass(frozen=True)
class ClassificationRequest:
    """
    What the provider is asked: one content string and the closed label lists
    it must choose from.
    """
    content: str
    sentiments: List[str] = field(default_factory=Sentiment.wire_values)
    topics: List[str] = field(default_factory=Topic.wire_values)

    def build_prompt(self) -> str:
        return f"""Analyze the following content and determine its sentiment and topic.
Content: "{self.content}"

Instructions:
1. Classify the sentiment as exactly one of: {', '.join(self.sentiments)}.
2. Classify the topic as exactly one of: {', '.join(self.topics)}.
3. Provide the output in JSON format according to the specified schema.
"""

    def response_schema(self) -> dict:
        return {
            "type": "OBJECT",
            "properties": {
                "sentiment": {
                    "type": "STRING",
                    "format": "enum",
                    "enum": list(self.sentiments),
                    "description": "The sentiment of the content.",
                },
                "topic": {
                    "type": "STRING",
                    "format": "enum",
                    "enum": list(self.topics),
                    "description": "The main topic of the content.",
                },
            },
            "required": ["sentiment", "topic"],
        }


@dataclass(frozen=True)
class Suggestion:
    """A validated label pair. Only ever held in UI state, never persisted."""
    sentiment: Sentiment
    topic: Topic
