import json
from typing import Iterable, List

from insight_triage.core.common.enums import Collection, Sentiment, Topic
from insight_triage.core.errors import StorageError
from ..domain.models import Insight

REQUIRED_KEYS = ("id", "timestamp", "source_url", "raw_content")


def insight_to_dict(insight: Insight) -> dict:
    data = {
        "id": insight.id,
        "timestamp": insight.timestamp,
        "source_url": insight.source_url,
        "raw_content": insight.raw_content,
    }
    # Staged records are stored without label keys at all.
    if insight.is_processed:
        data["sentiment"] = insight.sentiment.value
        data["topic"] = insight.topic.value
    return data


def insight_from_dict(data: dict) -> Insight:
    if not isinstance(data, dict):
        raise StorageError(f"Expected an insight object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_KEYS if not isinstance(data.get(key), str)]
    if missing:
        raise StorageError(f"Insight entry is missing fields: {missing}")

    sentiment = data.get("sentiment")
    topic = data.get("topic")
    try:
        return Insight(
            id=data["id"],
            timestamp=data["timestamp"],
            source_url=data["source_url"],
            raw_content=data["raw_content"],
            sentiment=Sentiment.from_wire(sentiment) if sentiment is not None else None,
            topic=Topic.from_wire(topic) if topic is not None else None,
        )
    except ValueError as e:
        raise StorageError(f"Malformed insight {data['id']}: {e}") from e


def dump_collection(insights: Iterable[Insight]) -> str:
    return json.dumps([insight_to_dict(i) for i in insights], ensure_ascii=False)


def load_collection(blob: str, collection: Collection) -> List[Insight]:
    """
    Decodes a stored collection blob.
    Staged entries must be unlabelled, processed entries fully labelled, and
    ids unique within the blob.

    Raises:
        StorageError: If the blob isn't a JSON array of valid insights for `collection`.
    """
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Collection blob is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StorageError(f"Collection blob must be a JSON array, got {type(data).__name__}")

    insights = [insight_from_dict(item) for item in data]

    expect_labels = collection == Collection.PROCESSED
    seen = set()
    for insight in insights:
        if insight.is_processed != expect_labels:
            state = "labelled" if insight.is_processed else "unlabelled"
            raise StorageError(f"{state.capitalize()} insight {insight.id} stored under '{collection.value}'")
        if insight.id in seen:
            raise StorageError(f"Insight id {insight.id} appears twice in '{collection.value}'")
        seen.add(insight.id)

    return insights
