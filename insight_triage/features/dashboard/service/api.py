from collections import Counter
from typing import Iterable, List

from insight_triage.core.common.enums import Sentiment, Topic
from insight_triage.features.insights.service.api import InsightService
from insight_triage.features.record_store.domain.models import Insight
from ..domain.models import DashboardSummary, LabelCount


def sentiment_distribution(processed: Iterable[Insight]) -> List[LabelCount]:
    """One entry per sentiment, in declaration order, zero counts included."""
    counts = Counter(i.sentiment for i in processed if i.sentiment is not None)
    return [LabelCount(name=s.value, count=counts.get(s, 0)) for s in Sentiment]


def topic_distribution(processed: Iterable[Insight]) -> List[LabelCount]:
    """One entry per topic, most frequent first. Ties keep declaration order."""
    counts = Counter(i.topic for i in processed if i.topic is not None)
    rows = [LabelCount(name=t.value, count=counts.get(t, 0)) for t in Topic]
    return sorted(rows, key=lambda row: row.count, reverse=True)


def summarize(processed: Iterable[Insight]) -> DashboardSummary:
    insights = list(processed)
    return DashboardSummary(
        total=len(insights),
        sentiments=sentiment_distribution(insights),
        topics=topic_distribution(insights),
    )


class DashboardService:
    def __init__(self, insight_service: InsightService):
        self.insight_service = insight_service

    def summary(self) -> DashboardSummary:
        return summarize(self.insight_service.list_processed())
