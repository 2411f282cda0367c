from insight_triage.core.common.enums import Sentiment, Topic
from insight_triage.features.dashboard.service.api import (
    DashboardService,
    sentiment_distribution,
    summarize,
    topic_distribution,
)
from insight_triage.features.insights.service.api import InsightService


def seed(service, labels):
    for n, (sentiment, topic) in enumerate(labels):
        insight = service.add_insight(f"http://x.com/{n}", f"note {n}")
        service.process_insight(insight.id, sentiment, topic)


def test_empty_dashboard_has_zero_rows():
    summary = summarize([])

    assert summary.total == 0
    assert [(r.name, r.count) for r in summary.sentiments] == [("Positive", 0), ("Negative", 0), ("Neutral", 0)]
    assert [r.name for r in summary.topics] == Topic.wire_values()


def test_distributions(memory_store, clock):
    service = InsightService(store=memory_store, clock=clock)
    seed(service, [
        (Sentiment.NEGATIVE, Topic.SHIPPING),
        (Sentiment.NEGATIVE, Topic.SHIPPING),
        (Sentiment.POSITIVE, Topic.PRICE),
        (Sentiment.NEUTRAL, Topic.GENERAL),
    ])
    service.add_insight("http://x.com/staged", "not yet labelled")

    processed = service.list_processed()
    sentiments = {r.name: r.count for r in sentiment_distribution(processed)}
    topics = [(r.name, r.count) for r in topic_distribution(processed)]

    assert sentiments == {"Positive": 1, "Negative": 2, "Neutral": 1}
    assert topics[0] == ("Shipping", 2)
    # Ties keep declaration order.
    assert topics[1:3] == [("Price", 1), ("General", 1)]
    assert topics[3:] == [("Campaign", 0), ("Product Quality", 0), ("Customer Service", 0)]

    summary = DashboardService(service).summary()
    assert summary.total == 4
