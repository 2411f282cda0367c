import pytest

from insight_triage.core.common.enums import Collection, Sentiment, Topic
from insight_triage.core.errors import DuplicateInsightError
from insight_triage.features.insights.domain.models import (
    AddIntent,
    ClearProcessedIntent,
    ClearStagedIntent,
    DeleteStagedIntent,
    ProcessIntent,
    TriageState,
)
from insight_triage.features.insights.domain.transitions import apply_intent, changed_collections
from insight_triage.features.record_store.domain.models import Insight


def make(insight_id, **labels):
    return Insight(id=insight_id, timestamp="2024-05-01T09:00:00+00:00",
                   source_url="http://x.com", raw_content=f"content {insight_id}", **labels)


@pytest.fixture
def state():
    return TriageState(
        staged=(make("s1"), make("s2")),
        processed=(make("p1", sentiment=Sentiment.POSITIVE, topic=Topic.PRICE),),
    )


def test_add_prepends_to_staged(state):
    after = apply_intent(state, AddIntent(make("new")))

    assert [i.id for i in after.staged] == ["new", "s1", "s2"]
    assert after.processed == state.processed


def test_add_rejects_existing_id(state):
    with pytest.raises(DuplicateInsightError):
        apply_intent(state, AddIntent(make("p1")))


def test_process_moves_in_one_step(state):
    after = apply_intent(state, ProcessIntent("s2", Sentiment.NEGATIVE, Topic.SHIPPING))

    assert [i.id for i in after.staged] == ["s1"]
    assert [i.id for i in after.processed] == ["s2", "p1"]
    assert after.processed[0].sentiment is Sentiment.NEGATIVE
    assert after.processed[0].topic is Topic.SHIPPING
    assert len(after.staged) + len(after.processed) == len(state.staged) + len(state.processed)


def test_process_unknown_id_returns_same_state(state):
    assert apply_intent(state, ProcessIntent("p1", Sentiment.NEUTRAL, Topic.GENERAL)) is state


def test_delete_only_touches_staged(state):
    after = apply_intent(state, DeleteStagedIntent("s1"))

    assert [i.id for i in after.staged] == ["s2"]
    assert after.processed == state.processed
    assert apply_intent(state, DeleteStagedIntent("missing")) is state


def test_clears_are_independent(state):
    assert apply_intent(state, ClearStagedIntent()) == TriageState(staged=(), processed=state.processed)
    assert apply_intent(state, ClearProcessedIntent()) == TriageState(staged=state.staged, processed=())


def test_changed_collections_reports_only_differences(state):
    after = apply_intent(state, DeleteStagedIntent("s1"))

    assert set(changed_collections(state, after)) == {Collection.STAGED}
    assert changed_collections(state, state) == {}


def test_unknown_intent_is_rejected(state):
    with pytest.raises(TypeError):
        apply_intent(state, "add")


def test_process_skips_ids_already_processed():
    state = TriageState(
        staged=(make("p1"),),
        processed=(make("p1", sentiment=Sentiment.POSITIVE, topic=Topic.PRICE),),
    )

    assert apply_intent(state, ProcessIntent("p1", Sentiment.NEGATIVE, Topic.SHIPPING)) is state
