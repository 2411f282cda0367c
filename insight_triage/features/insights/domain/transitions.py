import logging
from typing import Dict, Tuple

from insight_triage.core.common.enums import Collection
from insight_triage.core.errors import DuplicateInsightError, NotFoundError
from insight_triage.features.record_store.domain.models import Insight
from .models import (
    AddIntent,
    ClearProcessedIntent,
    ClearStagedIntent,
    DeleteStagedIntent,
    ProcessIntent,
    TriageState,
)

logger = logging.getLogger(__name__)


def apply_intent(state: TriageState, intent) -> TriageState:
    """
    Pure state transition: returns the full next state for an intent.
    Never mutates `state`. An intent that changes nothing returns `state` itself.

    Raises:
        DuplicateInsightError: AddIntent whose id is already present.
        TypeError: Unknown intent.
    """
    if isinstance(intent, AddIntent):
        if state.contains_id(intent.insight.id):
            raise DuplicateInsightError(f"Insight id {intent.insight.id} already exists.")
        if intent.insight.is_processed:
            raise ValueError("New insights must be staged without labels.")
        return TriageState(staged=(intent.insight,) + state.staged, processed=state.processed)

    if isinstance(intent, ProcessIntent):
        if any(i.id == intent.insight_id for i in state.processed):
            logger.info(f"Process skipped: insight {intent.insight_id} is already processed.")
            return state
        try:
            source = _require_staged(state, intent.insight_id)
        except NotFoundError as e:
            logger.info(f"Process skipped: {e}")
            return state
        labelled = source.with_labels(intent.sentiment, intent.topic)
        return TriageState(
            staged=_without(state.staged, intent.insight_id),
            processed=(labelled,) + state.processed,
        )

    if isinstance(intent, DeleteStagedIntent):
        try:
            _require_staged(state, intent.insight_id)
        except NotFoundError as e:
            logger.info(f"Delete skipped: {e}")
            return state
        return TriageState(staged=_without(state.staged, intent.insight_id), processed=state.processed)

    if isinstance(intent, ClearStagedIntent):
        return TriageState(staged=(), processed=state.processed)

    if isinstance(intent, ClearProcessedIntent):
        return TriageState(staged=state.staged, processed=())

    raise TypeError(f"Unknown intent: {intent!r}")


def changed_collections(before: TriageState, after: TriageState) -> Dict[Collection, Tuple[Insight, ...]]:
    """Collections whose contents differ between two states."""
    changes = {}
    for name in Collection:
        if before.collection(name) != after.collection(name):
            changes[name] = after.collection(name)
    return changes


def _require_staged(state: TriageState, insight_id: str) -> Insight:
    insight = state.find_staged(insight_id)
    if insight is None:
        raise NotFoundError(f"Insight {insight_id} is not staged.")
    return insight


def _without(insights: Tuple[Insight, ...], insight_id: str) -> Tuple[Insight, ...]:
    return tuple(i for i in insights if i.id != insight_id)
