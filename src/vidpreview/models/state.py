"""
Pipeline state machine and per-stage outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from vidpreview.exceptions import PipelineStateError


class PipelineState(Enum):
    """Lifecycle of a single preview run."""

    IDLE = "idle"
    PROBING = "probing"
    SCHEDULING = "scheduling"
    GENERATING_ARTIFACTS = "generating_artifacts"
    ASSEMBLING = "assembling"
    COMPLETE = "complete"
    FAILED = "failed"


# FAILED is reachable only from PROBING
_TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    PipelineState.IDLE: frozenset({PipelineState.PROBING}),
    PipelineState.PROBING: frozenset({PipelineState.SCHEDULING, PipelineState.FAILED}),
    PipelineState.SCHEDULING: frozenset({PipelineState.GENERATING_ARTIFACTS}),
    PipelineState.GENERATING_ARTIFACTS: frozenset({PipelineState.ASSEMBLING}),
    PipelineState.ASSEMBLING: frozenset({PipelineState.COMPLETE}),
    PipelineState.COMPLETE: frozenset(),
    PipelineState.FAILED: frozenset(),
}


def check_transition(current: PipelineState, target: PipelineState) -> PipelineState:
    """Return target if current may move to it.

    Raises:
        PipelineStateError: On an illegal transition
    """
    if target not in _TRANSITIONS[current]:
        raise PipelineStateError(
            f"Illegal transition {current.value} -> {target.value}"
        )
    return target


@dataclass
class StageOutcome:
    """Settled result of one optional stage: a value or an error, never both."""

    stage: str
    value: Any = None
    error: BaseException | None = None
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.skipped

    @classmethod
    def skip(cls, stage: str) -> StageOutcome:
        return cls(stage=stage, skipped=True)
