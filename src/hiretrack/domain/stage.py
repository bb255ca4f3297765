"""
Hiring pipeline stages and the transition policy between them.

The pipeline is a fixed chain ``APPLIED -> SCREENING -> INTERVIEW -> OFFER -> HIRED``
where every non-terminal stage may also move to ``REJECTED``. ``HIRED`` and
``REJECTED`` are terminal.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from hiretrack.core.errors import UnknownStageError


class Stage(str, Enum):
    APPLIED = "APPLIED"
    SCREENING = "SCREENING"
    INTERVIEW = "INTERVIEW"
    OFFER = "OFFER"
    HIRED = "HIRED"
    REJECTED = "REJECTED"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def try_parse(cls, value: Union["Stage", str, None]) -> Optional["Stage"]:
        if isinstance(value, Stage):
            return value
        if not isinstance(value, str):
            return None
        return cls.__members__.get(value.strip().upper())

    @classmethod
    def parse(cls, value: Union["Stage", str, None], *, current: Optional["Stage"] = None) -> "Stage":
        """
        Parse untrusted input into a stage, rejecting anything unrecognized.

        ``current`` is the stage being moved from; it is only reported in the error.
        """
        stage = cls.try_parse(value)
        if stage is None:
            raise UnknownStageError(
                message=f"Unknown stage: {value!r}",
                current=current.value if current is not None else None,
                attempted=None if value is None else str(value),
            )
        return stage


TRANSITIONS: Dict[Stage, FrozenSet[Stage]] = {
    Stage.APPLIED: frozenset({Stage.SCREENING, Stage.REJECTED}),
    Stage.SCREENING: frozenset({Stage.INTERVIEW, Stage.REJECTED}),
    Stage.INTERVIEW: frozenset({Stage.OFFER, Stage.REJECTED}),
    Stage.OFFER: frozenset({Stage.HIRED, Stage.REJECTED}),
    Stage.HIRED: frozenset(),
    Stage.REJECTED: frozenset(),
}

TERMINAL_STAGES: FrozenSet[Stage] = frozenset(s for s, nxt in TRANSITIONS.items() if not nxt)


def is_terminal(stage: Union[Stage, str]) -> bool:
    parsed = Stage.try_parse(stage)
    return parsed in TERMINAL_STAGES


def get_valid_next_stages(current: Union[Stage, str, None]) -> FrozenSet[Stage]:
    """Stages reachable from ``current`` by one edge; empty for terminal or unknown input."""
    parsed = Stage.try_parse(current)
    if parsed is None:
        return frozenset()
    return TRANSITIONS[parsed]


def is_valid_transition(current: Union[Stage, str, None], next_stage: Union[Stage, str, None]) -> bool:
    """
    Whether ``current -> next_stage`` is an edge of the pipeline.

    Names are compared case-insensitively. Unknown names never match.
    """
    nxt = Stage.try_parse(next_stage)
    if nxt is None:
        return False
    return nxt in get_valid_next_stages(current)
