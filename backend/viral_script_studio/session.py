"""Session state machine: Input -> Selection -> Result.

Every begin/back/reset bumps `version`. A request captures the version in a
`RequestToken` and its result is only applied while the token still matches,
so a reply that lands after the user navigated away is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import SessionBusyError

logger = logging.getLogger(__name__)


class Step(str, Enum):
    INPUT = "INPUT"
    SELECTION = "SELECTION"
    RESULT = "RESULT"


class LoadingState(str, Enum):
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    GENERATING = "GENERATING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Analysis:
    structural_points: Tuple[str, ...]
    tone: str
    hook_strategy: str
    suggested_topics: Tuple[str, ...]


@dataclass(frozen=True)
class GeneratedContent:
    title: str
    script: str

    def as_markdown(self) -> str:
        return f"# {self.title}\n\n{self.script}"


@dataclass(frozen=True)
class RequestToken:
    slot: LoadingState
    version: int


class Session:
    def __init__(self):
        self.version = 0
        self._clear()

    def _clear(self) -> None:
        self.step = Step.INPUT
        self.original_script = ""
        self.analysis: Optional[Analysis] = None
        self._generated: Optional[GeneratedContent] = None
        self.topic = ""
        self.loading = LoadingState.IDLE
        self.error_message: Optional[str] = None

    def _bump(self) -> int:
        self.version += 1
        return self.version

    @property
    def generated(self) -> Optional[GeneratedContent]:
        # Kept after going back to Selection, but only visible on the Result step.
        if self.step is not Step.RESULT:
            return None
        return self._generated

    @property
    def is_analyzing(self) -> bool:
        return self.loading is LoadingState.ANALYZING

    @property
    def is_generating(self) -> bool:
        return self.loading is LoadingState.GENERATING

    def _is_current(self, token: RequestToken) -> bool:
        if token.version != self.version or self.loading is not token.slot:
            logger.info(
                f"Discarding stale {token.slot.value} result "
                f"(token version {token.version}, session version {self.version})"
            )
            return False
        return True

    def begin_analysis(self, script: str) -> RequestToken:
        if self.is_analyzing:
            raise SessionBusyError("analysis already in flight")
        if self.step is not Step.INPUT:
            raise SessionBusyError(f"cannot analyze from step {self.step.value}")
        self.original_script = script
        self.loading = LoadingState.ANALYZING
        self.error_message = None
        return RequestToken(LoadingState.ANALYZING, self._bump())

    def complete_analysis(self, token: RequestToken, analysis: Analysis) -> bool:
        if not self._is_current(token):
            return False
        self.analysis = analysis
        self._generated = None
        self.step = Step.SELECTION
        self.loading = LoadingState.IDLE
        return True

    def begin_generation(self, topic: str) -> RequestToken:
        if self.is_generating:
            raise SessionBusyError("generation already in flight")
        if self.step is not Step.SELECTION or self.analysis is None:
            raise SessionBusyError(f"cannot generate from step {self.step.value}")
        self.topic = topic
        self.loading = LoadingState.GENERATING
        self.error_message = None
        return RequestToken(LoadingState.GENERATING, self._bump())

    def complete_generation(self, token: RequestToken, generated: GeneratedContent) -> bool:
        if not self._is_current(token):
            return False
        self._generated = generated
        self.step = Step.RESULT
        self.loading = LoadingState.COMPLETE
        return True

    def fail(self, token: RequestToken, message: str) -> bool:
        """Record a failed request; the step stays where it was."""
        if not self._is_current(token):
            return False
        self.loading = LoadingState.ERROR
        self.error_message = message
        return True

    def dismiss_error(self) -> None:
        self.error_message = None
        if self.loading is LoadingState.ERROR:
            self.loading = LoadingState.IDLE

    def back_to_input(self) -> None:
        self._bump()
        self.step = Step.INPUT
        self.analysis = None
        self._generated = None
        self.loading = LoadingState.IDLE
        self.error_message = None

    def back_to_selection(self) -> None:
        if self.analysis is None:
            raise SessionBusyError("no analysis to return to")
        self._bump()
        self.step = Step.SELECTION
        self.loading = LoadingState.IDLE
        self.error_message = None

    def reset(self) -> None:
        self._bump()
        self._clear()
