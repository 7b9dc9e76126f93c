"""Progress reporting interface for seeding runs"""

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class ProgressEvent:
    phase: str  # start | setup | generate | insert | check | complete | error
    message: str
    percent: float


class ProgressObserver(Protocol):
    def on_progress(self, phase: str, message: str, percent: float) -> None:
        ...


class NullProgress:
    """Observer that ignores every event"""

    def on_progress(self, phase: str, message: str, percent: float) -> None:
        pass


class RecordingProgress:
    """Keeps every event in order, optionally passing each one on"""

    def __init__(self, forward: Optional[ProgressObserver] = None) -> None:
        self.events: List[ProgressEvent] = []
        self.forward = forward

    def on_progress(self, phase: str, message: str, percent: float) -> None:
        self.events.append(ProgressEvent(phase, message, round(percent, 1)))
        if self.forward is not None:
            self.forward.on_progress(phase, message, percent)
