from dataclasses import dataclass
from enum import Enum


class EngineState(str, Enum):
    """Lifecycle of the single recognition engine owned by the manager."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    BUSY = "busy"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class RecognitionProgress:
    """Incremental completion percentage emitted during recognition."""

    percent: int


@dataclass(frozen=True)
class RecognitionResult:
    """Terminal event of a recognition run."""

    text: str
    progress: int = 100


RecognitionEvent = RecognitionProgress | RecognitionResult
