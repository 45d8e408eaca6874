from dataclasses import dataclass
from enum import Enum

from app.errors.classifier import ClassifiedError


class PipelineState(str, Enum):
    """Single active processing state of one coordinator."""

    IDLE = "idle"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    EXTRACTION_FAILED = "extraction_failed"
    TRANSLATING = "translating"
    TRANSLATED = "translated"
    TRANSLATION_FAILED = "translation_failed"


_S = PipelineState

# Any state may go back to IDLE on new-document selection and may start a
# new extraction. Translation may start from any settled state because the
# text buffer is editable independently of extraction.
_SETTLED: frozenset[PipelineState] = frozenset(
    {_S.IDLE, _S.EXTRACTED, _S.EXTRACTION_FAILED, _S.TRANSLATED, _S.TRANSLATION_FAILED}
)

TRANSITIONS: dict[PipelineState, frozenset[PipelineState]] = {
    _S.IDLE: frozenset({_S.VALIDATING, _S.TRANSLATING}),
    _S.VALIDATING: frozenset({_S.EXTRACTING, _S.EXTRACTION_FAILED}),
    _S.EXTRACTING: frozenset({_S.EXTRACTED, _S.EXTRACTION_FAILED}),
    _S.EXTRACTED: frozenset({_S.VALIDATING, _S.TRANSLATING}),
    _S.EXTRACTION_FAILED: frozenset({_S.VALIDATING, _S.TRANSLATING}),
    _S.TRANSLATING: frozenset({_S.TRANSLATED, _S.TRANSLATION_FAILED}),
    _S.TRANSLATED: frozenset({_S.VALIDATING, _S.TRANSLATING}),
    _S.TRANSLATION_FAILED: frozenset({_S.VALIDATING, _S.TRANSLATING}),
}


def can_transition(current: PipelineState, target: PipelineState) -> bool:
    if target is PipelineState.IDLE:
        return True
    return target in TRANSITIONS[current]


def is_settled(state: PipelineState) -> bool:
    return state in _SETTLED


@dataclass(frozen=True)
class PipelineSnapshot:
    """Read-only view of the coordinator for presentation."""

    state: PipelineState
    text: str = ""
    translated_text: str = ""
    progress: int = 0
    error: ClassifiedError | None = None
