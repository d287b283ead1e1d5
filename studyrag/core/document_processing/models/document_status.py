"""
Document processing status and its allowed transitions.

processing (initial) -> ready | failed. Both outcomes are terminal.

Dependencies: studyrag.core.exceptions
System role: Ingestion state machine definition
"""

import enum

from studyrag.core.exceptions import InvalidStatusTransitionError


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PROCESSING: Document uploaded, extraction and chunking in progress
    READY: Text extracted and chunks stored, available for retrieval
    FAILED: Extraction or chunking error; error_message holds details
    """

    PROCESSING = "processing"
    READY = "ready"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.READY, DocumentStatus.FAILED)


ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PROCESSING: frozenset({DocumentStatus.READY, DocumentStatus.FAILED}),
    DocumentStatus.READY: frozenset(),
    DocumentStatus.FAILED: frozenset(),
}


def ensure_transition(current: DocumentStatus, target: DocumentStatus) -> None:
    """
    Validate a status change.

    Args:
        current: Status the document is in
        target: Requested status

    Raises:
        InvalidStatusTransitionError: When target is not reachable from current
    """
    current = DocumentStatus(current)
    target = DocumentStatus(target)
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransitionError(current.value, target.value)
