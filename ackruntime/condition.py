"""Helpers for reading and updating the status conditions of a resource."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TypeVar

from ackruntime.apis import Condition, ConditionStatus, ConditionType
from ackruntime.errors import ResourceReferenceTerminal

NOT_MANAGED_MESSAGE = "Resource already exists"
NOT_MANAGED_REASON = (
    "This resource already exists but is not managed by ACK. "
    "To bring the resource under ACK management, you should explicitly adopt "
    "the resource by creating a services.k8s.aws/AdoptedResource"
)


class ConditionManager:
    """Holds a resource's collection of status conditions."""

    def __init__(self, conditions: Iterable[Condition] | None = None) -> None:
        self._conditions: list[Condition] = list(conditions or [])

    def conditions(self) -> list[Condition]:
        """Return the resource's conditions, in order."""
        return list(self._conditions)

    def replace_conditions(self, conditions: Iterable[Condition]) -> None:
        """Replace the resource's conditions with the supplied ones."""
        self._conditions = list(conditions)


_M = TypeVar("_M", bound=ConditionManager)


def first_of_type(subject: ConditionManager, cond_type: ConditionType) -> Condition | None:
    """Return the first condition of the given type, or None."""
    return next((c for c in subject.conditions() if c.type == cond_type), None)


def all_of_type(subject: ConditionManager, cond_type: ConditionType) -> list[Condition]:
    """Return every condition of the given type, in order."""
    return [c for c in subject.conditions() if c.type == cond_type]


def synced(subject: ConditionManager) -> Condition | None:
    """Return the ResourceSynced condition, or None."""
    return first_of_type(subject, ConditionType.RESOURCE_SYNCED)


def terminal(subject: ConditionManager) -> Condition | None:
    """Return the Terminal condition, or None."""
    return first_of_type(subject, ConditionType.TERMINAL)


def late_initialized(subject: ConditionManager) -> Condition | None:
    """Return the LateInitialized condition, or None."""
    return first_of_type(subject, ConditionType.LATE_INITIALIZED)


def references_resolved(subject: ConditionManager) -> Condition | None:
    """Return the ReferencesResolved condition, or None."""
    return first_of_type(subject, ConditionType.REFERENCES_RESOLVED)


def _set_condition(
    subject: ConditionManager,
    cond_type: ConditionType,
    status: ConditionStatus,
    message: str | None,
    reason: str | None,
) -> None:
    all_conds = subject.conditions()
    cond = first_of_type(subject, cond_type)
    if cond is None:
        cond = Condition(type=cond_type)
        all_conds.append(cond)
    cond.last_transition_time = datetime.now(timezone.utc).replace(microsecond=0)
    cond.status = status
    cond.message = message
    cond.reason = reason
    subject.replace_conditions(all_conds)


def set_synced(
    subject: ConditionManager,
    status: ConditionStatus,
    message: str | None = None,
    reason: str | None = None,
) -> None:
    """Set the ResourceSynced condition to the given status, message and reason."""
    _set_condition(subject, ConditionType.RESOURCE_SYNCED, status, message, reason)


def set_terminal(
    subject: ConditionManager,
    status: ConditionStatus,
    message: str | None = None,
    reason: str | None = None,
) -> None:
    """Set the Terminal condition to the given status, message and reason."""
    _set_condition(subject, ConditionType.TERMINAL, status, message, reason)


def set_late_initialized(
    subject: ConditionManager,
    status: ConditionStatus,
    message: str | None = None,
    reason: str | None = None,
) -> None:
    """Set the LateInitialized condition to the given status, message and reason."""
    _set_condition(subject, ConditionType.LATE_INITIALIZED, status, message, reason)


def set_references_resolved(
    subject: ConditionManager,
    status: ConditionStatus,
    message: str | None = None,
    reason: str | None = None,
) -> None:
    """Set the ReferencesResolved condition to the given status, message and reason."""
    _set_condition(subject, ConditionType.REFERENCES_RESOLVED, status, message, reason)


def remove_references_resolved(subject: ConditionManager) -> None:
    """Remove every ReferencesResolved condition from the resource."""
    if references_resolved(subject) is None:
        return
    subject.replace_conditions(
        c for c in subject.conditions() if c.type != ConditionType.REFERENCES_RESOLVED
    )


def with_references_resolved_condition(resource: _M, err: BaseException | None) -> _M:
    """Record the outcome of reference resolution on ``resource``.

    With no error the condition becomes True and the resource is returned.
    Otherwise the condition becomes False for a terminal reference error and
    Unknown for any other, carrying the error text, and ``err`` is raised.
    """
    if err is None:
        set_references_resolved(resource, ConditionStatus.TRUE)
        return resource
    text = str(err)
    status = ConditionStatus.UNKNOWN
    if ResourceReferenceTerminal.default_message in text:
        status = ConditionStatus.FALSE
    set_references_resolved(resource, status, text)
    raise err


def late_initialization_in_progress(subject: ConditionManager) -> bool:
    """Return True if the LateInitialized condition exists with status False."""
    cond = late_initialized(subject)
    return cond is not None and cond.status == ConditionStatus.FALSE


def clear(subject: ConditionManager) -> None:
    """Remove all conditions from the resource."""
    subject.replace_conditions([])