import copy
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from flashsets.config import LOGGER
from flashsets.utils import is_blank_name, normalize_name
from flashsets.workflows.clients import (
    ExistenceChecker,
    NamingClient,
    PersistenceClient,
)


class WorkflowPhase(Enum):
    """Phases of the collection save workflow."""

    IDLE = "idle"
    GENERATING_NAME = "generating_name"
    READY = "ready"
    VALIDATING = "validating"
    SAVING = "saving"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Phases with an external call in flight
PENDING_PHASES = frozenset(
    {WorkflowPhase.GENERATING_NAME, WorkflowPhase.VALIDATING, WorkflowPhase.SAVING}
)


class FailureReason(Enum):
    """Why an attempt ended in the FAILED phase."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    TRANSIENT = "transient"
    PERSISTENCE = "persistence"


FAILURE_MESSAGES: dict[FailureReason, str] = {
    FailureReason.VALIDATION: "Please enter a name.",
    FailureReason.CONFLICT: "This name already exists.",
    FailureReason.TRANSIENT: "The service is unavailable right now. Please try again.",
    FailureReason.PERSISTENCE: "The collection could not be saved.",
}


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Read-only view of the workflow handed to the presentation layer."""

    phase: WorkflowPhase
    candidate_name: str = ""
    error_reason: FailureReason | None = None
    error_message: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.phase in PENDING_PHASES

    def to_dict(self) -> dict:
        """Convert to dictionary for easy serialization."""
        return {
            "phase": self.phase.value,
            "candidate_name": self.candidate_name,
            "error_reason": self.error_reason.value if self.error_reason else None,
            "error_message": self.error_message,
        }


Listener = Callable[[WorkflowSnapshot], None]


class CollectionSaveWorkflow:
    """
    Names and saves one set of items for one owner.

    The presentation layer reads `snapshot` (or subscribes to it) and drives
    the workflow with request_name_suggestion(), set_name(), submit() and
    cancel(). Every external call is tagged with the generation current at
    issue time; a result whose generation is no longer current is dropped
    without touching state. cancel() and a superseding suggestion request
    advance the generation.

    The existence check only rejects obvious duplicates early. Two workflows
    for the same owner can both pass it, so the persistence client's store
    must reject the second write itself; that rejection surfaces as a
    PERSISTENCE failure.

    No timeouts are applied: a call that never resolves leaves the workflow
    in its pending phase until cancel() is called.
    """

    def __init__(
        self,
        items: Sequence[Any],
        owner_identity: str,
        naming: NamingClient,
        checker: ExistenceChecker,
        persistence: PersistenceClient,
        on_complete: Callable[[str], None] | None = None,
    ) -> None:
        self.items: tuple[Any, ...] = tuple(copy.deepcopy(list(items)))
        self.owner_identity = owner_identity
        self.naming = naming
        self.checker = checker
        self.persistence = persistence
        self.on_complete = on_complete
        self.collection_id: str | None = None

        self._snapshot = WorkflowSnapshot(phase=WorkflowPhase.IDLE)
        self._listeners: list[Listener] = []
        self._generation = 0

    @property
    def snapshot(self) -> WorkflowSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with every new snapshot.
        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def request_name_suggestion(self) -> bool:
        """
        Ask the naming client for a name and make it the candidate name.
        Returns True when the suggestion was applied.
        """
        phase = self._snapshot.phase
        if phase in (WorkflowPhase.VALIDATING, WorkflowPhase.SAVING):
            LOGGER.warning("Ignoring name suggestion request while saving")
            return False
        if phase is WorkflowPhase.SUCCEEDED:
            LOGGER.warning("Ignoring name suggestion request, collection is saved")
            return False

        # A request while GENERATING_NAME supersedes the earlier one
        generation = self._next_generation()
        self._update(
            phase=WorkflowPhase.GENERATING_NAME, error_reason=None, error_message=None
        )

        try:
            name = await self.naming.suggest_name(self.items)
        except Exception as e:
            if self._is_stale(generation, "name suggestion failure"):
                return False
            LOGGER.warning(f"Name suggestion failed: {e}")
            self._fail(FailureReason.TRANSIENT)
            return False

        if self._is_stale(generation, "name suggestion"):
            return False

        self._update(phase=WorkflowPhase.READY, candidate_name=name)
        return True

    def set_name(self, candidate: str) -> None:
        """
        Record the candidate name verbatim and clear any error.
        Edits are ignored while a submitted name is being checked or saved.
        """
        phase = self._snapshot.phase
        if phase in (WorkflowPhase.VALIDATING, WorkflowPhase.SAVING):
            LOGGER.warning(f"Ignoring name change while {phase.value}")
            return
        if phase in (WorkflowPhase.IDLE, WorkflowPhase.FAILED):
            phase = WorkflowPhase.READY
        self._update(
            phase=phase,
            candidate_name=candidate,
            error_reason=None,
            error_message=None,
        )

    async def submit(self) -> bool:
        """
        Validate, check and persist the candidate name.
        Returns True when the collection was saved.
        """
        phase = self._snapshot.phase
        if phase in PENDING_PHASES:
            LOGGER.warning(f"Ignoring submit while {phase.value}")
            return False
        if phase is WorkflowPhase.SUCCEEDED:
            LOGGER.warning("Ignoring submit, collection is already saved")
            return False

        candidate = self._snapshot.candidate_name
        if is_blank_name(candidate):
            self._fail(FailureReason.VALIDATION)
            return False

        name = normalize_name(candidate)
        generation = self._next_generation()
        self._update(
            phase=WorkflowPhase.VALIDATING, error_reason=None, error_message=None
        )

        try:
            exists = await self.checker.exists(self.owner_identity, name)
        except Exception as e:
            if not self._is_stale(generation, "existence check failure"):
                # Unknown existence blocks the save
                LOGGER.warning(f"Existence check for '{name}' failed: {e}")
                self._fail(FailureReason.TRANSIENT)
            return False

        if self._is_stale(generation, "existence check"):
            return False
        if exists:
            LOGGER.info(f"Collection '{name}' already exists for {self.owner_identity}")
            self._fail(FailureReason.CONFLICT)
            return False

        self._update(phase=WorkflowPhase.SAVING)

        try:
            result = await self.persistence.create_collection(
                self.owner_identity, name, self.items
            )
        except Exception as e:
            if not self._is_stale(generation, "save failure"):
                LOGGER.error(f"Saving collection '{name}' failed: {e}")
                self._fail(FailureReason.TRANSIENT)
            return False

        if self._is_stale(generation, "save result"):
            return False
        if not result.success:
            LOGGER.warning(f"Collection '{name}' was not saved: {result.reason}")
            self._fail(FailureReason.PERSISTENCE, result.reason)
            return False

        self._succeed(result.id)
        return True

    def cancel(self) -> None:
        """
        Make any in-flight call inert and return to IDLE.
        The call itself is not aborted, only its result is ignored.
        """
        self._next_generation()
        if self._snapshot.phase is WorkflowPhase.SUCCEEDED:
            return
        LOGGER.debug(f"Cancelled workflow in phase {self._snapshot.phase.value}")
        self._update(phase=WorkflowPhase.IDLE, error_reason=None, error_message=None)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation == self._generation:
            return False
        LOGGER.debug(f"Discarding stale {what} (generation {generation})")
        return True

    def _fail(self, reason: FailureReason, message: str | None = None) -> None:
        self._update(
            phase=WorkflowPhase.FAILED,
            error_reason=reason,
            error_message=message or FAILURE_MESSAGES[reason],
        )

    def _succeed(self, collection_id: str | None) -> None:
        # Only reachable from a current-generation save, once per workflow
        if self._snapshot.phase is WorkflowPhase.SUCCEEDED:
            return
        self.collection_id = collection_id
        self._update(phase=WorkflowPhase.SUCCEEDED)
        if self.on_complete:
            self.on_complete(collection_id)

    def _update(self, **changes: Any) -> None:
        self._snapshot = replace(self._snapshot, **changes)
        LOGGER.debug(f"Save workflow state: {self._snapshot.to_dict()}")
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                LOGGER.exception(f"Snapshot listener {listener!r} failed")
