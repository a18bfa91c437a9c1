"""In-process owner of computations and of the published result snapshot."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ._cache import ResultCache, UpdatePolicy
from ._computation import Computation
from ._errors import DuplicateComputationError, UnknownSessionError
from ._path import ComputationId, SessionId
from ._result import Done, Failed, Running, Scheduled

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._config import KarpsConfig
    from ._item import ExecutionItem
    from ._path import GlobalPath
    from ._result import ComputationResult

logger = logging.getLogger(__name__)


class ComputationManager:
    """Track the computations of several sessions and their results.

    The manager is the single writer of the result cache: ``execute`` and
    ``update`` are serialized and replace the published snapshot wholesale.
    Readers go through ``snapshot`` (or ``status`` and ``final_result``) and
    never observe a partially applied batch, but may see one that is a batch
    behind.
    """

    def __init__(self, update_policy: UpdatePolicy = UpdatePolicy.OVERWRITE) -> None:
        self.update_policy = update_policy
        self._lock = threading.Lock()
        self._sessions: dict[SessionId, dict[ComputationId, Computation]] = {}
        self._snapshot = ResultCache()

    @classmethod
    def from_config(cls, config: KarpsConfig) -> ComputationManager:
        return cls(update_policy=config.update_policy)

    @property
    def snapshot(self) -> ResultCache:
        """The currently published result cache."""
        return self._snapshot

    def create_session(self, session: SessionId | str) -> SessionId:
        """Create a session. Creating an existing session does nothing."""
        if isinstance(session, str):
            session = SessionId(session)
        with self._lock:
            if session not in self._sessions:
                logger.debug(f"Creating session {session}")
                self._sessions[session] = {}
        return session

    def execute(
        self,
        session: SessionId,
        computation_id: ComputationId,
        items: Iterable[ExecutionItem],
    ) -> Computation:
        """Validate and register a computation, scheduling all its tracked items.

        Raises:
            UnknownSessionError: If the session was never created.
            DuplicateComputationError: If the computation id is already used.
            ComputationError: If the items do not form a valid computation.

        """
        computation = Computation.create(computation_id, items)
        with self._lock:
            computations = self._sessions.get(session)
            if computations is None:
                raise UnknownSessionError(session)
            if computation_id in computations:
                raise DuplicateComputationError(session, computation_id)
            computations[computation_id] = computation
            scheduled = [(item.path, Scheduled()) for item in computation.tracked_items]
            self._snapshot = self._snapshot.update(scheduled, self.update_policy)
        logger.debug(
            f"Registered computation {computation_id} in session {session}: "
            f"{len(computation)} items, {len(computation.tracked_items)} tracked",
        )
        return computation

    def update(self, updates: Iterable[tuple[GlobalPath, ComputationResult]]) -> ResultCache:
        """Apply a batch of results reported by the engine and publish the new snapshot."""
        batch = list(updates)
        with self._lock:
            self._snapshot = self._snapshot.update(batch, self.update_policy)
            return self._snapshot

    def get_computation(self, session: SessionId, computation_id: ComputationId) -> Computation | None:
        return self._sessions.get(session, {}).get(computation_id)

    def computations(self, session: SessionId) -> list[Computation]:
        """Get the computations of a session, in submission order.

        Raises:
            UnknownSessionError: If the session was never created.

        """
        computations = self._sessions.get(session)
        if computations is None:
            raise UnknownSessionError(session)
        return list(computations.values())

    def status(self, path: GlobalPath) -> ComputationResult | None:
        return self._snapshot.status(path)

    def final_result(self, path: GlobalPath) -> Any | None:
        return self._snapshot.final_result(path)

    def status_computation(
        self,
        session: SessionId,
        computation_id: ComputationId,
    ) -> list[tuple[GlobalPath, ComputationResult | None]] | None:
        """Get the results of all the tracked items of a computation.

        Returns:
            The ``(path, result)`` pairs in submission order, or None if the
            computation is unknown.

        """
        computation = self.get_computation(session, computation_id)
        if computation is None:
            return None
        snapshot = self._snapshot
        return snapshot.results_for(item.path for item in computation.tracked_items)

    def ready_checkpoints(self, session: SessionId, computation_id: ComputationId) -> list[GlobalPath]:
        """Get the tracked items that may be requested from the engine now.

        These are the items that are neither running nor finished, and whose
        tracked dependencies are all done.

        Returns:
            The ready paths in submission order. Empty if the computation is unknown.

        """
        computation = self.get_computation(session, computation_id)
        if computation is None:
            return []
        snapshot = self._snapshot
        graph = computation.checkpoint_graph()
        done = [path for path in graph.nodes if isinstance(snapshot.status(path), Done)]
        return [
            path
            for path in graph.ready(done)
            if not isinstance(snapshot.status(path), (Running, Failed))
        ]
