# ABOUTME: Versioned session snapshots that let a browser move back and forward through phase history.
# ABOUTME: Holds per-session game records and the thread-safe registry that maps session ids to them.

import threading
from dataclasses import dataclass

from loguru import logger

from battle_guide.models.match_state import MatchState
from battle_guide.models.mission import MissionCatalog
from battle_guide.phases import Phase, entry_phase
from battle_guide.session.exceptions import SessionNotFound
from battle_guide.utils.logging import log_phase_transition, log_snapshot_event


@dataclass(frozen=True)
class Snapshot:
    """A deep copy of the match state and the phase it was in"""
    state: MatchState
    phase: Phase


class GameSession:
    """
    One conversation's live match plus its version history.

    The version is the head of the history the server knows about. Each
    transition stores a snapshot before and after it, so every version a
    browser has seen can be restored when the user navigates back to it.

    Snapshots are kept for the lifetime of the session; nothing is evicted.
    A transition taken from an older version drops the versions after it.
    """

    def __init__(
        self,
        catalog: MissionCatalog | None = None,
        session_id: str | None = None,
    ):
        self.session_id = session_id
        self.state = MatchState()
        self.current_phase: Phase = entry_phase(catalog)
        self.version = 0
        self.snapshots: dict[int, Snapshot] = {}

    def save_snapshot(self) -> None:
        """Store a copy of the live state and phase under the current version"""
        self.snapshots[self.version] = Snapshot(
            state=self.state.model_copy(deep=True),
            phase=self.current_phase,
        )
        log_snapshot_event(
            "save", self.session_id, self.version, phase=self.current_phase.name
        )

    def restore_snapshot(self, version: int) -> bool:
        """
        Replace the live state and phase with the snapshot stored at `version`.

        Returns:
            True if the snapshot existed and was restored, False otherwise
            (the live state is left untouched)
        """
        snapshot = self.snapshots.get(version)
        if snapshot is None:
            log_snapshot_event("restore_miss", self.session_id, version)
            return False

        self.state = snapshot.state.model_copy(deep=True)
        self.current_phase = snapshot.phase
        self.version = version
        log_snapshot_event("restore", self.session_id, version, phase=snapshot.phase.name)
        return True

    def _sync_to(self, client_version: int | None) -> None:
        # Apply transitions to what the user is looking at, not to the server's head
        if client_version is not None and client_version != self.version:
            self.restore_snapshot(client_version)

    def _commit(self, previous: Phase, next_phase: Phase) -> None:
        self.current_phase = next_phase
        self.version += 1
        # A transition from an older version abandons the branch that followed it
        for stale in [v for v in self.snapshots if v > self.version]:
            del self.snapshots[stale]
        self.save_snapshot()
        log_phase_transition(
            from_phase=previous.name,
            to_phase=next_phase.name,
            session_id=self.session_id,
            version=self.version,
            round_number=self.state.current_round,
        )

    def advance(self, client_version: int | None = None) -> bool:
        """
        Move past a phase that needs no input.

        Returns:
            True if a transition was applied (False for input phases)
        """
        self._sync_to(client_version)
        previous = self.current_phase
        if previous.requires_input():
            return False

        # Saved before next_phase, which may mutate state (end of turn advances the round)
        self.save_snapshot()
        self._commit(previous, previous.next_phase(self.state))
        return True

    def select(self, choice: str, client_version: int | None = None) -> bool:
        """
        Submit a choice to an input phase.

        Returns:
            True if the choice was valid and a transition was applied
        """
        self._sync_to(client_version)
        previous = self.current_phase
        if not previous.requires_input():
            return False

        self.save_snapshot()
        next_phase = previous.process_input(choice, self.state)
        if next_phase is None:
            logger.bind(session_id=self.session_id, phase=previous.name).debug(
                f"Rejected choice {choice!r}"
            )
            return False

        self._commit(previous, next_phase)
        return True


class SessionRegistry:
    """
    In-memory map of session id to GameSession.

    Creation and reset are atomic; work within a single session is not
    locked, since one browser drives one session at a time.
    """

    def __init__(self, catalog: MissionCatalog | None = None):
        self.catalog = catalog or MissionCatalog()
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = GameSession(catalog=self.catalog, session_id=session_id)
                self._sessions[session_id] = session
                logger.bind(session_id=session_id).info("Session created")
            return session

    def get(self, session_id: str) -> GameSession:
        """
        Raises:
            SessionNotFound: If no session exists for the id
        """
        with self._lock:
            if session_id not in self._sessions:
                raise SessionNotFound(session_id)
            return self._sessions[session_id]

    def reset(self, session_id: str) -> GameSession:
        """Replace the session's game with a fresh one at version 0"""
        with self._lock:
            session = GameSession(catalog=self.catalog, session_id=session_id)
            self._sessions[session_id] = session
        log_snapshot_event("reset", session_id, session.version)
        return session

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
