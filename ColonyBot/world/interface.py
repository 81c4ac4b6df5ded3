"""
WorldView: the collaborator boundary between the decision engine and the
simulated world.

The engine never advances time, moves anything itself or computes paths. It
asks the world three kinds of questions and issues one kind of command:

    queries  → find_closest_by_path(), get_object_by_id(), room(), structures_in()
    actions  → harvest(), withdraw(), pickup(), transfer(), build(),
               upgrade_controller(), drop(), suicide()
    movement → move_to()
    lifecycle→ spawn_worker()

Every action verb answers with a ResultCode; none of them raise for in-world
outcomes. An instance of WorldView is the tick's snapshot: it is handed to the
orchestrator explicitly each tick and never cached between ticks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from sc2.position import Point2

from ColonyBot.constants import BodyPart, FindKind, ResultCode, Role, StructureType
from ColonyBot.world.objects import Controller, GameObject, Structure, Worker


@dataclass(frozen=True)
class VisualHint:
    """Path-visualisation style passed through to the movement primitive."""
    stroke: str
    opacity: float = 1.0
    line_style: str = "dotted"


@dataclass
class Room:
    """A region of the world. Scopes the controller a worker upgrades."""
    name: str
    controller: Optional[Controller] = None


class WorldView(ABC):
    """Read/act interface to the world for a single tick."""

    # ------------------------------------------------------------------
    # Tick state
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def time(self) -> int:
        """Current tick number."""

    @property
    @abstractmethod
    def workers(self) -> Dict[str, Worker]:
        """Live workers keyed by name, in a stable iteration order."""

    @property
    @abstractmethod
    def spawns(self) -> Dict[str, Structure]:
        """Own spawn structures keyed by id."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def find_closest_by_path(
        self,
        origin: Point2,
        kind: FindKind,
        predicate: Optional[Callable[[GameObject], bool]] = None,
    ) -> Optional[GameObject]:
        """
        Nearest object of *kind* matching *predicate*, by movement cost from
        *origin*. Unreachable objects are never returned. Ties go to the
        object the world enumerates first.
        """

    @abstractmethod
    def get_object_by_id(self, object_id: str) -> Optional[GameObject]:
        """Object with this id, or None once it has ceased to exist."""

    @abstractmethod
    def room(self, name: str) -> Optional[Room]:
        """Region by name, or None if not visible."""

    @abstractmethod
    def structures_in(self, room: str, structure_type: StructureType) -> List[Structure]:
        """All structures of one class in a region."""

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @abstractmethod
    def harvest(self, worker: Worker, target: GameObject) -> ResultCode: ...

    @abstractmethod
    def withdraw(self, worker: Worker, target: GameObject, resource: str) -> ResultCode: ...

    @abstractmethod
    def pickup(self, worker: Worker, target: GameObject) -> ResultCode: ...

    @abstractmethod
    def transfer(self, worker: Worker, target: GameObject, resource: str) -> ResultCode: ...

    @abstractmethod
    def build(self, worker: Worker, target: GameObject) -> ResultCode: ...

    @abstractmethod
    def upgrade_controller(self, worker: Worker, target: GameObject) -> ResultCode: ...

    @abstractmethod
    def drop(self, worker: Worker, resource: str) -> ResultCode: ...

    @abstractmethod
    def suicide(self, worker: Worker) -> ResultCode: ...

    def say(self, worker: Worker, message: str) -> None:
        """Attach in-world status text to a worker."""
        worker.saying = message

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    @abstractmethod
    def move_to(self, worker: Worker, target: Point2, hint: Optional[VisualHint] = None) -> ResultCode:
        """
        Step one tile along the cheapest path toward *target*.

        Returns OK, TIRED, NO_PATH, NO_BODYPART or another ResultCode.
        """

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @abstractmethod
    def spawn_worker(
        self,
        spawn: Structure,
        body: Sequence[BodyPart],
        name: str,
        role: Role,
        dry_run: bool = False,
    ) -> ResultCode:
        """Request a new worker from *spawn*. A dry run only validates."""
