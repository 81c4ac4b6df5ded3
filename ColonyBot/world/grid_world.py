"""
GridWorld: a small in-memory world implementing WorldView.

Used by run.py and the test-suite. It is deliberately simple:

  - One integer grid of per-tile movement costs (numpy). 0 marks a wall.
    Objects never block movement; only terrain does.
  - Paths are 8-connected. A cost field is computed with Dijkstra from the
    moving worker each time a path is needed, so "closest" always means
    cheapest to walk to, never straight-line nearest.
  - Actions resolve immediately, so a worker that fills up on a harvest sees
    its own full store on the same tick.
  - advance() ends the tick: spawn timers, lifetimes, fatigue and source
    regeneration tick down, then the clock moves forward.

Reaching an object means standing within range 1 of it, which is also the
range of every transfer-style action. Build and upgrade work from range 3.
"""

from __future__ import annotations

import heapq
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np
from sc2.position import Point2

from ColonyBot.constants import (
    BODYPART_COST,
    BUILD_POWER,
    HARVEST_POWER,
    RESOURCE_ENERGY,
    SPAWN_TIME_PER_PART,
    UPGRADE_POWER,
    WORKER_LIFE_TIME,
    BodyPart,
    FindKind,
    ResultCode,
    Role,
    StructureType,
)
from ColonyBot.logger import get_logger
from ColonyBot.world.interface import Room, VisualHint, WorldView
from ColonyBot.world.objects import (
    ConstructionSite,
    Controller,
    DroppedResource,
    GameObject,
    Source,
    Store,
    Structure,
    Worker,
    get_range,
)

log = get_logger()

PosLike = Union[Point2, Tuple[int, int]]

_NEIGHBOURS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1,  0),          (1,  0),
    (-1,  1), (0,  1), (1,  1),
)

_ACTION_RANGE: int = 1
_WORK_RANGE: int = 3            # build / upgrade
_SOURCE_REGEN_TICKS: int = 300

_DEFAULT_CAPACITY: Dict[StructureType, Optional[int]] = {
    StructureType.SPAWN:     300,
    StructureType.EXTENSION: 50,
    StructureType.TOWER:     1000,
    StructureType.CONTAINER: 2000,
    StructureType.STORAGE:   1_000_000,
    StructureType.LINK:      800,
    StructureType.ROAD:      None,
}

_STANDARD_BODY: Tuple[BodyPart, ...] = (BodyPart.WORK, BodyPart.CARRY, BodyPart.MOVE, BodyPart.MOVE)


def _point(pos: PosLike) -> Point2:
    return Point2((int(pos[0]), int(pos[1])))


class GridWorld(WorldView):
    """
    Single-grid world, one or more named rooms laid over it.

    Build it with the add_* helpers, then hand it to the engine each tick and
    call advance() between ticks.
    """

    def __init__(
        self,
        width: int = 50,
        height: int = 50,
        room_name: str = "W1N1",
        terrain: Optional[np.ndarray] = None,
        start_time: int = 0,
    ) -> None:
        if terrain is None:
            terrain = np.ones((height, width), dtype=np.int32)
        self.terrain: np.ndarray = terrain
        self.default_room: str = room_name
        self._time: int = start_time
        self._workers: Dict[str, Worker] = {}
        self._objects: Dict[str, GameObject] = {}
        self._rooms: Dict[str, Room] = {room_name: Room(room_name)}
        self._spawn_timers: Dict[str, int] = {}
        self._next_id: int = 1

        # Last movement hint per worker name; useful for debugging and tests.
        self.last_hints: Dict[str, Optional[VisualHint]] = {}

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _new_id(self, prefix: str) -> str:
        object_id = f"{prefix}-{self._next_id}"
        self._next_id += 1
        return object_id

    def _register(self, obj: GameObject) -> GameObject:
        self._objects[obj.id] = obj
        return obj

    def set_wall(self, pos: PosLike) -> None:
        p = _point(pos)
        self.terrain[int(p.y), int(p.x)] = 0

    def add_room(self, name: str) -> Room:
        return self._rooms.setdefault(name, Room(name))

    def add_controller(self, pos: PosLike, my: bool = True, room: Optional[str] = None) -> Controller:
        room = room or self.default_room
        controller = Controller(self._new_id("ctrl"), _point(pos), room, my=my)
        self.add_room(room).controller = controller
        self._register(controller)
        return controller

    def add_source(self, pos: PosLike, energy: int = 3000, room: Optional[str] = None) -> Source:
        source = Source(self._new_id("src"), _point(pos), room or self.default_room,
                        energy=energy, energy_capacity=max(energy, 1))
        self._register(source)
        return source

    def add_structure(
        self,
        pos: PosLike,
        structure_type: StructureType,
        energy: int = 0,
        capacity: Optional[int] = None,
        my: bool = True,
        room: Optional[str] = None,
    ) -> Structure:
        if capacity is None:
            capacity = _DEFAULT_CAPACITY[structure_type]
        store = None
        if capacity is not None:
            store = Store(capacity=capacity)
            store.add(RESOURCE_ENERGY, energy)
        structure = Structure(self._new_id(structure_type.value), _point(pos), room or self.default_room,
                              structure_type=structure_type, my=my, store=store)
        self._register(structure)
        return structure

    def add_construction_site(
        self,
        pos: PosLike,
        structure_type: StructureType = StructureType.EXTENSION,
        progress_total: int = 3000,
        my: bool = True,
        room: Optional[str] = None,
    ) -> ConstructionSite:
        site = ConstructionSite(self._new_id("site"), _point(pos), room or self.default_room,
                                structure_type=structure_type, my=my, progress_total=progress_total)
        self._register(site)
        return site

    def add_dropped(
        self,
        pos: PosLike,
        amount: int,
        resource: str = RESOURCE_ENERGY,
        room: Optional[str] = None,
    ) -> DroppedResource:
        dropped = DroppedResource(self._new_id("drop"), _point(pos), room or self.default_room,
                                  resource_type=resource, amount=amount)
        self._register(dropped)
        return dropped

    def add_worker(
        self,
        name: str,
        pos: PosLike,
        role: Optional[Role] = None,
        body: Optional[Sequence[BodyPart]] = None,
        energy: int = 0,
        ticks_to_live: Optional[int] = WORKER_LIFE_TIME,
        room: Optional[str] = None,
    ) -> Worker:
        worker = Worker(
            name=name,
            pos=_point(pos),
            room=room or self.default_room,
            body=list(body if body is not None else _STANDARD_BODY),
            role=role,
            ticks_to_live=ticks_to_live,
        )
        worker.store.add(RESOURCE_ENERGY, energy)
        self._workers[name] = worker
        return worker

    def remove_object(self, object_id: str) -> None:
        self._objects.pop(object_id, None)

    # ------------------------------------------------------------------
    # Tick state
    # ------------------------------------------------------------------

    @property
    def time(self) -> int:
        return self._time

    @property
    def workers(self) -> Dict[str, Worker]:
        return self._workers

    @property
    def spawns(self) -> Dict[str, Structure]:
        return {
            obj.id: obj for obj in self._objects.values()
            if isinstance(obj, Structure) and obj.my and obj.structure_type is StructureType.SPAWN
        }

    def energy_available(self, room: str) -> int:
        return sum(
            s.store.energy
            for s in self._objects.values()
            if isinstance(s, Structure) and s.room == room and s.my
            and s.structure_type in (StructureType.SPAWN, StructureType.EXTENSION)
        )

    def advance(self) -> None:
        """End the current tick."""
        for name, remaining in list(self._spawn_timers.items()):
            remaining -= 1
            if remaining > 0:
                self._spawn_timers[name] = remaining
                continue
            del self._spawn_timers[name]
            worker = self._workers.get(name)
            if worker is not None:
                worker.spawning = False
                worker.ticks_to_live = WORKER_LIFE_TIME
            for obj in self._objects.values():
                if isinstance(obj, Structure) and obj.spawning == name:
                    obj.spawning = None

        for worker in list(self._workers.values()):
            worker.saying = None
            if worker.spawning:
                continue
            worker.fatigue = max(0, worker.fatigue - 1)
            if worker.ticks_to_live is not None:
                worker.ticks_to_live -= 1
                if worker.ticks_to_live <= 0:
                    del self._workers[worker.name]

        for obj in self._objects.values():
            if isinstance(obj, Source):
                obj.ticks_to_regeneration -= 1
                if obj.ticks_to_regeneration <= 0:
                    obj.energy = obj.energy_capacity
                    obj.ticks_to_regeneration = _SOURCE_REGEN_TICKS

        self._time += 1

    # ------------------------------------------------------------------
    # Path costs
    # ------------------------------------------------------------------

    def cost_field(self, origin: Point2) -> np.ndarray:
        """Cheapest walking cost from *origin* to every tile (inf = unreachable)."""
        height, width = self.terrain.shape
        dist = np.full((height, width), np.inf)
        ox, oy = int(origin.x), int(origin.y)
        dist[oy, ox] = 0.0
        heap: List[Tuple[float, int, int]] = [(0.0, ox, oy)]
        while heap:
            d, x, y = heapq.heappop(heap)
            if d > dist[y, x]:
                continue
            for dx, dy in _NEIGHBOURS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                step = self.terrain[ny, nx]
                if step <= 0:
                    continue
                nd = d + float(step)
                if nd < dist[ny, nx]:
                    dist[ny, nx] = nd
                    heapq.heappush(heap, (nd, nx, ny))
        return dist

    @staticmethod
    def _goal_cell(dist: np.ndarray, target: Point2) -> Tuple[float, int, int]:
        """Cheapest reachable tile within range 1 of *target*."""
        height, width = dist.shape
        tx, ty = int(target.x), int(target.y)
        best = (np.inf, tx, ty)
        for y in range(max(0, ty - 1), min(height, ty + 2)):
            for x in range(max(0, tx - 1), min(width, tx + 2)):
                if dist[y, x] < best[0]:
                    best = (float(dist[y, x]), x, y)
        return best

    def path_cost(self, origin: Point2, target: Point2) -> float:
        return self._goal_cell(self.cost_field(origin), target)[0]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _candidates(self, kind: FindKind) -> Iterable[GameObject]:
        for obj in self._objects.values():
            if kind is FindKind.DROPPED_RESOURCES and isinstance(obj, DroppedResource):
                yield obj
            elif kind is FindKind.STRUCTURES and isinstance(obj, Structure):
                yield obj
            elif kind is FindKind.MY_STRUCTURES and isinstance(obj, Structure) and obj.my:
                yield obj
            elif kind is FindKind.SOURCES_ACTIVE and isinstance(obj, Source) and obj.is_active:
                yield obj
            elif kind is FindKind.MY_CONSTRUCTION_SITES and isinstance(obj, ConstructionSite) and obj.my:
                yield obj

    def find_closest_by_path(
        self,
        origin: Point2,
        kind: FindKind,
        predicate: Optional[Callable[[GameObject], bool]] = None,
    ) -> Optional[GameObject]:
        candidates = [c for c in self._candidates(kind) if predicate is None or predicate(c)]
        if not candidates:
            return None
        dist = self.cost_field(origin)
        best: Optional[GameObject] = None
        best_cost = np.inf
        for candidate in candidates:
            cost = self._goal_cell(dist, candidate.pos)[0]
            if cost < best_cost:
                best, best_cost = candidate, cost
        return best

    def get_object_by_id(self, object_id: str) -> Optional[GameObject]:
        if object_id in self._workers:
            return self._workers[object_id]
        return self._objects.get(object_id)

    def room(self, name: str) -> Optional[Room]:
        return self._rooms.get(name)

    def structures_in(self, room: str, structure_type: StructureType) -> List[Structure]:
        return [
            s for s in self._objects.values()
            if isinstance(s, Structure) and s.room == room and s.structure_type is structure_type
        ]

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _exists(self, target: GameObject) -> bool:
        return self._objects.get(target.id) is target

    def harvest(self, worker: Worker, target: GameObject) -> ResultCode:
        if not isinstance(target, Source) or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if not worker.has_part(BodyPart.WORK):
            return ResultCode.NO_BODYPART
        if target.energy <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if get_range(worker.pos, target.pos) > _ACTION_RANGE:
            return ResultCode.NOT_IN_RANGE
        amount = min(HARVEST_POWER * worker.count_parts(BodyPart.WORK), target.energy)
        target.energy -= worker.store.add(RESOURCE_ENERGY, amount)
        return ResultCode.OK

    def withdraw(self, worker: Worker, target: GameObject, resource: str) -> ResultCode:
        if not isinstance(target, Structure) or target.store is None or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if not worker.has_part(BodyPart.CARRY):
            return ResultCode.NO_BODYPART
        if target.store.used_capacity(resource) <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if worker.is_full:
            return ResultCode.FULL
        if get_range(worker.pos, target.pos) > _ACTION_RANGE:
            return ResultCode.NOT_IN_RANGE
        amount = min(target.store.used_capacity(resource), worker.store.free_capacity())
        worker.store.add(resource, target.store.remove(resource, amount))
        return ResultCode.OK

    def pickup(self, worker: Worker, target: GameObject) -> ResultCode:
        if not isinstance(target, DroppedResource) or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if not worker.has_part(BodyPart.CARRY):
            return ResultCode.NO_BODYPART
        if worker.is_full:
            return ResultCode.FULL
        if get_range(worker.pos, target.pos) > _ACTION_RANGE:
            return ResultCode.NOT_IN_RANGE
        target.amount -= worker.store.add(target.resource_type, target.amount)
        if target.amount <= 0:
            self.remove_object(target.id)
        return ResultCode.OK

    def transfer(self, worker: Worker, target: GameObject, resource: str) -> ResultCode:
        if not isinstance(target, Structure) or target.store is None or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if worker.store.used_capacity(resource) <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if target.store.free_capacity() <= 0:
            return ResultCode.FULL
        if get_range(worker.pos, target.pos) > _ACTION_RANGE:
            return ResultCode.NOT_IN_RANGE
        amount = min(worker.store.used_capacity(resource), target.store.free_capacity())
        target.store.add(resource, worker.store.remove(resource, amount))
        return ResultCode.OK

    def build(self, worker: Worker, target: GameObject) -> ResultCode:
        if not isinstance(target, ConstructionSite) or not target.my or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if not worker.has_part(BodyPart.WORK):
            return ResultCode.NO_BODYPART
        if worker.store.energy <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if get_range(worker.pos, target.pos) > _WORK_RANGE:
            return ResultCode.NOT_IN_RANGE
        amount = min(
            BUILD_POWER * worker.count_parts(BodyPart.WORK),
            worker.store.energy,
            target.progress_total - target.progress,
        )
        target.progress += worker.store.remove(RESOURCE_ENERGY, amount)
        if target.progress >= target.progress_total:
            self.remove_object(target.id)
            self.add_structure(target.pos, target.structure_type, my=target.my, room=target.room)
            log.debug("Construction site %s finished as %s", target.id,
                      target.structure_type.value, tick=self._time)
        return ResultCode.OK

    def upgrade_controller(self, worker: Worker, target: GameObject) -> ResultCode:
        if not isinstance(target, Controller) or not self._exists(target):
            return ResultCode.INVALID_TARGET
        if not target.my:
            return ResultCode.NOT_OWNER
        if not worker.has_part(BodyPart.WORK):
            return ResultCode.NO_BODYPART
        if worker.store.energy <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if get_range(worker.pos, target.pos) > _WORK_RANGE:
            return ResultCode.NOT_IN_RANGE
        amount = min(UPGRADE_POWER * worker.count_parts(BodyPart.WORK), worker.store.energy)
        target.progress += worker.store.remove(RESOURCE_ENERGY, amount)
        return ResultCode.OK

    def drop(self, worker: Worker, resource: str) -> ResultCode:
        amount = worker.store.remove(resource, worker.store.used_capacity(resource))
        if amount <= 0:
            return ResultCode.NOT_ENOUGH_RESOURCES
        for obj in self._objects.values():
            if (isinstance(obj, DroppedResource) and obj.pos == worker.pos
                    and obj.resource_type == resource):
                obj.amount += amount
                return ResultCode.OK
        self.add_dropped(worker.pos, amount, resource=resource, room=worker.room)
        return ResultCode.OK

    def suicide(self, worker: Worker) -> ResultCode:
        if self._workers.pop(worker.name, None) is None:
            return ResultCode.INVALID_TARGET
        return ResultCode.OK

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def move_to(self, worker: Worker, target: Point2, hint: Optional[VisualHint] = None) -> ResultCode:
        if not worker.has_part(BodyPart.MOVE):
            return ResultCode.NO_BODYPART
        if worker.fatigue > 0:
            return ResultCode.TIRED
        self.last_hints[worker.name] = hint
        if get_range(worker.pos, target) <= _ACTION_RANGE:
            return ResultCode.OK

        dist = self.cost_field(worker.pos)
        cost, gx, gy = self._goal_cell(dist, target)
        if cost == np.inf:
            return ResultCode.NO_PATH

        # Walk the cost field back from the goal to the tile next to the worker.
        ox, oy = int(worker.pos.x), int(worker.pos.y)
        cx, cy = gx, gy
        while max(abs(cx - ox), abs(cy - oy)) > 1:
            here = dist[cy, cx] - float(self.terrain[cy, cx])
            for dx, dy in _NEIGHBOURS:
                px, py = cx + dx, cy + dy
                if (0 <= py < dist.shape[0] and 0 <= px < dist.shape[1]
                        and dist[py, px] == here):
                    cx, cy = px, py
                    break
            else:
                return ResultCode.NO_PATH
        worker.pos = Point2((cx, cy))
        return ResultCode.OK

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def spawn_worker(
        self,
        spawn: Structure,
        body: Sequence[BodyPart],
        name: str,
        role: Role,
        dry_run: bool = False,
    ) -> ResultCode:
        if not isinstance(spawn, Structure) or spawn.structure_type is not StructureType.SPAWN:
            raise ValueError(f"{spawn!r} is not a spawn")
        if spawn.spawning:
            return ResultCode.BUSY
        if name in self._workers:
            return ResultCode.NAME_EXISTS
        cost = sum(BODYPART_COST[p] for p in body)
        if self.energy_available(spawn.room) < cost:
            return ResultCode.NOT_ENOUGH_RESOURCES
        if dry_run:
            return ResultCode.OK

        remaining = cost
        payers = [spawn] + [
            s for s in self.structures_in(spawn.room, StructureType.EXTENSION) if s.my
        ]
        for payer in payers:
            remaining -= payer.store.remove(RESOURCE_ENERGY, remaining)
            if remaining <= 0:
                break

        worker = Worker(name=name, pos=spawn.pos, room=spawn.room, body=list(body),
                        role=role, spawning=True)
        self._workers[name] = worker
        self._spawn_timers[name] = len(body) * SPAWN_TIME_PER_PART
        spawn.spawning = name
        return ResultCode.OK
