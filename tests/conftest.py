import pytest

from ColonyBot.constants import BodyPart, ResultCode, Role, StructureType
from ColonyBot.memory import MemoryStore, WorkerMemory
from ColonyBot.tasks.task import TaskContext
from ColonyBot.world import GridWorld


def make_ctx(world, worker, memory=None, palette="#800080"):
    return TaskContext(worker=worker, memory=memory or WorkerMemory(), world=world, palette=palette)


def wall_off(world, pos):
    """Surround *pos* (and the tile itself) with walls so nothing can reach it."""
    x, y = pos
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            world.set_wall((x + dx, y + dy))


class CountingWorld(GridWorld):
    """GridWorld that counts successful actions per worker per tick."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.actions = {}

    def _count(self, worker, status):
        if status in (ResultCode.OK, ResultCode.TIRED):
            key = (self.time, worker.name)
            self.actions[key] = self.actions.get(key, 0) + 1
        return status

    def harvest(self, worker, target):
        return self._count(worker, super().harvest(worker, target))

    def withdraw(self, worker, target, resource):
        return self._count(worker, super().withdraw(worker, target, resource))

    def pickup(self, worker, target):
        return self._count(worker, super().pickup(worker, target))

    def transfer(self, worker, target, resource):
        return self._count(worker, super().transfer(worker, target, resource))

    def build(self, worker, target):
        return self._count(worker, super().build(worker, target))

    def upgrade_controller(self, worker, target):
        return self._count(worker, super().upgrade_controller(worker, target))

    def move_to(self, worker, target, hint=None):
        return self._count(worker, super().move_to(worker, target, hint))


def populate_colony(world):
    """One worker of each role next to its work, plus the structures they need."""
    spawn = world.add_structure((2, 2), StructureType.SPAWN, energy=0)
    source = world.add_source((10, 2))
    container = world.add_structure((5, 8), StructureType.CONTAINER, energy=1000)
    controller = world.add_controller((2, 10))
    site = world.add_construction_site((8, 8), StructureType.EXTENSION, progress_total=5000)

    world.add_worker("Gatherer_1", (9, 2), role=Role.GATHERER)
    world.add_worker("Builder_1", (6, 8), role=Role.BUILDER, energy=50)
    world.add_worker("Upgrader_1", (3, 9), role=Role.UPGRADER, energy=50)
    return {
        "spawn": spawn,
        "source": source,
        "container": container,
        "controller": controller,
        "site": site,
    }


@pytest.fixture
def world():
    return GridWorld(20, 12)


@pytest.fixture
def memory():
    return MemoryStore()


@pytest.fixture
def no_work_body():
    return [BodyPart.CARRY, BodyPart.MOVE]
