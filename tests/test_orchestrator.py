from conftest import CountingWorld, populate_colony

from ColonyBot.constants import RESOURCE_ENERGY, FindKind, Role, StructureType
from ColonyBot.memory import MemoryStore, WorkerMemory
from ColonyBot.orchestrator import WorkerOrchestrator
from ColonyBot.roles import PolicyRegistry, register_default_policies
from ColonyBot.world.objects import DroppedResource


def make_orchestrator():
    return WorkerOrchestrator(register_default_policies(PolicyRegistry()))


def test_first_tick_empty_worker_starts_gathering(world, memory):
    source = world.add_source((3, 2))
    world.add_worker("Gatherer_1", (2, 2), role=Role.GATHERER)

    report = make_orchestrator().do_work(world, memory)

    mem = memory.get("Gatherer_1")
    assert mem.needs_resource is True
    assert mem.current_resource_id == source.id
    assert world.workers["Gatherer_1"].store.energy == 2
    assert report.acted == 1


def test_dying_worker_drops_cargo_and_loses_memory(world, memory):
    worker = world.add_worker("Gatherer_1", (4, 4), role=Role.GATHERER,
                              energy=50, ticks_to_live=1)
    world.add_source((5, 4))
    memory.get("Gatherer_1").current_resource_id = "src-77"

    report = make_orchestrator().do_work(world, memory)

    dropped = world.find_closest_by_path(worker.pos, FindKind.DROPPED_RESOURCES)
    assert isinstance(dropped, DroppedResource)
    assert dropped.pos == worker.pos
    assert dropped.amount == 50
    assert dropped.resource_type == RESOURCE_ENERGY
    assert worker.store.energy == 0
    assert report.died == 1
    assert "Gatherer_1" not in memory


def test_spawning_worker_is_skipped_without_a_memory_record(world, memory):
    worker = world.add_worker("Builder_1", (2, 2), role=Role.BUILDER)
    worker.spawning = True

    report = make_orchestrator().do_work(world, memory)

    assert report.spawning == 1
    assert report.acted == report.idle == 0
    assert "Builder_1" not in memory


def test_home_room_is_recorded_on_first_tick(world, memory):
    world.add_worker("Upgrader_1", (2, 2), role=Role.UPGRADER)
    make_orchestrator().do_work(world, memory)
    assert memory.get("Upgrader_1").home_room == "W1N1"


def test_filling_up_clears_only_the_resource_slot(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    mem = WorkerMemory(needs_resource=True, current_resource_id="src-1",
                       current_build_id="site-2", current_deposit_id="spawn-3")

    WorkerOrchestrator.normalise_memory(worker, mem)

    assert mem.needs_resource is False
    assert mem.current_resource_id is None
    # The deposit slot is kept on this transition, unlike the empty one below.
    assert mem.current_deposit_id == "spawn-3"
    assert mem.current_build_id == "site-2"


def test_running_dry_clears_resource_and_deposit_slots(world):
    worker = world.add_worker("Gatherer_1", (2, 2))
    mem = WorkerMemory(needs_resource=False, current_resource_id="src-1",
                       current_build_id="site-2", current_deposit_id="spawn-3")

    WorkerOrchestrator.normalise_memory(worker, mem)

    assert mem.needs_resource is True
    assert mem.current_resource_id is None
    assert mem.current_deposit_id is None
    assert mem.current_build_id == "site-2"


def test_partially_loaded_worker_keeps_its_phase(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=20)
    mem = WorkerMemory(needs_resource=True, current_resource_id="src-1")

    WorkerOrchestrator.normalise_memory(worker, mem)

    assert mem.needs_resource is True
    assert mem.current_resource_id == "src-1"


def test_worker_without_a_role_is_skipped(world, memory):
    world.add_source((3, 2))
    worker = world.add_worker("Scout_1", (2, 2))

    report = make_orchestrator().do_work(world, memory)

    assert report.unclassified == 1
    assert worker.store.energy == 0
    assert not worker.spent_turn


def test_legacy_worker_is_classified_by_name(world, memory):
    world.add_source((3, 2))
    worker = world.add_worker("gatherer_12", (2, 2))

    report = make_orchestrator().do_work(world, memory)

    assert report.acted == 1
    assert worker.store.energy == 2


def test_spent_flag_is_reset_at_the_start_of_each_tick(world, memory):
    world.add_source((3, 2))
    worker = world.add_worker("Gatherer_1", (2, 2), role=Role.GATHERER)
    worker.spent_turn = True

    make_orchestrator().do_work(world, memory)

    assert worker.store.energy == 2


def test_at_most_one_successful_action_per_worker_per_tick():
    world = CountingWorld(20, 12)
    populate_colony(world)
    world.add_structure((4, 2), StructureType.EXTENSION)
    world.add_worker("Gatherer_2", (3, 3), role=Role.GATHERER, energy=30)
    orchestrator = make_orchestrator()
    memory = MemoryStore()

    for _ in range(80):
        orchestrator.do_work(world, memory)
        world.advance()

    assert world.actions
    assert max(world.actions.values()) == 1


def test_store_going_from_empty_to_full_in_one_action_crosses_both_edges(world, memory):
    # Normalisation sees an empty store and flips to gathering; the withdraw
    # then fills the store and the gather flips back on the same tick.
    world.add_structure((3, 2), StructureType.CONTAINER, energy=500)
    worker = world.add_worker("Gatherer_1", (2, 2), role=Role.GATHERER)
    memory.get("Gatherer_1").needs_resource = False

    make_orchestrator().do_work(world, memory)

    assert worker.store.energy == 50
    assert memory.get("Gatherer_1").needs_resource is False
    assert memory.get("Gatherer_1").current_resource_id is not None
