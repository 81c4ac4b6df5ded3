from ColonyBot.constants import StructureType
from ColonyBot.tasks.selectors import (
    GatherOptions,
    find_build_target,
    find_deposit_sink,
    find_resource_source,
)
from ColonyBot.world import GridWorld


def test_dropped_energy_beats_nearer_container_and_source(world):
    worker = world.add_worker("Gatherer_1", (2, 2))
    world.add_source((3, 3))
    world.add_structure((4, 2), StructureType.CONTAINER, energy=500)
    dropped = world.add_dropped((15, 10), 20)

    chosen = find_resource_source(world, worker, GatherOptions(pickup_dropped=True))
    assert chosen is dropped


def test_container_beats_nearer_source_when_dropped_disabled(world):
    worker = world.add_worker("Gatherer_1", (2, 2))
    world.add_source((3, 3))
    world.add_dropped((2, 4), 20)
    container = world.add_structure((15, 10), StructureType.CONTAINER, energy=500)

    assert find_resource_source(world, worker, GatherOptions()) is container


def test_container_at_threshold_and_storage_without_flag_are_skipped(world):
    worker = world.add_worker("Gatherer_1", (2, 2))
    world.add_structure((3, 2), StructureType.CONTAINER, energy=100)
    storage = world.add_structure((4, 4), StructureType.STORAGE, energy=5000)
    source = world.add_source((12, 8))

    assert find_resource_source(world, worker, GatherOptions()) is source
    assert find_resource_source(world, worker, GatherOptions(from_storage=True)) is storage


def test_excluded_id_is_never_selected(world):
    worker = world.add_worker("Gatherer_1", (2, 2))
    near = world.add_structure((3, 2), StructureType.CONTAINER, energy=500)
    far = world.add_structure((15, 2), StructureType.CONTAINER, energy=500)

    assert find_resource_source(world, worker, GatherOptions(), exclude_id=near.id) is far
    assert find_resource_source(world, worker, GatherOptions(from_sources=False),
                                exclude_id=far.id) is near


def test_raw_nodes_disabled_returns_none_with_only_sources(world):
    worker = world.add_worker("Builder_1", (2, 2))
    world.add_source((3, 3))
    assert find_resource_source(world, worker, GatherOptions(from_sources=False)) is None


def test_nearest_means_cheapest_path_not_straight_line():
    world = GridWorld(20, 10)
    for y in range(9):                    # wall at x=4, gap only at y=9
        world.set_wall((4, y))
    worker = world.add_worker("Gatherer_1", (2, 5))
    behind_wall = world.add_source((6, 5))     # 4 tiles away, long detour
    open_field = world.add_source((0, 0))      # 5 tiles away, direct

    assert find_resource_source(world, worker, GatherOptions()) is open_field
    assert world.path_cost(worker.pos, behind_wall.pos) > world.path_cost(worker.pos, open_field.pos)


def test_unreachable_candidates_are_never_selected():
    world = GridWorld(10, 10)
    worker = world.add_worker("Gatherer_1", (1, 1))
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            world.set_wall((7 + dx, 7 + dy))
    world.add_source((7, 7))
    assert find_resource_source(world, worker, GatherOptions()) is None


def test_deposit_prefers_spawns_over_nearer_tower(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    world.add_structure((3, 2), StructureType.TOWER)
    extension = world.add_structure((15, 10), StructureType.EXTENSION)

    assert find_deposit_sink(world, worker) is extension


def test_deposit_falls_back_to_tower_when_spawns_are_full(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    world.add_structure((3, 2), StructureType.SPAWN, energy=300)
    tower = world.add_structure((15, 10), StructureType.TOWER)

    assert find_deposit_sink(world, worker) is tower


def test_remembered_full_sink_is_rejected_without_searching(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    full = world.add_structure((3, 2), StructureType.EXTENSION, energy=50)
    world.add_structure((4, 2), StructureType.SPAWN)

    assert find_deposit_sink(world, worker, specific_id=full.id) is None


def test_remembered_container_is_kept_even_when_full(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    container = world.add_structure((3, 2), StructureType.CONTAINER, energy=2000)

    assert find_deposit_sink(world, worker, specific_id=container.id) is container


def test_remembered_sink_that_vanished_falls_back_to_search(world):
    worker = world.add_worker("Gatherer_1", (2, 2), energy=50)
    spawn = world.add_structure((6, 6), StructureType.SPAWN)

    assert find_deposit_sink(world, worker, specific_id="extension-999") is spawn


def test_build_target_specific_site_or_nearest_own_site(world):
    worker = world.add_worker("Builder_1", (2, 2), energy=50)
    world.add_construction_site((3, 3), my=False)
    own = world.add_construction_site((10, 10))

    assert find_build_target(world, worker) is own
    assert find_build_target(world, worker, specific_id=own.id) is own
    assert find_build_target(world, worker, specific_id="site-999") is None
    assert find_build_target(world, worker, exclude_id=own.id) is None
