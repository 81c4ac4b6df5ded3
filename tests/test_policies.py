from conftest import make_ctx

from ColonyBot.constants import Role, StructureType
from ColonyBot.roles import (
    BUILDER_POLICY,
    GATHERER_POLICY,
    UPGRADER_POLICY,
    PolicyRegistry,
    register_default_policies,
)


def test_role_from_name_needs_exactly_one_prefix_match():
    assert Role.from_name("gatherer_12") is Role.GATHERER
    assert Role.from_name("Builder_1000_2") is Role.BUILDER
    assert Role.from_name("UPGRADER") is Role.UPGRADER
    assert Role.from_name("Scout_1") is None


def _loaded_worker(world, name, energy=50):
    worker = world.add_worker(name, (2, 2), energy=energy)
    ctx = make_ctx(world, worker)
    ctx.memory.needs_resource = False
    return worker, ctx


def test_loaded_gatherer_recharges_before_building(world):
    spawn = world.add_structure((3, 2), StructureType.SPAWN)
    site = world.add_construction_site((2, 3))
    _, ctx = _loaded_worker(world, "Gatherer_1")

    assert GATHERER_POLICY.work(ctx)
    assert spawn.store.energy == 50
    assert site.progress == 0


def test_loaded_gatherer_builds_when_every_sink_is_full(world):
    world.add_structure((3, 2), StructureType.SPAWN, energy=300)
    site = world.add_construction_site((2, 3))
    _, ctx = _loaded_worker(world, "Gatherer_1")

    assert GATHERER_POLICY.work(ctx)
    assert site.progress == 5
    assert ctx.memory.current_build_id == site.id


def test_loaded_builder_builds_before_recharging(world):
    spawn = world.add_structure((3, 2), StructureType.SPAWN)
    site = world.add_construction_site((2, 3))
    _, ctx = _loaded_worker(world, "Builder_1")

    assert BUILDER_POLICY.work(ctx)
    assert site.progress == 5
    assert spawn.store.energy == 0


def test_loaded_upgrader_upgrades_first(world):
    controller = world.add_controller((4, 2))
    site = world.add_construction_site((2, 3))
    _, ctx = _loaded_worker(world, "Upgrader_1")

    assert UPGRADER_POLICY.work(ctx)
    assert controller.progress == 1
    assert site.progress == 0


def test_empty_builder_ignores_raw_sources_and_heads_for_a_container(world):
    world.add_source((3, 2))
    container = world.add_structure((10, 8), StructureType.CONTAINER, energy=500)
    worker = world.add_worker("Builder_1", (2, 2))
    ctx = make_ctx(world, worker)
    ctx.memory.needs_resource = True

    assert BUILDER_POLICY.work(ctx)
    assert ctx.memory.current_resource_id == container.id
    assert worker.store.energy == 0


def test_empty_builder_with_only_sources_stays_idle(world):
    world.add_source((3, 2))
    worker = world.add_worker("Builder_1", (2, 2))
    ctx = make_ctx(world, worker)
    ctx.memory.needs_resource = True

    assert not BUILDER_POLICY.work(ctx)
    assert worker.saying == "No sources found"


def test_empty_upgrader_harvests_when_nothing_else_is_stored(world):
    world.add_source((3, 2))
    worker = world.add_worker("Upgrader_1", (2, 2))
    ctx = make_ctx(world, worker)
    ctx.memory.needs_resource = True

    assert UPGRADER_POLICY.work(ctx)
    assert worker.store.energy == 2


def test_continuation_runs_before_the_policy_list(world):
    world.add_structure((3, 2), StructureType.SPAWN)
    site = world.add_construction_site((2, 3))
    _, ctx = _loaded_worker(world, "Gatherer_1")
    ctx.memory.current_build_id = site.id

    assert GATHERER_POLICY.work(ctx)
    assert site.progress == 5


def test_policy_leaves_a_spent_worker_alone(world):
    spawn = world.add_structure((3, 2), StructureType.SPAWN)
    worker, ctx = _loaded_worker(world, "Gatherer_1")
    worker.spent_turn = True

    assert not GATHERER_POLICY.work(ctx)
    assert spawn.store.energy == 0


def test_registry_prefers_explicit_role_over_name(world):
    registry = register_default_policies(PolicyRegistry())
    tagged = world.add_worker("Builder_1", (2, 2), role=Role.GATHERER)
    legacy = world.add_worker("upgrader_5", (3, 3))
    stray = world.add_worker("Scout_1", (4, 4))

    assert registry.for_worker(tagged) is GATHERER_POLICY
    assert registry.for_worker(legacy) is UPGRADER_POLICY
    assert registry.for_worker(stray) is None


def test_registry_summary_lists_each_role_in_order():
    registry = register_default_policies(PolicyRegistry())
    summary = registry.summary()

    assert "Gatherer: empty=[GatherTask] loaded=[RechargeTask, BuildTask, UpgradeTask]" in summary
    assert "Builder: empty=[GatherTask] loaded=[BuildTask, UpgradeTask, RechargeTask]" in summary
    assert PolicyRegistry().summary() == "  (empty)"


def test_policy_palette_comes_from_role_catalogue():
    assert GATHERER_POLICY.palette == "#800080"
    assert BUILDER_POLICY.palette == "#000080"
    assert UPGRADER_POLICY.palette == "#008000"


def test_builder_resuming_a_tapped_container_never_falls_back_to_a_source(world):
    source = world.add_source((3, 2))
    container = world.add_structure((1, 2), StructureType.CONTAINER, energy=0)
    worker = world.add_worker("Builder_1", (2, 2), role=Role.BUILDER)
    ctx = make_ctx(world, worker)
    ctx.memory.needs_resource = True
    ctx.memory.current_resource_id = container.id

    assert not BUILDER_POLICY.work(ctx)
    assert source.energy == 3000
    assert worker.store.energy == 0
    assert ctx.memory.current_resource_id is None
    assert ctx.gather_options is BUILDER_POLICY.gather_options
