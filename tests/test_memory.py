import json

from ColonyBot.memory import MemoryStore, WorkerMemory


def test_absent_fields_mean_first_tick_defaults():
    memory = WorkerMemory.from_dict({})
    assert memory.needs_resource is None
    assert memory.current_resource_id is None
    assert memory.current_build_id is None
    assert memory.current_deposit_id is None
    assert memory.home_room is None
    assert memory.blocked_count == 0


def test_serialised_keys_follow_the_memory_schema():
    memory = WorkerMemory(
        needs_resource=True,
        current_resource_id="src-1",
        current_build_id="site-2",
        current_deposit_id="spawn-3",
        home_room="W1N1",
        blocked_count=2,
    )
    assert memory.to_dict() == {
        "needsResource": True,
        "currentResourceTargetId": "src-1",
        "currentBuildTargetId": "site-2",
        "currentDepositTargetId": "spawn-3",
        "homeRegionId": "W1N1",
        "blockedCount": 2,
    }


def test_cleared_slots_are_omitted_and_unknown_keys_survive():
    raw = {"needsResource": False, "currentResourceTargetId": "src-1", "squad": "alpha"}
    memory = WorkerMemory.from_dict(raw)
    memory.current_resource_id = None

    data = memory.to_dict()
    assert "currentResourceTargetId" not in data
    assert "blockedCount" not in data
    assert data["squad"] == "alpha"
    assert data["needsResource"] is False


def test_store_creates_records_lazily_and_cleans_up_dead_workers():
    store = MemoryStore()
    store.get("Gatherer_1").home_room = "W1N1"
    store.get("Builder_2")
    assert "Gatherer_1" in store and len(store) == 2

    removed = store.cleanup(["Gatherer_1"])
    assert removed == 1
    assert list(store) == ["Gatherer_1"]
    assert store.get("Gatherer_1").home_room == "W1N1"


def test_dump_and_load_preserve_records(tmp_path):
    store = MemoryStore()
    store.get("Gatherer_1").current_build_id = "site-4"
    store.get("Gatherer_1").extra["note"] = 7
    path = tmp_path / "mem" / "memory.json"

    store.dump(path)
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk == {"Gatherer_1": {"currentBuildTargetId": "site-4", "note": 7}}

    loaded = MemoryStore.load(path)
    assert loaded.get("Gatherer_1").current_build_id == "site-4"
    assert loaded.get("Gatherer_1").to_dict() == on_disk["Gatherer_1"]


def test_peek_does_not_create_a_record():
    store = MemoryStore()
    assert store.peek("Gatherer_1") is None
    assert "Gatherer_1" not in store
    store.delete("Gatherer_1")
    assert len(store) == 0
