"""
Run script for the colony demo using config.py settings.
"""

import argparse
import logging
import os
from pathlib import Path

from ColonyBot import ColonyBot, MemoryStore
from ColonyBot.constants import Role, StructureType
from ColonyBot.logger import get_logger
from ColonyBot.world import GridWorld
from config import (
    COLONY_NAME,
    MAP_HEIGHT,
    MAP_WIDTH,
    MEMORY_FILE,
    REPORT_EVERY,
    ROOM_NAME,
    START_TICK,
    TARGET_AMOUNTS,
    TICKS,
)

log = get_logger()


def build_demo_world() -> GridWorld:
    """A walled-off field with two sources, a spawn, a container and a few sites."""
    world = GridWorld(MAP_WIDTH, MAP_HEIGHT, room_name=ROOM_NAME, start_time=START_TICK)

    # Ridge down the middle with a single gap.
    ridge_x = MAP_WIDTH // 2
    for y in range(MAP_HEIGHT):
        if y != MAP_HEIGHT // 2:
            world.set_wall((ridge_x, y))

    world.add_structure((4, 4), StructureType.SPAWN, energy=300)
    world.add_structure((6, 3), StructureType.EXTENSION)
    world.add_structure((6, 5), StructureType.EXTENSION)
    world.add_structure((8, 12), StructureType.TOWER)
    world.add_structure((ridge_x - 3, 6), StructureType.CONTAINER, energy=600)
    world.add_controller((3, MAP_HEIGHT - 3))

    world.add_source((ridge_x - 4, 3))
    world.add_source((MAP_WIDTH - 4, MAP_HEIGHT - 4))

    world.add_construction_site((9, 9), StructureType.EXTENSION, progress_total=1000)
    world.add_construction_site((ridge_x + 3, MAP_HEIGHT // 2), StructureType.ROAD, progress_total=300)
    return world


def parse_headcounts(raw: dict) -> dict:
    headcounts = {}
    for name, amount in raw.items():
        try:
            headcounts[Role(name)] = int(amount)
        except ValueError:
            log.warning("Unknown role in TARGET_AMOUNTS: %s. Ignoring.", name)
    return headcounts


def load_memory(path) -> MemoryStore:
    if path and os.path.exists(path):
        try:
            store = MemoryStore.load(path)
            log.info("Loaded memory for %d workers from %s", len(store), path)
            return store
        except (OSError, ValueError) as e:
            log.error("Error loading memory file: %s - starting with empty memory", e)
    return MemoryStore()


def main():
    parser = argparse.ArgumentParser(description="Run the colony demo.")
    parser.add_argument("--ticks", type=int, default=TICKS, help="ticks to simulate")
    parser.add_argument("--memory-file", default=MEMORY_FILE,
                        help="JSON file to resume/persist worker memory (empty to disable)")
    parser.add_argument("--verbose", action="store_true", help="log per-worker decisions to the console")
    args = parser.parse_args()
    if args.verbose:
        log.set_console_level(logging.DEBUG)

    log.info("=" * 50)
    log.info("%s", COLONY_NAME)
    log.info("=" * 50)

    memory_file = args.memory_file or None
    world = build_demo_world()
    bot = ColonyBot(memory=load_memory(memory_file), target_amounts=parse_headcounts(TARGET_AMOUNTS))

    log.info("Running %d ticks on a %dx%d map", args.ticks, MAP_WIDTH, MAP_HEIGHT)
    for _ in range(args.ticks):
        report = bot.on_step(world)
        if REPORT_EVERY and report.tick % REPORT_EVERY == 0:
            controller = world.room(ROOM_NAME).controller
            log.info(
                "tick %d | workers=%d acted=%d idle=%d | controller progress=%d",
                report.tick, len(world.workers), report.acted, report.idle,
                controller.progress if controller else 0,
                tick=report.tick,
            )
        world.advance()

    if memory_file:
        try:
            bot.memory.dump(Path(memory_file))
            log.info("Saved memory for %d workers to %s", len(bot.memory), memory_file)
        except OSError as e:
            log.error("Error saving memory file: %s", e)


if __name__ == "__main__":
    main()
