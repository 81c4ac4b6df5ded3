# ===== COLONY SETTINGS =====
# Name shown in the log banner
COLONY_NAME = "Colony Demo"

# ===== WORLD SETTINGS =====
# Size of the demo grid world built by run.py
MAP_WIDTH = 30
MAP_HEIGHT = 20

# Name of the single demo region
ROOM_NAME = "W1N1"

# Tick the demo clock starts at (worker names embed the spawn tick)
START_TICK = 1000

# ===== RUN SETTINGS =====
# How many ticks run.py simulates before stopping
TICKS = 600

# Print a one-line colony summary every this many ticks
REPORT_EVERY = 50

# ===== ROLE HEADCOUNTS =====
# Overrides for ColonyBot.constants.ROLE_INFO target amounts.
# Use the role names exactly: "Gatherer", "Builder", "Upgrader".
# Set to {} to keep the built-in headcounts.
TARGET_AMOUNTS = {
    "Gatherer": 3,
    "Builder": 1,
    "Upgrader": 1,
}

# ===== MEMORY PERSISTENCE =====
# When set, worker memory is loaded from this JSON file before the run (if it
# exists) and written back afterwards, so a second run resumes where the first
# left off. Set to None to keep memory in-process only.
MEMORY_FILE = "memory.json"
