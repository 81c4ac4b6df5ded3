"""
ColonyBot: per-tick task resumption and fallback engine for colony workers.

Public API
----------
    from ColonyBot import ColonyBot, MemoryStore, WorkerMemory
    from ColonyBot.world import GridWorld
"""

from ColonyBot.colony_bot import ColonyBot
from ColonyBot.memory import MemoryStore, WorkerMemory

__all__ = [
    "ColonyBot",
    "MemoryStore",
    "WorkerMemory",
]
