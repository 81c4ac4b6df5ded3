"""
ColonyBot.world: the world collaborator boundary and a reference grid world.

Public API
----------
    from ColonyBot.world import WorldView, VisualHint, Room
    from ColonyBot.world import GridWorld
    from ColonyBot.world.objects import Worker, Source, Structure, ...
"""

from ColonyBot.world.interface import Room, VisualHint, WorldView
from ColonyBot.world.grid_world import GridWorld

__all__ = [
    "Room",
    "VisualHint",
    "WorldView",
    "GridWorld",
]
