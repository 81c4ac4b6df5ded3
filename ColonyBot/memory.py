"""
WorkerMemory: the small per-worker record that survives between ticks.

This is the only thing that lets a worker "remember" what it was doing: the
decision engine itself is stateless from one tick to the next. The record is
stored under the worker's name and its serialised form is the one schema the
colony must keep readable across versions:

    needsResource            bool     phase flag: gathering vs. spending
    currentResourceTargetId  str      in-progress gather target
    currentBuildTargetId     str      in-progress construction target
    currentDepositTargetId   str      in-progress deposit / recharge target
    homeRegionId             str      region the worker was created in
    blockedCount             int      consecutive no-path moves

Absent keys mean first-tick defaults. Keys this version does not know are
carried through untouched so an older build never destroys a newer one's data.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional, Union

from ColonyBot.logger import get_logger

log = get_logger()


_FIELD_KEYS: Dict[str, str] = {
    "needs_resource":      "needsResource",
    "current_resource_id": "currentResourceTargetId",
    "current_build_id":    "currentBuildTargetId",
    "current_deposit_id":  "currentDepositTargetId",
    "home_room":           "homeRegionId",
    "blocked_count":       "blockedCount",
}


@dataclass
class WorkerMemory:
    needs_resource: Optional[bool] = None
    current_resource_id: Optional[str] = None
    current_build_id: Optional[str] = None
    current_deposit_id: Optional[str] = None
    home_room: Optional[str] = None
    blocked_count: int = 0

    # Keys written by another version of the colony code.
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        for attr, key in _FIELD_KEYS.items():
            value = getattr(self, attr)
            if attr == "blocked_count":
                if value:
                    data[key] = value
            elif value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkerMemory":
        known = set(_FIELD_KEYS.values())
        memory = cls(extra={k: v for k, v in data.items() if k not in known})
        for attr, key in _FIELD_KEYS.items():
            if key in data and data[key] is not None:
                setattr(memory, attr, data[key])
        memory.blocked_count = int(memory.blocked_count or 0)
        return memory


class MemoryStore:
    """
    Name-keyed WorkerMemory records.

    Records are created lazily on first access and removed when a worker dies
    or disappears. Persisting the store between process runs is a plain JSON
    dump; the engine never touches the file system during a tick.
    """

    def __init__(self, records: Optional[Dict[str, WorkerMemory]] = None) -> None:
        self._records: Dict[str, WorkerMemory] = dict(records or {})

    def __contains__(self, name: str) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def get(self, name: str) -> WorkerMemory:
        """Record for *name*, created with first-tick defaults if missing."""
        record = self._records.get(name)
        if record is None:
            record = self._records[name] = WorkerMemory()
        return record

    def peek(self, name: str) -> Optional[WorkerMemory]:
        return self._records.get(name)

    def delete(self, name: str) -> None:
        self._records.pop(name, None)

    def cleanup(self, live_names: Iterable[str], tick: Optional[int] = None) -> int:
        """Delete records of workers that no longer exist. Returns how many went."""
        live = set(live_names)
        stale = [name for name in self._records if name not in live]
        for name in stale:
            del self._records[name]
            log.info("Clearing non-existing worker memory: %s", name, tick=tick)
        return len(stale)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: record.to_dict() for name, record in self._records.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]]) -> "MemoryStore":
        return cls({name: WorkerMemory.from_dict(raw or {}) for name, raw in data.items()})

    def dump(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(self.to_dict(), fh, indent=2, sort_keys=True)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "MemoryStore":
        with Path(path).open(encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))
