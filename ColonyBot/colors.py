"""
Path-visualisation colours.

Each role has a base palette colour; each job shifts it lighter or darker so
a glance at the drawn paths shows what every worker is walking off to do.
"""

from __future__ import annotations

from ColonyBot.constants import Job

_JOB_SHIFT = {
    Job.HARVEST:  40,
    Job.RECHARGE: -20,
    Job.BUILD:    10,
    Job.UPGRADE:  0,
}


def modify_color(color: str, percent: float) -> str:
    """
    Lighten (positive *percent*) or darken (negative) a '#rrggbb' colour.

    Each channel moves by the same absolute amount and is clamped to 0..255.
    """
    value = int(color.lstrip("#"), 16)
    amount = round(2.55 * percent)
    channels = [
        min(0xFF, max(0, ((value >> shift) & 0xFF) + amount))
        for shift in (16, 8, 0)
    ]
    return "#" + "".join(f"{c:02x}" for c in channels)


def color_for_action(base_color: str, job: Job) -> str:
    shift = _JOB_SHIFT.get(job)
    if shift is None:
        return base_color
    return modify_color(base_color, shift)
