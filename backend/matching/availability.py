"""
Weekly availability grid codec.

Profiles store availability as a JSON list of slot ids such as
``"Mon-9:00 AM"``. Older profiles stored a list of ``{day, time, available}``
objects, and some hold free text; both are read, only the compact form is
written.
"""
from __future__ import annotations

from typing import Iterable, List, Set
import json

DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
TIME_SLOTS = (
    "9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
    "1:00 PM", "2:00 PM", "3:00 PM", "4:00 PM", "5:00 PM",
)


def slot_id(day: str, time: str) -> str:
    return f"{day}-{time}"


ALL_SLOTS = tuple(slot_id(d, t) for d in DAYS for t in TIME_SLOTS)
_ORDER = {s: i for i, s in enumerate(ALL_SLOTS)}


def parse_availability(value: str | None) -> Set[str]:
    if not value:
        return set()
    try:
        parsed = json.loads(value)
    except ValueError:
        return set()  # free-text description
    if not isinstance(parsed, list):
        return set()
    slots: Set[str] = set()
    for item in parsed:
        if isinstance(item, str):
            sid = item
        elif isinstance(item, dict):
            if item.get("available") is False:
                continue
            sid = slot_id(str(item.get("day", "")), str(item.get("time", "")))
        else:
            continue
        if sid in _ORDER:
            slots.add(sid)
    return slots


def serialize_availability(slots: Iterable[str]) -> str:
    known = [s for s in set(slots) if s in _ORDER]
    return json.dumps(sorted(known, key=_ORDER.__getitem__))


def toggle_slot(slots: Set[str], day: str, time: str) -> Set[str]:
    sid = slot_id(day, time)
    if sid not in _ORDER:
        raise ValueError("invalid_slot")
    out = set(slots)
    if sid in out:
        out.remove(sid)
    else:
        out.add(sid)
    return out


def select_range(slots: Set[str], start: str, end: str, *, select: bool = True) -> Set[str]:
    """Apply a drag gesture: every slot in the rectangle spanned by two slot ids."""
    if start not in _ORDER or end not in _ORDER:
        raise ValueError("invalid_slot")
    d0, t0 = divmod(_ORDER[start], len(TIME_SLOTS))
    d1, t1 = divmod(_ORDER[end], len(TIME_SLOTS))
    out = set(slots)
    for d in range(min(d0, d1), max(d0, d1) + 1):
        for t in range(min(t0, t1), max(t0, t1) + 1):
            sid = slot_id(DAYS[d], TIME_SLOTS[t])
            if select:
                out.add(sid)
            else:
                out.discard(sid)
    return out


def describe_availability(slots: Iterable[str]) -> List[str]:
    chosen = set(slots)
    lines: List[str] = []
    for day in DAYS:
        times = [t for t in TIME_SLOTS if slot_id(day, t) in chosen]
        if times:
            lines.append(f"{day}: {', '.join(times)}")
    return lines


__all__ = [
    "ALL_SLOTS",
    "DAYS",
    "TIME_SLOTS",
    "describe_availability",
    "parse_availability",
    "select_range",
    "serialize_availability",
    "slot_id",
    "toggle_slot",
]
