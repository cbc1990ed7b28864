"""
Timeline reconciliation for a trip.

Merges the moments and footprints of one trip into a single list of entries
grouped by calendar day. A moment and a footprint recorded within
MATCH_WINDOW of each other are shown as one "combined" entry.

Everything here is pure: no database, no network, no clock.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

# A moment and a footprint this close in time are the same real-world event
MATCH_WINDOW_MS = 2 * 60 * 1000

# Sort key for entries whose timestamp cannot be parsed
UNPARSEABLE_SORT_KEY = float("-inf")


@dataclass(frozen=True)
class CombinedEntry:
    moment: Any
    footprint: Any
    created_at: Optional[datetime]
    kind: Literal["combined"] = "combined"
    sort_key: float = field(default=UNPARSEABLE_SORT_KEY, repr=False)


@dataclass(frozen=True)
class MomentEntry:
    moment: Any
    created_at: Optional[datetime]
    kind: Literal["moment"] = "moment"
    sort_key: float = field(default=UNPARSEABLE_SORT_KEY, repr=False)


@dataclass(frozen=True)
class FootprintEntry:
    footprint: Any
    created_at: Optional[datetime]
    kind: Literal["footprint"] = "footprint"
    sort_key: float = field(default=UNPARSEABLE_SORT_KEY, repr=False)


TimelineEntry = Union[CombinedEntry, MomentEntry, FootprintEntry]

# None collects the entries whose timestamp could not be parsed
DayKey = Optional[date]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Read a created_at value as an aware datetime.

    Accepts datetimes (naive ones are taken as UTC, which is how SQLite hands
    them back) and ISO-8601 strings, with or without a trailing 'Z'.
    Returns None for anything else instead of raising.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _epoch_ms(dt: Optional[datetime]) -> float:
    if dt is None:
        return UNPARSEABLE_SORT_KEY
    return dt.timestamp() * 1000


def _find_best_footprint(
    moment_ms: float,
    candidates: List[Any],
    candidate_ms: Dict[int, float],
    used: set,
) -> Optional[Any]:
    """
    Closest unused footprint within the match window, or None.

    Candidates come newest-to-oldest and only a strictly smaller delta
    replaces the current best, so on equal deltas the first one scanned wins.
    """
    best = None
    best_delta = float("inf")
    for fp in candidates:
        if fp.id in used:
            continue
        fp_ms = candidate_ms[id(fp)]
        if fp_ms == UNPARSEABLE_SORT_KEY:
            continue
        delta = abs(fp_ms - moment_ms)
        if delta <= MATCH_WINDOW_MS and delta < best_delta:
            best = fp
            best_delta = delta
    return best


def match_entries(moments: Iterable[Any], footprints: Iterable[Any]) -> List[TimelineEntry]:
    """
    Pair moments with footprints and return the unordered entries.

    Greedy per moment, in the order the moments are given: this is not a
    globally optimal assignment and two inputs that differ only in moment
    order can pair differently. Each footprint is used at most once.
    Unmatched footprints follow, newest first.
    """
    footprints = list(footprints)
    footprint_times = {id(fp): parse_timestamp(fp.created_at) for fp in footprints}
    footprint_ms = {key: _epoch_ms(dt) for key, dt in footprint_times.items()}

    # sorted() is stable, so footprints with equal timestamps keep input order
    newest_first = sorted(footprints, key=lambda fp: footprint_ms[id(fp)], reverse=True)
    used = set()
    entries: List[TimelineEntry] = []

    for moment in moments:
        moment_dt = parse_timestamp(moment.created_at)
        moment_ms = _epoch_ms(moment_dt)

        best = None
        if moment_dt is not None:
            best = _find_best_footprint(moment_ms, newest_first, footprint_ms, used)

        if best is not None:
            used.add(best.id)
            entries.append(CombinedEntry(moment=moment, footprint=best, created_at=moment_dt, sort_key=moment_ms))
        else:
            entries.append(MomentEntry(moment=moment, created_at=moment_dt, sort_key=moment_ms))

    for fp in newest_first:
        if fp.id in used:
            continue
        entries.append(FootprintEntry(footprint=fp, created_at=footprint_times[id(fp)], sort_key=footprint_ms[id(fp)]))

    return entries


def day_key(entry: TimelineEntry, tz: tzinfo) -> DayKey:
    """Calendar day of the entry's timestamp as seen on a wall clock in `tz`."""
    if entry.created_at is None:
        return None
    return entry.created_at.astimezone(tz).date()


def reconcile(
    moments: Iterable[Any],
    footprints: Iterable[Any],
    is_ended: bool,
    tz: tzinfo = timezone.utc,
) -> Dict[DayKey, List[TimelineEntry]]:
    """
    Build the grouped, ordered timeline of a trip.

    Ended trips read as a story (oldest day and oldest entry first); active
    trips read as news (newest first on both levels). The active order is
    the exact reverse of the ended one.

    Entries with an unparseable timestamp are kept under the None day, which
    sorts as the oldest day.
    """
    entries = match_entries(moments, footprints)

    # Emission sequence breaks ties so that flipping is_ended is an exact reversal
    ascending = [
        entry for _, entry in sorted(
            enumerate(entries),
            key=lambda pair: (pair[1].sort_key, pair[0]),
        )
    ]

    groups: Dict[DayKey, List[TimelineEntry]] = {}
    for entry in ascending:
        groups.setdefault(day_key(entry, tz), []).append(entry)

    if is_ended:
        return groups

    return {key: list(reversed(items)) for key, items in reversed(list(groups.items()))}


def flatten(groups: Dict[DayKey, List[TimelineEntry]]) -> List[TimelineEntry]:
    """All entries of a grouped timeline, in display order."""
    return [entry for items in groups.values() for entry in items]
