# Copyright 2026 The tzoracle Authors
#
# MIT License

from typing import List
from typing import Optional
from typing import Tuple

from tzoracle.converter.gregorian import format_instant
from tzoracle.converter.gregorian import from_wall_millis
from tzoracle.converter.gregorian import to_wall_millis
from tzoracle.data_types.oracle_types import AmbiguousConversion
from tzoracle.data_types.oracle_types import ConversionResult
from tzoracle.data_types.oracle_types import Gap
from tzoracle.data_types.oracle_types import LocalDateTime
from tzoracle.data_types.oracle_types import MILLIS_PER_MINUTE
from tzoracle.data_types.oracle_types import OffsetRegime
from tzoracle.data_types.oracle_types import Overlap
from tzoracle.data_types.oracle_types import Unique
from tzoracle.ruletable.ruletable import RuleTable

# Number of regimes on either side of the approximate position of a local
# reading whose offsets are tried by to_utc().
NEIGHBOR_RADIUS = 2


class ZoneConverter:
    """Convert between Instants and LocalDateTimes under the regimes of a
    RuleTable.

    to_local() is a function: every instant has exactly one local reading.
    to_utc() is not its inverse at transitions. A forward transition skips a
    range of wall-clock readings (Gap), and a backward transition repeats one
    (Overlap). Both are returned explicitly, an offset is never chosen on the
    caller's behalf. A reading which is neither raises AmbiguousConversion.
    """

    def __init__(self, rule_table: RuleTable):
        self.rule_table = rule_table

    def offset_at(self, zone_name: str, instant: int) -> int:
        """Return the total (STD + DST) offset in minutes at 'instant'."""
        return self.rule_table.regime_at(zone_name, instant).total_offset

    def to_local(self, zone_name: str, instant: int) -> LocalDateTime:
        offset = self.offset_at(zone_name, instant)
        return from_wall_millis(instant + offset * MILLIS_PER_MINUTE)

    def to_utc(self, zone_name: str, local: LocalDateTime) -> ConversionResult:
        zone = self.rule_table.zone(zone_name)
        wall = to_wall_millis(local)
        index = self.rule_table.local_regime_index(zone_name, wall)
        lo, hi = _window(index, len(zone.regimes))

        matches: List[int] = []
        for offset in _distinct_offsets(zone.regimes[lo:hi]):
            candidate = wall - offset * MILLIS_PER_MINUTE
            if candidate in matches:
                continue
            reading = self.to_local(zone_name, candidate)
            if to_wall_millis(reading) == wall:
                matches.append(candidate)
        matches.sort()

        if len(matches) == 1:
            return Unique(matches[0])
        if len(matches) == 2:
            return Overlap(earlier=matches[0], later=matches[1])
        if len(matches) > 2:
            raise AmbiguousConversion(
                zone_name,
                f'{local} matches {len(matches)} instants: '
                + ', '.join(format_instant(m) for m in matches)
            )

        gap = _find_gap(zone.regimes, lo, hi, wall)
        if gap is None:
            raise AmbiguousConversion(
                zone_name,
                f'{local} matches no instant, '
                'and is not inside a forward transition'
            )
        return gap


def _window(index: int, size: int) -> Tuple[int, int]:
    lo = max(index - NEIGHBOR_RADIUS, 0)
    hi = min(index + NEIGHBOR_RADIUS + 1, size)
    return (lo, hi)


def _distinct_offsets(regimes: Tuple[OffsetRegime, ...]) -> List[int]:
    offsets: List[int] = []
    for regime in regimes:
        if regime.total_offset not in offsets:
            offsets.append(regime.total_offset)
    return offsets


def _find_gap(
    regimes: Tuple[OffsetRegime, ...],
    lo: int,
    hi: int,
    wall: int,
) -> Optional[Gap]:
    """Find the forward transition in regimes[lo:hi] which skipped 'wall'.

    For the transition at T from offset a to offset b (b > a), the readings in
    [T + a, T + b) never occur. 'wall' read under b lands before T, and read
    under a lands after T.
    """
    for i in range(lo + 1, hi):
        before = regimes[i - 1].total_offset * MILLIS_PER_MINUTE
        after = regimes[i].total_offset * MILLIS_PER_MINUTE
        start = regimes[i].effective_from
        if after > before and start + before <= wall < start + after:
            return Gap(earlier=wall - after, later=wall - before)
    return None
