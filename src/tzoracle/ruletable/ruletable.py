# Copyright 2026 The tzoracle Authors
#
# MIT License

import bisect
import logging
from typing import Dict
from typing import Iterable
from typing import List
from typing import Mapping
from typing import Tuple

from tzoracle.converter.gregorian import offset_string_to_minutes
from tzoracle.converter.gregorian import parse_instant_string
from tzoracle.data_types.oracle_types import CommentsMap
from tzoracle.data_types.oracle_types import MIN_INSTANT
from tzoracle.data_types.oracle_types import MILLIS_PER_MINUTE
from tzoracle.data_types.oracle_types import MalformedRuleTable
from tzoracle.data_types.oracle_types import OffsetRegime
from tzoracle.data_types.oracle_types import RegimeRaw
from tzoracle.data_types.oracle_types import UnknownZone
from tzoracle.data_types.oracle_types import Zone
from tzoracle.data_types.oracle_types import ZonesMap
from tzoracle.data_types.oracle_types import add_comment


class RuleTable:
    """Immutable collection of Zones, keyed by identifier. Answers which
    OffsetRegime is active at a given Instant.

    The per-zone effective_from values are cached in a separate sorted list so
    that regime_at() is a single bisect.
    """

    def __init__(self, zones: Iterable[Zone]):
        """
        Args:
            zones: validated Zones, see validate_zone()
        Raises:
            MalformedRuleTable: if any zone is invalid, or duplicated
        """
        self._zones: Dict[str, Zone] = {}
        self._starts: Dict[str, List[int]] = {}
        self._local_starts: Dict[str, List[int]] = {}
        for zone in zones:
            validate_zone(zone)
            if zone.identifier in self._zones:
                raise MalformedRuleTable(zone.identifier, 'Duplicate zone')
            self._zones[zone.identifier] = zone
            self._starts[zone.identifier] = [
                r.effective_from for r in zone.regimes
            ]
            self._local_starts[zone.identifier] = _local_starts(zone.regimes)

    def __contains__(self, zone_name: object) -> bool:
        return zone_name in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def zone_names(self) -> List[str]:
        return sorted(self._zones.keys())

    def zone(self, zone_name: str) -> Zone:
        zone = self._zones.get(zone_name)
        if zone is None:
            raise UnknownZone(zone_name)
        return zone

    def regime_index_at(self, zone_name: str, instant: int) -> int:
        """Return the index of the last regime with effective_from <= instant.
        Instants before the first transition map to the first regime.
        """
        starts = self._starts.get(zone_name)
        if starts is None:
            raise UnknownZone(zone_name)
        return max(bisect.bisect_right(starts, instant) - 1, 0)

    def regime_at(self, zone_name: str, instant: int) -> OffsetRegime:
        index = self.regime_index_at(zone_name, instant)
        return self._zones[zone_name].regimes[index]

    def local_regime_index(self, zone_name: str, wall_millis: int) -> int:
        """Return the index of the last regime whose start, read on its own
        wall clock, is <= wall_millis. This is only the approximate position
        of a local reading in regime order; near a transition the reading may
        belong to a neighbor.
        """
        starts = self._local_starts.get(zone_name)
        if starts is None:
            raise UnknownZone(zone_name)
        return max(bisect.bisect_right(starts, wall_millis) - 1, 0)


def validate_zone(zone: Zone) -> None:
    """Verify the invariants of a Zone. Raises MalformedRuleTable.
    """
    if not zone.regimes:
        raise MalformedRuleTable(zone.identifier, 'No regimes')
    if zone.regimes[0].effective_from != MIN_INSTANT:
        raise MalformedRuleTable(
            zone.identifier, 'First regime must start at -Infinity')

    prev = zone.regimes[0]
    for regime in zone.regimes[1:]:
        if regime.effective_from <= prev.effective_from:
            raise MalformedRuleTable(
                zone.identifier,
                f'Non-monotonic effective_from {regime.effective_from} '
                f'after {prev.effective_from}'
            )
        prev = regime


class RuleTableLoader:
    """Convert the raw regime records of a ZonesMap into a RuleTable.

    In strict mode, the first invalid zone aborts the load and no RuleTable is
    created. Otherwise, invalid zones are dropped and the reasons are
    collected in 'removed_zones'.
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self.removed_zones: CommentsMap = {}

    def load(self, zones_map: ZonesMap) -> RuleTable:
        logging.info('Found %d zones', len(zones_map))
        zones: List[Zone] = []
        for zone_name, records in sorted(zones_map.items()):
            try:
                zones.append(create_zone(zone_name, records))
            except MalformedRuleTable as e:
                if self.strict:
                    raise
                add_comment(self.removed_zones, zone_name, e.reason)
        self.rule_table = RuleTable(zones)
        return self.rule_table

    def print_summary(self) -> None:
        logging.info(
            'Zones: %d; Removed: %d',
            len(self.rule_table), len(self.removed_zones))
        for name, reasons in sorted(self.removed_zones.items()):
            logging.info(f'- {name} ({", ".join(sorted(reasons))})')


def create_zone(zone_name: str, records: List[RegimeRaw]) -> Zone:
    """Parse the raw records of a single zone into a validated Zone.
    Raises MalformedRuleTable.
    """
    regimes: List[OffsetRegime] = []
    for index, record in enumerate(records):
        try:
            regimes.append(_create_regime(index, record))
        except (KeyError, ValueError) as e:
            raise MalformedRuleTable(
                zone_name, f'Invalid regime [{index}]: {e}')
    zone = Zone(identifier=zone_name, regimes=tuple(regimes))
    validate_zone(zone)
    return zone


def _create_regime(index: int, record: RegimeRaw) -> OffsetRegime:
    from_string = record.get('from', '')
    if index == 0:
        if from_string:
            raise ValueError("First regime must have an empty 'from'")
        effective_from = MIN_INSTANT
    else:
        if not from_string:
            raise ValueError("Missing 'from'")
        effective_from = parse_instant_string(from_string)

    standard_offset = offset_string_to_minutes(record['offset_string'])
    dst_string = record.get('dst_string', '')
    if dst_string in ('', '-'):
        dst_offset = None
    else:
        dst_offset = offset_string_to_minutes(dst_string)

    return OffsetRegime(
        effective_from=effective_from,
        standard_offset=standard_offset,
        dst_offset=dst_offset,
        abbreviation=record.get('abbrev', ''),
    )


def _local_starts(regimes: Tuple[OffsetRegime, ...]) -> List[int]:
    return [
        r.effective_from + r.total_offset * MILLIS_PER_MINUTE
        if r.effective_from != MIN_INSTANT else MIN_INSTANT
        for r in regimes
    ]


def build_rule_table(zones_map: Mapping[str, List[RegimeRaw]]) -> RuleTable:
    """Strict one-shot load of a ZonesMap."""
    return RuleTableLoader(strict=True).load(dict(zones_map))
