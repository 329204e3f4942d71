# Copyright 2026 The tzoracle Authors
#
# MIT License

from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Collection
from typing import Dict
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Set
from typing import Tuple
from typing import Union
from typing import cast
from typing_extensions import TypedDict

"""
Data types created or consumed by the rule table, converter, oracle and runner.
These allow type checking to be performed using mypy. Also contains global
constants used by multiple packages.
"""

# -----------------------------------------------------------------------------
# Constants used by various modules.
# -----------------------------------------------------------------------------

# Instants are milliseconds since the Unix epoch (1970-01-01 00:00:00 UTC).
EPOCH_YEAR: int = 1970

MILLIS_PER_SECOND: int = 1000
MILLIS_PER_MINUTE: int = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR: int = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY: int = 24 * MILLIS_PER_HOUR

# Sentinel effective_from of the first regime of every zone, i.e. -Infinity.
# Far below any Instant produced by a valid LocalDateTime.
MIN_INSTANT: int = -(1 << 62)

# Offsets are stored in whole minutes. Source records with seconds (e.g. LMT
# 3:00:48) are truncated to this granularity.
OFFSET_GRANULARITY_SECONDS: int = 60

# Directions of a Mismatch or VectorFailure.
DIRECTION_UTC_TO_LOCAL = 'utc→local'
DIRECTION_LOCAL_TO_UTC = 'local→utc'
DIRECTION_BASE_OFFSET = 'base-offset'
DIRECTION_INPUT = 'input'
DIRECTION_LOOKUP = 'lookup'


# -----------------------------------------------------------------------------
# Errors.
# -----------------------------------------------------------------------------

class UnknownZone(Exception):
    """Lookup of a zone identifier which is not registered in the RuleTable."""

    def __init__(self, zone_name: str):
        super().__init__(f"Unknown zone '{zone_name}'")
        self.zone_name = zone_name


class MalformedRuleTable(Exception):
    """The regimes of a zone violate the strictly increasing effective_from
    invariant, or are otherwise unusable.
    """

    def __init__(self, zone_name: str, reason: str):
        super().__init__(f"{zone_name}: {reason}")
        self.zone_name = zone_name
        self.reason = reason


class AmbiguousConversion(Exception):
    """A local reading which resolves to more than two instants, or to none
    without lying inside a forward transition. Only possible when regimes are
    closer together than their offset differences.
    """

    def __init__(self, zone_name: str, reason: str):
        super().__init__(f"{zone_name}: {reason}")
        self.zone_name = zone_name
        self.reason = reason


# -----------------------------------------------------------------------------
# Raw records consumed by the loader. The builtin zonedb and JSON files use
# the same schema.
# -----------------------------------------------------------------------------

# Represents one offset regime of a zone, for example:
#
#   {'from': '1949-12-31 21:00', 'offset_string': '3:00',
#       'dst_string': '', 'abbrev': '+03'}
#
# 'from' is a Python keyword, so the functional syntax is required.
RegimeRaw = TypedDict('RegimeRaw', {
    # UTC instant at which the regime starts, 'YYYY-MM-DD hh:mm[:ss]', or ''
    # for the first regime (-Infinity).
    'from': str,
    'offset_string': str,  # STD offset from UTC, '[-]h:mm[:ss]'
    'dst_string': str,  # DST offset from STD, 'h:mm', or '' or '-' for none
    'abbrev': str,  # abbreviation, e.g. 'LMT', 'IST', '+0630'
}, total=False)


class VectorRaw(TypedDict, total=False):
    """Represents one literal test vector, for example:

    {'local': [1949, 12, 31, 'Sat', 20, 0, 0],
        'utc': [1949, 12, 31, 'Sat', 17, 0, 0],
        'offset': '+3', 'annotations': {}}
    """
    local: List[Any]  # [year, month, day, weekday, hour, minute, second]
    utc: List[Any]  # same layout as 'local', in UTC
    offset: str  # expected base (standard) offset of the zone, '+3', '+5:30'
    annotations: Dict[str, Any]  # reserved metadata slot, ignored


# Map of zoneName -> RegimeRaw[].
ZonesMap = Dict[str, List[RegimeRaw]]

# Map of zoneName -> VectorRaw[].
VectorsMap = Dict[str, List[VectorRaw]]

# Map of {name -> Set[reason]} used by the loader to collect de-duped error
# messages or warnings.
CommentsMap = Dict[str, Collection[str]]


def add_comment(comments: CommentsMap, name: str, reason: str) -> None:
    """Add the human readable 'reason' to the 'comments' CommentsMap.
    """
    reasons = cast(Optional[Set[str]], comments.get(name))
    if not reasons:
        reasons = set()
        comments[name] = reasons
    reasons.add(reason)


# -----------------------------------------------------------------------------
# Immutable model of the rule table.
# -----------------------------------------------------------------------------

class OffsetRegime(NamedTuple):
    """A maximal interval during which a zone's offset rule is constant."""
    effective_from: int  # Instant, MIN_INSTANT for the first regime
    standard_offset: int  # minutes
    dst_offset: Optional[int]  # minutes, or None
    abbreviation: str

    @property
    def total_offset(self) -> int:
        """STD + DST offset in minutes."""
        return self.standard_offset + (self.dst_offset or 0)


class Zone(NamedTuple):
    identifier: str
    regimes: Tuple[OffsetRegime, ...]


class LocalDateTime(NamedTuple):
    """Calendar and clock fields without an offset. Create validated instances
    through gregorian.create_local_date_time().
    """
    year: int
    month: int  # 1-12
    day: int  # 1-31
    weekday: int  # ISO, Mon=1, Sun=7
    hour: int  # 0-23
    minute: int
    second: int
    millisecond: int = 0

    def __str__(self) -> str:
        return (
            f'{self.year:04}-{self.month:02}-{self.day:02}'
            f'({WEEKDAY_NAMES[self.weekday]})'
            f'T{self.hour:02}:{self.minute:02}:{self.second:02}'
            + (f'.{self.millisecond:03}' if self.millisecond else '')
        )


# ISO-8601 numbering, index 0 unused.
WEEKDAY_NAMES = ['', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


# -----------------------------------------------------------------------------
# Result types of the converter and oracle.
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Unique:
    """The local reading maps to exactly one instant."""
    instant: int


@dataclass(frozen=True)
class Gap:
    """The local reading was skipped by a forward transition. 'earlier' and
    'later' are the readings under the offsets after and before the transition.
    """
    earlier: int
    later: int


@dataclass(frozen=True)
class Overlap:
    """The local reading occurs twice, around a backward transition."""
    earlier: int
    later: int


# Gap(a, b) must not compare equal to Overlap(a, b).
ConversionResult = Union[Unique, Gap, Overlap]


class Mismatch(NamedTuple):
    """Verification failure of a (local, utc, zone) triple."""
    direction: str  # DIRECTION_UTC_TO_LOCAL or DIRECTION_LOCAL_TO_UTC
    expected: str
    actual: str

    @property
    def detail(self) -> str:
        return (
            f'{self.direction}: expected {self.expected}, '
            f'actual {self.actual}'
        )


# -----------------------------------------------------------------------------
# Data types used by the runner.
# -----------------------------------------------------------------------------

class CaseVector(NamedTuple):
    """A parsed VectorRaw."""
    local: LocalDateTime
    utc: LocalDateTime
    base_offset: int  # minutes
    annotations: Dict[str, Any]


@dataclass(frozen=True)
class VectorFailure:
    """A recorded failure of a single vector."""
    zone_name: str
    index: int
    direction: str
    expected: str
    actual: str

    @property
    def description(self) -> str:
        return (
            f'{self.zone_name}[{self.index}] {self.direction}: '
            f'expected {self.expected}, actual {self.actual}'
        )


@dataclass
class RunResult:
    """Result of CaseRunner.run()."""
    total: int = 0
    passed: int = 0
    failures: List[VectorFailure] = field(default_factory=list)

    @property
    def all_passed(self) -> bool:
        return not self.failures


class RunReport(TypedDict):
    """JSON-serializable summary of a run, written by JsonGenerator."""
    invocation: str
    zone_names: List[str]
    removed_zones: Dict[str, List[str]]
    total: int
    passed: int
    failed: int
    failures: List[Dict[str, Union[str, int]]]


def create_run_report(
    invocation: str,
    zone_names: List[str],
    removed_zones: CommentsMap,
    result: RunResult,
) -> RunReport:
    """Return an instance of RunReport from the various ingredients."""
    failures = sorted(
        result.failures, key=lambda f: (f.zone_name, f.index, f.direction))
    return {
        'invocation': invocation,
        'zone_names': sorted(zone_names),
        'removed_zones': {
            k: sorted(v) for k, v in sorted(removed_zones.items())
        },
        'total': result.total,
        'passed': result.passed,
        'failed': len(result.failures),
        'failures': [
            {
                'zone': f.zone_name,
                'index': f.index,
                'direction': f.direction,
                'expected': f.expected,
                'actual': f.actual,
            }
            for f in failures
        ],
    }
