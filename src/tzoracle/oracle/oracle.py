# Copyright 2026 The tzoracle Authors
#
# MIT License

from typing import Optional

from tzoracle.converter.converter import ZoneConverter
from tzoracle.converter.gregorian import format_instant
from tzoracle.data_types.oracle_types import AmbiguousConversion
from tzoracle.data_types.oracle_types import ConversionResult
from tzoracle.data_types.oracle_types import DIRECTION_LOCAL_TO_UTC
from tzoracle.data_types.oracle_types import DIRECTION_UTC_TO_LOCAL
from tzoracle.data_types.oracle_types import Gap
from tzoracle.data_types.oracle_types import LocalDateTime
from tzoracle.data_types.oracle_types import Mismatch
from tzoracle.data_types.oracle_types import Overlap
from tzoracle.data_types.oracle_types import Unique


class VerificationOracle:
    """Decide whether a claimed (local, utc, zone) triple is consistent.

    Both directions are checked. The utc instant must read as 'local' on the
    zone's wall clock, and 'local' must resolve to exactly that one instant.
    A Gap or Overlap is a failure, since every vector in the corpus is
    expected to be unambiguous. So is an AmbiguousConversion.
    """

    def __init__(self, converter: ZoneConverter):
        self.converter = converter

    def verify(
        self,
        zone_name: str,
        local: LocalDateTime,
        utc: int,
    ) -> Optional[Mismatch]:
        """Return None if the triple is consistent, or the Mismatch of the
        first failing direction, utc→local before local→utc. Raises
        UnknownZone.
        """
        actual_local = self.converter.to_local(zone_name, utc)
        if actual_local != local:
            return Mismatch(
                direction=DIRECTION_UTC_TO_LOCAL,
                expected=str(local),
                actual=str(actual_local),
            )

        try:
            result = self.converter.to_utc(zone_name, local)
        except AmbiguousConversion as e:
            return Mismatch(
                direction=DIRECTION_LOCAL_TO_UTC,
                expected=format_result(Unique(utc)),
                actual=e.reason,
            )
        if result != Unique(utc):
            return Mismatch(
                direction=DIRECTION_LOCAL_TO_UTC,
                expected=format_result(Unique(utc)),
                actual=format_result(result),
            )

        return None


def format_result(result: ConversionResult) -> str:
    if isinstance(result, Unique):
        return f'Unique({format_instant(result.instant)})'
    if isinstance(result, Gap):
        return (
            f'Gap({format_instant(result.earlier)}, '
            f'{format_instant(result.later)})'
        )
    if isinstance(result, Overlap):
        return (
            f'Overlap({format_instant(result.earlier)}, '
            f'{format_instant(result.later)})'
        )
    raise Exception(f'Unknown ConversionResult {result}')
