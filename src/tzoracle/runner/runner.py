# Copyright 2026 The tzoracle Authors
#
# MIT License

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List
from typing import Optional
from typing_extensions import Protocol

from tzoracle.converter.converter import ZoneConverter
from tzoracle.converter.gregorian import format_instant
from tzoracle.converter.gregorian import minutes_to_offset_string
from tzoracle.converter.gregorian import to_wall_millis
from tzoracle.data_types.oracle_types import DIRECTION_BASE_OFFSET
from tzoracle.data_types.oracle_types import DIRECTION_INPUT
from tzoracle.data_types.oracle_types import DIRECTION_LOOKUP
from tzoracle.data_types.oracle_types import RunResult
from tzoracle.data_types.oracle_types import UnknownZone
from tzoracle.data_types.oracle_types import VectorFailure
from tzoracle.data_types.oracle_types import VectorRaw
from tzoracle.data_types.oracle_types import VectorsMap
from tzoracle.oracle.oracle import VerificationOracle
from tzoracle.ruletable.ruletable import RuleTable
from tzoracle.runner.vectors import parse_vector


class Reporter(Protocol):
    """Define the interface of the assertion layer that receives the verdict
    of every vector.
    """
    def report(self, passed: bool, description: str) -> None:
        ...


class LoggingReporter:
    """Reporter which writes each verdict to the log."""

    def report(self, passed: bool, description: str) -> None:
        if passed:
            logging.debug('PASS %s', description)
        else:
            logging.error('FAIL %s', description)


class FailureCollector:
    """Append-only, thread-safe accumulator of verdicts."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total = 0
        self._passed = 0
        self._failures: List[VectorFailure] = []

    def add_pass(self) -> None:
        with self._lock:
            self._total += 1
            self._passed += 1

    def add_failure(self, failure: VectorFailure) -> None:
        with self._lock:
            self._total += 1
            self._failures.append(failure)

    def result(self) -> RunResult:
        with self._lock:
            return RunResult(
                total=self._total,
                passed=self._passed,
                failures=list(self._failures),
            )


class CaseRunner:
    """Drive the literal test vectors of each zone through the
    VerificationOracle.

    Every vector gets a verdict. Invalid vectors, unknown zones and mismatches
    are recorded as VectorFailures and the run continues. With workers > 1,
    zones are verified in parallel, and the order of the recorded failures is
    unspecified.
    """

    def __init__(
        self,
        rule_table: RuleTable,
        reporter: Reporter,
        workers: int = 1,
    ):
        """
        Args:
            rule_table: the immutable RuleTable, shared by all workers
            reporter: receives report(passed, description) for each vector
            workers: number of threads, 1 means sequential
        """
        self.rule_table = rule_table
        self.reporter = reporter
        self.workers = workers
        self.converter = ZoneConverter(rule_table)
        self.oracle = VerificationOracle(self.converter)

    def run(self, vectors_map: VectorsMap) -> RunResult:
        logging.info(
            'Verifying %d zones with %d worker(s)',
            len(vectors_map), self.workers)
        collector = FailureCollector()
        zone_names = sorted(vectors_map.keys())
        if self.workers <= 1:
            for zone_name in zone_names:
                self.run_zone(zone_name, vectors_map[zone_name], collector)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                futures = [
                    executor.submit(
                        self.run_zone,
                        zone_name,
                        vectors_map[zone_name],
                        collector,
                    )
                    for zone_name in zone_names
                ]
                for future in futures:
                    future.result()
        return collector.result()

    def run_zone(
        self,
        zone_name: str,
        vectors: List[VectorRaw],
        collector: FailureCollector,
    ) -> None:
        for index, raw in enumerate(vectors):
            failure = self._verify_vector(zone_name, index, raw)
            if failure is None:
                collector.add_pass()
                self.reporter.report(True, f'{zone_name}[{index}]')
            else:
                collector.add_failure(failure)
                self.reporter.report(False, failure.description)

    def _verify_vector(
        self,
        zone_name: str,
        index: int,
        raw: VectorRaw,
    ) -> Optional[VectorFailure]:
        try:
            vector = parse_vector(raw)
        except ValueError as e:
            return VectorFailure(
                zone_name=zone_name,
                index=index,
                direction=DIRECTION_INPUT,
                expected='valid vector',
                actual=str(e),
            )

        try:
            zone = self.rule_table.zone(zone_name)
            utc = to_wall_millis(vector.utc)
            mismatch = self.oracle.verify(zone_name, vector.local, utc)
        except UnknownZone as e:
            return VectorFailure(
                zone_name=zone_name,
                index=index,
                direction=DIRECTION_LOOKUP,
                expected='registered zone',
                actual=str(e),
            )

        if mismatch is not None:
            return VectorFailure(
                zone_name=zone_name,
                index=index,
                direction=mismatch.direction,
                expected=mismatch.expected,
                actual=mismatch.actual,
            )

        # The expected base offset is the zone's current standard offset,
        # not the offset of the regime active at 'utc'.
        current_offset = zone.regimes[-1].standard_offset
        if vector.base_offset != current_offset:
            return VectorFailure(
                zone_name=zone_name,
                index=index,
                direction=DIRECTION_BASE_OFFSET,
                expected=minutes_to_offset_string(vector.base_offset),
                actual=minutes_to_offset_string(current_offset),
            )

        logging.debug(
            '%s[%d] %s == %s',
            zone_name, index, vector.local, format_instant(utc))
        return None

    def print_summary(self, result: RunResult) -> None:
        logging.info(
            'Vectors: %d; Passed: %d; Failed: %d',
            result.total, result.passed, len(result.failures))
        for failure in sorted(
            result.failures, key=lambda f: (f.zone_name, f.index)
        ):
            logging.info(f'- {failure.description}')
