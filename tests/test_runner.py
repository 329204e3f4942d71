# Copyright 2026 The tzoracle Authors
#
# MIT License

import copy
import unittest
from typing import Any
from typing import List
from typing import Tuple

from tzoracle.data_types.oracle_types import DIRECTION_BASE_OFFSET
from tzoracle.data_types.oracle_types import DIRECTION_INPUT
from tzoracle.data_types.oracle_types import DIRECTION_LOCAL_TO_UTC
from tzoracle.data_types.oracle_types import DIRECTION_LOOKUP
from tzoracle.data_types.oracle_types import DIRECTION_UTC_TO_LOCAL
from tzoracle.data_types.oracle_types import RunResult
from tzoracle.data_types.oracle_types import VectorsMap
from tzoracle.data_types.oracle_types import ZonesMap
from tzoracle.ruletable.ruletable import build_rule_table
from tzoracle.runner.runner import CaseRunner
from tzoracle.runner.runner import FailureCollector
from tzoracle.runner.runner import LoggingReporter
from tzoracle.runner.vectors import parse_vector
from tzoracle.zonedb.zone_regimes import ZONES_MAP
from tzoracle.zonedb.zone_vectors import VECTORS_MAP

# Two transitions half an hour apart. Local 2000-01-01 12:00 occurs three times.
SQUEEZED_ZONES_MAP: ZonesMap = {
    'Test/Squeezed': [
        {'from': '', 'offset_string': '3:00'},
        {'from': '2000-01-01 09:30', 'offset_string': '2:00'},
        {'from': '2000-01-01 10:30', 'offset_string': '1:00'},
    ],
}


class RecordingReporter:
    def __init__(self) -> None:
        self.reports: List[Tuple[bool, str]] = []

    def report(self, passed: bool, description: str) -> None:
        self.reports.append((passed, description))


class TestParseVector(unittest.TestCase):
    def test_parse_vector(self) -> None:
        vector = parse_vector(VECTORS_MAP['Asia/Kolkata'][0])
        self.assertEqual(330, vector.base_offset)
        self.assertEqual(2, vector.local.weekday)
        self.assertEqual(30, vector.utc.minute)
        self.assertEqual({}, vector.annotations)

    def test_annotations_are_accepted(self) -> None:
        vector = parse_vector({
            'local': [1950, 1, 1, 'Sun', 0, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 21, 0, 0],
            'offset': '+3',
            'annotations': {'note': 'LMT ends'},
        })
        self.assertEqual({'note': 'LMT ends'}, vector.annotations)

    def test_invalid_vectors(self) -> None:
        with self.assertRaises(ValueError):
            parse_vector({'local': [1950, 1, 1, 'Sun', 0, 0, 0]})
        with self.assertRaises(ValueError):
            parse_vector({
                'local': [1950, 1, 1, 'Sun', 0, 0],
                'utc': [1949, 12, 31, 'Sat', 21, 0, 0],
                'offset': '+3',
            })
        with self.assertRaises(ValueError):
            parse_vector({
                'local': [1950, 1, 1, 'Mon', 0, 0, 0],
                'utc': [1949, 12, 31, 'Sat', 21, 0, 0],
                'offset': '+3',
            })


class TestCaseRunner(unittest.TestCase):
    def setUp(self) -> None:
        self.rule_table = build_rule_table(ZONES_MAP)
        self.reporter = RecordingReporter()
        self.runner = CaseRunner(self.rule_table, self.reporter)

    def test_builtin_vectors_pass(self) -> None:
        result = self.runner.run(VECTORS_MAP)
        self.assertTrue(result.all_passed)
        self.assertEqual(24, result.total)
        self.assertEqual(24, result.passed)
        self.assertEqual(24, len(self.reporter.reports))
        self.assertTrue(all(passed for passed, _ in self.reporter.reports))

    def test_one_wrong_utc_field_is_one_failure(self) -> None:
        vectors = copy.deepcopy(VECTORS_MAP['Asia/Aden'])
        vectors[3]['utc'][4] = 21  # 23:00 local is 20:00 UTC
        result = self.runner.run({'Asia/Aden': vectors})

        self.assertFalse(result.all_passed)
        self.assertEqual(8, result.total)
        self.assertEqual(7, result.passed)
        self.assertEqual(1, len(result.failures))
        failure = result.failures[0]
        self.assertEqual('Asia/Aden', failure.zone_name)
        self.assertEqual(3, failure.index)
        self.assertEqual(DIRECTION_UTC_TO_LOCAL, failure.direction)
        self.assertEqual('1949-12-31(Sat)T23:00:00', failure.expected)
        self.assertEqual('1950-01-01(Sun)T00:00:00', failure.actual)

        verdicts = [passed for passed, _ in self.reporter.reports]
        self.assertEqual([True] * 3 + [False] + [True] * 4, verdicts)
        self.assertIn('Asia/Aden[3] utc→local', self.reporter.reports[3][1])

    def test_ambiguous_vector_fails_local_to_utc(self) -> None:
        result = self.runner.run({'Asia/Kolkata': [{
            'local': [1942, 5, 14, 'Thu', 23, 30, 0],
            'utc': [1942, 5, 14, 'Thu', 17, 0, 0],
            'offset': '+5:30',
        }]})
        self.assertEqual(1, len(result.failures))
        self.assertEqual(DIRECTION_LOCAL_TO_UTC, result.failures[0].direction)

    def test_invalid_vector_is_recorded(self) -> None:
        vectors = copy.deepcopy(VECTORS_MAP['Asia/Aden'])
        vectors[0]['local'][3] = 'Sun'
        result = self.runner.run({'Asia/Aden': vectors})
        self.assertEqual(8, result.total)
        self.assertEqual(1, len(result.failures))
        self.assertEqual(DIRECTION_INPUT, result.failures[0].direction)
        self.assertEqual(0, result.failures[0].index)

    def test_unknown_zone_is_recorded(self) -> None:
        vectors = copy.deepcopy(VECTORS_MAP['Asia/Aden'])
        result = self.runner.run({
            'Asia/Aden': VECTORS_MAP['Asia/Aden'],
            'Asia/Riyadh': vectors,
        })
        self.assertEqual(16, result.total)
        self.assertEqual(8, result.passed)
        self.assertEqual(8, len(result.failures))
        for failure in result.failures:
            self.assertEqual('Asia/Riyadh', failure.zone_name)
            self.assertEqual(DIRECTION_LOOKUP, failure.direction)

    def test_wrong_base_offset_is_recorded(self) -> None:
        vectors = copy.deepcopy(VECTORS_MAP['Asia/Aden'])
        vectors[5]['offset'] = '+4'
        result = self.runner.run({'Asia/Aden': vectors})
        self.assertEqual(1, len(result.failures))
        failure = result.failures[0]
        self.assertEqual(DIRECTION_BASE_OFFSET, failure.direction)
        self.assertEqual('+04:00', failure.expected)
        self.assertEqual('+03:00', failure.actual)

    def test_parallel_run_reports_same_failures(self) -> None:
        vectors_map: VectorsMap = copy.deepcopy(VECTORS_MAP)
        vectors_map['Asia/Aden'][0]['utc'][4] = 18
        vectors_map['Asia/Kolkata'][9]['utc'][5] = 0
        vectors_map['Asia/Riyadh'] = copy.deepcopy(VECTORS_MAP['Asia/Aden'])

        sequential = self.runner.run(vectors_map)
        parallel = CaseRunner(
            self.rule_table, RecordingReporter(), workers=4,
        ).run(vectors_map)

        self.assertEqual(sequential.total, parallel.total)
        self.assertEqual(sequential.passed, parallel.passed)
        self.assertEqual(set(sequential.failures), set(parallel.failures))
        self.assertEqual(10, len(parallel.failures))

    def test_logging_reporter(self) -> None:
        runner = CaseRunner(self.rule_table, LoggingReporter())
        vectors = copy.deepcopy(VECTORS_MAP['Asia/Aden'])
        vectors[0]['utc'][4] = 18
        with self.assertLogs(level='ERROR') as cm:
            result = runner.run({'Asia/Aden': vectors})
        self.assertEqual(1, len(result.failures))
        self.assertEqual(1, len(cm.output))
        self.assertIn('FAIL Asia/Aden[0]', cm.output[0])


class TestRunIsTotal(unittest.TestCase):
    """Every vector gets exactly one verdict, however it fails."""

    def setUp(self) -> None:
        zones_map: ZonesMap = dict(ZONES_MAP)
        zones_map.update(SQUEEZED_ZONES_MAP)
        self.rule_table = build_rule_table(zones_map)

    def _run(
        self, vectors_map: Any, workers: int,
    ) -> Tuple[RunResult, RecordingReporter]:
        reporter = RecordingReporter()
        runner = CaseRunner(self.rule_table, reporter, workers=workers)
        return runner.run(vectors_map), reporter

    def test_ambiguous_conversion_is_recorded(self) -> None:
        vectors_map = {
            'Test/Squeezed': [
                {
                    'local': [2000, 1, 1, 'Sat', 12, 0, 0],
                    'utc': [2000, 1, 1, 'Sat', 10, 0, 0],
                    'offset': '+1',
                },
                {
                    'local': [2000, 1, 2, 'Sun', 0, 0, 0],
                    'utc': [2000, 1, 1, 'Sat', 23, 0, 0],
                    'offset': '+1',
                },
            ],
            'Asia/Aden': VECTORS_MAP['Asia/Aden'],
        }
        for workers in (1, 4):
            with self.subTest(workers=workers):
                result, reporter = self._run(vectors_map, workers)
                self.assertEqual(10, result.total)
                self.assertEqual(9, result.passed)
                self.assertEqual(10, len(reporter.reports))
                self.assertEqual(1, len(result.failures))
                failure = result.failures[0]
                self.assertEqual('Test/Squeezed', failure.zone_name)
                self.assertEqual(0, failure.index)
                self.assertEqual(DIRECTION_LOCAL_TO_UTC, failure.direction)
                self.assertIn('matches 3 instants', failure.actual)

    def test_mistyped_vectors_are_recorded(self) -> None:
        valid: Any = {
            'local': [2000, 1, 1, 'Sat', 12, 0, 0],
            'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
            'offset': '+0',
        }
        mistyped: List[Any] = [
            {
                'local': [2000, 1, 1, 'Sat', None, 0, 0],
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': '+0',
            },
            {
                'local': '2000-01-01 12:00',
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': '+0',
            },
            {
                'local': [2000, 1, 1, 'Sat', [12], 0, 0],
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': '+0',
            },
            {
                'local': [2000, 1, 1, 6.0, 12, 0, 0],
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': '+0',
            },
            {
                'local': [2000, 1, 1, 'Sat', True, 0, 0],
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': '+0',
            },
            {
                'local': [2000, 1, 1, 'Sat', 12, 0, 0],
                'utc': [2000, 1, 1, 'Sat', 12, 0, 0],
                'offset': None,
            },
            'not a vector',
        ]
        vectors_map = {
            'Etc/UTC': [valid] + mistyped + [valid],
            'Asia/Aden': VECTORS_MAP['Asia/Aden'],
        }
        total = len(mistyped) + 2 + 8
        for workers in (1, 4):
            with self.subTest(workers=workers):
                result, reporter = self._run(vectors_map, workers)
                self.assertEqual(total, result.total)
                self.assertEqual(10, result.passed)
                self.assertEqual(total, len(reporter.reports))
                self.assertEqual(
                    list(range(1, len(mistyped) + 1)),
                    sorted(f.index for f in result.failures),
                )
                for failure in result.failures:
                    self.assertEqual('Etc/UTC', failure.zone_name)
                    self.assertEqual(DIRECTION_INPUT, failure.direction)

class TestFailureCollector(unittest.TestCase):
    def test_empty_result(self) -> None:
        result = FailureCollector().result()
        self.assertTrue(result.all_passed)
        self.assertEqual(0, result.total)


if __name__ == '__main__':
    unittest.main()
