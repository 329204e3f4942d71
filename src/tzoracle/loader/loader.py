# Copyright 2026 The tzoracle Authors
#
# MIT License

"""
Read the regime tables, test vectors, and include lists from files. The JSON
files hold the same {zoneName -> records[]} maps as the builtin zonedb.
"""

import json
import logging
from typing import Any
from typing import Dict
from typing import Set
from typing import cast

from tzoracle.data_types.oracle_types import VectorsMap
from tzoracle.data_types.oracle_types import ZonesMap


def load_zones_file(filename: str) -> ZonesMap:
    """Read a JSON file of {zoneName -> RegimeRaw[]}."""
    zones_map = cast(ZonesMap, _read_json_map(filename))
    logging.info('Read %d zones from %s', len(zones_map), filename)
    return zones_map


def load_vectors_file(filename: str) -> VectorsMap:
    """Read a JSON file of {zoneName -> VectorRaw[]}."""
    vectors_map = cast(VectorsMap, _read_json_map(filename))
    logging.info('Read vectors of %d zones from %s', len(vectors_map), filename)
    return vectors_map


def _read_json_map(filename: str) -> Dict[str, Any]:
    with open(filename, encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f'{filename}: expected a JSON object of zones')
    for name, records in data.items():
        if not isinstance(records, list):
            raise ValueError(f'{filename}: {name}: expected a list of records')
    return data


def read_include_list(filename: str) -> Set[str]:
    """Read the zones to verify, one per line. Text after a '#' is ignored.
    An empty filename means 'verify everything'.
    """
    zones: Set[str] = set()
    if not filename:
        return zones

    with open(filename, encoding='utf-8') as f:
        for line in f:
            name = line.split('#', 1)[0].strip()
            if name:
                zones.add(name)
    logging.info('Read %d zones from %s', len(zones), filename)
    return zones


def filter_include_vectors(
    vectors_map: VectorsMap,
    include_list: Set[str],
) -> VectorsMap:
    """Keep only the zones in 'include_list', if it is not empty."""
    if not include_list:
        return vectors_map
    return {
        name: vectors
        for name, vectors in vectors_map.items()
        if name in include_list
    }
