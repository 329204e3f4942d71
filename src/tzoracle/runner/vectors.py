# Copyright 2026 The tzoracle Authors
#
# MIT License

from typing import Any
from typing import List

from tzoracle.converter.gregorian import create_local_date_time
from tzoracle.converter.gregorian import offset_string_to_minutes
from tzoracle.data_types.oracle_types import CaseVector
from tzoracle.data_types.oracle_types import LocalDateTime
from tzoracle.data_types.oracle_types import VectorRaw

# Names of the fields of 'local' and 'utc', for error messages.
FIELD_NAMES = [
    'year', 'month', 'day', 'weekday', 'hour', 'minute', 'second',
    'millisecond',
]


def parse_vector(raw: VectorRaw) -> CaseVector:
    """Convert a VectorRaw into a CaseVector. Raises ValueError if a field is
    missing, of the wrong type, or invalid, including a weekday which does not
    match its date. The 'annotations' slot is accepted as is.
    """
    if not isinstance(raw, dict):
        raise ValueError(f'Expected a vector object, found {raw!r}')
    try:
        local_fields = raw['local']
        utc_fields = raw['utc']
        offset_string = raw['offset']
    except KeyError as e:
        raise ValueError(f'Missing field {e}')

    if not isinstance(offset_string, str):
        raise ValueError(f'Invalid offset {offset_string!r}')

    annotations = raw.get('annotations') or {}
    if not isinstance(annotations, dict):
        raise ValueError(f'Invalid annotations {annotations!r}')

    return CaseVector(
        local=parse_fields(local_fields),
        utc=parse_fields(utc_fields),
        base_offset=offset_string_to_minutes(offset_string),
        annotations=annotations,
    )


def parse_fields(fields: List[Any]) -> LocalDateTime:
    """Convert [year, month, day, weekday, hour, minute, second] into a
    LocalDateTime. An optional 8th element holds the milliseconds. The weekday
    is a name or an ISO number, every other field an int.
    """
    if not isinstance(fields, list):
        raise ValueError(f'Expected a list of fields, found {fields!r}')
    if len(fields) not in (7, 8):
        raise ValueError(f'Expected 7 or 8 fields, found {len(fields)}')

    for name, value in zip(FIELD_NAMES, fields):
        # bool is a subclass of int, but True is not a valid year.
        if isinstance(value, bool):
            raise ValueError(f'Invalid {name} {value!r}')
        if name == 'weekday' and isinstance(value, str):
            continue
        if not isinstance(value, int):
            raise ValueError(f'Invalid {name} {value!r}')

    year, month, day, weekday, hour, minute, second = fields[:7]
    millisecond = fields[7] if len(fields) == 8 else 0
    return create_local_date_time(
        year=year,
        month=month,
        day=day,
        weekday=weekday,
        hour=hour,
        minute=minute,
        second=second,
        millisecond=millisecond,
    )
