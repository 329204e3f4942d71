# Copyright 2026 The tzoracle Authors
#
# MIT License

"""
Builtin test vectors, four readings on each side of a transition, one hour
apart. Fields are [year, month, day, weekday, hour, minute, second]. 'offset'
is the current standard offset of the zone.
"""

from tzoracle.data_types.oracle_types import VectorsMap

VECTORS_MAP: VectorsMap = {
    # Asia/Aden had local mean time (LMT) until 31. Dec. 1949.
    'Asia/Aden': [
        {
            'local': [1949, 12, 31, 'Sat', 20, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 17, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1949, 12, 31, 'Sat', 21, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 18, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1949, 12, 31, 'Sat', 22, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 19, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1949, 12, 31, 'Sat', 23, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 20, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1950, 1, 1, 'Sun', 0, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 21, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1950, 1, 1, 'Sun', 1, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 22, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1950, 1, 1, 'Sun', 2, 0, 0],
            'utc': [1949, 12, 31, 'Sat', 23, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
        {
            'local': [1950, 1, 1, 'Sun', 3, 0, 0],
            'utc': [1950, 1, 1, 'Sun', 0, 0, 0],
            'offset': '+3',
            'annotations': {},
        },
    ],

    # Asia/Kolkata switched to +0630 war time on 1. Oct. 1941, skipping the
    # hour after midnight, and back to IST on 15. May 1942, repeating the
    # hour before midnight.
    'Asia/Kolkata': [
        {
            'local': [1941, 9, 30, 'Tue', 20, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 14, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 9, 30, 'Tue', 21, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 15, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 9, 30, 'Tue', 22, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 16, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 9, 30, 'Tue', 23, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 17, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 10, 1, 'Wed', 1, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 18, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 10, 1, 'Wed', 2, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 19, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 10, 1, 'Wed', 3, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 20, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1941, 10, 1, 'Wed', 4, 0, 0],
            'utc': [1941, 9, 30, 'Tue', 21, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 14, 'Thu', 19, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 12, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 14, 'Thu', 20, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 13, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 14, 'Thu', 21, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 14, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 14, 'Thu', 22, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 15, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 15, 'Fri', 0, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 18, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 15, 'Fri', 1, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 19, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 15, 'Fri', 2, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 20, 30, 0],
            'offset': '+5:30',
        },
        {
            'local': [1942, 5, 15, 'Fri', 3, 0, 0],
            'utc': [1942, 5, 14, 'Thu', 21, 30, 0],
            'offset': '+5:30',
        },
    ],
}
