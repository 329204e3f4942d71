# Copyright 2026 The tzoracle Authors
#
# MIT License

"""
Builtin regime tables. Each 'from' is the UTC instant of the transition,
derived from the local UNTIL time of the previous era in the TZ database. LMT
offsets keep their seconds here, the loader truncates them to whole minutes.
"""

from tzoracle.data_types.oracle_types import ZonesMap

ZONES_MAP: ZonesMap = {
    # Zone Asia/Aden   3:00:48 -   LMT  1950
    #                  3:00    -   +03
    'Asia/Aden': [
        {'from': '', 'offset_string': '3:00:48', 'abbrev': 'LMT'},
        {
            'from': '1949-12-31 20:59:12',
            'offset_string': '3:00',
            'abbrev': '+03',
        },
    ],

    # Zone Asia/Kolkata 5:53:28 -    LMT    1854 Jun 28
    #                   5:53:20 -    HMT    1870
    #                   5:21:10 -    MMT    1906 Jan 1
    #                   5:30    -    IST    1941 Oct
    #                   5:30    1:00 +0630  1942 May 15
    #                   5:30    -    IST    1942 Sep
    #                   5:30    1:00 +0630  1945 Oct 15
    #                   5:30    -    IST
    'Asia/Kolkata': [
        {'from': '', 'offset_string': '5:53:28', 'abbrev': 'LMT'},
        {
            'from': '1854-06-27 18:06:32',
            'offset_string': '5:53:20',
            'abbrev': 'HMT',
        },
        {
            'from': '1869-12-31 18:06:40',
            'offset_string': '5:21:10',
            'abbrev': 'MMT',
        },
        {
            'from': '1905-12-31 18:38:50',
            'offset_string': '5:30',
            'abbrev': 'IST',
        },
        {
            'from': '1941-09-30 18:30',
            'offset_string': '5:30',
            'dst_string': '1:00',
            'abbrev': '+0630',
        },
        {
            'from': '1942-05-14 17:30',
            'offset_string': '5:30',
            'abbrev': 'IST',
        },
        {
            'from': '1942-08-31 18:30',
            'offset_string': '5:30',
            'dst_string': '1:00',
            'abbrev': '+0630',
        },
        {
            'from': '1945-10-14 17:30',
            'offset_string': '5:30',
            'abbrev': 'IST',
        },
    ],

    'Etc/UTC': [
        {'from': '', 'offset_string': '0:00', 'abbrev': 'UTC'},
    ],
}
