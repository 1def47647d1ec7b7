# Copyright 2025 TIER IV, INC. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""MS-DOS packed date/time codec.

The packed format has 2s resolution and can represent years 1980 to 2107:

    date bits 0-4: day of month; 5-8: month; 9-15: years since 1980
    time bits 0-4: second/2; 5-10: minute; 11-15: hour

See: http://msdn.microsoft.com/en-us/library/ms724247(v=VS.85).aspx

NOTE: no bounds validation is done in either direction. Encoding a datetime
    outside the representable range wraps each packed half modulo 2**16,
    decoding out-of-range fields carries them over like a calendar does
    (month 0 is December of the previous year, day 0 is the last day of the
    previous month). Use `is_dos_representable` to check beforehand.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Tuple

DOS_EPOCH = datetime(1980, 1, 1, tzinfo=timezone.utc)
# exclusive upper bound
DOS_END = datetime(2108, 1, 1, tzinfo=timezone.utc)

DateTimeTuple = Tuple[int, int, int, int, int, int]


def _to_utc(dt: datetime) -> datetime:
    # naive datetime is taken as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def dos_to_datetime(dos_date: int, dos_time: int) -> datetime:
    """Convert an MS-DOS date and time into a UTC datetime.

    The result never carries a sub-second component.
    """
    dos_date, dos_time = dos_date & 0xFFFF, dos_time & 0xFFFF

    year = (dos_date >> 9) + 1980
    month = (dos_date >> 5) & 0xF
    day = dos_date & 0x1F

    hour = dos_time >> 11
    minute = (dos_time >> 5) & 0x3F
    second = (dos_time & 0x1F) * 2

    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=timezone.utc) + timedelta(
        days=day - 1, hours=hour, minutes=minute, seconds=second
    )


def datetime_to_dos(dt: datetime) -> tuple[int, int]:
    """Convert a datetime into MS-DOS (date, time), normalized to UTC first.

    Odd seconds are truncated down, sub-second component is dropped.
    """
    dt = _to_utc(dt)
    dos_date = dt.day + (dt.month << 5) + ((dt.year - 1980) << 9)
    dos_time = dt.second // 2 + (dt.minute << 5) + (dt.hour << 11)
    return dos_date & 0xFFFF, dos_time & 0xFFFF


def date_time_to_dos(date_time: DateTimeTuple) -> tuple[int, int]:
    """Pack a zipfile-style (Y, M, D, h, m, s) tuple, without timezone conversion."""
    year, month, day, hour, minute, second = date_time
    dos_date = day + (month << 5) + ((year - 1980) << 9)
    dos_time = second // 2 + (minute << 5) + (hour << 11)
    return dos_date & 0xFFFF, dos_time & 0xFFFF


def dos_to_date_time(dos_date: int, dos_time: int) -> DateTimeTuple:
    """Unpack into a zipfile-style (Y, M, D, h, m, s) tuple, fields as is."""
    dos_date, dos_time = dos_date & 0xFFFF, dos_time & 0xFFFF
    return (
        (dos_date >> 9) + 1980,
        (dos_date >> 5) & 0xF,
        dos_date & 0x1F,
        dos_time >> 11,
        (dos_time >> 5) & 0x3F,
        (dos_time & 0x1F) * 2,
    )


def is_dos_representable(dt: datetime) -> bool:
    return DOS_EPOCH <= _to_utc(dt) < DOS_END
