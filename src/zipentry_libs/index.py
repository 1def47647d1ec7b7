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
"""In-memory index of the entry headers of one archive."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from zipentry_libs.common.msgpack_utils import pack_obj, unpack_dict
from zipentry_libs.header import EntryHeader

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class EntryIndex:
    """Entry headers of an archive keyed by entry name, in insertion order.

    This class is NOT thread-safe for mutation, build it in one thread and
        share it read-only afterward.
    """

    def __init__(self, headers: Iterable[EntryHeader] = ()) -> None:
        self._entries: dict[str, EntryHeader] = {}
        for _header in headers:
            self.add(_header)

    def add(self, header: EntryHeader) -> None:
        if header.name in self._entries:
            logger.warning(f"duplicated entry {header.name!r}, override previous one")
        self._entries[header.name] = header

    def get(self, name: str) -> EntryHeader | None:
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EntryHeader]:
        return iter(self._entries.values())

    def sorted_names(self) -> list[str]:
        return sorted(self._entries)

    def large_entries(self) -> list[EntryHeader]:
        """Entries that need the zip64 extra field."""
        return [_header for _header in self if _header.is_zip64]

    def total_uncompressed_size(self) -> int:
        return sum(_header.uncompressed_size64 for _header in self)

    # ------ snapshot ------ #

    def export_snapshot(self) -> bytes:
        """Serialize the index with msgpack, password callbacks are not included."""
        return pack_obj(
            {
                "snapshot_version": SNAPSHOT_VERSION,
                "entries": [_header.model_dump() for _header in self],
            }
        )

    @classmethod
    def load_snapshot(cls, _in: bytes) -> EntryIndex:
        _raw = unpack_dict(_in)
        if (_version := _raw.get("snapshot_version")) != SNAPSHOT_VERSION:
            raise ValueError(
                f"unsupported snapshot version: {_version}, expect {SNAPSHOT_VERSION}"
            )

        try:
            return cls(EntryHeader.model_validate(_entry) for _entry in _raw["entries"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"invalid snapshot: {e!r}") from e
