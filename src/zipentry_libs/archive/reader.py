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
"""Read entry headers from a ZIP archive without extracting it."""

from __future__ import annotations

import logging
from typing import Generator, Union
from zipfile import ZipFile

from zipentry_libs.common.model_spec import StrOrPath
from zipentry_libs.header import EntryHeader
from zipentry_libs.index import EntryIndex

logger = logging.getLogger(__name__)


class ArchiveEntryReader:
    """Helper class for reading the entry headers of a ZIP archive.

    This class is NOT safe for multi-thread, create separated instance
        for each worker thread if used in multi-threaded environment.
    """

    def __init__(
        self, _f: Union[ZipFile, StrOrPath], *, close_on_exit: bool = True
    ) -> None:
        if isinstance(_f, ZipFile):
            self._f = _f
        else:
            self._f = ZipFile(_f, mode="r")
        self._close_on_exit = close_on_exit

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._close_on_exit:
            self.close()
        return False

    def close(self) -> None:
        self._f.close()

    def iter_headers(self) -> Generator[EntryHeader]:
        for _zinfo in self._f.infolist():
            yield EntryHeader.from_zipinfo(_zinfo)

    def get_header(self, name: str) -> EntryHeader:
        try:
            return EntryHeader.from_zipinfo(self._f.getinfo(name))
        except KeyError:
            raise FileNotFoundError(f"entry {name=} not found in the archive!") from None

    def build_index(self) -> EntryIndex:
        _index = EntryIndex(self.iter_headers())
        logger.debug(
            f"{len(_index)} entries indexed, {len(_index.large_entries())} need zip64"
        )
        return _index
