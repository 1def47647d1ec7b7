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
"""Conversion between EntryHeader and a generic file attributes view."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from pydantic import Field

from zipentry_libs.common.model_spec import FrozenModel, Uint64
from zipentry_libs.consts import PATH_SEP
from zipentry_libs.dostime import is_dos_representable
from zipentry_libs.header import EntryHeader
from zipentry_libs.mode import PermissionView
from zipentry_libs.size import EntrySize

logger = logging.getLogger(__name__)


class GenericFileView(FrozenModel):
    """Read-only file attributes, as a directory listing would expose them."""

    name: str
    size: Uint64 = 0
    mod_time: datetime
    mode: PermissionView = Field(default_factory=PermissionView)

    @property
    def is_dir(self) -> bool:
        return self.mode.is_dir

    @classmethod
    def from_stat_result(cls, name: str, st: os.stat_result) -> GenericFileView:
        return cls(
            name=name,
            size=st.st_size,
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            mode=PermissionView.from_stat_mode(st.st_mode),
        )


def base_name(name: str) -> str:
    """Last element of a slash separated path, trailing slashes are ignored."""
    _stripped = name.rstrip(PATH_SEP)
    if not _stripped:
        return PATH_SEP if name else "."
    return _stripped.rsplit(PATH_SEP, maxsplit=1)[-1]


def from_generic(view: GenericFileView) -> EntryHeader:
    """Create a partially-populated EntryHeader from <view>.

    As the generic view only holds the base name of the file, it may be
        necessary to modify the `name` of the returned header to the
        full path of the file within the archive.
    """
    if not is_dos_representable(view.mod_time):
        logger.debug(
            f"{view.name}: {view.mod_time} is out of the MS-DOS time range, "
            "the packed timestamp will wrap"
        )

    header = EntryHeader(name=view.name, uncompressed=EntrySize(value=view.size))
    header.set_mod_time(view.mod_time)
    header.set_mode(view.mode)
    return header


def as_generic(header: EntryHeader) -> GenericFileView:
    """Expose <header> as a generic file view.

    The file type and permission are decoded on each call from the current
        header fields, unknown creator platform results in a zero permission
        regular file, or a directory if the name has a trailing slash.
    """
    return GenericFileView(
        name=base_name(header.name),
        size=header.uncompressed_size64 or header.uncompressed_size,
        mod_time=header.mod_time(),
        mode=header.mode(),
    )
