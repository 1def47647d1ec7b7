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
"""ZIP64 size promotion rule.

To be backward compatible the entry header has both 32bit and 64bit size fields.
    The 64bit fields always hold the correct value, and for normal archives both
    fields are the same. For entries requiring the ZIP64 format, the 32bit
    fields are set to the 0xFFFFFFFF sentinel and the 64bit fields must be used
    instead, the sentinel is never replaced by a wrapped or truncated value.
"""

from __future__ import annotations

from typing import Optional

from pydantic import computed_field

from zipentry_libs.common.model_spec import FrozenModel, Uint64
from zipentry_libs.consts import SIZE_SENTINEL, UINT32_MAX


def needs_large_file_extension(compressed_size64: int, uncompressed_size64: int) -> bool:
    """Whether the entry needs the zip64 extra field to carry its sizes."""
    return compressed_size64 > UINT32_MAX or uncompressed_size64 > UINT32_MAX


def legacy_size(size64: int) -> int:
    """The value to put in the legacy 32bit size field for <size64>."""
    return SIZE_SENTINEL if size64 > UINT32_MAX else size64


class EntrySize(FrozenModel):
    """A 64bit size, its legacy 32bit field and zip64 flag derived from the value.

    The model is frozen and both derived fields only read `value`, so they
        can never disagree with it, also after `model_copy(update=...)`.
    """

    value: Uint64 = 0

    @computed_field
    @property
    def legacy(self) -> int:
        return legacy_size(self.value)

    @computed_field
    @property
    def requires_extension(self) -> bool:
        return needs_large_file_extension(0, self.value)

    @classmethod
    def from_legacy(cls, size32: int, size64: Optional[int] = None) -> EntrySize:
        """Build from the fields as read from an archive.

        <size64> is the value from the zip64 extra field, if present. It is only
            consulted when the legacy field holds the sentinel, if no <size64>
            is given then, the sentinel itself is kept as the value.
        """
        if size32 == SIZE_SENTINEL and size64 is not None:
            return cls(value=size64)
        return cls(value=size32)
