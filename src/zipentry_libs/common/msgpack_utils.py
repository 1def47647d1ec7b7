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

from __future__ import annotations

from typing import Any, cast

from msgpack import Unpacker, packb

MAX_SNAPSHOT_SIZE = 64 * 1024**2  # 64MiB

#
# ------ msgpack utils ------ #
#


def pack_obj(_in: Any, *, max_size: int = MAX_SNAPSHOT_SIZE) -> bytes:
    _res = cast(bytes, packb(_in, use_bin_type=True))
    if len(_res) > max_size:
        raise ValueError(
            f"packed message bytes exceeds maximum len: {len(_res)=} > {max_size=}"
        )
    return _res


def unpack_dict(_in: bytes, *, max_size: int = MAX_SNAPSHOT_SIZE) -> dict[str, Any]:
    if len(_in) > max_size:
        raise ValueError(f"input exceeds maximum len: {len(_in)=} > {max_size=}")

    _unpacker = Unpacker(max_buffer_size=max_size, raw=False)
    _unpacker.feed(_in)

    try:
        _unpacked = _unpacker.unpack()
    except Exception as e:
        raise ValueError(f"failed to unpack: {e!r}") from e

    if not isinstance(_unpacked, dict):
        raise ValueError(f"unpacked object is not a dict: {type(_unpacked)=}")
    return _unpacked
