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
"""Tests for the ZIP64 size promotion rule."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from zipentry_libs.consts import SIZE_SENTINEL, UINT32_MAX
from zipentry_libs.size import EntrySize, legacy_size, needs_large_file_extension


class TestNeedsLargeFileExtension:
    @pytest.mark.parametrize(
        "_compressed, _uncompressed, expected",
        (
            (0, 0, False),
            (UINT32_MAX, UINT32_MAX, False),
            (UINT32_MAX + 1, 0, True),
            (0, UINT32_MAX + 1, True),
            (0x100000000, 0x100000000, True),
            (1024, 5 * 1024**3, True),
        ),
    )
    def test_threshold(self, _compressed: int, _uncompressed: int, expected: bool):
        """Test the rule is a strict greater-than on either size."""
        assert needs_large_file_extension(_compressed, _uncompressed) is expected


class TestLegacySize:
    @pytest.mark.parametrize(
        "_size64, expected",
        (
            (0, 0),
            (4096, 4096),
            (UINT32_MAX, UINT32_MAX),
            (UINT32_MAX + 1, SIZE_SENTINEL),
            (1 << 40, SIZE_SENTINEL),
        ),
    )
    def test_legacy_size(self, _size64: int, expected: int):
        """Test the legacy field saturates to the sentinel instead of wrapping."""
        assert legacy_size(_size64) == expected


class TestEntrySize:
    def test_small_size(self):
        """Test small size keeps both fields the same."""
        _size = EntrySize(value=4096)
        assert _size.legacy == 4096
        assert _size.requires_extension is False

    def test_large_size(self):
        """Test large size sets the sentinel and the extension flag."""
        _size = EntrySize(value=UINT32_MAX + 1)
        assert _size.legacy == SIZE_SENTINEL
        assert _size.requires_extension is True

    def test_default(self):
        """Test default size is zero."""
        assert EntrySize() == EntrySize(value=0)
        assert EntrySize().legacy == 0

    def test_equality(self):
        """Test sizes with the same value are equal."""
        assert EntrySize(value=5) == EntrySize(value=5)
        assert EntrySize(value=5) != EntrySize(value=6)

    @pytest.mark.parametrize("_value", (-1, 1 << 64))
    def test_out_of_range(self, _value: int):
        """Test value out of 64bit range is rejected."""
        with pytest.raises(ValidationError):
            EntrySize(value=_value)

    def test_dump(self):
        """Test the derived fields are included in the dump."""
        assert EntrySize(value=1 << 33).model_dump() == {
            "value": 1 << 33,
            "legacy": SIZE_SENTINEL,
            "requires_extension": True,
        }

    def test_validate_from_dump(self):
        """Test the derived fields in input are ignored and recomputed."""
        _size = EntrySize.model_validate(
            {"value": 10, "legacy": SIZE_SENTINEL, "requires_extension": True}
        )
        assert _size.legacy == 10
        assert _size.requires_extension is False

    @pytest.mark.parametrize(
        "_origin, _new",
        ((1, UINT32_MAX + 1), (UINT32_MAX + 1, 1), (UINT32_MAX, UINT32_MAX + 1)),
    )
    def test_model_copy_with_update(self, _origin: int, _new: int):
        """Test the derived fields follow the value of an updated copy."""
        _size = EntrySize(value=_origin).model_copy(update={"value": _new})
        assert _size.value == _new
        assert _size.legacy == legacy_size(_new)
        assert _size.requires_extension is (_new > UINT32_MAX)
        assert _size == EntrySize(value=_new)


class TestEntrySizeFromLegacy:
    def test_legacy_only(self):
        """Test legacy field is used when no zip64 value is given."""
        assert EntrySize.from_legacy(4096) == EntrySize(value=4096)

    def test_zip64_value_preferred(self):
        """Test the zip64 value is authoritative."""
        _size = EntrySize.from_legacy(SIZE_SENTINEL, 1 << 33)
        assert _size.value == 1 << 33
        assert _size.legacy == SIZE_SENTINEL

    def test_sentinel_without_zip64_value(self):
        """Test the sentinel is kept as is when no zip64 value is available."""
        _size = EntrySize.from_legacy(SIZE_SENTINEL)
        assert _size.value == SIZE_SENTINEL
        assert _size.requires_extension is False

    def test_zip64_value_ignored_without_sentinel(self):
        """Test the zip64 value is only read when the legacy field is the sentinel."""
        _size = EntrySize.from_legacy(4096, 1 << 33)
        assert _size.value == 4096
        assert _size.requires_extension is False
