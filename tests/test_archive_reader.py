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
"""Tests for reading entry headers from ZIP archives."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from zipfile import BadZipFile, ZipFile

import pytest

from zipentry_libs.archive.reader import ArchiveEntryReader
from zipentry_libs.mode import EntryType, PermissionView, PlatformTag
from tests.conftest import TEST_FILE_CONTENT

UTC = timezone.utc


class TestArchiveEntryReader:
    def test_iter_headers(self, test_archive: Path):
        """Test reading all the entry headers in order."""
        with ArchiveEntryReader(test_archive) as reader:
            _headers = list(reader.iter_headers())

        assert [_h.name for _h in _headers] == ["dir/", "dir/file.txt", "dir/run.sh"]
        for _header in _headers:
            assert _header.platform_tag is PlatformTag.UNIX
            assert not _header.is_zip64

    def test_directory_entry(self, test_archive: Path):
        """Test directory entry decodes as directory."""
        with ArchiveEntryReader(test_archive) as reader:
            _header = reader.get_header("dir/")

        assert _header.is_dir
        assert _header.mode() == PermissionView(
            file_type=EntryType.DIRECTORY, perm=0o755
        )
        assert _header.mod_time() == datetime(2017, 1, 1, 10, 48, tzinfo=UTC)
        assert (_header.modified_date, _header.modified_time) == (0x4A21, 0x5600)

    def test_file_entries(self, test_archive: Path):
        """Test file entries carry size, time and permission."""
        with ArchiveEntryReader(test_archive) as reader:
            _file = reader.get_header("dir/file.txt")
            _exec = reader.get_header("dir/run.sh")

        assert _file.uncompressed_size == _file.uncompressed_size64
        assert _file.uncompressed_size64 == len(TEST_FILE_CONTENT)
        assert _file.mode() == PermissionView(perm=0o644)

        assert _exec.mode() == PermissionView(perm=0o755, setuid=True)
        assert _exec.mode().filemode() == "-rwsr-xr-x"
        assert _exec.mod_time() == datetime(2005, 1, 1, 10, 48, 2, tzinfo=UTC)

        _info = _exec.file_info()
        assert _info.name == "run.sh"
        assert _info.size == len(b"#!/bin/sh\n")

    def test_entry_not_found(self, test_archive: Path):
        """Test looking up not existed entry."""
        with ArchiveEntryReader(test_archive) as reader:
            with pytest.raises(FileNotFoundError):
                reader.get_header("not-exist")

    def test_build_index(self, test_archive: Path):
        """Test building an entry index from the archive."""
        with ArchiveEntryReader(test_archive) as reader:
            _index = reader.build_index()

        assert _index.sorted_names() == ["dir/", "dir/file.txt", "dir/run.sh"]
        assert _index.large_entries() == []
        assert _index.total_uncompressed_size() == len(TEST_FILE_CONTENT) + len(
            b"#!/bin/sh\n"
        )

    def test_not_close_on_exit(self, test_archive: Path):
        """Test the opened ZipFile is left open for the caller."""
        with ZipFile(test_archive) as zipf:
            with ArchiveEntryReader(zipf, close_on_exit=False) as reader:
                assert len(list(reader.iter_headers())) == 3
            assert zipf.read("dir/file.txt") == TEST_FILE_CONTENT

    def test_not_a_zip(self, tmp_path: Path):
        """Test opening a file that is not a ZIP archive."""
        _f = tmp_path / "not.zip"
        _f.write_bytes(b"not a zip archive")
        with pytest.raises(BadZipFile):
            ArchiveEntryReader(_f)
