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
"""Shared test fixtures for zipentry-libs tests."""

from __future__ import annotations

import os
from pathlib import Path
from zipfile import ZIP_STORED, ZipFile, ZipInfo

import pytest

from zipentry_libs.consts import CREATOR_UNIX, MSDOS_DIR

# 2020-09-13 12:26:41 UTC, an odd second
TEST_MTIME = 1600000001
TEST_FILE_CONTENT = b"hello, zip entry!" * 64


@pytest.fixture
def src_tree(tmp_path: Path) -> Path:
    """Create a small folder tree for packing.

    src/
        a.txt           0o644
        empty/          0o755
        sub/            0o750
            b.bin       0o600
            link        -> b.bin
    """
    src = tmp_path / "src"
    src.mkdir()

    a_txt = src / "a.txt"
    a_txt.write_bytes(TEST_FILE_CONTENT)
    os.chmod(a_txt, 0o644)

    (src / "empty").mkdir()
    os.chmod(src / "empty", 0o755)

    sub = src / "sub"
    sub.mkdir()
    b_bin = sub / "b.bin"
    b_bin.write_bytes(os.urandom(4096))
    os.chmod(b_bin, 0o600)
    (sub / "link").symlink_to("b.bin")
    os.chmod(sub, 0o750)

    for _f in (a_txt, b_bin):
        os.utime(_f, (TEST_MTIME, TEST_MTIME))
    return src


@pytest.fixture
def test_archive(tmp_path: Path) -> Path:
    """Create a ZIP archive with unix-made entries."""
    archive = tmp_path / "test.zip"
    with ZipFile(archive, mode="w", compression=ZIP_STORED) as zipf:
        _dir = ZipInfo("dir/", date_time=(2017, 1, 1, 10, 48, 0))
        _dir.create_system = CREATOR_UNIX
        _dir.external_attr = (0o40755 << 16) | MSDOS_DIR
        zipf.writestr(_dir, b"")

        _file = ZipInfo("dir/file.txt", date_time=(2017, 1, 1, 10, 48, 0))
        _file.create_system = CREATOR_UNIX
        _file.external_attr = 0o100644 << 16
        zipf.writestr(_file, TEST_FILE_CONTENT)

        _exec = ZipInfo("dir/run.sh", date_time=(2005, 1, 1, 10, 48, 2))
        _exec.create_system = CREATOR_UNIX
        _exec.external_attr = 0o104755 << 16
        zipf.writestr(_exec, b"#!/bin/sh\n")
    return archive
