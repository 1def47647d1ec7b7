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
"""Helper functions for packing a folder into a ZIP archive.

Entry headers are built from the files' stat through the generic file view, so
    the timestamp, permission bits and zip64 promotion all go through the same
    codecs as any other archive writer would use.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from zipfile import ZIP_STORED, ZipFile

from zipentry_libs.archive import (
    DEFAULT_READ_SIZE,
    DEFAULT_TIMESTAMP,
    DIR_PERMISSION,
    FILE_PERMISSION,
)
from zipentry_libs.common.model_spec import StrOrPath
from zipentry_libs.consts import PATH_SEP
from zipentry_libs.fileinfo import GenericFileView, from_generic
from zipentry_libs.header import EntryHeader
from zipentry_libs.mode import EntryType, PermissionView

logger = logging.getLogger(__name__)


def prepare_header(
    src: Path, arcname: str, *, reproducible: bool = False, compression: int = ZIP_STORED
) -> EntryHeader:
    """Build the EntryHeader for <src>, stored as <arcname> in the archive."""
    _view = GenericFileView.from_stat_result(arcname, src.lstat())
    if reproducible:
        _view = _view.model_copy(
            update={
                "mod_time": DEFAULT_TIMESTAMP,
                "mode": PermissionView(
                    file_type=_view.mode.file_type,
                    perm=DIR_PERMISSION if _view.is_dir else FILE_PERMISSION,
                ),
            }
        )

    header = from_generic(_view)
    header.method = compression
    if _view.is_dir:
        header.name = f"{arcname.rstrip(PATH_SEP)}{PATH_SEP}"
        header.set_sizes(uncompressed=0)
    return header


def add_dir(zipf: ZipFile, src: Path, arcname: str, *, reproducible: bool) -> None:
    header = prepare_header(src, arcname, reproducible=reproducible)
    zipf.writestr(header.to_zipinfo(), b"")


def add_file(
    zipf: ZipFile,
    src: Path,
    arcname: str,
    *,
    reproducible: bool,
    rw_chunk_size: int = DEFAULT_READ_SIZE,
) -> bool:
    """Add a regular file or a symlink, return False if <src> is skipped."""
    header = prepare_header(
        src, arcname, reproducible=reproducible, compression=zipf.compression
    )
    _type = header.mode().file_type

    if _type is EntryType.SYMLINK:
        # the link target is stored as the entry contents, as Info-ZIP does
        zipf.writestr(header.to_zipinfo(), os.readlink(src).encode("utf-8"))
        return True

    if _type is not EntryType.REGULAR:
        logger.warning(f"skip {src}: {_type.value} is not supported")
        return False

    with open(src, "rb") as _src, zipf.open(
        header.to_zipinfo(), "w", force_zip64=header.is_zip64
    ) as _dst:
        shutil.copyfileobj(_src, _dst, rw_chunk_size)
    return True


def pack_dir(
    src_root: StrOrPath,
    output: StrOrPath,
    *,
    reproducible: bool = False,
    compression: int = ZIP_STORED,
    rw_chunk_size: int = DEFAULT_READ_SIZE,
) -> int:
    """Pack the folder at <src_root> into ZIP archive at <output>.

    Entries are arranged in alphabet order within each folder. If <reproducible>
        is True, all entries get a fixed timestamp and permission bits, so the
        same archive is always generated from the same input folder.

    Returns:
        The number of file entries (directories excluded) added.
    """
    src_root, _file_count = Path(src_root), 0
    with ZipFile(output, mode="w", compression=compression) as output_f:
        for curdir, dirnames, files in os.walk(src_root):
            dirnames.sort()
            curdir = Path(curdir)
            relative_curdir = curdir.relative_to(src_root)

            if curdir != src_root:
                add_dir(
                    output_f,
                    curdir,
                    relative_curdir.as_posix(),
                    reproducible=reproducible,
                )

            # symlinks to folders are not walked into, store them as symlinks
            _dir_links = [_d for _d in dirnames if (curdir / _d).is_symlink()]
            for _fname in sorted(files + _dir_links):
                if add_file(
                    output_f,
                    curdir / _fname,
                    (relative_curdir / _fname).as_posix(),
                    reproducible=reproducible,
                    rw_chunk_size=rw_chunk_size,
                ):
                    _file_count += 1
    logger.debug(f"packed {_file_count} files from {src_root} into {output}")
    return _file_count
