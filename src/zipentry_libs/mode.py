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
"""Permission and file type codec for the entry external attributes.

The meaning of the 32bit `external attributes` field depends on the platform
    which created the entry (the high byte of `version made by`):

1. unix family (unix, macOS): the high 16 bits hold a unix `st_mode`.
2. MS-DOS family (FAT, VFAT, NTFS): the low byte holds MS-DOS attribute bits.
3. other platforms: no permission information can be recovered.

When encoding, both representations are written at once, as the original
    Info-ZIP does, so that consumers understanding only one of them still
    get the directory and read-only information.
"""

from __future__ import annotations

import stat
from enum import Enum, IntEnum

from pydantic import Field
from typing_extensions import Annotated

from zipentry_libs.common.model_spec import FrozenModel
from zipentry_libs.consts import (
    CREATOR_FAT,
    CREATOR_MACOSX,
    CREATOR_NTFS,
    CREATOR_UNIX,
    CREATOR_VFAT,
    MSDOS_DIR,
    MSDOS_READONLY,
    PATH_SEP,
    PERM_MASK,
    S_IFBLK,
    S_IFCHR,
    S_IFDIR,
    S_IFIFO,
    S_IFLNK,
    S_IFMT,
    S_IFREG,
    S_IFSOCK,
    S_ISGID,
    S_ISUID,
    S_ISVTX,
)


class PlatformTag(IntEnum):
    """The creator platform recorded in the high byte of `version made by`."""

    UNKNOWN = -1
    FAT = CREATOR_FAT
    UNIX = CREATOR_UNIX
    NTFS = CREATOR_NTFS
    VFAT = CREATOR_VFAT
    MACOSX = CREATOR_MACOSX

    @classmethod
    def parse(cls, tag: int) -> PlatformTag:
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_creator_version(cls, creator_version: int) -> PlatformTag:
        return cls.parse((creator_version >> 8) & 0xFF)

    @property
    def is_unix_family(self) -> bool:
        return self in (PlatformTag.UNIX, PlatformTag.MACOSX)

    @property
    def is_msdos_family(self) -> bool:
        return self in (PlatformTag.FAT, PlatformTag.VFAT, PlatformTag.NTFS)


class EntryType(str, Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    NAMED_PIPE = "named_pipe"
    SOCKET = "socket"
    BLOCK_DEVICE = "block_device"
    CHAR_DEVICE = "char_device"


_TYPE_TO_UNIX = {
    EntryType.REGULAR: S_IFREG,
    EntryType.DIRECTORY: S_IFDIR,
    EntryType.SYMLINK: S_IFLNK,
    EntryType.NAMED_PIPE: S_IFIFO,
    EntryType.SOCKET: S_IFSOCK,
    EntryType.BLOCK_DEVICE: S_IFBLK,
    EntryType.CHAR_DEVICE: S_IFCHR,
}
_UNIX_TO_TYPE = {_bits: _type for _type, _bits in _TYPE_TO_UNIX.items()}

# host side, resolved through the stat module
_STAT_TO_TYPE = {
    stat.S_IFREG: EntryType.REGULAR,
    stat.S_IFDIR: EntryType.DIRECTORY,
    stat.S_IFLNK: EntryType.SYMLINK,
    stat.S_IFIFO: EntryType.NAMED_PIPE,
    stat.S_IFSOCK: EntryType.SOCKET,
    stat.S_IFBLK: EntryType.BLOCK_DEVICE,
    stat.S_IFCHR: EntryType.CHAR_DEVICE,
}
_TYPE_TO_STAT = {_type: _bits for _bits, _type in _STAT_TO_TYPE.items()}


class PermissionView(FrozenModel):
    """Platform independent view of the file type and permission bits."""

    file_type: EntryType = EntryType.REGULAR
    perm: Annotated[int, Field(ge=0, le=PERM_MASK)] = 0
    setuid: bool = False
    setgid: bool = False
    sticky: bool = False

    @property
    def is_dir(self) -> bool:
        return self.file_type is EntryType.DIRECTORY

    def with_type(self, file_type: EntryType) -> PermissionView:
        return self.model_copy(update={"file_type": file_type})

    @classmethod
    def from_stat_mode(cls, st_mode: int) -> PermissionView:
        """Build from the `st_mode` of an `os.stat_result`."""
        return cls(
            file_type=_STAT_TO_TYPE.get(stat.S_IFMT(st_mode), EntryType.REGULAR),
            perm=stat.S_IMODE(st_mode) & PERM_MASK,
            setuid=bool(st_mode & stat.S_ISUID),
            setgid=bool(st_mode & stat.S_ISGID),
            sticky=bool(st_mode & stat.S_ISVTX),
        )

    def to_stat_mode(self) -> int:
        _mode = _TYPE_TO_STAT[self.file_type] | self.perm
        if self.setuid:
            _mode |= stat.S_ISUID
        if self.setgid:
            _mode |= stat.S_ISGID
        if self.sticky:
            _mode |= stat.S_ISVTX
        return _mode

    def filemode(self) -> str:
        """Render like `ls -l`, for example `drwxr-xr-x`."""
        return stat.filemode(self.to_stat_mode())


#
# ------ unix mode ------ #
#


def unix_mode_to_view(unix_mode: int) -> PermissionView:
    """Decode a unix mode word, unknown file type nibble is taken as regular file."""
    return PermissionView(
        file_type=_UNIX_TO_TYPE.get(unix_mode & S_IFMT, EntryType.REGULAR),
        perm=unix_mode & PERM_MASK,
        setuid=bool(unix_mode & S_ISUID),
        setgid=bool(unix_mode & S_ISGID),
        sticky=bool(unix_mode & S_ISVTX),
    )


def view_to_unix_mode(view: PermissionView) -> int:
    _mode = _TYPE_TO_UNIX[view.file_type]
    if view.setuid:
        _mode |= S_ISUID
    if view.setgid:
        _mode |= S_ISGID
    if view.sticky:
        _mode |= S_ISVTX
    return _mode | (view.perm & PERM_MASK)


#
# ------ MS-DOS attributes ------ #
#


def msdos_attrs_to_view(attrs: int) -> PermissionView:
    if attrs & MSDOS_DIR:
        _type, _perm = EntryType.DIRECTORY, 0o777
    else:
        _type, _perm = EntryType.REGULAR, 0o666

    if attrs & MSDOS_READONLY:
        _perm &= ~0o222
    return PermissionView(file_type=_type, perm=_perm)


#
# ------ external attributes ------ #
#


def is_dir_name(name: str | None) -> bool:
    return name is not None and name.endswith(PATH_SEP)


def decode_mode(
    platform_tag: int, external_attrs: int, *, name: str | None = None
) -> PermissionView:
    """Decode <external_attrs> according to <platform_tag>.

    If <name> is given and ends with the path separator, the result is always
        a directory, whatever the attribute bits say.
    """
    _tag = PlatformTag.parse(int(platform_tag))
    if _tag.is_unix_family:
        view = unix_mode_to_view((external_attrs >> 16) & 0xFFFF)
    elif _tag.is_msdos_family:
        view = msdos_attrs_to_view(external_attrs & 0xFF)
    else:
        view = PermissionView()

    if is_dir_name(name) and not view.is_dir:
        view = view.with_type(EntryType.DIRECTORY)
    return view


def encode_mode(view: PermissionView) -> tuple[PlatformTag, int]:
    """Encode <view> into (platform_tag, external_attrs).

    The platform is always unix, and the MS-DOS directory and read-only bits
        are set alongside the unix mode in the high 16 bits.
    """
    external_attrs = view_to_unix_mode(view) << 16
    if view.is_dir:
        external_attrs |= MSDOS_DIR
    if not view.perm & 0o200:
        external_attrs |= MSDOS_READONLY
    return PlatformTag.UNIX, external_attrs
