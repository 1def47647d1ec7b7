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
"""The entry header, describing one file within a ZIP archive.

See https://pkware.cachefly.net/webdocs/casestudies/APPNOTE.TXT for the meaning
    of each field.

An EntryHeader is either created empty and filled in field by field by the
    archive writer, or parsed from an archive by the reader and treated as
    read-only afterward. It is NOT safe to mutate one header from multiple
    threads, concurrent reads are fine.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, Optional, Union
from zipfile import ZipInfo

from pydantic import BaseModel, Field

from zipentry_libs.common.model_spec import Uint8, Uint16, Uint32
from zipentry_libs.consts import (
    DEFLATE,
    FLAG_ENCRYPTED,
    FLAG_UTF8,
    STORE,
    ZIP_VERSION_20,
    ZIP_VERSION_45,
)
from zipentry_libs.dostime import (
    date_time_to_dos,
    datetime_to_dos,
    dos_to_date_time,
    dos_to_datetime,
)
from zipentry_libs.mode import PermissionView, PlatformTag, decode_mode, encode_mode
from zipentry_libs.size import EntrySize

if TYPE_CHECKING:
    from zipentry_libs.fileinfo import GenericFileView

PasswordFn = Callable[[], bytes]

_DRIVE_LETTER_PA = re.compile(r"^[A-Za-z]:")


class CompressionMethod(IntEnum):
    STORE = STORE
    DEFLATE = DEFLATE


class EncryptionMethod(IntEnum):
    NONE = 0
    STANDARD = 1  # traditional PKWARE encryption
    AES128 = 2
    AES192 = 3
    AES256 = 4


# winzip AES key strength byte
AES_STRENGTH = {
    EncryptionMethod.AES128: 1,
    EncryptionMethod.AES192: 2,
    EncryptionMethod.AES256: 3,
}

# winzip AES vendor version
AE1, AE2 = 1, 2


def is_valid_entry_name(name: str) -> bool:
    """Check <name> is a relative path with forward slashes only.

    This is advisory, the header itself accepts any name.
    """
    if not name or name.startswith("/") or "\\" in name:
        return False
    return _DRIVE_LETTER_PA.match(name) is None


def decode_comment(raw: bytes, flags: int = 0) -> str:
    """Decode an entry comment as read from an archive.

    zipfile never sets the UTF-8 flag for a comment, so without the flag a
        comment that is valid UTF-8 is taken as UTF-8, anything else as cp437.
    """
    if flags & FLAG_UTF8:
        return raw.decode("utf-8", errors="replace")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("cp437")


class EntryHeader(BaseModel):
    """Describes a file within a ZIP archive.

    The 64bit sizes in `compressed` and `uncompressed` are authoritative, the
        legacy 32bit fields are derived from them and read as 0xFFFFFFFF when
        the real size doesn't fit.
    """

    name: str = ""
    """Relative path with forward slashes, a trailing slash denotes a directory."""

    creator_version: Uint16 = 0
    """`version made by`, the high byte is the creator platform."""
    reader_version: Uint16 = 0
    flags: Uint16 = 0
    method: Uint16 = STORE
    modified_time: Uint16 = 0  # MS-DOS time
    modified_date: Uint16 = 0  # MS-DOS date
    crc32: Uint32 = 0
    compressed: EntrySize = Field(default_factory=EntrySize)
    uncompressed: EntrySize = Field(default_factory=EntrySize)
    extra: bytes = b""
    external_attrs: Uint32 = 0
    """Meaning depends on the creator platform."""
    comment: str = ""

    # ------ encryption parameters, opaque to this model ------ #

    encryption: EncryptionMethod = EncryptionMethod.NONE
    aes_strength: Uint8 = 0
    ae: Uint16 = 0
    defer_auth: bool = False
    """Delay the hmac check when decrypting, the reader gets unauthenticated plaintext.

    It is recommended to leave this False.
    """
    password: Optional[PasswordFn] = Field(default=None, exclude=True, repr=False)

    # ------ sizes ------ #

    @property
    def compressed_size(self) -> int:
        """Deprecated legacy 32bit field, use `compressed_size64` instead."""
        return self.compressed.legacy

    @property
    def uncompressed_size(self) -> int:
        """Deprecated legacy 32bit field, use `uncompressed_size64` instead."""
        return self.uncompressed.legacy

    @property
    def compressed_size64(self) -> int:
        return self.compressed.value

    @property
    def uncompressed_size64(self) -> int:
        return self.uncompressed.value

    def set_sizes(
        self, *, compressed: int | None = None, uncompressed: int | None = None
    ) -> None:
        if compressed is not None:
            self.compressed = EntrySize(value=compressed)
        if uncompressed is not None:
            self.uncompressed = EntrySize(value=uncompressed)

    @property
    def is_zip64(self) -> bool:
        """Whether either size exceeds the 32bit limit."""
        return self.compressed.requires_extension or self.uncompressed.requires_extension

    def required_reader_version(self) -> int:
        return ZIP_VERSION_45 if self.is_zip64 else ZIP_VERSION_20

    # ------ modification time ------ #

    def mod_time(self) -> datetime:
        """The modification time in UTC, with 2s resolution."""
        return dos_to_datetime(self.modified_date, self.modified_time)

    def set_mod_time(self, dt: datetime) -> None:
        """Set the MS-DOS date and time fields from <dt>, with 2s resolution."""
        self.modified_date, self.modified_time = datetime_to_dos(dt)

    # ------ permission and file type ------ #

    @property
    def platform_tag(self) -> PlatformTag:
        return PlatformTag.from_creator_version(self.creator_version)

    def mode(self) -> PermissionView:
        return decode_mode(
            (self.creator_version >> 8) & 0xFF, self.external_attrs, name=self.name
        )

    def set_mode(self, view: PermissionView) -> None:
        _tag, self.external_attrs = encode_mode(view)
        self.creator_version = (self.creator_version & 0xFF) | (_tag << 8)

    @property
    def is_dir(self) -> bool:
        return self.mode().is_dir

    # ------ encryption ------ #

    def set_password(
        self,
        password: Union[str, bytes, PasswordFn],
        method: EncryptionMethod = EncryptionMethod.AES256,
    ) -> None:
        """Record the encryption parameters for this entry.

        No encryption is done here, the archive writer consumes these parameters.
        """
        if isinstance(password, str):
            password = password.encode("utf-8")
        if isinstance(password, bytes):
            _raw = password
            self.password = lambda: _raw
        else:
            self.password = password

        self.encryption = method
        self.aes_strength = AES_STRENGTH.get(method, 0)
        self.ae = AE2 if method in AES_STRENGTH else 0
        self.flags |= FLAG_ENCRYPTED

    def is_encrypted(self) -> bool:
        return bool(self.flags & FLAG_ENCRYPTED)

    # ------ generic file view ------ #

    def file_info(self) -> GenericFileView:
        from zipentry_libs.fileinfo import as_generic

        return as_generic(self)

    # ------ zipfile interop ------ #

    @classmethod
    def from_zipinfo(cls, zinfo: ZipInfo) -> EntryHeader:
        """Create an EntryHeader from a ZipInfo parsed by zipfile.

        zipfile already resolves the zip64 extra field into the sizes.
        """
        _date, _time = date_time_to_dos(zinfo.date_time)
        return cls(
            name=zinfo.filename,
            creator_version=(zinfo.create_system << 8) | zinfo.create_version,
            reader_version=zinfo.extract_version,
            flags=zinfo.flag_bits,
            method=zinfo.compress_type,
            modified_date=_date,
            modified_time=_time,
            crc32=zinfo.CRC,
            compressed=EntrySize(value=zinfo.compress_size),
            uncompressed=EntrySize(value=zinfo.file_size),
            extra=zinfo.extra,
            external_attrs=zinfo.external_attr,
            comment=decode_comment(zinfo.comment, zinfo.flag_bits),
        )

    def to_zipinfo(self) -> ZipInfo:
        """Create a ZipInfo for writing this entry with zipfile."""
        zinfo = ZipInfo(
            self.name, date_time=dos_to_date_time(self.modified_date, self.modified_time)
        )
        zinfo.create_system = (self.creator_version >> 8) & 0xFF
        zinfo.create_version = (
            self.creator_version & 0xFF or self.required_reader_version()
        )
        zinfo.extract_version = max(self.reader_version, self.required_reader_version())
        zinfo.flag_bits = self.flags
        zinfo.compress_type = self.method
        zinfo.CRC = self.crc32
        zinfo.compress_size = self.compressed_size64
        zinfo.file_size = self.uncompressed_size64
        zinfo.extra = self.extra
        zinfo.external_attr = self.external_attrs
        zinfo.comment = self.comment.encode("utf-8")
        return zinfo
