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
"""Consts of the ZIP format related to entry metadata.

See https://pkware.cachefly.net/webdocs/casestudies/APPNOTE.TXT for more details.
"""

# ------ compression methods ------ #

STORE = 0
DEFLATE = 8

# ------ creator platform, the high byte of `version made by` ------ #

CREATOR_FAT = 0
CREATOR_UNIX = 3
CREATOR_NTFS = 11
CREATOR_VFAT = 14
CREATOR_MACOSX = 19

# ------ version needed to extract ------ #

ZIP_VERSION_20 = 20  # 2.0
ZIP_VERSION_45 = 45  # 4.5 (reads and writes zip64 archives)

# ------ limits for non-zip64 entries ------ #

UINT16_MAX = (1 << 16) - 1
UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1

# NOTE: the legacy 32bit size field is set to this sentinel when the
#   real size is only available in the zip64 extra field.
SIZE_SENTINEL = UINT32_MAX

# ------ extra field header ids, reserved but not interpreted here ------ #

ZIP64_EXTRA_ID = 0x0001  # zip64 extended information extra field
WINZIP_AES_EXTRA_ID = 0x9901  # winzip AES extra field

# ------ general purpose bit flags ------ #

FLAG_ENCRYPTED = 0x0001
FLAG_DATA_DESCRIPTOR = 0x0008
FLAG_UTF8 = 0x0800

# ------ unix mode bits ------ #
# The APPNOTE doesn't mention them, but these are the values agreed on by tools.

S_IFMT = 0xF000
S_IFSOCK = 0xC000
S_IFLNK = 0xA000
S_IFREG = 0x8000
S_IFBLK = 0x6000
S_IFDIR = 0x4000
S_IFCHR = 0x2000
S_IFIFO = 0x1000
S_ISUID = 0x800
S_ISGID = 0x400
S_ISVTX = 0x200
PERM_MASK = 0o777

# ------ MS-DOS attribute bits ------ #

MSDOS_DIR = 0x10
MSDOS_READONLY = 0x01

# ------ path ------ #

PATH_SEP = "/"
