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
"""Bridges between EntryHeader and the zipfile module.

The ZIP container itself (local headers, central directory, zip64 records) is
    read and written by zipfile, these helpers only move entry metadata in and
    out of it.
"""

from datetime import datetime, timezone

# some constants that required for making a reproducible archive build
DEFAULT_TIMESTAMP = datetime(2009, 1, 1, tzinfo=timezone.utc)
FILE_PERMISSION = 0o644
DIR_PERMISSION = 0o755

DEFAULT_READ_SIZE = 8 * 1024**2
