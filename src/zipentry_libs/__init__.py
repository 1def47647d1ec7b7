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
"""Entry metadata model for ZIP archives.

This package holds the per-entry header record, together with the bit-level codecs
    translating between the archive's on-disk fields and the host's file attributes:
    the MS-DOS packed timestamp, the unix/MS-DOS permission bits and the ZIP64
    size promotion rule.
"""

version = "0.1.0"
