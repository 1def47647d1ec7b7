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

from .decode_fields import decode_fields_cmd_args
from .dump_index import dump_index_cmd_args
from .inspect_file import inspect_file_cmd_args
from .list_entries import list_entries_cmd_args
from .pack import pack_cmd_args

__all__ = [
    "decode_fields_cmd_args",
    "dump_index_cmd_args",
    "inspect_file_cmd_args",
    "list_entries_cmd_args",
    "pack_cmd_args",
]
