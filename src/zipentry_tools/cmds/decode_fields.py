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

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from zipentry_libs.header import EntryHeader
from zipentry_tools._utils import parse_int

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def decode_fields_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    decode_fields_arg_parser = sub_arg_parser.add_parser(
        name="decode-fields",
        help=(
            _help_txt := "Decode raw entry header fields into modification time and mode."
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    decode_fields_arg_parser.add_argument(
        "--date",
        type=parse_int,
        required=True,
        help="The MS-DOS packed date, like 0x4A21.",
    )
    decode_fields_arg_parser.add_argument(
        "--time",
        type=parse_int,
        required=True,
        help="The MS-DOS packed time, like 0x5600.",
    )
    decode_fields_arg_parser.add_argument(
        "--creator-version",
        type=parse_int,
        default=0,
        help="The `version made by` field, the high byte is the creator platform.",
    )
    decode_fields_arg_parser.add_argument(
        "--external-attrs",
        type=parse_int,
        default=0,
        help="The external file attributes field.",
    )
    decode_fields_arg_parser.add_argument(
        "--name",
        default="",
        help="The entry name, a trailing slash marks a directory.",
    )
    decode_fields_arg_parser.set_defaults(handler=decode_fields_cmd)


def decode_fields_cmd(args: Namespace) -> None:
    logger.debug(f"calling {decode_fields_cmd.__name__} with {args}")
    header = EntryHeader(
        name=args.name,
        creator_version=args.creator_version & 0xFFFF,
        modified_date=args.date & 0xFFFF,
        modified_time=args.time & 0xFFFF,
        external_attrs=args.external_attrs & 0xFFFFFFFF,
    )
    _mode = header.mode()

    print(f"mod_time: {header.mod_time().isoformat()}")
    print(f"platform: {header.platform_tag.name}")
    print(f"type: {_mode.file_type.value}")
    print(f"mode: {_mode.filemode()} ({_mode.perm:#o})")
    print(f"setuid={_mode.setuid}, setgid={_mode.setgid}, sticky={_mode.sticky}")
