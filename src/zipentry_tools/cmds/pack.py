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
from pathlib import Path
from typing import TYPE_CHECKING

from zipentry_libs.archive.pack import pack_dir
from zipentry_libs.header import CompressionMethod
from zipentry_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def pack_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    pack_arg_parser = sub_arg_parser.add_parser(
        name="pack",
        help=(_help_txt := "Pack a folder into a ZIP archive."),
        description=_help_txt,
        parents=parent_parser,
    )
    pack_arg_parser.add_argument(
        "--reproducible",
        action="store_true",
        help="Use fixed timestamp and permission bits for all entries.",
    )
    pack_arg_parser.add_argument(
        "--deflate",
        action="store_true",
        help="Compress the entries with deflate, default to store.",
    )
    pack_arg_parser.add_argument(
        "src",
        help="The folder to pack.",
    )
    pack_arg_parser.add_argument(
        "output",
        help="The output ZIP archive.",
    )
    pack_arg_parser.set_defaults(handler=pack_cmd)


def pack_cmd(args: Namespace) -> None:
    logger.debug(f"calling {pack_cmd.__name__} with {args}")
    src, output = Path(args.src), Path(args.output)
    if not src.is_dir():
        exit_with_err_msg(f"{src} is not a folder.")
    if output.exists():
        exit_with_err_msg(f"{output} already exists.")

    _file_count = pack_dir(
        src,
        output,
        reproducible=args.reproducible,
        compression=(
            CompressionMethod.DEFLATE if args.deflate else CompressionMethod.STORE
        ),
    )
    print(f"Packed {_file_count} files into {output}.")
