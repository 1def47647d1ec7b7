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
from zipfile import BadZipFile

from zipentry_libs.archive.reader import ArchiveEntryReader
from zipentry_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def dump_index_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    dump_index_arg_parser = sub_arg_parser.add_parser(
        name="dump-index",
        help=(
            _help_txt := "Save the entry headers of a ZIP archive as a msgpack snapshot."
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    dump_index_arg_parser.add_argument(
        "archive",
        help="The ZIP archive to index.",
    )
    dump_index_arg_parser.add_argument(
        "output",
        help="The file to save the snapshot to.",
    )
    dump_index_arg_parser.set_defaults(handler=dump_index_cmd)


def dump_index_cmd(args: Namespace) -> None:
    logger.debug(f"calling {dump_index_cmd.__name__} with {args}")
    archive, output = Path(args.archive), Path(args.output)
    if not archive.is_file():
        exit_with_err_msg(f"{archive} is not a file.")

    try:
        with ArchiveEntryReader(archive) as reader:
            _index = reader.build_index()
    except BadZipFile as e:
        exit_with_err_msg(f"{archive} is not a valid ZIP archive: {e}")

    output.write_bytes(_index.export_snapshot())
    print(f"Saved {len(_index)} entries to {output}.")
