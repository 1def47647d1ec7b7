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
import os
from pathlib import Path
from typing import TYPE_CHECKING

from zipentry_libs.consts import PATH_SEP
from zipentry_libs.fileinfo import GenericFileView, from_generic
from zipentry_libs.header import is_valid_entry_name
from zipentry_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def inspect_file_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    inspect_file_arg_parser = sub_arg_parser.add_parser(
        name="inspect-file",
        help=(
            _help_txt := "Print the entry header that would be created for a local file."
        ),
        description=_help_txt,
        parents=parent_parser,
    )
    inspect_file_arg_parser.add_argument(
        "--arcname",
        help="The entry name within the archive, default to the base name of the file.",
    )
    inspect_file_arg_parser.add_argument(
        "path",
        help="The local file to inspect, symlinks are not followed.",
    )
    inspect_file_arg_parser.set_defaults(handler=inspect_file_cmd)


def inspect_file_cmd(args: Namespace) -> None:
    logger.debug(f"calling {inspect_file_cmd.__name__} with {args}")
    fpath = Path(args.path)

    try:
        _stat = os.lstat(fpath)
    except OSError as e:
        exit_with_err_msg(f"failed to stat {fpath}: {e}")

    _view = GenericFileView.from_stat_result(fpath.name, _stat)
    header = from_generic(_view)
    if _arcname := args.arcname:
        header.name = _arcname
    if _view.is_dir and not header.name.endswith(PATH_SEP):
        header.name = f"{header.name}{PATH_SEP}"

    if not is_valid_entry_name(header.name):
        logger.warning(f"{header.name!r} is not a valid relative entry name")
    print(header.model_dump_json(indent=2))
