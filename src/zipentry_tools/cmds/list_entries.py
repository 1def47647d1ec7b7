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
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, Iterable
from zipfile import BadZipFile

from zipentry_libs.archive.reader import ArchiveEntryReader
from zipentry_libs.header import EntryHeader
from zipentry_tools._utils import exit_with_err_msg

if TYPE_CHECKING:
    from argparse import ArgumentParser, Namespace, _SubParsersAction

logger = logging.getLogger(__name__)


def list_entries_cmd_args(
    sub_arg_parser: _SubParsersAction[ArgumentParser], *parent_parser: ArgumentParser
) -> None:
    list_entries_arg_parser = sub_arg_parser.add_parser(
        name="list-entries",
        help=(_help_txt := "List the entry headers within a ZIP archive."),
        description=_help_txt,
        parents=parent_parser,
    )
    list_entries_arg_parser.add_argument(
        "--zip64-only",
        action="store_true",
        help="Only list entries that need the zip64 extra field.",
    )
    list_entries_arg_parser.add_argument(
        "archive",
        help="The ZIP archive to inspect.",
    )
    list_entries_arg_parser.set_defaults(handler=list_entries_cmd)


_DIV = "-" * 18


def render_entries(_in: Iterable[EntryHeader]) -> str:
    _buffer = StringIO()

    _title = f"{_DIV} archive entries {_DIV}\n"
    _buffer.write(_title)
    for _header in _in:
        _info = _header.file_info()
        _zip64 = "zip64" if _header.is_zip64 else "-"
        _buffer.write(
            f"{_info.mode.filemode()}\t{_info.size:>12}\t"
            f"{_info.mod_time.isoformat()}\t{_zip64}\t{_header.name}\n"
        )
    _buffer.write("-" * len(_title))
    return _buffer.getvalue()


def list_entries_cmd(args: Namespace) -> None:
    logger.debug(f"calling {list_entries_cmd.__name__} with {args}")
    archive = Path(args.archive)
    if not archive.is_file():
        exit_with_err_msg(f"{archive} is not a file.")

    try:
        with ArchiveEntryReader(archive) as reader:
            _headers = list(reader.iter_headers())
    except BadZipFile as e:
        exit_with_err_msg(f"{archive} is not a valid ZIP archive: {e}")

    if args.zip64_only:
        _headers = [_header for _header in _headers if _header.is_zip64]

    print(f"ZIP archive: {archive}")
    print(render_entries(_headers))
