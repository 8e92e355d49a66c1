# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2026 the Pushgate contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from __future__ import annotations

import argparse
import logging
import os
import pwd
import subprocess
import sys
from typing import Callable, List, Optional, TextIO, cast

logger = logging.getLogger(__name__)

from pushgate import base
from pushgate import commithook
from pushgate import textutils

UNEXPECTED_ERROR_MESSAGE = "Pushgate encountered an unexpected error."


def gitconfig(name: str) -> Optional[str]:
    try:
        process = subprocess.run(
            ["git", "config", name], stdout=subprocess.PIPE, stderr=subprocess.DEVNULL
        )
    except OSError:
        return None

    if process.returncode == 0:
        return process.stdout.decode().strip()
    return None


def viewer() -> str:
    # REMOTE_USER is set when pushing over HTTP(S); otherwise the hook runs as
    # the pushing user (e.g. over SSH).
    remote_user = os.environ.get("REMOTE_USER")
    if remote_user:
        return remote_user
    try:
        return pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        return str(os.getuid())


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    output = parser.add_argument_group("Output options")
    output.add_argument(
        "--verbose",
        action="store_const",
        dest="loglevel",
        const=logging.DEBUG,
        help="Enable debug output.",
    )
    output.add_argument(
        "--quiet",
        action="store_const",
        dest="loglevel",
        const=logging.ERROR,
        help="Disable warnings.",
    )
    output.add_argument("--color", action="store_const", const=True, dest="color")
    output.add_argument("--no-color", action="store_const", const=False, dest="color")

    parser.set_defaults(loglevel=logging.WARNING, color=None)


class LevelFilter(logging.Filter):
    def __init__(self, predicate: Callable[[int], bool]):
        super().__init__()
        self.predicate = predicate

    def filter(self, record: logging.LogRecord) -> bool:
        return self.predicate(record.levelno)


_HANDLERS: List[logging.Handler] = []


def configure_logging(arguments: argparse.Namespace) -> None:
    from pushgate.base import coloredlog

    root_logger = logging.getLogger()
    root_logger.setLevel(arguments.loglevel)

    while _HANDLERS:
        root_logger.removeHandler(_HANDLERS.pop())

    log_format = "%(levelname)7s  %(message)s"
    formatter: Optional[logging.Formatter] = None

    if arguments.color is not False:
        colored_formatter = coloredlog.Formatter(log_format)
        if arguments.color is True or colored_formatter.is_supported():
            formatter = colored_formatter

    if formatter is None:
        formatter = logging.Formatter(log_format)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(LevelFilter(lambda level: level <= logging.INFO))
    stdout_handler.setFormatter(formatter)
    root_logger.addHandler(stdout_handler)
    _HANDLERS.append(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.addFilter(LevelFilter(lambda level: level > logging.INFO))
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)
    _HANDLERS.append(stderr_handler)


def load_configuration() -> base.Configuration:
    try:
        return base.configuration()
    except base.MissingConfiguration as error:
        logger.debug("no configuration file (%s); using defaults", error)
        return cast(base.Configuration, {})


def report(verdict: commithook.Verdict, *, file: Optional[TextIO] = None) -> int:
    if verdict.accepted:
        return 0
    print(textutils.reflow(base.asserted(verdict.message)), file=file)
    return 1
