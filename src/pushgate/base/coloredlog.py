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

import logging
import os
import sys
from typing import Optional, TextIO

BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)

# Foreground colors are 30 plus the color number, background colors are 40 plus
# the color number.
RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[1;%dm"

FOREGROUND = {
    "DEBUG": BLUE,
    "INFO": GREEN,
    "WARNING": BLACK,
    "ERROR": WHITE,
    "CRITICAL": YELLOW,
}
BACKGROUND = {
    "WARNING": YELLOW,
    "ERROR": RED,
    "CRITICAL": RED,
}


class Formatter(logging.Formatter):
    def __init__(self, msg: str):
        super().__init__(f"%(color)s{msg}%(reset)s")

    def format(self, record: logging.LogRecord) -> str:
        color = ""
        if record.levelname in FOREGROUND:
            color += COLOR_SEQ % (30 + FOREGROUND[record.levelname])
        if record.levelname in BACKGROUND:
            color += COLOR_SEQ % (40 + BACKGROUND[record.levelname])
        record.color = color
        record.reset = RESET_SEQ if color else ""
        return super().format(record)

    @staticmethod
    def is_supported(stream: Optional[TextIO] = None) -> bool:
        if stream is None:
            stream = sys.stderr
        # Hook output is relayed to the pushing client prefixed by "remote: ",
        # so only color it when attached to a terminal that isn't "dumb".
        if os.environ.get("TERM", "dumb") == "dumb":
            return False
        return stream.isatty()


__all__ = ["Formatter"]
