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

import logging
from typing import List

logger = logging.getLogger(__name__)

from pushgate.gitaccess import as_sha1

from . import ParseError, RefUpdate


def parse_git_updates(stdin: str) -> List[RefUpdate]:
    """Parse the ref updates Git feeds a pre-receive hook on stdin

       Each line is "<old-sha1> <new-sha1> <ref-name>". The whole input is
       rejected if any line is malformed."""

    lines = stdin.split("\n")
    if lines and not lines[-1]:
        lines.pop()

    updates = []

    for line in lines:
        parts = line.split()
        if len(parts) != 3:
            raise ParseError(line)
        old_sha1, new_sha1, ref_name = parts
        try:
            update = RefUpdate(as_sha1(old_sha1), as_sha1(new_sha1), ref_name)
        except ValueError:
            raise ParseError(line, "invalid object id") from None
        logger.debug("parsed: %r", update)
        updates.append(update)

    return updates
