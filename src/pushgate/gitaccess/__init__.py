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
import re
import shutil
from typing import NewType, Optional, cast

logger = logging.getLogger(__name__)

SHA1 = NewType("SHA1", str)

# Git prints object ids in lowercase only.
SHA1_PATTERN = re.compile("^[0-9a-f]{40}$")

# The value Git uses in place of an object id for a ref that does not exist,
# i.e. the old value of a created ref or the new value of a deleted ref.
NULL_SHA1 = SHA1("0" * 40)

SHORT_SHA1_LENGTH = 8


def is_sha1(value: str) -> bool:
    return bool(SHA1_PATTERN.match(value))


def as_sha1(value: str) -> SHA1:
    if not is_sha1(value):
        raise ValueError(f"invalid SHA-1: {value!r}")
    return cast(SHA1, value)


def short_sha1(sha1: str) -> str:
    return sha1[:SHORT_SHA1_LENGTH]


from .giterror import GitError, GitProcessError, GitTimeoutError

GIT_EXECUTABLE: Optional[str] = None


def git() -> str:
    global GIT_EXECUTABLE
    if GIT_EXECUTABLE is None:
        executable = shutil.which("git")
        if executable is None:
            raise GitError("No Git executable found!")
        GIT_EXECUTABLE = executable
        logger.debug("using git executable: %s", GIT_EXECUTABLE)
    return GIT_EXECUTABLE


from .gitrepository import GitRepository

__all__ = [
    "NULL_SHA1",
    "SHA1",
    "GitError",
    "GitProcessError",
    "GitRepository",
    "GitTimeoutError",
    "as_sha1",
    "git",
    "is_sha1",
    "short_sha1",
]
