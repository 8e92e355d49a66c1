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

import functools
import logging
from typing import Sequence

logger = logging.getLogger(__name__)

from pushgate import gitaccess
from pushgate import textutils
from pushgate.base import asyncutils
from pushgate.gitaccess import SHA1

from . import CONCURRENCY_LIMIT, RefUpdate, SubprocessError


def log_git_error(error: Exception) -> None:
    if isinstance(error, gitaccess.GitProcessError) and error.stderr:
        logger.error("%s:\n%s", error, textutils.decode(error.stderr).rstrip())
    else:
        logger.error("%s", error)


async def find_merge_bases(
    repository: gitaccess.GitRepository,
    updates: Sequence[RefUpdate],
    *,
    limit: int = CONCURRENCY_LIMIT,
) -> None:
    """Set |merge_base| of every update of an existing ref

       Ref creations and deletions have no meaningful merge-base and are
       skipped. Nothing is set unless all queries succeed."""

    changed = [update for update in updates if update.operation == "update"]
    if not changed:
        return

    async def find_merge_base(update: RefUpdate) -> SHA1:
        return await repository.mergebase(update.old_sha1, update.new_sha1)

    try:
        merge_bases = await asyncutils.gather_limited(
            limit,
            *(functools.partial(find_merge_base, update) for update in changed),
            silent_exceptions=(gitaccess.GitError, OSError),
        )
    except (gitaccess.GitError, OSError) as error:
        log_git_error(error)
        raise SubprocessError() from error

    for update, merge_base in zip(changed, merge_bases):
        logger.debug("merge-base of %r: %s", update, merge_base)
        update.merge_base = merge_base
