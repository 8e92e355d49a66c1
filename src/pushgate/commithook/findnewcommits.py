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
from pushgate.base import asyncutils
from pushgate.gitaccess import SHA1

from . import CONCURRENCY_LIMIT, RefUpdate, SubprocessError
from .findmergebases import log_git_error


async def find_new_commits(
    repository: gitaccess.GitRepository,
    updates: Sequence[RefUpdate],
    *,
    limit: int = CONCURRENCY_LIMIT,
) -> None:
    """Set |new_commits| of every update that isn't a deletion

       The new commits of an update are those reachable from its new value
       but not from any existing ref. Since the refs haven't been updated
       yet, this covers created branches and moved tags as well as plain
       updates."""

    pending = [update for update in updates if update.operation != "delete"]
    if not pending:
        return

    async def find(update: RefUpdate) -> Sequence[SHA1]:
        return await repository.newcommits(update.new_sha1)

    try:
        new_commits = await asyncutils.gather_limited(
            limit,
            *(functools.partial(find, update) for update in pending),
            silent_exceptions=(gitaccess.GitError, OSError),
        )
    except (gitaccess.GitError, OSError) as error:
        log_git_error(error)
        raise SubprocessError() from error

    for update, commits in zip(pending, new_commits):
        logger.debug("new commits in %r: %d", update, len(commits))
        update.new_commits = commits
