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
import os
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

logger = logging.getLogger(__name__)

from pushgate import base
from pushgate import gitaccess

VersionControlSystem = Literal["git", "subversion", "mercurial"]


@dataclass(frozen=True)
class Repository:
    """Read-only handle of the repository a push targets

       |vcs| is kept as a plain string: validating it is the hook engine's
       job, since an unknown kind must produce a proper rejection."""

    name: str
    vcs: str = "git"
    path: Optional[str] = None
    allow_dangerous_changes: bool = False
    low_level: Optional[gitaccess.GitRepository] = field(
        default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.low_level is None:
            object.__setattr__(self, "low_level", gitaccess.GitRepository(self.path))


def fetch(
    name: str,
    *,
    path: Optional[str] = None,
    configuration: Optional[base.Configuration] = None,
    default_vcs: VersionControlSystem = "git",
) -> Repository:
    """Build the handle of the repository named |name| from configuration

       If |configuration| is None, the system configuration is loaded. A
       repository missing from the configuration gets the defaults: a
       |default_vcs| repository with dangerous changes disallowed."""

    if configuration is None:
        configuration = base.configuration()

    repositories: Mapping[str, base.RepositoryConfiguration] = configuration.get(
        "repositories", {}
    )
    settings = repositories.get(name, base.RepositoryConfiguration())

    if path is None:
        path = settings.get("path", name)
        repositories_dir = configuration.get("paths.repositories")
        if repositories_dir:
            path = os.path.join(repositories_dir, path)

    allow_dangerous_changes = settings.get("allow_dangerous_changes", False)
    if not isinstance(allow_dangerous_changes, bool):
        raise base.InvalidConfiguration(
            f"repositories.{name}.allow_dangerous_changes: must be a boolean"
        )

    repository = Repository(
        name,
        vcs=settings.get("vcs", default_vcs),
        path=path,
        allow_dangerous_changes=allow_dangerous_changes,
        low_level=gitaccess.GitRepository(
            path, timeout=configuration.get("git.timeout", base.DEFAULT_GIT_TIMEOUT)
        ),
    )

    logger.debug("repository: %r", repository)

    return repository
