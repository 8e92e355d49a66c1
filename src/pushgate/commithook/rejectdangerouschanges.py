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
from typing import Iterable

logger = logging.getLogger(__name__)

from pushgate import base

from . import DangerousChangeRejection, RefUpdate

BOILERPLATE = (
    "Dangerous change protection is enabled for this repository.\n"
    "Edit the repository configuration before making dangerous changes."
)


def describe_dangerous_change(update: RefUpdate) -> str:
    if update.operation == "delete":
        return (
            "DANGEROUS CHANGE: The change you're attempting to push deletes "
            f"the branch '{update.short_ref}'."
        )
    return (
        "DANGEROUS CHANGE: The change you're attempting to push updates the "
        f"branch '{update.short_ref}' from '{update.old_short}' to "
        f"'{update.new_short}', but this is not a fast-forward. Pushes which "
        "rewrite published branch history are dangerous."
    )


def reject_dangerous_changes(
    updates: Iterable[RefUpdate], *, allow_dangerous_changes: bool
) -> None:
    """Raise DangerousChangeRejection for the first dangerous update

       Dangerous updates are branch deletions and non-fast-forward branch
       updates. Updates are checked in push order, and checking stops at the
       first dangerous one."""

    if allow_dangerous_changes:
        return

    for update in updates:
        if update.ref_kind != "branch":
            # Deleting or moving a tag is much harder to do by mistake, and
            # easy to recover from.
            continue

        if update.operation == "create":
            continue

        if update.operation == "update":
            if update.merge_base is None:
                raise base.ImplementationError(f"merge-base not resolved: {update!r}")
            if update.old_sha1 == update.merge_base:
                # Fast-forward.
                continue

        logger.info("rejecting dangerous change: %r", update)

        raise DangerousChangeRejection(
            update, describe_dangerous_change(update) + "\n" + BOILERPLATE
        )
