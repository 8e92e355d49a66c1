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
import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

logger = logging.getLogger("pushgate.hooks.svn_pre_commit")

from pushgate import base
from pushgate import commithook
from pushgate import repository

from . import (
    UNEXPECTED_ERROR_MESSAGE,
    add_output_arguments,
    configure_logging,
    load_configuration,
    report,
    viewer,
)


async def run(arguments: argparse.Namespace) -> int:
    transaction = commithook.SubversionTransaction(
        repository_path=arguments.repos, transaction=arguments.txn
    )
    handle = repository.fetch(
        arguments.repository
        or os.path.basename(os.path.normpath(arguments.repos)),
        path=arguments.repos,
        configuration=load_configuration(),
        default_vcs="subversion",
    )

    verdict = await commithook.evaluate(
        commithook.HookConfig(
            viewer=viewer(), repository=handle, subversion_transaction=transaction
        )
    )

    # Subversion only relays the hook's stderr to the committing client.
    return report(verdict, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Subversion pre-commit hook.")
    parser.add_argument("repos", metavar="REPOS-PATH")
    parser.add_argument("txn", metavar="TXN-NAME")
    parser.add_argument("--repository", metavar="NAME", help="Repository name.")
    add_output_arguments(parser)

    arguments = parser.parse_args(argv)

    configure_logging(arguments)

    try:
        return asyncio.run(run(arguments))
    except base.InvalidConfiguration as error:
        logger.error("Invalid configuration: %s", error)
        print(UNEXPECTED_ERROR_MESSAGE, file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Hook failed!")
        print(UNEXPECTED_ERROR_MESSAGE, file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
