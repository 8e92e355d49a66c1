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

import asyncio
import logging
from typing import Awaitable, Callable, Collection, List, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather(
    *coros_or_futures: Awaitable[T],
    return_exceptions: bool = False,
    silent_exceptions: Collection[Type[BaseException]] = (),
) -> List[T]:
    """Like asyncio.gather(), but cancels remaining pending futures"""

    if not coros_or_futures:
        return []
    futures = [
        asyncio.ensure_future(coro_or_future) for coro_or_future in coros_or_futures
    ]
    if return_exceptions:
        return_when = asyncio.ALL_COMPLETED
    else:
        return_when = asyncio.FIRST_EXCEPTION
    done, pending = await asyncio.wait(futures, return_when=return_when)
    try:
        return [future.result() for future in futures if future in done]
    except Exception:
        for future in done:
            if future.cancelled():
                continue
            try:
                future.result()
            except silent_exceptions:  # type: ignore
                pass
            except Exception:
                logger.exception("Coroutine failed!")
        for future in pending:
            future.cancel()
        if pending:
            await asyncio.wait(pending)
        raise


async def gather_limited(
    limit: int,
    *functions: Callable[[], Awaitable[T]],
    silent_exceptions: Collection[Type[BaseException]] = (),
) -> List[T]:
    """Call |functions| and gather the results, with at most |limit| running

       Each function is called only once a slot is available, so a function
       that never gets a slot (because another one failed first) is never
       called at all. Results are returned in the order of |functions|,
       regardless of the order in which they complete."""

    assert limit > 0
    semaphore = asyncio.Semaphore(limit)

    async def limited(function: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await function()

    return await gather(
        *(limited(function) for function in functions),
        silent_exceptions=silent_exceptions,
    )
