"""
Search execution module: one concurrent lookup per keyword.
"""
import asyncio
import inspect
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Awaitable, Callable, List, Optional

from ..core.error import classify_error, log_error
from ..models.schema import SearchOutcome, build_outcome
from ..retrievers.base import LookupClient

logger = logging.getLogger("pagevideo.search")

OutcomeCallback = Callable[[SearchOutcome], Awaitable[None]]


def _is_async_client(client: LookupClient) -> bool:
    return inspect.iscoroutinefunction(client.lookup)


async def _call_lookup(client: LookupClient, keyword: str, executor: Optional[Executor]):
    if executor is None:
        return await client.lookup(keyword)
    # Run synchronous lookup in the per-search executor
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(executor, client.lookup, keyword)


async def _lookup_single(
    index: int,
    keyword: str,
    client: LookupClient,
    lookup_timeout: Optional[float],
    executor: Optional[Executor] = None,
) -> SearchOutcome:
    """
    Look up a single keyword. Never raises: failures and deadline overruns
    become outcomes with `error` set and no records.
    """
    if lookup_timeout is not None and lookup_timeout <= 0:
        lookup_timeout = None
    try:
        if lookup_timeout is None:
            records = await _call_lookup(client, keyword, executor)
        else:
            records = await asyncio.wait_for(_call_lookup(client, keyword, executor), timeout=lookup_timeout)
        return build_outcome(index=index, keyword=keyword, records=list(records or []))
    except asyncio.CancelledError:
        raise
    except Exception as e:
        if isinstance(e, asyncio.TimeoutError) and lookup_timeout is not None:
            logger.warning("Lookup for %r exceeded %.1fs deadline; treating as empty", keyword, lookup_timeout)
            message = f"timeout after {lookup_timeout}s"
        else:
            log_error(e, logger, context={"keyword": keyword, "index": index}, level="WARNING")
            message = f"{classify_error(e).value}: {e}"
        return build_outcome(index=index, keyword=keyword, error=message)


async def lookup_keywords_parallel(
    keywords: List[str],
    client: LookupClient,
    *,
    lookup_timeout: Optional[float] = None,
    on_complete: Optional[OutcomeCallback] = None,
) -> List[SearchOutcome]:
    """
    Dispatch one lookup per keyword (duplicates included) and wait for all of them.

    Synchronous clients get a thread per keyword from an executor that lives
    only for this search, so every lookup starts at dispatch and the deadline
    never counts time spent queued behind other lookups.

    Args:
        keywords: Keywords in recognition order
        client: Lookup client shared by all lookups
        lookup_timeout: Per-lookup deadline in seconds, None or <= 0 for no deadline
        on_complete: Awaited with each outcome as soon as its lookup finishes

    Returns:
        Outcomes in dispatch order
    """
    if not keywords:
        return []

    executor: Optional[ThreadPoolExecutor] = None
    if not _is_async_client(client):
        executor = ThreadPoolExecutor(max_workers=len(keywords), thread_name_prefix="pagevideo-lookup")

    async def run(index: int, keyword: str) -> SearchOutcome:
        outcome = await _lookup_single(index, keyword, client, lookup_timeout, executor)
        if on_complete is not None:
            await on_complete(outcome)
        return outcome

    tasks = [run(index, keyword) for index, keyword in enumerate(keywords)]
    try:
        return list(await asyncio.gather(*tasks))
    finally:
        # Lookups past their deadline may still be running; do not wait on them.
        if executor is not None:
            executor.shutdown(wait=False)
