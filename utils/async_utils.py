import asyncio
from typing import Any, Awaitable, Coroutine


async def gather_with_concurrency(n: int, *tasks: Coroutine[Any, Any, Any], return_exceptions: bool = False) -> list[Any]:
    """
    Runs tasks concurrently while capping the number of in-flight tasks at n.
    Uses asyncio.Semaphore.
    """
    semaphore = asyncio.Semaphore(n)

    async def sem_task(task: Coroutine[Any, Any, Any]) -> Any:
        async with semaphore:
            return await task

    return await asyncio.gather(*(sem_task(task) for task in tasks), return_exceptions=return_exceptions)


async def gather_all(*aws: Awaitable[Any]) -> list[Any]:
    """
    Awaits every awaitable to completion, then re-raises the first exception in argument order.
    No sibling is left running (or failing) unobserved when one of them raises.
    """
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results
