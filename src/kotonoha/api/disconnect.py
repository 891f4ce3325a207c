"""
客户端断开检测 - 断开时取消正在执行的任务
"""
import asyncio
import contextlib
from typing import Awaitable, Optional, TypeVar

from fastapi import Request

from kotonoha.core import get_logger

logger = get_logger(__name__)

# 轮询客户端是否断开的间隔（秒）
DISCONNECT_POLL_INTERVAL = 0.5

# nginx 约定的 "Client Closed Request"
CLIENT_CLOSED_STATUS = 499

T = TypeVar("T")


async def _cancel(task: asyncio.Future) -> None:
    """取消任务并等待其真正结束"""
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def run_until_disconnect(request: Request, work: Awaitable[T]) -> Optional[T]:
    """
    执行耗时任务，客户端断开时取消任务

    Returns:
        任务结果；客户端已断开时返回 None
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("客户端已断开，取消模型调用")
                await _cancel(task)
                return None
    finally:
        if not task.done():
            await _cancel(task)
