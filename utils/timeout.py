"""带超时的阻塞调用 — 关键词 LLM、文档库检索、最终补全三处共用。"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, TypeVar

T = TypeVar("T")


class CallTimeoutError(TimeoutError):
    """外部调用在限定时间内未返回。"""

    def __init__(self, label: str, timeout: float) -> None:
        super().__init__(f"{label} timeout after {timeout:g}s")
        self.label = label
        self.timeout = timeout


def run_with_timeout(
    func: Callable[..., T],
    timeout: float,
    *args: Any,
    label: str = "call",
    **kwargs: Any,
) -> T:
    """在工作线程中执行 func，超过 timeout 秒抛出 CallTimeoutError。

    超时后不等待工作线程结束（无法中断阻塞中的网络调用），
    调用方立即拿到异常并走降级路径。func 自身抛出的异常原样传播。

    Args:
        func: 待执行的阻塞函数
        timeout: 超时秒数
        label: 日志与异常信息中的调用名称

    Returns:
        func 的返回值
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"kb-{label}")
    future = executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError as exc:
        future.cancel()
        raise CallTimeoutError(label, timeout) from exc
    finally:
        executor.shutdown(wait=False)
