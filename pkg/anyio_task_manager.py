from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from anyio import CapacityLimiter, create_task_group, to_thread

from pkg.logger_helper import logger


@dataclass
class ThreadTaskResult:
    results: list[Any]
    errors: dict[int, BaseException] = field(default_factory=dict)


class AnyioTaskManager:
    def __init__(self, max_tasks: int = 10):
        if max_tasks < 1:
            raise ValueError("max_tasks must be at least 1.")
        self.max_tasks = max_tasks
        self._limiter = CapacityLimiter(max_tasks)

    @staticmethod
    def get_func_name(func: Callable[..., Any]) -> str:
        if getattr(func, "__name__", None) == "<lambda>":
            raise ValueError("Lambda functions are not supported for task tracking!")

        # 处理 partial 对象
        if isinstance(func, partial):
            func = func.func

        if hasattr(func, "__self__"):
            return f"{func.__self__.__class__.__name__}.{func.__name__}"
        return getattr(func, "__name__", "partial")

    async def run_in_threads(
            self,
            sync_func: Callable[..., Any],
            *,
            args_tuple_list: list[tuple] | None = None,
            kwargs_dict_list: list[dict] | None = None,
    ) -> ThreadTaskResult:
        """
        使用 AnyIO 线程池并发执行一批 *同步* 函数调用，同时最多 max_tasks 个线程在跑。

        Args:
            sync_func: 同步函数
            args_tuple_list: 参数元组列表，对应每个任务的位置参数
            kwargs_dict_list: 关键字参数的字典列表（可为 None；若提供，长度应与 args_tuple_list 相同）

        Returns:
            ThreadTaskResult: results 与输入顺序一一对应，失败为 None；errors 记录失败任务的异常
        """
        args_tuple_list, kwargs_dict_list = self._check_rebuild_args_kwargs(args_tuple_list, kwargs_dict_list)

        outcome = ThreadTaskResult(results=[None] * len(args_tuple_list))
        func_name = self.get_func_name(sync_func)

        async def _one(index: int, args_tuple: tuple, kwargs_dict: dict | None):
            bound = partial(sync_func, *(args_tuple or ()), **(kwargs_dict or {}))
            async with self._limiter:
                try:
                    res = await to_thread.run_sync(bound)
                    outcome.results[index] = res
                except Exception as e:
                    outcome.errors[index] = e
                    logger.error(f"ThreadTask-{index} ({func_name}) failed. err={e}")

        async with create_task_group() as tg:
            for i, (args, kwargs) in enumerate(zip(args_tuple_list, kwargs_dict_list, strict=False)):
                tg.start_soon(_one, i, args, kwargs)

        return outcome

    @staticmethod
    def _check_rebuild_args_kwargs(args_tuple_list: list[tuple] | None, kwargs_dict_list: list[dict] | None):
        args_tuple_list = args_tuple_list or []
        kwargs_dict_list = kwargs_dict_list or [None] * len(args_tuple_list)

        if len(kwargs_dict_list) != len(args_tuple_list):
            raise ValueError("args_tuple_list must be the same length as kwargs_dict_list.")
        return args_tuple_list, kwargs_dict_list
