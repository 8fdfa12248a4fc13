"""并发执行器模块。

提供通用的并发任务执行功能，每个输入源一个任务，任务之间互不影响。
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

from ..exceptions import ErrorHandler
from ..models.results import ItemResult


logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class ConcurrentExecutor:
    """通用并发执行器

    使用有界线程池：下载是 I/O 密集型，Pillow 编解码在 C 层释放 GIL，
    两类工作可以在线程间重叠。
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS):
        """初始化并发执行器

        Args:
            max_workers: 最大并发数
        """
        if max_workers <= 0:
            raise ValueError(f"max_workers 必须大于 0，当前值: {max_workers}")
        self.max_workers = max_workers

    def execute_tasks(
        self,
        sources: Sequence[str],
        task_function: Callable[[str], ItemResult],
    ) -> list[ItemResult]:
        """执行并发任务

        所有任务完成后才返回；结果按完成顺序排列，每个输入源恰好对应一个结果。

        Args:
            sources: 输入源列表
            task_function: 处理单个输入源的函数

        Returns:
            list[ItemResult]: 任务执行结果列表
        """
        if not sources:
            return []

        results: list[ItemResult] = []
        workers = min(self.max_workers, len(sources))
        logger.debug(f"使用ThreadPoolExecutor: 任务数={len(sources)}, 线程数={workers}")

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="iccli"
        ) as executor:
            # 提交任务阶段
            future_to_source = self._submit_tasks(
                executor, sources, task_function, results
            )

            # 收集结果阶段
            self._collect_results(future_to_source, results)

        return results

    def _submit_tasks(
        self,
        executor: ThreadPoolExecutor,
        sources: Sequence[str],
        task_function: Callable[[str], ItemResult],
        results: list[ItemResult],
    ) -> dict[Future[ItemResult], str]:
        """提交任务到执行器"""
        future_to_source = {}

        for source in sources:
            try:
                future = executor.submit(task_function, source)
                future_to_source[future] = source

            except Exception as e:
                results.append(ErrorHandler.handle_item_error(e, source, "任务提交"))

        return future_to_source

    def _collect_results(
        self,
        future_to_source: dict[Future[ItemResult], str],
        results: list[ItemResult],
    ) -> None:
        """收集任务执行结果"""
        for future in as_completed(future_to_source):
            source = future_to_source[future]

            try:
                result = future.result()
                results.append(result)

                if result.success:
                    logger.debug(f"处理成功: {source}")
                else:
                    logger.debug(f"处理失败: {source} - {result.error}")

            except Exception as e:
                results.append(
                    ErrorHandler.handle_item_error(e, source, "并发任务处理")
                )
