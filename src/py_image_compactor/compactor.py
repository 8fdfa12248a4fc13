"""图像压缩器接口。

基于批量处理引擎的简洁用户接口。质量值在这里完成唯一一次校验，
校验失败对整个批次是致命错误。
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import httpx

from .core.factory import ProcessorFactory
from .core.resolver import DEFAULT_FETCH_TIMEOUT, InputResolver
from .engine.batch import BatchRunner
from .engine.concurrent_executor import DEFAULT_MAX_WORKERS
from .models import BatchResult, ItemResult, Quality
from .utils.logging_helpers import get_logger


logger = get_logger()


class ImageCompactor:
    """图像压缩器

    提供单文件和批量处理接口。

    Examples:
        >>> with ImageCompactor(max_workers=4) as compactor:
        ...     result = compactor.shrink_batch(["photo.jpg"], "/tmp/out", 50)
        >>> print(result.get_summary())
    """

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        retain_temp_files: bool = False,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
        client: httpx.Client | None = None,
        factory: ProcessorFactory | None = None,
    ):
        """初始化压缩器。

        Args:
            max_workers: 批量处理时的最大并发数
            retain_temp_files: 是否保留远程下载的临时文件
            fetch_timeout: 远程下载超时（秒）
            client: 可选的 httpx 客户端（测试时注入 MockTransport）
            factory: 可选的处理器工厂
        """
        self.batch_runner = BatchRunner(
            factory=factory,
            resolver=InputResolver(client=client, timeout=fetch_timeout),
            max_workers=max_workers,
            retain_temp_files=retain_temp_files,
        )

        logger.debug(
            f"初始化图像压缩器: max_workers={max_workers}, "
            f"retain_temp_files={retain_temp_files}"
        )

    @staticmethod
    def make_quality(quality: int | Quality) -> Quality:
        """构造质量值

        Raises:
            QualityOutOfRangeError: 超出 0-100
        """
        if isinstance(quality, Quality):
            return quality
        return Quality.from_int(quality)

    def shrink_batch(
        self,
        sources: Iterable[str],
        output_dir: str | Path,
        quality: int | Quality,
    ) -> BatchResult:
        """批量压缩。

        Args:
            sources: 本地路径或 URL
            output_dir: 输出目录
            quality: 压缩质量 0-100

        Returns:
            BatchResult: 批量处理结果

        Raises:
            QualityOutOfRangeError: 质量参数无效，此时不会处理任何输入源
        """
        quality = self.make_quality(quality)
        result = self.batch_runner.run(sources, output_dir, quality)
        logger.info(result.get_summary())
        return result

    def shrink_image(
        self,
        source: str,
        output_dir: str | Path,
        quality: int | Quality,
    ) -> ItemResult:
        """压缩单个输入源。"""
        return self.shrink_batch([source], output_dir, quality).results[0]

    def close(self) -> None:
        self.batch_runner.close()

    def __enter__(self) -> "ImageCompactor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
