"""批量处理器模块。

对每个输入源独立执行 解析 -> 格式分派 -> 重新编码，并汇总所有结果。
"""

from collections.abc import Iterable
from functools import partial
from pathlib import Path

from ..core.factory import ProcessorFactory, default_factory
from ..core.resolver import DEFAULT_FETCH_TIMEOUT, InputResolver
from ..exceptions import ErrorHandler, ImageIOError, InvalidSourceError
from ..models.quality import Quality
from ..models.results import BatchResult, ItemResult
from ..utils.cleanup_helpers import TempFileManager
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from ..utils.naming_helpers import PathResolver
from .concurrent_executor import DEFAULT_MAX_WORKERS, ConcurrentExecutor


logger = get_logger()


class BatchRunner:
    """批量图像处理器

    单个输入源的任何失败都只体现在它自己的结果中，不影响其他输入源。
    批处理器本身不做重试。
    """

    def __init__(
        self,
        factory: ProcessorFactory | None = None,
        resolver: InputResolver | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        retain_temp_files: bool = False,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
    ):
        """初始化批量处理器

        Args:
            factory: 处理器工厂，默认使用全局只读工厂
            resolver: 输入解析器，None 时按 fetch_timeout 自动创建
            max_workers: 最大并发数
            retain_temp_files: 是否在批处理结束后保留远程下载的临时文件
            fetch_timeout: 远程下载超时（秒）
        """
        self.factory = factory or default_factory
        self.resolver = resolver or InputResolver(timeout=fetch_timeout)
        self.retain_temp_files = retain_temp_files
        self.concurrent_executor = ConcurrentExecutor(max_workers)

    def run(
        self,
        sources: Iterable[str],
        output_dir: str | Path,
        quality: Quality,
    ) -> BatchResult:
        """处理一批输入源

        Args:
            sources: 本地路径或 URL
            output_dir: 输出目录，不存在时自动创建
            quality: 已校验的质量值

        Returns:
            BatchResult: 每个输入源恰好一个结果
        """
        sources = list(sources)
        output_dir = self._prepare_output_dir(output_dir)
        temp_manager = TempFileManager()

        try:
            results = self.concurrent_executor.execute_tasks(
                sources=sources,
                task_function=partial(
                    self.process_source,
                    output_dir=output_dir,
                    quality=quality,
                    temp_manager=temp_manager,
                ),
            )
        finally:
            self._finish_temp_files(temp_manager)

        return self._create_batch_result(output_dir, quality, results)

    def process_source(
        self,
        source: str,
        output_dir: Path,
        quality: Quality,
        temp_manager: TempFileManager | None = None,
    ) -> ItemResult:
        """处理单个输入源，所有异常都转换为失败结果"""
        try:
            output_path = PathResolver.resolve_output_path(source, output_dir)
            if output_path is None:
                raise InvalidSourceError(f"无效的输入路径，缺少文件名: {source}", source)

            staged = self.resolver.resolve(source)
            if staged.is_temporary and temp_manager is not None:
                temp_manager.register_temp_file(staged.path)

            processor = self.factory.create(staged.path)
            dimensions = processor.shrink(output_path, quality)

            result = ItemResult(
                source=source,
                output_path=output_path,
                success=True,
                original_size=staged.path.stat().st_size,
                compressed_size=output_path.stat().st_size,
                dimensions=dimensions,
            )
            logger.info(
                MessageFormatter.item_saved(source, output_path, result.get_summary())
            )
            return result

        except Exception as e:
            return ErrorHandler.handle_item_error(e, source, "图像处理")

    def close(self) -> None:
        """释放解析器持有的 HTTP 连接"""
        self.resolver.close()

    def _prepare_output_dir(self, output_dir: str | Path) -> Path:
        """准备输出目录

        创建失败时只记录日志，各输入源会在写出时各自报告 I/O 错误。
        """
        output_dir = Path(output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(
                str(ImageIOError(f"无法创建输出目录 {output_dir}", e, str(output_dir)))
            )
        return output_dir

    def _finish_temp_files(self, temp_manager: TempFileManager) -> None:
        """按保留策略处理本批次的临时文件"""
        if self.retain_temp_files:
            for temp_path in temp_manager.registered_files():
                logger.info(f"保留临时文件: {temp_path}")
            return

        cleaned = temp_manager.cleanup_temp_files()
        if cleaned:
            logger.debug(f"已清理 {cleaned} 个临时文件")

    def _create_batch_result(
        self, output_dir: Path, quality: Quality, results: list[ItemResult]
    ) -> BatchResult:
        """创建批量处理结果"""
        failure_count = sum(1 for r in results if not r.success)

        return BatchResult(
            output_dir=output_dir,
            quality=quality.value,
            results=results,
            success=failure_count == 0,
            error=None if failure_count == 0 else f"{failure_count} 个输入源处理失败",
        )
