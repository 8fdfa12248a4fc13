"""图像压缩 MCP 服务器。

把批量压缩能力作为 MCP 工具暴露，参数默认值来自全局配置。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .compactor import ImageCompactor
from .config import get_config
from .exceptions import CompactorError, QualityOutOfRangeError
from .models import BatchResult
from .utils.logging_helpers import get_logger, setup_logging
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPShrinkResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def validation_error(message: str, field: str | None = None) -> dict[str, Any]:
        """构建验证错误结果。"""
        details = {"field": field} if field else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="validation",
            details=details,
        )

    @staticmethod
    def processing_error(message: str, operation: str | None = None) -> dict[str, Any]:
        """构建处理错误结果。"""
        details = {"operation": operation} if operation else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="processing",
            details=details,
        )


logger = get_logger()

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("JPEG 批量压缩服务")

# 全局压缩器实例，首次调用工具时按配置创建
_compactor: ImageCompactor | None = None


def _get_compactor() -> ImageCompactor:
    global _compactor
    if _compactor is None:
        app_config = get_config()
        _compactor = ImageCompactor(
            max_workers=app_config.compactor.MAX_WORKERS,
            retain_temp_files=app_config.compactor.RETAIN_TEMP_FILES,
            fetch_timeout=app_config.compactor.FETCH_TIMEOUT,
        )
    return _compactor


def shrink_images(
    sources: list[str],
    output_dir: str | None = None,
    quality: int | None = None,
) -> MCPShrinkResponse:
    """批量压缩 JPEG 图像

    Args:
        sources: 本地路径或 HTTP/HTTPS URL 列表
        output_dir: 输出目录（可选，默认取配置）
        quality: 压缩质量 0-100（可选，默认取配置）

    Returns:
        dict: 批量结果，每个输入源一条记录
    """
    try:
        app_config = get_config()
        compactor = _get_compactor()
    except CompactorError as e:
        return MCPResponseBuilder.validation_error(e.message, "config")

    target_dir = Path(output_dir or app_config.compactor.OUTPUT_DIR)
    raw_quality = quality if quality is not None else app_config.compactor.QUALITY

    try:
        result = compactor.shrink_batch(sources, target_dir, raw_quality)
    except QualityOutOfRangeError as e:
        return MCPResponseBuilder.validation_error(e.message, "quality")
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("批量压缩", target_dir, e))
        return MCPResponseBuilder.processing_error(str(e), "批量压缩")

    return {
        "success": result.success,
        "result": _format_batch_result(result),
        "error": result.error,
    }


# 注册为 MCP 工具，模块中保留原函数以便直接调用
mcp.tool()(shrink_images)


def _format_batch_result(result: BatchResult) -> dict[str, Any]:
    """格式化批量结果为MCP响应格式"""
    return {
        "output_dir": str(result.output_dir),
        "quality": result.quality,
        "total_files": result.get_total_count(),
        "successful_files": result.get_success_count(),
        "failed_files": result.get_failure_count(),
        "success_rate": result.get_success_rate(),
        "total_original_size": result.get_total_original_size(),
        "total_compressed_size": result.get_total_compressed_size(),
        "total_size_saved": result.get_total_size_saved(),
        "summary": result.get_summary(),
        "results": [
            {
                "source": r.source,
                "output_path": str(r.output_path) if r.output_path else None,
                "success": r.success,
                "original_size": r.original_size,
                "compressed_size": r.compressed_size,
                "compression_ratio": r.get_compression_ratio() if r.success else 0,
                "error": r.error,
                "error_type": r.error_type,
            }
            for r in result.results
        ],
    }


def main() -> None:
    """启动 MCP 服务器"""
    try:
        app_config = get_config()
    except CompactorError as e:
        raise SystemExit(f"配置无效: {e.message}") from e

    setup_logging(app_config.logging.LOG_LEVEL, app_config.logging.LOG_FORMAT)
    logger.info("启动图片压缩 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
