"""图像压缩异常处理模块。

定义统一的异常类和单项错误处理机制。
批量任务中的每一种错误都在单个输入源的边界处被捕获并转换为失败结果。
"""

import logging
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from .models.results import ItemResult


logger = logging.getLogger(__name__)


# 统一的异常类型
class CompactorError(Exception):
    """图像压缩相关错误基类"""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.message = message
        self.source = source


class ValidationError(CompactorError):
    """参数验证错误"""

    pass


class QualityOutOfRangeError(ValidationError):
    """质量参数超出 0-100 范围"""

    def __init__(self, value: object):
        super().__init__(f"质量参数必须在 0-100 之间，当前值: {value!r}")
        self.value = value


class UnsupportedFormatError(CompactorError):
    """不支持的格式错误"""

    pass


class ImageIOError(CompactorError):
    """文件打开、创建、读写失败，保留底层的 OSError"""

    def __init__(self, message: str, os_error: OSError, source: str | None = None):
        super().__init__(f"{message}: {os_error}", source)
        self.os_error = os_error
        self.errno = os_error.errno


class DecodingError(CompactorError):
    """图像字节流无效、被截断或与声明的格式不符"""

    def __init__(self, cause: str, source: str | None = None):
        super().__init__(cause, source)
        self.cause = cause


class FetchError(CompactorError):
    """远程获取失败：传输错误或非 2xx 响应"""

    def __init__(
        self, message: str, source: str | None = None, status_code: int | None = None
    ):
        super().__init__(message, source)
        self.status_code = status_code


class InvalidSourceError(CompactorError):
    """输入源没有可用的文件名"""

    pass


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误处理和日志记录功能。
    """

    @staticmethod
    def _log_error(
        operation: str, source: str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称
            source: 相关输入源
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        from .utils.message_formatter import MessageFormatter

        log_msg = MessageFormatter.format_error(operation, source, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def _create_error_result(source: str, error: Exception) -> "ItemResult":
        """创建标准化的错误结果"""
        from .models.results import ItemResult

        return ItemResult(
            source=source,
            output_path=None,
            success=False,
            error=str(error),
            error_type=type(error).__name__,
        )

    @staticmethod
    def handle_item_error(
        error: Exception, source: str, operation: str = "图像处理"
    ) -> "ItemResult":
        """单个输入源的错误处理，按错误类型选择日志级别"""
        match error:
            case (
                UnsupportedFormatError()
                | InvalidSourceError()
                | ValidationError()
                | FetchError()
                | DecodingError()
            ):
                level = "warning"
            case _:
                level = "error"
                if not isinstance(error, (ImageIOError, OSError)):
                    operation = f"{operation} - 未知错误"

        ErrorHandler._log_error(operation, source, error, level)
        return ErrorHandler._create_error_result(source, error)
