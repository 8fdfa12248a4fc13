"""日志工具模块。

提供统一的日志记录功能，标准化日志格式和配置。
核心模块只通过 get_logger 取日志记录器，日志初始化由 CLI 与 MCP 服务器负责。
"""

import inspect
import logging


def get_logger(name: str | None = None) -> logging.Logger:
    """获取标准化配置的日志记录器。

    Args:
        name: 日志记录器名称，默认使用调用模块的 __name__

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    if name is None:
        # 获取调用者的模块名
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")
        else:
            name = "unknown"

    return logging.getLogger(name)


def setup_logging(level: str = "INFO", fmt: str | None = None) -> None:
    """初始化根日志记录器

    Args:
        level: 日志级别名称，如 "INFO"、"DEBUG"
        fmt: 日志格式，None 使用 logging 默认格式
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    # force=True 允许在同一进程中重复初始化（测试和多次调用 CLI）
    logging.basicConfig(level=numeric_level, format=fmt, force=True)
