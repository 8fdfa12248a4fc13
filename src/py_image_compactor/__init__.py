"""JPEG 批量压缩库。

从本地路径或 HTTP/HTTPS URL 获取 JPEG，按目标质量重新编码并写入输出目录。
"""

__version__ = "0.1.0"
__description__ = "基于 Pillow 的 JPEG 批量压缩工具"

# 核心功能导出
from .compactor import ImageCompactor
from .core import InputResolver, JpegProcessor, ProcessorFactory
from .engine import BatchRunner
from .models import BatchResult, ItemResult, Quality


__all__ = [
    "BatchResult",
    "BatchRunner",
    "ImageCompactor",
    "InputResolver",
    "ItemResult",
    "JpegProcessor",
    "ProcessorFactory",
    "Quality",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
