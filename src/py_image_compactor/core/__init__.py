"""核心模块包。

格式分派、JPEG 重新编码和输入解析。
"""

from .factory import DEFAULT_PROCESSORS, ProcessorFactory, default_factory
from .processors import ImageProcessor, JpegProcessor
from .resolver import InputResolver


__all__ = [
    "DEFAULT_PROCESSORS",
    "ImageProcessor",
    "InputResolver",
    "JpegProcessor",
    "ProcessorFactory",
    "default_factory",
]
