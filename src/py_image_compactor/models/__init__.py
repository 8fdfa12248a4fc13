"""数据模型包。

定义图片处理相关的数据结构和模型。
"""

from .constants import (
    JPEG_EXTENSIONS,
    REMOTE_PREFIXES,
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
    QualityLimits,
    is_remote_source,
)
from .quality import Quality
from .results import BatchResult, ItemResult
from .source import (
    ImageSource,
    LocalSource,
    RemoteSource,
    StagedInput,
    classify_source,
)


__all__ = [
    # 常量
    "JPEG_EXTENSIONS",
    "REMOTE_PREFIXES",
    "TEMP_FILE_PREFIX",
    "TEMP_FILE_SUFFIX",
    # 核心模型
    "BatchResult",
    "ImageSource",
    "ItemResult",
    "LocalSource",
    "Quality",
    "QualityLimits",
    "RemoteSource",
    "StagedInput",
    "classify_source",
    "is_remote_source",
]
