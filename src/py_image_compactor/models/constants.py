"""图像处理相关常量定义。

输入分类、格式分派和临时文件命名所用的固定值。
"""

from typing import Final


# 远程输入源前缀（区分大小写的精确匹配）
REMOTE_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://")

# JPEG 编解码器接受的扩展名（不含点，区分大小写）
JPEG_EXTENSIONS: Final[frozenset[str]] = frozenset({"jpg", "jpeg"})

# 远程下载暂存文件命名
TEMP_FILE_PREFIX: Final[str] = "img_compactor_"
TEMP_FILE_SUFFIX: Final[str] = ".jpg"

# 原子写入时使用的同目录临时文件后缀
PARTIAL_FILE_SUFFIX: Final[str] = ".part"


class QualityLimits:
    """质量取值范围"""

    MIN: Final[int] = 0
    MAX: Final[int] = 100


def is_remote_source(source: str) -> bool:
    """判断输入源是否为远程 URL"""
    return source.startswith(REMOTE_PREFIXES)
