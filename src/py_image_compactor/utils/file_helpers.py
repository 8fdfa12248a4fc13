"""工具函数模块。

提供文件写入和输入列表读取相关的实用工具函数。
"""

import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..models.constants import PARTIAL_FILE_SUFFIX
from .logging_helpers import get_logger


logger = get_logger()


def atomic_write_bytes(target: Path, data: bytes) -> None:
    """原子地写入文件

    先写入同目录下的唯一临时文件，再用 os.replace 覆盖目标，
    并发写同一目标时读者只会看到某一次完整写入的内容。

    Raises:
        OSError: 目录不存在或不可写
    """
    fd, partial_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=PARTIAL_FILE_SUFFIX
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(partial_name, target)
    except BaseException:
        try:
            os.unlink(partial_name)
        except FileNotFoundError:
            pass
        raise


def iter_source_lines(lines: Iterable[str]) -> Iterator[str]:
    """从文本行中提取输入源

    跳过空行和以 # 开头的注释行，去除首尾空白。
    """
    for line in lines:
        source = line.strip()
        if not source or source.startswith("#"):
            continue
        yield source


def read_source_file(path: str | Path) -> list[str]:
    """读取每行一个输入源的列表文件"""
    with open(path, encoding="utf-8") as fh:
        sources = list(iter_source_lines(fh))
    logger.debug(f"从 {path} 读取到 {len(sources)} 个输入源")
    return sources
