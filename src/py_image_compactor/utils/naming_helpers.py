"""文件命名工具模块。

根据原始输入源（本地路径或 URL）计算输出文件名和输出路径。
"""

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

from ..models.constants import is_remote_source


class FileNamingStrategy:
    """文件命名策略类"""

    @staticmethod
    def source_file_name(source: str) -> str:
        """提取输入源的最后一个路径组件

        远程输入使用 URL 路径中的文件名（忽略查询串和片段），
        而不是下载时生成的临时文件名。

        Args:
            source: 本地路径或 URL

        Returns:
            str: 文件名，无法提取时返回空字符串
        """
        if is_remote_source(source):
            url_path = unquote(urlsplit(source).path)
            return PurePosixPath(url_path).name

        return Path(source).name


class PathResolver:
    """路径解析器"""

    @staticmethod
    def resolve_output_path(source: str, output_dir: Path) -> Path | None:
        """解析输出路径: output_dir / filename(source)

        Returns:
            Path | None: 输出路径，输入源没有文件名时返回 None
        """
        name = FileNamingStrategy.source_file_name(source)
        if not name:
            return None
        return output_dir / name
