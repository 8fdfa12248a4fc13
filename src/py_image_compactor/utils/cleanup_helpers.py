"""清理工具模块。

提供临时文件清理和输出文件校验功能。
"""

import threading
from pathlib import Path
from PIL import Image

from .logging_helpers import get_logger


logger = get_logger()


class TempFileManager:
    """临时文件管理器

    批量任务中各线程会并发注册暂存文件，因此注册与清理都在锁内完成。
    """

    def __init__(self):
        self.temp_files: set[Path] = set()
        self._lock = threading.Lock()

    def register_temp_file(self, file_path: Path) -> None:
        """注册临时文件"""
        with self._lock:
            self.temp_files.add(file_path)

    def registered_files(self) -> list[Path]:
        """返回当前已注册的临时文件"""
        with self._lock:
            return sorted(self.temp_files)

    def cleanup_temp_files(self) -> int:
        """清理所有注册的临时文件"""
        with self._lock:
            pending = list(self.temp_files)
            self.temp_files.clear()

        cleaned_count = 0
        for file_path in pending:
            try:
                if file_path.exists():
                    file_path.unlink()
                    cleaned_count += 1
                    logger.debug(f"已清理临时文件: {file_path}")
            except OSError as e:
                logger.warning(f"清理临时文件失败 {file_path}: {e}")

        return cleaned_count


def validate_output_integrity(file_path: Path) -> bool:
    """验证输出文件的完整性

    Args:
        file_path: 文件路径

    Returns:
        bool: 文件存在、非空且可被 Pillow 校验
    """
    try:
        if not file_path.exists() or file_path.stat().st_size == 0:
            return False

        with Image.open(file_path) as img:
            img.verify()
        return True

    except Exception as e:
        logger.debug(f"验证文件完整性失败 {file_path}: {e}")
        return False
