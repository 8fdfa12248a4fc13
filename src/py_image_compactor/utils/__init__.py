"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .cleanup_helpers import (
    TempFileManager,
    validate_output_integrity,
)
from .file_helpers import (
    atomic_write_bytes,
    iter_source_lines,
    read_source_file,
)
from .logging_helpers import get_logger, setup_logging
from .message_formatter import MessageFormatter
from .naming_helpers import (
    FileNamingStrategy,
    PathResolver,
)


__all__ = [
    "FileNamingStrategy",
    "MessageFormatter",
    "PathResolver",
    "TempFileManager",
    "atomic_write_bytes",
    "get_logger",
    "iter_source_lines",
    "read_source_file",
    "setup_logging",
    "validate_output_integrity",
]
