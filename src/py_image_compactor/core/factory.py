"""处理器工厂模块。

按文件扩展名把输入路径分派给对应格式的处理器。
"""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from ..exceptions import UnsupportedFormatError
from ..models.constants import JPEG_EXTENSIONS
from .processors import ImageProcessor, JpegProcessor


DEFAULT_PROCESSORS: Mapping[str, type[ImageProcessor]] = MappingProxyType(
    {ext: JpegProcessor for ext in JPEG_EXTENSIONS}
)


class ProcessorFactory:
    """处理器工厂

    分派表在构造后只读，实例可在多个线程间共享而无需加锁。
    工厂不做任何 I/O，只对路径字符串做分类。
    """

    def __init__(
        self, processors: Mapping[str, type[ImageProcessor]] | None = None
    ) -> None:
        table = DEFAULT_PROCESSORS if processors is None else processors
        self._processors: Mapping[str, type[ImageProcessor]] = MappingProxyType(
            dict(table)
        )

    @property
    def supported_extensions(self) -> frozenset[str]:
        """支持的扩展名（不含点）"""
        return frozenset(self._processors)

    def with_processor(
        self, extension: str, processor_cls: type[ImageProcessor]
    ) -> "ProcessorFactory":
        """返回注册了新扩展名的工厂副本，原工厂保持不变"""
        table = dict(self._processors)
        table[extension.lstrip(".")] = processor_cls
        return ProcessorFactory(table)

    def create(self, source_path: str | Path) -> ImageProcessor:
        """为输入路径创建处理器

        扩展名区分大小写，没有扩展名或不在分派表中时报错。

        Raises:
            UnsupportedFormatError: 不支持的格式
        """
        path = Path(source_path)
        extension = path.suffix[1:]
        processor_cls = self._processors.get(extension)
        if processor_cls is None:
            supported = ", ".join(sorted(self._processors))
            raise UnsupportedFormatError(
                f"不支持的图像格式: {path.name} (支持的扩展名: {supported})",
                str(source_path),
            )
        return processor_cls(path)


# 全局只读工厂实例
default_factory = ProcessorFactory()
