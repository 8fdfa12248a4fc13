"""图像处理器模块。

每个处理器绑定一个本地输入文件，负责解码、按目标质量重新编码并写出结果。
"""

from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, ClassVar

from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from ..exceptions import DecodingError, ImageIOError
from ..models.quality import Quality
from ..utils.file_helpers import atomic_write_bytes
from ..utils.logging_helpers import get_logger


logger = get_logger()


class ImageProcessor(ABC):
    """图像处理器接口

    处理器只持有输入路径，可用不同的质量和输出路径重复调用 shrink。
    """

    format_name: ClassVar[str]

    def __init__(self, input_path: str | Path) -> None:
        self.input_path = Path(input_path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.input_path)!r})"

    @abstractmethod
    def shrink(self, output_path: str | Path, quality: Quality) -> tuple[int, int]:
        """按给定质量重新编码输入图像并写入 output_path

        Returns:
            tuple[int, int]: 图像宽高

        Raises:
            ImageIOError: 输入无法打开或输出无法写入
            DecodingError: 输入不是有效的该格式图像，或编码失败
        """


class JpegProcessor(ImageProcessor):
    """JPEG 处理器

    完整解码后才写输出，失败时不会留下半写的文件。
    """

    format_name = "JPEG"

    def shrink(self, output_path: str | Path, quality: Quality) -> tuple[int, int]:
        output_path = Path(output_path)

        try:
            fh = open(self.input_path, "rb")
        except OSError as e:
            raise ImageIOError(
                f"无法打开输入文件 {self.input_path}", e, str(self.input_path)
            ) from e

        with fh:
            img = self._decode(fh)

        data = self._encode(img, quality)

        try:
            atomic_write_bytes(output_path, data)
        except OSError as e:
            raise ImageIOError(
                f"无法写入输出文件 {output_path}", e, str(self.input_path)
            ) from e

        logger.debug(
            f"JPEG 重新编码完成: {self.input_path} -> {output_path} "
            f"(质量 {quality}, {img.width}x{img.height}, {img.mode})"
        )
        return img.size

    def _decode(self, fh: BinaryIO) -> Image.Image:
        """解码完整像素数据，保留尺寸和原始色彩模式"""
        try:
            img = Image.open(fh, formats=[self.format_name])
            img.load()
        except UnidentifiedImageError as e:
            raise DecodingError(
                f"无法开始解码 JPEG: {e}", str(self.input_path)
            ) from e
        except (DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            raise DecodingError(
                f"无法解析 JPEG 图像: {e}", str(self.input_path)
            ) from e
        return img

    def _encode(self, img: Image.Image, quality: Quality) -> bytes:
        """在内存中按目标质量编码"""
        save_params: dict[str, Any] = {
            "format": self.format_name,
            "quality": quality.value,
        }
        if icc_profile := img.info.get("icc_profile"):
            save_params["icc_profile"] = icc_profile

        buffer = BytesIO()
        try:
            img.save(buffer, **save_params)
        except (OSError, ValueError) as e:
            raise DecodingError(
                f"无法编码 JPEG 图像: {e}", str(self.input_path)
            ) from e
        return buffer.getvalue()
