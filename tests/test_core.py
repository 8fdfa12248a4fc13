"""核心功能测试。

测试格式分派、JPEG 重新编码和输入解析。
"""

import errno
import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from py_image_compactor.core import (
    ImageProcessor,
    InputResolver,
    JpegProcessor,
    ProcessorFactory,
    default_factory,
)
from py_image_compactor.exceptions import (
    DecodingError,
    FetchError,
    ImageIOError,
    UnsupportedFormatError,
)
from py_image_compactor.models import (
    TEMP_FILE_PREFIX,
    TEMP_FILE_SUFFIX,
    LocalSource,
    Quality,
    RemoteSource,
)


class TestProcessorFactory:
    """处理器工厂测试"""

    @pytest.mark.parametrize("name", ["a.jpg", "a.jpeg", "dir/photo.jpg"])
    def test_create_jpeg(self, name: str):
        processor = default_factory.create(name)
        assert isinstance(processor, JpegProcessor)
        assert processor.input_path == Path(name)

    @pytest.mark.parametrize("name", ["a.png", "a", "a.JPG", "a.Jpeg", "a.jpg.txt"])
    def test_unsupported(self, name: str):
        """扩展名区分大小写，没有扩展名也不支持"""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            default_factory.create(name)
        assert exc_info.value.source == name

    def test_supported_extensions(self):
        assert default_factory.supported_extensions == frozenset({"jpg", "jpeg"})

    def test_with_processor_leaves_original_unchanged(self):
        """注册新格式返回新工厂，共享的默认工厂不受影响"""

        class PngProcessor(ImageProcessor):
            format_name = "PNG"

            def shrink(self, output_path, quality):
                return (0, 0)

        extended = default_factory.with_processor(".png", PngProcessor)

        assert isinstance(extended.create("a.png"), PngProcessor)
        assert isinstance(extended.create("a.jpg"), JpegProcessor)
        with pytest.raises(UnsupportedFormatError):
            default_factory.create("a.png")

    def test_custom_table(self):
        factory = ProcessorFactory({"jpe": JpegProcessor})
        assert isinstance(factory.create("x.jpe"), JpegProcessor)
        with pytest.raises(UnsupportedFormatError):
            factory.create("x.jpg")


class TestJpegProcessor:
    """JPEG 处理器测试"""

    def test_round_trip_keeps_dimensions(self, make_jpeg, output_dir: Path):
        """输出是可解码的 JPEG，尺寸不变"""
        source = make_jpeg(size=(320, 240))
        output_path = output_dir / "photo.jpg"

        dimensions = JpegProcessor(source).shrink(output_path, Quality.from_int(50))

        assert dimensions == (320, 240)
        with Image.open(output_path) as img:
            assert img.format == "JPEG"
            assert img.size == (320, 240)

    @pytest.mark.parametrize("value", [0, 1, 75, 100])
    def test_any_valid_quality(self, make_jpeg, output_dir: Path, value: int):
        source = make_jpeg()
        output_path = output_dir / f"q{value}.jpg"

        JpegProcessor(source).shrink(output_path, Quality.from_int(value))

        with Image.open(output_path) as img:
            img.load()
            assert img.size == (320, 240)

    def test_grayscale_mode_preserved(self, make_jpeg, output_dir: Path):
        """保留原始色彩模式"""
        source = make_jpeg("gray.jpg", mode="L")
        output_path = output_dir / "gray.jpg"

        JpegProcessor(source).shrink(output_path, Quality.from_int(40))

        with Image.open(output_path) as img:
            assert img.mode == "L"

    def test_lower_quality_is_smaller(self, make_jpeg, output_dir: Path):
        """典型的类照片图像在低质量下会变小"""
        source = make_jpeg(size=(640, 480), quality=95)
        low = output_dir / "low.jpg"
        high = output_dir / "high.jpg"

        processor = JpegProcessor(source)
        processor.shrink(low, Quality.from_int(30))
        processor.shrink(high, Quality.from_int(100))

        assert low.stat().st_size < high.stat().st_size
        assert low.stat().st_size < source.stat().st_size

    def test_idempotent(self, make_jpeg, output_dir: Path):
        """相同输入、输出和质量两次调用得到相同字节"""
        source = make_jpeg()
        output_path = output_dir / "photo.jpg"
        processor = JpegProcessor(source)
        quality = Quality.from_int(60)

        processor.shrink(output_path, quality)
        first = output_path.read_bytes()
        processor.shrink(output_path, quality)

        assert output_path.read_bytes() == first

    def test_missing_input(self, temp_dir: Path, output_dir: Path):
        output_path = output_dir / "missing.jpg"
        processor = JpegProcessor(temp_dir / "missing.jpg")

        with pytest.raises(ImageIOError) as exc_info:
            processor.shrink(output_path, Quality.from_int(50))

        assert isinstance(exc_info.value.os_error, FileNotFoundError)
        assert not output_path.exists()

    def test_not_a_jpeg(self, temp_dir: Path, output_dir: Path):
        """扩展名是 .jpg 但内容不是 JPEG"""
        source = temp_dir / "fake.jpg"
        source.write_text("[package]\nname = 'not-an-image'\n")
        output_path = output_dir / "fake.jpg"

        with pytest.raises(DecodingError):
            JpegProcessor(source).shrink(output_path, Quality.from_int(50))
        assert not output_path.exists()

    def test_png_content_with_jpg_extension(self, temp_dir: Path, output_dir: Path):
        buffer = BytesIO()
        Image.new("RGB", (10, 10), "red").save(buffer, format="PNG")
        source = temp_dir / "really_png.jpg"
        source.write_bytes(buffer.getvalue())

        with pytest.raises(DecodingError):
            JpegProcessor(source).shrink(output_dir / "x.jpg", Quality.from_int(50))

    def test_truncated_jpeg(self, make_jpeg, output_dir: Path):
        source = make_jpeg()
        data = source.read_bytes()
        source.write_bytes(data[: len(data) // 2])
        output_path = output_dir / "photo.jpg"

        with pytest.raises(DecodingError):
            JpegProcessor(source).shrink(output_path, Quality.from_int(50))
        assert not output_path.exists()

    def test_unwritable_destination(self, make_jpeg, temp_dir: Path):
        """输出目录不存在时报 I/O 错误，处理器不会自己创建目录"""
        source = make_jpeg()
        output_path = temp_dir / "no_such_dir" / "photo.jpg"

        with pytest.raises(ImageIOError):
            JpegProcessor(source).shrink(output_path, Quality.from_int(50))
        assert not output_path.parent.exists()

    def test_no_partial_files_left(self, make_jpeg, output_dir: Path):
        source = make_jpeg()
        JpegProcessor(source).shrink(output_dir / "photo.jpg", Quality.from_int(50))

        assert [p.name for p in output_dir.iterdir()] == ["photo.jpg"]


class TestInputResolver:
    """输入解析器测试"""

    def test_classify(self):
        assert isinstance(InputResolver.classify("a.jpg"), LocalSource)
        assert isinstance(InputResolver.classify("https://x.test/a.jpg"), RemoteSource)

    def test_local_path_unchanged(self, mock_client):
        """本地路径原样返回，不检查是否存在"""
        with InputResolver(client=mock_client()) as resolver:
            staged = resolver.resolve("does/not/exist.jpg")

        assert staged.path == Path("does/not/exist.jpg")
        assert staged.source == "does/not/exist.jpg"
        assert not staged.is_temporary

    def test_remote_success_is_staged(self, mock_client, temp_dir: Path):
        resolver = InputResolver(client=mock_client(), temp_dir=temp_dir)
        url = "https://example.test/photo2.jpg"

        staged = resolver.resolve(url)

        assert staged.is_temporary
        assert staged.source == url
        assert staged.path.parent == temp_dir
        assert staged.path.name.startswith(TEMP_FILE_PREFIX)
        assert staged.path.name.endswith(TEMP_FILE_SUFFIX)
        with Image.open(staged.path) as img:
            img.load()
            assert img.format == "JPEG"
            assert img.size == (200, 150)

    def test_remote_404(self, mock_client, temp_dir: Path):
        resolver = InputResolver(client=mock_client(), temp_dir=temp_dir)

        with pytest.raises(FetchError) as exc_info:
            resolver.resolve("https://example.test/missing.jpg")

        assert exc_info.value.status_code == 404
        assert list(temp_dir.iterdir()) == []

    def test_remote_server_error(self, mock_client, temp_dir: Path):
        client = mock_client({"/boom.jpg": (500, b"")})
        resolver = InputResolver(client=client, temp_dir=temp_dir)

        with pytest.raises(FetchError) as exc_info:
            resolver.resolve("http://example.test/boom.jpg")
        assert exc_info.value.status_code == 500

    def test_transport_failure(self, mock_client, temp_dir: Path):
        resolver = InputResolver(client=mock_client(), temp_dir=temp_dir)

        with pytest.raises(FetchError) as exc_info:
            resolver.resolve("https://example.test/unreachable/a.jpg")

        assert exc_info.value.status_code is None
        assert exc_info.value.source == "https://example.test/unreachable/a.jpg"

    def test_injected_client_not_closed(self, mock_client):
        client = mock_client()
        resolver = InputResolver(client=client)
        resolver.close()

        assert not client.is_closed

    def test_failed_staging_write_leaves_no_file(
        self, mock_client, temp_dir: Path, monkeypatch
    ):
        """临时文件写入失败时删除已创建的文件"""
        real_named_temporary_file = tempfile.NamedTemporaryFile

        def _disk_full(*args, **kwargs):
            handle = real_named_temporary_file(*args, **kwargs)

            def _write(data):
                raise OSError(errno.ENOSPC, "No space left on device")

            handle.write = _write
            return handle

        monkeypatch.setattr(tempfile, "NamedTemporaryFile", _disk_full)
        resolver = InputResolver(client=mock_client(), temp_dir=temp_dir)

        with pytest.raises(ImageIOError) as exc_info:
            resolver.resolve("https://example.test/photo2.jpg")

        assert exc_info.value.errno == errno.ENOSPC
        assert list(temp_dir.glob(f"{TEMP_FILE_PREFIX}*")) == []
