"""测试配置文件。

提供测试所需的fixtures和配置。测试图片在运行时用 Pillow 生成。
"""

import tempfile
from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from PIL import Image, ImageDraw


def _photo_like_image(size: tuple[int, int], mode: str = "RGB") -> Image.Image:
    """生成带渐变、色块和噪声的类照片图像，低质量编码时明显变小"""
    width, height = size
    red = Image.linear_gradient("L").resize(size)
    green = Image.radial_gradient("L").resize(size)
    blue = Image.effect_noise(size, 64)
    img = Image.merge("RGB", (red, green, blue))

    draw = ImageDraw.Draw(img)
    for i in range(12):
        x, y = (i * 37) % width, (i * 23) % height
        color = (i * 19 % 256, i * 41 % 256, i * 73 % 256)
        draw.ellipse([x, y, x + width // 5, y + height // 5], fill=color)

    noise = Image.effect_noise(size, 48).convert("RGB")
    img = Image.blend(img, noise, 0.25)
    return img.convert(mode) if mode != "RGB" else img


def encode_jpeg(
    size: tuple[int, int] = (320, 240), quality: int = 95, mode: str = "RGB"
) -> bytes:
    """生成 JPEG 字节"""
    buffer = BytesIO()
    _photo_like_image(size, mode).save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """输出目录fixture"""
    out = temp_dir / "out"
    out.mkdir()
    return out


@pytest.fixture
def make_jpeg(temp_dir: Path) -> Callable[..., Path]:
    """在临时目录中创建 JPEG 文件的工厂"""

    def _make(
        name: str = "photo.jpg",
        size: tuple[int, int] = (320, 240),
        quality: int = 95,
        mode: str = "RGB",
    ) -> Path:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encode_jpeg(size, quality, mode))
        return path

    return _make


@pytest.fixture
def jpeg_bytes() -> bytes:
    """远程响应用的 JPEG 内容"""
    return encode_jpeg((200, 150))


@pytest.fixture
def mock_client(jpeg_bytes: bytes) -> Callable[..., httpx.Client]:
    """基于 httpx.MockTransport 的客户端工厂

    routes 把 URL 路径映射到 (状态码, 响应体)；未登记的路径返回 404，
    /unreachable 开头的路径模拟连接失败。
    """
    clients: list[httpx.Client] = []

    def _make(routes: dict[str, tuple[int, bytes]] | None = None) -> httpx.Client:
        table = routes if routes is not None else {"/photo2.jpg": (200, jpeg_bytes)}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.startswith("/unreachable"):
                raise httpx.ConnectError("连接被拒绝", request=request)
            status, body = table.get(request.url.path, (404, b"not found"))
            return httpx.Response(status, content=body)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
