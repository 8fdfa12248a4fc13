"""输入解析模块。

把输入字符串转换为处理器可读的本地文件：本地路径原样返回，
远程 URL 通过 HTTP GET 下载后写入临时文件。
"""

import tempfile
from pathlib import Path
from typing import Any

import httpx

from ..exceptions import FetchError, ImageIOError
from ..models.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX
from ..models.source import (
    ImageSource,
    LocalSource,
    RemoteSource,
    StagedInput,
    classify_source,
)
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()

DEFAULT_FETCH_TIMEOUT = 30.0


class InputResolver:
    """输入解析器

    远程下载只尝试一次，不重试。下载生成的临时文件不会被解析器删除，
    由调用方决定保留或清理。
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        temp_dir: str | Path | None = None,
    ) -> None:
        """初始化输入解析器

        Args:
            client: 共享的 httpx 客户端，None 时自动创建并由解析器负责关闭
            timeout: 单次下载超时（秒），仅对自动创建的客户端生效
            temp_dir: 临时文件目录，None 使用系统默认
        """
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self.temp_dir = Path(temp_dir) if temp_dir else None

    @staticmethod
    def classify(source: str) -> ImageSource:
        """分类输入源"""
        return classify_source(source)

    def resolve(self, source: str) -> StagedInput:
        """解析输入源为本地文件

        本地路径不检查是否存在，交由处理器打开时判断。

        Raises:
            FetchError: 远程获取失败
            ImageIOError: 临时文件写入失败
        """
        match self.classify(source):
            case RemoteSource(url=url):
                return self._stage_remote(url)
            case LocalSource(path=path):
                return StagedInput(source=source, path=path)

    def _stage_remote(self, url: str) -> StagedInput:
        """下载远程内容并写入临时文件"""
        content = self._fetch(url)

        try:
            tmp = tempfile.NamedTemporaryFile(
                prefix=TEMP_FILE_PREFIX,
                suffix=TEMP_FILE_SUFFIX,
                dir=self.temp_dir,
                delete=False,
            )
        except OSError as e:
            raise ImageIOError("无法创建临时文件", e, url) from e

        temp_path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(content)
        except OSError as e:
            # 写入失败的文件尚未交给调用方登记，只能在这里删除
            temp_path.unlink(missing_ok=True)
            raise ImageIOError("无法写入临时文件", e, url) from e

        logger.debug(MessageFormatter.temp_file_created(temp_path, url))
        return StagedInput(source=url, path=temp_path, is_temporary=True)

    def _fetch(self, url: str) -> bytes:
        """单次 GET 请求，返回完整响应体"""
        try:
            response = self.client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"无法从 URL 获取图像: {url} - {e}", url) from e

        if not response.is_success:
            raise FetchError(
                f"无法从 URL 获取图像: {url} (HTTP {response.status_code})",
                url,
                status_code=response.status_code,
            )
        return response.content

    def close(self) -> None:
        """关闭自动创建的 HTTP 客户端"""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "InputResolver":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
