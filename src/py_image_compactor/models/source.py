"""输入源模型。

输入源是本地路径或 URL 两种之一，暂存输入是处理器实际读取的本地文件。
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import is_remote_source


class LocalSource(BaseModel):
    """本地文件输入源"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local"] = "local"
    path: Path = Field(description="本地文件路径")


class RemoteSource(BaseModel):
    """HTTP/HTTPS 输入源"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["remote"] = "remote"
    url: str = Field(description="远程 URL")


ImageSource = Annotated[LocalSource | RemoteSource, Field(discriminator="kind")]


def classify_source(source: str) -> ImageSource:
    """按前缀把输入字符串分类为本地或远程输入源

    只做前缀判断，不校验 scheme 之外的 URL 结构，也不检查本地文件是否存在。
    """
    if is_remote_source(source):
        return RemoteSource(url=source)
    return LocalSource(path=Path(source))


class StagedInput(BaseModel):
    """处理器实际读取的本地文件"""

    model_config = ConfigDict(frozen=True)

    source: str = Field(description="原始输入字符串")
    path: Path = Field(description="本地可读路径")
    is_temporary: bool = Field(False, description="是否为下载生成的临时文件")
