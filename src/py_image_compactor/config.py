"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、配置文件和环境变量支持。
优先级从低到高: 默认值 < config.toml < ICCLI_ 环境变量 < 命令行参数。
核心模块不读取配置，只接收解析好的值。
"""

import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .exceptions import ValidationError


ENV_PREFIX = "ICCLI_"
DEFAULT_CONFIG_FILE = "config.toml"


@dataclass(frozen=True)
class CompactorDefaults:
    """压缩相关的默认配置"""

    OUTPUT_DIR: str = "/tmp"
    QUALITY: int = 50

    # 并发设置
    MAX_WORKERS: int = 8

    # 远程下载
    FETCH_TIMEOUT: float = 30.0
    RETAIN_TEMP_FILES: bool = False


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


def _coerce(section: Any, key: str, raw: Any, origin: str) -> Any:
    """按默认值的类型转换配置值"""
    default = getattr(section, key)
    try:
        if isinstance(default, bool):
            return _parse_bool(raw)
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
        return str(raw)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"配置项 {key} 的值无效 ({origin}): {raw!r}") from e


class AppConfig:
    """应用程序配置管理器

    支持配置文件和环境变量覆盖默认配置
    """

    def __init__(
        self,
        config_file: str | Path | None = DEFAULT_CONFIG_FILE,
        environ: dict[str, str] | None = None,
    ):
        self.compactor = CompactorDefaults()
        self.logging = LoggingDefaults()

        if config_file is not None:
            self._load_from_file(Path(config_file))
        self._load_from_env(os.environ if environ is None else environ)

    def _sections(self) -> dict[str, tuple[str, Any]]:
        """配置键（小写）到所属分区的映射"""
        mapping: dict[str, tuple[str, Any]] = {}
        for attr in ("compactor", "logging"):
            section = getattr(self, attr)
            for field in fields(section):
                mapping[field.name.lower()] = (attr, field.name)
        return mapping

    def _apply(self, key: str, raw: Any, origin: str) -> bool:
        target = self._sections().get(key.lower())
        if target is None:
            return False
        attr, field_name = target
        section = getattr(self, attr)
        value = _coerce(section, field_name, raw, origin)
        if field_name == "LOG_LEVEL":
            value = value.upper()
        setattr(self, attr, replace(section, **{field_name: value}))
        return True

    def _load_from_file(self, path: Path) -> None:
        """从 TOML 配置文件加载配置，文件不存在时跳过"""
        if not path.is_file():
            return

        try:
            with open(path, "rb") as fh:
                data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as e:
            raise ValidationError(f"配置文件格式错误 {path}: {e}") from e
        except OSError as e:
            raise ValidationError(f"无法读取配置文件 {path}: {e}") from e

        for key, raw in data.items():
            self._apply(key, raw, str(path))

    def _load_from_env(self, environ: Any) -> None:
        """从环境变量加载配置"""
        for name, raw in environ.items():
            if name.startswith(ENV_PREFIX) and raw != "":
                self._apply(name[len(ENV_PREFIX) :], raw, name)


# 全局配置实例，首次访问时创建
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """获取全局配置实例

    Raises:
        ValidationError: 配置文件或环境变量中的值无效
    """
    global _config
    if _config is None:
        _config = AppConfig()
    return _config


def reset_config() -> AppConfig:
    """重置配置（主要用于测试）"""
    global _config
    _config = None
    return get_config()
