"""命令行接口。

从位置参数、列表文件和标准输入收集输入源，解析配置后交给批量处理器。
"""

from pathlib import Path

import click

from . import __version__
from .compactor import ImageCompactor
from .config import DEFAULT_CONFIG_FILE, AppConfig
from .exceptions import CompactorError, QualityOutOfRangeError
from .models import BatchResult, Quality
from .utils.file_helpers import iter_source_lines, read_source_file
from .utils.logging_helpers import get_logger, setup_logging


logger = get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _collect_sources(
    inputs: tuple[str, ...], from_file: Path | None, read_stdin: bool
) -> list[str]:
    """按 位置参数 -> 列表文件 -> 标准输入 的顺序收集输入源"""
    sources = list(inputs)
    if from_file is not None:
        sources.extend(read_source_file(from_file))
    if read_stdin:
        logger.warning("从标准输入读取文件列表，按 Ctrl+D 结束输入")
        sources.extend(iter_source_lines(click.get_text_stream("stdin")))
    return sources


def _report(result: BatchResult) -> None:
    for item in result.get_failed_items():
        click.echo(f"处理图像失败 {item.source}: {item.error}", err=True)
    click.echo(result.get_summary())


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("inputs", nargs=-1)
@click.option(
    "--from-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="从文件读取输入路径，每行一个",
)
@click.option("--stdin", "read_stdin", is_flag=True, help="从标准输入读取输入路径")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="输出目录",
)
@click.option("--quality", type=int, help="输出图像质量 (0-100)")
@click.option(
    "--max-workers", type=click.IntRange(min=1), help="最大并发数"
)
@click.option(
    "--fetch-timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="远程下载超时（秒）",
)
@click.option(
    "--retain-temp-files/--cleanup-temp-files",
    default=None,
    help="是否保留远程下载的临时文件",
)
@click.option(
    "--fail-on-error", is_flag=True, help="任一输入源失败时以退出码 1 结束"
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="日志级别",
)
@click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    help="TOML 配置文件（不存在时忽略）",
)
@click.version_option(__version__, "--version", "-v", prog_name="iccli")
@click.pass_context
def main(
    ctx: click.Context,
    inputs: tuple[str, ...],
    from_file: Path | None,
    read_stdin: bool,
    output_dir: Path | None,
    quality: int | None,
    max_workers: int | None,
    fetch_timeout: float | None,
    retain_temp_files: bool | None,
    fail_on_error: bool,
    log_level: str | None,
    config_file: Path,
) -> None:
    """批量压缩 JPEG 图像（本地路径或 HTTP/HTTPS URL）。"""
    try:
        config = AppConfig(config_file=config_file)
    except CompactorError as e:
        raise click.UsageError(e.message) from e

    setup_logging(log_level or config.logging.LOG_LEVEL, config.logging.LOG_FORMAT)

    output_dir = output_dir or Path(config.compactor.OUTPUT_DIR)
    logger.info(f"输出目录: {output_dir}")

    raw_quality = quality if quality is not None else config.compactor.QUALITY
    logger.info(f"图像质量: {raw_quality}")
    try:
        resolved_quality = Quality.from_int(raw_quality)
    except QualityOutOfRangeError as e:
        raise click.UsageError(e.message) from e

    sources = _collect_sources(inputs, from_file, read_stdin)
    if not sources:
        raise click.UsageError("没有输入源：请提供路径/URL、--from-file 或 --stdin")

    with ImageCompactor(
        max_workers=max_workers or config.compactor.MAX_WORKERS,
        retain_temp_files=(
            config.compactor.RETAIN_TEMP_FILES
            if retain_temp_files is None
            else retain_temp_files
        ),
        fetch_timeout=fetch_timeout or config.compactor.FETCH_TIMEOUT,
    ) as compactor:
        result = compactor.shrink_batch(sources, output_dir, resolved_quality)

    _report(result)

    if fail_on_error and not result.success:
        ctx.exit(1)


if __name__ == "__main__":
    main()
