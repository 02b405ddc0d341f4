"""
命令行工具主入口模块

提供雪花ID的解码与生成命令。
"""

import sys
import time
from typing import Optional

import click
from pydantic import ValidationError

from snowutil import __version__
from snowutil.core.config import SnowflakeSettings, load_settings
from snowutil.core.exceptions import InvalidSnowflakeError, SnowflakeError
from snowutil.core.logging import get_logger, setup_logging
from snowutil.snowflake import SnowflakeLayout, get_layout
from snowutil.utils.time import json_dumps

logger = get_logger(__name__)


def _fail(error: SnowflakeError) -> None:
    click.echo(f"错误: {error.message}", err=True)
    sys.exit(1)


def _resolve(
    settings: SnowflakeSettings, layout_name: Optional[str], epoch: Optional[str]
):
    layout: SnowflakeLayout = get_layout(layout_name or settings.layout)
    if epoch is not None:
        return layout, layout.resolve_epoch(epoch)
    if settings.epoch is not None:
        return layout, settings.epoch
    return layout, layout.resolve_epoch()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path", default=None, help="配置文件路径（YAML/JSON）"
)
@click.option("--env-file", default=None, help=".env文件路径")
@click.pass_context
def main(
    ctx: click.Context, config_path: Optional[str], env_file: Optional[str]
) -> None:
    """雪花ID编解码命令行工具"""
    try:
        settings = load_settings(SnowflakeSettings, config_path, env_file)
    except ValidationError as e:
        click.echo(f"错误: 配置无效: {e}", err=True)
        sys.exit(1)
    setup_logging(settings.log)
    ctx.obj = settings


@main.command()
@click.argument("snowflake_id")
@click.option(
    "--layout", "layout_name", default=None, help="位布局: generic/discord/twitter"
)
@click.option(
    "--epoch", default=None, help="纪元（毫秒或日期），默认使用布局纪元"
)
@click.option("--radix", default=10, type=int, help="输入ID的进制，默认为10")
@click.option("--json", "as_json", is_flag=True, help="以JSON格式输出")
@click.pass_obj
def decode(
    settings: SnowflakeSettings,
    snowflake_id: str,
    layout_name: Optional[str],
    epoch: Optional[str],
    radix: int,
    as_json: bool,
) -> None:
    """
    解码雪花ID

    SNOWFLAKE_ID: 要解码的雪花ID
    """
    try:
        layout, resolved_epoch = _resolve(settings, layout_name, epoch)
        raw = snowflake_id
        if radix != 10:
            try:
                raw = int(snowflake_id, radix)
            except ValueError as e:
                raise InvalidSnowflakeError(
                    f"无法按{radix}进制解析雪花ID: {snowflake_id}"
                ) from e
        flake = layout.from_raw(raw, epoch=resolved_epoch)
    except SnowflakeError as e:
        _fail(e)
        return

    logger.debug(f"解码雪花ID {snowflake_id}，布局: {layout.name}")
    data = flake.to_dict()
    if as_json:
        click.echo(json_dumps(data, ensure_ascii=False))
        return

    for key, value in data.items():
        click.echo(f"{key}: {value}")


@main.command()
@click.option(
    "--layout", "layout_name", default=None, help="位布局: generic/discord/twitter"
)
@click.option(
    "--epoch", default=None, help="纪元（毫秒或日期），默认使用布局纪元"
)
@click.option(
    "--timestamp", default=None, type=int, help="相对纪元的时间戳（毫秒）"
)
@click.option(
    "--now", is_flag=True, help="使用当前时间减去纪元作为时间戳"
)
@click.option("--worker-id", default=None, type=int, help="工作机器ID")
@click.option(
    "--process-id", default=None, type=int, help="进程ID（仅discord布局）"
)
@click.option(
    "--increment", default=None, type=int, help="序列号，默认取自自增计数器"
)
@click.option("--count", default=1, type=click.IntRange(min=1), help="生成数量")
@click.option("--radix", default=10, type=int, help="输出进制，默认为10")
@click.pass_obj
def generate(
    settings: SnowflakeSettings,
    layout_name: Optional[str],
    epoch: Optional[str],
    timestamp: Optional[int],
    now: bool,
    worker_id: Optional[int],
    process_id: Optional[int],
    increment: Optional[int],
    count: int,
    radix: int,
) -> None:
    """生成雪花ID"""
    if now and timestamp is not None:
        click.echo("错误: --timestamp 与 --now 不能同时使用", err=True)
        sys.exit(1)

    try:
        layout, resolved_epoch = _resolve(settings, layout_name, epoch)
        if now:
            timestamp = time.time_ns() // 1_000_000 - resolved_epoch

        fields = {
            "timestamp": timestamp,
            "worker_id": worker_id if worker_id is not None else settings.worker_id,
            "process_id": process_id if process_id is not None else settings.process_id,
            "increment": increment,
        }
        for _ in range(count):
            flake = layout.from_parts(epoch=resolved_epoch, **fields)
            click.echo(flake.to_string(radix))
    except SnowflakeError as e:
        _fail(e)
        return

    logger.debug(f"已生成 {count} 个雪花ID，布局: {layout.name}")


if __name__ == "__main__":
    main()
