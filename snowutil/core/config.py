"""
配置管理模块

提供从多种来源加载配置的功能，支持配置文件（YAML/JSON）、环境变量和.env文件，
并按照优先级加载配置。
"""

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseSettings")


def locate_config_file(
    file_name: str, explicit_path: Optional[str] = None
) -> Optional[Path]:
    """
    按照优先级定位配置文件路径

    Args:
        file_name: 配置文件名
        explicit_path: 显式指定的配置文件路径

    Returns:
        Optional[Path]: 配置文件路径，如果未找到则返回None
    """
    paths_to_check = []

    # 1. 显式指定的路径
    if explicit_path:
        paths_to_check.append(Path(explicit_path))

    # 2. 当前工作目录
    paths_to_check.append(Path.cwd() / file_name)

    # 3. 应用程序运行目录
    app_dir = Path(sys.argv[0]).parent.absolute()
    paths_to_check.append(app_dir / file_name)

    # 4. 用户主目录下的.snowutil目录
    paths_to_check.append(Path.home() / ".snowutil" / file_name)

    for path in paths_to_check:
        if path.exists() and path.is_file():
            return path

    return None


def load_yaml_config(file_path: Path) -> Dict[str, Any]:
    """
    加载YAML配置文件

    Args:
        file_path: 配置文件路径

    Returns:
        Dict[str, Any]: 配置字典
    """
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"解析YAML配置文件失败: {e}")
            return {}


def load_json_config(file_path: Path) -> Dict[str, Any]:
    """
    加载JSON配置文件

    Args:
        file_path: 配置文件路径

    Returns:
        Dict[str, Any]: 配置字典
    """
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"解析JSON配置文件失败: {e}")
            return {}


def load_config_from_file(
    config_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    从配置文件加载配置

    显式指定的路径按扩展名选择解析器；否则依次查找config.yaml和config.json。

    Args:
        config_path: 配置文件路径，如果未指定则按优先级自动查找

    Returns:
        Dict[str, Any]: 配置字典
    """
    if config_path and Path(config_path).suffix.lower() == ".json":
        json_path = locate_config_file("config.json", config_path)
        if json_path:
            logger.info(f"已从 {json_path} 加载JSON配置")
            return load_json_config(json_path)

    yaml_path = locate_config_file("config.yaml", config_path)
    if yaml_path:
        logger.info(f"已从 {yaml_path} 加载YAML配置")
        return load_yaml_config(yaml_path)

    json_path = locate_config_file("config.json")
    if json_path:
        logger.info(f"已从 {json_path} 加载JSON配置")
        return load_json_config(json_path)

    logger.debug("未找到配置文件，将使用环境变量和默认值")
    return {}


def load_settings(
    settings_class: Type[T],
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
) -> T:
    """
    加载设置，按照优先级从配置文件、.env文件和环境变量加载

    Args:
        settings_class: 设置类型，必须继承自BaseSettings
        config_path: 配置文件路径，如果未指定则按优先级自动查找
        env_file: .env文件路径，如果未指定则按优先级自动查找

    Returns:
        T: 设置实例
    """
    if env_file:
        env_path: Optional[Path] = Path(env_file)
        if not env_path.exists():
            env_path = None
    else:
        env_path = locate_config_file(".env")

    if env_path:
        load_dotenv(env_path)
        logger.info(f"已加载环境变量文件: {env_path}")

    config_dict = load_config_from_file(config_path)

    # 配置文件具有最高优先级，作为初始化参数覆盖环境变量
    overrides = {
        key: value
        for key, value in config_dict.items()
        if key in settings_class.model_fields
    }
    return settings_class(**overrides)


class LogLevel(str, Enum):
    """日志级别枚举"""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogConfig(BaseModel):
    """日志配置"""

    level: LogLevel = LogLevel.WARNING
    format: str = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    file_path: Optional[str] = None


class SnowflakeSettings(BaseSettings):
    """雪花ID设置

    环境变量使用 ``SNOWUTIL_`` 前缀，嵌套字段使用 ``__`` 分隔，
    例如 ``SNOWUTIL_LOG__LEVEL=DEBUG``。
    """

    layout: str = "twitter"
    epoch: Optional[int] = None
    worker_id: int = 0
    process_id: Optional[int] = None
    log: LogConfig = Field(default_factory=LogConfig)

    model_config = SettingsConfigDict(
        env_prefix="SNOWUTIL_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )
