import json

import pytest
from click.testing import CliRunner
from loguru import logger

from snowutil.cli.main import main

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """在空目录中运行命令，结束后移除指向已关闭流的日志输出"""
    monkeypatch.chdir(tmp_path)
    for key in ("SNOWUTIL_LAYOUT", "SNOWUTIL_EPOCH", "SNOWUTIL_WORKER_ID"):
        monkeypatch.delenv(key, raising=False)
    yield tmp_path
    logger.remove()


# 测试用例
def test_decode_discord():
    """测试解码Discord雪花ID"""
    result = runner.invoke(
        main, ["decode", "175928847299117063", "--layout", "discord"]
    )
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert "timestamp: 1462015105796" in lines
    assert "worker_id: 1" in lines
    assert "process_id: 0" in lines
    assert "increment: 7" in lines


def test_decode_json():
    """测试以JSON格式输出"""
    result = runner.invoke(
        main, ["decode", "175928847299117063", "--layout", "discord", "--json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["id"] == "175928847299117063"
    assert data["created_at"] == "2016-04-30T11:18:25.796000+00:00"


def test_decode_radix():
    """测试按指定进制解码"""
    result = runner.invoke(main, ["decode", "ff", "--radix", "16", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["layout"] == "twitter"
    assert data["increment"] == 255


def test_decode_invalid():
    """测试解码无效ID"""
    result = runner.invoke(main, ["decode", "not-a-number"])
    assert result.exit_code == 1
    assert "错误" in result.output


def test_decode_generic_requires_epoch():
    """测试通用布局未指定纪元"""
    result = runner.invoke(main, ["decode", "1", "--layout", "generic"])
    assert result.exit_code == 1

    result = runner.invoke(
        main,
        ["decode", "4194304", "--layout", "generic", "--epoch", "2015-01-01", "--json"],
    )
    assert result.exit_code == 0
    assert json.loads(result.stdout)["timestamp"] == 1420070400001


def test_generate_twitter():
    """测试生成Twitter雪花ID"""
    result = runner.invoke(
        main,
        ["generate", "--layout", "twitter", "--timestamp", "0", "--increment", "5"],
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == "5"


def test_generate_discord_process_id():
    """测试生成带进程ID的Discord雪花ID"""
    result = runner.invoke(
        main,
        [
            "generate",
            "--layout",
            "discord",
            "--timestamp",
            "1",
            "--worker-id",
            "3",
            "--process-id",
            "7",
            "--increment",
            "0",
        ],
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == str((1 << 22) | (103 << 12))


def test_generate_count_uses_counter():
    """测试批量生成使用自增计数器"""
    result = runner.invoke(main, ["generate", "--count", "3", "--radix", "16"])
    assert result.exit_code == 0
    values = [int(line, 16) for line in result.stdout.split()]
    assert len(values) == 3
    assert len(set(values)) == 3


def test_generate_now():
    """测试使用当前时间生成"""
    result = runner.invoke(main, ["generate", "--now", "--increment", "0"])
    assert result.exit_code == 0
    value = int(result.stdout.strip())
    assert value >> 22 > 0


def test_generate_conflicting_options():
    """测试时间戳选项冲突"""
    result = runner.invoke(main, ["generate", "--now", "--timestamp", "1"])
    assert result.exit_code == 1


def test_config_file_sets_layout(isolated):
    """测试通过配置文件指定默认布局"""
    config = isolated / "snow.yaml"
    config.write_text("layout: discord\n", encoding="utf-8")
    result = runner.invoke(
        main, ["--config", str(config), "decode", "175928847299117063"]
    )
    assert result.exit_code == 0
    assert "process_id: 0" in result.stdout.splitlines()


def test_unknown_layout():
    """测试未知布局"""
    result = runner.invoke(main, ["decode", "1", "--layout", "instagram"])
    assert result.exit_code == 1
    assert "instagram" in result.output


def test_decode_out_of_range_epoch():
    """测试纪元过大时仍能解码"""
    result = runner.invoke(
        main, ["decode", "4194304", "--epoch", str(10**17), "--json"]
    )
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["timestamp"] == 10**17 + 1
    assert data["created_at"] is None


def test_invalid_config_value(isolated):
    """测试配置文件中的无效值"""
    config = isolated / "snow.yaml"
    config.write_text("worker_id: abc\n", encoding="utf-8")
    result = runner.invoke(main, ["--config", str(config), "generate"])
    assert result.exit_code == 1
    assert "错误" in result.output
    assert "Traceback" not in result.output
