import pytest
from pydantic import ValidationError

from snowutil import (
    DISCORD_EPOCH,
    DISCORD_LAYOUT,
    GENERIC_LAYOUT,
    TWITTER_EPOCH,
    TWITTER_LAYOUT,
    IncrementCounter,
    Snowflake,
    SnowflakeLayout,
    UnknownLayoutError,
    get_layout,
)


# Discord文档中的示例ID
DISCORD_SAMPLE = 175928847299117063


def test_epoch_constants():
    """测试厂商纪元常量"""
    assert DISCORD_EPOCH == 1420070400000
    assert TWITTER_EPOCH == 1288834974657
    assert DISCORD_LAYOUT.epoch == DISCORD_EPOCH
    assert TWITTER_LAYOUT.epoch == TWITTER_EPOCH
    assert GENERIC_LAYOUT.epoch is None


def test_discord_decode_sample():
    """测试解码Discord示例ID"""
    flake = DISCORD_LAYOUT.from_raw(str(DISCORD_SAMPLE))
    assert flake.timestamp == 1462015105796
    assert flake.worker_id == 1
    assert flake.process_id == 0
    assert flake.increment == 7
    assert flake.epoch == DISCORD_EPOCH


def test_discord_worker_and_process():
    """测试Discord布局组合工作机器ID与进程ID"""
    flake = DISCORD_LAYOUT.from_parts(worker_id=3, process_id=7, increment=0)
    assert flake.worker_id == 3
    assert flake.process_id == 7

    # 通用布局按10位读取组合后的字段
    generic = Snowflake.from_raw(DISCORD_EPOCH, int(flake))
    assert generic.worker_id == (3 << 5) | 7 == 103


def test_discord_process_only():
    """测试只指定进程ID时工作机器ID默认为0"""
    flake = DISCORD_LAYOUT.from_parts(process_id=9, increment=0)
    assert flake.worker_id == 0
    assert flake.process_id == 9


def test_discord_without_process_id_uses_generic_packing():
    """测试未指定进程ID时按通用路径写入低5位"""
    flake = DISCORD_LAYOUT.from_parts(worker_id=3, increment=0)
    assert flake.worker_id == 0
    assert flake.process_id == 3


def test_discord_does_not_mutate_input():
    """测试Discord布局不修改调用方的输入"""
    parts = {"workerId": 3, "processId": 7, "increment": 1}
    snapshot = dict(parts)
    DISCORD_LAYOUT.from_parts(parts)
    assert parts == snapshot


def test_discord_to_dict_has_process_id():
    """测试Discord布局的解码字典包含进程ID"""
    data = DISCORD_LAYOUT.from_raw(DISCORD_SAMPLE).to_dict()
    assert data["layout"] == "discord"
    assert data["process_id"] == 0
    assert data["worker_id"] == 1


def test_twitter_default_epoch():
    """测试Twitter布局的默认纪元"""
    flake = TWITTER_LAYOUT.from_parts(timestamp=0)
    assert flake.timestamp == 1288834974657
    assert flake.process_id is None


def test_twitter_same_fields_as_generic():
    """测试Twitter布局与通用布局字段一致"""
    raw = (99 << 22) | (513 << 12) | 77
    twitter = TWITTER_LAYOUT.from_raw(raw)
    generic = Snowflake.from_raw(TWITTER_EPOCH, raw)
    assert twitter == generic
    assert twitter.worker_id == generic.worker_id == 513
    assert twitter.increment == 77


def test_layout_epoch_override():
    """测试显式纪元优先于布局纪元"""
    flake = TWITTER_LAYOUT.from_parts(timestamp=0, epoch=0, increment=0)
    assert flake.timestamp == 0
    assert TWITTER_LAYOUT.from_raw(0, epoch=5).timestamp == 5


def test_layout_uses_injected_counter():
    """测试布局使用注入的计数器"""
    counter = IncrementCounter(start=100)
    flake = DISCORD_LAYOUT.from_parts(counter=counter)
    assert flake.increment == 100
    assert counter.current == 101


@pytest.mark.parametrize(
    "name, expected",
    [
        ("generic", GENERIC_LAYOUT),
        ("Discord", DISCORD_LAYOUT),
        (" TWITTER ", TWITTER_LAYOUT),
    ],
)
def test_get_layout(name, expected):
    """测试按名称获取布局"""
    assert get_layout(name) is expected


def test_get_layout_unknown():
    """测试未知布局名称"""
    with pytest.raises(UnknownLayoutError) as exc_info:
        get_layout("instagram")
    assert exc_info.value.code == "UNKNOWN_LAYOUT"
    assert "discord" in exc_info.value.details["available"]


def test_custom_layout():
    """测试自定义布局"""
    layout = SnowflakeLayout(name="custom", epoch=1000, process_id_bits=5)
    flake = layout.from_parts(timestamp=1, worker_id=1, process_id=2, increment=3)
    assert flake.timestamp == 1001
    assert flake.worker_id == 1
    assert flake.process_id == 2
    assert flake.increment == 3


def test_layout_is_frozen():
    """测试布局不可修改"""
    with pytest.raises(ValidationError):
        DISCORD_LAYOUT.epoch = 0
    with pytest.raises(ValidationError):
        SnowflakeLayout(name="bad", process_id_bits=11)
