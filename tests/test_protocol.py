import pytest

from golutra.contracts import (
    BroadcastMessage,
    ChannelKind,
    ChannelType,
    TaskMessage,
)
from golutra.openclaw.protocol import ChannelNotFoundError, ProtocolRouter


@pytest.fixture
def router():
    r = ProtocolRouter()
    r.create_channel("c1", "first", ["a", "b"], ChannelType(ChannelKind.PERSISTENT))
    return r


def _members(router, channel_id):
    return next(c.members for c in router.list_channels() if c.id == channel_id)


def test_create_returns_channel(router):
    ch = router.create_channel("c2", "second", ["x"], ChannelType.task("t9"))
    assert ch.id == "c2"
    assert ch.name == "second"
    assert ch.members == ["x"]
    assert ch.channel_type == ChannelType.task("t9")
    assert {c.id for c in router.list_channels()} == {"c1", "c2"}


def test_join_adds_once(router):
    router.join_channel("c1", "c")
    router.join_channel("c1", "c")
    assert _members(router, "c1") == ["a", "b", "c"]


def test_join_unknown_channel_raises(router):
    with pytest.raises(ChannelNotFoundError):
        router.join_channel("missing", "a")


def test_leave_removes_member(router):
    router.leave_channel("c1", "a")
    assert _members(router, "c1") == ["b"]


def test_leave_unknown_channel_raises(router):
    with pytest.raises(ChannelNotFoundError):
        router.leave_channel("missing", "a")


def test_broadcast_excludes_sender(router):
    router.join_channel("c1", "c")
    msg = BroadcastMessage(channel_id="c1", sender_id="b", content="hi")
    assert router.resolve_recipients(msg) == ["a", "c"]


def test_non_broadcast_has_no_recipients(router):
    assert router.resolve_recipients(TaskMessage(id="t", instruction="do")) == []


def test_broadcast_to_unknown_channel(router):
    msg = BroadcastMessage(channel_id="nope", sender_id="a", content="hi")
    assert router.resolve_recipients(msg) == []


def test_remove_channel(router):
    router.remove_channel("missing")
    assert [c.id for c in router.list_channels()] == ["c1"]
    router.remove_channel("c1")
    assert router.list_channels() == []


def test_list_returns_copies(router):
    listed = router.list_channels()
    listed[0].members.append("intruder")
    assert "intruder" not in _members(router, "c1")


def test_cleanup_task_channels(router):
    created = ["t1-a", "t1-b"]
    for cid in created:
        router.create_channel(cid, cid, [], ChannelType.task("t1"))
    router.create_channel("t2-a", "t2-a", [], ChannelType.task("t2"))
    removed = router.cleanup_task_channels("t1")
    assert removed == len(created)
    assert {c.id for c in router.list_channels()} == {"c1", "t2-a"}
    assert router.cleanup_task_channels("t1") == 0