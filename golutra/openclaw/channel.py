"""Creation and cleanup of collaboration channels."""

from __future__ import annotations

from golutra.contracts import ChannelKind, ChannelType
from golutra.openclaw.protocol import ProtocolRouter


def _slug(name: str) -> str:
    return name.lower().replace(" ", "-")


class ChannelManager:
    """Creates channels with conventional ids on a router."""

    def __init__(self, router: ProtocolRouter) -> None:
        self._router = router

    def create_task_channel(self, task_id: str, members: list[str]) -> str:
        """A channel that lives as long as a task; returns its id."""
        channel_id = f"ch-task-{task_id}"
        self._router.create_channel(
            channel_id, f"Task: {task_id}", members, ChannelType.task(task_id)
        )
        return channel_id

    def create_persistent_channel(self, name: str, members: list[str]) -> str:
        channel_id = f"ch-{_slug(name)}"
        self._router.create_channel(
            channel_id, name, members, ChannelType(ChannelKind.PERSISTENT)
        )
        return channel_id

    def create_broadcast_channel(self, name: str, members: list[str]) -> str:
        channel_id = f"ch-bc-{_slug(name)}"
        self._router.create_channel(
            channel_id, name, members, ChannelType(ChannelKind.BROADCAST)
        )
        return channel_id

    def cleanup_task(self, task_id: str) -> int:
        """Remove the task's channels; return how many were removed."""
        return self._router.cleanup_task_channels(task_id)