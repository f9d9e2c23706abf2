"""Channels and message routing between agents."""

from __future__ import annotations

import threading
from dataclasses import replace

from golutra.contracts import (
    AgentMessage,
    BroadcastMessage,
    Channel,
    ChannelKind,
    ChannelType,
)


class ChannelNotFoundError(LookupError):
    """Raised when a channel id is unknown."""


def _copy(channel: Channel) -> Channel:
    return replace(channel, members=list(channel.members))


class ProtocolRouter:
    """Keeps channels and resolves who receives a message."""

    def __init__(self) -> None:
        self._channels: dict[str, Channel] = {}
        self._lock = threading.Lock()

    def create_channel(
        self,
        channel_id: str,
        name: str,
        members: list[str],
        channel_type: ChannelType,
    ) -> Channel:
        """Create or replace a channel and return a copy of it."""
        channel = Channel(
            id=channel_id, name=name, members=list(members), channel_type=channel_type
        )
        with self._lock:
            self._channels[channel_id] = channel
        return _copy(channel)

    def _get(self, channel_id: str) -> Channel:
        channel = self._channels.get(channel_id)
        if channel is None:
            raise ChannelNotFoundError(f"channel not found: {channel_id}")
        return channel

    def join_channel(self, channel_id: str, agent_id: str) -> None:
        with self._lock:
            channel = self._get(channel_id)
            if agent_id not in channel.members:
                channel.members.append(agent_id)

    def leave_channel(self, channel_id: str, agent_id: str) -> None:
        with self._lock:
            channel = self._get(channel_id)
            channel.members = [m for m in channel.members if m != agent_id]

    def resolve_recipients(self, message: AgentMessage) -> list[str]:
        """Members of a broadcast's channel other than its sender."""
        if not isinstance(message, BroadcastMessage):
            return []
        with self._lock:
            channel = self._channels.get(message.channel_id)
            if channel is None:
                return []
            return [m for m in channel.members if m != message.sender_id]

    def remove_channel(self, channel_id: str) -> None:
        with self._lock:
            self._channels.pop(channel_id, None)

    def list_channels(self) -> list[Channel]:
        with self._lock:
            return [_copy(c) for c in self._channels.values()]

    def cleanup_task_channels(self, task_id: str) -> int:
        """Remove the channels of a task; return how many were removed."""
        with self._lock:
            doomed = [
                cid
                for cid, ch in self._channels.items()
                if ch.channel_type.kind is ChannelKind.TASK
                and ch.channel_type.task_id == task_id
            ]
            for cid in doomed:
                del self._channels[cid]
        return len(doomed)