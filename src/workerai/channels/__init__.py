"""Presentation adapters that feed user commands to the agent and render its events."""

from workerai.channels.base import ChannelAdapter, ChannelCommand, CommandType, parse_command

__all__ = ["ChannelAdapter", "ChannelCommand", "CommandType", "parse_command"]
