"""Command system for nodewatch.

Commands are immutable `Command` records arranged in a tree:
- name: command word (e.g., "network", "status")
- desc/help: text shown by `help`
- args: positional arguments the handler expects
- handler(cmd, app_id, input_text, *args): returns a CommandResult
"""

from .base import AppID, Command, CommandArg, CommandRegistry, CommandResult, all_app_ids

__all__ = ["AppID", "Command", "CommandArg", "CommandRegistry", "CommandResult", "all_app_ids"]
