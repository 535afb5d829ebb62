"""Command records, results and the registry that dispatches to them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger


class AppID(Enum):
    """Front-end a command invocation came from."""

    CLI = "cli"
    DISCORD = "discord"
    TELEGRAM = "telegram"
    WEB = "web"


def all_app_ids() -> Tuple[AppID, ...]:
    return tuple(AppID)


HELP_COMMAND_NAME = "help"


@dataclass(frozen=True)
class CommandArg:
    name: str
    desc: str
    optional: bool = False


@dataclass(frozen=True)
class CommandResult:
    title: str
    message: str
    successful: bool
    error: Optional[BaseException] = None


# handler(cmd, app_id, input_text, *args) -> CommandResult
Handler = Callable[..., CommandResult]


@dataclass(frozen=True)
class Command:
    """An immutable node in the command tree.

    Parent commands carry `sub_commands` and no handler; leaves carry a
    handler. The tree is assembled once and never changed afterwards.
    """

    name: str
    desc: str
    help: str = ""
    args: Tuple[CommandArg, ...] = ()
    sub_commands: Tuple["Command", ...] = ()
    app_ids: Tuple[AppID, ...] = field(default_factory=all_app_ids)
    handler: Optional[Handler] = None

    def successful_result(self, message: str) -> CommandResult:
        return CommandResult(title=self.name, message=message, successful=True)

    def failed_result(self, message: str) -> CommandResult:
        return CommandResult(title=self.name, message=message, successful=False)

    def error_result(self, exc: BaseException) -> CommandResult:
        return CommandResult(
            title=self.name,
            message=f"An error occurred: {exc}",
            successful=False,
            error=exc,
        )

    def sub_command(self, name: str) -> Optional["Command"]:
        name = name.lower()
        for sub in self.sub_commands:
            if sub.name == name:
                return sub
        return None

    def has_app_id(self, app_id: AppID) -> bool:
        return app_id in self.app_ids

    def required_args(self) -> List[CommandArg]:
        return [a for a in self.args if not a.optional]

    def usage(self, prefix: str = "") -> str:
        parts = [f"{prefix}{self.name}"]
        for arg in self.args:
            parts.append(f"[{arg.name}]" if arg.optional else f"<{arg.name}>")
        return " ".join(parts)

    def help_message(self, prefix: str = "") -> str:
        """Usage text: the sub-command list for parents, arguments for leaves."""
        if self.sub_commands:
            lines = [f"{self.desc}", "Available sub-commands:"]
            for sub in self.sub_commands:
                lines.append(f"  {prefix}{self.name} {sub.name} - {sub.desc}")
            return "\n".join(lines)

        lines = [f"Usage: {self.usage(prefix)}", self.desc]
        if self.help:
            lines.append(self.help)
        for arg in self.args:
            lines.append(f"  {arg.name} - {arg.desc}")
        return "\n".join(lines)


class CommandRegistry:
    """Registry for all top-level commands."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command."""
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[Command]:
        """Get a command by name."""
        return self._commands.get(name.lower())

    def list_commands(self) -> List[str]:
        """Get list of all command names."""
        return sorted(self._commands.keys())

    def words(self) -> List[str]:
        """Every `command` and `command sub` phrase, for tab completion."""
        words = []
        for name in self.list_commands():
            words.append(name)
            for sub in self._commands[name].sub_commands:
                words.append(f"{name} {sub.name}")
        return words

    def get_help(self) -> str:
        """Get help text for all commands."""
        lines = ["Available commands:"]
        for name in self.list_commands():
            cmd = self._commands[name]
            lines.append(f"  {name} - {cmd.desc}")
            for sub in cmd.sub_commands:
                lines.append(f"    {name} {sub.usage()} - {sub.desc}")
        lines.append("  exit - Exit the program")
        return "\n".join(lines)

    def execute(self, app_id: AppID, line: str) -> CommandResult:
        """Resolve `line` against the command tree and run the handler.

        Tokens after the deepest matching command become positional arguments.
        """
        tokens = line.split()
        if not tokens:
            return CommandResult(title="", message="Empty command", successful=False)

        cmd = self.get(tokens[0])
        if cmd is None:
            return CommandResult(title=tokens[0], message=f"Unknown command: {tokens[0]}", successful=False)

        path = cmd.name
        rest = tokens[1:]
        while cmd.sub_commands:
            if not rest or rest[0].lower() == HELP_COMMAND_NAME:
                return cmd.successful_result(cmd.help_message())
            sub = cmd.sub_command(rest[0])
            if sub is None:
                return cmd.failed_result(f"Unknown sub-command: {path} {rest[0]}\n{cmd.help_message()}")
            cmd, rest = sub, rest[1:]
            path = f"{path} {cmd.name}"

        if not cmd.has_app_id(app_id):
            return cmd.failed_result(f"Command {path} is not available on {app_id.value}")

        required = cmd.required_args()
        if len(rest) < len(required):
            missing = required[len(rest)]
            return cmd.failed_result(f"Missing argument <{missing.name}>\nUsage: {path} " +
                                     " ".join(f"<{a.name}>" for a in required))

        if cmd.handler is None:
            return cmd.failed_result(f"Command {path} has no handler")

        try:
            return cmd.handler(cmd, app_id, line, *rest)
        except Exception as exc:
            logger.exception(f"Unhandled error in {path}")
            return cmd.error_result(exc)
