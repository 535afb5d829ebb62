#!/usr/bin/env python3
"""nodewatch - Main entry point."""

from dotenv import load_dotenv
import sys
from typing import Optional

from loguru import logger

from nodewatch.client import ClientManager
from nodewatch.commands import AppID, CommandRegistry
from nodewatch.commands.network import NetworkCommands
from nodewatch.config import Settings, load_settings
from nodewatch.console import init_readline, read_command


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level,
    )


def _load_settings() -> Optional[Settings]:
    try:
        return load_settings()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return None


def build_registry(client_mgr: ClientManager, settings: Optional[Settings] = None) -> CommandRegistry:
    """Register every command group against `client_mgr`."""
    registry = CommandRegistry()
    network = NetworkCommands(client_mgr, geoip_url=settings.geoip_url if settings else None)
    registry.register(network.get_command())
    return registry


def _handle_command(registry: CommandRegistry, line: str) -> bool:
    """Handle a command line input.

    Returns:
        False to exit the loop, True to continue.
    """
    line = line.strip()
    if not line:
        return True

    if line.lower() in {"exit", "quit", "q"}:
        return False

    if line.lower() == "help":
        print(registry.get_help())
        return True

    result = registry.execute(AppID.CLI, line)
    if result.successful:
        print(result.message)
    else:
        print(result.message, file=sys.stderr)
        if registry.get(line.split()[0]) is None:
            print(registry.get_help())
    return True


def main():
    """Main application entry point."""
    load_dotenv()

    settings = _load_settings()
    if settings is None:
        print("Configuration is incomplete; exiting...", file=sys.stderr)
        sys.exit(1)

    _configure_logging(settings.log_level)
    logger.info(f"Using {len(settings.rpc_urls)} node(s), local node {settings.rpc_urls[0]}")

    client_mgr = ClientManager.from_settings(settings)
    registry = build_registry(client_mgr, settings)

    # Initialize readline for command history
    init_readline(words=registry.words() + ["help", "exit"])

    print("Ready!")
    print(registry.get_help())

    # Main command loop
    try:
        while True:
            try:
                line = read_command("> ")
            except (EOFError, KeyboardInterrupt):
                print("\nExiting...")
                break
            if not _handle_command(registry, line):
                break
    finally:
        client_mgr.close()


if __name__ == "__main__":
    main()
