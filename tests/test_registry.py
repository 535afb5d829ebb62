import pytest

from nodewatch.commands import AppID, Command, CommandArg, CommandRegistry


def _echo(cmd, app_id, input_text, *args):
    return cmd.successful_result(f"{app_id.value}|{input_text}|{','.join(args)}")


def _boom(cmd, app_id, input_text, *args):
    raise RuntimeError("kaboom")


@pytest.fixture
def registry():
    reg = CommandRegistry()
    reg.register(Command(
        name="tools",
        desc="Tool commands",
        sub_commands=(
            Command(name="echo", desc="Echo args", args=(CommandArg("first", "first arg"),
                                                          CommandArg("second", "second arg", optional=True)),
                    handler=_echo),
            Command(name="web-only", desc="Only on web", app_ids=(AppID.WEB,), handler=_echo),
            Command(name="boom", desc="Always fails", handler=_boom),
        ),
    ))
    return reg


def test_dispatches_to_leaf_with_positional_args(registry):
    result = registry.execute(AppID.CLI, "tools echo a b c")
    assert result.successful
    assert result.message == "cli|tools echo a b c|a,b,c"
    assert result.title == "echo"


def test_names_are_case_insensitive(registry):
    assert registry.execute(AppID.CLI, "TOOLS Echo x").successful


def test_missing_required_argument(registry):
    result = registry.execute(AppID.CLI, "tools echo")
    assert not result.successful
    assert "Missing argument <first>" in result.message


def test_parent_without_sub_command_shows_help(registry):
    for line in ("tools", "tools help"):
        result = registry.execute(AppID.CLI, line)
        assert result.successful
        assert "tools echo - Echo args" in result.message
        assert "tools boom - Always fails" in result.message


def test_unknown_command_and_sub_command(registry):
    result = registry.execute(AppID.CLI, "nope")
    assert not result.successful
    assert result.message == "Unknown command: nope"

    result = registry.execute(AppID.CLI, "tools nope")
    assert not result.successful
    assert result.message.startswith("Unknown sub-command: tools nope")


def test_app_id_restriction(registry):
    assert not registry.execute(AppID.DISCORD, "tools web-only").successful
    assert registry.execute(AppID.WEB, "tools web-only").successful


def test_handler_exception_becomes_error_result(registry):
    result = registry.execute(AppID.CLI, "tools boom")
    assert not result.successful
    assert isinstance(result.error, RuntimeError)
    assert result.message == "An error occurred: kaboom"


def test_help_and_words(registry):
    assert registry.list_commands() == ["tools"]
    assert "tools echo <first> [second] - Echo args" in registry.get_help()
    assert registry.words() == ["tools", "tools echo", "tools web-only", "tools boom"]


def test_leaf_help_message():
    cmd = Command(name="node-info", desc="View node", help="Give an address",
                  args=(CommandArg("validator_address", "Your validator address"),))
    assert cmd.help_message("network ") == (
        "Usage: network node-info <validator_address>\n"
        "View node\n"
        "Give an address\n"
        "  validator_address - Your validator address"
    )
