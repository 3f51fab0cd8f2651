import pytest

from topicctl.command import CommandError, ReplCommand, parse_repl_inputs


def test_parse_repl_inputs_plain_args():
    assert parse_repl_inputs("arg1   arg2") == ReplCommand(args=["arg1", "arg2"], flags={})


def test_parse_repl_inputs_leading_flag_is_arg():
    assert parse_repl_inputs("--flag1=value1  arg1   arg2") == ReplCommand(
        args=["--flag1=value1", "arg1", "arg2"],
        flags={},
    )


def test_parse_repl_inputs_flags():
    assert parse_repl_inputs("arg1 arg2 --flag1=value1 arg3 --flag2=value2") == ReplCommand(
        args=["arg1", "arg2", "arg3"],
        flags={"flag1": "value1", "flag2": "value2"},
    )


def test_parse_repl_inputs_bare_flag():
    command = parse_repl_inputs("get brokers --full")
    assert command.args == ["get", "brokers"]
    assert command.flags == {"full": ""}
    assert command.get_bool_value("full") is True


def test_get_bool_value():
    command = ReplCommand(flags={"key1": "", "key2": "true", "key3": "false"})
    assert command.get_bool_value("key1") is True
    assert command.get_bool_value("key2") is True
    assert command.get_bool_value("key3") is False
    assert command.get_bool_value("non-existent-key") is False


@pytest.fixture
def command():
    return ReplCommand(args=["arg1", "arg2"], flags={"key1": "value1"})


def test_check_args(command):
    command.check_args(2, 2, {"key1"})
    command.check_args(2, 3, {"key1"})
    command.check_args(1, 2, {"key1"})
    command.check_args(1, 2, {"key1", "key2"})
    with pytest.raises(CommandError):
        command.check_args(3, 3, {"key1"})
    with pytest.raises(CommandError):
        command.check_args(3, 5, {"key1"})
    with pytest.raises(CommandError):
        command.check_args(2, 2, {"key2"})
    with pytest.raises(CommandError):
        command.check_args(2, 2, None)


@pytest.mark.parametrize(
    ("min_args", "max_args", "allowed", "message"),
    [
        (3, 3, {"key1"}, "Expected 3 args"),
        (3, 5, {"key1"}, "Expected between 3 and 5 args"),
        (2, 2, {"key2"}, "Flag key1 not recognized"),
        (2, 2, None, "Flag key1 not recognized"),
    ],
)
def test_check_args_messages(command, min_args, max_args, allowed, message):
    with pytest.raises(CommandError, match=message):
        command.check_args(min_args, max_args, allowed)