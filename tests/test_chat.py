import io
from unittest.mock import MagicMock

import pytest

import chatinterface
import chatlib.shared.chat as chat
import chatlib.shared.client as client
import chatlib.shared.clientmanager as clientmanager
import chatlib.shared.placeholders as placeholders


@pytest.fixture
def interface():
    return MagicMock()


@pytest.fixture
def manager():
    mgr = clientmanager.ClientManager()
    mgr.AddClient(client.Client(0, "Steve", permissions=["chat.staff"]))
    mgr.AddClient(client.Client(1, "Alex"))
    mgr.AddClient(client.Client(2, "Notch", permissions=["*"]))
    return mgr


def test_color_list_keeps_order_and_length(interface):
    c = chat.Chat(interface)
    lines = ["&aone", "&#ff0000two", "three"]
    result = c.ColorList(lines)
    assert result == ["§aone", "§x§f§f§0§0§0§0two", "three"]
    assert lines == ["&aone", "&#ff0000two", "three"]


def test_format_list(interface):
    c = chat.Chat(interface)
    assert c.FormatList(["hi %p", "bye %p"], "%p", "Alex") == ["hi Alex", "bye Alex"]


def test_send_formats_then_colors(interface, manager):
    c = chat.Chat(interface, manager)
    steve = manager.GetClientByName("steve")
    assert c.Send(steve, "&aHi &name", "&name", "Steve")
    interface.Tell.assert_called_once_with("Steve", "§aHi Steve")


def test_send_to_plain_name(interface):
    c = chat.Chat(interface)
    c.Send("Alex", "&#00ff00ok")
    interface.Tell.assert_called_once_with("Alex", "§x§0§0§f§f§0§0ok")


@pytest.mark.parametrize("value", ["", None])
def test_empty_messages_are_not_delivered(interface, manager, value):
    c = chat.Chat(interface, manager)
    assert not c.Send("Alex", value)
    assert c.Broadcast(value) == 0
    assert not c.Announce(value)
    interface.Tell.assert_not_called()
    interface.Say.assert_not_called()


def test_prefix_is_prepended_before_coloring(interface):
    c = chat.Chat(interface, prefix="&8[&#55ffffS&8] &7")
    c.Send("Alex", "hello")
    interface.Tell.assert_called_once_with("Alex", "§8[§x§5§5§f§f§f§fS§8] §7hello")


def test_broadcast_to_everyone(interface, manager):
    c = chat.Chat(interface, manager)
    assert c.Broadcast("&ehey") == 3
    names = [call.args[0] for call in interface.Tell.call_args_list]
    assert names == ["Steve", "Alex", "Notch"]
    assert all(call.args[1] == "§ehey" for call in interface.Tell.call_args_list)


def test_broadcast_filtered_by_permission(interface, manager):
    c = chat.Chat(interface, manager)
    assert c.Broadcast("staff only %n", "chat.staff", "%n", 1) == 2
    names = [call.args[0] for call in interface.Tell.call_args_list]
    assert names == ["Steve", "Notch"]
    interface.Tell.assert_any_call("Steve", "staff only 1")


def test_broadcast_filtered_by_predicate(interface, manager):
    c = chat.Chat(interface, manager)
    assert c.Broadcast("hi", predicate=lambda cl: cl.GetName().startswith("A")) == 1
    interface.Tell.assert_called_once_with("Alex", "hi")


def test_broadcast_odd_placeholders_sends_nothing(interface, manager):
    c = chat.Chat(interface, manager)
    with pytest.raises(placeholders.PlaceholderError):
        c.Broadcast("hi %p", None, "%p")
    interface.Tell.assert_not_called()


def test_announce_uses_say(interface):
    c = chat.Chat(interface)
    assert c.Announce("&lrestart in %t", "%t", "5m")
    interface.Say.assert_called_once_with("§lrestart in 5m")


def test_remove_colors(interface):
    assert chat.Chat(interface).RemoveColors("&#123ABCPlain &ctext") == "Plain text"


def test_closed_interface_reports_nothing_delivered(manager):
    closed = chatinterface.ConsoleInterface(stream=io.StringIO())
    c = chat.Chat(closed, manager)
    assert not c.Send("Alex", "&ahello")
    assert c.Broadcast("&ehey") == 0
    assert not c.Announce("&lrestart")


def test_broadcast_counts_only_delivered(manager):
    interface = MagicMock()
    interface.Tell.side_effect = lambda name, text: None if name == "Alex" else text
    c = chat.Chat(interface, manager)
    assert c.Broadcast("hi") == 2
    assert interface.Tell.call_count == 3


def test_send_and_announce_succeed_on_open_interface():
    stream = io.StringIO()
    opened = chatinterface.ConsoleInterface(stream=stream, ansi=False)
    assert opened.Open()
    c = chat.Chat(opened)
    assert c.Send("Alex", "&ahello")
    assert c.Announce("&lrestart")
    assert stream.getvalue() == "[-> Alex] hello\nrestart\n"
