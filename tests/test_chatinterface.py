import io
from unittest.mock import MagicMock, patch

import requests

import chatinterface
import chatlib.shared.config as config
import chatlib.shared.colors as colors


def test_console_renders_ansi():
    stream = io.StringIO()
    iface = chatinterface.ConsoleInterface(stream, ansi=True)
    assert iface.Say("§chi") is None
    assert iface.Open()
    iface.Say(colors.Colorize("&chi"))
    iface.Tell("Steve", colors.Colorize("&aok"))
    assert stream.getvalue() == "\033[91mhi\033[0m\n[-> Steve] \033[92mok\033[0m\n"
    assert iface.GetType() == chatinterface.IFACE_TYPE_CONSOLE


def test_console_plain_and_players():
    stream = io.StringIO()
    iface = chatinterface.ConsoleInterface(stream, ansi=False, players=["Steve"])
    iface.Open()
    iface.Say(colors.Colorize("&#ff0000red &lbold"))
    assert stream.getvalue() == "red bold\n"
    assert iface.GetOnlinePlayers() == ["Steve"]


def test_webhook_posts_plain_text():
    iface = chatinterface.WebhookInterface("https://hooks.example/abc", "Bot")
    assert iface.Open()
    response = MagicMock(status_code=204)
    with patch.object(chatinterface.requests, "post", return_value=response) as post:
        assert iface.Say(colors.Colorize("&aHello &#00ff00World")) == "Hello World"
        post.assert_called_once_with("https://hooks.example/abc", json={"content": "Hello World", "username": "Bot"}, timeout=10.0)
        iface.Tell("Steve", "§bhi")
        assert post.call_args.kwargs["json"]["content"] == "@Steve hi"


def test_webhook_failures_return_none():
    iface = chatinterface.WebhookInterface("https://hooks.example/abc")
    iface.Open()
    with patch.object(chatinterface.requests, "post", return_value=MagicMock(status_code=500)):
        assert iface.Say("x") is None
    with patch.object(chatinterface.requests, "post", side_effect=requests.ConnectionError("down")):
        assert iface.Say("x") is None


def test_webhook_without_url_does_not_open():
    iface = chatinterface.WebhookInterface("")
    assert not iface.Open()
    assert not iface.IsOpened()


def test_create_interface_from_config():
    cfg = config.Config({"interface": "webhook", "interfaces": {"webhook": {"url": "https://x"}}})
    assert isinstance(chatinterface.CreateInterface(cfg), chatinterface.WebhookInterface)
    cfg = config.Config({"interface": "rcon", "interfaces": {"rcon": {"password": "p"}}})
    assert chatinterface.CreateInterface(cfg).GetType() == chatinterface.IFACE_TYPE_RCON
    assert isinstance(chatinterface.CreateInterface(config.Config()), chatinterface.ConsoleInterface)
    assert chatinterface.CreateInterface(config.Config({"interface": "pigeon"})) is None
