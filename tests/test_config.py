import json

import chatlib.shared.config as config
import chatlib.shared.messages as messages

FALLBACK = '{"prefix": "&7", "interfaces": {"rcon": {"password": "rconPassword"}}}'


def test_missing_json_writes_fallback(tmp_path):
    path = tmp_path / "cfg.json"
    cfg = config.Config.from_file(str(path), FALLBACK)
    assert cfg.GetValue("prefix", None) == "&7"
    assert json.loads(path.read_text()) == json.loads(FALLBACK)


def test_missing_without_fallback_returns_none(tmp_path):
    assert config.Config.from_file(str(tmp_path / "nope.json")) is None


def test_invalid_json_uses_fallback(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{ not json")
    cfg = config.Config.from_file(str(path), FALLBACK)
    assert cfg.GetValue("interfaces.rcon.password", None) == "rconPassword"


def test_yaml_config(tmp_path):
    path = tmp_path / "cfg.yml"
    path.write_text("prefix: '&b'\nmessages:\n  hello: '&aHi'\n")
    cfg = config.Config.from_file(str(path))
    assert isinstance(cfg, config.YamlConfig)
    assert cfg.GetValue("messages.hello", None) == "&aHi"


def test_dotted_get_and_set():
    cfg = config.Config({"a": {"b": 1}})
    assert cfg.GetValue("a.b", 0) == 1
    assert cfg.GetValue("a.c", 5) == 5
    assert cfg.GetValue("a.b.c", 5) == 5
    cfg.SetValue("x.y", "z")
    assert cfg.cfg["x"] == {"y": "z"}


def test_env_overrides(tmp_path):
    env = tmp_path / "test.env"
    env.write_text("RCON_PASSWORD=secret\nWEBHOOK_URL=\n")
    cfg = config.Config.FromString(FALLBACK)
    applied = cfg.ApplyEnv(str(env), {"RCON_PASSWORD": "interfaces.rcon.password", "WEBHOOK_URL": "interfaces.webhook.url"})
    assert applied == 1
    assert cfg.GetValue("interfaces.rcon.password", None) == "secret"
    assert cfg.GetValue("interfaces.webhook.url", None) is None


def test_env_missing_file(tmp_path):
    cfg = config.Config()
    assert cfg.ApplyEnv(str(tmp_path / "missing.env"), {"A": "a"}) == 0


def test_message_bundle():
    cfg = config.Config.FromString("messages:\n  motd:\n    - '&aline one'\n    - '&bline two'\n  hi: 'hello'\n", "yaml")
    bundle = messages.MessageBundle.FromConfig(cfg)
    assert bundle.Has("hi")
    assert bundle.Get("motd") == "&aline one\n&bline two"
    assert bundle.GetLines("motd") == ["&aline one", "&bline two"]
    assert bundle.Get("missing") == "missing"
    assert bundle.Get("missing", "fallback") == "fallback"
    assert sorted(bundle.Keys()) == ["hi", "motd"]
