import os

import pytest

from stormfetch.config import Config, find_config_file, load_config, system_config_dir, user_config_dir
from stormfetch.errors import ConfigError


def write_config(root, content):
    directory = root / "stormfetch"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "config.yaml"
    path.write_text(content)
    return str(path)


def test_defaults():
    config = Config()
    assert config.distro_ascii == "auto"
    assert config.fetch_script == "auto"
    assert config.ansii_colors == []
    assert config.force_config_ansii is False
    assert config.dependency_warning is True


def test_find_config_prefers_user(tmp_path):
    user_path = write_config(tmp_path / "user", "distro_ascii: arch\n")
    write_config(tmp_path / "etc", "distro_ascii: debian\n")

    assert find_config_file(str(tmp_path / "user"), str(tmp_path / "etc")) == user_path


def test_find_config_falls_back_to_system(tmp_path):
    system_path = write_config(tmp_path / "etc", "distro_ascii: debian\n")

    assert find_config_file(str(tmp_path / "user"), str(tmp_path / "etc")) == system_path


def test_missing_config_is_fatal(tmp_path):
    with pytest.raises(ConfigError, match="Config file not found"):
        find_config_file(str(tmp_path / "user"), str(tmp_path / "etc"))


def test_load_config(tmp_path):
    path = write_config(tmp_path, "distro_ascii: arch\nansii_colors: [4, 7]\nforce_config_ansii: true\nhidden_gpus: [2]\n")

    config = load_config(path)

    assert config.distro_ascii == "arch"
    assert config.ansii_colors == [4, 7]
    assert config.force_config_ansii is True
    assert config.hidden_gpus == [2]


def test_load_empty_config_uses_defaults(tmp_path):
    assert load_config(write_config(tmp_path, "")) == Config()


def test_load_config_discovers_path(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "user"))
    monkeypatch.setenv("STORMFETCH_SYSTEM_CONFIG_DIR", str(tmp_path / "etc"))
    write_config(tmp_path / "etc", "distro_name: Stormux\n")

    assert load_config().distro_name == "Stormux"


@pytest.mark.parametrize("content", [
    "ansii_colors: [1, 2\n",
    "- just\n- a list\n",
    "ansii_colors: red\n",
    "fetch_script: ''\n",
])
def test_invalid_config_is_fatal(tmp_path, content):
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, content))


def test_render_context():
    config = Config(distro_ascii="arch", ansii_colors=[1, 2], force_config_ansii=True)

    context = config.render_context()

    assert context.colors == (1, 2)
    assert context.force_config_palette is True
    assert context.template == "arch"
    assert config.render_context("void").template == "void"


def test_user_config_dir(monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", "/tmp/xdg")
    assert user_config_dir() == "/tmp/xdg"

    monkeypatch.delenv("XDG_CONFIG_HOME")
    monkeypatch.setenv("HOME", "/home/storm")
    assert user_config_dir() == os.path.join("/home/storm", ".config")


def test_system_config_dir(monkeypatch):
    monkeypatch.delenv("STORMFETCH_SYSTEM_CONFIG_DIR", raising=False)
    assert system_config_dir() == "/etc"

    monkeypatch.setenv("STORMFETCH_SYSTEM_CONFIG_DIR", "/opt/etc")
    assert system_config_dir() == "/opt/etc"
