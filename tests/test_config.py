from pathlib import Path

import pytest

from ghostfetch.config import Settings, load_settings, parse_settings
from ghostfetch.exceptions import ConfigError
from ghostfetch.paths import config_file


def test_settings_loading(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
logo: ubuntu
ascii: ~/art/penguin.txt
color: false
all: true
hide:
  - swap
  - Local IP
""",
        encoding="utf-8",
    )
    settings = load_settings(config_path)
    assert settings.logo == "ubuntu"
    assert settings.ascii == Path("~/art/penguin.txt").expanduser()
    assert settings.color is False
    assert settings.show_all is True
    assert settings.hide == ["swap", "Local IP"]


def test_missing_or_empty_file_gives_defaults(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "absent.yaml") == Settings()
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_settings(empty) == Settings()


def test_invalid_settings(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="unknown key"):
        parse_settings({"colour": False}, "config.yaml")
    with pytest.raises(ConfigError, match="'color' must be bool"):
        parse_settings({"color": "no"}, "config.yaml")
    with pytest.raises(ConfigError, match="expected mapping"):
        parse_settings(["logo"], "config.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("logo: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(broken)


def test_config_file_location() -> None:
    assert config_file({"GHOSTFETCH_CONFIG": "/etc/gf.yaml"}) == Path("/etc/gf.yaml")
    assert config_file({"XDG_CONFIG_HOME": "/tmp/xdg"}) == Path("/tmp/xdg/ghostfetch/config.yaml")
    assert config_file({"HOME": "/home/ada"}) == Path("/home/ada/.config/ghostfetch/config.yaml")
