"""Tests for configuration defaults and TOML loading."""

import pytest

from sway_workspace_labels.config import (
    DEFAULT_APP_ICONS,
    ConfigLoader,
    IconCategory,
    LabelConfig,
    LayoutCategory,
    default_config_path,
)
from sway_workspace_labels.errors import ConfigLoadError, ErrorCode


class TestDefaults:

    def test_every_layout_category_has_a_glyph(self):
        config = LabelConfig()
        for category in LayoutCategory:
            assert config.layout.glyph(category)

    def test_every_category_has_style_attributes(self):
        config = LabelConfig()
        for category in LayoutCategory:
            assert isinstance(config.layout_style.attributes(category), str)
        for category in IconCategory:
            assert isinstance(config.icon_style.attributes(category), str)

    def test_style_falls_back_to_default_key(self):
        config = LabelConfig(layout_style={"default": 'rise="2pt"', "left": 'weight="bold"'})
        assert config.layout_style.attributes(LayoutCategory.LEFT) == 'weight="bold"'
        assert config.layout_style.attributes(LayoutCategory.RIGHT) == 'rise="2pt"'

    def test_empty_string_overrides_default(self):
        config = LabelConfig(icon_style={"default": 'alpha="50%"', "app": ""})
        assert config.icon_style.attributes(IconCategory.APP) == ""
        assert config.icon_style.attributes(IconCategory.UNKNOWN) == 'alpha="50%"'

    def test_user_icons_merge_over_builtins(self):
        config = LabelConfig(icons={"firefox": "FF", "foot": "T"})
        assert config.app_icon("firefox") == "FF"
        assert config.app_icon("foot") == "T"
        assert config.app_icon("neovide") == DEFAULT_APP_ICONS["neovide"]
        assert config.app_icon("missing") is None


class TestConfigLoader:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = ConfigLoader(tmp_path / "absent.toml").load()
        assert config == LabelConfig()

    def test_loads_all_sections(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[icons]\n'
            'foot = "T"\n'
            '\n'
            '[glyphs]\n'
            'empty = "E"\n'
            '\n'
            '[layout]\n'
            'left = "L"\n'
            '\n'
            '[layout_style]\n'
            "default = ''\n"
            '\n'
            '[icon_style]\n'
            "app = 'font_family=\"Symbols Nerd Font\"'\n"
            '\n'
            '[title]\n'
            'max_length = 10\n',
            encoding="utf-8",
        )

        config = ConfigLoader(path).load()
        assert config.app_icon("foot") == "T"
        assert config.glyphs.empty == "E"
        assert config.glyphs.unknown == "?"
        assert config.layout.left == "L"
        assert config.layout.right == "◨"
        assert config.layout_style.default == ""
        assert config.icon_style.app == 'font_family="Symbols Nerd Font"'
        assert config.title.max_length == 10

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[icons\nfoot = ", encoding="utf-8")
        with pytest.raises(ConfigLoadError) as exc_info:
            ConfigLoader(path).load()
        assert exc_info.value.code == ErrorCode.CONFIG_LOAD_FAILED
        assert exc_info.value.context["file_path"] == str(path)

    def test_unknown_layout_key_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[layout]\ndiagonal = "X"\n', encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigLoader(path).load()

    def test_unknown_section_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[colours]\nred = "#f00"\n', encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigLoader(path).load()

    def test_negative_title_length_rejected(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[title]\nmax_length = -1\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigLoader(path).load()


class TestDefaultConfigPath:

    def test_uses_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_config_path() == tmp_path / "sway-workspace-labels" / "config.toml"

    def test_falls_back_to_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert default_config_path() == tmp_path / ".config" / "sway-workspace-labels" / "config.toml"

    def test_loader_defaults_to_xdg_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert ConfigLoader().config_path == tmp_path / "sway-workspace-labels" / "config.toml"
