"""Tests for YAML config loading."""

import logging

import pytest

from section_menu.config import (
    LAYOUT_PRESETS,
    LayoutConfig,
    NavigationConfig,
    config_from_dict,
    get_config_path,
    load_config,
)


def _clear_env(monkeypatch):
    for name in ("SECTION_MENU_THEME", "SECTION_MENU_WIDTH", "SECTION_MENU_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)


def test_config_path_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_config_path() == tmp_path / "section-menu" / "config.yaml"


def test_missing_file_gives_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    config = load_config(tmp_path / "nope.yaml")
    assert config == NavigationConfig()


def test_load_full_config(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text(
        "theme: retro\n"
        "layout:\n"
        "  preset: compact\n"
        "  items_per_page: 7\n"
        "text:\n"
        "  section_selection_title: Settings\n"
        "keys:\n"
        "  vim: true\n"
        "  shortcuts:\n"
        "    s: Save configuration\n"
    )
    config = load_config(path)
    assert config.theme.name == "retro"
    assert config.layout.items_per_page == 7
    assert config.layout.max_content_width == LAYOUT_PRESETS["compact"].max_content_width
    assert config.text.section_selection_title == "Settings"
    assert config.enable_vim_keys is True
    assert config.enable_quick_select is True
    assert config.custom_shortcuts == {"s": "Save configuration"}


def test_malformed_yaml_falls_back_with_warning(monkeypatch, tmp_path, caplog):
    _clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text("layout: [unclosed\n")
    with caplog.at_level(logging.WARNING, logger="section_menu"):
        config = load_config(path)
    assert config == NavigationConfig()
    assert "Could not read config" in caplog.text


def test_invalid_values_are_ignored(monkeypatch, caplog):
    _clear_env(monkeypatch)
    with caplog.at_level(logging.WARNING, logger="section_menu"):
        config = config_from_dict(
            {"layout": {"items_per_page": "ten", "bogus": 1, "show_borders": False}}
        )
    assert config.layout.items_per_page == LayoutConfig().items_per_page
    assert config.layout.show_borders is False
    assert "bogus" in caplog.text


def test_zero_page_size_falls_back(monkeypatch):
    _clear_env(monkeypatch)
    config = config_from_dict({"layout": {"items_per_page": 0}})
    assert config.layout.items_per_page == LayoutConfig().items_per_page


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SECTION_MENU_THEME", "modern")
    monkeypatch.setenv("SECTION_MENU_WIDTH", "30")
    monkeypatch.setenv("SECTION_MENU_PAGE_SIZE", "4")
    config = config_from_dict({"theme": "retro"})
    assert config.theme.name == "modern"
    assert config.layout.max_content_width == 30
    assert config.layout.min_content_width == 30
    assert config.layout.items_per_page == 4


def test_bad_env_values_are_ignored(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("SECTION_MENU_PAGE_SIZE", "-3")
    monkeypatch.setenv("SECTION_MENU_WIDTH", "wide")
    config = config_from_dict({})
    assert config.layout == LayoutConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"theme": 5},
        {"keys": ["vim"]},
        {"layout": "compact"},
        {"text": ["x"]},
        {"keys": {"shortcuts": ["s"]}},
    ],
)
def test_wrongly_shaped_values_fall_back_with_warning(monkeypatch, caplog, data):
    _clear_env(monkeypatch)
    with caplog.at_level(logging.WARNING, logger="section_menu"):
        config = config_from_dict(data)
    assert config == NavigationConfig()
    assert "Ignoring" in caplog.text


def test_key_flags_must_be_booleans(monkeypatch, tmp_path, caplog):
    _clear_env(monkeypatch)
    path = tmp_path / "config.yaml"
    path.write_text("keys:\n  vim: 'false'\n  quick_select: 0\n")
    with caplog.at_level(logging.WARNING, logger="section_menu"):
        config = load_config(path)
    assert config.enable_vim_keys is False
    assert config.enable_quick_select is True
    assert "keys.vim" in caplog.text
    assert "keys.quick_select" in caplog.text
