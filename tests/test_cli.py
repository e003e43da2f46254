"""Tests for the section-menu CLI."""

import json
from unittest.mock import patch

import pytest
import yaml

from section_menu import NavigationMenu
from section_menu.cli import build_parser, format_selections, load_menu_file, main, parse_menu


MENU_YAML = """\
sections:
  - name: Privacy
    description: Control data collection
    items:
      - Block Telemetry
      - name: Secure DNS
        description: Use encrypted DNS queries
        selected: true
        id: 7
  - name: Empty
"""


@pytest.fixture
def menu_file(tmp_path):
    path = tmp_path / "menu.yaml"
    path.write_text(MENU_YAML)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in ("SECTION_MENU_THEME", "SECTION_MENU_WIDTH", "SECTION_MENU_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)


class TestParseMenu:
    def test_parses_sections_and_items(self, menu_file):
        sections = load_menu_file(menu_file)

        assert [s.name for s in sections] == ["Privacy", "Empty"]
        privacy = sections[0]
        assert privacy.description == "Control data collection"
        assert privacy.items[0].name == "Block Telemetry"
        assert privacy.items[0].selected is False
        assert privacy.items[1].description == "Use encrypted DNS queries"
        assert privacy.items[1].selected is True
        assert privacy.items[1].id == 7
        assert sections[1].is_empty()

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {"sections": "nope"},
            {"sections": [{"description": "no name"}]},
            {"sections": [{"name": "A", "items": "x"}]},
            {"sections": [{"name": "A", "items": [{"description": "no name"}]}]},
            {"sections": [{"name": "A", "items": [{"name": "x", "id": "seven"}]}]},
        ],
    )
    def test_rejects_malformed_documents(self, data):
        with pytest.raises(ValueError):
            parse_menu(data)

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ValueError, match="Could not read menu file"):
            load_menu_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("sections: [unclosed\n")
        with pytest.raises(ValueError):
            load_menu_file(path)


class TestFormatSelections:
    def test_json(self):
        out = format_selections({"Privacy": ["Secure DNS"]}, "json")
        assert json.loads(out) == {"Privacy": ["Secure DNS"]}

    def test_yaml_keeps_section_order(self):
        out = format_selections({"B": ["x"], "A": ["y"]}, "yaml")
        assert yaml.safe_load(out) == {"B": ["x"], "A": ["y"]}
        assert out.index("B:") < out.index("A:")


class TestParser:
    def test_defaults(self, menu_file):
        args = build_parser().parse_args([str(menu_file)])
        assert args.menu_file == menu_file
        assert args.fmt == "json"
        assert args.theme is None
        assert args.debug is False

    def test_rejects_unknown_theme(self, menu_file):
        with pytest.raises(SystemExit):
            build_parser().parse_args([str(menu_file), "--theme", "neon"])


class TestMain:
    def test_prints_final_selections(self, menu_file, capsys):
        with patch.object(NavigationMenu, "run", autospec=True) as run:
            main([str(menu_file)])

        run.assert_called_once()
        out = capsys.readouterr().out
        assert json.loads(out) == {"Privacy": ["Secure DNS"]}

    def test_theme_flag_overrides_config(self, menu_file, capsys):
        seen = []

        def fake_run(menu):
            seen.append(menu.config.theme.name)

        with patch.object(NavigationMenu, "run", fake_run):
            main([str(menu_file), "--theme", "retro", "--format", "yaml"])

        assert seen == ["retro"]
        assert yaml.safe_load(capsys.readouterr().out) == {"Privacy": ["Secure DNS"]}

    def test_missing_file_exits_with_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "missing.yaml")])
        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().out

    def test_no_sections_exits_with_error(self, tmp_path):
        path = tmp_path / "menu.yaml"
        path.write_text("sections: []\n")
        with pytest.raises(SystemExit) as exc:
            main([str(path)])
        assert exc.value.code == 1

    def test_keyboard_interrupt_exits_130(self, menu_file):
        with patch.object(NavigationMenu, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                main([str(menu_file)])
        assert exc.value.code == 130
