"""CLI interface for section-menu.

Runs a menu described in a YAML file and prints the final selections:

    sections:
      - name: Privacy
        description: Control data collection
        items:
          - Block Telemetry
          - name: Secure DNS
            description: Use encrypted DNS queries
            selected: true
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import get_log_path, load_config
from .items import Section, SelectableItem
from .navigation import NavigationMenu
from .themes import THEMES, get_theme

logger = logging.getLogger(__name__)

_console = Console(highlight=False)


def _print(msg: str = "") -> None:
    """Print with Rich markup support."""
    _console.print(msg)


def _parse_item(raw: Any) -> SelectableItem:
    if isinstance(raw, str):
        return SelectableItem(name=raw)
    if not isinstance(raw, dict) or "name" not in raw:
        raise ValueError(f"Invalid item entry: {raw!r}")
    try:
        item_id = int(raw.get("id", 0))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid id for item {raw['name']!r}: {raw.get('id')!r}")
    return SelectableItem(
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        selected=bool(raw.get("selected", False)),
        id=item_id,
        user_data=raw.get("data"),
    )


def parse_menu(data: Any) -> list[Section]:
    """Build sections from a parsed menu document.

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
        raise ValueError("Menu file must contain a 'sections' list")

    sections = []
    for raw in data["sections"]:
        if not isinstance(raw, dict) or "name" not in raw:
            raise ValueError(f"Invalid section entry: {raw!r}")
        items = raw.get("items") or []
        if not isinstance(items, list):
            raise ValueError(f"Items of section {raw['name']!r} must be a list")
        sections.append(
            Section(
                name=str(raw["name"]),
                description=str(raw.get("description", "")),
                items=[_parse_item(item) for item in items],
            )
        )
    return sections


def load_menu_file(path: Path) -> list[Section]:
    """Read a YAML menu file.

    Raises:
        ValueError: If the file cannot be read or parsed.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError) as e:
        raise ValueError(f"Could not read menu file {path}: {e}")
    return parse_menu(data)


def format_selections(selections: dict[str, list[str]], fmt: str) -> str:
    if fmt == "yaml":
        return yaml.dump(selections, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(selections, indent=2, ensure_ascii=False)


def _configure_logging(debug: bool) -> None:
    if not debug:
        logging.getLogger("section_menu").addHandler(logging.NullHandler())
        return
    log_path = get_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="section-menu",
        description="section-menu: pick items grouped into sections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"section-menu {__version__}")
    parser.add_argument("menu_file", type=Path, help="YAML file describing the sections")
    parser.add_argument("--config", type=Path, help="Config file (default: ~/.config/section-menu/config.yaml)")
    parser.add_argument("--theme", choices=sorted(THEMES), help="Theme preset")
    parser.add_argument("--format", dest="fmt", choices=["json", "yaml"], default="json",
                        help="Output format for the selections")
    parser.add_argument("--debug", action="store_true", help="Write debug log to the config dir")
    return parser


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug)

    try:
        sections = load_menu_file(args.menu_file)
    except ValueError as e:
        _print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if not sections:
        _print("[red]Error:[/red] Menu file has no sections")
        sys.exit(1)

    config = load_config(args.config)
    if args.theme:
        config = replace(config, theme=get_theme(args.theme))

    menu = NavigationMenu(sections, config=config)
    try:
        menu.run()
    except KeyboardInterrupt:
        print()
        sys.exit(130)

    logger.debug("Final selections: %s", menu.all_selections())
    print(format_selections(menu.all_selections(), args.fmt))
