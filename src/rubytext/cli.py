from __future__ import annotations

import argparse
import sys
from importlib import metadata
from pathlib import Path

import tomllib
from rich.console import Console
from rich.markup import escape as escape_markup
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_CONFIG_FILENAME, LoadedConfig, load_config
from .converter import RubyTextMarkdown
from .logging_utils import set_debug_logging


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("rubytext")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"rubytext {__version__}",
    )


def _add_common_options(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "input_path",
        help="Markdown file to convert, or '-' to read standard input",
    )
    ap.add_argument(
        "-c",
        "--config",
        help=f"TOML options file (default: ./{DEFAULT_CONFIG_FILENAME} when present)",
    )
    ap.add_argument(
        "--no-definitions",
        action="store_true",
        help="Ignore **[base]: reading lines and skip automatic ruby.",
    )
    ap.add_argument(
        "--debug",
        action="store_true",
        help="Print definition and completion events to stderr.",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Markdown → HTML with ruby annotations. Use `rubytext defs` to list definitions.",
    )
    _add_version_flag(ap)
    _add_common_options(ap)
    ap.add_argument(
        "-o",
        "--output",
        help="Write HTML to this file instead of standard output",
    )
    ap.add_argument(
        "--brackets",
        nargs=2,
        metavar=("OPEN", "CLOSE"),
        help="Fallback <rp> brackets around readings (empty string drops one).",
    )
    ap.add_argument(
        "--separator",
        help="Mono-ruby separator inside readings (empty string disables splitting).",
    )
    ap.add_argument(
        "--no-ruby",
        action="store_true",
        help="Leave inline [base]^(reading) markup unconverted.",
    )
    ap.add_argument(
        "--no-escape",
        action="store_true",
        help="Pass raw HTML in the Markdown source through unescaped.",
    )
    return ap


def build_defs_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="List the ruby definitions collected from a Markdown document.",
    )
    _add_version_flag(ap)
    _add_common_options(ap)
    return ap


def _read_input(input_path: str) -> str:
    if input_path == "-":
        return sys.stdin.read()
    path = Path(input_path)
    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")
    return path.read_text(encoding="utf-8")


def _resolve_config(args: argparse.Namespace) -> LoadedConfig:
    if args.config:
        config_path = Path(args.config).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return load_config(config_path)
    default_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if default_path.exists():
        return load_config(default_path)
    return LoadedConfig()


def _build_converter(args: argparse.Namespace, *, escape: bool = True) -> RubyTextMarkdown:
    config = _resolve_config(args)
    md = RubyTextMarkdown(config.options, escape=escape, glossary=config.glossary)
    if args.no_definitions:
        md.set_definition_enabled(False)
    if getattr(args, "no_ruby", False):
        md.set_ruby_text_enabled(False)
    brackets = getattr(args, "brackets", None)
    if brackets:
        md.set_brackets(*brackets)
    separator = getattr(args, "separator", None)
    if separator is not None:
        md.set_separator(separator)
    return md


def _run_convert(args: argparse.Namespace) -> int:
    set_debug_logging(bool(args.debug))
    text = _read_input(args.input_path)
    md = _build_converter(args, escape=not args.no_escape)
    html = md.convert(text)
    if args.output:
        output_path = Path(args.output)
        output_path.write_text(html, encoding="utf-8")
        Console(stderr=True).print(f"[green]Wrote[/green] {escape_markup(str(output_path))}")
    else:
        sys.stdout.write(html)
    return 0


def _run_defs(args: argparse.Namespace) -> int:
    set_debug_logging(bool(args.debug))
    text = _read_input(args.input_path)
    md = _build_converter(args)
    registry = md.collect_definitions(text)
    console = Console()
    if not registry:
        console.print("No ruby definitions found.")
        return 0
    table = Table(title=f"Ruby definitions ({len(registry)})")
    table.add_column("Base")
    table.add_column("Reading")
    table.add_column("Attributes")
    for definition in sorted(registry, key=lambda item: item.base):
        attributes = definition.attributes.to_html().strip() if definition.attributes else ""
        table.add_row(Text(definition.base), Text(definition.reading), Text(attributes))
    console.print(table)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        if argv and argv[0] == "defs":
            defs_args = build_defs_parser().parse_args(argv[1:])
            return _run_defs(defs_args)

        parser = build_parser()
        if not argv:
            parser.print_help()
            return 0
        args = parser.parse_args(argv)
        return _run_convert(args)
    except (FileNotFoundError, ValueError) as exc:
        Console(stderr=True).print(f"[red]Error:[/red] {escape_markup(str(exc))}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
