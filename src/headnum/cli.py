#!/usr/bin/env python3
"""
headnum: Automatic multi-level heading numbers for Markdown

Common usage:
  headnum README.md                 (print the numbered document)
  headnum -i docs/                  (number every Markdown file in place)
  headnum --remove -i notes.md      (strip heading numbers in place)
  headnum --preview --style 1=chinese_upper --format 1="{}、"

Styles: arabic (1), alpha_lower (a), alpha_upper (A), roman_lower (i),
roman_upper (I), chinese_upper (一), circled (①).

Settings are read from `.headnum.toml`, `headnum.toml` or `[tool.headnum]` in
`pyproject.toml`, found by walking up from the current directory. Command-line
flags take precedence.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from strif import atomic_output_file

from headnum.config import find_config_file, load_config, merge_cli_with_config
from headnum.file_resolver import FileResolver, FileResolverConfig
from headnum.numbering.config_model import LevelConfig, NumberingConfig
from headnum.numbering.engine import number_headings
from headnum.numbering.number_styles import parse_style
from headnum.numbering.segments import preview_numbering
from headnum.numbering.stripping import strip_heading_numbers

log = logging.getLogger(__name__)


@dataclass
class Options:
    """Command-line options for the headnum tool."""

    files: list[str]
    output: str
    inplace: bool
    nobackup: bool
    remove: bool
    preview: bool
    list_files: bool
    version: bool
    verbose: bool
    config: str | None
    # Numbering
    start_level: int
    depth: int
    prepend_parent_number: bool
    remove_existing: bool
    levels: list[dict[str, Any]] | None
    styles: list[str]
    formats: list[str]
    separators: list[str]
    # File discovery
    include: list[str] | None
    extend_include: list[str]
    exclude: list[str] | None
    extend_exclude: list[str]
    respect_gitignore: bool
    files_max_size: int


# Built-in defaults for flags that a config file may also set. These are parsed
# with a `None` default so explicitly passed flags can be told apart.
_TRACKED_DEFAULTS: dict[str, Any] = {
    "start_level": 1,
    "depth": 8,
    "prepend_parent_number": True,
    "remove_existing": True,
    "extend_include": [],
    "extend_exclude": [],
    "respect_gitignore": True,
    "files_max_size": 1_048_576,
}


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns `(options, explicit_flags)` where `explicit_flags` names the options
    the user passed explicitly (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="headnum",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "files",
        nargs="*",
        type=str,
        default=[],
        help="Input files or directories (use '-' for stdin, '.' for current directory)",
    )
    parser.add_argument(
        "-o", "--output", type=str, default="-", help="Output file (use '-' for stdout)"
    )
    parser.add_argument(
        "-i", "--inplace", action="store_true", help="Edit files in place (ignores --output)"
    )
    parser.add_argument(
        "--nobackup",
        action="store_true",
        help="Do not keep a FILE.orig backup when using --inplace",
    )
    parser.add_argument(
        "--remove", action="store_true", help="Remove heading numbers instead of generating them"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print example numbers for each configured level and exit",
    )
    parser.add_argument(
        "--start-level",
        type=int,
        default=None,
        dest="start_level",
        metavar="N",
        help="First heading level to number, 1-8 (default: 1)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        metavar="N",
        help="Number of heading levels to number, 1-8 (default: 8)",
    )
    parser.add_argument(
        "--no-prepend-parent",
        action="store_const",
        const=False,
        default=None,
        dest="prepend_parent_number",
        help="Show only a heading's own number, not its parents' numbers",
    )
    parser.add_argument(
        "--keep-existing",
        action="store_const",
        const=False,
        default=None,
        dest="remove_existing",
        help="Do not strip existing numbers before generating new ones",
    )
    parser.add_argument(
        "--style",
        action="append",
        default=[],
        dest="styles",
        metavar="LEVEL=STYLE",
        help="Numeral style for a heading level, e.g. 2=roman_upper or 2=I. Can be repeated",
    )
    parser.add_argument(
        "--format",
        action="append",
        default=[],
        dest="formats",
        metavar="LEVEL=FORMAT",
        help="Display format for a heading level, with {} for the number, e.g. '1=({})'",
    )
    parser.add_argument(
        "--separator",
        action="append",
        default=[],
        dest="separators",
        metavar="LEVEL=SEP",
        help="Separator between a level's number and the next level's, e.g. '1=.'",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="FILE",
        help="Config file to use instead of searching for one",
    )
    # File discovery options
    parser.add_argument(
        "--extend-include",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Additional file patterns to include (e.g. '*.mdx'). Can be repeated",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--extend-exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Add to default exclusion patterns (e.g. 'drafts/'). Can be repeated",
    )
    parser.add_argument(
        "--no-respect-gitignore",
        action="store_const",
        const=False,
        default=None,
        dest="respect_gitignore",
        help="Disable .gitignore integration",
    )
    parser.add_argument(
        "--files-max-size",
        type=int,
        default=None,
        dest="files_max_size",
        metavar="BYTES",
        help="Skip files larger than this size in bytes (0 = no limit, default: 1048576)",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        help="Print resolved file paths without processing them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="store_true", help="Show version information and exit")
    opts = parser.parse_args(args)

    explicit_flags: set[str] = set()
    for name, default in _TRACKED_DEFAULTS.items():
        if getattr(opts, name) is None:
            setattr(opts, name, default)
        else:
            explicit_flags.add(name)
    if opts.exclude is not None:
        explicit_flags.add("exclude")

    return (
        Options(
            files=opts.files,
            output=opts.output,
            inplace=opts.inplace,
            nobackup=opts.nobackup,
            remove=opts.remove,
            preview=opts.preview,
            list_files=opts.list_files,
            version=opts.version,
            verbose=opts.verbose,
            config=opts.config,
            start_level=opts.start_level,
            depth=opts.depth,
            prepend_parent_number=opts.prepend_parent_number,
            remove_existing=opts.remove_existing,
            levels=None,
            styles=opts.styles,
            formats=opts.formats,
            separators=opts.separators,
            include=None,
            extend_include=opts.extend_include,
            exclude=opts.exclude,
            extend_exclude=opts.extend_exclude,
            respect_gitignore=opts.respect_gitignore,
            files_max_size=opts.files_max_size,
        ),
        explicit_flags,
    )


def _parse_level_assignment(flag: str, value: str) -> tuple[int, str]:
    """Parse "LEVEL=VALUE" from a --style/--format/--separator flag."""
    level_text, sep, rest = value.partition("=")
    if not sep or not level_text.strip().isdigit():
        raise ValueError(f"{flag} expects LEVEL=VALUE, got {value!r}")
    return int(level_text), rest


def build_numbering_config(options: Options) -> NumberingConfig:
    """Numbering config from merged options, with per-level flag overrides applied."""
    data: dict[str, Any] = {
        "start_level": options.start_level,
        "depth": options.depth,
        "prepend_parent_number": options.prepend_parent_number,
        "remove_existing": options.remove_existing,
    }
    if options.levels is not None:
        data["level_configs"] = options.levels
    config = NumberingConfig.from_dict(data)

    def level_config_for(flag: str, level: int) -> LevelConfig:
        if not config.in_range(level):
            raise ValueError(
                f"{flag} level {level} is outside the numbered levels "
                f"{config.start_level}-{config.end_level}"
            )
        return config.level_configs[level - config.start_level]

    for value in options.styles:
        level, style = _parse_level_assignment("--style", value)
        level_config_for("--style", level).style = parse_style(style)
    for value in options.formats:
        level, display_format = _parse_level_assignment("--format", value)
        level_config_for("--format", level).display_format = display_format
    for value in options.separators:
        level, separator = _parse_level_assignment("--separator", value)
        level_config_for("--separator", level).separator = separator
    return config


def _resolve_files(options: Options) -> list[str]:
    """Expand directories and globs; stdin ('-') is kept first."""
    resolvable = [f for f in options.files if f != "-"]
    stdin_present = len(resolvable) < len(options.files)

    resolver_config = FileResolverConfig(
        extend_include=options.extend_include,
        exclude=options.exclude,
        extend_exclude=options.extend_exclude,
        respect_gitignore=options.respect_gitignore,
        files_max_size=options.files_max_size,
    )
    if options.include is not None:
        resolver_config.include = options.include
    result = [str(p) for p in FileResolver(resolver_config).resolve(resolvable)]
    if stdin_present:
        result.insert(0, "-")
    return result


def transform_text(text: str, config: NumberingConfig, remove: bool) -> str:
    if remove:
        return strip_heading_numbers(text, config)
    return number_headings(text, config).text


def _write_atomic(path: Path, content: str) -> None:
    with atomic_output_file(path, make_parents=True) as temp_path:
        Path(temp_path).write_text(content, encoding="utf-8")


def process_files(files: list[str], options: Options, config: NumberingConfig) -> None:
    """Number (or un-number) each file, writing in place or to the output."""
    if options.inplace and "-" in files:
        raise ValueError("Cannot use --inplace with stdin")

    outputs: list[str] = []
    for file in files:
        if file == "-":
            text = sys.stdin.read()
        else:
            text = Path(file).read_text(encoding="utf-8")
        result = transform_text(text, config, options.remove)

        if options.inplace:
            path = Path(file)
            if result == text:
                log.debug("Unchanged: %s", path)
                continue
            if not options.nobackup:
                shutil.copyfile(path, path.with_name(path.name + ".orig"))
            _write_atomic(path, result)
            log.info("Updated: %s", path)
        else:
            outputs.append(result)

    if options.inplace:
        return
    combined = "\n".join(outputs)
    if options.output == "-":
        sys.stdout.write(combined)
    else:
        _write_atomic(Path(options.output), combined)


def _print_preview(config: NumberingConfig) -> None:
    for level in range(config.start_level, min(config.end_level, 8) + 1):
        samples = "   ".join(preview_numbering(config, level))
        print(f"H{level}: {samples} ...")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the headnum CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for usage errors, 2 for processing errors)
    """
    options, explicit_flags = _parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if options.version:
        try:
            version = importlib.metadata.version("headnum")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if not options.files and not options.preview:
        print(
            "Error: No input specified. Provide files, directories (use '.' for current"
            " directory), or '-' for stdin. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    try:
        config_path = Path(options.config) if options.config else find_config_file(Path.cwd())
        if config_path:
            log.debug("Using config file: %s", config_path)
            merge_cli_with_config(options, load_config(config_path), explicit_flags)
        config = build_numbering_config(options)

        if options.preview:
            _print_preview(config)
            return 0

        resolved_files = _resolve_files(options)
        if options.list_files:
            for f in resolved_files:
                print(f)
            return 0

        process_files(resolved_files, options, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
