"""csl2cff command-line entry point.

    csl2cff refs.json                      # print a references fragment
    csl2cff refs.json --insert CITATION.cff
    csl2cff - --replace CITATION.cff < refs.json

Exit codes: 0 on success, 1 when the conversion fails, 2 on usage errors.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

import typer

from cslcff.cli.console import ErrorRenderer, get_console, set_verbose_mode, tip
from cslcff.converter import ConversionResult, MergeMode, convert
from cslcff.core.config import ConverterConfig, load_config
from cslcff.core.exceptions import CslCffError
from cslcff.core.logging import configure_logging, get_logger
from cslcff.csl.codec import parse_csl_json

logger = get_logger(__name__)

app = typer.Typer(
    name="csl2cff",
    help="Convert CSL-JSON records into CITATION.cff references.",
    add_completion=False,
    pretty_exceptions_enable=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from cslcff import __version__

        typer.echo(f"csl2cff {__version__}")
        raise typer.Exit()


def _read_input(input_path: str) -> str:
    if input_path == "-":
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8")


def _write_atomic(path: Path, text: str) -> None:
    """Replace path's contents in one step; a failed write leaves it untouched."""
    temp_path = path.with_name(path.name + ".tmp")
    try:
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, path)
    except OSError:
        if temp_path.exists():
            os.remove(temp_path)
        raise


def _select_mode(
    insert: Optional[Path], replace: Optional[Path]
) -> tuple[MergeMode, Optional[Path]]:
    if insert is not None and replace is not None:
        raise typer.BadParameter("--insert and --replace cannot be used together")
    if insert is not None:
        return MergeMode.INSERT, insert
    if replace is not None:
        return MergeMode.REPLACE, replace
    return MergeMode.STANDALONE, None


def _log_level(config: ConverterConfig, verbose: bool, quiet: bool) -> str:
    if verbose:
        return "DEBUG"
    if quiet:
        return "ERROR"
    return config.log_level


def _run(
    input_path: str,
    mode: MergeMode,
    target: Optional[Path],
    config: ConverterConfig,
) -> ConversionResult:
    items = parse_csl_json(_read_input(input_path))
    if target is None:
        return convert(items, mode, config=config)

    result = convert(items, mode, target.read_text(encoding="utf-8"), config=config)
    # Only reached once everything converted; nothing is written on failure
    _write_atomic(target, result.output)
    return result


@app.command()
def main(
    input_path: str = typer.Argument(
        ..., metavar="INPUT", help="CSL-JSON file to convert, or - for stdin"
    ),
    insert: Optional[Path] = typer.Option(
        None,
        "--insert",
        metavar="TARGET",
        help="Append the references to this CITATION.cff file",
    ),
    replace: Optional[Path] = typer.Option(
        None,
        "--replace",
        metavar="TARGET",
        help="Replace the references of this CITATION.cff file",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file (default: ./csl2cff.yaml)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Debug logging and tracebacks on errors"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only report errors, not lossy mappings"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Convert CSL-JSON records into CITATION.cff references.

    Without --insert or --replace the references are printed to stdout as a
    YAML list, ready to paste under a "references:" key.
    """
    mode, target = _select_mode(insert, replace)
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet cannot be used together")
    set_verbose_mode(verbose)

    try:
        config = load_config(config_path)
        configure_logging(level=_log_level(config, verbose, quiet))
        result = _run(input_path, mode, target, config)
    except (CslCffError, OSError, UnicodeDecodeError) as e:
        ErrorRenderer.render(e)
        raise typer.Exit(code=1)

    if target is None:
        typer.echo(result.output, nl=False)
    elif not quiet:
        get_console().print(
            f"[green]Wrote {len(result.references)} reference(s) to {target} "
            f"({mode.value})[/green]"
        )

    if result.warnings and not quiet:
        tip(
            f"{len(result.warnings)} value(s) could not be carried over exactly; "
            "see the warnings above"
        )


def cli_main() -> None:
    """Console script entry point."""
    app(prog_name="csl2cff")


if __name__ == "__main__":
    cli_main()
