"""
stylus_bindgen.cli.main
=======================

`stylus-bindgen`: generate overload-safe Stylus bindings from a Solidity ABI.

Examples
--------
    $ stylus-bindgen generate --input abis/erc721.json --output src/erc721.rs
    $ stylus-bindgen generate --standard erc20 > src/erc20.rs
    $ stylus-bindgen selectors --input abis/erc721.json
    $ stylus-bindgen verify src/erc721.rs
    $ stylus-bindgen packs

Configuration
-------------
- Entry policy : `--entry-policy` or env `STYLUS_BINDGEN_ENTRY_POLICY` (skip|warn|error)
- Struct name  : `--struct-name` or env `STYLUS_BINDGEN_STRUCT_NAME` (default: Contract)
- Log level    : `--log-level` or env `STYLUS_BINDGEN_LOG_LEVEL` (default: WARNING)

Exit status is 0 only when every stage succeeded; generator errors exit 1
with the offending declaration in the message, usage errors exit 2.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
import tempfile
from typing import Any, NoReturn, Optional

import typer

from ..audit import audit_file
from ..config import BindgenConfig, load_config
from ..errors import BindgenError, WriteError
from ..packs import available, load_pack
from ..pipeline import bind, generate
from ..version import __version__

app = typer.Typer(
    name="stylus-bindgen",
    help="Generate overload-safe Stylus bindings from Solidity ABIs.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]

log = logging.getLogger("stylus_bindgen.cli")


def _configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("stylus_bindgen").setLevel(getattr(logging, level.upper(), logging.WARNING))


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _config(**overrides: Any) -> BindgenConfig:
    try:
        return load_config(**overrides)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _fail(e: Exception) -> NoReturn:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


def _read_abi(path: Optional[str], standard: Optional[str]) -> str:
    if (path is None) == (standard is None):
        raise typer.BadParameter("Provide exactly one of --input or --standard")
    if standard is not None:
        try:
            return load_pack(standard)
        except KeyError as e:
            raise typer.BadParameter(str(e.args[0])) from e
    if path == "-":
        return sys.stdin.read()
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        _fail(e)


def write_atomic(path: str, text: str) -> None:
    """Write `text` to `path` via a sibling temp file, so readers never see a partial unit."""
    d = os.path.dirname(os.path.abspath(path))
    tmp_path: Optional[str] = None
    try:
        os.makedirs(d, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=d, delete=False, suffix=".tmp"
        ) as tmp:
            tmp.write(text)
            tmp_path = tmp.name
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_path)
        raise WriteError(path, e.strerror or str(e)) from e


@app.callback()
def _root(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics on stderr.",
    ),
) -> None:
    cfg = _config(log_level=log_level)
    _configure_logging(cfg.log_level)


@app.command("generate")
def generate_cmd(
    input_path: Optional[str] = typer.Option(
        None, "--input", "-i", help="ABI JSON file, or '-' for stdin."
    ),
    output: str = typer.Option(
        "-", "--output", "-o", help="Output .rs file, or '-' for stdout."
    ),
    standard: Optional[str] = typer.Option(
        None, "--standard", "-s", help="Use a bundled interface pack instead of --input."
    ),
    struct_name: Optional[str] = typer.Option(
        None, "--struct-name", help="Name of the generated struct."
    ),
    entry_policy: Optional[str] = typer.Option(
        None, "--entry-policy", help="What to do with non-function entries: skip|warn|error."
    ),
) -> None:
    """Generate a Rust bindings module from an ABI."""
    cfg = _config(struct_name=struct_name, entry_policy=entry_policy)
    abi = _read_abi(input_path, standard)
    try:
        src = generate(abi, cfg)
        if output == "-":
            typer.echo(src, nl=False)
        else:
            write_atomic(output, src)
            log.info("wrote %s", output)
    except BindgenError as e:
        _fail(e)


@app.command("selectors")
def selectors_cmd(
    input_path: Optional[str] = typer.Option(
        None, "--input", "-i", help="ABI JSON file, or '-' for stdin."
    ),
    standard: Optional[str] = typer.Option(
        None, "--standard", "-s", help="Use a bundled interface pack instead of --input."
    ),
    entry_policy: Optional[str] = typer.Option(
        None, "--entry-policy", help="What to do with non-function entries: skip|warn|error."
    ),
) -> None:
    """Print identifier, canonical signature and selector per function, as JSON."""
    cfg = _config(entry_policy=entry_policy)
    abi = _read_abi(input_path, standard)
    try:
        bindings = bind(abi, cfg)
    except BindgenError as e:
        _fail(e)
    _print_json([b.to_dict() for b in bindings])


@app.command("verify")
def verify_cmd(
    path: str = typer.Argument(..., help="Generated .rs file to audit."),
) -> None:
    """Statically audit a generated file: names, selectors, signatures."""
    try:
        findings = audit_file(path)
    except (OSError, UnicodeDecodeError) as e:
        _fail(e)
    for f in findings:
        typer.echo(str(f), err=True)
    if findings:
        raise typer.Exit(code=1)
    typer.echo(f"ok: {path}")


@app.command("packs")
def packs_cmd() -> None:
    """List bundled interface packs."""
    for name in available():
        typer.echo(name)


@app.command("version")
def version_cmd() -> None:
    """Print the stylus-bindgen version."""
    typer.echo(f"stylus-bindgen {__version__}")


# --- Entrypoints --------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        app(prog_name="stylus-bindgen", args=argv)
    except SystemExit as e:
        return int(e.code or 0)
    return 0


def run() -> None:
    """Console-script entrypoint."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
