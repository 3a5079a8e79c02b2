"""typedecl command-line interface."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

import click

from typedecl import __version__
from typedecl.config import TypedeclConfig, discover_config, load_config
from typedecl.definitions import FieldDefinition, build_fields, render
from typedecl.errors import DiagnosticRenderer, MalformedType
from typedecl.highlight import highlight_declaration
from typedecl.tokenizer import tokenize
from typedecl.tokens import NestedToken, Token, to_json


def _read_declarations(declaration: str) -> list[str]:
    """One declaration, or one per non-blank stdin line for ``-``."""
    if declaration == "-":
        stdin = click.get_text_stream("stdin")
        return [line.strip() for line in stdin if line.strip()]
    return [declaration]


def _each_tokenized(
    config: TypedeclConfig,
    declaration: str,
    handle: Callable[[str, tuple[Token, ...]], bool],
) -> None:
    """Tokenize each declaration and pass it to ``handle``.

    Diagnostics go to stderr; exits 1 if any declaration failed or any
    ``handle`` call returned False.
    """
    renderer = DiagnosticRenderer(color=config.output.color)
    ok = True
    for text in _read_declarations(declaration):
        limit = config.tokenizer.max_length
        if len(text) > limit:
            click.echo(
                f"error: declaration is {len(text)} characters long, limit is {limit}",
                err=True,
            )
            ok = False
            continue
        try:
            tokens = tokenize(text)
        except MalformedType as e:
            click.echo(renderer.render(e.diagnostic, text), err=True)
            ok = False
            continue
        try:
            handled = handle(text, tokens)
        except RecursionError:
            click.echo("error: declaration nests too deeply to display", err=True)
            handled = False
        if not handled:
            ok = False
    if not ok:
        raise SystemExit(1)


@click.group()
@click.version_option(__version__, prog_name="typedecl")
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to typedecl.toml (default: nearest one upwards).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Tokenize nested column-type declarations."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("typedecl").setLevel(level)
    ctx.obj = load_config(config_path) if config_path else discover_config()


@main.command()
@click.argument("declaration")
@click.option("--json", "as_json", is_flag=True, help="Emit the token tree as JSON.")
@click.pass_obj
def tokens(config: TypedeclConfig, declaration: str, as_json: bool) -> None:
    """Print the token tree of DECLARATION (`-` reads stdin)."""
    indent = config.output.indent

    def show(text: str, toks: tuple[Token, ...]) -> bool:
        if as_json:
            click.echo(json.dumps(to_json(toks), indent=indent or None))
        else:
            _dump_tokens(toks, indent)
        return True

    _each_tokenized(config, declaration, show)


@main.command()
@click.argument("declaration")
@click.pass_obj
def fields(config: TypedeclConfig, declaration: str) -> None:
    """Print the field definitions of DECLARATION (`-` reads stdin)."""
    indent = config.output.indent

    def show(text: str, toks: tuple[Token, ...]) -> bool:
        for field_def in build_fields(toks):
            _dump_field(field_def, 0, indent)
        return True

    _each_tokenized(config, declaration, show)


@main.command(name="format")
@click.argument("declaration")
@click.option("--check", is_flag=True, help="Only report declarations that are not canonical.")
@click.pass_obj
def format_cmd(config: TypedeclConfig, declaration: str, check: bool) -> None:
    """Print DECLARATION in canonical form (`-` reads stdin)."""

    def show(text: str, toks: tuple[Token, ...]) -> bool:
        canonical = render(toks)
        if not check:
            click.echo(canonical)
            return True
        if canonical != text:
            click.echo(f"would reformat: {text} -> {canonical}")
            return False
        return True

    _each_tokenized(config, declaration, show)


@main.command(name="highlight")
@click.argument("declaration")
@click.pass_obj
def highlight_cmd(config: TypedeclConfig, declaration: str) -> None:
    """Print DECLARATION with syntax colors (`-` reads stdin)."""

    def show(text: str, toks: tuple[Token, ...]) -> bool:
        click.echo(highlight_declaration(text, color=config.output.color))
        return True

    _each_tokenized(config, declaration, show)


def _dump_tokens(toks: tuple[Token, ...], indent: int) -> None:
    """Print a readable token tree."""
    stack = [iter(toks)]
    while stack:
        tok = next(stack[-1], None)
        if tok is None:
            stack.pop()
            continue
        pad = " " * (indent * (len(stack) - 1))
        if isinstance(tok, NestedToken):
            click.echo(f"{pad}NESTED")
            stack.append(iter(tok.children))
        else:
            click.echo(f"{pad}{tok.kind.name} {tok.lexeme!r}")


def _dump_field(field_def: FieldDefinition, depth: int, indent: int) -> None:
    pad = " " * (indent * depth)
    name = field_def.name if field_def.name is not None else "-"
    suffix = f"({field_def.length})" if field_def.length is not None else ""
    click.echo(f"{pad}{name}: {field_def.type}{suffix}")
    for child in field_def.fields:
        _dump_field(child, depth + 1, indent)
