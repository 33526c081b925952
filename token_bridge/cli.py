"""Click-based CLI interface for token-bridge."""

import json
import sys
from pathlib import Path
from typing import Any

import click

from . import __version__
from .bridge_logging import get_logger, setup_logging
from .config import load_config
from .errors import TokenValidationError, handle_exception
from .extractors import get_default_registry
from .operations import TOOLS, TokenBridge, render_result
from .schema import parse_tokens_from_string, sanitize_tokens
from .server import run_server

EXTRACT_METHODS = {
    "tailwind": "extract_tokens_from_tailwind",
    "css": "extract_tokens_from_css",
    "figma": "extract_tokens_from_figma_variables",
    "dtcg": "extract_tokens_from_json",
}

GENERATE_TARGETS = ["material3", "swiftui", "tailwind", "css"]


def _fail(error: Exception, ctx: click.Context) -> None:
    """Report an error through handle_exception and exit."""
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    message, exit_code = handle_exception(error, use_color=sys.stderr.isatty(), verbose=verbose)
    click.echo(message, err=True)
    ctx.exit(exit_code)


def _write_output(text: str, output: str | None) -> None:
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        get_logger().info(f"Wrote {path}")
    else:
        click.echo(text.rstrip("\n"))


def _check_payload(value: Any) -> Any:
    """Turn an {"error", "details"} payload into a TokenValidationError."""
    if isinstance(value, dict) and "error" in value:
        label = "dark tokens" if value["error"] == "Invalid dark tokens" else "tokens"
        raise TokenValidationError(value.get("details", []), label=label)
    return value


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--config", type=click.Path(exists=True), help="Configuration file path")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Log output format",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this file (rotated at 5 MB)",
)
@click.pass_context
def cli(ctx: click.Context, verbose, quiet, config, log_format, log_file) -> None:
    """token-bridge - convert design tokens between design tools and platforms."""
    if quiet and verbose:
        click.echo("Error: --quiet and --verbose are mutually exclusive", err=True)
        ctx.exit(1)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        bridge_config = load_config(
            Path(config) if config else None,
            overrides={"log_format": log_format, "log_file": log_file},
        )
    except Exception as e:
        _fail(e, ctx)
        return

    setup_logging(
        level=bridge_config.log_level,
        quiet=quiet,
        verbose=verbose,
        log_format=bridge_config.log_format,
        log_file=bridge_config.log_file,
    )
    ctx.obj["config"] = bridge_config
    ctx.obj["bridge"] = TokenBridge(bridge_config)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "-f",
    "source_format",
    type=click.Choice(list(EXTRACT_METHODS)),
    help="Source format (detected from the file name when omitted)",
)
@click.option("--output", "-o", type=click.Path(), help="Write tokens to this file")
@click.pass_context
def extract(ctx: click.Context, source, source_format, output) -> None:
    """Extract design tokens from a Tailwind, CSS, Figma or DTCG file."""
    bridge: TokenBridge = ctx.obj["bridge"]
    path = Path(source)

    if source_format is None:
        extractor = get_default_registry().get_for_file(path)
        if extractor is None:
            click.echo(
                f"Error: cannot detect the format of {path.name}; pass --format",
                err=True,
            )
            ctx.exit(1)
            return
        source_format = extractor.format_name

    try:
        content = path.read_text(encoding="utf-8")
        tokens = getattr(bridge, EXTRACT_METHODS[source_format])(content)
    except Exception as e:
        _fail(e, ctx)
        return

    get_logger().info(
        f"Extracted {tokens.total_tokens} tokens from {path.name} ({source_format})"
    )
    _write_output(render_result(tokens) + "\n", output)


@cli.command()
@click.argument("target", type=click.Choice(GENERATE_TARGETS))
@click.argument("tokens_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--liquid-glass/--no-liquid-glass",
    default=None,
    help="Include iOS 26 Liquid Glass helpers (swiftui)",
)
@click.option(
    "--format",
    "module_format",
    type=click.Choice(["esm", "cjs"]),
    help="Module format (tailwind)",
)
@click.option(
    "--dark",
    type=click.Path(exists=True, dir_okay=False),
    help="Dark mode tokens file (css)",
)
@click.option("--output", "-o", type=click.Path(), help="Write the theme to this file")
@click.pass_context
def generate(
    ctx: click.Context, target, tokens_file, liquid_glass, module_format, dark, output
) -> None:
    """Generate a platform theme from a tokens file."""
    bridge: TokenBridge = ctx.obj["bridge"]

    try:
        tokens = Path(tokens_file).read_text(encoding="utf-8")
        if target == "material3":
            result = bridge.generate_material3_theme(tokens)
        elif target == "swiftui":
            result = bridge.generate_swiftui_theme(tokens, liquid_glass)
        elif target == "tailwind":
            result = bridge.generate_tailwind_config(tokens, module_format)
        else:
            dark_tokens = Path(dark).read_text(encoding="utf-8") if dark else None
            result = bridge.generate_css_variables(tokens, dark_tokens)
        result = _check_payload(result)
    except Exception as e:
        _fail(e, ctx)
        return

    _write_output(result, output)


@cli.command()
@click.argument("tokens_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--level", type=click.Choice(["AA", "AAA"]), help="WCAG level to check")
@click.option(
    "--fail-on-error",
    is_flag=True,
    help="Exit with status 1 when any pair fails the level",
)
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
@click.pass_context
def contrast(ctx: click.Context, tokens_file, level, fail_on_error, as_json) -> None:
    """Check WCAG contrast for the color pairs in a tokens file."""
    bridge: TokenBridge = ctx.obj["bridge"]

    try:
        tokens = Path(tokens_file).read_text(encoding="utf-8")
        report = _check_payload(bridge.validate_contrast(tokens, level))
    except Exception as e:
        _fail(e, ctx)
        return

    if as_json:
        click.echo(render_result(report))
    else:
        click.echo(f"WCAG {report.level}: {report.passing}/{report.total} pairs passing")
        for result in report.results:
            mark = "✅" if result.passes(report.level) else "❌"
            click.echo(
                f"   {mark} {result.pair}: {result.ratio}:1 "
                f"({result.foreground} on {result.background})"
            )

    if fail_on_error and report.failing:
        ctx.exit(1)


@cli.command()
@click.argument("tokens_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the sanitized tokens as JSON")
@click.pass_context
def validate(ctx: click.Context, tokens_file, as_json) -> None:
    """Validate a tokens file against the canonical schema."""
    try:
        result = parse_tokens_from_string(Path(tokens_file).read_text(encoding="utf-8"))
        if not result.valid:
            raise TokenValidationError(result.errors)
    except Exception as e:
        _fail(e, ctx)
        return

    tokens = result.tokens
    if as_json:
        click.echo(render_result(sanitize_tokens(tokens)))
        return

    click.echo(f"✅ Valid: {tokens.total_tokens} tokens")
    for name in tokens.present_collections:
        click.echo(f"   {name}: {len(getattr(tokens, name))}")


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Serve the token operations as JSON-RPC over stdin/stdout."""
    exit_code = run_server(sys.stdin, sys.stdout, bridge=ctx.obj["bridge"])
    ctx.exit(exit_code)


@cli.command(name="tools")
def list_tools() -> None:
    """Print the JSON description of every operation."""
    click.echo(json.dumps([tool.to_dict() for tool in TOOLS.values()], indent=2))


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
