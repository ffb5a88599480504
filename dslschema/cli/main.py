"""Command line interface for dslschema.

    dslschema inspect mypkg.model:Container mypkg.model:Item --function mypkg.model:make_item

Pre-indexes the given classes, extracts their schema functions and prints
them as JSON (default) or as one signature per line.
"""

from __future__ import annotations

import importlib
import json
from typing import Any

import click

from dslschema import __version__
from dslschema.extraction.converters import (
    format_constructor,
    format_member_function,
    format_top_level_function,
    to_primitives,
)
from dslschema.extraction.filters import is_public_and_not_hidden, is_public_and_restricted
from dslschema.extraction.orchestrator import DefaultFunctionExtractor, ExtractionOrchestrator
from dslschema.extraction.orchestrator import SchemaFunctions
from dslschema.introspection import describe_top_level_function, index_types
from dslschema.types.errors import ConfigurationError, DslSchemaError, ErrorCode, ErrorContext
from dslschema.utils.logger import configure_logging


def load_target(target: str) -> Any:
    """Import ``module.path:attribute``."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            f"target {target!r} must look like 'module.path:Name'",
            code=ErrorCode.INVALID_TARGET,
            context=ErrorContext(operation="load_target", component="cli"),
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"cannot import module {module_name!r}: {e}",
            context=ErrorContext(operation="load_target", component="cli"),
            original_error=e,
        ) from e

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ConfigurationError(
                f"{module_name!r} has no attribute {attribute!r}",
                context=ErrorContext(operation="load_target", component="cli"),
                original_error=e,
            ) from e
    return obj


def _render_text(functions: SchemaFunctions) -> str:
    lines: list[str] = []
    for entry in functions.types:
        lines.append(f"{entry.data_type}:")
        for constructor in entry.constructors:
            lines.append(f"  constructor {format_constructor(constructor)}")
        for member in entry.member_functions:
            lines.append(f"  {format_member_function(member)}")
    for function in functions.top_level_functions:
        lines.append(format_top_level_function(function))
    return "\n".join(lines)


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="dslschema", message="dslschema v%(version)s")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """dslschema - Declarative DSL schema extraction."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--function",
    "functions",
    multiple=True,
    help="Top-level function to include, as module.path:function.",
)
@click.option(
    "--all-public",
    is_flag=True,
    help="Include every public member, not only those tagged @restricted.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    show_default=True,
)
@click.option("--log-level", default=None, help="Log level for STDERR diagnostics.")
def inspect(
    targets: tuple[str, ...],
    functions: tuple[str, ...],
    all_public: bool,
    output_format: str,
    log_level: str | None,
) -> None:
    """Extract the schema functions of TARGETS (module.path:Class)."""
    configure_logging(log_level)
    try:
        types = [load_target(target) for target in targets]
        for target, host_type in zip(targets, types):
            if not isinstance(host_type, type):
                raise ConfigurationError(
                    f"target {target!r} is not a class",
                    context=ErrorContext(operation="inspect", component="cli"),
                )
        top_level = [describe_top_level_function(load_target(f)) for f in functions]

        pre_index = index_types(types)
        include_filter = is_public_and_not_hidden if all_public else is_public_and_restricted
        orchestrator = ExtractionOrchestrator(
            pre_index, DefaultFunctionExtractor(include_filter=include_filter)
        )
        extracted = orchestrator.extract(types, top_level)
    except DslSchemaError as e:
        click.echo(e.get_formatted_message(), err=True)
        raise SystemExit(1) from e

    if output_format == "json":
        click.echo(json.dumps(to_primitives(extracted), indent=2))
    else:
        click.echo(_render_text(extracted))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
