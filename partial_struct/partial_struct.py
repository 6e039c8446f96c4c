import json
import logging

import click

from .errors import PartialError
from .pipeline import CodeGeneratorConfig, OutputMode, PartialGenerator


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Override the record name from the description")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--source-module",
    "-m",
    default=None,
    type=str,
    help="Import the full type from this module instead of generating it",
)
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option(
    "--format/--no-format",
    "format_code",
    default=None,
    help="Run the configured formatter (black by default); overrides the config file",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def partial_struct(name, config, source_module, force, format_code, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    with open(path) as f:
        record = json.load(f)

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if source_module:
        config.source_module = source_module
    if force:
        config.output.mode = OutputMode.FORCE
    if format_code is not None:
        config.formatter.enabled = format_code

    try:
        codegen = PartialGenerator(record, config, name=name)
        codegen.write(output)
    except PartialError as e:
        raise click.ClickException(str(e)) from e
