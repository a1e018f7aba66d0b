import json
import logging
import sys
from pathlib import Path

import click

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    OpenApiToIoTsError,
    PipelineGenerator,
    load_document,
)

LOG_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, DEBUG when verbose and WARNING otherwise."""
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


@click.group()
def openapi_to_io_ts():
    """Generate io-ts codecs from OpenAPI 3 specifications."""


@openapi_to_io_ts.command()
@click.option("--input", "-i", "input_path", required=True, type=click.Path(resolve_path=True), help="input openapi file")
@click.option("--output", "-o", "output_dir", required=True, type=click.Path(resolve_path=True), help="output directory")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Fail on unsupported schemas and dangling references instead of skipping them",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
def generate(input_path, output_dir, config, strict, verbose):
    """Generate io-ts codecs from an OpenAPI 3 document."""
    configure_logging(verbose)

    if config is not None:
        with open(config) as f:
            try:
                config = CodeGeneratorConfig.from_dict(json.load(f))
            except ValueError as e:
                raise click.ClickException(f"invalid config: {e}") from e
    else:
        config = CodeGeneratorConfig()

    # Apply CLI flag for strict mode (overrides config file if set)
    if strict:
        config.strict = True

    try:
        document = load_document(input_path)
        out = PipelineGenerator(document, config).generate()

        output_path = Path(output_dir) / config.output_filename
        AtomicWriter(config.output).write(output_path, out)
    except OpenApiToIoTsError as e:
        raise click.ClickException(str(e)) from e

    click.echo(str(output_path))


if __name__ == "__main__":
    openapi_to_io_ts()
