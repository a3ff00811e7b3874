import json
import logging
from pathlib import Path

import click

from .pipeline import ConfigError, GeneratorConfig, HierarchyGenerator, OutputError, OutputMode


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--seed", "-s", default=None, type=int, help="Seed for reproducible output (overrides config file)")
@click.option("--package", "-p", default=None, type=str, help="Java package declared in written files")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing files in OUTPUT")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every build step")
@click.argument("output", required=False, default=None, type=click.Path(file_okay=False, resolve_path=True))
def hierarchy_synth(config, seed, package, force, verbose, output):
    """Generate a random Java class hierarchy.

    Writes one .java file per declaration into OUTPUT, or prints every
    declaration to stdout when OUTPUT is omitted.
    """
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose:
        logging.getLogger("hierarchy_synth").setLevel(logging.DEBUG)

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if seed is not None:
        config.seed = seed
    if package is not None:
        config.package = package

    try:
        generator = HierarchyGenerator(config)
    except ConfigError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e

    if output is None:
        click.echo(generator.generate(), nl=False)
        return

    mode = OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS
    try:
        written = generator.write(Path(output), mode)
    except OutputError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Wrote {len(written)} files to {output}")
