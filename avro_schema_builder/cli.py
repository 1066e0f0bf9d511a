import json
import logging

import click

from .config import BuilderConfig, default_config
from .dsl import DSL
from .errors import AvroBuilderError


@click.command()
@click.option("--load-path", "-I", "load_paths", multiple=True, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--no-validate", is_flag=True, default=False, help="Do not check the generated schema with the avro library")
@click.option("--compact", is_flag=True, default=False, help="Write the schema without indentation")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", default=None, required=False, type=click.Path(resolve_path=True))
def avro_schema_builder(load_paths, config, no_validate, compact, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if config is not None:
        with open(config) as f:
            config = BuilderConfig.from_dict(json.load(f))
    else:
        config = default_config.copy()

    # CLI flags override the config file
    config.add_load_path(*load_paths)
    if no_validate:
        config.validate = False
    if compact:
        config.pretty = False

    try:
        out = DSL(filename=path, config=config).to_json()
    except AvroBuilderError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo(out)
    else:
        with open(output, "w") as f:
            f.write(out + "\n")
