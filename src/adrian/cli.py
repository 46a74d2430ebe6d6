"""
Adrian command line
===================

Serve fonts over HTTP, or inspect what the font index would contain.
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .core.config import DEFAULT_CONFIG_PATH, AdrianConfig, load_config_from_yaml
from .core.exceptions import AdrianError, ConfigurationError, FontNotFoundError
from .core.logging_config import setup_access_log, setup_logging
from .fonts.css import family_css, font_css
from .fonts.weights import infer_weight
from .service import FontService

logger = logging.getLogger(__name__)


def _load_config(config_path: Path | None) -> AdrianConfig:
    path = config_path or DEFAULT_CONFIG_PATH
    logger.info(f"Loading {path}")
    try:
        return load_config_from_yaml(path)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to configuration YAML file (default: {DEFAULT_CONFIG_PATH})",
)


@click.group()
@click.version_option(__version__, "--version", prog_name="adrian")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """Adrian font server."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)


@cli.command()
@config_option
@click.option("--host", default=None, help="Interface to bind (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (overrides config)")
def serve(config, host, port):
    """Index the font directories, watch them, and serve fonts over HTTP."""
    import uvicorn

    from .server.app import create_app

    app_config = _load_config(config)
    setup_access_log(app_config.global_.logs.access)

    host = host or app_config.global_.host
    port = port or app_config.global_.port

    logger.info(f"Starting Adrian {__version__}")
    service = FontService(app_config)
    app = create_app(service)

    logger.info(f"Listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="warning")


@cli.command()
@config_option
def scan(config):
    """List the fonts that would be indexed."""
    app_config = _load_config(config)
    service = FontService(app_config)
    service.load()

    for record in sorted(service.index.records(), key=lambda r: r.full_name):
        click.echo(
            f"{record.unique_id}\t{record.format.value}\t{infer_weight(record)}\t"
            f"{record.full_name}\t{record.file_path}"
        )
    click.echo(f"{len(service.index)} fonts", err=True)


@cli.command()
@config_option
@click.option("--family", "-f", is_flag=True, help="Treat NAME as a family name prefix")
@click.argument("name")
def css(config, family, name):
    """Print @font-face CSS for a font or family."""
    app_config = _load_config(config)
    service = FontService(app_config)
    service.load()

    try:
        if family:
            click.echo(family_css(service.index, name), nl=False)
        else:
            click.echo(font_css(service.index, name))
    except FontNotFoundError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except AdrianError as e:
        logger.exception(f"CSS generation failed: {e}")
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
