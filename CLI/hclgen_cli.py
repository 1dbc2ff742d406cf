import logging
import os
import sys

import click
import hcl2
import yaml
from rich.console import Console

from hclgen import __version__, attribute, serialize_document, load_document, HclError
from hclgen.config import config_dir, init_config_dir, load_options
from hclgen.data_and_types import QuoteStyle

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def setup_logging():
    """Configure logging for the CLI"""

    log_dir = os.path.join(config_dir(), 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'hclgen.log')
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)

    file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    console_formatter = logging.Formatter('%(levelname)s: %(message)s')
    file_handler.setFormatter(file_formatter)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

def version_callback(ctx, param, value):
    """Print version information"""
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"hclgen v{__version__}")
    ctx.exit()

def fail(message: str):
    console.print(f"✗ {message}", style="red", markup=False)
    sys.exit(1)

def verify_hcl(text: str):
    """Parse rendered HCL to make sure it is syntactically valid"""
    try:
        hcl2.loads(text)
    except Exception as e:
        raise HclError(f"Generated HCL does not parse: {e}") from e


@click.group()
@click.option('--debug/--no-debug', default=False, help='Enable debug mode')
@click.option('--version', is_flag=True, callback=version_callback,
              expose_value=False, is_eager=True, help='Show version information')
def main(debug):
    """HCL generator CLI

    Renders YAML or JSON descriptions of attributes and blocks as
    HashiCorp Configuration Language.
    """
    try:
        setup_logging()
    except OSError as e:
        click.echo(click.style(f"Warning: file logging disabled: {e}", fg="yellow"), err=True)

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        click.echo(click.style("Debug mode enabled", fg="yellow"), err=True)


@main.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--indent', type=int, default=None, help='Spaces per nesting level')
@click.option('--quote-style', type=click.Choice([s.value for s in QuoteStyle]), default=None,
              help='How multi-line strings are written')
@click.option('--quote-keys/--no-quote-keys', default=None,
              help='Quote map keys that are not valid identifiers')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Config file (default: ~/.hclgen/config.yaml)')
@click.option('-o', '--output', type=click.Path(dir_okay=False, writable=True), default=None,
              help='Write HCL to this file instead of stdout')
@click.option('--verify', is_flag=True, help='Check that the generated HCL parses')
def render(path, indent, quote_style, quote_keys, config_path, output, verify):
    """Render a YAML/JSON document as HCL"""
    try:
        options = load_options(config_path, indent=indent, quote_style=quote_style, quote_keys=quote_keys)
        document = load_document(path)
        logger.info("Rendering %d attribute(s) and %d block(s) from %s",
                    len(document.attributes.entries), len(document.blocks), path)
        text = serialize_document(document, options)
        if verify:
            verify_hcl(text)
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
    except (HclError, TypeError, ValueError, yaml.YAMLError, OSError) as e:
        logger.error("Render of %s failed: %s", path, e)
        fail(f"Render failed: {e}")

    if output:
        console.print(f"✓ Wrote {output}", style="green", markup=False)
    else:
        click.echo(text, nl=False)


@main.command(name='attribute')
@click.argument('key')
@click.argument('value')
@click.option('--indent', type=int, default=None, help='Spaces per nesting level')
def attribute_command(key, value, indent):
    """Render KEY = VALUE; VALUE is read as YAML"""
    try:
        options = load_options(indent=indent)
        click.echo(attribute(key, yaml.safe_load(value), options))
    except (HclError, TypeError, ValueError, yaml.YAMLError) as e:
        fail(str(e))


@main.command()
@click.option('--force', is_flag=True, help='Overwrite an existing config file')
def init(force):
    """Write the default config to ~/.hclgen/config.yaml"""
    config_file = init_config_dir(force=force)
    console.print(f"✓ Config at {config_file}", style="green", markup=False)


if __name__ == '__main__':
    main()
