# === FILE: website2pdf/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for Website2Pdf.

Commands:
  print     Print every page listed in the sitemap(s) to PDF
  config    Show the resolved configuration

Global options:
  --config PATH       YAML/JSON configuration file (default: ./website2pdf.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

Notes:
  header.html and footer.html are read from --template-dir and used as PDF
  header/footer when --display-header-footer is set.

  Margins default to 50px top/bottom and 0px left/right when
  --display-header-footer is set, 0px everywhere otherwise.

Example:
  website2pdf print --sitemap-url https://example.com/sitemap.xml --safe-title --process-pool 4
"""
import asyncio
import sys
from pathlib import Path

import click
from click.core import ParameterSource
from pydantic import ValidationError

from website2pdf import __version__
from website2pdf.config import dump_config, load_config
from website2pdf.engine import start_conversion
from website2pdf.errors import Website2PdfError
from website2pdf.logger import configure, logger
from website2pdf.report.html_report import render_html
from website2pdf.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

WEBSITE2PDF_HEADER = r"""
●      __          __  _         _ _       ___  _____    _  __
●      \ \        / / | |       (_) |     |__ \|  __ \  | |/ _|
●       \ \  /\  / /__| |__  ___ _| |_ ___   ) | |__) |_| | |_
●        \ \/  \/ / _ \ '_ \/ __| | __/ _ \ / /|  ___/ _` |  _|
●         \  /\  /  __/ |_) \__ \ | ||  __// /_| |  | (_| | |
●          \/  \/ \___|_.__/|___/_|\__\___|____|_|   \__,_|_|
"""


# options of `print` that map 1:1 onto ConverterConfig fields
_CONFIG_OPTIONS = (
    "sitemap_urls",
    "output_dir",
    "template_dir",
    "process_pool",
    "display_header_footer",
    "margin_top",
    "margin_bottom",
    "margin_left",
    "margin_right",
    "safe_title",
    "chromium_flags",
    "exclude_urls",
)


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _load(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Unable to load configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Website2Pdf, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Website2Pdf: print every page of a sitemap to PDF."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('print', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--sitemap-url', '-s', 'sitemap_urls',
    multiple=True,
    help='Sitemap or sitemap index URL (repeatable).'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory receiving the PDFs.'
)
@click.option(
    '--template-dir', '-t', 'template_dir',
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory holding header.html and footer.html.'
)
@click.option(
    '--process-pool', '-p', 'process_pool',
    type=click.IntRange(min=1),
    help='Number of pages printed concurrently.'
)
@click.option(
    '--display-header-footer', 'display_header_footer',
    is_flag=True,
    help='Print the header and footer templates.'
)
@click.option('--margin-top', 'margin_top', help='Top margin (CSS length).')
@click.option('--margin-bottom', 'margin_bottom', help='Bottom margin (CSS length).')
@click.option('--margin-left', 'margin_left', help='Left margin (CSS length).')
@click.option('--margin-right', 'margin_right', help='Right margin (CSS length).')
@click.option(
    '--safe-title', 'safe_title',
    is_flag=True,
    help='Strip filesystem-unsafe characters from page titles.'
)
@click.option(
    '--chromium-flags', 'chromium_flags',
    help='Extra Chromium flags, space separated.'
)
@click.option(
    '--exclude-urls', '-x', 'exclude_urls',
    multiple=True,
    help='Regular expression of page URLs to skip (repeatable).'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the summary as JSON'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the summary as HTML'
)
@click.pass_context
def print_pdfs(ctx, json_output, html_output, **options):
    """Print every page listed in the sitemap(s) to PDF."""
    overrides = {
        name: options[name]
        for name in _CONFIG_OPTIONS
        if ctx.get_parameter_source(name) is not ParameterSource.DEFAULT
    }
    cfg = _load(ctx, **overrides)
    click.echo(WEBSITE2PDF_HEADER)
    click.echo(f'Printing sitemap(s): {", ".join(str(u) for u in cfg.sitemap_urls)}')

    try:
        report = asyncio.run(start_conversion(cfg))
    except Website2PdfError as e:
        logger.debug("Conversion aborted", exc_info=True)
        print_error(str(e))
    except Exception as e:
        logger.debug("Conversion failed", exc_info=True)
        print_error(f'Conversion failed: {e}')

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(report, json_output)}')
        except Exception as e:
            print_error(f'Unable to save JSON report: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(report, None, html_output)}')
        except Exception as e:
            print_error(f'Unable to save HTML report: {e}')

    click.echo(f'{report.printed}/{report.total} PDF(s) printed, {report.errored} errored')
    if report.total and not report.printed:
        sys.exit(1)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the resolved configuration as JSON."""
    cfg = _load(ctx)
    click.echo(dump_config(cfg))


if __name__ == "__main__":
    cli()
