#!/usr/bin/env python3
"""
Command-line entry point for SiteTree.

Commands:
  crawl URL     Crawl URL into a new namespace
  tree NAME     Print the page tree of a namespace (optionally export JSON/HTML)
  purge         Drop one namespace or the whole database
  namespaces    List existing namespaces
  config        Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

Example:
  site_tree crawl https://example.com --depth 2 --keyword docs --namespace example
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_tree import __version__
from site_tree.config import CrawlRequest, load_config
from site_tree.engine import CrawlEngine
from site_tree.errors import SiteTreeError
from site_tree.logger import DEFAULT_FORMAT, init_logging
from site_tree.report.html_report import render_html
from site_tree.report.json_report import render_json
from site_tree.tree import render_tree

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def build_engine(cfg) -> CrawlEngine:
    return CrawlEngine(cfg)


async def _with_engine(engine: CrawlEngine, method: str, *args):
    try:
        return await getattr(engine, method)(*args)
    finally:
        await engine.close()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteTree, version %(version)s')
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
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteTree command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--depth', '-d', type=int, default=None, help='Crawl depth 1-10 (default from config)')
@click.option('--keyword', '-k', default='', help='Only follow links containing this text (empty: follow all)')
@click.option('--namespace', '-n', default=None, help='Name of the new namespace (default: the URL itself)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Stop starting new branches after this many seconds')
@click.pass_context
def crawl(ctx, url, depth, keyword, namespace, crawl_timeout):
    """Crawl URL into a new namespace."""
    cfg = ctx.obj['config']
    if crawl_timeout is not None:
        cfg = cfg.model_copy(update={'crawl_timeout': crawl_timeout})
    try:
        request = CrawlRequest(
            url=url,
            depth=cfg.max_depth if depth is None else depth,
            keyword=keyword,
            namespace=namespace or url,
        )
    except ValidationError as e:
        print_error(f'Invalid crawl request: {e}')

    engine = build_engine(cfg)
    try:
        report = asyncio.run(_with_engine(engine, 'start_crawl', request))
    except SiteTreeError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    click.echo(
        f"Stored {report.stats.pages_stored} pages in '{report.namespace}' "
        f"in {report.duration:.2f} s"
        + (' (cancelled)' if report.cancelled else '')
    )


@cli.command('tree', context_settings=CONTEXT_SETTINGS)
@click.argument('namespace')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the records as JSON'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the tree as an HTML report'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with a tree.html.j2 Jinja2 template'
)
@click.pass_context
def tree(ctx, namespace, json_output, html_output, template_dir):
    """Print the page tree stored in NAMESPACE."""
    engine = build_engine(ctx.obj['config'])
    try:
        nodes = asyncio.run(_with_engine(engine, 'load_pages', namespace))
    except SiteTreeError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Failed to read namespace: {e}')

    for line in render_tree(nodes):
        click.echo(line)

    if json_output:
        try:
            saved_json = render_json(nodes, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(nodes, html_output, template_dir, title=namespace)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('purge', context_settings=CONTEXT_SETTINGS)
@click.argument('namespace', required=False)
@click.option('--all', 'purge_all', is_flag=True, help='Drop the entire database')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def purge(ctx, namespace, purge_all, yes):
    """Drop NAMESPACE, or every namespace with --all."""
    if purge_all == bool(namespace):
        print_error('Give either a NAMESPACE or --all')

    target = 'the entire database' if purge_all else f"namespace '{namespace}'"
    if not yes and not click.confirm(f'Are you sure you want to purge {target}?'):
        click.echo('Operation cancelled.')
        return

    engine = build_engine(ctx.obj['config'])
    try:
        if purge_all:
            asyncio.run(_with_engine(engine, 'purge_database'))
        else:
            asyncio.run(_with_engine(engine, 'purge_namespace', namespace))
    except Exception as e:
        print_error(f'Purge failed: {e}')
    click.echo(f'Purged {target}.')


@cli.command('namespaces', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def namespaces(ctx):
    """List existing namespaces."""
    engine = build_engine(ctx.obj['config'])
    try:
        names = asyncio.run(_with_engine(engine, 'list_namespaces'))
    except Exception as e:
        print_error(f'Failed to list namespaces: {e}')
    for name in names:
        click.echo(name)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
