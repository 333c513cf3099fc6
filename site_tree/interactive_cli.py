"""
SiteTree interactive runner: a numbered menu for operators who prefer prompts
over subcommands.

1. New crawl job
2. Purge operation
3. Display tree of an existing crawl
"""
import asyncio

import click
from pydantic import ValidationError

from site_tree.cli import _with_engine, build_engine, print_error
from site_tree.config import CrawlRequest, load_config
from site_tree.errors import SiteTreeError
from site_tree.tree import render_tree

MENU = (
    "Choose the operation you want to perform:\n"
    "1. New crawl job\n"
    "2. Purge operation\n"
    "3. Display tree of an existing crawl\n"
)


def _run(coro, failure: str):
    """Run *coro* to completion; any error ends the session in red with exit code 1."""
    try:
        return asyncio.run(coro)
    except SiteTreeError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f"{failure}: {e}")


def _new_crawl(cfg) -> None:
    url = click.prompt("Enter the url of the website that you want to crawl")
    depth = click.prompt("Enter the depth (1-10)", type=click.IntRange(1, 10), default=cfg.max_depth)
    keyword = click.prompt(
        "Enter a keyword (leave empty to store all links)", default="", show_default=False
    )

    engine = build_engine(cfg)
    while True:
        namespace = click.prompt(
            "Please write the name of your new collection (the URL itself is recommended)",
            default=url,
        )
        if not _run(engine.backend.namespace_exists(namespace), "Storage unavailable"):
            break
        click.echo("Collection already exists. Please choose a different name.")

    try:
        request = CrawlRequest(url=url, depth=depth, keyword=keyword, namespace=namespace)
    except ValidationError as e:
        print_error(f"Invalid crawl request: {e}")

    report = _run(_with_engine(engine, "start_crawl", request), "Crawl failed")
    click.echo(f"Stored {report.stats.pages_stored} pages in '{report.namespace}'.")


def _purge(cfg) -> None:
    choice = click.prompt(
        "Choose the purge operation you want to perform:\n"
        "1. Purge entire database\n"
        "2. Purge specific collection\n",
        type=click.IntRange(1, 2),
    )
    engine = build_engine(cfg)
    if choice == 1:
        answer = click.prompt("Are you sure you want to purge the entire database? (yes/no)")
        if answer.strip().lower() != "yes":
            click.echo("Operation cancelled.")
            return
        _run(_with_engine(engine, "purge_database"), "Purge failed")
        click.echo("Database purged successfully.")
    else:
        name = click.prompt("Enter the name of the collection to purge")
        _run(_with_engine(engine, "purge_namespace", name), "Purge failed")
        click.echo(f"Collection '{name}' purged successfully.")


def _display_tree(cfg) -> None:
    name = click.prompt("Enter the name of the collection to display tree")
    engine = build_engine(cfg)
    nodes = _run(_with_engine(engine, "load_pages", name), "Failed to load collection")
    for line in render_tree(nodes):
        click.echo(line)


@click.command()
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML or JSON configuration file.",
)
def main(config_path):
    """SiteTree interactive menu."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Failed to load configuration: {e}")

    choice = click.prompt(MENU, type=click.IntRange(1, 3))
    {1: _new_crawl, 2: _purge, 3: _display_tree}[choice](cfg)


if __name__ == "__main__":  # pragma: no cover
    main()
