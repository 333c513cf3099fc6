# cli.py

"""
Launcher for running SiteTree from a source checkout without installing it.

Example:
    python cli.py crawl https://example.com --depth 2 --namespace example
    python cli.py tree example --html reports/example.html
"""
from site_tree.cli import cli

if __name__ == '__main__':
    cli()
