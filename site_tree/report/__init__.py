# File: site_tree/report/__init__.py
"""site_tree.report: JSON and HTML exports of a crawl tree, used by the CLI."""

from site_tree.report.html_report import render_html
from site_tree.report.json_report import render_json

__all__ = ["render_json", "render_html"]
