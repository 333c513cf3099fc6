# File: site_tree/report/html_report.py
"""site_tree.report.html_report: HTML rendering of a crawl tree with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_tree.crawler.models import PageNode
from site_tree.tree import iter_tree

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "tree.html.j2"


def render_html(
    nodes: Iterable[PageNode],
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
    title: str = "SiteTree crawl",
) -> Path:
    """Render the tree of *nodes* from the template and save it.

    Args:
        nodes: pages of one namespace.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``tree.html.j2``; the bundled
            template is used when omitted.
        title: page heading, usually the namespace name.

    Returns:
        Path of the saved HTML file.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    rows = [{"depth": depth, "node": node} for depth, node in iter_tree(nodes)]
    context: dict[str, Any] = {"title": title, "rows": rows, "total": len(rows)}

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
