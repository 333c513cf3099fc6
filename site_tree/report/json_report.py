# site_tree/report/json_report.py

"""
JSON export of a crawl namespace.

Each page is written in the persisted record format
(``id``, ``parentId``, ``url``, ``label``, ``childLinks``).
"""
import json
from pathlib import Path
from typing import Iterable

from site_tree.crawler.models import PageNode
from site_tree.tree import iter_tree


def render_json(nodes: Iterable[PageNode], output_path: Path | str) -> Path:
    """
    Save the records of *nodes* as a JSON list at *output_path*, in tree order.

    :param nodes: pages of one namespace
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from site_tree.report.json_report import render_json
    report_path = render_json(nodes, 'reports/example.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = [node.to_record() for _, node in iter_tree(nodes)]

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
