# File: tests/test_report.py
import json

from site_tree.crawler.models import PageNode
from site_tree.report import render_html, render_json


def test_render_json_writes_records_in_tree_order(tmp_path, sample_nodes):
    out = render_json(sample_nodes, tmp_path / "nested" / "tree.json")

    data = json.loads(out.read_text(encoding="utf-8"))
    assert [r["id"] for r in data] == ["1", "2", "4", "3"]
    assert data[0] == sample_nodes[0].to_record()


def test_render_html_escapes_labels(tmp_path, sample_nodes):
    nodes = sample_nodes + [PageNode("5", "3", "http://example.com/b/y", "<script>x</script>")]

    out = render_html(nodes, tmp_path / "tree.html", title="example")

    html = out.read_text(encoding="utf-8")
    assert "<h1>example</h1>" in html
    assert "5 pages" in html
    assert "&lt;script&gt;x&lt;/script&gt;" in html
    assert "<script>x</script>" not in html


def test_render_html_custom_template(tmp_path, sample_nodes):
    tpl_dir = tmp_path / "tpl"
    tpl_dir.mkdir()
    (tpl_dir / "tree.html.j2").write_text(
        "{% for row in rows %}{{ row.depth }}:{{ row.node.id }};{% endfor %}", encoding="utf-8"
    )

    out = render_html(sample_nodes, tmp_path / "out.html", template_dir=tpl_dir)

    assert out.read_text(encoding="utf-8") == "0:1;1:2;2:4;1:3;"
