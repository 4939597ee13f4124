"""Dependency graph rendering: ASCII listing, Graphviz DOT and standalone HTML."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Set, Tuple

from .models import DependencyEdge, ImportKind

Graph = Dict[str, Set[Tuple[str, ImportKind]]]


def build_graph(edges: List[DependencyEdge]) -> Graph:
    """Adjacency keyed by source file stem; parallel edges collapse by (target, kind)."""
    graph: Graph = {}
    for edge in edges:
        source = Path(edge.source).stem or "unknown"
        graph.setdefault(source, set()).add((edge.target, edge.import_kind))
    return graph


def _sorted_targets(targets: Set[Tuple[str, ImportKind]]) -> List[Tuple[str, ImportKind]]:
    return sorted(targets, key=lambda t: (t[0], t[1].value))


def ascii_graph(edges: List[DependencyEdge]) -> str:
    graph = build_graph(edges)
    if not graph:
        return "  No dependencies found"
    lines: List[str] = []
    for source in sorted(graph):
        lines.append(f"  Node: {source}:")
        for target, kind in _sorted_targets(graph[source]):
            lines.append(f"    └─→ {target} ({kind.value})")
        lines.append("")
    return "\n".join(lines)


def export_dot(edges: List[DependencyEdge], output_file: Path) -> None:
    graph = build_graph(edges)
    lines = ["digraph Dependencies {"]
    lines.append("  rankdir=LR;")

    nodes: Set[str] = set(graph)
    for targets in graph.values():
        nodes.update(target for target, _ in targets)
    for node in sorted(nodes):
        shape = "box" if node in graph else "ellipse"
        lines.append(f'  "{_esc(node)}" [shape={shape}];')

    for source in sorted(graph):
        for target, kind in _sorted_targets(graph[source]):
            lines.append(f'  "{_esc(source)}" -> "{_esc(target)}" [label="{kind.value}"];')

    lines.append("}")
    output_file.write_text("\n".join(lines), encoding="utf-8")


def export_html(edges: List[DependencyEdge], output_file: Path) -> None:
    graph = build_graph(edges)
    payload = {
        "nodes": sorted(graph),
        "edges": [
            {"src": source, "dst": target, "kind": kind.value}
            for source in sorted(graph)
            for target, kind in _sorted_targets(graph[source])
        ],
    }
    output_file.write_text(_html_document(payload), encoding="utf-8")


def _html_document(graph_payload: dict) -> str:
    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>ngscope dependency graph</title>
  <style>
    body {{ font-family: ui-monospace, SFMono-Regular, Menlo, monospace; margin: 20px; }}
    .node {{ border: 1px solid #ddd; border-radius: 8px; padding: 10px; margin-bottom: 12px; }}
    ul {{ list-style: none; padding-left: 12px; margin: 6px 0 0 0; }}
    li {{ margin: 2px 0; }}
    .kind {{ color: #888; }}
  </style>
</head>
<body>
  <h1>Dependency graph</h1>
  <div id="graph"></div>
  <script>
    const graph = {json.dumps(graph_payload)};
    const container = document.getElementById('graph');
    graph.nodes.forEach(name => {{
      const box = document.createElement('div');
      box.className = 'node';
      const title = document.createElement('strong');
      title.textContent = name;
      box.appendChild(title);
      const list = document.createElement('ul');
      graph.edges.filter(e => e.src === name).forEach(e => {{
        const li = document.createElement('li');
        li.innerHTML = '&rarr; ';
        li.appendChild(document.createTextNode(e.dst + ' '));
        const kind = document.createElement('span');
        kind.className = 'kind';
        kind.textContent = '(' + e.kind + ')';
        li.appendChild(kind);
        list.appendChild(li);
      }});
      box.appendChild(list);
      container.appendChild(box);
    }});
  </script>
</body>
</html>
"""


def _esc(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
