"""Interactive seating map of a plan, rendered with pyvis."""
import math
from itertools import combinations
from typing import Dict, Iterable, List, Tuple

import networkx as nx
from pyvis.network import Network

from .graph import build_relationship_graph
from .models import SeatingPlan

PREFERENCE_COLOR = "#3CB371"
CONFLICT_COLOR = "#FF6B6B"

PALETTE = [
    "#FFB347", "#77DD77", "#AEC6CF", "#C23B22", "#F49AC2", "#B39EB5",
    "#03C03C", "#779ECB", "#966FD6", "#FFD700", "#FF6961", "#CB99C9",
]


# ---------------------------
# Public API
# ---------------------------

def build_seating_graph(
    plan: SeatingPlan,
    guests: Iterable,
    relationships: Iterable,
    show_cross_table_edges: bool = False,
    canvas_size: Tuple[int, int] = (1600, 1000),
) -> nx.Graph:
    """
    Build the networkx graph behind the seating map.

    Nodes are seated guests, positioned around their table according to the
    table shape. Edges are preference (green) and conflict (red)
    relationships, by default only between guests at the same table.
    """
    name_by_id = {str(g.id): g.name for g in guests}
    graph = build_relationship_graph(relationships, name_by_id.keys())

    tables = [t for t in plan.tables if t.guests]
    width, height = canvas_size
    centers = _compute_table_centers([t.name for t in tables], width, height)
    table_of: Dict[str, str] = {}

    G = nx.Graph()
    for i, table in enumerate(tables):
        color = PALETTE[i % len(PALETTE)]
        coords = _seat_positions(centers[table.name], len(table.guests), table.shape)
        for gid, (x, y) in zip(table.guests, coords):
            table_of[gid] = table.name
            label = name_by_id.get(gid, gid)
            G.add_node(
                gid,
                label=label,
                title=_node_tooltip(gid, label, table.name, table.guests, graph),
                color=color,
                table=table.name,
                x=x,
                y=y,
                physics=False,
                shape="dot",
                size=18,
            )

    for a, b in combinations(table_of.keys(), 2):
        same_table = table_of[a] == table_of[b]
        if not same_table and not show_cross_table_edges:
            continue
        if graph.in_conflict(a, b):
            G.add_edge(a, b, color=CONFLICT_COLOR, width=4, label="conflict", smooth=not same_table)
        elif graph.prefers(a, b):
            G.add_edge(a, b, color=PREFERENCE_COLOR, width=2, label="preference", smooth=not same_table)
    return G


def generate_seating_map(
    plan: SeatingPlan,
    guests: Iterable,
    relationships: Iterable,
    show_cross_table_edges: bool = False,
) -> str:
    """Return the seating map as an HTML page."""
    G = build_seating_graph(plan, guests, relationships, show_cross_table_edges)
    net = Network(height="700px", width="100%", bgcolor="#111111", font_color="#EEEEEE")
    net.toggle_physics(False)  # positions are fixed
    net.from_nx(G)
    html = net.generate_html()
    return html.replace("</body>", _LEGEND_HTML + "</body>", 1)


# ---------------------------
# Internals
# ---------------------------

def _compute_table_centers(tables: List[str], width: int, height: int) -> Dict[str, Tuple[int, int]]:
    """
    Place table centers on a grid inside the canvas area.
    """
    if not tables:
        return {}
    n = len(tables)
    cols = max(1, int(math.ceil(math.sqrt(n))))
    rows = int(math.ceil(n / cols))
    margin = 120
    step_x = max(1, width - 2 * margin) // cols
    step_y = max(1, height - 2 * margin) // rows

    centers: Dict[str, Tuple[int, int]] = {}
    for idx, name in enumerate(tables):
        r, c = divmod(idx, cols)
        centers[name] = (margin + c * step_x + step_x // 2, margin + r * step_y + step_y // 2)
    return centers


def _seat_positions(center: Tuple[int, int], n: int, shape: str) -> List[Tuple[int, int]]:
    """
    round: seats on a circle.
    oval: seats on an ellipse twice as wide as tall.
    rectangle: seats along the two long sides.
    """
    cx, cy = center
    n = max(1, n)
    radius = 60 + 6 * n
    if shape == "rectangle":
        per_side = int(math.ceil(n / 2))
        cell = 32
        left = cx - (per_side - 1) * cell // 2
        pts = []
        for i in range(n):
            side, pos = divmod(i, per_side)
            pts.append((left + pos * cell, cy - 30 if side == 0 else cy + 30))
        return pts
    rx, ry = (radius * 2, radius) if shape == "oval" else (radius, radius)
    return [
        (int(cx + rx * math.cos(2 * math.pi * i / n)), int(cy + ry * math.sin(2 * math.pi * i / n)))
        for i in range(n)
    ]


def _node_tooltip(gid: str, name: str, table: str, members: List[str], graph) -> str:
    preferred = sum(1 for other in members if graph.prefers(gid, other))
    conflicting = sum(1 for other in members if graph.in_conflict(gid, other))
    return (
        f"<b>{name}</b><br>"
        f"Table: {table}<br>"
        f"Preferred at table: {preferred}<br>"
        f"Conflicts at table: {conflicting}"
    )


_LEGEND_HTML = f"""
<style>
.legend-box{{
  position:absolute;right:12px;bottom:12px;
  background:#222;color:#eee;border:1px solid #444;border-radius:8px;
  padding:8px 12px;font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial;font-size:12px;
  z-index:10;
}}
.legend-swatch{{display:inline-block;width:12px;height:12px;margin-right:6px;vertical-align:middle;border:1px solid #444;}}
</style>
<div class="legend-box">
  <div><span class="legend-swatch" style="background:{PREFERENCE_COLOR}"></span>preference</div>
  <div><span class="legend-swatch" style="background:{CONFLICT_COLOR}"></span>conflict</div>
  <div style="margin-top:6px;">node color: table</div>
</div>
"""
