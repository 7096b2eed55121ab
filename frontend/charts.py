"""
frontend/charts.py

Plotly figures for the dashboard.
"""

from __future__ import annotations

import plotly.graph_objects as go

from flows.graph import COLUMN_COLORS, FlowGraph, link_color

SANKEY_TITLE = "Agricultural Flow: State → Season → Crop → District"


def build_sankey_figure(graph: FlowGraph, *, height: int = 720) -> go.Figure:
    """
    Render a flow graph as a left-to-right Sankey diagram.

    Nodes are pinned horizontally by dimension rank; their colour follows
    the column they belong to and links take the colour of their source
    column.
    """

    node_columns = [node.column for node in graph.nodes]
    sankey = go.Sankey(
        orientation="h",
        arrangement="snap",
        node=dict(
            pad=15,
            thickness=20,
            line=dict(color="white", width=0.5),
            label=[node.label for node in graph.nodes],
            color=[COLUMN_COLORS.get(column, "rgba(200, 200, 200, 0.8)") for column in node_columns],
            x=[node.x for node in graph.nodes],
        ),
        link=dict(
            source=[link.source for link in graph.links],
            target=[link.target for link in graph.links],
            value=[link.value for link in graph.links],
            color=[link_color(node_columns[link.source]) for link in graph.links],
        ),
    )

    fig = go.Figure(data=[sankey])
    fig.update_layout(
        title=dict(text=SANKEY_TITLE, font=dict(size=22)),
        font=dict(size=14, color="#333"),
        height=height,
        margin=dict(l=50, r=50, t=50, b=50),
        paper_bgcolor="rgb(255, 255, 255)",
        plot_bgcolor="rgb(255, 255, 255)",
    )
    return fig
