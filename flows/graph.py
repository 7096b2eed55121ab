"""
flows/graph.py

Layered flow graph (Sankey input) built from a canonical crop table.

Nodes are the distinct values of each dimension column, indexed globally in
column order so indices never collide between columns. Links only connect
adjacent columns; their weight is the summed production of the rows that
produce the value pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from flows.records import CanonicalTable

FLOW_COLUMNS: tuple[str, ...] = ("state", "season", "crop", "district")

COLUMN_COLORS: dict[str, str] = {
    "state": "rgba(174, 214, 241, 0.8)",
    "season": "rgba(169, 223, 191, 0.8)",
    "crop": "rgba(250, 215, 160, 0.8)",
    "district": "rgba(215, 189, 226, 0.8)",
}
LINK_OPACITY = 0.6


@dataclass(frozen=True)
class FlowNode:
    index: int
    label: str
    column: str
    x: float


@dataclass(frozen=True)
class FlowLink:
    source: int
    target: int
    value: float


@dataclass(frozen=True)
class FlowGraph:
    """
    Read-only node/link structure consumed by the charting layer.
    """

    nodes: tuple[FlowNode, ...] = field(default_factory=tuple)
    links: tuple[FlowLink, ...] = field(default_factory=tuple)
    columns: tuple[str, ...] = FLOW_COLUMNS

    def node_column(self, index: int) -> str:
        return self.nodes[index].column

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": list(self.columns),
            "nodes": [
                {"index": node.index, "label": node.label, "column": node.column, "x": node.x}
                for node in self.nodes
            ],
            "links": [
                {"source": link.source, "target": link.target, "value": link.value}
                for link in self.links
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "FlowGraph":
        return cls(
            nodes=tuple(FlowNode(**node) for node in payload.get("nodes", [])),
            links=tuple(FlowLink(**link) for link in payload.get("links", [])),
            columns=tuple(payload.get("columns", FLOW_COLUMNS)),
        )


def _distinct_in_order(values: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(values))


def link_color(column: str) -> str:
    """
    Colour for links leaving ``column``: the node colour at link opacity.
    """

    base = COLUMN_COLORS.get(column)
    if base is None:
        return f"rgba(200, 200, 200, {LINK_OPACITY})"
    channels = base[base.index("(") + 1 : base.index(")")].split(",")
    red, green, blue = (channel.strip() for channel in channels[:3])
    return f"rgba({red}, {green}, {blue}, {LINK_OPACITY})"


def build_flow_graph(
    table: CanonicalTable,
    columns: Sequence[str] = FLOW_COLUMNS,
) -> FlowGraph:
    """
    Build the layered flow graph for ``table``.
    """

    column_list = tuple(columns)
    if len(column_list) < 2:
        raise ValueError("A flow graph needs at least two dimension columns.")

    last_rank = len(column_list) - 1
    indices: dict[str, dict[str, int]] = {}
    nodes: list[FlowNode] = []
    offset = 0
    for rank, column in enumerate(column_list):
        distinct = _distinct_in_order(table.column(column))
        indices[column] = {value: offset + position for position, value in enumerate(distinct)}
        x = rank / last_rank
        nodes.extend(
            FlowNode(index=offset + position, label=value, column=column, x=x)
            for position, value in enumerate(distinct)
        )
        offset += len(distinct)

    productions = table.column("production")
    links: list[FlowLink] = []
    for source_column, target_column in zip(column_list, column_list[1:]):
        pair_totals: dict[tuple[str, str], float] = {}
        for source_value, target_value, production in zip(
            table.column(source_column),
            table.column(target_column),
            productions,
        ):
            pair = (source_value, target_value)
            # Zero production still gets a visible flow.
            pair_totals[pair] = pair_totals.get(pair, 0.0) + (production or 1.0)

        for (source_value, target_value), total in pair_totals.items():
            if total > 0:
                links.append(
                    FlowLink(
                        source=indices[source_column][source_value],
                        target=indices[target_column][target_value],
                        value=total,
                    )
                )

    return FlowGraph(nodes=tuple(nodes), links=tuple(links), columns=column_list)
