"""
frontend/calendar_view.py

Turns raw crop calendar CSV text into the dashboard's table, metrics and
flow graph.
"""

from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd

from flows.graph import FlowGraph, build_flow_graph
from flows.metrics import CropMetrics, calculate_metrics
from flows.normalizer import RowNormalizer
from flows.records import CanonicalTable


@dataclass(frozen=True)
class CalendarView:
    frame: pd.DataFrame
    table: CanonicalTable
    metrics: CropMetrics
    graph: FlowGraph


def parse_calendar_csv(csv_text: str, *, normalizer: RowNormalizer | None = None) -> CalendarView:
    """
    Parse and normalize crop calendar CSV text.

    Raises SchemaUnresolvableError when a dimension column is missing.
    """

    if not csv_text.strip():
        frame = pd.DataFrame()
    else:
        frame = pd.read_csv(io.StringIO(csv_text), dtype=str, keep_default_na=False)
    table = (normalizer or RowNormalizer()).normalize(frame.to_dict(orient="records"))
    return CalendarView(
        frame=frame,
        table=table,
        metrics=calculate_metrics(table),
        graph=build_flow_graph(table),
    )
