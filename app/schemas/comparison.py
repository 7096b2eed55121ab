"""
app/schemas/comparison.py

Response schemas for state comparison and crop calendar endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from flows.graph import FlowGraph
from flows.metrics import CropMetrics
from flows.records import CanonicalTable


class CropTableColumns(BaseModel):
    """
    Canonical table serialized as parallel per-field sequences.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    state_name: list[str] = Field(default_factory=list)
    district_name: list[str] = Field(default_factory=list)
    crop_name: list[str] = Field(default_factory=list)
    season_name: list[str] = Field(default_factory=list)
    area: list[float] = Field(default_factory=list)
    production: list[float] = Field(default_factory=list)
    crop_yield: list[float] = Field(default_factory=list, alias="yield")

    @classmethod
    def from_table(cls, table: CanonicalTable) -> "CropTableColumns":
        return cls.model_validate(table.to_columns())


class CropMetricsResponse(BaseModel):
    """
    Summary metrics with the camelCase wire names the dashboard expects.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_crops: int = Field(0, ge=0, alias="totalCrops")
    total_districts: int = Field(0, ge=0, alias="totalDistricts")
    total_seasons: int = Field(0, ge=0, alias="totalSeasons")
    total_records: int = Field(0, ge=0, alias="totalRecords")
    most_common_crop: str = Field("", alias="mostCommonCrop")
    crop_percentage: int = Field(0, ge=0, le=100, alias="cropPercentage")
    primary_season: str = Field("", alias="primarySeason")
    season_percentage: int = Field(0, ge=0, le=100, alias="seasonPercentage")

    @classmethod
    def from_metrics(cls, metrics: CropMetrics) -> "CropMetricsResponse":
        return cls.model_validate(metrics.to_wire())


class FlowNodeResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    label: str
    column: str
    x: float = Field(..., ge=0.0, le=1.0)


class FlowLinkResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: int = Field(..., ge=0)
    target: int = Field(..., ge=0)
    value: float = Field(..., gt=0.0)


class FlowGraphResponse(BaseModel):
    """
    Sankey-ready node/link graph.
    """

    model_config = ConfigDict(frozen=True)

    columns: list[str] = Field(default_factory=list)
    nodes: list[FlowNodeResponse] = Field(default_factory=list)
    links: list[FlowLinkResponse] = Field(default_factory=list)

    @classmethod
    def from_graph(cls, graph: FlowGraph) -> "FlowGraphResponse":
        return cls.model_validate(graph.to_dict())


class ComparisonDataResponse(BaseModel):
    """
    Comparison payload for one state.

    Failures still carry an empty table and zero metrics so rendering code
    never has to special-case absence.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    data: CropTableColumns = Field(default_factory=CropTableColumns)
    metrics: CropMetricsResponse = Field(default_factory=CropMetricsResponse)
    flow: FlowGraphResponse = Field(default_factory=FlowGraphResponse)
    state: str | None = None
    row_count: int = Field(0, ge=0, alias="rowCount")
    source: Literal["fresh", "cache", "stale", "none"] = "none"
    error: str | None = None

    @classmethod
    def failure(cls, message: str) -> "ComparisonDataResponse":
        return cls(error=message)


class StateListResponse(BaseModel):
    """
    Known state identifiers and where they were read from.
    """

    states: list[str] = Field(default_factory=list)
    source: str
    error: str | None = None


class CacheClearResponse(BaseModel):
    success: bool = True
    message: str
    cleared: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    comparison_source_available: bool
