"""
tests/test_frontend.py

Dashboard helpers that do not need a running Streamlit server: the API
client (against a fake session), calendar parsing and the Sankey figure.
"""

from __future__ import annotations

import pandas as pd
import pytest
import requests

from app.config import DataSourceSettings, FrontendSettings
from flows.errors import SchemaUnresolvableError
from flows.graph import build_flow_graph
from flows.records import CanonicalTable, CropRecord
from frontend.api_client import AgriFlowClient
from frontend.calendar_view import parse_calendar_csv
from frontend.charts import SANKEY_TITLE, build_sankey_figure


class _FakeResponse:
    def __init__(self, status_code: int = 200, payload: object = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> object:
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class _FakeSession:
    """Records calls and replays queued responses."""

    def __init__(self, *responses: _FakeResponse, error: Exception | None = None) -> None:
        self.responses = list(responses)
        self.error = error
        self.calls: list[tuple[str, str, dict | None, float]] = []

    def request(self, method: str, url: str, *, params=None, timeout=None) -> _FakeResponse:
        self.calls.append((method, url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


def _client(session: _FakeSession) -> AgriFlowClient:
    settings = FrontendSettings(api_url="http://api.test/", timeout_seconds=5.0)
    return AgriFlowClient(settings=settings, session=session)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


class TestAgriFlowClient:
    def test_list_states(self) -> None:
        session = _FakeSession(_FakeResponse(payload={"states": ["BIHAR"], "source": "cache"}))

        result = _client(session).list_states()

        assert result.ok
        assert result.data["states"] == ["BIHAR"]
        assert session.calls == [("GET", "http://api.test/api/comparison-states", None, 5.0)]

    def test_malformed_state_list(self) -> None:
        session = _FakeSession(_FakeResponse(payload={"states": "BIHAR"}))
        assert not _client(session).list_states().ok

    def test_comparison_error_payload_keeps_data(self) -> None:
        payload = {"data": {"state_name": []}, "metrics": {"totalRecords": 0}, "error": 'State "Goa" not found in data'}
        session = _FakeSession(_FakeResponse(payload=payload))

        result = _client(session).get_comparison("Goa")

        assert result.error == 'State "Goa" not found in data'
        assert result.data["metrics"]["totalRecords"] == 0
        assert session.calls[0][2] == {"state": "Goa"}

    def test_http_error_without_message(self) -> None:
        session = _FakeSession(_FakeResponse(status_code=502, payload={"detail": "bad gateway"}))

        result = _client(session).get_comparison("BIHAR")

        assert result.error == "/api/comparison-data failed with HTTP 502."
        assert result.status_code == 502

    def test_non_json_body(self) -> None:
        session = _FakeSession(_FakeResponse(status_code=200))
        result = _client(session).list_states()
        assert result.error == "/api/comparison-states: response was not valid JSON."

    def test_transport_failure_is_reported(self) -> None:
        session = _FakeSession(error=requests.ConnectionError("refused"))

        result = _client(session).list_states()

        assert not result.ok
        assert result.error.startswith("Could not reach the AgriFlow API")
        assert result.status_code is None

    def test_clear_cache_for_all_states_sends_no_params(self) -> None:
        session = _FakeSession(_FakeResponse(payload={"success": True, "message": "All state data cache cleared"}))

        _client(session).clear_comparison_cache()

        assert session.calls[0][:3] == ("POST", "http://api.test/api/comparison-data", None)

    def test_crop_calendar_csv(self) -> None:
        session = _FakeSession(_FakeResponse(text="state_name\nBIHAR\n"))
        result = _client(session).get_crop_calendar_csv("BIHAR")
        assert result.data == "state_name\nBIHAR\n"

    def test_crop_calendar_error_message_from_body(self) -> None:
        session = _FakeSession(_FakeResponse(status_code=404, payload={"error": "No data found for state: GOA"}))

        result = _client(session).get_crop_calendar_csv("GOA")

        assert result.error == "No data found for state: GOA"
        assert result.status_code == 404

    def test_crop_calendar_default_error(self) -> None:
        session = _FakeSession(_FakeResponse(status_code=500))
        result = _client(session).get_crop_calendar_csv("GOA")
        assert result.error == "Failed to fetch data for GOA"


# ---------------------------------------------------------------------------
# Calendar parsing
# ---------------------------------------------------------------------------


class TestParseCalendarCsv:
    def test_bihar_calendar(self, data_settings: DataSourceSettings) -> None:
        text = (data_settings.crop_calendar_path / "BIHAR_crop_calender.csv").read_text(encoding="utf-8")

        view = parse_calendar_csv(text)

        assert len(view.frame) == 2
        assert len(view.table) == 2
        assert view.metrics.total_records == 2
        assert view.metrics.crop_percentage == 50
        assert len(view.graph.nodes) == 7

    def test_empty_text_gives_empty_view(self) -> None:
        view = parse_calendar_csv("  \n")

        assert isinstance(view.frame, pd.DataFrame)
        assert view.frame.empty
        assert len(view.table) == 0
        assert view.metrics.most_common_crop == ""
        assert view.graph.nodes == ()

    def test_missing_dimension_column(self) -> None:
        with pytest.raises(SchemaUnresolvableError):
            parse_calendar_csv("state_name,district_name\nBIHAR,PATNA\n")


# ---------------------------------------------------------------------------
# Sankey figure
# ---------------------------------------------------------------------------


def test_sankey_figure_mirrors_graph() -> None:
    table = CanonicalTable(
        records=(
            CropRecord(state="BIHAR", district="PATNA", crop="Rice", season="Kharif", production=250),
            CropRecord(state="BIHAR", district="GAYA", crop="Wheat", season="Rabi", production=160),
        )
    )
    graph = build_flow_graph(table)

    figure = build_sankey_figure(graph, height=500)
    trace = figure.data[0]

    assert trace.type == "sankey"
    assert list(trace.node.label) == [node.label for node in graph.nodes]
    assert list(trace.link.value) == [link.value for link in graph.links]
    assert figure.layout.height == 500
    assert figure.layout.title.text == SANKEY_TITLE
