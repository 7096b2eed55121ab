"""
app/services/comparison_service.py

State comparison workflow: read the country-wide CSV, resolve the requested
state, normalize rows, then compute metrics and the flow graph.

Failure policy
--------------
* State list: stale cache, then the configured fallback states. Never raises.
* Comparison data: every failure becomes an error payload with an empty
  table and zero metrics. Source and schema failures serve a stale cached
  payload for the same state when one exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from app.config import (
    CacheSettings,
    DataSourceSettings,
    get_cache_settings,
    get_data_source_settings,
)
from app.logging_utils import log_event, timed_event
from app.repositories.csv_source_repository import CSVRows, CSVSourceRepository
from app.repositories.errors import SourceUnreadableError
from app.schemas.comparison import (
    ComparisonDataResponse,
    CropMetricsResponse,
    CropTableColumns,
    FlowGraphResponse,
    StateListResponse,
)
from app.services.state_cache import StateCache
from flows.columns import find_state_column, with_extra_candidate
from flows.errors import EmptyResultError, SchemaUnresolvableError, StateNotFoundError
from flows.graph import build_flow_graph
from flows.metrics import calculate_metrics
from flows.normalizer import RowNormalizer
from flows.states import match_state

logger = logging.getLogger(__name__)

_STATE_LIST_KEY = "__states__"


@dataclass(frozen=True)
class ComparisonOutcome:
    """
    Comparison payload plus the HTTP status it should be served with.
    """

    payload: ComparisonDataResponse
    status_code: int = 200


class ComparisonService:
    """
    Coordinates CSV loading, state matching, normalization and aggregation.
    """

    def __init__(
        self,
        *,
        data_settings: DataSourceSettings,
        cache_settings: CacheSettings,
        repository: CSVSourceRepository | None = None,
        data_cache: StateCache | None = None,
        states_cache: StateCache | None = None,
    ) -> None:
        self._data_settings = data_settings
        self._fallback_states = list(cache_settings.fallback_states)
        self._repository = repository or CSVSourceRepository()
        # StateCache defines __len__, so an empty injected cache is falsy.
        if data_cache is None:
            data_cache = StateCache(ttl_seconds=cache_settings.ttl_seconds)
        if states_cache is None:
            states_cache = StateCache(ttl_seconds=cache_settings.ttl_seconds)
        self._data_cache = data_cache
        self._states_cache = states_cache

    @property
    def data_cache(self) -> StateCache:
        return self._data_cache

    @property
    def states_cache(self) -> StateCache:
        return self._states_cache

    def source_available(self) -> bool:
        return self._repository.exists(self._data_settings.comparison_path)

    # ------------------------------------------------------------------
    # State list
    # ------------------------------------------------------------------

    def list_states(self) -> StateListResponse:
        """
        Return the sorted distinct states, degrading to a fixed list on failure.
        """

        try:
            lookup = self._states_cache.get(
                _STATE_LIST_KEY,
                self._load_state_names,
                stale_on=(Exception,),
            )
        except SourceUnreadableError as exc:
            log_event(logger, logging.WARNING, "state_list_fallback", reason="source_unreadable", error=str(exc))
            return StateListResponse(
                states=list(self._fallback_states),
                source="hardcoded (CSV file not found)",
                error=str(exc),
            )
        except SchemaUnresolvableError as exc:
            log_event(logger, logging.WARNING, "state_list_fallback", reason="no_state_column", error=str(exc))
            return StateListResponse(
                states=list(self._fallback_states),
                source="hardcoded (state_name column not found in CSV)",
                error=str(exc),
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error fetching available states")
            return StateListResponse(
                states=list(self._fallback_states),
                source="hardcoded (error occurred)",
                error=str(exc),
            )

        states = list(lookup.payload)
        if lookup.source == "fresh":
            source = str(self._data_settings.comparison_path)
        elif lookup.source == "cache":
            source = "cache"
        else:
            source = "stale cache (error fallback)"
        log_event(logger, logging.INFO, "state_list_served", count=len(states), source=lookup.source)
        return StateListResponse(states=states, source=source)

    def clear_states_cache(self) -> list[str]:
        return self._states_cache.invalidate()

    def _load_state_names(self) -> tuple[str, ...]:
        csv_rows = self._repository.read_rows(self._data_settings.comparison_path)
        state_column = self._require_state_column(csv_rows)
        names = {
            str(row.get(state_column) or "").strip()
            for row in csv_rows.rows
        }
        names.discard("")
        return tuple(sorted(names))

    # ------------------------------------------------------------------
    # Comparison data
    # ------------------------------------------------------------------

    def get_comparison(self, state: str | None) -> ComparisonOutcome:
        """
        Return comparison data for ``state`` as a well-formed payload.
        """

        if state is None or not state.strip():
            return ComparisonOutcome(
                payload=ComparisonDataResponse.failure("State parameter is required"),
                status_code=400,
            )

        log_event(logger, logging.INFO, "comparison_requested", state=state)
        try:
            lookup = self._data_cache.get(
                state,
                lambda: self._build_comparison(state),
                stale_on=(SourceUnreadableError, SchemaUnresolvableError),
            )
        except SourceUnreadableError as exc:
            return self._failure(state, str(exc), status_code=500)
        except SchemaUnresolvableError as exc:
            return self._failure(state, f"Could not find required columns in CSV data: {exc}")
        except StateNotFoundError as exc:
            log_event(
                logger,
                logging.WARNING,
                "state_not_found",
                requested=exc.requested,
                available_sample=list(exc.sample),
            )
            return self._failure(state, str(exc))
        except EmptyResultError as exc:
            return self._failure(state, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error fetching comparison data for state=%r", state)
            return self._failure(state, f"Failed to fetch comparison data: {exc}", status_code=500)

        payload: ComparisonDataResponse = lookup.payload
        if lookup.is_stale:
            payload = payload.model_copy(
                update={"error": "Source data unavailable; serving cached data."}
            )
        log_event(
            logger,
            logging.INFO,
            "comparison_served",
            state=state,
            source=lookup.source,
            rows=payload.row_count,
        )
        return ComparisonOutcome(payload=payload.model_copy(update={"source": lookup.source}))

    def clear_comparison_cache(self, state: str | None = None) -> list[str]:
        """
        Drop one cached state, or every cached state when ``state`` is omitted.
        """

        if state is not None and state.strip():
            return self._data_cache.invalidate(state)
        return self._data_cache.invalidate()

    def _build_comparison(self, state: str) -> ComparisonDataResponse:
        with timed_event(logger, "comparison_source_read", state=state) as extra:
            csv_rows = self._repository.read_rows(self._data_settings.comparison_path)
            extra["rows"] = len(csv_rows.rows)
        if not csv_rows.rows:
            raise EmptyResultError(state=state, message="No data found in CSV")

        state_column = self._require_state_column(csv_rows)
        stored = [str(row.get(state_column) or "").strip() for row in csv_rows.rows]
        available = list(dict.fromkeys(value for value in stored if value))
        matched = match_state(state, available)
        filtered = [row for row, value in zip(csv_rows.rows, stored) if value == matched]
        logger.info("Found %d rows for state %s", len(filtered), matched)

        normalizer = RowNormalizer(candidates=with_extra_candidate("state", state_column))
        table = normalizer.normalize(filtered)
        if not table:
            raise EmptyResultError(state=matched)

        return ComparisonDataResponse(
            data=CropTableColumns.from_table(table),
            metrics=CropMetricsResponse.from_metrics(calculate_metrics(table)),
            flow=FlowGraphResponse.from_graph(build_flow_graph(table)),
            state=matched,
            row_count=len(filtered),
            source="fresh",
        )

    @staticmethod
    def _require_state_column(csv_rows: CSVRows) -> str:
        state_column = find_state_column(csv_rows.headers)
        if state_column is None:
            raise SchemaUnresolvableError(missing=["state"], available=csv_rows.headers)
        return state_column

    @staticmethod
    def _failure(state: str, message: str, *, status_code: int = 200) -> ComparisonOutcome:
        log_event(logger, logging.WARNING, "comparison_failed", state=state, error=message)
        return ComparisonOutcome(
            payload=ComparisonDataResponse.failure(message),
            status_code=status_code,
        )


@lru_cache(maxsize=1)
def get_comparison_service() -> ComparisonService:
    """
    Build and cache the comparison service with env-driven settings.
    """

    return ComparisonService(
        data_settings=get_data_source_settings(),
        cache_settings=get_cache_settings(),
    )
