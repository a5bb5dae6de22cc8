"""Unit tests for the briefing engine."""

from datetime import datetime
from typing import Any

import pytest
from pydantic import ValidationError

from ai_briefing.clustering.metrics import ClusteringMetrics
from ai_briefing.config.schemas.base import SourceType
from ai_briefing.config.schemas.engine import EngineConfig, SelectionConfig
from ai_briefing.engine.engine import BriefingEngine, run_briefing_pure
from ai_briefing.engine.metrics import EngineMetrics
from ai_briefing.engine.models import RunInput, format_run_id
from ai_briefing.engine.state_machine import EngineState
from ai_briefing.errors import EngineStateTransitionError, TopicValidationError
from ai_briefing.sources.models import SourceItem
from ai_briefing.topics.builder import TopicBuilder
from tests.helpers.factories import make_run_input, make_source
from tests.helpers.time import BRIEFING_DATE, FIXED_NOW, WINDOW_START, hours_ago


@pytest.fixture(autouse=True)
def reset_metrics() -> None:
    """Reset metrics singletons between tests."""
    EngineMetrics.reset()
    ClusteringMetrics.reset()


def _primary(source_id: str = "s1", **kwargs: Any) -> SourceItem:
    return make_source(
        source_id,
        publisher="OpenAI Blog",
        title="OpenAI announces new pricing tiers",
        source_type=SourceType.PRIMARY,
        **kwargs,
    )


class TestRunInput:
    """Tests for RunInput validation."""

    def test_naive_times_read_as_utc(self) -> None:
        """Test naive window bounds are treated as UTC."""
        run_input = RunInput(
            window_start=datetime(2026, 1, 12, 9),
            window_end=datetime(2026, 1, 15, 9),
            briefing_date=BRIEFING_DATE,
        )
        assert run_input.window_end == FIXED_NOW
        assert run_input.reference_time == FIXED_NOW

    def test_inverted_window_rejected(self) -> None:
        """Test window_start after window_end is rejected."""
        with pytest.raises(ValidationError, match="window_start"):
            RunInput(
                window_start=FIXED_NOW,
                window_end=WINDOW_START,
                briefing_date=BRIEFING_DATE,
            )

    def test_bad_briefing_date_rejected(self) -> None:
        """Test the date label must be YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            RunInput(
                window_start=WINDOW_START,
                window_end=FIXED_NOW,
                briefing_date="15/01/2026",
            )

    def test_format_run_id(self) -> None:
        """Test the run identifier format."""
        assert format_run_id("2026-01-15") == "ai-2026-01-15-morning"


class TestBriefingEngine:
    """Tests for BriefingEngine.run."""

    def test_run_reaches_final(self) -> None:
        """Test a successful run ends in FINAL."""
        engine = BriefingEngine(run_id="test")
        result = engine.run(make_run_input([_primary()]))

        assert engine.state == EngineState.FINAL
        assert result.run_id == "ai-2026-01-15-morning"
        assert result.domain == "AI"
        assert result.cadence == "morning"
        assert result.topic_cap == 5
        assert result.briefing_count == 1
        assert result.started_at == FIXED_NOW
        assert result.completed_at == FIXED_NOW

    def test_engine_is_single_use(self) -> None:
        """Test a second run is rejected by the state machine."""
        engine = BriefingEngine(run_id="test")
        engine.run(make_run_input([_primary()]))

        with pytest.raises(EngineStateTransitionError):
            engine.run(make_run_input([_primary()]))

    def test_empty_batch(self) -> None:
        """Test an empty batch yields an empty, valid result."""
        result = run_briefing_pure(make_run_input([]))

        assert result.candidate_count == 0
        assert result.briefing_topics == []
        assert result.queued_topics == []
        assert result.excluded_reasons.outside_window == 0

    def test_outside_window_counted(self) -> None:
        """Test clusters first reported before the window are excluded."""
        result = run_briefing_pure(make_run_input([_primary(published_at=hours_ago(80))]))

        assert result.candidate_count == 0
        assert result.excluded_reasons.outside_window == 1

    def test_topic_ids_follow_cluster_position(self) -> None:
        """Test an excluded cluster leaves a gap in topic numbering."""
        sources = [
            _primary("s1", published_at=hours_ago(1)),
            _primary("s2", published_at=hours_ago(80)),
            make_source(
                "s3",
                publisher="NVIDIA Blog",
                title="NVIDIA GPU roadmap update",
                source_type=SourceType.PRIMARY,
                published_at=hours_ago(3),
            ),
        ]
        result = run_briefing_pure(make_run_input(sources))

        ids = [t.topic_id for t in result.briefing_topics + result.queued_topics]
        assert ids == ["ai-2026-01-15-02"]
        assert result.excluded_reasons.outside_window == 1

    def test_metrics_recorded(self) -> None:
        """Test injected metrics instances are updated."""
        metrics = EngineMetrics()
        clustering_metrics = ClusteringMetrics()
        engine = BriefingEngine(
            run_id="test", metrics=metrics, clustering_metrics=clustering_metrics
        )
        engine.run(make_run_input([_primary(), make_source("s2", title="Quiet day")]))

        assert metrics.items_in == 2
        assert metrics.clusters == 2
        assert metrics.candidates == 2
        assert metrics.briefing == 1
        assert metrics.queue == 1
        assert metrics.excluded_reasons["source_count"] == 1
        assert metrics.duration_ms >= 0
        assert clustering_metrics.items_in == 2

    def test_validation_failure_aborts_run(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a topic violating the output shape fails the run."""
        monkeypatch.setattr(TopicBuilder, "infer_title", lambda self, members: "x" * 61)
        engine = BriefingEngine(run_id="test")

        with pytest.raises(TopicValidationError) as exc_info:
            engine.run(make_run_input([_primary()]))

        assert engine.state == EngineState.FAILED
        assert exc_info.value.constraint == "title too long"
        assert exc_info.value.run_id == "test"

    def test_unexpected_error_fails_run(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test any error during a run moves the engine to FAILED."""

        def _boom(self: TopicBuilder, members: object) -> str:
            raise RuntimeError("title synthesis broke")

        monkeypatch.setattr(TopicBuilder, "infer_title", _boom)
        engine = BriefingEngine(run_id="test")

        with pytest.raises(RuntimeError, match="title synthesis broke"):
            engine.run(make_run_input([_primary()]))

        assert engine.state == EngineState.FAILED

    def test_rejected_rerun_stays_final(self) -> None:
        """Test a rejected second run leaves the finished engine FINAL."""
        engine = BriefingEngine(run_id="test")
        engine.run(make_run_input([_primary()]))

        with pytest.raises(EngineStateTransitionError):
            engine.run(make_run_input([_primary()]))

        assert engine.state == EngineState.FINAL

    def test_custom_config(self) -> None:
        """Test selection quotas come from the engine config."""
        config = EngineConfig(selection=SelectionConfig(briefing_max=0))
        result = run_briefing_pure(make_run_input([_primary()]), config=config)

        assert result.briefing_count == 0
        assert result.queue_count == 1

    def test_to_json_dict(self) -> None:
        """Test JSON export uses string enums and ISO timestamps."""
        data = run_briefing_pure(make_run_input([_primary()])).to_json_dict()

        topic = data["briefing_topics"][0]
        assert data["window"]["window_end"] == "2026-01-15T09:00:00Z"
        assert topic["confidence"] == "Med"
        assert topic["tags"]["subdomain"] == "ai_business_market"
        assert topic["sources"][0]["type"] == "Primary"
        assert set(data["excluded_reasons"]) == {
            "credibility",
            "relevance",
            "source_count",
            "outside_window",
            "diversity",
            "social_only",
        }
