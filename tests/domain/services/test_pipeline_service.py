"""Tests for FeaturePipelineService end-to-end orchestration."""

from unittest.mock import Mock

import pytest

from fpl_predictor.adapters import (
    InMemoryFeatureStoreRepository,
    InMemoryRawRecordRepository,
)
from fpl_predictor.config import load_config
from fpl_predictor.domain.common import PipelineStageError
from fpl_predictor.domain.services.label_strategies import RealizedOutcomeLabel
from fpl_predictor.domain.services.pipeline_service import FeaturePipelineService


@pytest.fixture
def raw_store(make_player, make_team, make_fixture):
    return InMemoryRawRecordRepository(
        players=[make_player(player_id=i, team=1 + i % 2) for i in range(1, 5)],
        fixtures=[
            make_fixture(fixture_id=10, team_h=1, team_a=2),
            make_fixture(fixture_id=20, team_h=2, team_a=1, finished=True, team_h_score=1, team_a_score=0),
            make_fixture(fixture_id=30, team_h=1, team_a=2),
        ],
        teams=[make_team(1, code=3), make_team(2, code=14)],
    )


def seeded_config(**dataset):
    return load_config(config_data={"dataset": {"label_seed": 11, **dataset}})


class TestRun:
    def test_full_run(self, raw_store):
        store = InMemoryFeatureStoreRepository()
        pipeline = FeaturePipelineService(raw_store, store, seeded_config())

        summary = pipeline.run()

        assert summary.players == 4
        assert summary.fixtures == 3
        assert summary.teams == 2
        assert summary.training_rows == 12
        assert summary.label_strategy == "random"
        assert len(store.get_player_features().value) == 4
        assert len(store.get_fixture_features().value) == 3
        assert len(store.get_training_set().value) == 12

    def test_rerun_is_idempotent(self, raw_store):
        """Two runs over the same input with a seeded label leave identical stores."""
        store = InMemoryFeatureStoreRepository()
        pipeline = FeaturePipelineService(raw_store, store, seeded_config())

        pipeline.run()
        first = (
            store.get_player_features().value,
            store.get_fixture_features().value,
            store.get_training_set().value,
        )
        pipeline.run()
        second = (
            store.get_player_features().value,
            store.get_fixture_features().value,
            store.get_training_set().value,
        )

        assert first == second

    def test_sequential_and_parallel_runs_match(self, raw_store):
        stores = []
        for workers in (1, 4):
            store = InMemoryFeatureStoreRepository()
            config = load_config(
                config_data={
                    "dataset": {"label_seed": 3},
                    "execution": {"max_workers": workers},
                }
            )
            FeaturePipelineService(raw_store, store, config).run()
            stores.append(store.get_training_set().value)

        assert stores[0] == stores[1]

    def test_realized_labels_from_config(self, make_player, make_team, make_fixture, game):
        raw = InMemoryRawRecordRepository(
            players=[make_player(player_id=1, team=1, history=[game(1, 9, fixture=10)])],
            fixtures=[make_fixture(fixture_id=10, finished=True), make_fixture(fixture_id=11)],
            teams=[make_team(1), make_team(2)],
        )
        store = InMemoryFeatureStoreRepository()
        config = load_config(config_data={"dataset": {"label_strategy": "realized"}})

        summary = FeaturePipelineService(raw, store, config).run()

        labels = {r.fixture_id: r.label for r in store.get_training_set().value}
        assert summary.label_strategy == "realized"
        assert labels == {10: 9.0, 11: 0.0}

    def test_injected_label_strategy(self, raw_store):
        store = InMemoryFeatureStoreRepository()
        strategy = RealizedOutcomeLabel({})
        pipeline = FeaturePipelineService(raw_store, store, seeded_config(), label_strategy=strategy)

        pipeline.run()

        assert all(r.label == 0.0 for r in store.get_training_set().value)


class TestStageFailures:
    """A store failure aborts the run with a stage error."""

    def test_unavailable_raw_store(self):
        store = InMemoryFeatureStoreRepository()
        pipeline = FeaturePipelineService(
            InMemoryRawRecordRepository(unavailable=True), store, seeded_config()
        )

        with pytest.raises(PipelineStageError) as exc:
            pipeline.run()

        assert exc.value.stage == "feature_derivation"
        assert store.get_training_set().value == []

    def test_feature_write_failure_stops_assembly(self, raw_store):
        store = InMemoryFeatureStoreRepository()
        store.replace_fixture_features = Mock(side_effect=OSError("read-only store"))
        store.replace_training_set = Mock()
        pipeline = FeaturePipelineService(raw_store, store, seeded_config())

        with pytest.raises(PipelineStageError, match="read-only store"):
            pipeline.run()

        store.replace_training_set.assert_not_called()

    def test_failed_run_keeps_previous_output(self, raw_store):
        store = InMemoryFeatureStoreRepository()
        FeaturePipelineService(raw_store, store, seeded_config()).run()
        previous = store.get_training_set().value

        failing = FeaturePipelineService(
            InMemoryRawRecordRepository(unavailable=True), store, seeded_config()
        )
        with pytest.raises(PipelineStageError):
            failing.run()

        assert store.get_training_set().value == previous
