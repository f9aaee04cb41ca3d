#!/usr/bin/env python3
"""
FPL feature pipeline CLI.

Commands:
- features: derive player and fixture features into the feature store
- assemble: build the training set from the stored features
- run: features + assemble, in sequence
- train: fit a regression model on the stored training set
- recommend: rank affordable players with a saved model

Usage:
    python scripts/run_pipeline.py run --raw-dir data/raw --store-dir data/features
    python scripts/run_pipeline.py run --labels realized --workers 8
    python scripts/run_pipeline.py train --regressor random-forest
    python scripts/run_pipeline.py recommend --model-path models/x_pipeline.joblib --budget 80
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

# Add project root
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from fpl_predictor.adapters import (  # noqa: E402
    JsonFeatureStoreRepository,
    JsonRawRecordRepository,
    JsonStoreConfiguration,
)
from fpl_predictor.config import PredictorConfig, load_config  # noqa: E402
from fpl_predictor.domain.common import PipelineStageError  # noqa: E402
from fpl_predictor.domain.services import FeaturePipelineService  # noqa: E402
from fpl_predictor.domain.services.ml_training import (  # noqa: E402
    ModelTrainer,
    PointsPredictor,
    TrainingConfig,
)

app = typer.Typer(
    help="FPL feature derivation, dataset assembly and training CLI",
    add_completion=False,
)


def _load_settings(
    config_path: Optional[Path],
    raw_dir: Optional[Path],
    store_dir: Optional[Path],
    workers: Optional[int],
    labels: Optional[str],
    seed: Optional[int],
) -> PredictorConfig:
    settings = load_config(config_path)
    if raw_dir is not None:
        settings.storage.raw_data_dir = raw_dir
    if store_dir is not None:
        settings.storage.feature_store_dir = store_dir
    if workers is not None:
        settings.execution.max_workers = workers
    if labels is not None:
        settings.dataset.label_strategy = labels
    if seed is not None:
        settings.dataset.label_seed = seed
    return settings


def _build_pipeline(settings: PredictorConfig) -> FeaturePipelineService:
    raw_store = JsonRawRecordRepository(
        settings.storage.raw_data_dir,
        JsonStoreConfiguration(
            max_validation_error_rate=settings.storage.max_validation_error_rate
        ),
    )
    feature_store = JsonFeatureStoreRepository(settings.storage.feature_store_dir)
    return FeaturePipelineService(raw_store, feature_store, settings)


def _fail(error: PipelineStageError) -> None:
    logger.error(f"❌ Stage '{error.stage}' failed: {error.message}")
    raise typer.Exit(code=1)


ConfigOption = typer.Option(None, "--config", help="JSON configuration file")
RawDirOption = typer.Option(None, help="Directory with players/fixtures/teams.json")
StoreDirOption = typer.Option(None, help="Feature store directory")
WorkersOption = typer.Option(None, help="Parallel workers for feature derivation")
LabelsOption = typer.Option(None, help="Label strategy: random or realized")
SeedOption = typer.Option(None, min=0, help="Seed for placeholder labels")


@app.command("features")
def features(
    config_path: Optional[Path] = ConfigOption,
    raw_dir: Optional[Path] = RawDirOption,
    store_dir: Optional[Path] = StoreDirOption,
    workers: Optional[int] = WorkersOption,
):
    """Derive player and fixture features and replace them in the store."""
    settings = _load_settings(config_path, raw_dir, store_dir, workers, None, None)
    try:
        players, fixtures, _ = _build_pipeline(settings).run_feature_stage()
    except PipelineStageError as e:
        _fail(e)
    logger.info(f"✅ {len(players)} player and {len(fixtures)} fixture feature sets stored")


@app.command("assemble")
def assemble(
    config_path: Optional[Path] = ConfigOption,
    raw_dir: Optional[Path] = RawDirOption,
    store_dir: Optional[Path] = StoreDirOption,
    labels: Optional[str] = LabelsOption,
    seed: Optional[int] = SeedOption,
):
    """Build the training set from the stored features."""
    settings = _load_settings(config_path, raw_dir, store_dir, None, labels, seed)
    try:
        rows = _build_pipeline(settings).assemble()
    except PipelineStageError as e:
        _fail(e)
    logger.info(f"✅ {len(rows)} training rows stored")


@app.command("run")
def run(
    config_path: Optional[Path] = ConfigOption,
    raw_dir: Optional[Path] = RawDirOption,
    store_dir: Optional[Path] = StoreDirOption,
    workers: Optional[int] = WorkersOption,
    labels: Optional[str] = LabelsOption,
    seed: Optional[int] = SeedOption,
):
    """Run feature derivation and dataset assembly in sequence."""
    logger.info("=" * 70)
    logger.info("🎯 FPL FEATURE PIPELINE")
    logger.info("=" * 70)

    settings = _load_settings(config_path, raw_dir, store_dir, workers, labels, seed)
    try:
        summary = _build_pipeline(settings).run()
    except PipelineStageError as e:
        _fail(e)

    logger.info("\n📋 Summary:")
    logger.info(f"   Players: {summary.players}")
    logger.info(f"   Fixtures: {summary.fixtures}")
    logger.info(f"   Teams: {summary.teams}")
    logger.info(f"   Training rows: {summary.training_rows}")
    logger.info(f"   Labels: {summary.label_strategy}")


@app.command("train")
def train(
    config_path: Optional[Path] = ConfigOption,
    store_dir: Optional[Path] = StoreDirOption,
    regressor: Optional[str] = typer.Option(None, help="Regressor to use"),
    preprocessing: Optional[str] = typer.Option(None, help="Preprocessing strategy"),
    output_dir: Optional[Path] = typer.Option(None, help="Model output directory"),
):
    """Fit a regression model on the stored training set."""
    logger.info("=" * 70)
    logger.info("🎯 MODEL TRAINING")
    logger.info("=" * 70)

    settings = _load_settings(config_path, None, store_dir, None, None, None)
    training_config = TrainingConfig.from_settings(settings.training)
    overrides = {
        "regressor": regressor,
        "preprocessing": preprocessing,
        "output_dir": output_dir,
    }
    training_config = training_config.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    store = JsonFeatureStoreRepository(settings.storage.feature_store_dir)
    rows_result = store.get_training_set()
    if rows_result.is_failure:
        logger.error(f"❌ {rows_result.error.message}")
        raise typer.Exit(code=1)
    if not rows_result.value:
        logger.error("❌ Training set is empty; run the pipeline first")
        raise typer.Exit(code=1)

    trainer = ModelTrainer(training_config)
    pipeline, metadata = trainer.train(rows_result.value)
    model_path = trainer.save_model(pipeline, metadata)

    logger.info("\n" + "=" * 70)
    logger.info("✅ TRAINING COMPLETE")
    logger.info("=" * 70)
    logger.info(f"   Model: {model_path}")


@app.command("recommend")
def recommend(
    model_path: Path = typer.Option(..., help="Saved *_pipeline.joblib file"),
    budget: int = typer.Option(..., help="Maximum price in 0.1m units"),
    limit: int = typer.Option(5, help="Number of players to return"),
    horizon: int = typer.Option(5, help="Upcoming fixtures to average over"),
    config_path: Optional[Path] = ConfigOption,
    store_dir: Optional[Path] = StoreDirOption,
):
    """Rank affordable players by mean predicted points."""
    settings = _load_settings(config_path, None, store_dir, None, None, None)
    try:
        pipeline, _ = ModelTrainer.load_model(model_path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"❌ {e}")
        raise typer.Exit(code=1)

    predictor = PointsPredictor(
        pipeline, JsonFeatureStoreRepository(settings.storage.feature_store_dir)
    )
    for rank, rec in enumerate(predictor.generate_recommendations(budget, limit, horizon), 1):
        logger.info(
            f"   {rank}. {rec.web_name} (£{rec.now_cost / 10:.1f}m): "
            f"{rec.predicted_points:.2f} pts over {rec.fixtures_considered} fixtures"
        )


if __name__ == "__main__":
    app()
