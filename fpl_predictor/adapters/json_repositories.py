"""JSON file repository implementations."""

import json
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from fpl_predictor.domain.common.result import DomainError, Result
from fpl_predictor.domain.models.fixture import FixtureFeatureSet, FixtureRawRecord
from fpl_predictor.domain.models.player import PlayerFeatureSet, PlayerRawRecord
from fpl_predictor.domain.models.team import TeamRawRecord
from fpl_predictor.domain.models.training import TrainingRow
from fpl_predictor.domain.repositories.feature_store_repository import (
    FeatureStoreRepository,
)
from fpl_predictor.domain.repositories.raw_record_repository import (
    RawRecordRepository,
)

M = TypeVar("M", bound=BaseModel)


class JsonStoreConfiguration(BaseModel):
    """Validation settings for the JSON raw record store."""

    max_validation_error_rate: float = Field(
        default=0.1, ge=0.0, le=0.5, description="Max rejected share (0-50%)"
    )


class JsonRawRecordRepository(RawRecordRepository):
    """
    Reads raw FPL documents from ``players.json``, ``fixtures.json`` and ``teams.json``.

    Each file holds a JSON list of documents, or an object wrapping the list
    under the FPL API key (``elements``, ``fixtures`` or ``teams``). Documents
    that fail validation are skipped with a warning; if the skipped share
    exceeds ``max_validation_error_rate`` the read fails instead.
    """

    PLAYERS_FILE = "players.json"
    FIXTURES_FILE = "fixtures.json"
    TEAMS_FILE = "teams.json"

    def __init__(
        self, data_dir: Path, config: Optional[JsonStoreConfiguration] = None
    ):
        self.data_dir = Path(data_dir)
        self.config = config or JsonStoreConfiguration()

    def get_player_records(self) -> Result[List[PlayerRawRecord]]:
        return self._load(self.PLAYERS_FILE, "elements", PlayerRawRecord)

    def get_fixture_records(self) -> Result[List[FixtureRawRecord]]:
        return self._load(self.FIXTURES_FILE, "fixtures", FixtureRawRecord)

    def get_team_records(self) -> Result[List[TeamRawRecord]]:
        return self._load(self.TEAMS_FILE, "teams", TeamRawRecord)

    def _load(self, filename: str, key: str, model: Type[M]) -> Result[List[M]]:
        path = self.data_dir / filename
        if not path.exists():
            return Result.failure(
                DomainError.data_not_found(
                    f"Raw data file not found: {path}", details={"path": str(path)}
                )
            )

        try:
            with open(path) as f:
                documents = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            return Result.failure(
                DomainError.data_access_error(f"Could not read {path}: {e}")
            )

        if isinstance(documents, dict):
            documents = documents.get(key)
        if not isinstance(documents, list):
            return Result.failure(
                DomainError.data_access_error(
                    f"{path} must contain a list of documents or an object with '{key}'"
                )
            )

        return self._validate(documents, model, filename)

    def _validate(
        self, documents: List[Any], model: Type[M], source: str
    ) -> Result[List[M]]:
        records: List[M] = []
        validation_errors: List[str] = []

        for document in documents:
            try:
                records.append(model.model_validate(document))
            except ValidationError as e:
                doc_id = document.get("id", "unknown") if isinstance(document, dict) else "unknown"
                validation_errors.append(f"{model.__name__} {doc_id}: {e.error_count()} errors")

        error_rate = len(validation_errors) / len(documents) if documents else 0.0
        if error_rate > self.config.max_validation_error_rate:
            return Result.failure(
                DomainError.data_access_error(
                    f"Too many validation errors in {source}: "
                    f"{len(validation_errors)}/{len(documents)} "
                    f"({error_rate:.1%} > {self.config.max_validation_error_rate:.1%}). "
                    f"Sample errors: {validation_errors[:3]}"
                )
            )

        if validation_errors:
            logger.warning(
                f"⚠️ {len(validation_errors)} records in {source} failed validation "
                f"(within tolerance): {validation_errors[:3]}"
            )

        logger.debug(f"Validated {len(records)} {model.__name__} records from {source}")
        return Result.success(records)


class JsonFeatureStoreRepository(FeatureStoreRepository):
    """
    Feature store backed by one JSON file per collection.

    A replace writes ``<name>.staging.json`` next to the target and then
    renames it over ``<name>.json`` with ``os.replace``, which is atomic on
    the same filesystem. If writing the staging file fails the previous
    collection is untouched.
    """

    PLAYER_FEATURES = "player_features"
    FIXTURE_FEATURES = "fixture_features"
    TRAINING_SET = "training_set"

    def __init__(self, store_dir: Path):
        self.store_dir = Path(store_dir)

    def path_for(self, name: str) -> Path:
        return self.store_dir / f"{name}.json"

    def replace_player_features(self, features: Sequence[PlayerFeatureSet]) -> None:
        self._replace(self.PLAYER_FEATURES, features)

    def replace_fixture_features(self, features: Sequence[FixtureFeatureSet]) -> None:
        self._replace(self.FIXTURE_FEATURES, features)

    def replace_training_set(self, rows: Sequence[TrainingRow]) -> None:
        self._replace(self.TRAINING_SET, rows)

    def get_player_features(self) -> Result[List[PlayerFeatureSet]]:
        return self._read(self.PLAYER_FEATURES, PlayerFeatureSet)

    def get_fixture_features(self) -> Result[List[FixtureFeatureSet]]:
        return self._read(self.FIXTURE_FEATURES, FixtureFeatureSet)

    def get_training_set(self) -> Result[List[TrainingRow]]:
        return self._read(self.TRAINING_SET, TrainingRow)

    def _replace(self, name: str, items: Sequence[BaseModel]) -> None:
        self.store_dir.mkdir(parents=True, exist_ok=True)
        target = self.path_for(name)
        staging = self.store_dir / f"{name}.staging.json"

        payload = [item.model_dump(mode="json") for item in items]
        try:
            with open(staging, "w") as f:
                json.dump(payload, f)
            os.replace(staging, target)
        except BaseException:
            staging.unlink(missing_ok=True)
            raise

        logger.debug(f"💾 Replaced {target} with {len(payload)} records")

    def _read(self, name: str, model: Type[M]) -> Result[List[M]]:
        path = self.path_for(name)
        if not path.exists():
            return Result.success([])

        try:
            with open(path) as f:
                documents = json.load(f)
            return Result.success([model.model_validate(doc) for doc in documents])
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            return Result.failure(
                DomainError.data_access_error(f"Could not read {path}: {e}")
            )
