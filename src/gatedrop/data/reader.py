"""Loading candidate and race-result tables into validated core types.

Reads CSV or JSON files with pandas and validates every row through the
Pydantic schemas. Bad rows are not skipped: all row errors are collected
and raised together.

Key Functions:
    read_table() - Load a CSV/JSON file into a DataFrame
    candidates_from_frame() - DataFrame -> List[RosterCandidate]
    results_from_frame() - DataFrame -> List[RaceResultSchema]

Usage:
    from gatedrop.data import read_table, candidates_from_frame

    df = read_table("storage/a1_candidates.csv")
    candidates = candidates_from_frame(df)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Type, TypeVar, Union

import pandas as pd
from pydantic import BaseModel, ValidationError

from gatedrop.data.schemas import CandidateSchema, RaceResultSchema
from gatedrop.exceptions import InvalidInputError
from gatedrop.models.roster import RosterCandidate

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

CANDIDATE_COLUMNS = ("rider_id", "bike_class", "expected_points")
RESULT_COLUMNS = ("rider_id", "finish_position")


def read_table(path: Union[str, Path]) -> pd.DataFrame:
    """Load a CSV or JSON (records) file into a DataFrame.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidInputError: If the file extension is not supported.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix == ".json":
        df = pd.read_json(path, orient="records")
    else:
        raise InvalidInputError(f"Unsupported file type '{suffix}' (use .csv or .json)")

    logger.info(f"Loaded {len(df)} rows from {path}")
    return df


def require_columns(df: pd.DataFrame, required: Sequence[str]) -> None:
    """Raise InvalidInputError if any required column is missing.

    'id' is accepted in place of 'rider_id'.
    """
    columns = set(df.columns)
    if "id" in columns:
        columns.add("rider_id")
    missing = [c for c in required if c not in columns]
    if missing:
        raise InvalidInputError(f"Missing required columns: {missing}")


def _validate_rows(df: pd.DataFrame, schema: Type[SchemaT]) -> List[SchemaT]:
    rows: List[SchemaT] = []
    errors: List[Tuple[object, str]] = []

    for record in df.to_dict("records"):
        try:
            rows.append(schema.model_validate(record))
        except (ValidationError, ValueError) as e:
            errors.append((record.get("rider_id", record.get("id", "unknown")), str(e)))

    if errors:
        raise InvalidInputError(
            f"{len(errors)} invalid {schema.__name__} rows, first: {errors[:3]}"
        )
    return rows


def candidates_from_frame(df: pd.DataFrame) -> List[RosterCandidate]:
    """Validate a candidate DataFrame and convert it to RosterCandidates.

    Required columns: rider_id (or id), bike_class, expected_points.
    Optional columns: rider_name, is_all_star, is_excluded.
    """
    require_columns(df, CANDIDATE_COLUMNS)
    rows = _validate_rows(df, CandidateSchema)
    return [row.to_candidate() for row in rows]


def results_from_frame(df: pd.DataFrame) -> List[RaceResultSchema]:
    """Validate a race-result DataFrame.

    Required columns: rider_id (or id), finish_position.
    Optional columns: rider_name, bike_class, handicap, is_all_star.
    """
    require_columns(df, RESULT_COLUMNS)
    return _validate_rows(df, RaceResultSchema)
