"""Data module - row schemas and table loading.

Public API:
    read_table - CSV/JSON file -> DataFrame
    candidates_from_frame - DataFrame -> RosterCandidate list
    results_from_frame - DataFrame -> RaceResultSchema list
    CandidateSchema, RaceResultSchema - Pydantic row models
"""

from gatedrop.data.reader import (
    candidates_from_frame,
    read_table,
    require_columns,
    results_from_frame,
)
from gatedrop.data.schemas import CandidateSchema, RaceResultSchema

__all__ = [
    "read_table",
    "require_columns",
    "candidates_from_frame",
    "results_from_frame",
    "CandidateSchema",
    "RaceResultSchema",
]
