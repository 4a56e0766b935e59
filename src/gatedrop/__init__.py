"""
Gatedrop - Decision Support for Supercross Fantasy

Two rules, applied consistently:
    Scoring: handicap-adjusted points, doubled for non-All-Stars in the top 10
    Roster:  maximize Σ(expected_points) over 4 riders per class

Structure:
    models/     - Scoring engine and roster optimizer
    data/       - Row schemas and CSV / DataFrame loading
    decisions/  - DataFrame-level decision functions used by the CLI

Usage:
    from gatedrop.models import score, find_optimal_roster
    from gatedrop.decisions import pick_roster, score_results
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
