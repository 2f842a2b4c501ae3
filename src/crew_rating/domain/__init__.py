"""Pure crew rating domain: profiles, tables, scorers and the scoring engine."""

from .engine import CategoryScore, ScoreBreakdown, ScoringEngine, score_crew
from .profiles import CrewProfile, PerformanceInputs, TonnageClass
from .variants import CRI_PLUS, YCI_PLUS, ScoringVariant

__all__ = [
    "CRI_PLUS",
    "CategoryScore",
    "CrewProfile",
    "PerformanceInputs",
    "ScoreBreakdown",
    "ScoringEngine",
    "ScoringVariant",
    "TonnageClass",
    "YCI_PLUS",
    "score_crew",
]
