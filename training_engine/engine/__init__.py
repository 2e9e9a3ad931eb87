"""Engine core algorithms: aggregation, heatmap, trends, records, adherence, recovery."""

from training_engine.engine.adherence import compute_adherence, week_adherence, workout_streaks
from training_engine.engine.aggregator import aggregate, last_trained_by_muscle, muscle_distribution, weekly_volume_totals
from training_engine.engine.dashboard import build_dashboard, snapshot_fingerprint
from training_engine.engine.errors import InvalidInputError
from training_engine.engine.heatmap import HeatmapConfig, build_heatmap
from training_engine.engine.records import best_lifts, detect_prs, estimate_one_rep_max
from training_engine.engine.recovery import RecoveryConfig, analyze_week, recovery_overview, recovery_status, suggest_rest_day
from training_engine.engine.trends import OVERLOAD_BAND_PERCENT, classify_overload, exercise_progression, fit_trend

__all__ = [
    "InvalidInputError",
    "aggregate",
    "weekly_volume_totals",
    "last_trained_by_muscle",
    "muscle_distribution",
    "HeatmapConfig",
    "build_heatmap",
    "OVERLOAD_BAND_PERCENT",
    "fit_trend",
    "classify_overload",
    "exercise_progression",
    "detect_prs",
    "best_lifts",
    "estimate_one_rep_max",
    "compute_adherence",
    "week_adherence",
    "workout_streaks",
    "RecoveryConfig",
    "recovery_status",
    "recovery_overview",
    "analyze_week",
    "suggest_rest_day",
    "build_dashboard",
    "snapshot_fingerprint",
]
