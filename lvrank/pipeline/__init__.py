"""Ranking pipeline orchestration."""

from lvrank.pipeline.runner import RankingPipeline, build_result, run_ranking

__all__ = [
    "RankingPipeline",
    "build_result",
    "run_ranking",
]
