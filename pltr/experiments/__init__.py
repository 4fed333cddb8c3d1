"""Benchmark batches: run PLTR over many instances and persist the results."""

from pltr.experiments.runner import ExperimentRunner, RunConfig, RunResult, write_summary_csv

__all__ = ["ExperimentRunner", "RunConfig", "RunResult", "write_summary_csv"]
