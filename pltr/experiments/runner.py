from __future__ import annotations

import csv
import json
import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from pltr.algorithm import pltr
from pltr.errors import InfeasibleInstanceError, PltrError
from pltr.models import Instance, Schedule
from pltr.rendering import format_schedule
from pltr.visualization import next_unique_path, plot_schedule

logger = logging.getLogger("pltr.experiments")

SUMMARY_COLUMNS = (
    "label",
    "status",
    "jobs",
    "machines",
    "q",
    "d_max",
    "p_total",
    "elapsed_ms",
    "max_slot_load",
    "error",
)


@dataclass(frozen=True)
class RunConfig:
    """Settings shared by every instance of one batch."""

    enforce_lower_bound: bool = False
    validate: bool = True
    charts: bool = False
    print_schedules: bool = False


@dataclass
class RunResult:
    label: str
    status: str  # 'ok' | 'infeasible' | 'error'
    jobs: int
    machines: int
    q: int
    d_max: int
    p_total: int
    elapsed_ms: float
    slots: Optional[List[List[int]]] = None
    error: Optional[str] = None
    config: dict = field(default_factory=dict)

    def max_slot_load(self) -> Optional[int]:
        if self.slots is None:
            return None
        return max((len(ids) for ids in self.slots), default=0)

    def to_dict(self):
        d = asdict(self)
        d["max_slot_load"] = self.max_slot_load()
        return d


class ExperimentRunner:
    def __init__(self, base_results_dir: str = "results/experiments"):
        """Every batch writes into its own timestamped subdirectory."""
        self.base_dir = Path(base_results_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.timestamp_dir = Path(next_unique_path(self.base_dir / stamp))
        self.timestamp_dir.mkdir(parents=True, exist_ok=True)

    def run(
        self,
        instances: Sequence[tuple[str, Instance]],
        cfg: RunConfig = RunConfig(),
    ) -> List[RunResult]:
        if not cfg.validate:
            logger.warning("Schedule validation is off; results are unchecked")
        results: List[RunResult] = []
        for idx, (label, instance) in enumerate(instances, start=1):
            logger.info(
                "(%d/%d) Running %s: n=%d m=%d d_max=%d",
                idx,
                len(instances),
                label,
                instance.n,
                instance.m,
                instance.d_max,
            )
            result = self._run_single(label, instance, cfg)
            results.append(result)
            self._persist_result(result)
        return results

    def _run_single(self, label: str, instance: Instance, cfg: RunConfig) -> RunResult:
        status = "ok"
        error = None
        schedule: Optional[Schedule] = None
        start = time.perf_counter()
        try:
            schedule = pltr(
                instance,
                enforce_lower_bound=cfg.enforce_lower_bound,
                validate=cfg.validate,
            )
        except InfeasibleInstanceError as e:
            status, error = "infeasible", str(e)
            logger.warning("%s: %s", label, e)
        except PltrError as e:
            status, error = "error", f"{type(e).__name__}: {e}"
            logger.error("%s: internal failure: %s", label, error)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info("%s finished with status=%s in %.1f ms", label, status, elapsed_ms)

        if schedule is not None:
            if cfg.print_schedules:
                print(format_schedule(schedule))
            if cfg.charts:
                chart = next_unique_path(self.timestamp_dir / f"schedule_{label}.png")
                plot_schedule(schedule, instance, chart)
                logger.info("Saved schedule chart to %s", chart)

        return RunResult(
            label=label,
            status=status,
            jobs=instance.n,
            machines=instance.m,
            q=instance.q,
            d_max=instance.d_max,
            p_total=instance.p_total,
            elapsed_ms=elapsed_ms,
            slots=[list(ids) for ids in schedule.slots] if schedule is not None else None,
            error=error,
            config=asdict(cfg),
        )

    def _persist_result(self, result: RunResult) -> None:
        path = self.timestamp_dir / f"result_{result.label}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.debug("Saved %s", path)


def write_summary_csv(timestamp_dir: Path, results: Sequence[RunResult]) -> Path:
    out_path = Path(timestamp_dir) / "summary.csv"
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        for result in results:
            writer.writerow(result.to_dict())
    logger.info("Summary written to %s", out_path)
    return out_path
