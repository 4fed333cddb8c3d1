#!/usr/bin/env python3
"""Benchmark driver: run PLTR over a dataset or generated instances.

Usage::

    python main.py --config config.yaml
"""

import argparse
import json
import logging
import os
from typing import Any, Dict, List, Tuple

import yaml

from pltr.experiments import ExperimentRunner, RunConfig, write_summary_csv
from pltr.generator import generate_random_instance, generate_valley_instance
from pltr.models import Instance, JobIdGenerator
from pltr.parser import parse_csv_to_instances

logger = logging.getLogger("pltr")


def load_config(config_file: str = "config.yaml") -> dict:
    """Load configuration from a YAML (or JSON) file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as file:
        text = file.read()
    if config_file.endswith((".yml", ".yaml")):
        return yaml.safe_load(text) or {}
    return json.loads(text)


def generated_instances(gen_cfg: Dict[str, Any]) -> List[Tuple[str, Instance]]:
    kind = gen_cfg.get("kind", "random")
    n = gen_cfg.get("n")
    m = gen_cfg.get("m")
    if n is None or m is None:
        raise ValueError("Generator enabled but 'n' or 'm' not provided in config.generator")
    upto = int(gen_cfg.get("upto", 100))
    interval_avg = int(gen_cfg.get("interval_avg", 5))
    q = int(gen_cfg.get("q", 1))
    seed = int(gen_cfg.get("seed", 0))
    count = int(gen_cfg.get("count", 1))
    ids = JobIdGenerator()
    instances = []
    for i in range(count):
        if kind == "random":
            inst = generate_random_instance(n, upto, interval_avg, q, m, seed=seed + i, ids=ids)
        elif kind == "valley":
            inst = generate_valley_instance(
                n,
                upto,
                interval_avg,
                q,
                m,
                valley_num=int(gen_cfg.get("valley_num", 3)),
                seed=seed + i,
                ids=ids,
            )
        else:
            raise ValueError(f"Unknown generator kind: {kind}")
        instances.append((f"{kind}_n{n}_m{m}_seed{seed + i}", inst))
    return instances


def dataset_instances(ds_cfg: Dict[str, Any]) -> List[Tuple[str, Instance]]:
    path = ds_cfg.get("path")
    if not path:
        raise ValueError("Neither generator.enabled nor dataset.path is set in config")
    instances = parse_csv_to_instances(
        path,
        q=int(ds_cfg.get("q", 1)),
        limit=ds_cfg.get("limit"),
    )
    stem = os.path.splitext(os.path.basename(path))[0]
    return [(f"{stem}_{i}", inst) for i, inst in enumerate(instances)]


def main(config: dict) -> None:
    gen_cfg = config.get("generator") or {}
    if gen_cfg.get("enabled"):
        instances = generated_instances(gen_cfg)
    else:
        instances = dataset_instances(config.get("dataset") or {})
    logger.info("Loaded %d instances", len(instances))

    algo_cfg = config.get("algorithm") or {}
    out_cfg = config.get("output") or {}
    run_cfg = RunConfig(
        enforce_lower_bound=bool(algo_cfg.get("enforce_lower_bound", False)),
        validate=bool(algo_cfg.get("validate", True)),
        charts=bool(out_cfg.get("charts", False)),
        print_schedules=bool(out_cfg.get("print_schedules", False)),
    )
    runner = ExperimentRunner(out_cfg.get("results_dir", "results/experiments"))
    results = runner.run(instances, run_cfg)
    write_summary_csv(runner.timestamp_dir, results)

    total_ms = sum(r.elapsed_ms for r in results)
    failed = [r.label for r in results if r.status != "ok"]
    logger.info("Time taken: %.1f ms for %d instances", total_ms, len(results))
    if failed:
        logger.warning("%d instances without schedule: %s", len(failed), ", ".join(failed))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="PLTR scheduling benchmark")
    parser.add_argument("--config", default="config.yaml", help="Path to YAML/JSON config file")
    args = parser.parse_args()

    cfg = load_config(args.config)
    log_level = cfg.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    main(cfg)
