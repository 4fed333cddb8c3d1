"""Reader for the tabular scheduling dataset (one instance per CSV record).

Expected columns: ``M`` (machines), ``N`` (jobs), ``r`` and ``d`` as bracketed
comma lists (``"[0, 3, 5]"``) and ``p`` as a ``;``-separated matrix with one
row of per-job processing times per machine. Machines in the dataset are
unrelated; the identical-machine model takes each job's fastest time.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Optional

from pltr.models import Instance, JobIdGenerator

REQUIRED_COLUMNS = ("M", "N", "r", "d", "p")


def parse_vector_string(s: str) -> list[int]:
    body = s.strip().strip("[]")
    if not body.strip():
        return []
    return [int(tok.strip()) for tok in body.split(",")]


def parse_matrix_string(s: str, n: int) -> list[int]:
    """Column-wise minimum of a ``;``-separated matrix with ``n`` columns."""
    rows = [parse_vector_string(row) for row in s.split(";") if row.strip()]
    if not rows:
        raise ValueError("empty processing time matrix")
    for row in rows:
        if len(row) != n:
            raise ValueError(f"processing time row has {len(row)} entries, expected {n}")
    return [min(row[j] for row in rows) for j in range(n)]


def parse_csv_to_instances(
    file_path: str | Path,
    q: int = 1,
    ids: Optional[JobIdGenerator] = None,
    limit: Optional[int] = None,
) -> list[Instance]:
    """Parse every record of a dataset file into an ``Instance``.

    Args:
        file_path: CSV file with the columns described in the module docstring.
        q: Lower-bound parameter stored on every instance.
        ids: Id source shared across all parsed jobs; a fresh generator
            starting at 0 is used when omitted.
        limit: Stop after this many instances.

    Returns:
        Instances in file order.

    Raises:
        ValueError: On a missing column, malformed list/matrix, inconsistent
            lengths or a job violating ``r < d`` and ``0 < p <= d - r``. The
            message names the offending record (1-based, header excluded).
    """
    if ids is None:
        ids = JobIdGenerator()
    instances: list[Instance] = []
    with open(file_path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{file_path}: missing columns {missing}")
        for row_number, record in enumerate(reader, start=1):
            if limit is not None and len(instances) >= limit:
                break
            try:
                m = int(record["M"])
                n = int(record["N"])
                r = parse_vector_string(record["r"])
                d = parse_vector_string(record["d"])
                p = parse_matrix_string(record["p"], n)
                if not len(r) == len(d) == n:
                    raise ValueError(
                        f"expected {n} release times and deadlines, got {len(r)} and {len(d)}"
                    )
                jobs = [ids.job(rj, dj, pj) for rj, dj, pj in zip(r, d, p)]
                instances.append(Instance(jobs=tuple(jobs), m=m, q=q))
            except ValueError as e:
                raise ValueError(f"{file_path}: record {row_number}: {e}") from e
    return instances
