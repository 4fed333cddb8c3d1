"""Pytest configuration, shared instance factories & custom summary hook.

Also ensures the project root is on sys.path so ``import pltr`` and
``import main`` work without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'import pltr.*' works
_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from pltr.models import Instance, Job  # noqa: E402


def unit_jobs(count: int = 10) -> list[Job]:
    """Job i may only run in slot i."""
    return [Job(id=i, r=i, d=i + 1, p=1) for i in range(count)]


@pytest.fixture
def unit_instance() -> Instance:
    return Instance(jobs=tuple(unit_jobs()), m=1, q=1)


@pytest.fixture
def horizon_instance() -> Instance:
    """Unit jobs plus one job with volume 2 in the window [6, 10)."""
    jobs = unit_jobs() + [Job(id=10, r=6, d=10, p=2)]
    return Instance(jobs=tuple(jobs), m=2, q=1)


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Per-module outcome table plus the seeded instances that were skipped."""
    stats = terminalreporter.stats
    per_module: dict[str, dict[str, int]] = {}
    for outcome in ("passed", "failed", "error", "skipped"):
        for rep in stats.get(outcome, []):
            module = rep.nodeid.split("::", 1)[0].rsplit("/", 1)[-1]
            counts = per_module.setdefault(module, {})
            counts[outcome] = counts.get(outcome, 0) + 1

    terminalreporter.section("PLTR test summary", sep="=")
    for module in sorted(per_module):
        counts = per_module[module]
        terminalreporter.write_line(
            f"{module:<24} ok {counts.get('passed', 0):>3}  "
            f"failed {counts.get('failed', 0) + counts.get('error', 0):>2}  "
            f"skipped {counts.get('skipped', 0):>2}"
        )
    seeded = [rep.nodeid for rep in stats.get("skipped", []) if "[" in rep.nodeid]
    if seeded:
        terminalreporter.write_line(f"Unschedulable seeded instances: {len(seeded)}")
