"""Synthetic instance generation for benchmarks and tests."""

import random
from typing import List, Optional

from pltr.models import Instance, Job, JobIdGenerator


def generate_random_jobs(
    n: int,
    upto: int,
    interval_avg: int,
    rng: random.Random,
    ids: Optional[JobIdGenerator] = None,
) -> List[Job]:
    """Draw ``n`` jobs whose windows lie inside ``[0, upto)``.

    Window lengths are uniform in ``[1, max(2, 2 * interval_avg))`` and the
    processing volume is at most half the window (at least 1).
    """
    if ids is None:
        ids = JobIdGenerator()
    jobs: List[Job] = []
    for _ in range(n):
        interval_size = rng.randrange(1, max(2, 2 * interval_avg))
        if upto - interval_size <= 1:
            raise ValueError(f"horizon {upto} too short for a window of {interval_size}")
        r = rng.randrange(0, upto - interval_size)
        d = r + interval_size
        p = rng.randint(1, max(1, interval_size // 2))
        jobs.append(ids.job(r, d, p))
    return jobs


def generate_random_instance(
    n: int,
    upto: int,
    interval_avg: int,
    q: int,
    m: int,
    seed: int = 0,
    ids: Optional[JobIdGenerator] = None,
) -> Instance:
    rng = random.Random(seed)
    jobs = generate_random_jobs(n, upto, interval_avg, rng, ids)
    jobs.sort(key=lambda job: job.d)
    return Instance(jobs=tuple(jobs), m=m, q=q)


def generate_valley_instance(
    n: int,
    upto: int,
    interval_avg: int,
    q: int,
    m: int,
    valley_num: int,
    seed: int = 0,
    ids: Optional[JobIdGenerator] = None,
) -> Instance:
    """Jobs clustered into ``valley_num`` busy blocks separated by quiet time.

    Job ``i`` is drawn inside a block of length ``upto // valley_num`` and
    shifted into block ``i % valley_num``.
    """
    if valley_num < 1:
        raise ValueError("valley_num must be positive")
    rng = random.Random(seed)
    valley_size = upto // valley_num
    raw = generate_random_jobs(n, valley_size, interval_avg, rng, ids)
    jobs = []
    for i, job in enumerate(raw):
        offset = valley_size * (i % valley_num)
        jobs.append(Job(id=job.id, r=job.r + offset, d=job.d + offset, p=job.p))
    jobs.sort(key=lambda job: job.d)
    return Instance(jobs=tuple(jobs), m=m, q=q)


def small_deterministic_instance() -> Instance:
    jobs = [
        Job(id=1, r=1, d=3, p=1),
        Job(id=2, r=1, d=10, p=2),
        Job(id=3, r=6, d=7, p=1),
        Job(id=4, r=7, d=9, p=2),
    ]
    jobs.sort(key=lambda job: job.d)
    return Instance(jobs=tuple(jobs), m=1, q=1)
