"""Filter jobs by distance from a reference point. No scoring; used by the match agent."""

import asyncio
from typing import List, Optional, Sequence

from job_match_ai.config import SCORING_CONCURRENCY
from job_match_ai.schemas.coordinates import Coordinates
from job_match_ai.schemas.job_posting import JobPosting
from job_match_ai.schemas.match_result import NearbyJob
from job_match_ai.services.geo_service import GeoResolver, distance_km
from job_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def filter_by_proximity(
    jobs: Sequence[JobPosting],
    reference: Coordinates,
    max_distance_km: float,
    resolver: GeoResolver,
    concurrency: int = SCORING_CONCURRENCY,
) -> List[NearbyJob]:
    """
    Keep jobs within max_distance_km of reference. Does not mutate the input list.
    Jobs without stored coordinates are geocoded from their location text;
    jobs that cannot be geocoded are excluded. Input order is preserved.
    """
    if not jobs:
        return []
    sem = asyncio.Semaphore(max(1, concurrency))

    async def locate(job: JobPosting) -> Optional[Coordinates]:
        async with sem:
            return await resolver.coordinates_for(job)

    resolved = await asyncio.gather(*[locate(j) for j in jobs])
    nearby: List[NearbyJob] = []
    skipped = 0
    for job, coords in zip(jobs, resolved):
        if coords is None:
            skipped += 1
            continue
        d = distance_km(reference, coords)
        if d <= max_distance_km:
            nearby.append(
                NearbyJob(**{**dict(job), "coordinates": coords}, distance_km=d)
            )
    logger.info(
        "Proximity filter: jobs=%s nearby=%s ungeocoded=%s max_km=%s",
        len(jobs), len(nearby), skipped, max_distance_km,
    )
    return nearby
