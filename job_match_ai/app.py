"""
Job Match AI – command line frontend.
No business logic here; scoring, ranking and proximity search live in the match agent.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from job_match_ai import __version__
from job_match_ai.agents.match_agent import MatchQueryService
from job_match_ai.config import DEFAULT_MAX_DISTANCE_KM, DEFAULT_TOP_K
from job_match_ai.services.profile_store import JsonFileMatchStore
from job_match_ai.utils.errors import InvalidInput, RecordNotFound


def _service(args: argparse.Namespace) -> MatchQueryService:
    data_path = Path(args.data)
    if not data_path.exists():
        raise SystemExit(f"Data file not found: {data_path}")
    return MatchQueryService(store=JsonFileMatchStore(data_path))


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_score(args: argparse.Namespace) -> None:
    result = asyncio.run(_service(args).score_by_ids(args.job_id, args.candidate_id))
    _print_json(result.to_dict())


def cmd_candidates(args: argparse.Namespace) -> None:
    matches = asyncio.run(
        _service(args).match_candidates_for_job_id(args.job_id, args.k, args.max_distance)
    )
    _print_json({"matchingCandidates": [m.to_dict() for m in matches], "total": len(matches)})


def cmd_jobs(args: argparse.Namespace) -> None:
    matches = asyncio.run(
        _service(args).match_jobs_for_candidate_id(args.candidate_id, args.k, args.max_distance)
    )
    _print_json({"matchingJobs": [m.to_dict() for m in matches], "total": len(matches)})


def cmd_nearby(args: argparse.Namespace) -> None:
    jobs = asyncio.run(_service(args).jobs_near(args.lat, args.lon, args.max_distance))
    _print_json({
        "nearbyJobs": [j.to_dict() for j in jobs],
        "total": len(jobs),
        "filters": {
            "coordinates": {"latitude": args.lat, "longitude": args.lon},
            "maxDistanceKm": args.max_distance,
        },
    })


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="job-match", description="Job <-> candidate matching")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--data",
        default="data/store.json",
        help='JSON file with {"jobs": [...], "candidates": [...]} (default: data/store.json)',
    )

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Score one job against one candidate")
    sc.add_argument("--job-id", required=True, help="Job ID")
    sc.add_argument("--candidate-id", required=True, help="Candidate ID")
    sc.set_defaults(func=cmd_score)

    cand = subparsers.add_parser("candidates", help="Top-K candidates for a job")
    cand.add_argument("--job-id", required=True, help="Job ID")
    cand.add_argument("-k", type=int, default=DEFAULT_TOP_K, help=f"Number of matches (default {DEFAULT_TOP_K})")
    cand.add_argument("--max-distance", type=float, help="Drop candidates known to be farther (km)")
    cand.set_defaults(func=cmd_candidates)

    jobs = subparsers.add_parser("jobs", help="Top-K jobs for a candidate")
    jobs.add_argument("--candidate-id", required=True, help="Candidate ID")
    jobs.add_argument("-k", type=int, default=DEFAULT_TOP_K, help=f"Number of matches (default {DEFAULT_TOP_K})")
    jobs.add_argument(
        "--max-distance", type=float, help="Drop jobs known to be farther (km); defaults to the candidate's preference"
    )
    jobs.set_defaults(func=cmd_jobs)

    near = subparsers.add_parser("nearby", help="Jobs within a distance of a point")
    near.add_argument("--lat", type=float, required=True, help="Latitude")
    near.add_argument("--lon", type=float, required=True, help="Longitude")
    near.add_argument(
        "--max-distance", type=float, default=DEFAULT_MAX_DISTANCE_KM,
        help=f"Maximum distance in km (default {DEFAULT_MAX_DISTANCE_KM:g})",
    )
    near.set_defaults(func=cmd_nearby)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args)
    except (InvalidInput, RecordNotFound) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
