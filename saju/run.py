"""
CLI wrapper for the sexagenary engine.

Usage:
    python3 saju/run.py pillars --birth-date YYYY-MM-DD [--birth-time HH:MM | --unknown-time]
    python3 saju/run.py compat --birth-date YYYY-MM-DD --birth-time HH:MM \
        --other-date YYYY-MM-DD --other-time HH:MM [--include-hour]
    python3 saju/run.py today --birth-date YYYY-MM-DD [--birth-time HH:MM] \
        [--date YYYY-MM-DD] [--latitude LAT --longitude LON]
"""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from saju.astro_calendar import local_today
from saju.compatibility import compatibility, conflict_score, similarity_score
from saju.daily import predict_daily
from saju.elements import distribution_to_dict
from saju.profile import BirthRecord, compute_profile

logger = logging.getLogger("saju.run")


def parse_birth(birth_date: str, birth_time: Optional[str] = None, unknown_time: bool = False,
                is_lunar: bool = False, birth_place: str = "") -> BirthRecord:
    """Build a BirthRecord from "YYYY-MM-DD" and "HH:MM" strings."""
    try:
        d = datetime.strptime(birth_date, "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"birth date must be YYYY-MM-DD, got {birth_date!r}") from None

    if birth_time is None:
        unknown_time = True
        hour, minute = 12, 0
    else:
        try:
            hour, minute = map(int, birth_time.split(":"))
        except ValueError:
            raise ValueError(f"birth time must be HH:MM, got {birth_time!r}") from None

    return BirthRecord(year=d.year, month=d.month, day=d.day, hour=hour, minute=minute,
                       unknown_time=unknown_time, is_lunar=is_lunar, birth_place=birth_place)


def _add_birth_args(parser, prefix="birth", required=True):
    parser.add_argument(f"--{prefix}-date", required=required, dest=f"{prefix}_date")
    parser.add_argument(f"--{prefix}-time", dest=f"{prefix}_time", default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute sexagenary pillars and scores.")
    parser.add_argument("--log-level", dest="log_level",
                        default=os.getenv("SAJU_LOG_LEVEL", "WARNING"),
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("pillars", help="four pillars and element distribution")
    _add_birth_args(p)
    p.add_argument("--unknown-time", action="store_true", dest="unknown_time")
    p.add_argument("--lunar", action="store_true")
    p.add_argument("--birth-place", dest="birth_place", default="")

    c = sub.add_parser("compat", help="compatibility between two birth records")
    _add_birth_args(c)
    _add_birth_args(c, prefix="other")
    c.add_argument("--include-hour", action="store_true", dest="include_hour")

    t = sub.add_parser("today", help="daily prediction")
    _add_birth_args(t)
    t.add_argument("--date", default=None, help="YYYY-MM-DD, defaults to today")
    t.add_argument("--latitude", type=float, default=None)
    t.add_argument("--longitude", type=float, default=None)

    return parser


def run(args) -> dict:
    me = compute_profile("me", parse_birth(
        args.birth_date, args.birth_time,
        unknown_time=getattr(args, "unknown_time", False),
        is_lunar=getattr(args, "lunar", False),
        birth_place=getattr(args, "birth_place", ""),
    ))

    if args.command == "pillars":
        return {
            "pillars": me.pillars.to_dict(),
            "element_distribution": distribution_to_dict(me.distribution),
        }

    if args.command == "compat":
        other = compute_profile("other", parse_birth(args.other_date, args.other_time))
        result = compatibility(me.pillars, other.pillars, include_hour=args.include_hour)
        out = result.to_dict()
        out["similarity"] = round(similarity_score(me.pillars, other.pillars), 1)
        out["conflict"] = round(conflict_score(me.pillars, other.pillars), 1)
        return out

    if args.date is not None:
        try:
            on = datetime.strptime(args.date, "%Y-%m-%d").date()
        except ValueError:
            raise ValueError(f"date must be YYYY-MM-DD, got {args.date!r}") from None
    elif (args.latitude is None) != (args.longitude is None):
        raise ValueError("--latitude and --longitude must be given together")
    elif args.latitude is not None:
        on = local_today(args.latitude, args.longitude)
    else:
        on = None
    return predict_daily(me.pillars, on=on).to_dict()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    logger.debug("running %s", args.command)
    try:
        result = run(args)
    except ValueError as exc:
        parser.error(str(exc))

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
