#!/usr/bin/env python3
"""
Facility Insights – command-line entrypoint.
Loads the facility collection and prints the dashboard views as text.

Run: python main.py stats
      python main.py regions
      python main.py alerts
      python main.py search cardiac --region "Upper East" --status incomplete
      python main.py options
      python main.py export-plans plans.csv
      python main.py ask "Which regions lack emergency services?"
Requires: a facilities CSV/JSON in ./data (or --data PATH / FACILITIES_FILE).
"""

import argparse
import logging
import sys
from pathlib import Path

from facility_insights.anomalies import facility_status
from facility_insights.assistant import AssistantError, ask, stats_context
from facility_insights.config import LOG_LEVEL
from facility_insights.planning import PlanBook
from facility_insights.regions import coverage_label, critical_regions, regions_by_coverage
from facility_insights.repository import FacilityRepository
from facility_insights.search import filter_facilities, suggestions

COMMANDS = ["stats", "regions", "alerts", "search", "options", "export-plans", "ask"]


def _print_stats(insights: dict) -> None:
    s = insights["stats"]
    print(f"Total facilities:   {s.total_facilities}")
    print(f"Medical deserts:    {s.medical_deserts}")
    print(f"Incomplete records: {s.incomplete_records}")
    print(f"Suspicious claims:  {s.suspicious_claims}")
    print(f"Regions with gaps:  {s.regions_with_gaps}")


def _print_regions(insights: dict) -> None:
    regions = regions_by_coverage(insights["regions"])
    for r in regions:
        print(
            f"  {r.region:<20} {r.coverage_score:>3}% {coverage_label(r.coverage_score):<8} "
            f"facilities={r.total_facilities} cardiac={r.with_cardiac} emergency={r.with_emergency} "
            f"surgical={r.with_surgical} incomplete={r.incomplete_data}"
        )
    urgent = critical_regions(regions)
    if urgent:
        print(f"\n{len(urgent)} regions need urgent attention: {', '.join(r.region for r in urgent)}")


def _print_alerts(insights: dict) -> None:
    alerts = insights["stats"].critical_alerts
    if not alerts:
        print("No alerts.")
        return
    for a in alerts:
        print(f"  [{a.type.upper()}] {a.title}: {a.description}")


def main():
    parser = argparse.ArgumentParser(description="Facility Insights – healthcare facility dashboard data")
    parser.add_argument("command", nargs="?", default="stats", choices=COMMANDS, help="View to print (default: stats)")
    parser.add_argument("args", nargs="*", help="Search text, question, or export path")
    parser.add_argument("--data", metavar="PATH", help="Facility CSV/JSON file (default: first match in data/)")
    parser.add_argument("--region", help="Search: exact region")
    parser.add_argument("--specialty", help="Search: specialty substring (case-sensitive)")
    parser.add_argument("--equipment", help="Search: equipment substring (case-sensitive)")
    parser.add_argument("--procedure", help="Search: procedure substring (case-sensitive)")
    parser.add_argument("--status", choices=["complete", "incomplete"], help="Search: equipment completeness")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    repo = FacilityRepository(path=args.data)
    if not repo.refresh():
        print(f"Error: {repo.error}")
        sys.exit(1)
    insights = repo.insights()
    text = " ".join(args.args)

    if args.command == "stats":
        _print_stats(insights)
    elif args.command == "regions":
        _print_regions(insights)
    elif args.command == "alerts":
        _print_alerts(insights)
    elif args.command == "options":
        for field, values in insights["filter_options"].items():
            print(f"{field}: {', '.join(values) or 'N/A'}")
    elif args.command == "search":
        filters = {
            "query": text,
            "region": args.region,
            "specialty": args.specialty,
            "equipment": args.equipment,
            "procedure": args.procedure,
            "status": args.status,
        }
        results = filter_facilities(repo.facilities, filters)
        print(f"{len(results)} of {len(repo.facilities)} facilities match.")
        for f in results:
            print(f"  - {f.name} ({f.region or 'Unknown'}) [{facility_status(f)}]")
        if not results:
            print("Try: " + " | ".join(suggestions(text) or suggestions()))
    elif args.command == "export-plans":
        out_path = Path(text or "resource-plans.csv")
        out_path.write_text(PlanBook().export_csv(), encoding="utf-8")
        print(f"Exported plans to {out_path}")
    elif args.command == "ask":
        try:
            print(ask(text, context=stats_context(insights["stats"], insights["regions"])))
        except (ValueError, AssistantError) as e:
            print(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
