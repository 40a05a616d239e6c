"""
Tool: Daybook CLI
Purpose: Schedule and habit operations from the command line

Usage:
    daybook --action add-event --date 2026-10-19 --title "Standup" --start 09:00 --end 09:15
    daybook --action add-event --date 2026-10-19 --title "Site visit" --start 13:00 --end 14:00 \\
        --lat 51.5155 --lon -0.0922 --outdoor
    daybook --action optimize --date 2026-10-19
    daybook --action suggest --date 2026-10-19
    daybook --action create-habit --title "Meditate" --frequency daily --reminder 07:30
    daybook --action complete-habit --habit-id <id>
    daybook --action analytics --habit-id <id>

Output is JSON with a "success" flag; the exit code is 1 on failure.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date, datetime, time
from typing import Any

from daybook.errors import DaybookError
from daybook.geo import Coordinate
from daybook.habits import FrequencyKind, Habit, HabitFrequency
from daybook.schedule import EventPriority, Interval, Location, ScheduledEvent
from daybook.services import Services, build_services

ACTIONS = [
    "add-event",
    "day",
    "optimize",
    "suggest",
    "create-habit",
    "complete-habit",
    "list-habits",
    "analytics",
    "optimal-time",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daybook - context-aware schedule and habit tracker")
    parser.add_argument("--action", required=True, choices=ACTIONS, help="Action to perform")

    # Schedule
    parser.add_argument("--date", type=date.fromisoformat, help="Day (YYYY-MM-DD)")
    parser.add_argument("--title", help="Event or habit title")
    parser.add_argument("--description", default="", help="Event or habit description")
    parser.add_argument("--start", type=time.fromisoformat, help="Event start (HH:MM)")
    parser.add_argument("--end", type=time.fromisoformat, help="Event end (HH:MM)")
    parser.add_argument("--lat", type=float, help="Event latitude")
    parser.add_argument("--lon", type=float, help="Event longitude")
    parser.add_argument("--address", default="", help="Event address")
    parser.add_argument("--outdoor", action="store_true", help="Event is outdoors")
    parser.add_argument(
        "--priority",
        choices=[p.name.lower() for p in EventPriority],
        default="medium",
        help="Event priority",
    )

    # Habits
    parser.add_argument("--habit-id", help="Habit ID")
    parser.add_argument("--frequency", choices=[k.value for k in FrequencyKind], default="daily")
    parser.add_argument("--interval-days", type=int, help="Interval for custom frequency")
    parser.add_argument("--reminder", type=time.fromisoformat, help="Daily reminder time (HH:MM)")
    parser.add_argument("--weather-dependent", action="store_true", help="Record weather on completion")
    parser.add_argument("--when", type=datetime.fromisoformat, help="Completion time (ISO 8601)")

    return parser


def _missing(*names: str) -> dict[str, Any]:
    flags = ", ".join(f"--{n}" for n in names)
    return {"success": False, "error": f"{flags} required"}


async def run(args: argparse.Namespace, services: Services) -> dict[str, Any]:
    await services.load()
    schedule = services.schedule
    habits = services.habits

    if args.action == "add-event":
        if not (args.date and args.title and args.start and args.end):
            return _missing("date", "title", "start", "end")
        tz = schedule.tz
        location = None
        if args.lat is not None and args.lon is not None:
            location = Location(Coordinate(args.lat, args.lon), args.address)
        event = ScheduledEvent(
            title=args.title,
            description=args.description,
            interval=Interval(
                datetime.combine(args.date, args.start, tzinfo=tz),
                datetime.combine(args.date, args.end, tzinfo=tz),
            ),
            location=location,
            is_outdoor=args.outdoor,
            priority=EventPriority[args.priority.upper()],
        )
        stored = await schedule.add_event(event, args.date)
        return {"success": True, "event": stored.to_dict()}

    if args.action == "day":
        if not args.date:
            return _missing("date")
        return {"success": True, "day": schedule.get_day(args.date).to_dict()}

    if args.action == "optimize":
        if not args.date:
            return _missing("date")
        day = await services.optimizer.optimize_schedule(args.date)
        return {"success": True, "day": day.to_dict()}

    if args.action == "suggest":
        if not args.date:
            return _missing("date")
        suggestions = await services.advisor.suggest_rescheduling(args.date)
        return {"success": True, "suggestions": [s.to_dict() for s in suggestions]}

    if args.action == "create-habit":
        if not args.title:
            return _missing("title")
        habit = Habit(
            title=args.title,
            description=args.description,
            frequency=HabitFrequency(FrequencyKind(args.frequency), args.interval_days),
            start_date=args.date or date.today(),
            reminder_time=args.reminder,
            weather_dependent=args.weather_dependent,
        )
        created = await habits.create_habit(habit)
        return {"success": True, "habit": created.to_dict()}

    if args.action == "list-habits":
        return {"success": True, "habits": [h.to_dict() for h in habits.list_habits()]}

    if not args.habit_id:
        return _missing("habit-id")

    if args.action == "complete-habit":
        habit = await habits.complete_habit(args.habit_id, args.when)
        return {"success": True, "habit": habit.to_dict()}

    if args.action == "analytics":
        report = await habits.get_habit_analytics(args.habit_id)
        return {"success": True, "analytics": report.to_dict()}

    times = await habits.suggest_optimal_time(args.habit_id)
    return {"success": True, "times": [t.as_time().strftime("%H:%M") for t in times]}


async def _main(args: argparse.Namespace) -> dict[str, Any]:
    services = build_services()
    try:
        return await run(args, services)
    except DaybookError as e:
        return {"success": False, "error": str(e), "error_type": type(e).__name__}
    finally:
        await services.close()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    result = asyncio.run(_main(args))

    print(json.dumps(result, indent=2, default=str))
    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
