"""Coach Pairing entry point."""

# Coach Pairing
# Copyright (C) 2025  Coach Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from coachpairing.constants import CATEGORIES, CATEGORY_BOTH, LOCATION_PREFERENCES
from coachpairing.exceptions import CoachPairingException, StorageException
from coachpairing.export import export_filename, session_to_json, write_session_csv
from coachpairing.history import default_search_range
from coachpairing.participant import Participant
from coachpairing.program import CoachingProgram
from coachpairing.session import PairingResult, SessionHistoryEntry
from coachpairing.storage import DataStorage, sessions_from_list
from coachpairing.utils import maybe_str, plural, set_log_level, setup_logger

logger = setup_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coach-pairing",
        description="Pair coaches and coachees across sessions without repeats.",
    )
    parser.add_argument("--data-file", help="JSON data file (default: per-user data folder)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="add a participant")
    add.add_argument("name")
    add.add_argument("--email")
    add.add_argument("--location")
    add.add_argument("--category", choices=CATEGORIES, default=CATEGORY_BOTH)
    add.add_argument(
        "--exclude", action="append", default=[], metavar="ID",
        help="id of a participant never to pair with (repeatable)",
    )

    sub.add_parser("list", help="list participants")

    remove = sub.add_parser("remove", help="remove a participant")
    remove.add_argument("participant_id")

    pair = sub.add_parser("pair", help="generate pairings for a new session")
    pair.add_argument("--location", choices=LOCATION_PREFERENCES)
    pair.add_argument("--ignore-exclusions", action="store_true")
    pair.add_argument("--name", help="session name")
    pair.add_argument("--save", action="store_true", help="save the session to history")
    pair.add_argument("--seed", type=int, help="seed the tie-break for repeatable output")

    history = sub.add_parser("history", help="list saved sessions")
    history.add_argument("--start", help="first day to include (default: 30 days ago)")
    history.add_argument("--end", help="last day to include (default: today)")
    history.add_argument("--all", action="store_true", help="ignore the date range")

    sub.add_parser("stats", help="history statistics")

    export = sub.add_parser("export", help="export a saved session")
    export.add_argument("--session", help="session id (default: most recent)")
    export.add_argument("--format", choices=("json", "csv"), default="json")
    export.add_argument("--output", help="output file, '-' for stdout")

    import_history = sub.add_parser("import-history", help="merge sessions from a JSON file")
    import_history.add_argument("path")

    settings = sub.add_parser("settings", help="show or change stored settings")
    settings.add_argument("--location", choices=LOCATION_PREFERENCES)
    exclusions = settings.add_mutually_exclusive_group()
    exclusions.add_argument("--respect-exclusions", dest="respect", action="store_true", default=None)
    exclusions.add_argument("--ignore-exclusions", dest="respect", action="store_false", default=None)
    return parser


def print_result(result: PairingResult, name: Optional[str]) -> None:
    print(name or "Pairing Session")
    for index, record in enumerate(result.pairings, start=1):
        if record.partner is None:
            print(f"{index}. Unpaired: {record.coach.name}")
        else:
            coach, coachee = record.coach, record.partner
            print(
                f"{index}. {coach.name} -> {coachee.name}"
                f"  ({coach.location or 'No location'} -> {coachee.location or 'No location'})"
            )
    for warning in result.warnings:
        print(f"warning: {warning}")


def print_session(entry: SessionHistoryEntry) -> None:
    day = entry.created_at.strftime("%Y-%m-%d %H:%M")
    pairs = sum(1 for r in entry.pairings if not r.is_unpaired)
    print(f"{entry.id}  {day}  {entry.name}  ({plural(pairs, 'pair')})")


def _load_sessions(path: str) -> List[SessionHistoryEntry]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("pairings_history", [])
    return sessions_from_list(data)


def run(argv: Optional[List[str]] = None) -> int:
    """Run one command.

    Returns
    -------
    int
        the exit code
    """
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        storage = DataStorage(args.data_file)
        rng = random.Random(args.seed) if getattr(args, "seed", None) is not None else None
        program = CoachingProgram(storage, rng=rng)

        if args.command == "add":
            participant = Participant(
                args.name,
                email=args.email,
                location=args.location,
                category=args.category,
                exclusions=args.exclude,
            )
            if not storage.save_participant(participant):
                raise StorageException(f"Could not write {storage.path}")
            print(participant.id)

        elif args.command == "list":
            participants = storage.get_participants()
            for p in participants:
                names = [
                    storage.get_participant(pid).name
                    for pid in sorted(p.exclusions)
                    if storage.get_participant(pid) is not None
                ]
                print(
                    f"{p.id}  {p.name}  {maybe_str(p.email)}  {maybe_str(p.location)}"
                    f"  [{p.category}]  excludes: {', '.join(names) or 'None'}"
                )
            print(plural(len(participants), "participant"))

        elif args.command == "remove":
            if storage.get_participant(args.participant_id) is None:
                raise StorageException(f"No participant with id {args.participant_id}")
            storage.delete_participant(args.participant_id)

        elif args.command == "pair":
            respect = False if args.ignore_exclusions else None
            result = program.generate_pairings(args.location, respect)
            print_result(result, args.name)
            if args.save and result.pairings:
                entry = program.save_session(result, args.name, args.location)
                print(f"saved session {entry.id}")

        elif args.command == "history":
            if args.all:
                sessions = storage.get_pairing_history()
            else:
                start, end = default_search_range()
                sessions = program.search_history(args.start or start, args.end or end)
            for entry in sessions:
                print_session(entry)
            print(f"Found {plural(len(sessions), 'session')}")

        elif args.command == "stats":
            stats = program.statistics()
            print(f"Sessions: {stats.total_sessions}")
            print(f"Pairs: {stats.total_pairs}")
            for year, count in stats.sessions_per_year.items():
                print(f"  {year}: {plural(count, 'session')}")
            if stats.first_session and stats.last_session:
                print(f"First: {stats.first_session.created_at.date()}")
                print(f"Last: {stats.last_session.created_at.date()}")
            for pair, count in stats.most_frequent_pairs.items():
                print(f"  {pair}: {count}")

        elif args.command == "export":
            history = storage.get_pairing_history()
            entry = storage.get_session(args.session) if args.session else (history[0] if history else None)
            if entry is None:
                raise StorageException("No saved session to export")
            output = args.output or export_filename(entry, args.format)
            if output == "-":
                if args.format == "csv":
                    write_session_csv(entry, sys.stdout)
                else:
                    print(session_to_json(entry))
            else:
                with open(output, "w", encoding="utf-8", newline="") as f:
                    if args.format == "csv":
                        write_session_csv(entry, f)
                    else:
                        f.write(session_to_json(entry))
                print(f"exported to {output}")

        elif args.command == "import-history":
            added = program.import_history(_load_sessions(args.path))
            print(f"imported {plural(added, 'new session')}")

        elif args.command == "settings":
            changes = {}
            if args.location:
                changes["location_preference"] = args.location
            if args.respect is not None:
                changes["respect_exclusions"] = args.respect
            if changes and not storage.update_settings(**changes):
                raise StorageException(f"Could not write {storage.path}")
            for key, value in storage.get_settings().items():
                print(f"{key}: {value}")

    except CoachPairingException as e:
        logger.info("command %s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        logger.exception("command %s failed:", args.command)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


def main() -> None:
    """Entry point."""
    exit_code = run()
    logger.debug("run() exited with code: %s", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

#  LocalWords:  coachee
