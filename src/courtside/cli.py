"""Command-line interface for Courtside.

``courtside play`` runs an interactive scorekeeping session for a roster
file; ``courtside simulate`` fuzzes the rotation over many rounds.
"""

# Courtside
# Copyright (C) 2025  Courtside developers
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
import random
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from courtside.config import load_roster, load_tournament, save_tournament
from courtside.constants import SAVE_FILE_EXTENSION
from courtside.exceptions import CourtsideException
from courtside.models import Match
from courtside.persistence import JsonLinesMatchLog
from courtside.state import TournamentEvent, TournamentSnapshot
from courtside.testing.simulator import ScorePattern, create_simulator
from courtside.tournament import TournamentNight
from courtside.type_hints import SIDES
from courtside.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Scorekeeping commands with their arguments
COMMANDS = {
    "show": {"usage": "show", "description": "Show the matches on court"},
    "inc": {"usage": "inc <match> <A|B>", "description": "Add a point to a side"},
    "dec": {"usage": "dec <match> <A|B>", "description": "Remove a point from a side"},
    "set": {
        "usage": "set <match> <A|B> <points>",
        "description": "Enter a side's score; the other side gets the rest",
    },
    "done": {"usage": "done <match>", "description": "Complete a single match"},
    "next": {"usage": "next", "description": "Complete the round and draw the next"},
    "reroll": {"usage": "reroll", "description": "Redraw the current round"},
    "history": {"usage": "history", "description": "List completed matches"},
    "save": {"usage": "save <file>", "description": "Save the night to a JSON file"},
    "help": {"usage": "help", "description": "Show this list"},
    "quit": {"usage": "quit", "description": "Leave the session"},
}


def format_match(match: Match) -> str:
    a, b = match.side_a, match.side_b
    label_a = f" ({a.label})" if a.label else ""
    label_b = f" ({b.label})" if b.label else ""
    return (
        f"#{match.id} court {match.court}: {a.display_players}{label_a} "
        f"[{a.score}] vs [{b.score}] {b.display_players}{label_b}"
    )


def format_snapshot(snapshot: TournamentSnapshot) -> str:
    lines = [f"{Colors.BOLD}{snapshot.status_message}{Colors.ENDC}"]
    lines.extend(f"  {format_match(m)}" for m in snapshot.active_matches)
    if snapshot.sitting_out:
        lines.append(f"  Sitting out: {', '.join(snapshot.sitting_out)}")
    return "\n".join(lines)


def format_commands() -> str:
    lines = [f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n"]
    for info in COMMANDS.values():
        lines.append(f"  {Colors.OKGREEN}{info['usage']:28}{Colors.ENDC} {info['description']}")
    return "\n".join(lines) + "\n"


class ScorekeeperSession:
    """Parses scorekeeping commands and applies them to a night.

    Output is returned as text so the session can be driven without a
    terminal. The session redraws from the snapshots the night publishes.
    """

    def __init__(self, night: TournamentNight) -> None:
        self.night = night
        self.snapshot = night.snapshot()
        self.finished = False
        night.subscribe(self._on_change)

    def _on_change(self, event: TournamentEvent, snapshot: TournamentSnapshot) -> None:
        self.snapshot = snapshot
        logger.debug(f"Session received {event.name}")

    def execute(self, line: str) -> str:
        """Run one command line and return what to print."""
        parts = line.strip().split()
        if not parts:
            return ""
        command, args = parts[0].lstrip("/").lower(), parts[1:]

        if command in ("quit", "exit", "q"):
            self.finished = True
            return "Goodbye!"
        if command in ("help", "?"):
            return format_commands()
        if command not in COMMANDS:
            return f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}"

        try:
            return getattr(self, f"_cmd_{command}")(args)
        except CourtsideException as e:
            return f"{Colors.FAIL}{e}{Colors.ENDC}"
        except (IndexError, ValueError):
            return f"{Colors.WARNING}Usage: {COMMANDS[command]['usage']}{Colors.ENDC}"

    @staticmethod
    def _side(value: str) -> str:
        side = value.upper()
        if side not in SIDES:
            raise ValueError(value)
        return side

    def _cmd_show(self, args: List[str]) -> str:
        return format_snapshot(self.snapshot)

    def _cmd_inc(self, args: List[str]) -> str:
        self.night.increment(int(args[0]), self._side(args[1]))
        return format_snapshot(self.snapshot)

    def _cmd_dec(self, args: List[str]) -> str:
        self.night.decrement(int(args[0]), self._side(args[1]))
        return format_snapshot(self.snapshot)

    def _cmd_set(self, args: List[str]) -> str:
        self.night.set_score(int(args[0]), self._side(args[1]), int(args[2]))
        return format_snapshot(self.snapshot)

    def _cmd_done(self, args: List[str]) -> str:
        match = self.night.complete_match(int(args[0]))
        return f"Completed {format_match(match)}\n{format_snapshot(self.snapshot)}"

    def _cmd_next(self, args: List[str]) -> str:
        completed = self.night.complete_round()
        return f"Completed {len(completed)} match(es)\n{format_snapshot(self.snapshot)}"

    def _cmd_reroll(self, args: List[str]) -> str:
        self.night.reroll()
        return format_snapshot(self.snapshot)

    def _cmd_history(self, args: List[str]) -> str:
        if not self.snapshot.history:
            return "No completed matches yet"
        return "\n".join(
            f"  R{m.round_number} {format_match(m)}" for m in self.snapshot.history
        )

    def _cmd_save(self, args: List[str]) -> str:
        path = args[0]
        if not path.endswith(SAVE_FILE_EXTENSION):
            path += SAVE_FILE_EXTENSION
        save_tournament(self.night, path)
        return f"Saved to {path}"


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for the scorekeeping prompt."""
    sides = {side: None for side in SIDES}
    completions = {
        name: (sides if name in ("inc", "dec", "set") else None) for name in COMMANDS
    }
    return NestedCompleter.from_nested_dict(completions)


def run_play_command(args: argparse.Namespace) -> int:
    """Run an interactive scorekeeping session."""
    rng = random.Random(args.seed) if args.seed is not None else None
    recorder = JsonLinesMatchLog(args.log) if args.log else None

    night = None
    try:
        if args.resume:
            night = load_tournament(args.resume, rng=rng, recorder=recorder)
        else:
            night = TournamentNight(load_roster(args.roster), rng=rng, recorder=recorder)
            night.start()
    except CourtsideException as e:
        print(f"{Colors.FAIL}Cannot start: {e}{Colors.ENDC}")
        if night is not None:
            night.close()
        return 1

    session = ScorekeeperSession(night)

    prompt = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=Style.from_dict({"prompt": "#00aa00 bold"}),
    )
    print(format_snapshot(session.snapshot))
    print(f"Type {Colors.BOLD}help{Colors.ENDC} to see all available commands")

    with night:
        while not session.finished:
            try:
                output = session.execute(prompt.prompt("courtside> "))
            except KeyboardInterrupt:
                print(f"\n{Colors.WARNING}Use 'quit' to leave{Colors.ENDC}")
                continue
            except EOFError:
                break
            if output:
                print(output)
    return 0


def run_simulate_command(args: argparse.Namespace) -> int:
    """Run the rotation simulator and print its report."""
    simulator = create_simulator(
        args.players,
        args.courts,
        num_rounds=args.rounds,
        fixed_partner=args.teams,
        seed=args.seed,
        target_points=args.target,
        score_pattern=ScorePattern(args.pattern),
        reroll_rate=args.reroll_rate,
    )
    try:
        report = simulator.run()
    except CourtsideException as e:
        print(f"{Colors.FAIL}Simulation failed: {e}{Colors.ENDC}")
        return 1

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"{Colors.BOLD}Rounds played:{Colors.ENDC} {report.rounds_played}")
        print(f"{Colors.BOLD}Games spread:{Colors.ENDC} {report.games_spread}")
        print(f"{Colors.BOLD}Longest idle streak:{Colors.ENDC} {report.max_idle_streak}")
        if report.never_scheduled:
            print(
                f"{Colors.WARNING}Never scheduled: "
                f"{', '.join(report.never_scheduled)}{Colors.ENDC}"
            )
        for violation in report.violations:
            print(f"{Colors.FAIL}{violation}{Colors.ENDC}")
    return 1 if report.violations else 0


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="courtside",
        description="Court rotation and scorekeeping for tournament nights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Keep score for a roster
  courtside play roster.json --log matches.jsonl

  # Pick up a saved night
  courtside play --resume night.json

  # Fuzz the rotation
  courtside simulate --players 13 --courts 1 --rounds 200 --seed 7
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Interactive scorekeeping")
    play_parser.add_argument("roster", nargs="?", help="Roster file (JSON)")
    play_parser.add_argument("--resume", help="Saved night to continue (JSON)")
    play_parser.add_argument("--log", help="Append completed matches to this file")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.set_defaults(func=run_play_command)

    sim_parser = subparsers.add_parser("simulate", help="Simulate many rounds")
    sim_parser.add_argument("--players", type=int, default=10)
    sim_parser.add_argument("--courts", type=int, default=2)
    sim_parser.add_argument("--rounds", type=int, default=50)
    sim_parser.add_argument("--target", type=int, default=16)
    sim_parser.add_argument("--teams", action="store_true", help="Fixed partners")
    sim_parser.add_argument(
        "--pattern",
        choices=[p.value for p in ScorePattern],
        default=ScorePattern.COMPLEMENTARY.value,
    )
    sim_parser.add_argument("--reroll-rate", type=float, default=0.0)
    sim_parser.add_argument("--seed", type=int)
    sim_parser.add_argument("--json", action="store_true", help="Print report as JSON")
    sim_parser.set_defaults(func=run_simulate_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the courtside CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    if args.command == "play" and not (args.roster or args.resume):
        parser.error("play needs a roster file or --resume")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
