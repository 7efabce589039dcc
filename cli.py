import argparse
import logging
import os
import shutil
import sys

import structlog

from algorithms import MathTools
from gamification_service import GamificationService
from persistence import MalformedBackupError
from session_draft import CallerIndexError


def format_status(service: GamificationService) -> str:
    st = service.status()
    return (
        f"Total XP: {MathTools.pretty(st.total_xp)}\n"
        f"Level {st.level} \"{st.title}\"\n"
        f"Next level: {MathTools.pretty(st.remaining)} XP ({st.progress:.1f}%)"
    )


def format_today(service: GamificationService) -> str:
    draft = service.today
    calc = service.breakdown()
    lines = [f"Date: {draft.date}"]
    for i, it in enumerate(draft.items):
        mark = "x" if it.done else " "
        lines.append(f"[{mark}] {i} {it.name}: {it.weight} x {it.reps} x {it.sets}")
    for i, ex in enumerate(draft.extras):
        mark = "x" if ex.done else " "
        lines.append(f"[{mark}] extra {i} {ex.name}: {ex.weight} x {ex.reps} x {ex.sets}")
    leg = draft.leg_ext
    mark = "x" if leg.done else " "
    lines.append(f"[{mark}] leg extension: {leg.weight} x {leg.reps} x {leg.sets}")
    lines.append(f"Run: {MathTools.pretty(draft.run_meters)} m")
    lines.append(
        f"Multiplier {calc.mult:.2f} (missing {calc.missing}, added {calc.added}) "
        f"-> {MathTools.pretty(calc.final_xp)} XP"
    )
    return "\n".join(lines)


def export_backup(service: GamificationService, output_dir: str = ".") -> str:
    filename, blob = service.export_backup()
    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, filename)
    with open(out_path, "wb") as f:
        f.write(blob)
    return out_path


def import_backup(service: GamificationService, path: str) -> None:
    with open(path, "rb") as f:
        service.import_backup(f.read())


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def restore_db(backup_path: str, db_path: str) -> None:
    shutil.copy(backup_path, db_path)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workout XP tracker")
    parser.add_argument("--db", default="xp_tracker.db")
    parser.add_argument("--yaml", default="settings.yaml")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("status")
    sub.add_parser("today")

    tog = sub.add_parser("toggle")
    group = tog.add_mutually_exclusive_group(required=True)
    group.add_argument("--item", type=int)
    group.add_argument("--extra", type=int)
    group.add_argument("--leg", action="store_true")

    sub.add_parser("extra")

    run = sub.add_parser("run")
    run.add_argument("meters")

    sub.add_parser("commit")
    sub.add_parser("reset-today")

    hard = sub.add_parser("hard-reset")
    hard.add_argument("--yes", action="store_true")

    ovr = sub.add_parser("override")
    ovr.add_argument("value")

    exp = sub.add_parser("export")
    exp.add_argument("--out", default=".")

    imp = sub.add_parser("import")
    imp.add_argument("--in", dest="src", required=True)

    bkp = sub.add_parser("backup")
    bkp.add_argument("--out", default="xp_tracker_backup.db")

    rst = sub.add_parser("restore")
    rst.add_argument("--in", dest="src", default="xp_tracker_backup.db")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.cmd == "backup":
        backup_db(args.db, args.out)
        return 0
    if args.cmd == "restore":
        restore_db(args.src, args.db)
        return 0

    service = GamificationService.from_paths(args.db, args.yaml)
    try:
        if args.cmd == "status":
            print(format_status(service))
        elif args.cmd == "today":
            print(format_today(service))
        elif args.cmd == "toggle":
            if args.leg:
                service.toggle_leg_ext()
            elif args.extra is not None:
                service.toggle_extra(args.extra)
            else:
                service.toggle_item(args.item)
            print(format_today(service))
        elif args.cmd == "extra":
            service.add_extra()
            print(format_today(service))
        elif args.cmd == "run":
            service.set_run_meters(args.meters)
            print(format_today(service))
        elif args.cmd == "commit":
            entry = service.commit()
            print(f"{entry.date}: +{MathTools.pretty(entry.xp)} XP ({entry.memo})")
            print(format_status(service))
        elif args.cmd == "reset-today":
            service.reset_today()
            print(format_today(service))
        elif args.cmd == "hard-reset":
            service.hard_reset(args.yes)
            print("All progress cleared")
        elif args.cmd == "override":
            service.override_total_xp(args.value)
            print(format_status(service))
        elif args.cmd == "export":
            print(export_backup(service, args.out))
        elif args.cmd == "import":
            import_backup(service, args.src)
            print(format_status(service))
    except MalformedBackupError as e:
        print(f"Backup rejected: {e}", file=sys.stderr)
        return 1
    except (CallerIndexError, ValueError) as e:
        print(str(e), file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
