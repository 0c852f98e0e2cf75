"""
Manage stored recitation sessions.

Usage:
    python -m scripts.manage_history list pi
    python -m scripts.manage_history export pi --dir exports
    python -m scripts.manage_history import pi exports/pi_sessions.json
    python -m scripts.manage_history clear pi
    python -m scripts.manage_history reset
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from core.digits import ConstantKind, SessionStore, reset_db
from core.digits.formatting import format_accuracy, format_duration, format_started_at


def _confirm(prompt: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    response = input(f"{prompt} (type 'yes' to confirm): ")
    return response.lower() == "yes"


def list_sessions(store: SessionStore, kind: ConstantKind) -> None:
    summaries = store.list_all(kind)
    print(f"{kind.tab_label} ({kind.symbol}): {len(summaries)} sessions")
    for index, s in enumerate(summaries):
        print(
            f"  [{index}] {format_started_at(s.started_at)}  "
            f"recited={s.digits_recited} correct={s.correct} wrong={s.wrong} pauses={s.pauses}  "
            f"accuracy={format_accuracy(s.accuracy)} time={format_duration(s.duration_seconds)}"
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="List, export, import or delete stored recitation sessions"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List sessions, newest first")
    list_parser.add_argument("constant", help="Constant slug: pi, phi or e")

    export_parser = subparsers.add_parser("export", help="Write <slug>_sessions.json")
    export_parser.add_argument("constant", help="Constant slug: pi, phi or e")
    export_parser.add_argument("--dir", default=".", help="Output directory (default: current)")

    import_parser = subparsers.add_parser("import", help="Append sessions from an export file")
    import_parser.add_argument("constant", help="Constant slug: pi, phi or e")
    import_parser.add_argument("path", help="Path to a <slug>_sessions.json file")

    delete_parser = subparsers.add_parser("delete", help="Delete one session by list index")
    delete_parser.add_argument("constant", help="Constant slug: pi, phi or e")
    delete_parser.add_argument("index", type=int, help="Index shown by 'list'")

    clear_parser = subparsers.add_parser("clear", help="Delete all sessions for a constant")
    clear_parser.add_argument("constant", help="Constant slug: pi, phi or e")
    clear_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    reset_parser = subparsers.add_parser("reset", help="DANGEROUS: drop and recreate all tables")
    reset_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    args = parser.parse_args(argv)

    if args.command == "reset":
        if not _confirm("This will DELETE all stored sessions for every constant.", args.yes):
            print("Cancelled. No changes made.")
            return 1
        reset_db()
        print("✓ Database reset complete!")
        return 0

    kind = ConstantKind.from_slug(args.constant)
    store = SessionStore()

    if args.command == "list":
        list_sessions(store, kind)
    elif args.command == "export":
        path = store.export_history(kind, args.dir)
        print(f"✓ Exported to {path}")
    elif args.command == "import":
        imported = store.import_history(kind, args.path)
        print(f"✓ Imported {imported} sessions")
    elif args.command == "delete":
        deleted = store.delete_at(kind, args.index)
        print(f"✓ Deleted session from {format_started_at(deleted.started_at)}")
    elif args.command == "clear":
        if not _confirm(f"This will DELETE all {kind.tab_label} sessions.", args.yes):
            print("Cancelled. No changes made.")
            return 1
        deleted = store.clear_all(kind)
        print(f"✓ Deleted {deleted} sessions")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
