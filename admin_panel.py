#!/usr/bin/env python3
"""
Text version of the site's "Stored Data" admin panel.

Talks to a running clinic API through ``clinic_client`` and prints the
statistics overview, the stored submissions, or clears everything.

Usage:
    python admin_panel.py stats
    python admin_panel.py list
    python admin_panel.py clear --yes
    python admin_panel.py --url http://clinic.example.com stats

The base URL defaults to ``CLINIC_API_URL`` (``http://localhost:3000``).
"""

import argparse
import sys
from typing import Any, Dict, Iterable, List, Optional

from clinic_api.app.core.config import get_settings
from clinic_client import ClinicAPI


def badge(status: Any) -> str:
    return f"[{status or 'unknown'}]"


def format_appointment(apt: Dict[str, Any]) -> str:
    return (
        f"{apt.get('name')} - {apt.get('doctor')} {badge(apt.get('status'))}\n"
        f"    {apt.get('date')} at {apt.get('time')} | {apt.get('email')}"
    )


def format_contact(msg: Dict[str, Any], with_message: bool = True) -> str:
    line = f"{msg.get('name')} {badge(msg.get('status'))}\n    {msg.get('email')}"
    if with_message and msg.get("message"):
        line += f"\n    {msg['message']}"
    return line


def render_section(title: str, items: Iterable[str], empty: str) -> List[str]:
    lines = [title]
    items = list(items)
    lines.extend(f"  {item}" for item in items)
    if not items:
        lines.append(f"  {empty}")
    return lines


def render_stats(stats: Dict[str, Any]) -> str:
    """Render the statistics overview returned by ``/api/admin/stats``."""
    lines = [
        "Stored Data",
        f"Appointments: {stats.get('appointmentTotal', 0)} ({stats.get('pendingAppointments', 0)} pending)",
        f"Messages: {stats.get('contactTotal', 0)} ({stats.get('unreadContacts', 0)} unread)",
        "",
    ]
    lines += render_section(
        "Recent appointments",
        (format_appointment(a) for a in stats.get("recentAppointments") or []),
        "No appointments stored",
    )
    lines.append("")
    lines += render_section(
        "Recent messages",
        (format_contact(c, with_message=False) for c in stats.get("recentContacts") or []),
        "No messages stored",
    )
    lines += ["", f"Last updated: {stats.get('lastUpdated', '-')}"]
    return "\n".join(lines)


def render_lists(appointments: List[Dict[str, Any]], contacts: List[Dict[str, Any]]) -> str:
    lines = render_section(
        f"Appointments ({len(appointments)})",
        (format_appointment(a) for a in appointments),
        "No appointments stored",
    )
    lines.append("")
    lines += render_section(
        f"Messages ({len(contacts)})",
        (format_contact(c) for c in contacts),
        "No messages stored",
    )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None, api: Optional[ClinicAPI] = None) -> int:
    ap = argparse.ArgumentParser(description="Inspect or clear the clinic's stored submissions.")
    ap.add_argument("--url", help="Base URL of the clinic API (default: $CLINIC_API_URL)")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("stats", help="Show totals and the newest submissions")
    sub.add_parser("list", help="Show every stored appointment and message")
    clear = sub.add_parser("clear", help="Delete all stored data on the server")
    clear.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    args = ap.parse_args(argv)

    api = api or ClinicAPI(base_url=args.url or get_settings().api_url)

    if args.command == "stats":
        stats, error = api.get_stats()
        if error:
            print(f"[!] Error loading stats: {error['message']}", file=sys.stderr)
            return 1
        print(render_stats(stats or {}))
        return 0

    if args.command == "list":
        appointments, error = api.list_appointments()
        if not error:
            contacts, error = api.list_contacts()
        if error:
            print(f"[!] Error loading data from server: {error['message']}", file=sys.stderr)
            return 1
        print(render_lists(appointments, contacts))
        return 0

    if not args.yes:
        answer = input("Clear all stored data from server? [y/N] ")
        if answer.strip().lower() not in {"y", "yes"}:
            print("Aborted.")
            return 1
    ok, error = api.clear_data()
    if error or not ok:
        print(f"[!] Error: {error['message'] if error else 'server refused'}", file=sys.stderr)
        return 1
    print("[+] All data cleared from server")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
