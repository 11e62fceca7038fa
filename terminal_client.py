#!/usr/bin/env python3
"""Terminal client for the clinic front-desk API.

Usage:
    uvicorn clinic_desk.api_server:app --port 8000
    python terminal_client.py [base_url]

Commands are typed at the prompt; /help lists them.
"""
import sys

import requests

from clinic_desk import config
from clinic_desk.http_client import ClinicApiError, ClinicDeskClient


class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


HELP = [
    "/dash                         - Dashboard figures",
    "/doctors [text]               - List doctors (optional search)",
    "/slots <doctor_id>            - Doctor's available slots",
    "/queue                        - Current walk-in queue",
    "/walkin <name> | [phone]      - Add walk-in patient",
    "/next <entry_id> <status>     - Advance walk-in (with-doctor, completed)",
    "/leave <entry_id>             - Remove walk-in from queue",
    "/today                        - Today's appointments",
    "/book <doctor_id> <YYYY-MM-DD> <slot...> | <patient name>",
    "/move <appt_id> <YYYY-MM-DD> <slot...>",
    "/done <appt_id>               - Mark appointment completed",
    "/cancel <appt_id>             - Cancel appointment",
    "/quit                         - Exit",
]


def print_colored(text: str, color: str = Colors.RESET, end: str = "\n"):
    """Print colored text."""
    print(f"{color}{text}{Colors.RESET}", end=end)


def show_doctors(doctors):
    for d in doctors:
        state = "" if d["is_active"] else " (inactive)"
        print(f"  #{d['id']:<3} {d['name']:<22} {d['specialization']:<14} {d['location']}{state}")


def show_queue(current):
    for entry in current["queue"]:
        print(f"  [{entry['queue_number']:>3}] #{entry['id']:<3} {entry['patient_name']:<20} {entry['status']}")
    stats = current["stats"]
    print_colored(
        f"  waiting={stats['waiting']} with-doctor={stats['with-doctor']} completed={stats['completed']}",
        Colors.YELLOW,
    )


def show_appointments(appointments):
    if not appointments:
        print_colored("  (none)", Colors.YELLOW)
    for a in appointments:
        print(
            f"  #{a['id']:<3} {a['date']} {a['time_slot']:<9} {a['patient_name']:<18} "
            f"{a['doctor_name']:<20} {a['status']}"
        )


def run_command(client: ClinicDeskClient, line: str) -> bool:
    """Execute one command line. Returns False when the user wants to quit."""
    cmd, _, rest = line.strip().partition(" ")
    args = rest.split()
    cmd = cmd.lower()

    if cmd == "/quit":
        return False
    if cmd == "/help":
        for item in HELP:
            print_colored(f"  {item}", Colors.YELLOW)
    elif cmd == "/dash":
        for key, value in client.dashboard_stats().items():
            print(f"  {key:<20} {value}")
    elif cmd == "/doctors":
        show_doctors(client.list_doctors(search=rest.strip() or None))
    elif cmd == "/slots":
        print("  " + ", ".join(client.doctor_slots(int(args[0]))))
    elif cmd == "/queue":
        show_queue(client.current_queue())
    elif cmd == "/walkin":
        name, _, phone = rest.partition("|")
        entry = client.enqueue(name.strip(), phone.strip() or None)
        print_colored(f"✅ {entry['patient_name']} is number {entry['queue_number']}", Colors.GREEN)
    elif cmd == "/next":
        entry = client.advance(int(args[0]), args[1])
        print_colored(f"✅ #{entry['id']} is now {entry['status']}", Colors.GREEN)
    elif cmd == "/leave":
        client.remove_from_queue(int(args[0]))
        print_colored("✅ Removed from queue", Colors.GREEN)
    elif cmd == "/today":
        show_appointments(client.todays_appointments())
    elif cmd == "/book":
        head, _, patient = rest.partition("|")
        doctor_id, day, *slot = head.split()
        appt = client.book(patient.strip(), int(doctor_id), day, " ".join(slot))
        print_colored(f"✅ Booked #{appt['id']} with {appt['doctor_name']}", Colors.GREEN)
    elif cmd == "/move":
        appt_id, day, *slot = args
        appt = client.reschedule(int(appt_id), day, " ".join(slot))
        print_colored(f"✅ #{appt['id']} moved to {appt['date']} {appt['time_slot']}", Colors.GREEN)
    elif cmd == "/done":
        client.complete(int(args[0]))
        print_colored("✅ Marked completed", Colors.GREEN)
    elif cmd == "/cancel":
        client.cancel(int(args[0]))
        print_colored("✅ Cancelled", Colors.GREEN)
    else:
        print_colored("Unknown command, try /help", Colors.YELLOW)
    return True


def main():
    """Main interactive loop."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else config.API_BASE_URL
    client = ClinicDeskClient(base_url=base_url)

    print_colored("=" * 60, Colors.BLUE)
    print_colored("🏥 Clinic Front Desk - Terminal Client", Colors.BOLD)
    print_colored("=" * 60, Colors.BLUE)
    print_colored(f"Server: {base_url}   (/help for commands)", Colors.YELLOW)

    while True:
        try:
            print_colored("desk> ", Colors.BLUE, end="")
            line = input()
            if not line.strip():
                continue
            if not run_command(client, line):
                print_colored("👋 Bye!", Colors.YELLOW)
                break
        except ClinicApiError as e:
            print_colored(f"❌ {e.code}: {e.message}", Colors.RED)
        except (ValueError, IndexError):
            print_colored("❌ Bad arguments, see /help", Colors.RED)
        except requests.exceptions.ConnectionError:
            print_colored("❌ Could not connect to the server.", Colors.RED)
            print_colored("  uvicorn clinic_desk.api_server:app --port 8000", Colors.YELLOW)
        except (KeyboardInterrupt, EOFError):
            print()
            print_colored("👋 Bye!", Colors.YELLOW)
            break


if __name__ == "__main__":
    main()
