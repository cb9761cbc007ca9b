"""
Interactive harness for inspecting a report without the REST or MCP servers.

Usage:
    python harness.py <CSV_PATH> [--config report.config] [--today YYYY-MM-DD]

Builds the report, prints a quick summary, then drops you into a REPL
where you can look at tasks, sections and the timeline.
"""

import json
import sys
from pathlib import Path

# Add src/ to path so imports work
sys.path.insert(0, str(Path(__file__).parent / "src"))

from taskreport.api.handlers import task_to_dict
from taskreport.config.store import ConfigStore
from taskreport.store.report_store import ReportStore
from taskreport.utils.dates import parse_date


def smoke_test(store: ReportStore) -> None:
    """Summary of the freshly built report."""
    report = store.report
    st = store.status()
    print("\n=== Smoke Test ===")
    print(f"  CSV:            {st['csv_path']}")
    print(f"  Config:         {st['config_path']}")
    if report.error:
        print(f"  ERROR:          {report.error.kind.value}: {report.error.message}")
        print(f"  Hint:           {report.error.hint}")
        return

    stats = report.stats
    print(f"  Tasks:          {stats.total}")
    print(f"  Done:           {stats.done} ({stats.completion_percent}%)")
    print(f"  Overdue:        {stats.overdue}")
    print(f"  Custom fields:  {', '.join(report.custom_field_names) or '-'}")
    print(f"  Project range:  {report.project_range.start} .. {report.project_range.end}"
          f" ({report.project_range.days} days)")

    print(f"\n  Sections ({len(report.section_names)}):")
    for name in report.section_names:
        print(f"    {name:20s} {len(report.sections[name])}")

    if report.diagnostics:
        print(f"\n  Diagnostics ({len(report.diagnostics)}):")
        for line in report.diagnostics[:10]:
            print(f"    {line}")
        if len(report.diagnostics) > 10:
            print(f"    ... and {len(report.diagnostics) - 10} more")

    print("\n=== Smoke Test Complete ===\n")


def _print_task_line(task) -> None:
    indent = "  " if task.is_subtask else ""
    flags = ""
    if task.is_done:
        flags += " done"
    if task.is_overdue:
        flags += " OVERDUE"
    print(f"  {indent}[{task.section:14s}] {task.priority or '-':8s} {task.name}{flags}")


def repl(store: ReportStore) -> None:
    """Simple REPL for interactive exploration."""
    print("Interactive mode. Type 'help' for commands, 'quit' to exit.\n")

    commands = {
        "help":     "Show this help",
        "status":   "Show store status",
        "tasks":    "List tasks in report order. Usage: tasks [section name]",
        "task":     "Full detail for a task. Usage: task <name>",
        "stats":    "Show breakdowns by status, priority, assignee and section",
        "timeline": "List tasks chronologically with their bar position",
        "diag":     "Show all data-quality diagnostics",
        "reload":   "Rebuild the report from disk",
        "quit":     "Exit",
    }

    while True:
        try:
            line = input("taskreport> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not line:
            continue

        parts = line.split()
        cmd = parts[0].lower()
        arg = " ".join(parts[1:])
        report = store.report

        if cmd == "quit" or cmd == "exit":
            break

        elif cmd == "help":
            for k, v in commands.items():
                print(f"  {k:12s} {v}")

        elif cmd == "status":
            print(json.dumps(store.status(), indent=2, default=str))

        elif cmd == "tasks":
            tasks = report.sections.get(arg, ()) if arg else report.all_tasks
            print(f"Found {len(tasks)} tasks:")
            for t in tasks:
                _print_task_line(t)

        elif cmd == "task":
            if not arg:
                print("Usage: task <name>")
                continue
            task = report.find_task(arg)
            if task:
                print(json.dumps(task_to_dict(task), indent=2))
                subtasks = report.subtasks_of(task.name)
                if subtasks:
                    print(f"  Subtasks: {', '.join(t.name for t in subtasks)}")
            else:
                print(f"  Task '{arg}' not found")

        elif cmd == "stats":
            stats = report.stats
            for label, counts in (
                ("Status", stats.by_status),
                ("Priority", stats.by_priority),
                ("Assignee", stats.by_assignee),
                ("Section", stats.by_section),
            ):
                print(f"  {label}:")
                for key, count in counts.items():
                    print(f"    {key:20s} {count}")

        elif cmd == "timeline":
            for t in report.timeline:
                if t.timeline is None:
                    print(f"  {'(undated)':24s} {t.name}")
                else:
                    pos = f"{t.timeline.start_percent:6.2f}% +{t.timeline.width_percent:6.2f}%"
                    print(f"  {pos:24s} {t.name}")

        elif cmd == "diag":
            if not report.diagnostics:
                print("  No diagnostics")
            for d in report.diagnostics:
                print(f"  {d}")

        elif cmd == "reload":
            store.reload()
            print(f"  Rebuilt: {store.report.stats.total} tasks")

        else:
            print(f"Unknown command: {cmd}. Type 'help' for available commands.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python harness.py <CSV_PATH> [--config report.config] [--today YYYY-MM-DD]")
        sys.exit(1)

    csv_path = Path(sys.argv[1]).resolve()
    config_path = None
    today = None

    args = sys.argv[2:]
    for i, arg in enumerate(args):
        if arg == "--config" and i + 1 < len(args):
            config_path = Path(args[i + 1])
        elif arg == "--today" and i + 1 < len(args):
            today = parse_date(args[i + 1])
            if today is None:
                print(f"Error: invalid --today date '{args[i + 1]}'")
                sys.exit(1)

    store = ReportStore(
        csv_path,
        ConfigStore(config_path),
        today_fn=(lambda: today) if today else None,
    )
    store.initialize()

    smoke_test(store)

    if "--no-repl" not in sys.argv:
        repl(store)


if __name__ == "__main__":
    main()
