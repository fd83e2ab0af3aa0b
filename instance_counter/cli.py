"""CLI entry point for instance-counter."""

import argparse
import json
import sys
from pathlib import Path

from .utils import c, log, print_box, print_table


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instance-counter",
        description="instance-counter: component instance inventory for design document pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  instance-counter scan page-export.json
  instance-counter scan document.json --page "Checkout" --include-hidden
  instance-counter scan page-export.json --format csv --output usage.csv
  instance-counter scan page-export.json --format json --keep-dotted
  instance-counter session document.json < requests.jsonl
""",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # scan: one-shot inventory
    p_scan = sub.add_parser("scan", help="Count component instances on a page export")
    p_scan.add_argument("file", type=str, help="Path to the page or document JSON export")
    p_scan.add_argument("--page", type=str, default=None,
                        help="Page name or id (document exports only; default: first page)")
    p_scan.add_argument("--include-hidden", action="store_true",
                        help="Count hidden instances too")
    p_scan.add_argument("--keep-dotted", action="store_true",
                        help="Keep components whose name starts with '.'")
    p_scan.add_argument("--format", type=str, default="summary",
                        choices=["summary", "json", "csv"],
                        help="Output format (default: summary)")
    p_scan.add_argument("--output", type=str, default=None, help="Write output to this file")

    # session: message loop over stdin/stdout
    p_session = sub.add_parser("session", help="Answer JSON-line requests from stdin")
    p_session.add_argument("file", type=str, help="Path to the page or document JSON export")
    p_session.add_argument("--page", type=str, default=None)

    return parser


def _view_config(args):
    from .models import ViewConfig
    return ViewConfig(include_hidden=args.include_hidden, ignore_dotted=not args.keep_dotted)


def _emit(text: str, output: str | None):
    if output:
        p = Path(output)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        print(c(f"  Written: {p}", "green"))
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def cmd_scan(args):
    """Scan a page export and print or write the inventory."""
    from .page_parser import load_page_file
    from .session import ScanSession

    page = load_page_file(args.file, page=args.page)
    log(f"  Loaded: {args.file}")
    log(f"  Page: {page.name}")

    session = ScanSession()
    session.scan(page)
    config = _view_config(args)

    if args.format == "json":
        _emit(json.dumps(session.export_structured(config), indent=2), args.output)
    elif args.format == "csv":
        _emit(session.export_delimited(config)["csv"], args.output)
    else:
        _print_scan_summary(session.view(config))


def _print_scan_summary(view):
    """Print the summary box and per-component table."""
    lines = [
        "instance-counter scan results",
        "",
        f"Page:        {view.page_name}",
        f"Instances:   {view.total_instances}",
    ]
    if view.include_hidden:
        lines.append(f"Hidden:      {view.total_hidden}")
    lines += [
        f"Components:  {view.unique_components}",
        "",
        f"Hidden {'included' if view.include_hidden else 'excluded'}"
        f" · dotted {'ignored' if view.ignore_dotted else 'kept'}",
    ]
    print_box(lines)
    print()

    if not view.entries:
        print(c("  No component instances found.", "yellow"))
        print()
        return

    headers = ["Count", "Component"]
    if view.include_hidden:
        headers.append("Hidden")
    rows = []
    for e in view.sorted_entries():
        row = [str(e.count), e.name]
        if view.include_hidden:
            row.append(str(e.hidden_count))
        rows.append(row)
    print_table(headers, rows)
    print()


def cmd_session(args):
    """Read one JSON request per line, answer with one JSON response per line."""
    from .messages import error_response, handle_message
    from .page_parser import load_page_file
    from .session import ScanSession

    session = ScanSession()
    log(f"  Session on {args.file} ready")

    def page_source():
        return load_page_file(args.file, page=args.page)

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            response = error_response(f"Invalid JSON: {e}")
        else:
            response = handle_message(session, message, page_source)
        print(json.dumps(response), flush=True)


def main():
    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "scan": cmd_scan,
        "session": cmd_session,
    }

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)
    except (FileNotFoundError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        print(c(f"  Error: {e}", "red"), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
