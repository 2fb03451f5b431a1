"""Command line entry point: ``python -m i18n_audit <project_root>``."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import ConfigurationError
from .main_auditor import AuditOptions, HardcodedTextAuditor
from .reporter import ReportGenerator
from .walker import DEFAULT_MAX_DEPTH


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="i18n_audit",
        description="Find hardcoded user-facing text and plan its conversion to translation keys.",
    )
    parser.add_argument("project_root", help="Root of the project to audit")
    parser.add_argument("--roles", default=None, help="Role table JSON (default: bundled table)")
    parser.add_argument("--output", "-o", default=None, help="Write the JSON dataset here instead of stdout")
    parser.add_argument("--ui-dir", action="append", dest="ui_dirs", help="UI source directory (repeatable)")
    parser.add_argument(
        "--backend-dir", action="append", dest="backend_dirs", help="Backend source directory (repeatable)"
    )
    parser.add_argument("--workers", type=int, default=1, help="Parallel extraction workers")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum directory depth")
    parser.add_argument("--no-timestamp", action="store_true", help="Omit generated_at for reproducible output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Skip the console summary")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress at INFO level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = AuditOptions(
        max_depth=args.max_depth,
        workers=max(1, args.workers),
        include_timestamp=not args.no_timestamp,
    )
    if args.ui_dirs:
        options.ui_dirs = tuple(args.ui_dirs)
    if args.backend_dirs:
        options.backend_dirs = tuple(args.backend_dirs)

    try:
        auditor = HardcodedTextAuditor.from_role_file(args.roles, options)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    dataset = auditor.audit(Path(args.project_root))

    if args.output:
        path = ReportGenerator.write_json(dataset, args.output)
        print(f"Report written to {path}", file=sys.stderr)
    else:
        print(ReportGenerator.to_json(dataset))

    if not args.quiet:
        print(ReportGenerator.generate_text_report(dataset), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
