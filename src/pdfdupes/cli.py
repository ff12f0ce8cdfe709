#!/usr/bin/env python3
"""
pdfdupes CLI: command line interface for PDF listing and duplicate detection.
All operations are safe: deletion moves files to system trash, never permanent erase.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from pathlib import Path
from typing import List, Optional, NoReturn

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from pdfdupes.core.models import DeduplicationParams, DuplicateGroup, FileInfo, SortOrder
from pdfdupes.commands import DeduplicationCommand
from pdfdupes.exceptions import ScanRootError
from pdfdupes.utils.convert_utils import ConvertUtils
from pdfdupes.services.file_service import FileService
from pdfdupes.services.duplicate_service import DuplicateService
from pdfdupes.aliases import KEEP_ALIASES, KEEP_CHOICES, KEEP_HELP_TEXT, EPILOG_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="pdfdupes",
            description="pdfdupes: fast content-based duplicate PDF finder with safe deletion",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            required=True,
            type=str,
            help="Root directory to scan"
        )

        action = parser.add_mutually_exclusive_group()
        action.add_argument(
            "--list",
            action="store_true",
            help="Only list PDF files found under the root"
        )
        action.add_argument(
            "--list-info",
            action="store_true",
            dest="list_info",
            help="List PDF files with size and modification time"
        )
        action.add_argument(
            "--keep",
            choices=KEEP_CHOICES,
            default=None,
            type=str,
            help=KEEP_HELP_TEXT
        )

        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress, debug logging and per-stage statistics"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.keep:
            self.error_exit("--force can only be used with --keep")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.input).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(root_dir=str(Path(args.input).resolve()))
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_list(self, params: DeduplicationParams) -> None:
        try:
            paths = DeduplicationCommand.scan(params, progress_callback=self.progress_callback)
        except ScanRootError as e:
            self.error_exit(str(e))
        if self.verbose:
            sys.stderr.write("\n")
        for path in paths:
            print(path)
        if not self.quiet:
            print(f"\nFound {len(paths)} PDF files", file=sys.stderr)

    def run_list_info(self, params: DeduplicationParams) -> None:
        try:
            infos = DeduplicationCommand.scan_with_info(params, progress_callback=self.progress_callback)
        except ScanRootError as e:
            self.error_exit(str(e))
        if self.verbose:
            sys.stderr.write("\n")
        self.output_infos(infos)

    def output_infos(self, infos: List[FileInfo]) -> None:
        for info in infos:
            size_str = ConvertUtils.bytes_to_human(info.size_bytes)
            modified = ConvertUtils.millis_to_human(info.modified_at_millis)
            print(f"{info.path}\t{size_str}\t{modified}")
        if not self.quiet:
            total = sum(i.size_bytes for i in infos)
            print(f"\nFound {len(infos)} PDF files ({ConvertUtils.bytes_to_human(total)})", file=sys.stderr)

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateGroup]:
        """Execute deduplication workflow."""
        command = DeduplicationCommand()
        if self.verbose:
            print("Finding duplicates...")

        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except ScanRootError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
            print()
            print(stats.print_summary())

        return groups

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Output duplicate groups as plain text."""
        if self.quiet:
            return

        if not groups:
            print("No duplicate groups found.")
            return

        total_files = sum(g.duplicate_count for g in groups)
        print(f"\nFound {len(groups)} duplicate groups ({total_files} files)")

        for idx, group in enumerate(groups, 1):
            print(f"\n📁 Group {idx} | Digest: {group.digest} | Files: {group.duplicate_count}")
            for path in group.paths:
                print(f"   {path}")

    def execute_keep(self, groups: List[DuplicateGroup], keep: SortOrder, force: bool = False) -> None:
        """Keep one file per group, trash the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No duplicate groups found.")
            return

        files_to_delete, entry_groups = DuplicateService.select_for_deletion(groups, keep)

        if not files_to_delete:
            if not self.quiet:
                print("No files to delete (all groups already have only one file).")
            return

        space_saved_str = ConvertUtils.bytes_to_human(DuplicateService.reclaimable_bytes(entry_groups))
        reason = "newest" if keep == SortOrder.NEWEST_FIRST else "oldest"

        # Always show deletion preview before action (safety first)
        print()
        for idx, entries in enumerate(entry_groups, 1):
            size_str = ConvertUtils.bytes_to_human(entries[0].size)
            print(f"📁 Group {idx} | Size: {size_str} | Files: {len(entries)}")
            print("-" * 60)

            preserved = entries[0]
            print(f"   [KEEP] {preserved.path}")
            print(f"          Modified: {ConvertUtils.millis_to_human(preserved.modified_ms)} ({reason})")

            for entry in entries[1:]:
                print(f"   [DEL]  {entry.path}")
                print(f"          Modified: {ConvertUtils.millis_to_human(entry.modified_ms)}")
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(entry_groups)} files preserved, "
              f"{len(files_to_delete)} files deleted)")
        print(f"Total space saved: {space_saved_str}")
        print()

        if force:
            print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        # Continue on individual file errors
        print(f"\nMoving {len(files_to_delete)} files to trash...")
        deleted_count = 0
        failed_files = []

        for i, path in enumerate(files_to_delete, 1):
            if self.verbose:
                print(f"  [{i}/{len(files_to_delete)}] {os.path.basename(path)}")
            try:
                FileService.move_to_trash(path)
                deleted_count += 1
            except RuntimeError as e:
                failed_files.append((path, str(e)))
                self.warning(f"Failed to delete {path}: {e}")

        if failed_files:
            print(f"\n⚠️  Partial success: {deleted_count}/{len(files_to_delete)} files moved to trash.")
            print(f"Failed to delete {len(failed_files)} file(s):")
            for path, error in failed_files[:5]:
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(failed_files) > 5:
                print(f"  ...and {len(failed_files) - 5} more files")
        else:
            print(f"✅ Successfully moved {deleted_count} files to trash.")
            print(f"Total space saved: {space_saved_str}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        logging.basicConfig(
            level=logging.DEBUG if self.verbose else logging.ERROR,
            format=LOG_FORMAT
        )

        self.validate_args(args)
        params = self.create_params(args)

        if args.list:
            self.run_list(params)
            return
        if args.list_info:
            self.run_list_info(params)
            return

        if not self.quiet:
            print(f"Scanning directory: {params.root_dir}")

        groups = self.run_deduplication(params)

        if args.keep:
            self.execute_keep(groups, keep=KEEP_ALIASES[args.keep], force=args.force)
        else:
            self.output_results(groups)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
