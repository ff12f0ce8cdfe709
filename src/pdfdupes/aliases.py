from pdfdupes.core.models import SortOrder

KEEP_ALIASES = {
    "newest": SortOrder.NEWEST_FIRST,
    "oldest": SortOrder.OLDEST_FIRST,
}

KEEP_CHOICES = list(KEEP_ALIASES.keys())

KEEP_HELP_TEXT = (
    "Keep one file per duplicate group and move the rest to trash:\n"
    "  newest : keep the most recently modified file\n"
    "  oldest : keep the least recently modified file\n"
    "Always shows a preview before deletion.\n"
    "Example    : %(prog)s -i /sdcard --keep newest"
)

EPILOG_TEXT = """
Examples:
  Find duplicate PDFs on device storage
  %(prog)s -i /sdcard

  List every PDF found (hidden, Android/ and data/ directories are skipped)
  %(prog)s -i /sdcard --list

  Same, with size and modification time
  %(prog)s -i /sdcard --list-info

  Keep the newest copy of each duplicate, trash the rest (with confirmation prompt)
  %(prog)s -i /sdcard --keep newest

  Same without confirmation and with output to a file (for scripts)
  %(prog)s -i /sdcard --keep newest --force > report.txt
"""
