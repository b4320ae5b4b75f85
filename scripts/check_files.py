"""Script to check .wen and .txt files on disk."""

import argparse
import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).parent.parent))

from wenshi.core.exceptions import ContentValidationError, FileStoreError, ParseError
from wenshi.services.file_store import FileStore


def check_files(paths: List[str]) -> int:
    """
    Check each file and print one line per file.

    Args:
        paths: Files to check.

    Returns:
        Number of files that failed.
    """
    store = FileStore()
    failures = 0

    for path in paths:
        try:
            store.open_document(path)
        except (FileStoreError, ParseError, ContentValidationError) as e:
            failures += 1
            print(f"FAIL {path}: {e}")
        else:
            print(f"OK   {path}")

    print(f"\nChecked {len(paths)} files, {failures} failed")
    return failures


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Check Wenshi documents")
    parser.add_argument("paths", nargs="+", help="Files to check")
    args = parser.parse_args()
    sys.exit(1 if check_files(args.paths) else 0)
