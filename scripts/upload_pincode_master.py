"""
Load a pincode master sheet (Pincode, State, City) into pincode_mapping.

Usage:
    python scripts/upload_pincode_master.py <path_to_excel_or_csv> [update_existing]

Example:
    python scripts/upload_pincode_master.py pincode_master.xlsx false
"""

import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database.db import SessionLocal, init_models
from utils.pincode_master import upload_pincode_master


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    file_path = sys.argv[1]
    update_existing = not (len(sys.argv) > 2 and sys.argv[2].lower() == "false")

    try:
        init_models()
        result = upload_pincode_master(
            file_path, SessionLocal, update_existing=update_existing
        )
    except Exception as e:
        print(f"\nERROR: {str(e)}")
        sys.exit(1)

    print("=" * 50)
    print("UPLOAD SUMMARY")
    print("=" * 50)
    print(f"Total rows in file: {result['total_rows_in_file']}")
    print(f"Inserted: {result['inserted']}")
    print(f"Updated: {result['updated']}")
    print(f"Skipped: {result['skipped']}")
    print(f"Errors: {result['errors']}")

    for error in result["error_details"]:
        print(f"  Pincode {error['pincode']}: {error['error']}")


if __name__ == "__main__":
    main()
