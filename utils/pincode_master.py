import os
from typing import Callable, Dict, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from logger import logger
from models.pincode_mapping import Pincode_Mapping

EXPECTED_COLUMNS = ["Pincode", "State", "City"]
BATCH_SIZE = 1000


def read_pincode_master(source) -> pd.DataFrame:
    """
    Read and normalise a pincode master sheet.

    `source` is a path to an Excel / CSV file or an already loaded DataFrame.
    The result has the columns Pincode (int), State and City (lowercase,
    at most 50 characters), sorted by pincode with duplicates dropped.
    """

    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        if not os.path.exists(source):
            raise FileNotFoundError(f"Pincode master file not found: {source}")
        try:
            if str(source).lower().endswith(".csv"):
                df = pd.read_csv(source)
            else:
                df = pd.read_excel(source)
        except Exception as e:
            raise ValueError(f"Error reading pincode master file: {str(e)}")

    # header match is case-insensitive
    df.columns = [str(col).strip() for col in df.columns]
    column_mapping = {}
    for col in df.columns:
        for expected in EXPECTED_COLUMNS:
            if col.lower() == expected.lower():
                column_mapping[col] = expected

    missing_columns = [
        col for col in EXPECTED_COLUMNS if col not in column_mapping.values()
    ]
    if missing_columns:
        raise ValueError(
            f"Missing required columns: {missing_columns}. "
            f"Found columns: {list(df.columns)}"
        )

    df = df.rename(columns=column_mapping)[EXPECTED_COLUMNS].copy()
    df = df.dropna(subset=EXPECTED_COLUMNS)

    try:
        df["Pincode"] = df["Pincode"].astype(int)
    except ValueError as e:
        raise ValueError(
            f"Invalid pincode values found. All pincodes must be numeric: {str(e)}"
        )

    df["State"] = df["State"].astype(str).str.strip()
    df["City"] = df["City"].astype(str).str.strip()
    df = df[
        (df["State"] != "")
        & (df["City"] != "")
        & (df["State"] != "nan")
        & (df["City"] != "nan")
    ].copy()

    df["State"] = df["State"].str.lower().str[:50]
    df["City"] = df["City"].str.lower().str[:50]

    # last row wins for repeated pincodes
    df = df.drop_duplicates(subset=["Pincode"], keep="last")
    return df.sort_values(by="Pincode", ascending=True).reset_index(drop=True)


def upload_pincode_master(
    source,
    session_factory: Callable[[], Session],
    update_existing: bool = True,
    batch_size: Optional[int] = None,
) -> Dict:
    """Load the pincode master into pincode_mapping and return a summary."""

    df = read_pincode_master(source)
    batch_size = batch_size or BATCH_SIZE

    db = session_factory()

    try:
        inserted_count = 0
        updated_count = 0
        skipped_count = 0
        error_count = 0
        errors: List[Dict] = []

        total_rows = len(df)
        logger.info(
            f"Starting pincode master upload. Total rows to process: {total_rows}"
        )

        for i in range(0, total_rows, batch_size):
            batch_df = df.iloc[i : i + batch_size]
            pincodes = [int(p) for p in batch_df["Pincode"]]

            existing = {
                row.pincode: row
                for row in db.query(Pincode_Mapping)
                .filter(Pincode_Mapping.pincode.in_(pincodes))
                .all()
            }

            batch_records = []
            for _, row in batch_df.iterrows():
                pincode = int(row["Pincode"])
                record = existing.get(pincode)

                if record is None:
                    batch_records.append(
                        {"pincode": pincode, "state": row["State"], "city": row["City"]}
                    )
                elif update_existing:
                    record.state = row["State"]
                    record.city = row["City"]
                    record.is_deleted = False
                    updated_count += 1
                else:
                    skipped_count += 1

            if batch_records:
                try:
                    db.bulk_insert_mappings(Pincode_Mapping, batch_records)
                    inserted_count += len(batch_records)
                except Exception as e:
                    error_count += len(batch_records)
                    logger.error(f"Error bulk inserting batch: {str(e)}")
                    errors.extend(
                        {"pincode": record["pincode"], "error": str(e)}
                        for record in batch_records
                    )
                    db.rollback()
                    continue

            db.commit()
            logger.info(
                f"Processed batch {i // batch_size + 1}/{(total_rows - 1) // batch_size + 1}"
            )

        summary = {
            "total_rows_in_file": total_rows,
            "inserted": inserted_count,
            "updated": updated_count,
            "skipped": skipped_count,
            "errors": error_count,
            "error_details": errors[:10],
        }
        logger.info(f"Pincode master upload completed: {summary}")
        return summary

    except Exception:
        db.rollback()
        raise

    finally:
        db.close()
