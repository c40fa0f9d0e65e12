"""
PersonGen - Artifact I/O
========================
Reads and writes the files exchanged between the generation run and the
later validation run: the JSON record array, the optional flat CSV, and
the metadata object.

The CSV layout un-nests the address into top-level columns; pandas does
the parsing and writing, this module only maps rows to records.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .config import METADATA_FILE, PERSON_CSV_FILE, PERSON_JSON_FILE
from .models import (
    ADDRESS_COLUMNS, PERSON_CSV_COLUMNS,
    GenerationMetadata, PersonRecord
)

logger = logging.getLogger(__name__)


class MissingArtifactsError(FileNotFoundError):
    """An upstream generation run has not produced the expected artifacts"""


# =============================================================================
# PRECONDITIONS
# =============================================================================

def require_artifacts_dir(artifacts_dir) -> Path:
    """Return the artifacts directory, failing hard when it does not exist"""
    path = Path(artifacts_dir)
    if not path.is_dir():
        logger.error(f"No downloaded artifacts found at {path}")
        raise MissingArtifactsError(
            f"No downloaded artifacts found at {path}. Validation requires the "
            f"artifacts of a prior generation run."
        )
    return path


def ensure_dir(directory) -> Path:
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    return path


# =============================================================================
# JSON
# =============================================================================

def write_json(payload, path) -> Path:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return path


def read_json(path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_records_json(records: Iterable[PersonRecord], output_dir) -> Path:
    path = ensure_dir(output_dir) / PERSON_JSON_FILE
    write_json([r.to_dict() for r in records], path)
    logger.info(f"JSON: {path}")
    return path


def read_records_json(path) -> List[PersonRecord]:
    data = read_json(path)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of person records")
    return [PersonRecord.from_dict(item if isinstance(item, dict) else {}) for item in data]


def write_metadata(metadata: GenerationMetadata, output_dir) -> Path:
    path = ensure_dir(output_dir) / METADATA_FILE
    write_json(metadata.to_dict(), path)
    logger.info(f"Metadata: {path}")
    return path


def read_metadata(path) -> dict:
    """Metadata is passed through as a raw mapping so unknown keys survive"""
    data = read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return data


# =============================================================================
# CSV ADAPTER
# =============================================================================

def flatten_record(record: PersonRecord) -> dict:
    """Un-nest the address into top-level CSV columns"""
    row = record.to_dict()
    address = row.pop('address') or {}
    for col in ADDRESS_COLUMNS:
        row[col] = address.get(col, '')
    return {col: row[col] for col in PERSON_CSV_COLUMNS}


def unflatten_row(row: dict) -> PersonRecord:
    """Rebuild the nested record shape from a flat CSV row"""
    data = {k: v for k, v in row.items() if k not in ADDRESS_COLUMNS}
    address = {col: row[col] for col in ADDRESS_COLUMNS if col in row}
    if any(address.values()):
        data['address'] = address
    return PersonRecord.from_dict(data)


def records_to_frame(records: Iterable[PersonRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [flatten_record(r) for r in records],
        columns=PERSON_CSV_COLUMNS
    )


def write_records_csv(records: Iterable[PersonRecord], output_dir) -> Path:
    path = ensure_dir(output_dir) / PERSON_CSV_FILE
    records_to_frame(records).to_csv(path, index=False)
    logger.info(f"CSV: {path}")
    return path


def read_records_csv(path) -> List[PersonRecord]:
    # Everything as text; empty cells stay empty strings instead of NaN
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return [unflatten_row(row) for row in df.to_dict(orient='records')]


# =============================================================================
# LOOKUP
# =============================================================================

def find_artifact(artifacts_dir, name: str) -> Optional[Path]:
    path = Path(artifacts_dir) / name
    if path.is_file():
        return path
    logger.warning(f"Artifact {name} not found in {artifacts_dir}")
    return None
