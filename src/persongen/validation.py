"""
PersonGen - Validation Module
=============================
Validates downloaded person-record artifacts and builds the validation
result that the report writer serializes.

Two levels of checking:

- ``scan_records``: the validation scan. A single in-order pass that
  tallies valid/invalid records, collects every rejection reason per
  record and accumulates uniqueness and diversity statistics. Data
  problems never abort the scan.
- ``verify_integrity``: a stricter batch check (full email pattern,
  address completeness, whole-batch duplicates) used to certify an
  artifact set before it is consumed elsewhere.

``PersonDataValidator.run(strict=True)`` applies both, plus the
acceptance gate, and is what the ``persongen-validate`` entry point runs.
"""

import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Union

from .artifacts import (
    MissingArtifactsError, find_artifact, read_metadata,
    read_records_csv, read_records_json, require_artifacts_dir
)
from .config import (
    DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, METADATA_FILE, PERSON_CSV_FILE, PERSON_JSON_FILE,
    PipelineConfig, load_config
)
from .models import EMAIL_PATTERN, PersonRecord, ValidationResult
from .report import write_reports

logger = logging.getLogger(__name__)

RecordLike = Union[PersonRecord, Mapping]


class ValidationFailedError(RuntimeError):
    """A validation run did not meet the acceptance gate"""

    def __init__(self, result: ValidationResult, max_invalid_ratio: float):
        self.result = result
        super().__init__(
            f"Validation run not acceptable: {result.invalid_records} of "
            f"{result.total_records} records invalid (max ratio {max_invalid_ratio:.0%})"
        )


class IntegrityError(ValueError):
    """An artifact set failed strict integrity verification"""

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(
            f"{len(self.violations)} integrity violation(s): " + "; ".join(self.violations)
        )


def _as_record(item: RecordLike) -> PersonRecord:
    return item if isinstance(item, PersonRecord) else PersonRecord.from_dict(item)


# =============================================================================
# VALIDATION SCAN
# =============================================================================

def record_errors(record: PersonRecord, seen_ids: set, seen_emails: set) -> List[str]:
    """All reasons for rejecting one record, in check order"""
    errors = []

    if not record.id:
        errors.append('Missing ID')
    if not record.first_name:
        errors.append('Missing firstName')
    if not record.last_name:
        errors.append('Missing lastName')
    if not record.email:
        errors.append('Missing email')
    elif '@' not in record.email:
        errors.append('Invalid email format')

    if record.id in seen_ids:
        errors.append('Duplicate ID')
    if record.email in seen_emails:
        errors.append('Duplicate email')

    return errors


def scan_records(
    records: Iterable[RecordLike],
    accumulator: Optional[ValidationResult] = None
) -> ValidationResult:
    """
    Scan records once, in input order.

    Returns a new result that extends ``accumulator`` (or a fresh one);
    the accumulator itself is left untouched. Duplicate detection is local
    to this scan: the first occurrence of an id or email wins and later
    occurrences are rejected.
    """
    result = accumulator.copy() if accumulator is not None else ValidationResult()
    seen_ids = set()
    seen_emails = set()

    for item in records:
        record = _as_record(item)
        result.total_records += 1

        errors = record_errors(record, seen_ids, seen_emails)
        if not errors:
            result.valid_records += 1
            seen_ids.add(record.id)
            seen_emails.add(record.email)

            if record.country:
                result.summary.countries.add(record.country)
            if record.company:
                result.summary.companies.add(record.company)
        else:
            result.invalid_records += 1
            message = f"Record {record.id or 'unknown'}: {', '.join(errors)}"
            result.errors.append(message)
            logger.debug(message)

    result.summary.ids |= seen_ids
    result.summary.emails |= seen_emails
    return result


# =============================================================================
# STRICT INTEGRITY
# =============================================================================

def verify_integrity(records: Iterable[RecordLike]) -> List[str]:
    """
    Strict whole-batch verification.
    Returns list of violations (empty when the batch is sound).
    """
    records = [_as_record(r) for r in records]
    violations = []

    for value, count in Counter(r.id for r in records).items():
        if value and count > 1:
            violations.append(f"Duplicate ID {value!r} ({count} occurrences)")
    for value, count in Counter(r.email for r in records).items():
        if value and count > 1:
            violations.append(f"Duplicate email {value!r} ({count} occurrences)")

    for i, record in enumerate(records):
        label = record.id or f"#{i}"
        missing = [
            name for name, value in (
                ('id', record.id),
                ('firstName', record.first_name),
                ('lastName', record.last_name),
                ('email', record.email),
            ) if not value
        ]
        if record.address is None:
            missing.append('address')
        else:
            if not record.address.city:
                missing.append('address.city')
            if not record.address.country:
                missing.append('address.country')
        if missing:
            violations.append(f"Record {label}: missing {', '.join(missing)}")

        if record.email and not EMAIL_PATTERN.match(record.email):
            violations.append(f"Record {label}: malformed email {record.email!r}")

    return violations


def assert_integrity(records: Iterable[RecordLike]) -> None:
    violations = verify_integrity(records)
    if violations:
        raise IntegrityError(violations)


def verify_artifact_integrity(artifacts_dir) -> List[PersonRecord]:
    """Check person-data.json in an artifacts directory; returns the records"""
    artifacts_dir = require_artifacts_dir(artifacts_dir)
    json_path = artifacts_dir / PERSON_JSON_FILE
    if not json_path.is_file():
        raise MissingArtifactsError(
            f"No {PERSON_JSON_FILE} found in {artifacts_dir}. Integrity verification "
            f"requires the records of a prior generation run."
        )

    records = read_records_json(json_path)
    assert_integrity(records)
    logger.info(f"Data integrity verified: all {len(records):,} records have unique IDs and emails")
    return records


# =============================================================================
# ARTIFACT VALIDATION FLOW
# =============================================================================

class PersonDataValidator:
    """Validates the artifacts of a generation run"""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or DEFAULT_CONFIG

    @classmethod
    def from_yaml(cls, config_path) -> "PersonDataValidator":
        return cls(load_config(config_path))

    def validate_artifacts(self, artifacts_dir=None) -> ValidationResult:
        """
        Scan every available record source in the artifacts directory.

        Raises MissingArtifactsError when the directory itself is absent.
        Absent individual files are skipped with a warning.
        """
        artifacts_dir = require_artifacts_dir(artifacts_dir or self.config.paths.artifacts_path)
        result = ValidationResult()

        json_path = find_artifact(artifacts_dir, PERSON_JSON_FILE)
        if json_path:
            logger.info(f"Reading JSON data from: {json_path}")
            result = scan_records(read_records_json(json_path), result)

        if self.config.validation.include_csv:
            csv_path = find_artifact(artifacts_dir, PERSON_CSV_FILE)
            if csv_path:
                logger.info(f"Reading CSV data from: {csv_path}")
                result = scan_records(read_records_csv(csv_path), result)

        if self.config.validation.include_metadata:
            metadata_path = find_artifact(artifacts_dir, METADATA_FILE)
            if metadata_path:
                logger.info(f"Reading metadata from: {metadata_path}")
                result.summary.metadata.update(read_metadata(metadata_path))

        return result

    def run(self, artifacts_dir=None, output_dir=None, strict: bool = False) -> ValidationResult:
        """
        Validate artifacts and write both reports.

        With ``strict`` the run also fails: ValidationFailedError when the
        acceptance gate is not met, IntegrityError when person-data.json
        does not pass strict integrity verification. Reports are written
        first either way.
        """
        artifacts_dir = artifacts_dir or self.config.paths.artifacts_path
        result = self.validate_artifacts(artifacts_dir)
        paths = write_reports(result, output_dir or self.config.paths.output_path)

        logger.info("Validation completed")
        logger.info(f"Total records: {result.total_records}")
        logger.info(f"Valid records: {result.valid_records}")
        logger.info(f"Invalid records: {result.invalid_records}")
        logger.info(f"Reports saved to: {Path(paths['json']).parent}")

        ratio = self.config.validation.max_invalid_ratio
        if not result.is_acceptable(ratio):
            failure = ValidationFailedError(result, ratio)
            if strict:
                logger.error(str(failure))
                raise failure
            logger.warning(str(failure))

        if strict:
            verify_artifact_integrity(artifacts_dir)
        return result


def main(config_path=DEFAULT_CONFIG_PATH) -> int:
    """Consumer run: exit status 1 unless the artifacts pass every check"""
    logging.basicConfig(level=logging.INFO)

    validator = PersonDataValidator.from_yaml(config_path)
    try:
        result = validator.run(strict=True)
    except (MissingArtifactsError, ValidationFailedError, IntegrityError) as e:
        logger.error(f"Validation failed: {e}")
        return 1

    print(f"\n{result.status.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
