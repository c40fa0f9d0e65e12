"""
PersonGen - Data Models & Schemas
=================================
Defines the record, metadata and validation-result models shared by the
generation and validation flows, plus the flat CSV schema and the
pattern checks used to verify generated batches.

Python attributes are snake_case; ``to_dict``/``from_dict`` translate to
the camelCase field names used in the JSON artifacts.
"""

import copy
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set


# ============================================================
# PATTERNS
# ============================================================

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
DIGIT_PATTERN = re.compile(r'\d')

TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T09:30:00.123Z"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec='milliseconds') + 'Z'


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def is_canonical_timestamp(value: str) -> bool:
    """True when value parses and re-formats to the identical string"""
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except (TypeError, ValueError):
        return False
    return format_timestamp(parsed) == value


def _text(value: Any) -> str:
    # Falsy values (None, false, 0) count as absent
    return str(value) if value else ''


# ============================================================
# ENUMERATIONS
# ============================================================

class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"


class ReportStatus(Enum):
    PASSED = "✅ PASSED"
    FAILED = "❌ FAILED"


# ============================================================
# RECORD MODELS
# ============================================================

@dataclass(frozen=True)
class Address:
    street: str = ''
    city: str = ''
    state: str = ''
    zip_code: str = ''
    country: str = ''

    def to_dict(self) -> dict:
        return {
            'street': self.street,
            'city': self.city,
            'state': self.state,
            'zipCode': self.zip_code,
            'country': self.country,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "Address":
        return cls(
            street=_text(data.get('street')),
            city=_text(data.get('city')),
            state=_text(data.get('state')),
            zip_code=_text(data.get('zipCode')),
            country=_text(data.get('country')),
        )


@dataclass(frozen=True)
class PersonRecord:
    """
    One synthetic person.

    Records are immutable once built. Deserialized records may be
    incomplete: missing text fields load as empty strings and a missing
    address loads as None, so validation can report them.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    first_name: str = ''
    last_name: str = ''
    email: str = ''
    phone: str = ''
    address: Optional[Address] = None
    company: str = ''
    job_title: str = ''
    created_at: str = ''

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address.to_dict() if self.address else None,
            'company': self.company,
            'jobTitle': self.job_title,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "PersonRecord":
        address = data.get('address')
        return cls(
            id=_text(data.get('id')),
            first_name=_text(data.get('firstName')),
            last_name=_text(data.get('lastName')),
            email=_text(data.get('email')),
            phone=_text(data.get('phone')),
            address=Address.from_dict(address) if isinstance(address, Mapping) else None,
            company=_text(data.get('company')),
            job_title=_text(data.get('jobTitle')),
            created_at=_text(data.get('createdAt')),
        )

    @property
    def country(self) -> str:
        return self.address.country if self.address else ''


@dataclass
class GenerationMetadata:
    """Descriptive summary written once next to a generated batch"""
    generated_at: str
    record_count: int
    formats: List[str] = field(default_factory=lambda: [OutputFormat.JSON.value])
    generator_version: str = ''

    def to_dict(self) -> dict:
        return {
            'generatedAt': self.generated_at,
            'recordCount': self.record_count,
            'format': list(self.formats),
            'fakerVersion': self.generator_version,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "GenerationMetadata":
        return cls(
            generated_at=_text(data.get('generatedAt')),
            record_count=int(data.get('recordCount', 0)),
            formats=list(data.get('format', [])),
            generator_version=_text(data.get('fakerVersion')),
        )


# ============================================================
# VALIDATION RESULT
# ============================================================

SUMMARY_KEYS = ('uniqueIds', 'uniqueEmails', 'countries', 'companies')


@dataclass
class ValidationSummary:
    """
    Uniqueness and diversity statistics of accepted records.

    The id/email sets hold every accepted value so counts stay correct
    when several scans are merged; only their sizes are serialized.
    """
    ids: Set[str] = field(default_factory=set)
    emails: Set[str] = field(default_factory=set)
    countries: Set[str] = field(default_factory=set)
    companies: Set[str] = field(default_factory=set)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def unique_ids(self) -> int:
        return len(self.ids)

    @property
    def unique_emails(self) -> int:
        return len(self.emails)

    def to_dict(self) -> dict:
        computed = {
            'uniqueIds': self.unique_ids,
            'uniqueEmails': self.unique_emails,
            'countries': sorted(self.countries),
            'companies': sorted(self.companies),
        }
        # Metadata keys ride along; computed statistics win on collision
        merged = {k: v for k, v in self.metadata.items() if k not in SUMMARY_KEYS}
        merged.update(computed)
        return merged


@dataclass
class ValidationResult:
    timestamp: str = field(default_factory=utc_now)
    total_records: int = 0
    valid_records: int = 0
    invalid_records: int = 0
    errors: List[str] = field(default_factory=list)
    summary: ValidationSummary = field(default_factory=ValidationSummary)

    def copy(self) -> "ValidationResult":
        return copy.deepcopy(self)

    @property
    def success_rate(self) -> float:
        """Percentage of valid records, 0.0 for an empty scan"""
        if self.total_records == 0:
            return 0.0
        return self.valid_records / self.total_records * 100

    @property
    def status(self) -> ReportStatus:
        return ReportStatus.PASSED if self.invalid_records == 0 else ReportStatus.FAILED

    def is_acceptable(self, max_invalid_ratio: float = 0.1) -> bool:
        """Acceptance gate for a validation run"""
        return (
            self.total_records > 0
            and self.valid_records > 0
            and self.invalid_records <= self.total_records * max_invalid_ratio
        )

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp,
            'totalRecords': self.total_records,
            'validRecords': self.valid_records,
            'invalidRecords': self.invalid_records,
            'errors': list(self.errors),
            'summary': self.summary.to_dict(),
        }


# ============================================================
# SCHEMA DEFINITIONS - Flat CSV layout
# ============================================================

PERSON_CSV_COLUMNS = [
    'id', 'firstName', 'lastName', 'email', 'phone',
    'street', 'city', 'state', 'zipCode', 'country',
    'company', 'jobTitle', 'createdAt'
]

ADDRESS_COLUMNS = ['street', 'city', 'state', 'zipCode', 'country']


def check_patterns(record: PersonRecord) -> List[str]:
    """
    Verify that a record looks like realistic generated data.
    Returns list of pattern violations (empty when the record conforms).
    """
    problems = []

    if not UUID_PATTERN.match(record.id):
        problems.append(f"id is not a UUID: {record.id!r}")
    if not EMAIL_PATTERN.match(record.email):
        problems.append(f"email is malformed: {record.email!r}")
    if not DIGIT_PATTERN.search(record.phone):
        problems.append(f"phone has no digits: {record.phone!r}")

    zip_code = record.address.zip_code if record.address else ''
    if not DIGIT_PATTERN.search(zip_code):
        problems.append(f"zipCode has no digits: {zip_code!r}")

    if not is_canonical_timestamp(record.created_at):
        problems.append(f"createdAt is not an ISO-8601 UTC timestamp: {record.created_at!r}")

    return problems
