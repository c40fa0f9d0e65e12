"""
PersonGen - Record Generation Engine
====================================
Produces batches of synthetic person records from Faker providers and
writes them, with a metadata summary, to the output directory.

Identifiers come from uuid4, so uniqueness within a batch holds with
overwhelming probability rather than by construction. No other field is
de-duplicated.
"""

import logging
import sys
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
from faker import Faker

from .artifacts import ensure_dir, write_metadata, write_records_csv, write_records_json
from .config import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, PipelineConfig, load_config
from .models import (
    Address, GenerationMetadata, OutputFormat, PersonRecord,
    check_patterns, format_timestamp, utc_now
)

logger = logging.getLogger(__name__)

# createdAt is drawn from the last day, like a "recent" date
RECENT_WINDOW_SECONDS = 24 * 60 * 60


@dataclass
class GenerationOutput:
    records: List[PersonRecord]
    metadata: GenerationMetadata
    paths: Dict[str, Path] = field(default_factory=dict)


class PersonDataGenerator:
    """
    Main engine for generating synthetic person records.

    Design Principles:
    1. Reproducible field values via seed control (Faker + numpy RNG)
    2. Verification of every produced batch
    3. Configurable via YAML
    """

    def __init__(self, config: Optional[PipelineConfig] = None, seed: Optional[int] = None):
        self.config = config or DEFAULT_CONFIG
        self.seed = seed if seed is not None else self.config.generation.seed
        self.rng = np.random.default_rng(self.seed)

        self.fake = Faker(self.config.generation.locale)
        if self.seed is not None:
            self.fake.seed_instance(self.seed)

        # Verification counters
        self.verification_log = {
            'records_generated': 0,
            'pattern_violations': 0,
            'duplicate_ids': 0,
        }

    @classmethod
    def from_yaml(cls, config_path, seed: Optional[int] = None) -> "PersonDataGenerator":
        return cls(load_config(config_path), seed=seed)

    # ============================================================
    # RECORD GENERATION
    # ============================================================

    def _recent_timestamp(self, now: datetime) -> str:
        offset = self.rng.uniform(0, RECENT_WINDOW_SECONDS)
        return format_timestamp(now - timedelta(seconds=float(offset)))

    def generate_person(self, now: Optional[datetime] = None) -> PersonRecord:
        """Generate a single synthetic person with independently faked fields"""
        fake = self.fake
        now = now or datetime.now(timezone.utc)

        return PersonRecord(
            id=str(uuid.uuid4()),
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            email=fake.email(),
            phone=fake.phone_number(),
            address=Address(
                street=fake.street_address(),
                city=fake.city(),
                state=fake.administrative_unit(),
                zip_code=fake.postcode(),
                country=fake.country(),
            ),
            company=fake.company(),
            job_title=fake.job(),
            created_at=self._recent_timestamp(now),
        )

    def generate_batch(self, n: int) -> List[PersonRecord]:
        """Generate exactly n records"""
        if not isinstance(n, int) or isinstance(n, bool) or n < 0:
            raise ValueError(f"Record count must be a non-negative integer, got {n!r}")

        logger.info(f"Generating {n:,} person records...")
        now = datetime.now(timezone.utc)
        records = [self.generate_person(now) for _ in range(n)]
        self.verification_log['records_generated'] += len(records)

        self._verify_batch(records, n)
        return records

    def build_metadata(self, records: List[PersonRecord]) -> GenerationMetadata:
        return GenerationMetadata(
            generated_at=utc_now(),
            record_count=len(records),
            formats=list(self.config.generation.formats),
            generator_version=self.config.generation.generator_version,
        )

    # ============================================================
    # VERIFICATION
    # ============================================================

    def _verify_batch(self, records: List[PersonRecord], expected: int):
        """Log how the batch measures up; never raises"""
        n_unique = len({r.id for r in records})
        duplicates = len(records) - n_unique
        self.verification_log['duplicate_ids'] += duplicates

        violations = 0
        for record in records:
            problems = check_patterns(record)
            if problems:
                violations += 1
                logger.debug(f"Record {record.id}: {', '.join(problems)}")
        self.verification_log['pattern_violations'] += violations

        status = "✓" if len(records) == expected else "⚠"
        logger.info(f"{status} Record count: {len(records):,} (expected {expected:,})")
        status = "✓" if duplicates == 0 else "⚠"
        logger.info(f"{status} Unique IDs: {n_unique:,}")
        status = "✓" if violations == 0 else "⚠"
        logger.info(f"{status} Pattern violations: {violations:,}")

    # ============================================================
    # PIPELINE
    # ============================================================

    def write_artifacts(
        self,
        records: List[PersonRecord],
        metadata: GenerationMetadata,
        output_dir=None
    ) -> Dict[str, Path]:
        """Write the batch in every configured format plus metadata.json"""
        output_dir = ensure_dir(output_dir or self.config.paths.output_path)
        paths = {}

        for fmt in metadata.formats:
            if fmt == OutputFormat.JSON.value:
                paths['json'] = write_records_json(records, output_dir)
            elif fmt == OutputFormat.CSV.value:
                paths['csv'] = write_records_csv(records, output_dir)
        paths['metadata'] = write_metadata(metadata, output_dir)

        return paths

    def run(self, n: Optional[int] = None, output_dir=None) -> GenerationOutput:
        """Generate a batch and persist it"""
        n = self.config.generation.record_count if n is None else n

        records = self.generate_batch(n)
        metadata = self.build_metadata(records)
        paths = self.write_artifacts(records, metadata, output_dir)

        logger.info(f"Generated {len(records):,} person records")
        logger.info(f"Files saved to: {paths['metadata'].parent}")
        return GenerationOutput(records=records, metadata=metadata, paths=paths)


def main(config_path=DEFAULT_CONFIG_PATH) -> int:
    logging.basicConfig(level=logging.INFO)

    generator = PersonDataGenerator.from_yaml(config_path)
    output = generator.run()

    print("\n✅ Generation complete!")
    for kind, path in output.paths.items():
        print(f"  {kind}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
