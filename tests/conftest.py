"""
Shared pytest fixtures for PersonGen tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from persongen.config import PathsConfig, PipelineConfig, ValidationConfig, GenerationConfig
from persongen.models import Address, PersonRecord


def make_record(**overrides) -> PersonRecord:
    """A complete, valid record; override any field"""
    fields = dict(
        id="3f2b8c1e-8a4d-4f5e-9c7b-1d2e3f4a5b6c",
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="555-0100",
        address=Address(
            street="12 Analytical Way",
            city="London",
            state="Greater London",
            zip_code="12345",
            country="United Kingdom",
        ),
        company="Engine Works",
        job_title="Mathematician",
        created_at="2024-05-01T09:30:00.123Z",
    )
    fields.update(overrides)
    return PersonRecord(**fields)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def pipeline_config(tmp_path) -> PipelineConfig:
    """Config whose directories live under tmp_path"""
    return PipelineConfig(
        generation=GenerationConfig(record_count=10, seed=42),
        paths=PathsConfig(
            output_dir=str(tmp_path / "output"),
            artifacts_dir=str(tmp_path / "downloaded-artifacts"),
        ),
        validation=ValidationConfig(),
    )
