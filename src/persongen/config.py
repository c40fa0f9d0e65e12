"""
PersonGen - Pipeline Configuration
==================================

Configuration for the two artifact flows:

- Generation: how many person records to fake, with which seed and
  locale, and which output formats to write.
- Validation: where the downloaded artifacts live, whether the CSV
  variant is scanned, and the tolerated share of invalid records.

Values are read from YAML (``configs/pipeline_config.yaml``). Every
optional key falls back to the defaults declared on the dataclasses
below, so an empty ``generation``/``paths``/``validation`` section is
valid.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from faker import VERSION as FAKER_VERSION


# =============================================================================
# ARTIFACT FILE NAMES
# =============================================================================

PERSON_JSON_FILE = "person-data.json"
PERSON_CSV_FILE = "person-data.csv"
METADATA_FILE = "metadata.json"
REPORT_JSON_FILE = "validation-report.json"
REPORT_TEXT_FILE = "validation-report.txt"

SUPPORTED_FORMATS = ("json", "csv")

REQUIRED_SECTIONS = ["generation", "paths", "validation"]

DEFAULT_CONFIG_PATH = "configs/pipeline_config.yaml"


# =============================================================================
# CONFIG SECTIONS
# =============================================================================

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _build_section(section_cls, raw: Dict, name: str):
    values = raw[name] or {}
    if not isinstance(values, dict):
        raise ValueError(f"'{name}' section must be a mapping, got {values!r}")
    unknown = set(values) - {f.name for f in fields(section_cls)}
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' section: {sorted(unknown)}")
    return section_cls(**values)


@dataclass
class GenerationConfig:
    """Parameters for the record generator"""
    record_count: int = 10
    seed: Optional[int] = None
    locale: str = "en_US"
    formats: List[str] = field(default_factory=lambda: ["json"])
    generator_version: str = FAKER_VERSION

    def __post_init__(self):
        if not _is_int(self.record_count):
            raise ValueError(f"record_count must be an integer, got {self.record_count!r}")
        if self.seed is not None and not _is_int(self.seed):
            raise ValueError(f"seed must be an integer or null, got {self.seed!r}")
        if not isinstance(self.formats, list):
            raise ValueError(f"formats must be a list, got {self.formats!r}")
        if self.record_count < 0:
            raise ValueError(f"record_count must be >= 0, got {self.record_count}")
        unknown = [f for f in self.formats if f not in SUPPORTED_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported output formats: {unknown}")


@dataclass
class PathsConfig:
    """Producer output and consumer input directories"""
    output_dir: str = "output"
    artifacts_dir: str = "downloaded-artifacts"

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def artifacts_path(self) -> Path:
        return Path(self.artifacts_dir)


@dataclass
class ValidationConfig:
    """Parameters for the artifact validator"""
    include_csv: bool = False
    include_metadata: bool = True
    max_invalid_ratio: float = 0.1

    def __post_init__(self):
        if not _is_number(self.max_invalid_ratio):
            raise ValueError(f"max_invalid_ratio must be a number, got {self.max_invalid_ratio!r}")
        if not 0.0 <= self.max_invalid_ratio <= 1.0:
            raise ValueError(
                f"max_invalid_ratio must be within [0, 1], got {self.max_invalid_ratio}"
            )


@dataclass
class PipelineConfig:
    """Complete configuration for both flows"""
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def from_dict(cls, raw: Dict) -> "PipelineConfig":
        """Build a config from a parsed YAML mapping"""
        missing = [k for k in REQUIRED_SECTIONS if k not in raw]
        if missing:
            raise ValueError(f"Missing config keys: {missing}")

        return cls(
            generation=_build_section(GenerationConfig, raw, 'generation'),
            paths=_build_section(PathsConfig, raw, 'paths'),
            validation=_build_section(ValidationConfig, raw, 'validation'),
        )

    def to_dict(self) -> dict:
        return {
            'generation': {
                'record_count': self.generation.record_count,
                'seed': self.generation.seed,
                'locale': self.generation.locale,
                'formats': list(self.generation.formats),
                'generator_version': self.generation.generator_version,
            },
            'paths': {
                'output_dir': self.paths.output_dir,
                'artifacts_dir': self.paths.artifacts_dir,
            },
            'validation': {
                'include_csv': self.validation.include_csv,
                'include_metadata': self.validation.include_metadata,
                'max_invalid_ratio': self.validation.max_invalid_ratio,
            },
        }


def load_config(config_path) -> PipelineConfig:
    """Load and validate configuration"""
    with open(config_path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config {config_path} must be a mapping")

    return PipelineConfig.from_dict(raw)


# Default config instance
DEFAULT_CONFIG = PipelineConfig()
