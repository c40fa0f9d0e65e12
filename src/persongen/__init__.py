"""
PersonGen
=========
Generate synthetic person records as file artifacts, then validate
downloaded artifacts and report on their integrity.

Command-line runs go through the installed entry points
``persongen-generate`` and ``persongen-validate``; the validation run
exits with status 1 when the artifacts fail any check.
"""

from .config import (
    PipelineConfig,
    GenerationConfig,
    PathsConfig,
    ValidationConfig,
    load_config
)

from .models import (
    Address,
    PersonRecord,
    GenerationMetadata,
    ValidationResult,
    ValidationSummary,
    ReportStatus
)

from .artifacts import MissingArtifactsError

from .generator import PersonDataGenerator, GenerationOutput

from .validation import (
    PersonDataValidator,
    IntegrityError,
    ValidationFailedError,
    scan_records,
    verify_integrity,
    verify_artifact_integrity
)

from .report import render_text_report, write_reports

__version__ = "1.0.0"
