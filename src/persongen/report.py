"""
PersonGen - Validation Reports
==============================
Renders a validation result as the machine-readable
``validation-report.json`` and the fixed-format ``validation-report.txt``.
"""

import logging
from pathlib import Path
from typing import Dict

from .artifacts import ensure_dir, write_json
from .config import REPORT_JSON_FILE, REPORT_TEXT_FILE
from .models import ValidationResult

logger = logging.getLogger(__name__)


def render_text_report(result: ValidationResult) -> str:
    summary = result.summary.to_dict()
    errors = '\n'.join(result.errors) if result.errors else 'No errors found'

    return f"""
VALIDATION REPORT
================
Generated: {result.timestamp}

SUMMARY
-------
Total Records: {result.total_records}
Valid Records: {result.valid_records}
Invalid Records: {result.invalid_records}
Success Rate: {result.success_rate:.2f}%

UNIQUENESS
----------
Unique IDs: {summary['uniqueIds']}
Unique Emails: {summary['uniqueEmails']}

DIVERSITY
---------
Countries: {', '.join(summary['countries'])}
Companies: {', '.join(summary['companies'])}

ERRORS
------
{errors}

STATUS: {result.status.value}
"""


def write_reports(result: ValidationResult, output_dir) -> Dict[str, Path]:
    output_dir = ensure_dir(output_dir)

    json_path = write_json(result.to_dict(), output_dir / REPORT_JSON_FILE)
    text_path = output_dir / REPORT_TEXT_FILE
    with open(text_path, 'w', encoding='utf-8') as f:
        f.write(render_text_report(result))

    logger.info(f"Validation report: {json_path}")
    logger.info(f"Readable report: {text_path}")
    return {'json': json_path, 'text': text_path}
