"""
PersonGen - Report Tests
========================
"""

import json

from persongen.models import ValidationResult, ValidationSummary
from persongen.report import render_text_report, write_reports


def _result(**kwargs) -> ValidationResult:
    defaults = dict(
        timestamp='2024-05-01T09:30:00.000Z',
        total_records=3,
        valid_records=2,
        invalid_records=1,
        errors=['Record id-1: Duplicate ID'],
        summary=ValidationSummary(
            ids={'id-1', 'id-2'},
            emails={'a@x.io', 'b@x.io'},
            countries={'Peru', 'Chad'},
            companies={'Globex', 'Acme'},
        ),
    )
    defaults.update(kwargs)
    return ValidationResult(**defaults)


class TestTextReport:
    """Test the human-readable rendering"""

    def test_sections_in_order(self):
        text = render_text_report(_result())
        positions = [text.index(h) for h in ('SUMMARY', 'UNIQUENESS', 'DIVERSITY', 'ERRORS', 'STATUS')]
        assert positions == sorted(positions)
        assert 'VALIDATION REPORT' in text
        assert 'Generated: 2024-05-01T09:30:00.000Z' in text

    def test_counts_and_rate(self):
        text = render_text_report(_result())
        assert 'Total Records: 3' in text
        assert 'Valid Records: 2' in text
        assert 'Invalid Records: 1' in text
        assert 'Success Rate: 66.67%' in text
        assert 'Unique IDs: 2' in text
        assert 'Unique Emails: 2' in text

    def test_diversity_lists(self):
        text = render_text_report(_result())
        assert 'Countries: Chad, Peru' in text
        assert 'Companies: Acme, Globex' in text

    def test_failed_status_with_errors(self):
        text = render_text_report(_result())
        assert 'Record id-1: Duplicate ID' in text
        assert text.rstrip().endswith('STATUS: ❌ FAILED')

    def test_passed_status(self):
        text = render_text_report(_result(valid_records=3, invalid_records=0, errors=[]))
        assert 'No errors found' in text
        assert 'Success Rate: 100.00%' in text
        assert text.rstrip().endswith('STATUS: ✅ PASSED')

    def test_empty_result(self):
        text = render_text_report(ValidationResult())
        assert 'Success Rate: 0.00%' in text
        assert 'PASSED' in text


class TestWriteReports:
    """Test report files"""

    def test_both_files_written(self, tmp_path):
        paths = write_reports(_result(), tmp_path / "output")

        assert paths['json'].name == 'validation-report.json'
        assert paths['text'].name == 'validation-report.txt'

        report = json.loads(paths['json'].read_text())
        assert report['invalidRecords'] == 1
        assert report['summary']['countries'] == ['Chad', 'Peru']
        assert isinstance(report['summary']['companies'], list)

        assert 'STATUS: ❌ FAILED' in paths['text'].read_text(encoding='utf-8')
