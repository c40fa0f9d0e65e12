"""
PersonGen - Artifact I/O Tests
==============================
"""

import json

import pytest

from persongen.artifacts import (
    MissingArtifactsError, find_artifact, flatten_record,
    read_metadata, read_records_csv, read_records_json,
    require_artifacts_dir, unflatten_row,
    write_records_csv, write_records_json
)
from persongen.models import PERSON_CSV_COLUMNS, Address


class TestPreconditions:
    """Test artifacts directory checks"""

    def test_missing_directory_is_fatal(self, tmp_path):
        with pytest.raises(MissingArtifactsError, match="No downloaded artifacts"):
            require_artifacts_dir(tmp_path / "absent")

    def test_missing_artifacts_is_file_not_found(self):
        assert issubclass(MissingArtifactsError, FileNotFoundError)

    def test_existing_directory(self, tmp_path):
        assert require_artifacts_dir(tmp_path) == tmp_path

    def test_find_artifact(self, tmp_path):
        (tmp_path / "metadata.json").write_text("{}")
        assert find_artifact(tmp_path, "metadata.json") == tmp_path / "metadata.json"
        assert find_artifact(tmp_path, "person-data.csv") is None


class TestJson:
    """Test JSON record files"""

    def test_write_then_read(self, tmp_path, record_factory):
        records = [record_factory(), record_factory(id='b', email='b@example.com')]
        path = write_records_json(records, tmp_path)

        assert read_records_json(path) == records

    def test_non_array_rejected(self, tmp_path):
        path = tmp_path / "person-data.json"
        path.write_text(json.dumps({'id': 'x'}))
        with pytest.raises(ValueError):
            read_records_json(path)

    def test_non_object_entries_load_empty(self, tmp_path):
        path = tmp_path / "person-data.json"
        path.write_text(json.dumps([42]))
        [record] = read_records_json(path)
        assert record.id == ''

    def test_metadata_passthrough(self, tmp_path):
        path = tmp_path / "metadata.json"
        path.write_text(json.dumps({'recordCount': 3, 'pipeline': 'nightly'}))
        assert read_metadata(path) == {'recordCount': 3, 'pipeline': 'nightly'}


class TestCsvAdapter:
    """Test flat CSV row <-> nested record conversion"""

    def test_flatten_column_order(self, record_factory):
        row = flatten_record(record_factory())

        assert list(row) == PERSON_CSV_COLUMNS
        assert row['city'] == 'London'
        assert row['zipCode'] == '12345'

    def test_unflatten_rebuilds_address(self, record_factory):
        record = record_factory()
        assert unflatten_row(flatten_record(record)) == record

    def test_blank_address_columns_mean_no_address(self, record_factory):
        row = flatten_record(record_factory(address=None))
        assert all(row[c] == '' for c in ('street', 'city', 'state', 'zipCode', 'country'))
        assert unflatten_row(row).address is None

    def test_csv_file(self, tmp_path, record_factory):
        """Test empty cells stay empty strings"""
        records = [record_factory(), record_factory(id='b', email='', phone='')]
        path = write_records_csv(records, tmp_path)

        loaded = read_records_csv(path)
        assert loaded == records
        assert loaded[1].email == ''

    def test_numeric_looking_values_stay_text(self, tmp_path, record_factory):
        records = [record_factory(address=Address(zip_code='01234', country='US'))]
        path = write_records_csv(records, tmp_path)

        assert read_records_csv(path)[0].address.zip_code == '01234'
