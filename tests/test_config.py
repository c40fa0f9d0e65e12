"""
PersonGen - Configuration Tests
===============================
"""

from pathlib import Path

import pytest
import yaml

from persongen.config import (
    DEFAULT_CONFIG, GenerationConfig, PipelineConfig, ValidationConfig, load_config
)

CONFIG_PATH = Path(__file__).parent.parent / "configs" / "pipeline_config.yaml"


class TestLoadConfig:
    """Test YAML loading"""

    def test_shipped_config(self):
        config = load_config(CONFIG_PATH)

        assert config.generation.record_count == 10
        assert config.generation.formats == ['json']
        assert config.paths.output_dir == 'output'
        assert config.paths.artifacts_dir == 'downloaded-artifacts'
        assert config.validation.max_invalid_ratio == 0.1

    def test_missing_sections(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({'generation': {}}))

        with pytest.raises(ValueError, match="Missing config keys"):
            load_config(path)

    def test_empty_sections_use_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("generation:\npaths:\nvalidation:\n")

        config = load_config(path)
        assert config.generation.record_count == DEFAULT_CONFIG.generation.record_count
        assert config.validation.include_csv is False

    def test_unknown_key_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({
            'generation': {'record_total': 5}, 'paths': {}, 'validation': {}
        }))
        with pytest.raises(ValueError, match="Unknown keys"):
            load_config(path)

    def test_to_dict_round_trips(self):
        config = PipelineConfig(generation=GenerationConfig(record_count=3, formats=['csv']))
        assert PipelineConfig.from_dict(config.to_dict()) == config


class TestConstraints:
    """Test value constraints"""

    def test_negative_record_count(self):
        with pytest.raises(ValueError):
            GenerationConfig(record_count=-1)

    def test_unsupported_format(self):
        with pytest.raises(ValueError, match="Unsupported output formats"):
            GenerationConfig(formats=['json', 'xml'])

    def test_invalid_ratio_range(self):
        with pytest.raises(ValueError):
            ValidationConfig(max_invalid_ratio=1.5)

    @pytest.mark.parametrize("section, values", [
        ('generation', {'record_count': '10'}),
        ('generation', {'record_count': True}),
        ('generation', {'record_count': 2.5}),
        ('generation', {'seed': 'abc'}),
        ('generation', {'formats': 'json'}),
        ('validation', {'max_invalid_ratio': '0.1'}),
        ('validation', {'max_invalid_ratio': False}),
    ])
    def test_wrong_types_from_yaml(self, tmp_path, section, values):
        """Test mistyped YAML values raise ValueError"""
        raw = {'generation': {}, 'paths': {}, 'validation': {}}
        raw[section] = values
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(raw))

        with pytest.raises(ValueError):
            load_config(path)

    def test_section_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("generation: 5\npaths:\nvalidation:\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)
