"""
Tests for normalization configuration.
"""

import pytest

from cex_normalization.config import (
    NormalizationConfig,
    get_config,
    set_config,
)
from cex_normalization.exceptions import ConfigurationError


class TestDefaults:

    def test_default_values(self):
        config = NormalizationConfig()

        assert config.status_prefix == "last updated: "
        assert config.envelope_path == ("data", "body", "data")
        assert config.unrecognized_blockchain == "fail"
        assert not config.skip_unrecognized_blockchains
        assert config.log_mismatches is True

    def test_to_dict(self):
        assert NormalizationConfig().to_dict()["envelope_path"] == ["data", "body", "data"]


class TestValidation:

    def test_rejects_unknown_blockchain_policy(self):
        with pytest.raises(ConfigurationError) as exc_info:
            NormalizationConfig(unrecognized_blockchain="ignore")

        assert exc_info.value.config_key == "unrecognized_blockchain"

    @pytest.mark.parametrize("path", [(), ("data", ""), ("data", 3)])
    def test_rejects_bad_envelope_path(self, path):
        with pytest.raises(ConfigurationError):
            NormalizationConfig(envelope_path=path)

    def test_rejects_negative_max_reported(self):
        with pytest.raises(ConfigurationError):
            NormalizationConfig(max_reported_missing=-1)


class TestLoading:

    def test_from_dict(self):
        config = NormalizationConfig.from_dict({
            "envelope_path": "result.items",
            "unrecognized_blockchain": "skip",
            "log_mismatches": False,
        })

        assert config.envelope_path == ("result", "items")
        assert config.skip_unrecognized_blockchains
        assert config.log_mismatches is False
        assert config.status_prefix == "last updated: "

    def test_from_yaml_section(self, tmp_path):
        path = tmp_path / "normalization.yaml"
        path.write_text(
            "normalization:\n"
            "  status_prefix: 'updated: '\n"
            "  envelope_path: [data, body, data]\n"
            "  max_reported_missing: 10\n"
        )

        config = NormalizationConfig.from_yaml(path)

        assert config.status_prefix == "updated: "
        assert config.max_reported_missing == 10

    def test_from_yaml_top_level(self, tmp_path):
        path = tmp_path / "normalization.yaml"
        path.write_text("unrecognized_blockchain: skip\n")

        assert NormalizationConfig.from_yaml(path).skip_unrecognized_blockchains

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            NormalizationConfig.from_yaml(tmp_path / "absent.yaml")

    def test_from_yaml_invalid_value(self, tmp_path):
        path = tmp_path / "normalization.yaml"
        path.write_text("unrecognized_blockchain: maybe\n")

        with pytest.raises(ConfigurationError):
            NormalizationConfig.from_yaml(path)

    @pytest.mark.parametrize("line,key", [
        ("max_reported_missing: lots\n", "max_reported_missing"),
        ("max_reported_missing: true\n", "max_reported_missing"),
        ("log_mismatches: 'false'\n", "log_mismatches"),
        ("log_mismatches: 0\n", "log_mismatches"),
    ])
    def test_from_yaml_wrong_type(self, tmp_path, line, key):
        path = tmp_path / "normalization.yaml"
        path.write_text(line)

        with pytest.raises(ConfigurationError) as exc_info:
            NormalizationConfig.from_yaml(path)

        assert exc_info.value.config_key == key

    def test_from_yaml_unquoted_false(self, tmp_path):
        path = tmp_path / "normalization.yaml"
        path.write_text("log_mismatches: false\nmax_reported_missing: 0\n")

        config = NormalizationConfig.from_yaml(path)

        assert config.log_mismatches is False
        assert config.max_reported_missing == 0


class TestGlobalConfig:

    def test_set_and_get(self):
        previous = get_config()
        try:
            custom = NormalizationConfig(status_prefix="custom ")
            set_config(custom)

            assert get_config() is custom
        finally:
            set_config(previous)
