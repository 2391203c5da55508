"""Unit tests for parameter sources.

Run with:
    pytest packages/wpdeploy-core/tests/unit/test_sources.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest

from wpdeploy_core.errors import ConfigurationError
from wpdeploy_core.models import DeploymentParameters
from wpdeploy_core.sources import (
    load_env_file,
    load_yaml_values,
    merge_sources,
    parse_env_values,
    read_environment,
)

AZD_OUTPUT = """\
AZURE_ENV_NAME="wprod"
AZURE_LOCATION="westeurope"
AZURE_SUBSCRIPTION_ID="00000000-0000-0000-0000-000000000000"
MYSQL_ADMIN_PASSWORD="P@ss=w0rd123!"
SITE_NAME="wpsite"
"""


class TestParseEnvValues:
    """Tests for parse_env_values."""

    @pytest.mark.requirement("parameter-sources")
    def test_azd_output(self) -> None:
        """Quoted azd values are parsed and unquoted."""
        values = parse_env_values(AZD_OUTPUT)

        assert values["AZURE_ENV_NAME"] == "wprod"
        assert values["AZURE_SUBSCRIPTION_ID"] == "00000000-0000-0000-0000-000000000000"
        assert values["SITE_NAME"] == "wpsite"

    def test_value_may_contain_equals(self) -> None:
        """Only the first '=' splits key from value."""
        assert parse_env_values(AZD_OUTPUT)["MYSQL_ADMIN_PASSWORD"] == "P@ss=w0rd123!"

    def test_comments_blank_lines_and_export(self) -> None:
        """Comments and blanks are skipped, export prefixes dropped."""
        text = "# azd values\n\nexport SITE_NAME='blog'\nAZURE_ENV_NAME=dev\n"
        assert parse_env_values(text) == {"SITE_NAME": "blog", "AZURE_ENV_NAME": "dev"}

    def test_last_occurrence_wins(self) -> None:
        """Duplicate keys keep the last value."""
        assert parse_env_values("A=1\nA=2\n") == {"A": "2"}

    def test_line_without_equals(self) -> None:
        """A line with no '=' is reported with its line number."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_env_values("A=1\nnot a pair\n")
        assert exc_info.value.line_number == 2
        assert "line 2" in str(exc_info.value)

    def test_feeds_deployment_parameters(self) -> None:
        """Parsed azd output builds valid parameters."""
        params = DeploymentParameters.from_mapping(parse_env_values(AZD_OUTPUT))
        assert params.environment_name == "wprod"
        assert params.password == "P@ss=w0rd123!"


class TestLoadEnvFile:
    """Tests for load_env_file."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """Env file content is parsed."""
        path = tmp_path / ".env"
        path.write_text(AZD_OUTPUT)
        assert load_env_file(path)["AZURE_ENV_NAME"] == "wprod"

    def test_bad_line_reports_file(self, tmp_path: Path) -> None:
        """Errors name the file and line."""
        path = tmp_path / ".env"
        path.write_text("AZURE_ENV_NAME=wprod\ngarbage\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_env_file(path)
        assert exc_info.value.file_path == str(path)
        assert exc_info.value.line_number == 2

    def test_binary_file(self, tmp_path: Path) -> None:
        """Undecodable files raise ConfigurationError."""
        path = tmp_path / ".env"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(ConfigurationError, match="UTF-8"):
            load_env_file(path)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """A directory path raises ConfigurationError, not OSError."""
        with pytest.raises(ConfigurationError, match="Cannot read env file"):
            load_env_file(tmp_path)


class TestLoadYamlValues:
    """Tests for load_yaml_values."""

    @pytest.mark.requirement("parameter-sources")
    def test_flat_mapping(self, tmp_path: Path) -> None:
        """Scalars are converted to strings."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text("environmentName: dev01\nsiteName: blog\nmysqlAdminUser: admin2\n")

        assert load_yaml_values(path) == {
            "environmentName": "dev01",
            "siteName": "blog",
            "mysqlAdminUser": "admin2",
        }

    def test_numbers_and_nulls(self, tmp_path: Path) -> None:
        """Numeric env names stay usable, nulls become empty."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text("environmentName: 2024\nallowedIpAddress:\n")

        assert load_yaml_values(path) == {"environmentName": "2024", "allowedIpAddress": ""}

    def test_empty_file(self, tmp_path: Path) -> None:
        """An empty document yields no values."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text("")
        assert load_yaml_values(path) == {}

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """A list document is rejected."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text("- wprod\n- wpsite\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_yaml_values(path)

    def test_nested_value(self, tmp_path: Path) -> None:
        """Nested values are rejected."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text("environmentName:\n  name: wprod\n")
        with pytest.raises(ConfigurationError, match="scalar"):
            load_yaml_values(path)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """A directory path raises ConfigurationError, not OSError."""
        with pytest.raises(ConfigurationError, match="Cannot read parameter file"):
            load_yaml_values(tmp_path)

    def test_syntax_error_has_line(self, tmp_path: Path) -> None:
        """YAML syntax errors carry a line number."""
        path = tmp_path / "wpdeploy.yaml"
        path.write_text('environmentName: wprod\nsiteName: "unterminated\n')

        with pytest.raises(ConfigurationError) as exc_info:
            load_yaml_values(path)
        assert exc_info.value.line_number is not None
        assert str(path) in str(exc_info.value)


class TestReadEnvironment:
    """Tests for read_environment."""

    def test_filters_known_keys(self) -> None:
        """Only parameter keys are kept."""
        environ = {"AZURE_ENV_NAME": "wprod", "PATH": "/usr/bin", "SITE_NAME": "blog"}
        assert read_environment(environ) == {"AZURE_ENV_NAME": "wprod", "SITE_NAME": "blog"}


class TestMergeSources:
    """Tests for merge_sources."""

    @pytest.mark.requirement("parameter-sources")
    def test_later_wins(self) -> None:
        """Later sources override earlier ones."""
        merged = merge_sources({"SITE_NAME": "a"}, {"SITE_NAME": "b"})
        assert merged == {"SITE_NAME": "b"}

    def test_empty_does_not_override(self) -> None:
        """An empty value keeps the earlier non-empty one."""
        merged = merge_sources({"SITE_NAME": "blog"}, {"SITE_NAME": ""})
        assert merged == {"SITE_NAME": "blog"}

    def test_empty_kept_when_nothing_earlier(self) -> None:
        """An empty value with no earlier value is kept."""
        assert merge_sources({"ALLOWED_IP_ADDRESS": ""}) == {"ALLOWED_IP_ADDRESS": ""}
