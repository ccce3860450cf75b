"""
Tests for the address changes command-line entry point.
"""

import json
from unittest.mock import patch

import pytest

from modules.address_changes.main import build_parser, main


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the root logger untouched by the entry point."""
    with patch("modules.address_changes.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def inputs(write_addresses, write_customers, address_row, customer_row):
    write_addresses("20241001", [address_row(1, 100)])
    write_addresses("20241002", [address_row(1, 100, line1="2 Main St")])
    write_customers("20241001", [customer_row(100, "Jane", "Doe")])


class TestBuildParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.effective_date is None
        assert args.environment == "development"
        assert args.config_dir == "config"
        assert args.dry_run is False

    def test_effective_date_parsed(self):
        args = build_parser().parse_args(["--effective-date", "20241002"])

        assert args.effective_date.isoformat() == "2024-10-02"

    @pytest.mark.parametrize("value", ["2024-10-02", "20241342", "yesterday"])
    def test_invalid_effective_date_exits_2(self, value, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--effective-date", value])

        assert exc_info.value.code == 2
        assert "--effective-date" in capsys.readouterr().err


class TestMain:
    """Test end-to-end runs through main()."""

    def test_flags_only_run(self, tmp_path, input_dir, output_dir, inputs):
        exit_code = main([
            "--config-dir", str(tmp_path / "no-config"),
            "--input-dir", str(input_dir),
            "--output-dir", str(output_dir),
            "--effective-date", "20241002",
        ])

        assert exit_code == 0
        content = (output_dir / "address_changes_20241002.csv").read_text(encoding="utf-8")
        assert 'UPDATED,1,100,"Jane Doe","2 Main St"' in content

    def test_range_run(self, tmp_path, input_dir, output_dir, inputs):
        exit_code = main([
            "--config-dir", str(tmp_path / "no-config"),
            "--input-dir", str(input_dir),
            "--output-dir", str(output_dir),
        ])

        assert exit_code == 0
        assert (output_dir / "address_changes_20241002.csv").exists()

    def test_dry_run(self, tmp_path, input_dir, output_dir, inputs):
        exit_code = main([
            "--config-dir", str(tmp_path / "no-config"),
            "--input-dir", str(input_dir),
            "--output-dir", str(output_dir),
            "--effective-date", "20241002",
            "--dry-run",
        ])

        assert exit_code == 0
        assert list(output_dir.iterdir()) == []

    def test_configuration_file_run(self, tmp_path, input_dir, output_dir, inputs, no_logging_setup):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "environment_config.json").write_text(json.dumps({
            "environments": {
                "production": {
                    "input_dir": str(input_dir),
                    "output_dir": str(output_dir),
                    "logging": {"level": "WARNING", "log_dir": None},
                    "processing": {}
                }
            }
        }))

        exit_code = main(["--config-dir", str(config_dir), "--environment", "production",
                          "--effective-date", "20241002"])

        assert exit_code == 0
        assert (output_dir / "address_changes_20241002.csv").exists()
        no_logging_setup.assert_called_once_with(
            environment="production", log_level="WARNING", log_dir=None
        )

    def test_processing_failure_exits_1(self, tmp_path, input_dir, output_dir, write_addresses,
                                        address_row):
        write_addresses("20241002", [address_row(1, 100)])

        exit_code = main([
            "--config-dir", str(tmp_path / "no-config"),
            "--input-dir", str(input_dir),
            "--output-dir", str(output_dir),
            "--effective-date", "20241002",
        ])

        assert exit_code == 1

    def test_missing_configuration_without_directories_exits_1(self, tmp_path, capsys):
        exit_code = main(["--config-dir", str(tmp_path / "no-config")])

        assert exit_code == 1
        assert "[ERROR] Environment configuration file not found" in capsys.readouterr().err
