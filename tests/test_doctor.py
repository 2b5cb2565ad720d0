"""Tests for selenium_waiter.doctor."""

from __future__ import annotations

import json
import sys
from unittest.mock import patch

from selenium_waiter.config import load_config
from selenium_waiter.doctor import (
    CheckResult,
    DoctorReport,
    check_log_path,
    check_python_version,
    check_selenium,
    load_checked_config,
    run_doctor,
)


def test_doctor_report_passed_when_all_checks_pass():
    report = DoctorReport()
    report.add(CheckResult("a", True, "ok"))
    report.add(CheckResult("b", True, "ok"))
    assert report.passed is True


def test_doctor_report_fails_when_any_check_fails():
    report = DoctorReport()
    report.add(CheckResult("a", True, "ok"))
    report.add(CheckResult("b", False, "bad"))
    assert report.passed is False


def test_check_python_version_passes_for_current():
    result = check_python_version()
    assert result.passed is True
    assert "✓" in result.message


def test_check_python_version_fails_for_old_version():
    with patch.object(sys, "version_info", (3, 7, 0, "final", 0)):
        result = check_python_version()
    assert result.passed is False
    assert "3.9" in result.hint


def test_check_selenium_installed():
    result = check_selenium()
    assert result.passed is True
    assert "selenium" in result.message


def test_check_selenium_missing():
    with patch("importlib.import_module", side_effect=ImportError("No module named 'selenium'")):
        result = check_selenium()
    assert result.passed is False
    assert "pip install selenium" in result.hint


def test_load_checked_config_defaults_when_no_path():
    result, _ = load_checked_config(None)
    assert result.passed is True


def test_load_checked_config_reports_values(tmp_path):
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({"timeouts": {"default_s": 12, "poll_ms": 100}}))
    result, _ = load_checked_config(str(path))
    assert result.passed is True
    assert "12s" in result.message
    assert "100ms" in result.message


def test_load_checked_config_invalid(tmp_path):
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({"timeouts": {"poll_ms": 0}}))
    result, _ = load_checked_config(str(path))
    assert result.passed is False
    assert result.hint is not None


def test_check_log_path_skipped():
    assert check_log_path(None).passed is True


def test_check_log_path_creates_directory(tmp_path):
    target = tmp_path / "nested" / "waits.log"
    result = check_log_path(str(target))
    assert result.passed is True
    assert target.parent.exists()


def test_run_doctor_uses_configured_log_path(tmp_path):
    log_path = tmp_path / "from-config" / "waits.log"
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({"log": {"path": str(log_path)}}))
    report = run_doctor(config_path=str(path))
    assert report.passed is True
    assert any("from-config" in c.message for c in report.checks)


def test_load_checked_config_returns_loaded_config(tmp_path):
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({"timeouts": {"default_s": 7}}))
    result, config = load_checked_config(str(path))
    assert result.passed is True
    assert config.timeouts.default_s == 7


def test_load_checked_config_invalid_has_no_config(tmp_path):
    path = tmp_path / "waiter.json"
    path.write_text("{not json")
    result, config = load_checked_config(str(path))
    assert result.passed is False
    assert config is None


def test_run_doctor_reads_config_once(tmp_path):
    log_path = tmp_path / "logs" / "waits.log"
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({"log": {"path": str(log_path)}}))
    with patch("selenium_waiter.doctor.load_config", wraps=load_config) as loader:
        report = run_doctor(config_path=str(path))
    assert loader.call_count == 1
    assert report.passed is True
    assert any("logs" in c.message for c in report.checks)


def test_run_doctor_skips_log_check_when_no_log_configured(tmp_path):
    path = tmp_path / "waiter.json"
    path.write_text(json.dumps({}))
    report = run_doctor(config_path=str(path))
    log_check = next(c for c in report.checks if c.name == "Wait log")
    assert log_check.passed is True
    assert "skipped" in log_check.message
    assert not (tmp_path / "artifacts").exists()
