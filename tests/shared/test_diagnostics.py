"""Tests for shared.diagnostics helpers."""

import logging

import psutil

import shared.diagnostics as diagnostics


def test_get_memory_info_direct():
    info = diagnostics.get_memory_info()
    assert 'process_rss_mb' in info
    assert info['process_rss_mb'] > 0


def test_get_system_load_direct():
    info = diagnostics.get_system_load()
    assert 'cpu_percent' in info
    assert 'cpu_count' in info


def test_get_memory_info_error(monkeypatch):
    def fail():
        raise psutil.AccessDenied

    monkeypatch.setattr(diagnostics.psutil, 'Process', fail)
    info = diagnostics.get_memory_info()
    assert 'error' in info


def test_get_system_load_error(monkeypatch):
    def fail(interval=None):
        raise psutil.AccessDenied

    monkeypatch.setattr(diagnostics.psutil, 'cpu_percent', fail)
    assert 'error' in diagnostics.get_system_load()


def test_log_memory_usage_direct(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_memory_usage('test context')
    assert 'Memory usage (test context)' in caplog.text


def test_log_memory_usage_without_context(caplog):
    with caplog.at_level(logging.INFO):
        diagnostics.log_memory_usage()
    assert 'Memory usage:' in caplog.text


def test_log_comprehensive_diagnostics(caplog):
    with caplog.at_level(logging.DEBUG):
        diagnostics.log_comprehensive_diagnostics('startup', level=logging.DEBUG)
    assert '=== DIAGNOSTIC INFO: STARTUP ===' in caplog.text
    assert 'Threads - Active' in caplog.text
    assert '=== END DIAGNOSTIC INFO: STARTUP ===' in caplog.text


def test_log_comprehensive_diagnostics_with_errors(monkeypatch, caplog):
    monkeypatch.setattr(diagnostics, 'get_memory_info', lambda: {'error': 'x'})
    monkeypatch.setattr(diagnostics, 'get_system_load', lambda: {'error': 'y'})
    with caplog.at_level(logging.INFO):
        diagnostics.log_comprehensive_diagnostics()
    assert 'RSS: N/A' in caplog.text
