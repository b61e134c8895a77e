r"""Unit tests for the package entry point."""

from __future__ import annotations

import importlib

import aretry
from aretry.template import AsyncRetryTemplate, RetryTemplate, retry


def test_version() -> None:
    assert isinstance(aretry.__version__, str)
    assert aretry.__version__


def test_all_names_are_exported() -> None:
    for name in aretry.__all__:
        assert hasattr(aretry, name)


def test_public_api() -> None:
    assert aretry.RetryTemplate is RetryTemplate
    assert aretry.AsyncRetryTemplate is AsyncRetryTemplate
    assert aretry.retry is retry


def test_template_subpackage_is_not_shadowed() -> None:
    module = importlib.import_module("aretry.template")
    assert aretry.template is module
    assert module.RetryTemplate is RetryTemplate


def test_retry_decorator_is_a_function() -> None:
    assert callable(aretry.retry)
    assert not hasattr(aretry.retry, "__path__")
