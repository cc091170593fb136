import os

import pytest
from dynaconf import Dynaconf

import nodeview.settings
from nodeview.settings import DEFAULT_PAGE_SIZE
from nodeview.settings import get_context
from nodeview.settings import get_kubeconfig
from nodeview.settings import get_page_size


@pytest.fixture
def fresh_settings(monkeypatch):
    for name in ("NODEVIEW_K8S__KUBECONFIG", "NODEVIEW_K8S__CONTEXT", "NODEVIEW_K8S__PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)

    def _load():
        settings = Dynaconf(envvar_prefix="NODEVIEW", merge_enabled=True)
        monkeypatch.setattr(nodeview.settings, "settings", settings)
        return settings

    return _load


def test_kubeconfig_flag_wins(monkeypatch, fresh_settings):
    monkeypatch.setenv("NODEVIEW_K8S__KUBECONFIG", "/etc/nodeview/kubeconfig")
    fresh_settings()

    assert get_kubeconfig("/tmp/kubeconfig") == "/tmp/kubeconfig"


def test_kubeconfig_from_environment(monkeypatch, fresh_settings):
    monkeypatch.setenv("NODEVIEW_K8S__KUBECONFIG", "/etc/nodeview/kubeconfig")
    fresh_settings()

    assert get_kubeconfig(None) == "/etc/nodeview/kubeconfig"


def test_kubeconfig_defaults_to_home(monkeypatch, tmp_path, fresh_settings):
    monkeypatch.setenv("HOME", str(tmp_path))
    fresh_settings()

    assert get_kubeconfig(None) == os.path.join(str(tmp_path), ".kube", "config")


def test_context(monkeypatch, fresh_settings):
    fresh_settings()
    assert get_context(None) is None
    assert get_context("dev") == "dev"

    monkeypatch.setenv("NODEVIEW_K8S__CONTEXT", "prod")
    fresh_settings()
    assert get_context(None) == "prod"
    assert get_context("dev") == "dev"


def test_page_size(monkeypatch, fresh_settings):
    fresh_settings()
    assert get_page_size() == DEFAULT_PAGE_SIZE

    monkeypatch.setenv("NODEVIEW_K8S__PAGE_SIZE", "50")
    fresh_settings()
    assert get_page_size() == 50


@pytest.mark.parametrize("raw_value", ["many", "-1", "0"])
def test_page_size_invalid_falls_back(monkeypatch, fresh_settings, raw_value):
    monkeypatch.setenv("NODEVIEW_K8S__PAGE_SIZE", raw_value)
    fresh_settings()

    assert get_page_size() == DEFAULT_PAGE_SIZE
