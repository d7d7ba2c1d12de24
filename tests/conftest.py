"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest
import yaml

import adminmenus.config as config_mod
from adminmenus.host import InMemoryMenuHost, reset_default_host
from adminmenus.lib.hooks import hooks
from adminmenus.pages import AbstractAdminPage


class RecordingPage(AbstractAdminPage):
    """Admin page that records load and render calls into a shared list."""

    def __init__(self, slug, title, capability="manage_options", calls=None):
        super().__init__(slug, title, capability)
        self.calls = calls if calls is not None else []

    def load(self):
        self.calls.append(("load", self.slug))

    def render(self):
        self.calls.append(("render", self.slug))
        return f"<p>{self.slug}</p>"


@pytest.fixture
def make_page():
    """Factory fixture for recording admin pages."""
    def _make(slug, title, capability="manage_options", calls=None):
        return RecordingPage(slug, title, capability, calls)
    return _make


@pytest.fixture
def host():
    """A fresh in-memory host granting every capability."""
    return InMemoryMenuHost()


@pytest.fixture
def mock_host():
    """A host double with an empty registry that accepts every page."""
    host = MagicMock()
    host.admin_page_hooks = {}
    host.add_submenu_page.side_effect = lambda parent, page_title, menu_title, cap, slug, cb: f"hook_{slug}"
    return host


@pytest.fixture(autouse=True)
def clean_default_host():
    """Ensure no test leaks a process-wide host into the next."""
    reset_default_host()
    yield
    reset_default_host()


@pytest.fixture
def clean_hooks():
    """Save and restore hooks state around a test."""
    original_actions = hooks._actions.copy()
    yield
    hooks._actions = original_actions


@pytest.fixture
def temp_app_yaml(tmp_path):
    """Write a config file and point the settings loader at it."""
    config_path = tmp_path / "app.yaml"

    def _create_config(config: dict):
        with open(config_path, "w") as f:
            yaml.safe_dump(config, f)
        config_mod.set_config_path(config_path)
        config_mod.clear_settings_cache()
        return config_path

    yield _create_config

    config_mod.set_config_path(None)
    config_mod.clear_settings_cache()
