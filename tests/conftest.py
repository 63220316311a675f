"""
Global test configuration with support for different test types.
"""

from collections.abc import Generator
from contextlib import contextmanager
import os
from unittest.mock import patch

import pytest

from fix_augment.host import NotificationKind

# --- Environment Isolation (Autouse) ---


@pytest.fixture(autouse=True)
def isolate_fix_augment_env(request, monkeypatch):
    """Ensure a clean FIX_AUGMENT_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("FIX_AUGMENT_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid DEBUG toggles enabling telemetry
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def neutral_config_files(request, monkeypatch, tmp_path):
    """Point home and project config paths at isolated, missing files.

    Prevents reading a developer's real ~/.config/fix_augment.toml or a
    pyproject.toml above the checkout.

    Escape hatch: @pytest.mark.allow_real_config_files.
    """
    if request.node.get_closest_marker("allow_real_config_files"):
        return

    isolated = tmp_path / "config_isolated"
    isolated.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("FIX_AUGMENT_CONFIG_HOME", str(isolated / "fix_augment.toml"))
    monkeypatch.setenv("FIX_AUGMENT_PYPROJECT_PATH", str(isolated / "pyproject.toml"))


@pytest.fixture
def isolated_config_sources(tmp_path):
    """Set up specific config sources in isolation.

    Returns a context manager taking pyproject/home TOML content and env vars
    (``FIX_AUGMENT_`` is prefixed automatically).
    """

    @contextmanager
    def _setup(
        *,
        pyproject_content: str = "",
        home_content: str = "",
        env_vars: dict[str, str] | None = None,
    ) -> Generator[None]:
        clean_env = {
            k: v for k, v in os.environ.items() if not k.startswith("FIX_AUGMENT_")
        }
        if env_vars:
            for key, value in env_vars.items():
                if not key.startswith("FIX_AUGMENT_"):
                    key = f"FIX_AUGMENT_{key.upper()}"
                clean_env[key] = value

        project_dir = tmp_path / "project"
        project_dir.mkdir(exist_ok=True)
        pyproject_path = project_dir / "pyproject.toml"
        home_dir = tmp_path / "home"
        home_dir.mkdir(exist_ok=True)
        home_config_path = home_dir / "fix_augment.toml"

        if pyproject_content:
            pyproject_path.write_text(pyproject_content)
        if home_content:
            home_config_path.write_text(home_content)

        clean_env["FIX_AUGMENT_PYPROJECT_PATH"] = str(pyproject_path)
        clean_env["FIX_AUGMENT_CONFIG_HOME"] = str(home_config_path)

        with patch.dict(os.environ, clean_env, clear=True):
            yield

    return _setup


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Invariants that must hold across the public API",
        "characterization: Golden master tests to detect behavior changes.",
        "slow: Tests that take >1 second",
        "allow_env_pollution: Keep FIX_AUGMENT_* variables from the outer env",
        "allow_real_config_files: Read the real home and project config files",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


class RecordingHost:
    """In-memory HostBridge that records notifications."""

    def __init__(self, text: str = "", settings: dict | None = None):
        self.text = text
        self.settings = dict(settings or {})
        self.notifications: list[tuple[str, NotificationKind]] = []

    def get_config(self, key, default=None):
        return self.settings.get(key, default)

    def get_active_text(self) -> str:
        return self.text

    def notify(self, message: str, kind: NotificationKind) -> None:
        self.notifications.append((message, kind))

    def messages(self, kind: NotificationKind | None = None) -> list[str]:
        return [m for m, k in self.notifications if kind is None or k == kind]


@pytest.fixture
def recording_host():
    """Factory for hosts with given active text and settings."""

    def _make(text: str = "", **settings) -> RecordingHost:
        return RecordingHost(text, settings)

    return _make


@pytest.fixture
def fenced_text():
    """Build a text with one fenced block at a chosen offset.

    Returns ``(text, block_start, block_end)``; the block includes both
    marker lines and the trailing newline.
    """

    def _build(
        total: int, block_start: int, block_len: int, language: str = "python"
    ) -> tuple[str, int, int]:
        opener = f"```{language}\n"
        closer = "```\n"
        body_len = block_len - len(opener) - len(closer)
        body_lines = []
        remaining = body_len
        while remaining > 0:
            line = "x = 1" if remaining > 6 else "y" * (remaining - 1)
            line = line[: max(remaining - 1, 0)]
            body_lines.append(line + "\n")
            remaining -= len(line) + 1
        block = opener + "".join(body_lines) + closer
        prose_before = _prose(block_start)
        prose_after = _prose(total - block_start - len(block))
        text = prose_before + block + prose_after
        return text, block_start, block_start + len(block)

    return _build


def _prose(n: int) -> str:
    """``n`` characters of filler without backticks, ending in a newline."""
    if n <= 0:
        return ""
    line = "lorem ipsum dolor sit amet consectetur adipiscing elit\n"
    return (line * (n // len(line) + 1))[: n - 1] + "\n"
