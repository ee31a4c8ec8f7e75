"""
Pytest configuration and shared fixtures.

Every fixture works under tmp_path: a fake home directory, a fake bundled
template directory and a recording launcher so no audio process is ever
started.
"""

import json
from pathlib import Path

import pytest

from gamify.core.config.models import HOOK_EVENTS, default_config_dict
from gamify.core.context import GamifyContext
from gamify.core.services.gamify import GamifyServices

TEST_VERSION = "0.4.0"

# Minimal valid RIFF/WAVE header with no samples
WAV_BYTES = (
    b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00\x01\x00\x01\x00"
    b"\x40\x1f\x00\x00\x40\x1f\x00\x00\x01\x00\x08\x00data\x00\x00\x00\x00"
)


def write_theme(
    root: Path,
    name: str,
    *,
    sounds: tuple[str, ...] = HOOK_EVENTS,
    ext: str = ".wav",
    readme: str | None = None,
    style: str | None = None,
) -> Path:
    """Create a theme directory with one file per sound."""
    theme = root / name
    theme.mkdir(parents=True, exist_ok=True)
    for hook in sounds:
        (theme / f"{hook}{ext}").write_bytes(WAV_BYTES + hook.encode())
    if readme is not None:
        (theme / "README.md").write_text(readme)
    if style is not None:
        (theme / "output-style.md").write_text(style)
    return theme


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake user home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """
    A fake bundled template directory.

    Creates:
    - config.json (bundled defaults)
    - index.py / play_sound.py runtime scripts
    - themes/zelda (all sounds, README, output style)
    - themes/system (README only)
    """
    bundle = tmp_path / "bundle"
    bundle.mkdir()
    (bundle / "config.json").write_text(
        json.dumps({**default_config_dict(), "version": TEST_VERSION}, indent=2)
    )
    (bundle / "index.py").write_text("# dispatcher\n")
    (bundle / "play_sound.py").write_text("# player\n")

    themes = bundle / "themes"
    write_theme(
        themes,
        "zelda",
        readme="# Zelda - classic chimes\n\nMore text.\n",
        style="# Zelda style\n",
    )
    write_theme(themes, "system", sounds=(), readme="# System sounds\n")
    return bundle


@pytest.fixture
def ctx(home: Path, template_dir: Path) -> GamifyContext:
    """Context rooted at the fake home and fake bundle."""
    return GamifyContext.for_home(home, template_dir=template_dir, version=TEST_VERSION)


# ==============================================================================
# Service Fixtures
# ==============================================================================


@pytest.fixture
def launches() -> list[list[str]]:
    """argv of every process the recording launcher was asked to start."""
    return []


@pytest.fixture
def fake_launcher(launches: list[list[str]]):
    def launcher(argv) -> bool:
        launches.append(list(argv))
        return True

    return launcher


@pytest.fixture
def services(ctx: GamifyContext, fake_launcher) -> GamifyServices:
    """Uninitialized services with a recording launcher and macOS playback."""
    built = GamifyServices.build(ctx, launcher=fake_launcher)
    built.player.platform = "darwin"
    return built


@pytest.fixture
def initialized(services: GamifyServices) -> GamifyServices:
    """Services after a full `init()`."""
    services.init()
    return services


@pytest.fixture
def read_settings(ctx: GamifyContext):
    """Read ~/.claude/settings.json of the fake home."""

    def _read() -> dict:
        return json.loads(ctx.claude_settings_path.read_text())

    return _read


@pytest.fixture
def make_theme():
    """Factory for theme directories (see write_theme)."""
    return write_theme
