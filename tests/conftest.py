from pathlib import Path
import sys

import pytest

# Ensure repo root is importable as a package root (for `tests._utils.*`).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with HOME inside tmp, and no
    provider settings leak in from the developer's environment.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in (
        "AI_PROVIDER",
        "OLLAMA_BASE_URL",
        "OLLAMA_MODEL",
        "API_PROVIDER",
        "API_KEY",
        "API_BASE_URL",
        "API_MODEL",
        "ENABLE_HISTORY",
        "ENABLE_CUSTOM_PROMPTS",
        "ENGLISH_OPTIMIZER_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return tmp_path
