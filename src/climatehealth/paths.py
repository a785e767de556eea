"""streamlines common filesystem paths for the project"""

from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]

def config_dir() -> Path:
    """Return the path to the configuration directory."""
    return ROOT / "config"

def resolve(path: str) -> Path:
    """Resolve a config-relative path against the project root."""
    p = Path(path)
    return p if p.is_absolute() else ROOT / p
