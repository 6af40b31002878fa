import logging
import os
from pathlib import Path

import tomlkit

from domain.models import SceneSettings
from domain.toml_sections import flat_to_sectioned, sectioned_to_flat
from shared.constants import APP_NAME, PROFILES_DIR

logger = logging.getLogger(__name__)


def _user_profiles_dir() -> Path:
    """
    Determine profiles directory.

    1) If <project_root>/configs/profiles exists, use it (run-from-repo setups).
    2) Otherwise, fall back to the user config directory:
       $XDG_CONFIG_HOME/Metaballs/configs/profiles or ~/.config/Metaballs/configs/profiles.
    """
    project_root = Path(__file__).resolve().parent.parent.parent
    local_profiles = project_root / PROFILES_DIR
    if local_profiles.exists():
        return local_profiles

    return (
        Path(os.getenv('XDG_CONFIG_HOME') or (Path.home() / '.config'))
        / APP_NAME
        / PROFILES_DIR
    )


def ensure_profiles_dir() -> Path:
    profiles_dir = _user_profiles_dir()
    profiles_dir.mkdir(parents=True, exist_ok=True)
    return profiles_dir


def list_profiles() -> list[str]:
    """Profile names without extension."""
    folder = ensure_profiles_dir()
    return sorted(p.stem for p in folder.glob('*.toml') if p.is_file())


def profile_path(name: str) -> Path:
    """Path to a profile file by name."""
    return ensure_profiles_dir() / f'{name}.toml'


def load_profile(name_or_path: str) -> SceneSettings:
    """
    Load and validate a TOML profile into SceneSettings.

    Accepts either a profile name (without .toml) from the profiles
    directory, or an absolute/relative path to a TOML file.
    """
    p = Path(name_or_path)
    path = (
        p if p.suffix.lower() == '.toml' and p.exists() else profile_path(name_or_path)
    )
    if not path.exists():
        msg = f'Profile not found: {path}'
        raise FileNotFoundError(msg)
    text = path.read_text(encoding='utf-8')
    data = tomlkit.parse(text).unwrap()
    settings = SceneSettings.model_validate(sectioned_to_flat(data))
    logger.info(
        'Loaded profile %s: grid=%dx%d unit=%s threshold=%s sources=%d',
        path,
        settings.grid_width,
        settings.grid_height,
        settings.unit,
        settings.threshold,
        settings.source_count,
    )
    return settings


def save_profile(name: str, settings: SceneSettings) -> Path:
    """Save a profile as sectioned TOML (no atomic write, no backups)."""
    path = profile_path(name)
    data = flat_to_sectioned(settings.model_dump(mode='json'))
    text = tomlkit.dumps(data)
    path.write_text(text, encoding='utf-8')
    logger.info('Saved profile %s', path)
    return path


def delete_profile(name: str) -> None:
    """Delete a profile file if it exists."""
    path = profile_path(name)
    if path.exists():
        path.unlink()
