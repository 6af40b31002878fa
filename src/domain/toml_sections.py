"""Mapping layer between flat SceneSettings fields and sectioned TOML format.

SceneSettings remains a flat Pydantic model. This module provides two functions:
- flat_to_sectioned(): flat dict → sectioned dict (for TOML save)
- sectioned_to_flat(): sectioned dict → flat dict (for TOML load)
"""

from __future__ import annotations

# {section_name: {flat_field_name: short_name_in_toml}}
SECTION_MAP: dict[str, dict[str, str]] = {
    'grid': {
        'grid_width': 'width',
        'grid_height': 'height',
        'unit': 'unit',
        'threshold': 'threshold',
    },
    'sources': {
        'source_count': 'count',
        'radius_min': 'radius_min',
        'radius_max': 'radius_max',
        'placement_offset': 'placement_offset',
        'drift_max': 'drift_max',
        'shrink_min': 'shrink_min',
        'shrink_max': 'shrink_max',
        'max_steps': 'max_steps',
        'seed': 'seed',
    },
    'render': {
        'pixels_per_unit': 'pixels_per_unit',
        'margin_units': 'margin_units',
        'grid_line_spacing': 'grid_line_spacing',
        'smoothing': 'smoothing',
        'output_path': 'output_path',
    },
}

# Reverse index: flat_field → (section, short_name)
_FLAT_TO_SECTION: dict[str, tuple[str, str]] = {}
for _section, _fields in SECTION_MAP.items():
    for _flat, _short in _fields.items():
        _FLAT_TO_SECTION[_flat] = (_section, _short)

# Reverse index: (section, short_name) → flat_field
_SECTION_TO_FLAT: dict[str, dict[str, str]] = {}
for _section, _fields in SECTION_MAP.items():
    _SECTION_TO_FLAT[_section] = {v: k for k, v in _fields.items()}


def flat_to_sectioned(flat: dict) -> dict:
    """Convert flat SceneSettings dict to sectioned dict for TOML output.

    TOML has no null, so ``None`` values are left out.
    """
    result: dict = {'common': {}}
    for key, value in flat.items():
        if value is None:
            continue
        if key in _FLAT_TO_SECTION:
            section, short_name = _FLAT_TO_SECTION[key]
            if section not in result:
                result[section] = {}
            result[section][short_name] = value
        else:
            result['common'][key] = value
    if not result['common']:
        del result['common']
    return result


def sectioned_to_flat(data: dict) -> dict:
    """Convert sectioned TOML dict to flat dict for SceneSettings validation."""
    flat: dict = {}
    for key, value in data.items():
        if isinstance(value, dict) and key in _SECTION_TO_FLAT:
            # Known section: expand short names to flat names
            mapping = _SECTION_TO_FLAT[key]
            for short_name, field_value in value.items():
                flat_name = mapping.get(short_name, short_name)
                flat[flat_name] = field_value
        elif isinstance(value, dict):
            # Common or unknown section: pass through keys as-is
            flat.update(value)
        else:
            # Top-level key (flat TOML)
            flat[key] = value
    return flat
