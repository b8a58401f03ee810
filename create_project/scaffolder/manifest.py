"""``package.json`` construction.

Merges a preset's dependency maps with those of the selected features and
wraps the result in the manifest written to every generated project.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from create_project.registry import FeatureDefinition, PresetDefinition

MANIFEST_VERSION = "0.1.0"

MANIFEST_SCRIPTS: dict[str, str] = {
    "dev": "vite dev",
    "build": "vite build",
    "preview": "vite preview",
    "lint": "eslint .",
    "format": "prettier --write .",
}

# Always present in devDependencies, whatever the preset and features say.
PINNED_DEV_DEPENDENCIES: dict[str, str] = {
    "eslint": "^9.0.0",
    "prettier": "^3.0.0",
}


def merge_dependencies(
    preset: PresetDefinition,
    features: Iterable[FeatureDefinition],
) -> tuple[dict[str, str], dict[str, str]]:
    """Merge preset and feature dependency maps.

    Features are applied in the given order on top of the preset, so a
    feature entry replaces a preset entry with the same name, and a later
    feature replaces an earlier one.

    Returns:
        ``(dependencies, dev_dependencies)``.  Neither contains the pinned
        tooling entries.
    """
    dependencies = dict(preset.dependencies)
    dev_dependencies = dict(preset.dev_dependencies)
    for feature in features:
        dependencies.update(feature.dependencies)
        dev_dependencies.update(feature.dev_dependencies)
    return dependencies, dev_dependencies


def build_manifest(
    project_name: str,
    preset: PresetDefinition,
    features: Iterable[FeatureDefinition],
) -> dict[str, Any]:
    """Return the ``package.json`` payload for a project."""
    dependencies, dev_dependencies = merge_dependencies(preset, features)
    return {
        "name": project_name,
        "version": MANIFEST_VERSION,
        "private": True,
        "type": "module",
        "scripts": dict(MANIFEST_SCRIPTS),
        "dependencies": dependencies,
        "devDependencies": {**dev_dependencies, **PINNED_DEV_DEPENDENCIES},
    }
