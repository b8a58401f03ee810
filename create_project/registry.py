"""Preset and feature registry.

Static metadata describing what ships in a generated project.  Each preset
bundles a framework choice with its rule/MCP/hook toggles and dependency
set; each feature is a preset-independent add-on.  Adding a preset or a
feature means adding one entry to :data:`PRESETS` or :data:`FEATURES`; the
scaffolder never needs to change.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PresetKey(str, Enum):
    """Framework presets offered by the generator."""
    STATIC = "static"
    ASTRO = "astro"
    REACT = "react"
    NEXTJS = "nextjs"
    NUXT = "nuxt"
    SVELTE = "svelte"
    FULLSTACK = "fullstack"


class FeatureKey(str, Enum):
    """Optional add-ons, independent of the preset."""
    CSS440 = "440css"
    DATABASE = "database"
    AUTH = "auth"
    ANALYTICS = "analytics"
    DEPLOYMENT = "deployment"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class PresetDefinition(BaseModel):
    """Metadata for one preset.

    Toggle and dependency maps are exposed read-only; a definition is shared
    by every project generated from it.
    """
    model_config = ConfigDict(frozen=True, validate_default=True)

    name: str = Field(..., description="Display name, e.g. 'Astro Site'")
    description: str = Field(default="")
    rules: Mapping[str, bool] = Field(default_factory=dict, description="Code rule toggles")
    mcp: Mapping[str, bool] = Field(default_factory=dict, description="MCP integration toggles")
    hooks: Mapping[str, bool] = Field(default_factory=dict, description="Development hook toggles")
    dependencies: Mapping[str, str] = Field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("rules", "mcp", "hooks", "dependencies", "dev_dependencies")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)


class FeatureDefinition(BaseModel):
    """Metadata for one feature."""
    model_config = ConfigDict(frozen=True, validate_default=True)

    description: str = Field(...)
    dependencies: Mapping[str, str] = Field(default_factory=dict)
    dev_dependencies: Mapping[str, str] = Field(default_factory=dict)
    mcp: tuple[str, ...] = Field(default=(), description="Extra MCP integrations")
    files: tuple[str, ...] = Field(
        default=(),
        description="Extra files/directories staged from the template directory",
    )

    @field_validator("dependencies", "dev_dependencies")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return _freeze(value)


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    """Copy *value* into a read-only mapping."""
    return MappingProxyType(dict(value))


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class RegistryError(KeyError):
    """Raised when a preset or feature key is not registered."""

    def __init__(self, kind: str, key: str, known: list[str]) -> None:
        self.kind = kind
        self.key = key
        self.known = known
        super().__init__(key)

    def __str__(self) -> str:
        return f"Unknown {self.kind} '{self.key}' (expected one of: {', '.join(self.known)})"


class UnknownPresetError(RegistryError):
    """Raised for an unregistered preset key."""

    def __init__(self, key: str, known: list[str]) -> None:
        super().__init__("preset", key, known)


class UnknownFeatureError(RegistryError):
    """Raised for an unregistered feature key."""

    def __init__(self, key: str, known: list[str]) -> None:
        super().__init__("feature", key, known)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

_DEFAULT_HOOKS = {"Pre-commit": True, "Post-save": True}

PRESETS: Mapping[str, PresetDefinition] = MappingProxyType({
    PresetKey.STATIC.value: PresetDefinition(
        name="Static Website",
        description="Semantic HTML, Modern CSS, Vanilla JavaScript",
        rules={
            "Modern JavaScript": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "SEO Optimization": True,
            "Semantic HTML": True,
        },
        mcp={"Cloudflare": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={},
        dev_dependencies={"vite": "^5.0.0"},
    ),
    PresetKey.ASTRO.value: PresetDefinition(
        name="Astro Site",
        description="Astro 5, Modern CSS, Islands Architecture",
        rules={
            "Modern JavaScript": True,
            "Astro": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "SEO Optimization": True,
        },
        mcp={"GitHub": True, "Cloudflare": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={"astro": "^5.0.0"},
        dev_dependencies={"@astrojs/node": "^8.0.0"},
    ),
    PresetKey.REACT.value: PresetDefinition(
        name="React App",
        description="React, TypeScript, Vite, TanStack",
        rules={
            "TypeScript": True,
            "React": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "TanStack": True,
        },
        mcp={"GitHub": True, "Vercel": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={
            "react": "^18.3.0",
            "react-dom": "^18.3.0",
            "@tanstack/react-query": "^5.0.0",
        },
        dev_dependencies={
            "vite": "^5.0.0",
            "@vitejs/plugin-react": "^4.0.0",
            "typescript": "^5.0.0",
        },
    ),
    PresetKey.NEXTJS.value: PresetDefinition(
        name="Next.js App",
        description="Next.js 15, App Router, TypeScript, TanStack",
        rules={
            "TypeScript": True,
            "Next.js": True,
            "React": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "TanStack": True,
        },
        mcp={"GitHub": True, "Vercel": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={
            "next": "^15.0.0",
            "react": "^18.3.0",
            "react-dom": "^18.3.0",
            "@tanstack/react-query": "^5.0.0",
        },
        dev_dependencies={
            "typescript": "^5.0.0",
            "@types/react": "^18.0.0",
            "@types/node": "^20.0.0",
        },
    ),
    PresetKey.NUXT.value: PresetDefinition(
        name="Vue/Nuxt",
        description="Vue 3, Nuxt, Composition API, Pinia",
        rules={
            "TypeScript": True,
            "Nuxt": True,
            "Vue": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "Pinia": True,
        },
        mcp={"GitHub": True, "Neon Database": True, "Vercel": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={"nuxt": "^3.15.0", "vue": "^3.5.0", "pinia": "^2.0.0"},
        dev_dependencies={"typescript": "^5.0.0"},
    ),
    PresetKey.SVELTE.value: PresetDefinition(
        name="SvelteKit",
        description="Svelte 5, SvelteKit, Runes, TypeScript",
        rules={
            "TypeScript": True,
            "SvelteKit": True,
            "Svelte": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
        },
        mcp={"GitHub": True, "Vercel": True, "Sentry": True},
        hooks=dict(_DEFAULT_HOOKS),
        dependencies={"svelte": "^5.0.0", "@sveltejs/kit": "^2.0.0"},
        dev_dependencies={
            "typescript": "^5.0.0",
            "@sveltejs/adapter-auto": "^3.0.0",
            "vite": "^5.0.0",
        },
    ),
    PresetKey.FULLSTACK.value: PresetDefinition(
        name="Full Stack",
        description="Complete backend + frontend + database stack",
        rules={
            "TypeScript": True,
            "Node.js": True,
            "Modern CSS": True,
            "WCAG AA Accessibility": True,
            "API Design": True,
            "Database Best Practices": True,
        },
        mcp={"GitHub": True, "Neon Database": True, "Vercel": True, "Sentry": True},
        hooks={"Pre-commit": True, "Post-save": True, "Pre-push": True},
        dependencies={"fastify": "^5.0.0", "@prisma/client": "^6.0.0"},
        dev_dependencies={"prisma": "^6.0.0", "typescript": "^5.0.0"},
    ),
})

FEATURES: Mapping[str, FeatureDefinition] = MappingProxyType({
    FeatureKey.CSS440.value: FeatureDefinition(
        description="Modern CSS system with design tokens and components",
        files=["440css/"],
    ),
    FeatureKey.DATABASE.value: FeatureDefinition(
        description="PostgreSQL database with Prisma ORM",
        mcp=["Neon Database"],
        dependencies={"@prisma/client": "^6.0.0"},
        dev_dependencies={"prisma": "^6.0.0"},
    ),
    FeatureKey.AUTH.value: FeatureDefinition(
        description="Authentication with NextAuth.js",
        dependencies={"next-auth": "^5.0.0"},
    ),
    FeatureKey.ANALYTICS.value: FeatureDefinition(
        description="Error tracking and performance monitoring",
        mcp=["Sentry"],
        dependencies={"@sentry/node": "^8.0.0"},
    ),
    FeatureKey.DEPLOYMENT.value: FeatureDefinition(
        description="Deployment configuration for Vercel and Cloudflare",
        mcp=["Vercel", "Cloudflare"],
        files=["vercel.json", ".cloudflare/"],
    ),
})


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class Registry:
    """Read-only lookup over preset and feature tables.

    The scaffolder receives a ``Registry`` instead of reaching for the
    module tables, so tests can inject their own entries.
    """

    def __init__(
        self,
        presets: Mapping[str, PresetDefinition] = PRESETS,
        features: Mapping[str, FeatureDefinition] = FEATURES,
    ) -> None:
        self._presets = MappingProxyType(dict(presets))
        self._features = MappingProxyType(dict(features))

    def lookup_preset(self, key: str) -> PresetDefinition:
        """Return the preset registered under *key*.

        Raises:
            UnknownPresetError: If *key* is not registered.
        """
        try:
            return self._presets[_key(key)]
        except KeyError:
            raise UnknownPresetError(_key(key), self.preset_keys()) from None

    def lookup_feature(self, key: str) -> FeatureDefinition:
        """Return the feature registered under *key*.

        Raises:
            UnknownFeatureError: If *key* is not registered.
        """
        try:
            return self._features[_key(key)]
        except KeyError:
            raise UnknownFeatureError(_key(key), self.feature_keys()) from None

    def preset_keys(self) -> list[str]:
        return list(self._presets)

    def feature_keys(self) -> list[str]:
        return list(self._features)


def _key(key: str) -> str:
    """Accept both plain strings and ``PresetKey``/``FeatureKey`` members."""
    return key.value if isinstance(key, Enum) else key


DEFAULT_REGISTRY = Registry()
