"""create-project -- interactive project generator.

Prompts for a project name, a framework preset and optional features, then
scaffolds the project directory: base files, ``PROJECT_STARTER.md``,
``package.json``, ``.env.example``, and optionally a git repository and
installed dependencies.
"""

__version__ = "1.0.0"
