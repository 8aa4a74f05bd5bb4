"""Service entry points built on top of the highlighting pipeline."""
