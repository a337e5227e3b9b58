"""Bundled ``<id>.yaml.template`` files."""
