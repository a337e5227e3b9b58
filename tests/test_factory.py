"""Tests for resource_manifests.render.factory."""

from __future__ import annotations

from pathlib import Path

import pytest

from resource_manifests.errors import TemplateNotFound
from resource_manifests.render.environment import EMPTY, SimpleEnvironment
from resource_manifests.render.factory import (
    TEMPLATE_SUFFIX,
    SimpleTemplateFactory,
    read_lines,
    template_filename,
)
from resource_manifests.render.resource import Resource
from resource_manifests.render.template import SimpleTemplate


def _write(directory: Path, template: str, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / template_filename(template)
    path.write_text(text, encoding="utf-8")
    return path


# ── TestHelpers ──────────────────────────────────────────────────────


class TestHelpers:
    def test_template_filename(self):
        assert template_filename("KafkaTopic") == "KafkaTopic.yaml.template"
        assert TEMPLATE_SUFFIX == ".yaml.template"

    def test_read_lines_terminates_last_line(self, tmp_path: Path):
        p = tmp_path / "t.txt"
        p.write_text("a\nb", encoding="utf-8")
        assert read_lines(p) == "a\nb\n"

    def test_read_lines_keeps_existing_newline(self, tmp_path: Path):
        p = tmp_path / "t.txt"
        p.write_text("a\n\nb\n", encoding="utf-8")
        assert read_lines(p) == "a\n\nb\n"

    def test_read_lines_empty(self, tmp_path: Path):
        p = tmp_path / "t.txt"
        p.write_text("", encoding="utf-8")
        assert read_lines(p) == ""


# ── TestSimpleTemplateFactory ────────────────────────────────────────


class TestSimpleTemplateFactory:
    def test_bundled_template_found(self):
        factory = SimpleTemplateFactory(EMPTY)
        text = factory.load("KafkaTopic")
        assert "kind: KafkaTopic" in text
        assert text.endswith("\n")

    def test_get_returns_bound_template(self):
        env = SimpleEnvironment({"namespace": "kafka"})
        tpl = SimpleTemplateFactory(env).get(Resource("SqlJob", name="job"))
        assert isinstance(tpl, SimpleTemplate)
        assert tpl.environment is env
        assert "kind: SqlJob" in tpl.text

    def test_missing_template_raises(self):
        with pytest.raises(TemplateNotFound, match="No template 'nope' found") as excinfo:
            SimpleTemplateFactory(EMPTY).get(Resource("nope"))
        assert excinfo.value.template == "nope"
        assert str(excinfo.value) == "No template 'nope' found"

    def test_template_not_found_is_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            SimpleTemplateFactory().load("nope")

    def test_default_environment_is_empty(self):
        assert SimpleTemplateFactory().environment is EMPTY

    def test_template_dir_searched(self, tmp_path: Path):
        _write(tmp_path, "topic", "name: {{ name }}")
        factory = SimpleTemplateFactory(SimpleEnvironment(), template_dirs=[tmp_path])
        out = Resource("topic", name="orders").render(factory)
        assert out == "name: orders\n"

    def test_template_dir_overrides_bundled(self, tmp_path: Path):
        _write(tmp_path, "KafkaTopic", "custom: {{name}}\n")
        factory = SimpleTemplateFactory(template_dirs=[str(tmp_path)])
        assert factory.load("KafkaTopic") == "custom: {{name}}\n"

    def test_template_dirs_in_order(self, tmp_path: Path):
        _write(tmp_path / "a", "t", "from a\n")
        _write(tmp_path / "b", "t", "from b\n")
        factory = SimpleTemplateFactory(template_dirs=[tmp_path / "a", tmp_path / "b"])
        assert factory.load("t") == "from a\n"

    def test_missing_template_dir_ignored(self, tmp_path: Path):
        factory = SimpleTemplateFactory(template_dirs=[tmp_path / "missing"])
        assert "kind: SqlJob" in factory.load("SqlJob")

    def test_rereads_every_time(self, tmp_path: Path):
        path = _write(tmp_path, "t", "v1\n")
        factory = SimpleTemplateFactory(template_dirs=[tmp_path])
        assert factory.load("t") == "v1\n"
        path.write_text("v2\n", encoding="utf-8")
        assert factory.load("t") == "v2\n"

    def test_available_templates(self, tmp_path: Path):
        _write(tmp_path, "Custom", "x\n")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
        names = SimpleTemplateFactory(template_dirs=[tmp_path]).available_templates()
        assert names == sorted(names)
        assert {"Custom", "KafkaTopic", "SqlJob"} <= set(names)
        assert "notes" not in names
