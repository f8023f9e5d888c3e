"""End-to-end generation of NetBeans projects from built modules."""

from __future__ import annotations

import os
import shutil
import xml.etree.ElementTree as ET

import pytest

from idegen import IdeModuleBuilder, UnsupportedConfigurationError, update_projects
from idegen.core.properties import load_properties
from idegen.ides.netbeans import NETBEANS, NetbeansProject
from idegen.project import resolve_project

NS = "{http://www.netbeans.org/ns/project/1}"
DATA_NS = "{http://www.netbeans.org/ns/j2se-project/3}"


def _snapshot(path):
    """Map of relative file path -> bytes for everything under path."""
    if not path.exists():
        return None
    return {
        str(p.relative_to(path)): p.read_bytes()
        for p in sorted(path.rglob("*"))
        if p.is_file()
    }


class TestEndToEnd:
    def test_example_project(self, proj_dir, libs_dir, example_module_builder):
        """The canonical module produces a loadable NetBeans project."""
        module = example_module_builder.build()

        update_projects(proj_dir, module, ides=[NETBEANS.ide_name()])

        out = proj_dir / "netbeans" / "example"
        assert out.is_dir()

        props = load_properties(out / "nbproject" / "project.properties")
        assert props["src.dir"] == str(proj_dir / "src")
        assert props["application.title"] == "example"

        refs = props["javac.classpath"].split(os.pathsep)
        resolved = [props[ref[2:-1]] for ref in refs]
        assert str(libs_dir / "foo-1.0.jar") in resolved

        assert props["run.classpath"].split(os.pathsep)[0] == "${build.classes.dir}"

        root = ET.parse(out / "nbproject" / "project.xml").getroot()
        name = root.find(f"{NS}configuration/{DATA_NS}data/{DATA_NS}name")
        assert name.text == "example"

    def test_regeneration_overwrites(self, proj_dir, example_module_builder):
        module = example_module_builder.build()
        update_projects(proj_dir, module)
        out = proj_dir / "netbeans" / "example"
        (out / "stray.txt").write_text("left over")

        variant = IdeModuleBuilder.from_module(module).java_version(21).build()
        update_projects(proj_dir, variant)

        assert not (out / "stray.txt").exists()
        props = load_properties(out / "nbproject" / "project.properties")
        assert props["javac.source"] == "21"
        assert [p.name for p in (proj_dir / "netbeans").iterdir()] == ["example"]

    def test_two_source_directories_rejected(self, proj_dir):
        module = (
            IdeModuleBuilder()
            .name("example")
            .root(proj_dir)
            .source_paths(proj_dir / "a", proj_dir / "b")
            .build()
        )
        with pytest.raises(UnsupportedConfigurationError):
            update_projects(proj_dir, module)
        assert not (proj_dir / "netbeans" / "example").exists()


class TestAtomicity:
    def _fail_on_copy(self, monkeypatch, fail_at):
        calls = []
        real_copy = shutil.copyfile

        def flaky_copy(src, dst, *args, **kwargs):
            calls.append(dst)
            if len(calls) == fail_at:
                raise OSError("simulated copy failure")
            return real_copy(src, dst, *args, **kwargs)

        monkeypatch.setattr("idegen.ides.netbeans.shutil.copyfile", flaky_copy)

    def test_failure_without_previous_output(self, proj_dir, example_module_builder, monkeypatch):
        """A failed first generation leaves no project directory behind."""
        self._fail_on_copy(monkeypatch, fail_at=3)

        with pytest.raises(OSError, match="simulated copy failure"):
            update_projects(proj_dir, example_module_builder.build())

        nb_dir = proj_dir / "netbeans"
        assert not (nb_dir / "example").exists()
        assert not nb_dir.exists() or list(nb_dir.iterdir()) == []

    def test_failure_preserves_previous_output(self, proj_dir, example_module_builder, monkeypatch):
        """A failed regeneration leaves the earlier project byte-for-byte intact."""
        module = example_module_builder.build()
        update_projects(proj_dir, module)
        out = proj_dir / "netbeans" / "example"
        before = _snapshot(out)
        assert before

        self._fail_on_copy(monkeypatch, fail_at=2)
        variant = IdeModuleBuilder.from_module(module).java_version(21).build()
        with pytest.raises(OSError):
            update_projects(proj_dir, variant)

        assert _snapshot(out) == before
        assert [p.name for p in (proj_dir / "netbeans").iterdir()] == ["example"]

    def test_failure_writing_properties(self, proj_dir, example_module_builder, monkeypatch):
        """Failures after the copies (descriptor/properties) also roll back."""
        project = resolve_project(example_module_builder.build())

        def broken_dump(*args, **kwargs):
            raise OSError("properties write failed")

        monkeypatch.setattr("idegen.ides.netbeans.dump_properties", broken_dump)
        with pytest.raises(OSError, match="properties write failed"):
            NetbeansProject(proj_dir / "netbeans" / "example", project).write()

        assert list((proj_dir / "netbeans").iterdir()) == []
