"""NetBeans backend: writes an Ant-based j2se project per module.

Output goes to ``<project_dir>/netbeans/<name>/``::

    build.xml
    manifest.mf
    nbproject/build-impl.xml
    nbproject/genfiles.properties
    nbproject/project.xml
    nbproject/project.properties

Everything is staged in a temporary sibling directory and published with a
single rename, so a failed run never leaves a half-written project for the
IDE to pick up.
"""

from __future__ import annotations

import logging
import os
import random
import shutil
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from idegen.core.errors import UnsupportedConfigurationError
from idegen.core.fs import AtomicDirectory, delete_directory_children, ensure_dir
from idegen.core.lazy import Lazy
from idegen.core.properties import dump_properties, load_properties
from idegen.ides.base import Ide

if TYPE_CHECKING:
    from idegen.core.logging import GenerationLogger
    from idegen.model import JarDependency
    from idegen.project import IdeProject

logger = logging.getLogger(__name__)

PROJECT_NS = "http://www.netbeans.org/ns/project/1"
J2SE_PROJECT_NS = "http://www.netbeans.org/ns/j2se-project/3"
J2SE_PROJECT_TYPE = "org.netbeans.modules.java.j2seproject"

FILE_REFERENCE_PREFIX = "file.reference."
SOURCE_REFERENCE_PREFIX = "source.reference."
BUILD_CLASSES_DIR = "${build.classes.dir}"

# Copied verbatim from the bundled template tree
TEMPLATE_FILES: tuple[tuple[str, ...], ...] = (
    ("build.xml",),
    ("manifest.mf",),
    ("nbproject", "build-impl.xml"),
    ("nbproject", "genfiles.properties"),
)


def _get_templates_root() -> Path:
    """Return the path to the bundled NetBeans template directory."""
    return Path(__file__).resolve().parent / "nb"


default_properties: Lazy[dict[str, str]] = Lazy(
    lambda: load_properties(_get_templates_root() / "nbdefault.properties")
)


def _is_plain_name(name: str) -> bool:
    """True if ``name`` names one entry directly inside its parent directory."""
    if name in ("", ".", ".."):
        return False
    return not any(sep in name for sep in ("/", os.sep, os.altsep) if sep)


@dataclass(frozen=True)
class FileReference:
    """A ``file.reference.*`` property pointing at one jar."""

    key: str
    path: Path

    @property
    def list_string(self) -> str:
        """Form used inside classpath properties."""
        return "${" + self.key + "}"


class NetbeansProject:
    """Properties and descriptor for one NetBeans project directory.

    All classpath work happens in the constructor; ``write()`` only touches
    the filesystem.
    """

    def __init__(
        self,
        output_dir: Path,
        project: IdeProject,
        generation_logger: GenerationLogger | None = None,
    ):
        if not _is_plain_name(project.name):
            msg = f"NetBeans project name must be a single path component, got {project.name!r}"
            raise UnsupportedConfigurationError(msg)
        if len(project.source_paths) != 1:
            msg = (
                f"NetBeans projects support exactly one source path, "
                f"{project.name} has {len(project.source_paths)}"
            )
            raise UnsupportedConfigurationError(msg)

        self.dir = Path(output_dir)
        self.project = project
        self.generation_logger = generation_logger
        self.properties: dict[str, str] = dict(default_properties.get())
        # jar path -> file.reference key
        self._file_references: dict[str, str] = {}

        self.properties["application.title"] = project.name
        self.properties["src.dir"] = str(project.source_paths[0])
        self.properties["javac.source"] = str(project.java_version)
        self.properties["javac.target"] = str(project.java_version)

        self.properties["javac.classpath"] = os.pathsep.join(
            dict.fromkeys(
                self.create_dependency_reference(dep).list_string
                for dep in project.dependencies
            )
        )

        # dict keys double as an ordered set
        run_classpath: dict[str, None] = {}
        for path in project.resource_paths:
            run_classpath[str(path)] = None
        for rc in project.run_configs:
            for path in rc.classpath:
                run_classpath[str(path)] = None
        self.properties["run.classpath"] = os.pathsep.join([BUILD_CLASSES_DIR, *run_classpath])

    def create_file_reference(self, path: Path, source: Path | None = None) -> FileReference:
        """Register ``path`` under a ``file.reference.<jar name>`` property.

        The same path always maps to the same property. A different jar with
        the same file name gets a randomized key instead; this is logged but
        not an error.
        """
        file_name = Path(path).name
        key = self._file_references.get(str(path), FILE_REFERENCE_PREFIX + file_name)
        existing = self.properties.get(key)
        if existing is not None and existing != str(path):
            key = self._collision_key(file_name)
            logger.warning(
                "Duplicate jar file name %s: %s already registered, using %s for %s",
                file_name,
                existing,
                key,
                path,
            )
            if self.generation_logger is not None:
                self.generation_logger.file_reference_collision(
                    file_name, existing, str(path), key
                )

        self.properties[key] = str(path)
        self._file_references[str(path)] = key
        if source is not None:
            suffix = key[len(FILE_REFERENCE_PREFIX):]
            self.properties[SOURCE_REFERENCE_PREFIX + suffix] = str(source)
        return FileReference(key=key, path=Path(path))

    def create_dependency_reference(self, dependency: JarDependency) -> FileReference:
        return self.create_file_reference(dependency.jar, dependency.sources_jar)

    def _collision_key(self, file_name: str) -> str:
        while True:
            key = f"{FILE_REFERENCE_PREFIX}{file_name}.{random.getrandbits(63)}"
            if key not in self.properties:
                return key

    def write(self) -> None:
        """Stage every file, then publish the directory in one step."""
        with AtomicDirectory(self.dir) as d:
            for parts in TEMPLATE_FILES:
                self._copy_template(d.temp_path, *parts)
            self.write_project_xml(d.temp_path)
            properties_path = d.temp_path / "nbproject" / "project.properties"
            properties_path.write_text(dump_properties(self.properties), encoding="latin-1")
            d.commit()

    def write_project_xml(self, staging_dir: Path) -> Path:
        path = ensure_dir(staging_dir / "nbproject") / "project.xml"
        tree = ET.ElementTree(self.project_xml())
        ET.indent(tree, space="    ")
        tree.write(path, encoding="UTF-8", xml_declaration=True)
        return path

    def project_xml(self) -> ET.Element:
        """Build the ``nbproject/project.xml`` element tree."""
        root = ET.Element("project", {"xmlns": PROJECT_NS})
        ET.SubElement(root, "type").text = J2SE_PROJECT_TYPE
        configuration = ET.SubElement(root, "configuration")
        data = ET.SubElement(configuration, "data", {"xmlns": J2SE_PROJECT_NS})
        ET.SubElement(data, "name").text = self.project.name
        source_roots = ET.SubElement(data, "source-roots")
        ET.SubElement(source_roots, "root", {"id": "src.dir"})
        ET.SubElement(data, "test-roots")
        return root

    def _copy_template(self, staging_dir: Path, *parts: str) -> None:
        target = staging_dir.joinpath(*parts)
        ensure_dir(target.parent)
        shutil.copyfile(_get_templates_root().joinpath(*parts), target)


class Netbeans(Ide):
    """Apache NetBeans (Ant j2se projects)."""

    def ide_name(self) -> str:
        return "netbeans"

    def update_project(
        self,
        project_dir: Path,
        project: IdeProject,
        generation_logger: GenerationLogger | None = None,
    ) -> None:
        nb_dir = Path(project_dir) / self.ide_name()
        nb_project = NetbeansProject(nb_dir / project.name, project, generation_logger)
        nb_project.write()
        removed = delete_directory_children(nb_dir, keep=[project.name])
        for stale in removed:
            logger.info("Removed stale NetBeans project %s", stale)


NETBEANS = Netbeans()
