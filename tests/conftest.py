"""Shared fixtures for kompl tests."""

import os
import sys
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

import pytest

# Keep test runs from writing a log file into the project root
os.environ.setdefault("KOMPL_LOG_FILE", os.path.join(tempfile.gettempdir(), "kompl-tests.log"))


@dataclass
class SearchTree:
    """A small search path: one directory root with an archive inside it."""

    root: Path
    archive: Path

    @property
    def roots(self) -> list[str]:
        return [str(self.root), str(self.archive)]


def write_zip(path: Path, entries: dict[str, str], directories: tuple[str, ...] = ()) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        for directory in directories:
            archive.writestr(zipfile.ZipInfo(directory), "")
        for name, content in entries.items():
            archive.writestr(name, content)
    return path


@pytest.fixture
def search_tree(tmp_path: Path) -> SearchTree:
    root = tmp_path / "site"
    (root / "pkg").mkdir(parents=True)
    (root / "data").mkdir()
    (root / "pkg" / "__init__.py").write_text("")
    (root / "pkg" / "mod.py").write_text("VALUE = 1\n")
    (root / "pkg" / "stub.pyi").write_text("")
    (root / "pkg" / "__private.pyi").write_text("")
    (root / "top.pyi").write_text("")
    (root / "data" / "config.json").write_text("{}")

    archive = write_zip(
        root / "lib.zip",
        {
            "zpkg/zmod.py": "",
            "zpkg/types.pyi": "",
            "zpkg-1.0.dist-info/METADATA": "",
            "zpkg-1.0.dist-info/entry.py": "",
        },
        directories=("zpkg/",),
    )
    return SearchTree(root=root, archive=archive)


def remove_method(target, name=None):
    """Remove a method from ``target``."""


def reset_meta(target):
    """Reset the metadata of ``target``."""


def remove_all_methods(target):
    pass


@pytest.fixture
def scope_module():
    """A registered module acting as the completion scope."""
    module = ModuleType("kompl_test_scope")
    module.remove_method = remove_method
    module.reset_meta = reset_meta
    module.remove_all_methods = remove_all_methods
    module.totally_unrelated = 1
    module.a_str = "a string"
    module.os_alias = os
    module._hidden = True
    sys.modules[module.__name__] = module
    yield module
    sys.modules.pop(module.__name__, None)
