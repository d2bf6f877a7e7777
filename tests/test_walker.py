import os
from pathlib import Path

import pytest

from gocyclo.errors import TraversalError
from gocyclo.models import ExclusionFlags
from gocyclo.services import walker


def _touch(root: Path, *rel_paths: str) -> None:
    for rel in rel_paths:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text("package x\n", encoding="utf-8")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    _touch(
        root,
        "main.go",
        "README.md",
        "pkg/util.go",
        "pkg/util_test.go",
        "vendor/github.com/dep/dep.go",
        "Godeps/_workspace/src/old/old.go",
    )
    return root


def test_reserved_prefix_for_current_dir_is_bare_name() -> None:
    assert walker.reserved_prefix(".", "vendor") == "vendor"
    assert walker.reserved_prefix("src", "Godeps") == os.path.join("src", "Godeps")


def test_each_flag_excludes_only_its_own_directory() -> None:
    vendored = os.path.join("proj", "vendor", "a.go")
    godeps = os.path.join("proj", "Godeps", "b.go")

    only_vendor = ExclusionFlags(skip_vendor=True)
    assert walker.is_excluded("proj", vendored, only_vendor)
    assert not walker.is_excluded("proj", godeps, only_vendor)

    only_godeps = ExclusionFlags(skip_godeps=True)
    assert walker.is_excluded("proj", godeps, only_godeps)
    assert not walker.is_excluded("proj", vendored, only_godeps)

    assert not walker.is_excluded("proj", vendored, ExclusionFlags())


def test_exclusion_is_a_plain_prefix_match() -> None:
    flags = ExclusionFlags(skip_vendor=True)
    assert walker.is_excluded("proj", os.path.join("proj", "vendorized", "a.go"), flags)
    # Nested vendor directories are not under the root prefix.
    assert not walker.is_excluded("proj", os.path.join("proj", "pkg", "vendor", "a.go"), flags)


def test_analyze_target_requires_go_suffix() -> None:
    flags = ExclusionFlags()
    assert walker.is_analyze_target("proj", os.path.join("proj", "a.go"), flags)
    assert not walker.is_analyze_target("proj", os.path.join("proj", "a.go.txt"), flags)


def test_walk_dir_without_flags(project: Path) -> None:
    root = str(project)
    files = walker.walk_dir(root, ExclusionFlags())

    assert files == [
        os.path.join(root, "main.go"),
        os.path.join(root, "Godeps", "_workspace", "src", "old", "old.go"),
        os.path.join(root, "pkg", "util.go"),
        os.path.join(root, "pkg", "util_test.go"),
        os.path.join(root, "vendor", "github.com", "dep", "dep.go"),
    ]


def test_walk_dir_skips_flagged_directories(project: Path) -> None:
    root = str(project)
    files = walker.walk_dir(root, ExclusionFlags(skip_godeps=True, skip_vendor=True))

    assert files == [
        os.path.join(root, "main.go"),
        os.path.join(root, "pkg", "util.go"),
        os.path.join(root, "pkg", "util_test.go"),
    ]


def test_walk_current_directory(project: Path, monkeypatch) -> None:
    monkeypatch.chdir(project)

    files = walker.collect_files(["."], ExclusionFlags(skip_vendor=True))

    assert os.path.join("vendor", "github.com", "dep", "dep.go") not in files
    assert os.path.join("Godeps", "_workspace", "src", "old", "old.go") in files
    assert "main.go" in files


def test_explicit_file_is_taken_without_suffix_check(project: Path) -> None:
    readme = str(project / "README.md")
    vendored = str(project / "vendor" / "github.com" / "dep" / "dep.go")

    files = walker.collect_files([readme, vendored], ExclusionFlags(skip_vendor=True))

    # Explicitly named files are never filtered, not even by the exclusion flags.
    assert files == [readme, vendored]


def test_collect_files_preserves_root_order(project: Path) -> None:
    pkg = str(project / "pkg")
    main = str(project / "main.go")

    files = walker.collect_files([pkg, main], ExclusionFlags())

    assert files == [os.path.join(pkg, "util.go"), os.path.join(pkg, "util_test.go"), main]


def test_walk_error_aborts_with_traversal_error(project: Path, monkeypatch) -> None:
    def failing_walk(top, onerror=None, **kwargs):
        onerror(PermissionError(13, "Permission denied", os.path.join(top, "pkg")))
        return iter(())

    monkeypatch.setattr(walker.os, "walk", failing_walk)

    with pytest.raises(TraversalError) as excinfo:
        walker.walk_dir(str(project), ExclusionFlags())

    assert excinfo.value.path == os.path.join(str(project), "pkg")
    assert "Permission denied" in str(excinfo.value)
