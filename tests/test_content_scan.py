from __future__ import annotations

from pathlib import Path

import pytest

from metamath_blueprints.config import BuildConfig
from metamath_blueprints.content.model import ItemKind, ItemState
from metamath_blueprints.content.scan import parse_item_info, scan_projects, split_front_matter
from metamath_blueprints.errors import BlueprintError, ErrorKind
from tests.fixtures import write_item, write_project, write_sample_root


def _markdown(text: str) -> str:
    return f"<md>{text.strip()}</md>"


def test_split_front_matter() -> None:
    assert split_front_matter('+++\ntype = "Theorem"\n+++\nBody\n') == ('type = "Theorem"\n', "Body\n")
    assert split_front_matter("+++\n+++\n") == ("", "")
    assert split_front_matter("No front matter\n") is None
    assert split_front_matter("+++\nstate = 1\n") is None


def test_item_defaults() -> None:
    info = parse_item_info("", "X")
    assert info.kind is ItemKind.THEOREM
    assert info.state is ItemState.DRAFT
    assert info.hidden is False
    assert info.dependencies == ()
    assert info.statement is None


def test_item_state_aliases() -> None:
    assert parse_item_info('state = "ReadyForStatement"\n', "X").state is ItemState.READY_FOR_STATEMENT
    assert parse_item_info('state = "StmtFormalized"\n', "X").state is ItemState.STATEMENT_FORMALIZED


@pytest.mark.parametrize(
    "matter",
    [
        'state = "Done"\n',
        'type = "Lemma"\n',
        'dependencies = "A"\n',
        "dependencies = [1, 2]\n",
        'hide = "yes"\n',
        "statement = 3\n",
        "state = \n",
    ],
)
def test_invalid_front_matter_is_decode_error(matter: str) -> None:
    with pytest.raises(BlueprintError) as excinfo:
        parse_item_info(matter, "Broken")
    assert excinfo.value.kind is ErrorKind.DECODE
    assert "Broken" in str(excinfo.value)


def test_scan_sample_root(tmp_path: Path) -> None:
    root = write_sample_root(tmp_path / "content")
    (root / ".git").mkdir()
    (root / "build").mkdir()
    (root / "build" / "README.md").write_text("stale", encoding="utf-8")

    projects = scan_projects(root, BuildConfig(), _markdown)

    assert [p.name for p in projects] == ["algebra", "sets"]
    algebra = projects[0]
    assert [i.name for i in algebra.items] == ["A", "B", "C"]
    assert algebra.body == "<md># algebra\n\nAbout this project.</md>"

    a, b, c = algebra.items
    assert a.info.dependencies == ("B", "Ghost")
    assert a.info.state is ItemState.FORMALIZED
    assert b.info.kind is ItemKind.DEFINITION
    assert b.statement_html == "<md>$x = x$</md>"
    assert c.body == "<md>Proof sketch.</md>"


def test_scan_skips_dotfiles_and_nested_dirs(tmp_path: Path) -> None:
    project = write_project(tmp_path, "p")
    write_item(project, "Visible")
    (project / ".DS_Store").write_bytes(b"\x00\x01")
    (project / "drafts").mkdir()
    write_item(project / "drafts", "Nested")

    (project_only,) = scan_projects(tmp_path, BuildConfig(), _markdown)
    assert [i.name for i in project_only.items] == ["Visible"]


def test_project_name_is_full_directory_name(tmp_path: Path) -> None:
    project = write_project(tmp_path, "set.mm")
    write_item(project, "ax-ext.v2")

    (found,) = scan_projects(tmp_path, BuildConfig(), _markdown)
    assert found.name == "set.mm"
    assert [i.name for i in found.items] == ["ax-ext.v2"]


def test_missing_project_readme_fails_naming_project(tmp_path: Path) -> None:
    write_project(tmp_path, "good")
    write_project(tmp_path, "orphan", readme=None)

    with pytest.raises(BlueprintError) as excinfo:
        scan_projects(tmp_path, BuildConfig(), _markdown)
    assert excinfo.value.kind is ErrorKind.VALIDATION
    assert "orphan" in str(excinfo.value)


def test_item_without_front_matter_fails_build(tmp_path: Path) -> None:
    project = write_project(tmp_path, "p")
    (project / "Loose.md").write_text("just text\n", encoding="utf-8")

    with pytest.raises(BlueprintError, match="Could not parse front matter for Loose"):
        scan_projects(tmp_path, BuildConfig(), _markdown)


def test_malformed_hidden_item_still_fails(tmp_path: Path) -> None:
    project = write_project(tmp_path, "p")
    write_item(project, "Hidden", front_matter="hide = true\nstate = [\n")

    with pytest.raises(BlueprintError) as excinfo:
        scan_projects(tmp_path, BuildConfig(), _markdown)
    assert excinfo.value.kind is ErrorKind.DECODE


def test_item_errors_surface_before_missing_readme(tmp_path: Path) -> None:
    project = write_project(tmp_path, "p", readme=None)
    write_item(project, "Bad", front_matter='type = "Axiom"\n')

    with pytest.raises(BlueprintError) as excinfo:
        scan_projects(tmp_path, BuildConfig(), _markdown)
    assert excinfo.value.kind is ErrorKind.DECODE


def test_content_root_must_exist(tmp_path: Path) -> None:
    with pytest.raises(BlueprintError, match="not a directory"):
        scan_projects(tmp_path / "missing", BuildConfig(), _markdown)
