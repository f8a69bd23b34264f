"""Tests for structural tree validation."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from spx_cli.status.errors import (
    CycleError,
    DuplicateNumberError,
    HierarchyError,
    ValidationError,
)
from spx_cli.status.models import TreeNode, WorkItemKind, WorkItemStatus, WorkItemTree
from spx_cli.status.validate import (
    check_cycles,
    check_duplicates,
    check_hierarchy,
    validate_tree,
)

CAP = WorkItemKind.CAPABILITY
FEAT = WorkItemKind.FEATURE
STORY = WorkItemKind.STORY


def node(
    kind: WorkItemKind,
    number: int,
    slug: str,
    *children: TreeNode,
    path: Path | None = None,
) -> TreeNode:
    return TreeNode(
        kind=kind,
        number=number,
        slug=slug,
        path=path or Path(f"/work/{kind}-{number}_{slug}"),
        own_status=WorkItemStatus.OPEN,
        children=list(children),
    )


def valid_tree() -> WorkItemTree:
    return WorkItemTree(
        nodes=[
            node(
                CAP, 21, "core",
                node(FEAT, 21, "walk", node(STORY, 21, "recurse"), node(STORY, 32, "guard")),
                node(FEAT, 32, "parse", node(STORY, 21, "names")),
            ),
            node(CAP, 32, "output"),
        ]
    )


class TestValidTrees:
    def test_valid_tree_passes(self) -> None:
        tree = valid_tree()
        assert validate_tree(tree) is tree

    def test_empty_tree_passes(self) -> None:
        validate_tree(WorkItemTree())

    def test_same_number_at_different_levels_is_fine(self) -> None:
        tree = WorkItemTree(
            nodes=[node(CAP, 21, "a", node(FEAT, 21, "b", node(STORY, 21, "c")))]
        )
        validate_tree(tree)

    def test_same_number_under_different_parents_is_fine(self) -> None:
        tree = WorkItemTree(
            nodes=[
                node(CAP, 21, "a", node(FEAT, 21, "x")),
                node(CAP, 32, "b", node(FEAT, 21, "y")),
            ]
        )
        validate_tree(tree)


class TestDuplicates:
    def test_duplicate_roots(self) -> None:
        tree = WorkItemTree(nodes=[node(CAP, 21, "alpha"), node(CAP, 21, "beta")])
        with pytest.raises(DuplicateNumberError) as exc_info:
            check_duplicates(tree)
        err = exc_info.value
        assert err.number == 21
        assert err.parent is None
        assert err.slugs == ["alpha", "beta"]
        assert "root level" in str(err)
        assert "alpha" in str(err) and "beta" in str(err)

    def test_duplicate_children(self) -> None:
        tree = WorkItemTree(
            nodes=[node(CAP, 21, "core", node(FEAT, 32, "one"), node(FEAT, 32, "two"))]
        )
        with pytest.raises(DuplicateNumberError, match="under capability-21_core") as exc_info:
            check_duplicates(tree)
        assert exc_info.value.kind == "feature"

    def test_duplicates_reported_before_hierarchy(self) -> None:
        # Duplicate stories at the root are both duplicates and orphans.
        tree = WorkItemTree(nodes=[node(STORY, 21, "a"), node(STORY, 21, "b")])
        with pytest.raises(DuplicateNumberError):
            validate_tree(tree)


class TestHierarchy:
    def test_story_with_children(self) -> None:
        tree = WorkItemTree(
            nodes=[
                node(CAP, 21, "c", node(FEAT, 21, "f", node(STORY, 21, "s", node(STORY, 32, "t"))))
            ]
        )
        with pytest.raises(HierarchyError, match="leaf nodes must not have children"):
            validate_tree(tree)

    def test_feature_at_root_is_orphan(self) -> None:
        tree = WorkItemTree(nodes=[node(FEAT, 21, "loose")])
        with pytest.raises(HierarchyError, match="orphan"):
            check_hierarchy(tree)

    def test_story_directly_under_capability(self) -> None:
        tree = WorkItemTree(nodes=[node(CAP, 21, "c", node(STORY, 21, "s"))])
        with pytest.raises(HierarchyError, match="must be inside a feature"):
            check_hierarchy(tree)

    def test_capability_nested(self) -> None:
        tree = WorkItemTree(nodes=[node(CAP, 21, "outer", node(CAP, 32, "inner"))])
        with pytest.raises(HierarchyError, match="must be top-level"):
            check_hierarchy(tree)

    def test_feature_inside_feature(self) -> None:
        tree = WorkItemTree(
            nodes=[node(CAP, 21, "c", node(FEAT, 21, "f", node(FEAT, 32, "g")))]
        )
        with pytest.raises(HierarchyError, match="found inside feature"):
            check_hierarchy(tree)

    @pytest.mark.parametrize("number", [0, 9, 100])
    def test_number_out_of_range(self, number: int) -> None:
        tree = WorkItemTree(nodes=[node(CAP, number, "c")])
        with pytest.raises(HierarchyError, match="expected 10-99"):
            check_hierarchy(tree)

    def test_hierarchy_errors_are_validation_errors(self) -> None:
        tree = WorkItemTree(nodes=[node(FEAT, 21, "loose")])
        with pytest.raises(ValidationError):
            validate_tree(tree)


class TestCycles:
    def test_node_repeating_ancestor_path(self) -> None:
        shared = Path("/work/capability-21_c")
        tree = WorkItemTree(
            nodes=[node(CAP, 21, "c", node(FEAT, 21, "f", path=shared), path=shared)]
        )
        with pytest.raises(CycleError) as exc_info:
            check_cycles(tree)
        assert exc_info.value.chain == [shared, shared]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_path_to_ancestor(self, tmp_path: Path) -> None:
        cap_dir = tmp_path / "capability-21_c"
        cap_dir.mkdir()
        alias = cap_dir / "feature-21_f"
        os.symlink(cap_dir, alias, target_is_directory=True)
        tree = WorkItemTree(
            nodes=[node(CAP, 21, "c", node(FEAT, 21, "f", path=alias), path=cap_dir)]
        )

        with pytest.raises(CycleError) as exc_info:
            check_cycles(tree)
        assert exc_info.value.chain[0] == exc_info.value.chain[-1] == cap_dir.resolve()

    def test_self_linked_node_terminates(self) -> None:
        feat = node(FEAT, 21, "f")
        cap = node(CAP, 21, "c", feat)
        feat.children.append(cap)
        tree = WorkItemTree(nodes=[cap])

        with pytest.raises(ValidationError):
            validate_tree(tree)

    def test_valid_tree_has_no_cycle(self) -> None:
        check_cycles(valid_tree())
