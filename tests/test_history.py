"""
Tests for HistoryScanner — Recovering missing files from commit history

These tests validate:
- File name matching on a path-segment boundary
- First-found restore from the newest commit that has the file
- Restore target is the historical path, overwriting if present
- One search per distinct missing identifier
- Files absent from all history are skipped
"""

from unittest.mock import patch

import pytest

from modelrepo.grafico.history import HistoryScanner, path_matches
from modelrepo.grafico.importer import UnresolvedObject
from modelrepo.services.git import GitIntegration, GitError
from tests.factories import requires_git


def unresolved(uri: str) -> UnresolvedObject:
    return UnresolvedObject(missing_object_uri=uri, parent_object=None, role="assigned")


class TestPathMatches:

    def test_exact(self):
        assert path_matches("b.xml", "b.xml")

    def test_nested(self):
        assert path_matches("model/business/b.xml", "b.xml")

    def test_segment_boundary(self):
        assert not path_matches("model/business/ab.xml", "b.xml")

    def test_directory_is_not_a_match(self):
        assert not path_matches("model/b.xml/other.xml", "b.xml")


@requires_git
class TestRestore:

    def test_restores_deleted_file(self, git_repo):
        original = git_repo.read("business/b.xml")
        git_repo.remove("business/b.xml")
        git_repo.commit("Delete b")

        scanner = HistoryScanner(GitIntegration(git_repo.repo))
        restored = scanner.restore([unresolved("business/b.xml#id-b")])

        assert restored == ["id-b"]
        assert git_repo.read("business/b.xml") == original

    def test_restores_from_uncommitted_delete(self, git_repo):
        original = git_repo.read("business/b.xml")
        git_repo.remove("business/b.xml")

        HistoryScanner(GitIntegration(git_repo.repo)).restore([unresolved("business/b.xml#id-b")])
        assert git_repo.read("business/b.xml") == original

    def test_newest_version_wins(self, git_repo):
        git_repo.add_element("business", "BusinessActor", "id-b", "Bob v2", file_name="b.xml")
        git_repo.commit("Rename Bob")
        newest = git_repo.read("business/b.xml")
        git_repo.remove("business/b.xml")
        git_repo.commit("Delete b")

        HistoryScanner(GitIntegration(git_repo.repo)).restore([unresolved("business/b.xml#id-b")])
        assert git_repo.read("business/b.xml") == newest

    def test_restores_to_historical_path(self, git_repo):
        """Href path is ignored; the file goes back where history had it."""
        git_repo.remove("business/b.xml")
        git_repo.commit("Delete b")

        HistoryScanner(GitIntegration(git_repo.repo)).restore([unresolved("elsewhere/b.xml#id-b")])

        assert (git_repo.model_dir / "business" / "b.xml").is_file()
        assert not (git_repo.model_dir / "elsewhere").exists()

    def test_recreates_missing_directories(self, git_repo):
        git_repo.git("rm", "-r", "-q", "model/business")
        git_repo.commit("Delete business folder")

        HistoryScanner(GitIntegration(git_repo.repo)).restore([unresolved("business/b.xml#id-b")])
        assert (git_repo.model_dir / "business" / "b.xml").is_file()

    def test_absent_from_history_skipped(self, git_repo):
        scanner = HistoryScanner(GitIntegration(git_repo.repo))
        assert scanner.restore([unresolved("business/never.xml#id-never")]) == []
        assert not (git_repo.model_dir / "business" / "never.xml").exists()

    def test_overwrites_existing_file(self, git_repo):
        original = git_repo.read("business/b.xml")
        (git_repo.model_dir / "business" / "b.xml").write_text("junk")

        HistoryScanner(GitIntegration(git_repo.repo)).restore([unresolved("business/b.xml#id-b")])
        assert git_repo.read("business/b.xml") == original

    def test_missing_folder_restored_by_directory(self, git_repo):
        """Folder files share a name; only the missing folder's file is written."""
        git_repo.add_folder("business/id-sub", "id-sub", name="Sub")
        git_repo.commit("Sub folder")
        sub_folder = git_repo.read("business/id-sub/folder.xml")

        git_repo.add_folder("business", "id-business", name="Business EDITED", type="business")
        edited = git_repo.read("business/folder.xml")
        git_repo.remove("business/id-sub/folder.xml")

        restored = HistoryScanner(GitIntegration(git_repo.repo)).restore(
            [unresolved("business/id-sub/folder.xml#id-sub")]
        )

        assert restored == ["id-sub"]
        assert git_repo.read("business/id-sub/folder.xml") == sub_folder
        assert git_repo.read("business/folder.xml") == edited

    def test_same_name_first_found_wins(self, git_repo):
        """Two folders hold b.xml; whichever the walk meets first is used."""
        git_repo.add_folder("other", "id-other", type="other")
        git_repo.add_element("other", "BusinessActor", "id-b2", "Other Bob", file_name="b.xml")
        git_repo.commit("Second b.xml")

        match = HistoryScanner(GitIntegration(git_repo.repo)).find_entry("b.xml")
        assert match.entry.path == "model/business/b.xml"


@requires_git
class TestDeduplication:

    def test_one_search_per_identifier(self, git_repo):
        git_repo.remove("business/b.xml")
        scanner = HistoryScanner(GitIntegration(git_repo.repo))

        with patch.object(scanner, "find_entry", wraps=scanner.find_entry) as find:
            restored = scanner.restore([
                unresolved("business/b.xml#id-b"),
                unresolved("business/b.xml#id-b"),
            ])

        assert find.call_count == 1
        assert restored == ["id-b"]

    def test_missing_identifier_not_searched_twice(self, git_repo):
        scanner = HistoryScanner(GitIntegration(git_repo.repo))

        with patch.object(scanner, "find_entry", return_value=None) as find:
            scanner.restore([unresolved("x.xml#id-x"), unresolved("x.xml#id-x")])

        assert find.call_count == 1

    def test_tree_listing_cached(self, git_repo):
        git = GitIntegration(git_repo.repo)
        scanner = HistoryScanner(git)

        with patch.object(git, "list_tree", wraps=git.list_tree) as list_tree:
            scanner.find_entry("missing-one.xml")
            scanner.find_entry("missing-two.xml")

        assert list_tree.call_count == 1  # One commit, listed once


@requires_git
class TestBranch:

    def test_configured_branch(self, git_repo):
        git_repo.git("checkout", "-b", "feature")
        git_repo.add_element("business", "BusinessActor", "id-f", "Feature only", file_name="f.xml")
        git_repo.commit("Feature element")
        git_repo.git("checkout", "master")

        assert HistoryScanner(GitIntegration(git_repo.repo)).find_entry("f.xml") is None
        match = HistoryScanner(GitIntegration(git_repo.repo), branch="feature").find_entry("f.xml")
        assert match is not None

    def test_unknown_branch_raises(self, git_repo):
        scanner = HistoryScanner(GitIntegration(git_repo.repo), branch="nope")
        with pytest.raises(GitError):
            scanner.restore([unresolved("business/b.xml#id-b")])

    def test_no_repository_raises(self, grafico_factory):
        grafico_factory.create_two_element_model()
        scanner = HistoryScanner(GitIntegration(grafico_factory.repo))
        with pytest.raises(GitError):
            scanner.restore([unresolved("business/b.xml#id-b")])
