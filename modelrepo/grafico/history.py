"""
History Scanner — Recover missing grafico files from commit history

For each missing file, walk the history of the primary branch and take
the first commit whose tree holds a file with the same name. The match
is on the file name only because folders may have been renamed or
reorganised since the file was last committed. First found wins: the
walk order is git's, not a timestamp sort.

Folder files are all named folder.xml, so they are matched together
with their directory name. Two elements sharing a file name in
different folders are indistinguishable; whichever the walk meets
first is restored.

Recovery is best effort. A file found nowhere in history is skipped
silently. Not being able to read history at all raises GitError.
"""

import logging
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Dict, Set, Iterable

from ..services.git import GitIntegration, TreeEntry
from .importer import UnresolvedObject


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryMatch:
    """A historical version of a missing file."""
    commit: str
    entry: TreeEntry


def path_matches(path: str, file_name: str) -> bool:
    """True if a tree path ends with file_name on a segment boundary."""
    return path == file_name or path.endswith("/" + file_name)


class HistoryScanner:
    """
    Restores missing files into a working directory from its git history.

    Tree listings are cached per commit and dropped at the start of each
    restore(); the loader creates a scanner per recovery pass.
    """

    def __init__(self, git: GitIntegration, branch: Optional[str] = None):
        """
        Args:
            git: Integration for the repository whose working directory is repaired
            branch: Reference to start the walk from (None = primary branch)
        """
        self.git = git
        self.branch = branch
        self._start: Optional[str] = None
        self._trees: Dict[str, List[TreeEntry]] = {}

    @property
    def working_dir(self) -> Path:
        return self.git.repo_path

    def restore(self, unresolved_objects: Iterable[UnresolvedObject]) -> List[str]:
        """
        Restore the files of unresolved references.

        One search per distinct missing identifier.

        Returns:
            Identifiers whose file was restored, in the order they were found

        Raises:
            GitError: History cannot be read
        """
        self._trees = {}
        restored: List[str] = []
        searched: Set[str] = set()

        for unresolved in unresolved_objects:
            object_id = unresolved.missing_object_id
            if object_id in searched:
                continue
            searched.add(object_id)

            match = self.find_entry(unresolved.search_name)
            if match is None:
                logger.info("No history for %s (%s)", unresolved.search_name, object_id)
                continue

            target = self.write_entry(match.entry)
            logger.info("Restored %s from commit %s", target, match.commit[:8])
            restored.append(object_id)

        return restored

    def find_entry(self, file_name: str) -> Optional[HistoryMatch]:
        """First commit in walk order whose tree contains file_name."""
        start = self._resolve_start()

        with closing(self.git.walk_commits(start)) as commits:
            for commit in commits:
                logger.debug("Scanning %s for %s", commit[:8], file_name)
                for entry in self._tree(commit):
                    if path_matches(entry.path, file_name):
                        return HistoryMatch(commit=commit, entry=entry)

        return None

    def write_entry(self, entry: TreeEntry) -> Path:
        """Write a blob to its tree path in the working directory (overwrites)."""
        target = self.working_dir / entry.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.git.read_blob(entry.oid))
        return target

    def _resolve_start(self) -> str:
        if self._start is None:
            self._start = self.git.resolve_primary_branch(self.branch)
        return self._start

    def _tree(self, commit: str) -> List[TreeEntry]:
        entries = self._trees.get(commit)
        if entries is None:
            entries = self.git.list_tree(commit)
            self._trees[commit] = entries
        return entries
