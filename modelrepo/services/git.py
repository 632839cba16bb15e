"""
Git Integration — Read-only access to repository history

Everything the recovery path needs from git, driven through the git
executable:
- Resolve a branch reference to a commit
- Walk commit ancestry (streamed, released on early exit)
- List the full tree of a commit
- Read a blob

Failures to read history are fatal for a load, so they raise GitError
instead of returning None. Lookups that may legitimately miss (resolve)
return None.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Iterator


# Tried in order when no branch is configured
PRIMARY_BRANCH_REFS = ("refs/heads/master", "refs/heads/main", "HEAD")


class GitError(OSError):
    """Repository history cannot be opened or read."""


@dataclass(frozen=True)
class TreeEntry:
    """A blob entry of a commit tree."""
    path: str
    mode: str
    oid: str

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]


class GitIntegration:
    """Git repository integration."""

    def __init__(self, repo_path: Optional[Path] = None):
        """
        Initialize git integration.

        Args:
            repo_path: Path to git repository. If None, uses current directory.
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()
        self.git_dir = self.repo_path / ".git"

    @property
    def is_git_repo(self) -> bool:
        """Check if the directory is a git repository."""
        return self.git_dir.exists() and self.git_dir.is_dir()

    def _run_git(self, args: List[str], binary: bool = False):
        """Run a git command and return stdout (str, or bytes if binary)."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                text=not binary,
            )
        except OSError as e:
            raise GitError(f"Cannot run git: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr if isinstance(result.stderr, str) else result.stderr.decode(errors="replace")
            raise GitError(f"git {' '.join(args)} failed: {stderr.strip()}")

        return result.stdout

    def _ensure_repo(self):
        if not self.is_git_repo:
            raise GitError(f"Not a git repository: {self.repo_path}")

    # =========================================================================
    # References
    # =========================================================================

    def resolve(self, ref: str) -> Optional[str]:
        """
        Resolve a reference to a commit hash.

        Returns:
            Full commit hash, or None if the reference does not exist
        """
        self._ensure_repo()
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise GitError(f"Cannot run git: {e}") from e

        sha = result.stdout.strip()
        if result.returncode != 0 or not sha:
            return None
        return sha

    def resolve_primary_branch(self, branch: Optional[str] = None) -> str:
        """
        Resolve the branch history is read from.

        Args:
            branch: Explicit reference. If None, tries master, main, then HEAD.

        Raises:
            GitError: Reference missing or repository has no commits
        """
        candidates = (branch,) if branch else PRIMARY_BRANCH_REFS
        for ref in candidates:
            sha = self.resolve(ref)
            if sha:
                return sha

        raise GitError(f"No commits reachable from {', '.join(candidates)} in {self.repo_path}")

    def head_commit(self) -> Optional[str]:
        """Commit at HEAD, or None for an empty repository."""
        return self.resolve("HEAD")

    # =========================================================================
    # History
    # =========================================================================

    def walk_commits(self, start: str) -> Iterator[str]:
        """
        Yield commit hashes reachable from start, in rev-list order.

        The rev-list process is streamed and is terminated when the
        generator is closed, so wrap it in contextlib.closing() when the
        caller may stop early.
        """
        self._ensure_repo()
        try:
            proc = subprocess.Popen(
                ["git", "rev-list", start],
                cwd=self.repo_path,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise GitError(f"Cannot run git: {e}") from e

        completed = False
        try:
            for line in proc.stdout:
                sha = line.strip()
                if sha:
                    yield sha
            completed = True
        finally:
            if not completed and proc.poll() is None:
                proc.terminate()
            proc.stdout.close()
            stderr = proc.stderr.read()
            proc.stderr.close()
            returncode = proc.wait()

        if returncode != 0:
            raise GitError(f"git rev-list {start} failed: {stderr.strip()}")

    def list_tree(self, commit: str) -> List[TreeEntry]:
        """All blob entries of a commit's tree, recursively."""
        self._ensure_repo()
        output = self._run_git(["ls-tree", "-r", "-z", commit])

        entries = []
        for record in output.split("\0"):
            if not record:
                continue
            # <mode> SP <type> SP <oid> TAB <path>
            meta, _, path = record.partition("\t")
            parts = meta.split()
            if len(parts) != 3 or parts[1] != "blob":
                continue
            entries.append(TreeEntry(path=path, mode=parts[0], oid=parts[2]))

        return entries

    def read_blob(self, oid: str) -> bytes:
        """Raw content of a blob."""
        self._ensure_repo()
        return self._run_git(["cat-file", "blob", oid], binary=True)
