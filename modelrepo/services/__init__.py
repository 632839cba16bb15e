"""
Services — External integration layer for modelrepo

- Git: read-only repository history access
"""

from .git import GitIntegration, GitError, TreeEntry, PRIMARY_BRANCH_REFS

__all__ = [
    "GitIntegration", "GitError", "TreeEntry", "PRIMARY_BRANCH_REFS",
]
