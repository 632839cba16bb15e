"""
Shared pytest fixtures for the modelrepo test suite.

Usage in tests:
    def test_something(grafico_factory):
        grafico_factory.create_two_element_model()
        ...

    def test_with_history(git_repo):
        # git_repo has the two-element model committed on master
        ...
"""

import pytest

from modelrepo.host.editors import EditorManager
from modelrepo.host.registry import ModelRegistry
from modelrepo.grafico.repository import ArchiRepository
from tests.factories import GraficoTestFactory, git_is_available


@pytest.fixture
def grafico_factory(tmp_path):
    """Empty working directory factory."""
    return GraficoTestFactory(tmp_path)


@pytest.fixture
def git_repo(grafico_factory):
    """
    Working directory with the two-element model committed.

    Skips when git is not available.
    """
    if not git_is_available():
        pytest.skip("Git is not available")

    grafico_factory.create_two_element_model()
    grafico_factory.init_git()
    grafico_factory.commit("Initial model")
    return grafico_factory


@pytest.fixture
def editors():
    return EditorManager()


@pytest.fixture
def registry(editors):
    return ModelRegistry(editors=editors)


@pytest.fixture
def repository(grafico_factory):
    return ArchiRepository(grafico_factory.repo)
