import pytest

from VladLang.Evaluator import Evaluator
from VladLang.Registry import FunctionRegistry
from VladLang.SemanticAnalysis import SemanticChecker
from VladLang.Session import Session


@pytest.fixture
def registry():
    """Empty function registry."""
    return FunctionRegistry()


@pytest.fixture
def checker(registry):
    return SemanticChecker(registry)


@pytest.fixture
def evaluator(registry):
    return Evaluator(registry)


@pytest.fixture
def session():
    """Fresh session with an empty registry."""
    return Session()


@pytest.fixture
def run(session):
    """Run one unit and return the rendered output line."""
    def _run(source):
        prefix, content = session.run_unit(source)
        return prefix + content
    return _run
