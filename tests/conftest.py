"""
Pytest configuration and fixtures for s256code tests.
"""
import io
from typing import Callable, Iterable

import pytest
from rich.console import Console


@pytest.fixture
def rfc_vector() -> dict:
    """Example verifier/challenge pair from RFC 7636 Appendix B."""
    return {
        "verifier": "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk",
        "challenge": "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM",
    }


@pytest.fixture
def console() -> Console:
    """A rich console recording plain text output in memory."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def scripted_input() -> Callable[[Iterable[str]], Callable[[str], str]]:
    """Build a read_line callable that replays lines, then raises EOFError."""
    def factory(lines: Iterable[str]) -> Callable[[str], str]:
        remaining = iter(lines)
        prompts = []

        def read_line(prompt: str) -> str:
            prompts.append(prompt)
            try:
                return next(remaining)
            except StopIteration:
                raise EOFError from None

        read_line.prompts = prompts
        return read_line

    return factory


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep S256CODE_* variables from the outer environment out of tests."""
    for name in ("S256CODE_ENTROPY", "S256CODE_LOG_LEVEL", "S256CODE_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
