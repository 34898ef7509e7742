from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Callable, List

import pytest

from test.doubles import POLICY_ENTRY_POINT, POLICY_PACKAGE, MockVendorPolicy, StubInspector, make_entry_point
from vendor_policy.policy import reset_instance
from vendor_policy.policy import loader as loader_mod


@pytest.fixture(autouse=True)
def _reset_loader_singleton():
    reset_instance()
    yield
    reset_instance()


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    root = tmp_path / "system" / "site-packages"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def user_root(tmp_path: Path) -> Path:
    root = tmp_path / "venv" / "site-packages"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def trusted_inspector(system_root: Path) -> StubInspector:
    """Inspector reporting the policy package as installed under the trusted root."""
    return StubInspector({POLICY_PACKAGE: system_root}, roots=[system_root])


@pytest.fixture
def untrusted_inspector(system_root: Path, user_root: Path) -> StubInspector:
    """Inspector reporting the policy package as installed outside the trusted root."""
    return StubInspector({POLICY_PACKAGE: user_root}, roots=[system_root])


@pytest.fixture
def mock_policy() -> MockVendorPolicy:
    return MockVendorPolicy({})


@pytest.fixture
def entry_points(monkeypatch: pytest.MonkeyPatch) -> Callable[..., List[str]]:
    """Replace entry-point discovery with the given entry points.

    Returns a function that installs entry points and yields the list of
    groups that were queried, so tests can assert discovery was skipped.
    """
    queried: List[str] = []

    def _install(*eps: SimpleNamespace) -> List[str]:
        def _fake_iter(group: str) -> List[SimpleNamespace]:
            queried.append(group)
            return list(eps)

        monkeypatch.setattr(loader_mod, "_iter_entry_points", _fake_iter, raising=True)
        return queried

    return _install


@pytest.fixture
def installed_policy(entry_points, mock_policy: MockVendorPolicy) -> MockVendorPolicy:
    """Register ``mock_policy`` as the policy package's entry point."""
    entry_points(make_entry_point(POLICY_ENTRY_POINT, POLICY_PACKAGE, lambda: mock_policy))
    return mock_policy
