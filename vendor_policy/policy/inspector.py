"""Package inspection used by the vendor policy trust check.

The loader only needs two answers from the host environment: where a
distribution is installed, and which installation roots count as trusted.
:class:`PackageInspector` captures that contract so tests and embedding hosts
can inject their own implementation; :class:`MetadataPackageInspector` answers
it for the running interpreter using :mod:`importlib.metadata`.
"""

from __future__ import annotations

import logging
import sys
import sysconfig
from importlib import metadata
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from .models import PackageInfo

_LOGGER = logging.getLogger(__name__)

_SYSTEM_PATH_KEYS = ("stdlib", "platstdlib", "purelib", "platlib")


@runtime_checkable
class PackageInspector(Protocol):
    """Protocol for host package inspection."""

    def get_package_info(self, name: str) -> Optional[PackageInfo]:
        """Return installation details for ``name``, or ``None`` when it cannot be inspected."""

        ...

    def trusted_roots(self) -> Sequence[Path]:
        """Return the installation roots considered trusted."""

        ...


def default_trusted_roots() -> List[Path]:
    """Return the library directories of the base (system) interpreter.

    Paths are computed against ``sys.base_prefix`` so that packages installed
    into a virtualenv or the user site directory are not considered trusted.
    """
    base_vars = {
        "base": sys.base_prefix,
        "platbase": sys.base_exec_prefix,
        "installed_base": sys.base_prefix,
        "installed_platbase": sys.base_exec_prefix,
    }
    paths = sysconfig.get_paths(vars=base_vars)
    roots: List[Path] = []
    for key in _SYSTEM_PATH_KEYS:
        value = paths.get(key)
        if not value:
            continue
        root = Path(value).resolve()
        if root not in roots:
            roots.append(root)
    return roots


def is_within_roots(location: Path, roots: Iterable[Path]) -> bool:
    """Return ``True`` when ``location`` is one of ``roots`` or lies below one."""
    resolved = location.resolve()
    for root in roots:
        root = Path(root).resolve()
        if resolved == root or root in resolved.parents:
            return True
    return False


class MetadataPackageInspector(PackageInspector):
    """
    Package inspector backed by the interpreter's installed distributions.

    Attributes:
        roots: Trusted installation roots; defaults to :func:`default_trusted_roots`.
    """

    def __init__(self, trusted_roots: Optional[Sequence[Path]] = None) -> None:
        """
        Initialize the inspector.

        Args:
            trusted_roots: Explicit trusted roots. ``None`` or an empty sequence
                selects the system library directories of the base interpreter.
        """
        self._roots = [Path(root) for root in trusted_roots] if trusted_roots else default_trusted_roots()

    def get_package_info(self, name: str) -> Optional[PackageInfo]:
        """
        Look up an installed distribution.

        Args:
            name: Distribution name.

        Returns:
            The installation details, or ``None`` when the distribution is not
            installed or its metadata cannot be read.
        """
        try:
            dist = metadata.distribution(name)
        except metadata.PackageNotFoundError:
            _LOGGER.debug("PackageInspector: package not installed; name=%s", name)
            return None
        except Exception as exc:
            _LOGGER.warning("PackageInspector: failed to inspect package; name=%s error=%s", name, type(exc).__name__)
            return None

        try:
            location = Path(str(dist.locate_file("")))
            return PackageInfo(
                name=dist.metadata["Name"] or name,
                version=dist.version,
                location=location,
            )
        except Exception as exc:
            _LOGGER.warning(
                "PackageInspector: unreadable package metadata; name=%s error=%s", name, type(exc).__name__
            )
            return None

    def trusted_roots(self) -> Sequence[Path]:
        """Return the configured trusted roots."""
        return list(self._roots)
