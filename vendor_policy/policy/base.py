"""Core VendorPolicy protocol implemented by vendor policy extensions.

An extension is a separately installed distribution that registers a
zero-argument factory in the ``vendor_policy.policies`` entry-point group.
The factory must return an object conforming to :class:`VendorPolicy`.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class VendorPolicy(Protocol):
    """Protocol for vendor policy extensions.

    The host never imports an extension directly. It asks the extension named
    questions ("operations") with a mapping of named arguments and receives a
    mapping of named results.

    Key design points:

    - **Pass-through**: ``operation`` and ``args`` may be ``None``; the host
      forwards them exactly as its caller supplied them.
    - **Empty means nothing to report**: an extension that has no answer for
      an operation should return an empty mapping rather than raise.
    """

    def get_policy(self, operation: Optional[str], args: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
        """Answer ``operation`` given ``args`` and return a mapping of named results."""

        ...
