"""Error types for the vendor policy package.

Lookup failures are raised internally as these exceptions and converted to an
empty policy result at the :meth:`VendorPolicyLoader.get_policy` boundary, so
they never reach callers of the loader.
"""

from __future__ import annotations


class VendorPolicyError(Exception):
    """Base error for all vendor policy exceptions."""


class PolicyNotFoundError(VendorPolicyError):
    """Raised when the configured package does not register the entry point."""

    def __init__(self, package_name: str, entry_point: str) -> None:
        super().__init__(f"Vendor policy entry point '{entry_point}' not found in package '{package_name}'")


class InvalidPolicyError(VendorPolicyError):
    """Raised when the entry point resolves to something that is not a vendor policy."""

    def __init__(self, package_name: str, entry_point: str, reason: str) -> None:
        super().__init__(f"Invalid vendor policy '{entry_point}' in package '{package_name}': {reason}")


class ImapIdFormatError(VendorPolicyError):
    """Raised when an IMAP ID value string is malformed."""
