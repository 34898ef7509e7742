"""Vendor policy facade.

This subpackage defines the public surface for resolving the optional vendor
policy extension. It re-exports the key types that callers are expected to
use:

- ``VendorPolicy`` – protocol a vendor policy extension implements.
- ``VendorPolicyLoader`` – resolves the extension, checks it is installed
  under a trusted root and forwards named operations to it.
- ``PackageInspector`` / ``MetadataPackageInspector`` – package inspection
  used by the trust check.
- ``get_instance`` / ``create_vendor_policy_loader`` – process-wide and
  explicitly wired loader construction.
- ``parse_imap_id_values`` – format check for ``getImapId`` answers.

Host code should import from this module rather than individual
implementation files to keep the integration surface stable.
"""

from .base import VendorPolicy
from .errors import ImapIdFormatError, InvalidPolicyError, PolicyNotFoundError, VendorPolicyError
from .imap_id import is_valid_imap_id_values, parse_imap_id_values
from .inspector import MetadataPackageInspector, PackageInspector, default_trusted_roots
from .loader import (
    POLICY_ENTRY_POINT_GROUP,
    VendorPolicyLoader,
    create_vendor_policy_loader,
    get_instance,
    reset_instance,
)
from .models import EMPTY_POLICY, PackageInfo, ProviderSettings

__all__ = [
    "EMPTY_POLICY",
    "POLICY_ENTRY_POINT_GROUP",
    "ImapIdFormatError",
    "InvalidPolicyError",
    "MetadataPackageInspector",
    "PackageInfo",
    "PackageInspector",
    "PolicyNotFoundError",
    "ProviderSettings",
    "VendorPolicy",
    "VendorPolicyError",
    "VendorPolicyLoader",
    "create_vendor_policy_loader",
    "default_trusted_roots",
    "get_instance",
    "is_valid_imap_id_values",
    "parse_imap_id_values",
    "reset_instance",
]
