"""Vendor policy loader.

This module resolves the optional vendor policy extension and forwards named
operations to it. The extension is a separately installed distribution that
registers a factory in the ``vendor_policy.policies`` entry-point group; the
host has no import-time dependency on it.

Resolution is deliberately forgiving: when the extension is not installed, is
installed outside a trusted root, cannot be loaded, or raises, the loader
answers with :data:`EMPTY_POLICY` and the host carries on without vendor
customisation. Only package names, entry-point names and exception types are
ever logged; operation arguments may contain account details.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from importlib import metadata
from typing import Any, Iterable, Optional

from vendor_policy.core.config import PolicyReference, Settings

from .base import VendorPolicy
from .errors import InvalidPolicyError, PolicyNotFoundError
from .inspector import MetadataPackageInspector, PackageInspector, is_within_roots
from .models import EMPTY_POLICY, ProviderSettings

_LOGGER = logging.getLogger(__name__)

POLICY_ENTRY_POINT_GROUP = "vendor_policy.policies"

# Operation names and argument/result keys shared with vendor policy packages.
GET_IMAP_ID = "getImapId"
GET_IMAP_ID_USER = "getImapId.user"
GET_IMAP_ID_HOST = "getImapId.host"
GET_IMAP_ID_CAPABILITIES = "getImapId.capabilities"

FIND_PROVIDER = "findProviderForDomain"
FIND_PROVIDER_IN_DOMAIN = "findProviderForDomain.domain"
FIND_PROVIDER_OUT_INCOMING_URI = "findProviderForDomain.inuri"
FIND_PROVIDER_OUT_INCOMING_USER = "findProviderForDomain.inuser"
FIND_PROVIDER_OUT_OUTGOING_URI = "findProviderForDomain.outuri"
FIND_PROVIDER_OUT_OUTGOING_USER = "findProviderForDomain.outuser"
FIND_PROVIDER_OUT_NOTE = "findProviderForDomain.note"

USE_ALTERNATE_EXCHANGE_STRINGS = "useAlternateExchangeStrings"

_NAME_SEPARATORS = re.compile(r"[-_.]+")


def _iter_entry_points(group: str) -> Iterable[metadata.EntryPoint]:
    """Return entry points registered for ``group``.

    The function is also used as an indirection point in tests so that
    behavior can be controlled without relying on the real environment.
    """

    try:
        eps = metadata.entry_points()
    except Exception:  # pragma: no cover - very defensive
        return []

    return eps.select(group=group)


def _normalize_name(name: str) -> str:
    """Normalize a distribution name the way package indexes compare them."""
    return _NAME_SEPARATORS.sub("-", name).lower()


def _optional_str(result: Mapping[str, Any], key: str) -> Optional[str]:
    value = result.get(key)
    return value if isinstance(value, str) else None


class VendorPolicyLoader:
    """
    Resolves the vendor policy extension and forwards operations to it.

    The loader is immutable after construction. Every call resolves the entry
    point again, so installing or removing the extension takes effect without
    rebuilding the loader, and concurrent callers need no synchronisation.

    Attributes:
        reference: Package and entry-point names of the extension.
        enforce_trust: Whether the extension must be installed under a trusted root.
    """

    def __init__(
        self,
        inspector: PackageInspector,
        package_name: str,
        entry_point: str,
        enforce_trust: bool = True,
    ) -> None:
        """
        Initialize the loader.

        Args:
            inspector: Host package inspection used for the trust check.
            package_name: Distribution name of the vendor policy package.
            entry_point: Entry-point name the package registers its factory under.
            enforce_trust: ``False`` skips the installation-root check (tests only).
        """
        self._inspector = inspector
        self._reference = PolicyReference(package_name=package_name, entry_point=entry_point)
        self._enforce_trust = enforce_trust

    @property
    def reference(self) -> PolicyReference:
        return self._reference

    @property
    def enforce_trust(self) -> bool:
        return self._enforce_trust

    @staticmethod
    def is_system_package(inspector: PackageInspector, package_name: str) -> bool:
        """
        Return whether ``package_name`` is installed under a trusted root.

        A package that is not installed, or whose inspection fails, is
        reported as untrusted. This method never raises.
        """
        try:
            info = inspector.get_package_info(package_name)
            if info is None:
                return False
            return is_within_roots(info.location, inspector.trusted_roots())
        except Exception as exc:
            _LOGGER.warning(
                "VendorPolicyLoader: trust check failed; package=%s error=%s",
                package_name,
                type(exc).__name__,
            )
            return False

    def _provided_by_package(self, ep: metadata.EntryPoint) -> bool:
        dist = getattr(ep, "dist", None)
        dist_name = getattr(dist, "name", None)
        if not dist_name:
            return False
        return _normalize_name(dist_name) == _normalize_name(self._reference.package_name)

    def _load_policy(self) -> VendorPolicy:
        """
        Locate the configured entry point and build the vendor policy.

        Raises:
            PolicyNotFoundError: If the package does not register the entry point.
            InvalidPolicyError: If the factory does not return a :class:`VendorPolicy`.
        """
        package_name = self._reference.package_name
        entry_point = self._reference.entry_point
        for ep in _iter_entry_points(POLICY_ENTRY_POINT_GROUP):
            if ep.name != entry_point or not self._provided_by_package(ep):
                continue
            factory = ep.load()
            policy = factory()
            if not isinstance(policy, VendorPolicy):
                raise InvalidPolicyError(package_name, entry_point, f"factory returned {type(policy).__name__}")
            return policy
        raise PolicyNotFoundError(package_name, entry_point)

    def get_policy(
        self,
        operation: Optional[str] = None,
        args: Optional[Mapping[str, Any]] = None,
    ) -> Mapping[str, Any]:
        """
        Ask the vendor policy to answer ``operation``.

        Resolution algorithm:

        1. When trust is enforced and the package is not installed under a
           trusted root, return :data:`EMPTY_POLICY` without touching the
           extension.
        2. Find the entry point registered by the package, call its factory
           and check the result conforms to :class:`VendorPolicy`.
        3. Forward ``operation`` and ``args`` exactly as given (``None``
           included) and return the extension's mapping unchanged.
        4. Any failure in steps 2-3, or a result that is not a mapping,
           yields :data:`EMPTY_POLICY`.

        This method never raises.
        """
        package_name = self._reference.package_name
        if self._enforce_trust and not self.is_system_package(self._inspector, package_name):
            _LOGGER.debug("VendorPolicyLoader: no trusted vendor policy installed; package=%s", package_name)
            return EMPTY_POLICY

        try:
            policy = self._load_policy()
            result = policy.get_policy(operation, args)
        except PolicyNotFoundError:
            _LOGGER.debug(
                "VendorPolicyLoader: vendor policy not registered; package=%s entry_point=%s",
                package_name,
                self._reference.entry_point,
            )
            return EMPTY_POLICY
        except Exception as exc:
            _LOGGER.warning(
                "VendorPolicyLoader: vendor policy call failed; package=%s entry_point=%s operation=%s error=%s",
                package_name,
                self._reference.entry_point,
                operation,
                type(exc).__name__,
            )
            return EMPTY_POLICY

        if not isinstance(result, Mapping):
            _LOGGER.warning(
                "VendorPolicyLoader: vendor policy returned %s instead of a mapping; operation=%s",
                type(result).__name__,
                operation,
            )
            return EMPTY_POLICY
        return result

    def get_imap_id_values(self, user_name: str, host: str, capabilities: str) -> Optional[str]:
        """
        Return the IMAP ID field list the vendor policy wants sent to ``host``.

        Args:
            user_name: Account user name.
            host: IMAP server host name.
            capabilities: Server capability string as received from ``CAPABILITY``.

        Returns:
            A quoted field list (see :mod:`vendor_policy.policy.imap_id`), or
            ``None`` when the policy has nothing to add.
        """
        args = {
            GET_IMAP_ID_USER: user_name,
            GET_IMAP_ID_HOST: host,
            GET_IMAP_ID_CAPABILITIES: capabilities,
        }
        return _optional_str(self.get_policy(GET_IMAP_ID, args), GET_IMAP_ID)

    def find_provider_for_domain(self, domain: str) -> Optional[ProviderSettings]:
        """Return vendor supplied server settings for ``domain``, or ``None``."""
        result = self.get_policy(FIND_PROVIDER, {FIND_PROVIDER_IN_DOMAIN: domain})
        if not result:
            return None
        return ProviderSettings(
            domain=domain,
            incoming_uri_template=_optional_str(result, FIND_PROVIDER_OUT_INCOMING_URI),
            incoming_username_template=_optional_str(result, FIND_PROVIDER_OUT_INCOMING_USER),
            outgoing_uri_template=_optional_str(result, FIND_PROVIDER_OUT_OUTGOING_URI),
            outgoing_username_template=_optional_str(result, FIND_PROVIDER_OUT_OUTGOING_USER),
            note=_optional_str(result, FIND_PROVIDER_OUT_NOTE),
        )

    def use_alternate_exchange_strings(self) -> bool:
        """Return whether the UI should use the vendor's alternate Exchange wording."""
        value = self.get_policy(USE_ALTERNATE_EXCHANGE_STRINGS, None).get(USE_ALTERNATE_EXCHANGE_STRINGS)
        return value if isinstance(value, bool) else False


def create_vendor_policy_loader(
    settings: Optional[Settings] = None,
    inspector: Optional[PackageInspector] = None,
) -> VendorPolicyLoader:
    """
    Build a :class:`VendorPolicyLoader` from configuration.

    Hosts that manage their own wiring should call this once at start-up and
    pass the loader to the components that need it.

    Args:
        settings: Settings to read; defaults to the module-level settings.
        inspector: Package inspector; defaults to a :class:`MetadataPackageInspector`
            using the configured trusted roots.
    """
    if settings is None:
        from vendor_policy.core.config import settings as default_settings

        settings = default_settings

    inspector = inspector or MetadataPackageInspector(settings.trusted_roots)
    reference = settings.policy_reference
    return VendorPolicyLoader(
        inspector,
        reference.package_name,
        reference.entry_point,
        enforce_trust=settings.enforce_trust,
    )


_INSTANCE: Optional[VendorPolicyLoader] = None


def get_instance() -> VendorPolicyLoader:
    """Return the process-wide loader, creating it on first use.

    Concurrent first calls may each build a loader; loaders are immutable and
    equivalent, so whichever assignment lands last is kept.
    """
    global _INSTANCE
    instance = _INSTANCE
    if instance is None:
        instance = create_vendor_policy_loader()
        _INSTANCE = instance
    return instance


def reset_instance() -> None:
    """Drop the process-wide loader so the next :func:`get_instance` rebuilds it."""
    global _INSTANCE
    _INSTANCE = None
