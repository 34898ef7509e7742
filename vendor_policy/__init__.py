"""Email vendor policy loader.

This package lets the email client consult an optional, separately installed
"vendor policy" package for customised behaviour, such as the fields sent in
the IMAP ``ID`` command or preconfigured server settings for a mail domain.

High-level architecture
-----------------------

- ``vendor_policy.policy``:

  - ``VendorPolicy`` protocol that extensions implement and register in the
    ``vendor_policy.policies`` entry-point group.
  - ``VendorPolicyLoader``, which checks the extension is installed under a
    trusted root before forwarding named operations to it, and falls back to
    an empty result whenever the extension is absent, untrusted or broken.

- ``vendor_policy.core``:

  - Settings (pydantic-settings) and logging configuration.

Typical workflow
----------------

1. Build a loader once with ``create_vendor_policy_loader()`` (or use the
   process-wide ``get_instance()``).
2. Call the named helpers (``get_imap_id_values``, ``find_provider_for_domain``,
   ``use_alternate_exchange_strings``) or ``get_policy`` directly.
3. Treat an empty result as "no vendor customisation".
"""
