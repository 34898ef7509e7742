"""Data models used by the vendor policy loader."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Canonical "no policy" result. Read-only so that no caller can mutate the
# shared instance.
EMPTY_POLICY: Mapping[str, Any] = MappingProxyType({})


class PackageInfo(BaseModel):
    """Installation details of a distribution as reported by a package inspector."""

    name: str = Field(description="Distribution name as recorded in its metadata")
    version: Optional[str] = Field(default=None, description="Installed version")
    location: Path = Field(description="Directory the distribution is installed into")

    model_config = ConfigDict(frozen=True)


class ProviderSettings(BaseModel):
    """Mail server settings a vendor policy supplies for a domain.

    URI and username values are templates understood by the account setup
    flow of the host application; the loader passes them through untouched.
    """

    domain: str
    incoming_uri_template: Optional[str] = None
    incoming_username_template: Optional[str] = None
    outgoing_uri_template: Optional[str] = None
    outgoing_username_template: Optional[str] = None
    note: Optional[str] = None

    model_config = ConfigDict(frozen=True)
