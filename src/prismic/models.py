"""Pydantic models shared across prismic modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`CacheConfig`, :class:`OutputConfig`,
    and :class:`GlobalConfig`.

**API entry document models** -- validated from the JSON returned by the API
endpoint and consumed by :class:`~prismic.api.Api`:
    :class:`Ref`, :class:`FormField`, :class:`Form`, and :class:`ApiData`.

Documents and fragments are plain dataclasses (see :mod:`prismic.fragments`)
because they are built by :mod:`prismic.parser` rather than validated.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class RequestConfig(BaseModel):
    """HTTP request settings for :class:`~prismic.client.HttpClient`."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(default=3, ge=0, description="Max retry attempts")


class CacheConfig(BaseModel):
    """In-memory response cache settings."""

    capacity: int = Field(
        default=100, ge=1, description="Maximum number of cached responses"
    )


class OutputConfig(BaseModel):
    """Output preferences for the command line."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-level configuration stored as ``config.json``.

    Loaded via :func:`~prismic.config.load_global_config` and persisted via
    :func:`~prismic.config.save_global_config`. Fields here have the lowest
    precedence; see :func:`~prismic.config.resolve_config`.
    """

    api_url: Optional[str] = Field(
        default=None, description="API endpoint, e.g. https://repo.prismic.io/api"
    )
    access_token_source: Optional[str] = Field(
        default=None,
        description="Credential source for the access token: env:VAR, file:/path, prompt",
    )
    link_pattern: str = Field(
        default="/{type}/{id}",
        description="URL pattern used to resolve document links ({id}, {type}, {slug})",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- API entry document ---


class Ref(BaseModel):
    """A content release the API can be queried at.

    Example::

        Ref.model_validate({"id": "master", "ref": "UkL0hcuvzYUANCrm",
                            "label": "Master", "isMasterRef": True})
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    ref: str
    label: str
    is_master: bool = Field(default=False, alias="isMasterRef")
    scheduled_at: Optional[datetime] = Field(default=None, alias="scheduledAt")


class FormField(BaseModel):
    """One input of a search form."""

    type: str = "String"
    multiple: bool = False
    default: Optional[str] = None


class Form(BaseModel):
    """A search form exposed by the API (``everything``, collections, ...)."""

    name: Optional[str] = None
    method: str = "GET"
    rel: Optional[str] = None
    enctype: str = "application/x-www-form-urlencoded"
    action: str
    fields: dict[str, FormField] = Field(default_factory=dict)


class ApiData(BaseModel):
    """The API entry document returned by ``GET <endpoint>``."""

    model_config = ConfigDict(extra="allow")

    refs: list[Ref] = Field(default_factory=list)
    bookmarks: dict[str, str] = Field(default_factory=dict)
    types: dict[str, str] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    forms: dict[str, Form] = Field(default_factory=dict)
    oauth_initiate: Optional[str] = None
    oauth_token: Optional[str] = None
