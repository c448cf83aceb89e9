"""Global application configuration and image profile models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from model.document import Entry


@dataclass
class AppConfig:
    """The singleton CMS configuration document.

    Every list field holds opaque entries edited through dialogs, except
    ``categories`` which is a plain list of names.
    """

    buckets: list[Entry] = field(default_factory=list, metadata={"wire": "buckets"})
    cfdists: list[Entry] = field(default_factory=list, metadata={"wire": "cfdists"})
    global_scripts: list[Entry] = field(default_factory=list, metadata={"wire": "pugGlobalScripts"})
    bookmarks: list[Entry] = field(default_factory=list, metadata={"wire": "bookmarks"})
    feeds: list[Entry] = field(default_factory=list, metadata={"wire": "feeds"})
    variables: list[Entry] = field(default_factory=list, metadata={"wire": "variables"})
    categories: list[str] = field(default_factory=list, metadata={"wire": "categories"})
    extra: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class ImageProfiles:
    """The image profile collection, saved independently of the config."""

    profiles: list[Entry] = field(default_factory=list, metadata={"wire": "lstProfiles"})
    extra: dict[str, Any] = field(default_factory=dict, repr=False)
