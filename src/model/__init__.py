"""Model classes for cmsedit."""

from model.document import NEW_DOCUMENT_ID, Document, Entry, new_entry_key
from model.layout import FIELD_KINDS, Layout
from model.app_config import AppConfig, ImageProfiles
from model.serializers import entry_from_wire, from_wire, to_wire

__all__ = [
    "NEW_DOCUMENT_ID",
    "Document",
    "Entry",
    "new_entry_key",
    "FIELD_KINDS",
    "Layout",
    "AppConfig",
    "ImageProfiles",
    "entry_from_wire",
    "from_wire",
    "to_wire",
]
