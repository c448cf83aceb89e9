"""Layout document model."""

from dataclasses import dataclass, field

from model.document import Document, Entry

# Field kinds the layout field dialog offers. Passed through, never validated here.
FIELD_KINDS = (
    "text",
    "textarea",
    "richtext",
    "container",
    "dropdown",
    "checkbox",
    "number",
    "image",
)


@dataclass
class Layout(Document):
    """A content-layout schema: key name, template and custom field definitions."""

    okey: str = field(default="", metadata={"wire": "okey"})
    template: str = field(default="", metadata={"wire": "pug"})
    custom_fields: list[Entry] = field(default_factory=list, metadata={"wire": "custFields"})
