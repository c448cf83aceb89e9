"""Widget ID constants for the TUI.

Using constants prevents typos and makes refactoring easier. Editor ids are
unique within one editor pane; query them from the pane, not the app.
"""


def css(widget_id: str) -> str:
    """Return a CSS selector for a widget ID.

    Usage:
        from ui.ids import css, STATUS_BAR
        self.query_one(css(STATUS_BAR), Static)
    """
    return f"#{widget_id}"

# Container IDs
HEADER_CONTAINER = "header-container"
HEADER_TITLE = "header-title"
EDITOR_TABS = "editor-tabs"
STATUS_BAR = "status-bar"

# Header buttons
LAYOUTS_BTN = "layouts-btn"
NEW_LAYOUT_BTN = "new-layout-btn"
SETTINGS_BTN = "settings-btn"

# Layout list tab IDs
LAYOUT_LIST = "layout-list"
LAYOUT_LIST_EMPTY = "layout-list-empty"
REFRESH_LAYOUTS_BTN = "refresh-layouts-btn"

# Layout editor IDs
LAYOUT_KEY_INPUT = "layout-key-input"
LAYOUT_TITLE_INPUT = "layout-title-input"
LAYOUT_TEMPLATE = "layout-template"
FIELDS_LIST = "fields-list"
ADD_FIELD_BTN = "add-field-btn"
SAVE_LAYOUT_BTN = "save-layout-btn"
DELETE_LAYOUT_BTN = "delete-layout-btn"
TEMPLATE_HELP_BTN = "template-help-btn"
TEMPLATE_HELP = "template-help"

# Settings editor IDs
SAVE_SETTINGS_BTN = "save-settings-btn"
CATEGORY_INPUT = "category-input"
ADD_CATEGORY_BTN = "add-category-btn"
CATEGORY_LIST = "category-list"
BACKUP_TARGET = "backup-target"
BACKUP_BTN = "backup-btn"
BACKUP_LOG = "backup-log"
RESTART_HINT = "restart-hint"

# Modal IDs
MODAL_TITLE = "modal-title"
MODAL_BUTTONS = "modal-buttons"
MODAL_ERROR = "modal-error"
CONFIRM_MESSAGE = "confirm-message"
YES_BTN = "yes-btn"
NO_BTN = "no-btn"
ENTRY_EDITOR = "entry-editor"
ENTRY_HINT = "entry-hint"
FIELD_NAME_INPUT = "field-name-input"
FIELD_TITLE_INPUT = "field-title-input"
FIELD_KIND_SELECT = "field-kind-select"
MODAL_SAVE_BTN = "modal-save-btn"
MODAL_CANCEL_BTN = "modal-cancel-btn"

# Settings sections: (list field, section title, label fields tried in order)
SETTINGS_SECTIONS = [
    ("buckets", "Buckets", ("label", "bucketname")),
    ("cfdists", "CloudFront Distributions", ("label", "id")),
    ("global_scripts", "Global Template Functions", ("name", "label")),
    ("bookmarks", "Bookmarks", ("label", "url")),
    ("feeds", "Feeds", ("title", "url")),
    ("variables", "Variables", ("variable", "name")),
    ("profiles", "Image Profiles", ("label", "id")),
]


def section_list(field_name: str) -> str:
    """ID of the entry list for a settings section."""
    return f"{field_name.replace('_', '-')}-list"


def section_add_btn(field_name: str) -> str:
    """ID of the add button for a settings section."""
    return f"add-{field_name.replace('_', '-')}-btn"
