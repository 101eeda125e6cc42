"""Domain constants shared across layers."""

# Fixed category palette; the first entry is the default for new categories
CATEGORY_PALETTE = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#F97316",
    "#06B6D4",
    "#84CC16",
    "#EC4899",
    "#6B7280",
)
DEFAULT_CATEGORY_COLOR = CATEGORY_PALETTE[0]

# Number of most recent entries fed into an insight prompt
INSIGHT_ENTRY_LIMIT = 50

MAX_CONTENT_LENGTH = 5000
MAX_CATEGORY_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500
