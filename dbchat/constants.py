"""Constants and default values for dbchat."""

import re

# Default model configuration
DEFAULT_MODEL = "anthropic:claude-sonnet-4-5"
DEFAULT_MAX_OUTPUT_TOKENS = 16384  # large responses embed code/SQL

# Dataset defaults
DEFAULT_DATASET = "ecommerce"
DEFAULT_LOG_DIR = ".dbchat"

# Shown instead of a half-parsed directive when the model hit its token limit
TRUNCATION_MESSAGE = (
    "The response was too large and got truncated. "
    "Please try a simpler request or ask for the content in smaller parts."
)

# Punctuation the model sometimes escapes LaTeX-style (\! \? ...)
OVER_ESCAPED_PUNCTUATION = re.compile(r"\\+([!?.,;:'\"()\[\]{}])")

JSON_FENCE_OPENER = "```json"

# Query simulation
DEFAULT_ROW_LIMIT = 10
MIN_ROW_LIMIT = 1
MAX_ROW_LIMIT = 50
SQL_MATCH_PREFIX = 50
QUERY_HISTORY_LIMIT = 20
MIN_EXECUTION_MS = 50
EXECUTION_SPREAD_MS = 300

# Canned values for synthesized cells
SAMPLE_NAMES = [
    "Alice Johnson",
    "Bob Smith",
    "Carol White",
    "David Brown",
    "Eva Martinez",
    "Frank Lee",
    "Grace Kim",
    "Henry Davis",
]
SAMPLE_STATUSES = ["active", "pending", "completed", "cancelled"]

# SQL column type prefixes mapped to synthesized value kinds
SQL_TYPE_KINDS = [
    (("int", "bigint", "smallint", "serial", "number"), "number"),
    (("decimal", "numeric", "money", "currency", "float", "double", "real"), "currency"),
    (("date", "timestamp", "time"), "date"),
    (("bool",), "boolean"),
]

# Model descriptors - Anthropic Claude models only
SUPPORTED_MODELS = {
    # Claude Sonnet 4.5 - Latest flagship model
    "anthropic:claude-sonnet-4-5": {
        "provider": "anthropic",
        "name": "claude-sonnet-4-5-20250929",
        "max_output_tokens": DEFAULT_MAX_OUTPUT_TOKENS,
    },
    # Claude Haiku 4.5 - Fast and cost-effective
    "anthropic:claude-haiku-4-5": {
        "provider": "anthropic",
        "name": "claude-haiku-4-5-20251001",
        "max_output_tokens": 8192,
    },
    # Claude Opus 4.1 - Most capable for complex reasoning
    "anthropic:claude-opus-4-1": {
        "provider": "anthropic",
        "name": "claude-opus-4-1-20250805",
        "max_output_tokens": 8192,
    },
}

# Descriptions sent to the model for entry-view options
OPTION_DESCRIPTIONS = {
    "create-new": "User wants to create a brand new database from scratch",
    "create-existing": "User wants to create from an existing database (clone or migrate)",
}
