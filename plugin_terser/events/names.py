"""Event names used on the host bus."""

# Output-plugin providers
BUNDLE_MAIN_OUTPUT_GET = "bundle:plugins:main:output:get"
BUNDLE_NPM_OUTPUT_GET = "bundle:plugins:npm:output:get"

# Host services
FLAG_HANDLER_ADD = "system:flaghandler:add"
CONFIG_FILE_OPEN = "system:file:util:config:open"

# Logging
LOG_LEVELS = ("error", "warn", "info", "verbose", "debug")


def log_event(level: str) -> str:
    """Event name for a log level."""
    return f"log:{level}"
