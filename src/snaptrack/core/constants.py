"""
Shared constants for snaptrack.

The engine itself is configured entirely through TrackerBuilder; these
values only drive logging setup for the workbench program.
"""

# Environment variable overriding the workbench log level ("DEBUG", "INFO", ...)
ENV_VAR_LOG_LEVEL = "SNAPTRACK_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
