"""
Exit codes for todotree.

Semantic exit codes so scripts wrapping the CLI can tell failures apart.
"""

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Storage error (database unreadable, locked, migration failed)
ERROR_STORAGE = 4

# Resource not found
ERROR_NOT_FOUND = 5

# Operation would corrupt the task tree (cycle, missing parent)
ERROR_HIERARCHY = 6


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_STORAGE: "ERROR_STORAGE",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
        ERROR_HIERARCHY: "ERROR_HIERARCHY",
    }
    return code_names.get(code, f"UNKNOWN({code})")

