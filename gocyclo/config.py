from typing import Set

# Only discovered files with this suffix are analyzed. Explicitly named
# files are analyzed whatever their name.
SOURCE_SUFFIX: str = ".go"

CURRENT_DIR: str = "."

# Reserved dependency directories that can be skipped during a walk.
GODEPS_DIR: str = "Godeps"
VENDOR_DIR: str = "vendor"

# Rendered in place of a receiver type that is neither T nor *T.
BAD_RECEIVER: str = "BADRECV"

FUNCTION_NODE_TYPES: Set[str] = {
    'function_declaration',
    'method_declaration',
}

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
