"""
Configuration for the static file server
Defaults live here as constants; ServerConfig is built once at startup
from the positional command line parameters and never changes after that.
"""

import os
from typing import List, NamedTuple

# Define host ip and default port
HOST = '0.0.0.0'
DEFAULT_PORT = 3000
DEFAULT_BASE_DIR = '.'

# Document served for directory-style requests
DEFAULT_DOCUMENT = 'index.html'

# Transfer buffer for streaming file bodies
BUFFER_SIZE = 8192

# Largest request header block we will read
MAX_HEADER_BYTES = 16384


def parse_port(value) -> int:
    """
    Parse a port argument, falling back to DEFAULT_PORT when the value is
    missing, non-numeric or outside 0-65535.
    """
    try:
        port = int(value)
    except (TypeError, ValueError):
        return DEFAULT_PORT

    if port < 0 or port > 65535:
        return DEFAULT_PORT
    return port


class ServerConfig(NamedTuple):
    """Immutable settings handed to StaticFileServer at construction."""
    root: str
    port: int = DEFAULT_PORT
    host: str = HOST
    buffer_size: int = BUFFER_SIZE
    follow_symlinks: bool = False

    @classmethod
    def build(cls, base_dir=DEFAULT_BASE_DIR, port=DEFAULT_PORT, **kwargs):
        """Normalize base_dir to an absolute canonical root."""
        root = os.path.realpath(os.path.abspath(base_dir))
        return cls(root=root, port=port, **kwargs)

    @classmethod
    def from_args(cls, argv: List[str]):
        """
        Build from positional arguments: [port] [base_dir].

        Args:
            argv: Arguments without the program name

        Returns:
            ServerConfig with defaults applied
        """
        port = parse_port(argv[0]) if len(argv) > 0 else DEFAULT_PORT
        base_dir = argv[1] if len(argv) > 1 else DEFAULT_BASE_DIR
        return cls.build(base_dir, port)
