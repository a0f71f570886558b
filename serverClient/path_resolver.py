"""
Path resolver for the static file server
Maps an untrusted request path onto a regular file under the root directory.
Anything that is not such a file is rejected with one of the Rejection
subclasses below; the caller turns all of them into the same 404.
"""

import os
import stat

from server_config import DEFAULT_DOCUMENT


class Rejection(Exception):
    """Base class for every reason a request path cannot be served"""
    def __init__(self, request_path):
        super().__init__(request_path)
        self.request_path = request_path


class OutsideRoot(Rejection):
    """Normalized path escapes the root directory"""


class NotFound(Rejection):
    """Nothing (or nothing servable) exists at the path"""


class IsDirectory(Rejection):
    """Path names a directory"""


def is_within(root, path):
    """True if path is root itself or one of its descendants."""
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:
        # Different drives on Windows
        return False


def resolve(root, request_path, follow_symlinks=False):
    """
    Resolve a decoded request path against root.

    Args:
        root: Absolute normalized root directory
        request_path: Path component of the request target, already
            percent-decoded
        follow_symlinks: When False every symlink is resolved before the
            containment check, so links pointing outside root are rejected.
            When True only '.' and '..' are collapsed and links are followed
            wherever they lead.

    Returns:
        Normalized path of an existing regular file inside root

    Raises:
        OutsideRoot, NotFound, IsDirectory
    """
    if '\x00' in request_path:
        raise NotFound(request_path)

    # Directory-style request gets the default document
    relative = request_path
    if relative == '' or relative.endswith('/'):
        relative += DEFAULT_DOCUMENT

    joined = os.path.join(root, relative.lstrip('/'))

    if follow_symlinks:
        candidate = os.path.normpath(joined)
    else:
        candidate = os.path.realpath(joined)

    if not is_within(root, candidate):
        raise OutsideRoot(request_path)

    try:
        mode = os.stat(candidate).st_mode
    except OSError:
        # Missing, dangling link, symlink loop or unsearchable parent
        raise NotFound(request_path)

    if stat.S_ISDIR(mode):
        raise IsDirectory(request_path)
    if not stat.S_ISREG(mode):
        raise NotFound(request_path)

    return candidate
