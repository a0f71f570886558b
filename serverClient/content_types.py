"""
Static extension -> MIME type table
Deterministic on every platform, unlike mimetypes which reads the host's
mime.types files.
"""

import os

FALLBACK_TYPE = 'application/octet-stream'

CONTENT_TYPES = {
    # Text
    '.html': 'text/html',
    '.htm': 'text/html',
    '.css': 'text/css',
    '.txt': 'text/plain',
    '.csv': 'text/csv',
    '.md': 'text/markdown',
    '.xml': 'application/xml',
    # Scripts / data
    '.js': 'text/javascript',
    '.mjs': 'text/javascript',
    '.json': 'application/json',
    '.map': 'application/json',
    '.wasm': 'application/wasm',
    # Images
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.svg': 'image/svg+xml',
    '.ico': 'image/x-icon',
    '.webp': 'image/webp',
    '.bmp': 'image/bmp',
    # Fonts
    '.woff': 'font/woff',
    '.woff2': 'font/woff2',
    '.ttf': 'font/ttf',
    '.otf': 'font/otf',
    # Audio / video
    '.mp3': 'audio/mpeg',
    '.wav': 'audio/wav',
    '.ogg': 'audio/ogg',
    '.mp4': 'video/mp4',
    '.webm': 'video/webm',
    # Documents / archives
    '.pdf': 'application/pdf',
    '.zip': 'application/zip',
    '.gz': 'application/gzip',
    '.tar': 'application/x-tar',
}


def content_type_for(path):
    """Look up the MIME type for a file name by its (case-insensitive) extension."""
    ext = os.path.splitext(path)[1].lower()
    return CONTENT_TYPES.get(ext, FALLBACK_TYPE)
