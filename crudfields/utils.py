# utils.py

import os
import uuid
import logging

import bleach
from werkzeug.utils import secure_filename

from .validation_rules import MESSAGES

logger = logging.getLogger(__name__)


HELP_ALLOWED_TAGS = frozenset(['b', 'i', 'u', 'em', 'strong', 'a', 'br', 'code', 'span'])
HELP_ALLOWED_ATTRS = {
    'a': ['href', 'title', 'target'],
    'span': ['class'],
}


def sanitize_html(content):
    """Strips scripts and unknown tags, keeping a small inline subset for help texts."""
    if not content:
        return ""
    return bleach.clean(str(content), tags=HELP_ALLOWED_TAGS, attributes=HELP_ALLOWED_ATTRS)


def file_extension(filename):
    """'Photo.JPG' -> 'jpg'"""
    return os.path.splitext(filename)[1].lower().lstrip('.')


def unique_filename(filename):
    """Prefixes a short random token so uploads never overwrite each other."""
    return f"{uuid.uuid4().hex[:8]}_{filename}"


def check_upload(file_storage, allowed_extensions=None, max_size_mb=10):
    """
    Checks an uploaded file in 3 steps:
    1. File name (after secure_filename)
    2. Extension
    3. Size

    Returns (True, safe_filename) or (False, error_message).
    """
    if not file_storage or not file_storage.filename:
        return False, MESSAGES['invalid_filename']

    # 1. File name
    filename = secure_filename(file_storage.filename)
    if not filename:
        return False, MESSAGES['invalid_filename']

    # 2. Extension
    if allowed_extensions:
        if file_extension(filename) not in allowed_extensions:
            allowed = ', '.join(sorted(allowed_extensions))
            return False, MESSAGES['file_type'].format(allowed=allowed)

    # 3. Size (rewind so the file can still be saved)
    stream = file_storage.stream
    stream.seek(0, os.SEEK_END)
    size_mb = stream.tell() / (1024 * 1024)
    stream.seek(0)

    if max_size_mb and size_mb > max_size_mb:
        return False, MESSAGES['file_size'].format(max=max_size_mb)

    return True, filename
