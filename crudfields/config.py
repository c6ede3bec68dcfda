# crudfields/config.py

import os
from dotenv import load_dotenv
from flask import current_app, has_app_context

from .exceptions import FieldConfigError

load_dotenv()


class Config:
    """
    Default settings - can be overridden from .env or the Flask app config.
    Values are kept as given and converted in get_setting().
    """

    # ========================================
    # FILE UPLOADS
    # ========================================
    UPLOAD_FOLDER = os.environ.get('CRUDFIELDS_UPLOAD_FOLDER', 'uploads')
    MEDIA_URL = os.environ.get('CRUDFIELDS_MEDIA_URL', '/media/')
    MAX_FILE_SIZE_MB = os.environ.get('CRUDFIELDS_MAX_FILE_SIZE_MB', 10)

    # ========================================
    # LAYOUT
    # ========================================
    # Bootstrap grid width used when a field leaves width at 0
    DEFAULT_WIDTH = os.environ.get('CRUDFIELDS_DEFAULT_WIDTH', 12)


SETTING_TYPES = {
    'UPLOAD_FOLDER': str,
    'MEDIA_URL': str,
    'MAX_FILE_SIZE_MB': float,
    'DEFAULT_WIDTH': int,
}


def get_setting(key):
    """
    Returns a setting, preferring the active Flask app's config.

    Outside an application context (scripts, unit tests) the module
    defaults above are used. A value that does not convert to the
    setting's type raises FieldConfigError.
    """
    if has_app_context() and key in current_app.config:
        value = current_app.config[key]
    else:
        value = getattr(Config, key)

    try:
        return SETTING_TYPES[key](value)
    except (TypeError, ValueError):
        raise FieldConfigError(f"Invalid value for setting {key}: {value!r}") from None
