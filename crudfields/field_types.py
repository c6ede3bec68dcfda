"""
Field Types Enum
Built-in field kinds understood by the registry
"""

from enum import Enum


class FieldType(Enum):
    """Form field kinds - one per concrete field class"""

    # Text inputs
    TEXT = "text"
    TEXTAREA = "textarea"

    # Numbers
    INT = "int"
    FLOAT = "float"

    # Choice / checkbox
    BOOL = "bool"
    CHOICE = "choice"

    # Date and time
    TIME = "time"

    # Web inputs
    URL = "url"
    FILE = "file"
    IMAGE = "image"

    # Relations
    FOREIGN_KEY = "foreign_key"
