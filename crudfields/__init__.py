"""
crudfields
Field type registry for rendering and validating admin CRUD form inputs
"""

from .field_types import FieldType
from .exceptions import FieldValidationError, FieldConfigError, FieldRegistryError
from .form_field import BaseField, FileHandlerMixin, RelationalMixin
from .fields import (
    TextField,
    TextAreaField,
    IntField,
    FloatField,
    BooleanField,
    ChoiceField,
    TimeField,
    URLField,
    FileField,
    ImageField,
    ForeignKeyField,
)
from .registry import register_custom, get_custom, create_field, field_for_type, parse_tag
from .validation import validate, validate_fields
from .form_layout import render_fields, render_row_strings
from .templates import register_template
from .config import Config

__all__ = [
    'FieldType',
    'FieldValidationError',
    'FieldConfigError',
    'FieldRegistryError',
    'BaseField',
    'FileHandlerMixin',
    'RelationalMixin',
    'TextField',
    'TextAreaField',
    'IntField',
    'FloatField',
    'BooleanField',
    'ChoiceField',
    'TimeField',
    'URLField',
    'FileField',
    'ImageField',
    'ForeignKeyField',
    'register_custom',
    'get_custom',
    'create_field',
    'field_for_type',
    'parse_tag',
    'validate',
    'validate_fields',
    'render_fields',
    'render_row_strings',
    'register_template',
    'Config',
]

__version__ = '0.4.0'
