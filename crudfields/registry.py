# crudfields/registry.py
"""
Custom field registry.

Named field prototypes that model definitions can refer to by name
(e.g. ``create_field('url', 'homepage')``). Callers extend it with
register_custom(); names are unique.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from .exceptions import FieldConfigError, FieldRegistryError
from .field_types import FieldType
from .fields import (
    BooleanField, ChoiceField, FileField, FloatField, ForeignKeyField,
    ImageField, IntField, TextAreaField, TextField, TimeField, URLField,
)
from .form_field import BaseField

logger = logging.getLogger(__name__)


BUILTIN_FIELDS = {
    FieldType.TEXT: TextField,
    FieldType.TEXTAREA: TextAreaField,
    FieldType.INT: IntField,
    FieldType.FLOAT: FloatField,
    FieldType.BOOL: BooleanField,
    FieldType.CHOICE: ChoiceField,
    FieldType.TIME: TimeField,
    FieldType.URL: URLField,
    FieldType.FILE: FileField,
    FieldType.IMAGE: ImageField,
    FieldType.FOREIGN_KEY: ForeignKeyField,
}

# default field for a model column's python type
TYPE_FIELDS = {
    str: TextField,
    int: IntField,
    float: FloatField,
    bool: BooleanField,
    datetime: TimeField,
    date: TimeField,
}

_custom_fields: Dict[str, BaseField] = {
    'url': URLField(),
    'file': FileField(),
    'image': ImageField(),
}


def register_custom(name: str, field: BaseField) -> None:
    if name in _custom_fields:
        raise FieldRegistryError(f"A field with the name {name} already exists.")

    if not isinstance(field, BaseField) or field.attrs() is None:
        raise FieldRegistryError("Add a BaseField and other initial values if needed before registering.")

    _custom_fields[name] = field
    logger.debug(f"Custom field registered: {name} ({type(field).__name__})")


def get_custom(name: str) -> Optional[BaseField]:
    return _custom_fields.get(name)


def field_for_type(python_type: type) -> type:
    """bool is checked before int because bool is an int subclass."""
    for base in (bool, datetime, date, int, float, str):
        if issubclass(python_type, base):
            return TYPE_FIELDS[base]
    raise FieldRegistryError(f"No default field for type {python_type.__name__}.")


# ==========================================
# TAG PARSING
# ==========================================

# tag key -> (BaseField attribute, converter)
BASE_TAG_KEYS = {
    'label': ('label', str),
    'help': ('help', str),
    'column': ('column_name', str),
    'default': ('default_value', str),
    'relation': ('relation_table', str),
    'width': ('width', int),
    'blank': ('blank', bool),
    'null': ('null', bool),
    'list': ('list', bool),
    'search': ('searchable', bool),
    'searchable': ('searchable', bool),
    'right': ('right', bool),
}

FALSE_FLAGS = ('false', '0', 'no', 'off')


def parse_tag(tag: str) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Splits a model tag into BaseField attributes and field options.

        parse_tag("label=Price;width=4;blank;null;min=0;step=0.01")
        -> ({'label': 'Price', 'width': 4, 'blank': True, 'null': True},
            {'min': '0', 'step': '0.01'})

    Bare keys are flags (True). Unknown keys are passed to Field.configure().
    """
    attrs: Dict[str, Any] = {}
    options: Dict[str, str] = {}

    for part in (tag or '').split(';'):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition('=')
        key, value = key.strip(), value.strip()
        if not key:
            raise FieldConfigError(f"Invalid tag segment: {part!r}")

        if key not in BASE_TAG_KEYS:
            options[key] = value if sep else 'true'
            continue

        attr, convert = BASE_TAG_KEYS[key]
        if convert is bool:
            attrs[attr] = not sep or value.lower() not in FALSE_FLAGS
        elif convert is int:
            try:
                attrs[attr] = int(value)
            except ValueError:
                raise FieldConfigError(f"Invalid value for '{key}': {value!r}") from None
        else:
            attrs[attr] = value

    return attrs, options


def create_field(kind, name: str, tag: Optional[str] = None, **attrs: Any) -> BaseField:
    """
    Builds a field for one model column.

    ``kind`` is a registered custom name or a FieldType (value). Registered
    prototypes are copied, so per-model changes never leak into the registry.
    """
    if isinstance(kind, FieldType):
        kind = kind.value

    prototype = get_custom(kind)
    if prototype is not None:
        field = prototype.copy()
    else:
        try:
            field = BUILTIN_FIELDS[FieldType(kind)]()
        except ValueError:
            raise FieldRegistryError(f"Unknown field type: {kind}") from None

    tag_attrs, options = parse_tag(tag) if tag else ({}, {})
    tag_attrs.update(attrs)
    field.update(name=name, **tag_attrs)
    if not field.label:
        field.label = name.replace('_', ' ').capitalize()
    if not field.column_name:
        field.column_name = name

    field.configure(options)
    return field
