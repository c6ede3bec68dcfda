# tests/test_registry.py
from datetime import date, datetime

import pytest

from crudfields import (
    BaseField, BooleanField, FieldConfigError, FieldRegistryError, FieldType, FileField,
    ImageField, IntField, TextField, TimeField, URLField, create_field, field_for_type,
    get_custom, parse_tag, register_custom, register_template,
)


class ColorField(BaseField):
    template = register_template(
        'color.html', '<input id="{{ name }}" name="{{ name }}" type="color" value="{{ value }}">')


def test_builtin_custom_fields():
    assert isinstance(get_custom('url'), URLField)
    assert isinstance(get_custom('file'), FileField)
    assert isinstance(get_custom('image'), ImageField)
    assert get_custom('missing') is None


def test_register_and_get(isolated_registry):
    color = ColorField()
    register_custom('color', color)

    assert get_custom('color') is color
    html = create_field('color', 'background').render('#ff0000')
    assert 'type="color"' in html
    assert 'value="#ff0000"' in html


def test_register_duplicate_name(isolated_registry):
    with pytest.raises(FieldRegistryError) as exc:
        register_custom('url', URLField())
    assert str(exc.value) == 'A field with the name url already exists.'


def test_register_requires_base_field(isolated_registry):
    with pytest.raises(FieldRegistryError) as exc:
        register_custom('thing', object())
    assert 'Add a BaseField' in str(exc.value)
    assert get_custom('thing') is None


def test_register_rejects_missing_attrs(isolated_registry):
    class Broken(BaseField):
        def attrs(self):
            return None

    with pytest.raises(FieldRegistryError):
        register_custom('broken', Broken())


def test_create_field_copies_prototype():
    field = create_field('url', 'homepage', tag='label=Home page;blank;width=6')

    assert isinstance(field, URLField)
    assert field is not get_custom('url')
    assert field.name == 'homepage'
    assert field.label == 'Home page'
    assert field.blank is True
    assert field.width == 6
    assert get_custom('url').name == ''


def test_create_builtin_field_with_options():
    field = create_field('int', 'qty', tag='min=1;max=5;list;search')

    assert isinstance(field, IntField)
    assert field.min_val == 1 and field.max_val == 5
    assert field.list is True and field.searchable is True
    assert field.column_name == 'qty'


def test_create_field_from_enum_and_defaults():
    field = create_field(FieldType.TEXT, 'first_name', help='Given name')
    assert isinstance(field, TextField)
    assert field.label == 'First name'
    assert field.help == 'Given name'


def test_create_field_unknown_kind():
    with pytest.raises(FieldRegistryError):
        create_field('nope', 'x')


def test_parse_tag():
    attrs, options = parse_tag('label=Price; width=4;blank;null=false;min=0;readonly')

    assert attrs == {'label': 'Price', 'width': 4, 'blank': True, 'null': False}
    assert options == {'min': '0', 'readonly': 'true'}


def test_parse_tag_errors():
    with pytest.raises(FieldConfigError):
        parse_tag('width=wide')
    with pytest.raises(FieldConfigError):
        parse_tag('=5')
    assert parse_tag('') == ({}, {})


@pytest.mark.parametrize('python_type, field_class', [
    (str, TextField),
    (int, IntField),
    (bool, BooleanField),
    (datetime, TimeField),
    (date, TimeField),
])
def test_field_for_type(python_type, field_class):
    assert field_for_type(python_type) is field_class


def test_field_for_unknown_type():
    with pytest.raises(FieldRegistryError):
        field_for_type(list)
