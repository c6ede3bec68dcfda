# tests/test_validation.py
import io
import os

import pytest

from crudfields import (
    BooleanField, FieldValidationError, FileField, ForeignKeyField, ImageField, IntField, TextField,
    validate, validate_fields,
)


def test_returns_validated_value(make_request):
    field = IntField(name='qty')
    assert validate(field, make_request({'qty': '12'})) == 12


def test_empty_required_field(make_request):
    with pytest.raises(FieldValidationError) as exc:
        validate(TextField(name='title'), make_request({'title': ''}))
    assert str(exc.value) == "This field can't be empty."


def test_missing_key_counts_as_empty(make_request):
    with pytest.raises(FieldValidationError):
        validate(TextField(name='title'), make_request({}))


def test_empty_blank_field_returns_empty_string(make_request):
    assert validate(TextField(name='title', blank=True), make_request({})) == ''


def test_empty_blank_null_field_returns_none(make_request):
    assert validate(TextField(name='title', blank=True, null=True), make_request({})) is None


def test_blank_policy_hides_conversion_error(make_request):
    # int('') fails, but an empty blank field is still accepted
    field = IntField(name='qty', blank=True, null=True)
    assert validate(field, make_request({'qty': ''})) is None


def test_conversion_error_is_raised(make_request):
    with pytest.raises(FieldValidationError) as exc:
        validate(IntField(name='qty', blank=True), make_request({'qty': 'many'}))
    assert str(exc.value) == 'Enter a whole number.'


def test_unchecked_checkbox_is_false_not_empty(make_request):
    field = BooleanField(name='active')
    assert validate(field, make_request({})) is False
    assert validate(field, make_request({'active': 'on'})) is True


def test_file_upload_is_saved(app, make_request):
    field = FileField(name='doc', upload_to='docs')
    request = make_request({'doc': (io.BytesIO(b'%PDF-1.4 test'), 'Annual Report.pdf')})

    stored = validate(field, request)

    assert stored.startswith('docs/')
    assert stored.endswith('_Annual_Report.pdf')
    path = os.path.join(app.config['UPLOAD_FOLDER'], stored)
    with open(path, 'rb') as f:
        assert f.read() == b'%PDF-1.4 test'


def test_new_upload_replaces_existing(app, make_request):
    field = FileField(name='doc')
    request = make_request({'doc': (io.BytesIO(b'new'), 'new.txt')})
    assert validate(field, request, existing='old.txt').endswith('_new.txt')


def test_existing_file_is_kept_without_upload(app, make_request):
    field = FileField(name='doc')
    assert validate(field, make_request({}), existing='docs/old.pdf') == 'docs/old.pdf'


def test_file_required_without_upload_or_existing(app, make_request):
    with pytest.raises(FieldValidationError):
        validate(FileField(name='doc'), make_request({}), existing=None)


def test_file_blank_null_without_upload(app, make_request):
    assert validate(FileField(name='doc', blank=True, null=True), make_request({})) is None


def test_upload_extension_rejected(app, make_request):
    field = ImageField(name='photo')
    request = make_request({'photo': (io.BytesIO(b'text'), 'notes.txt')})

    with pytest.raises(FieldValidationError) as exc:
        validate(field, request)
    assert 'File type not allowed' in str(exc.value)
    assert not os.path.exists(app.config['UPLOAD_FOLDER'])


def test_upload_size_rejected(app, make_request):
    field = FileField(name='doc', max_size_mb=0.001)
    request = make_request({'doc': (io.BytesIO(b'x' * 2048), 'big.bin')})

    with pytest.raises(FieldValidationError) as exc:
        validate(field, request)
    assert 'too large' in str(exc.value)


def test_validate_fields_collects_values_and_errors(make_request):
    fields = [
        TextField(name='title'),
        IntField(name='qty'),
        BooleanField(name='active'),
        TextField(name='note', blank=True, null=True),
    ]
    request = make_request({'title': 'Desk', 'qty': 'lots'})

    values, errors = validate_fields(fields, request)

    assert values == {'title': 'Desk', 'active': False, 'note': None}
    assert errors == {'qty': 'Enter a whole number.'}


def test_validate_fields_passes_existing_values(app, make_request):
    values, errors = validate_fields([FileField(name='doc')], make_request({}), existing={'doc': 'a.pdf'})
    assert values == {'doc': 'a.pdf'}
    assert errors == {}


def test_empty_upload_part_keeps_existing(app, make_request):
    # an untouched file input posts a part with an empty filename
    request = make_request({'doc': (io.BytesIO(b''), '')})
    assert validate(FileField(name='doc'), request, existing='old.pdf') == 'old.pdf'
    assert not os.path.exists(app.config['UPLOAD_FOLDER'])


def test_upload_is_saved_inside_upload_folder(app, make_request, tmp_path):
    field = FileField(name='doc', upload_to=str(tmp_path / 'outside'))
    request = make_request({'doc': (io.BytesIO(b'data'), 'a.txt')})

    stored = validate(field, request)

    assert not os.path.isabs(stored)
    assert not (tmp_path / 'outside').exists()
    assert os.path.isfile(os.path.join(app.config['UPLOAD_FOLDER'], stored))


def test_foreign_key_string_choices_in_form(make_request):
    field = ForeignKeyField(name='author').set_choices([('a1b2', 'Orhan')])

    values, errors = validate_fields([field], make_request({'author': '3'}))
    assert values == {}
    assert errors == {'author': 'Select a valid related record.'}

    values, errors = validate_fields([field], make_request({'author': 'a1b2'}))
    assert values == {'author': 'a1b2'}
    assert errors == {}
