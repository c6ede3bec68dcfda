# crudfields/fields.py

import os
import re
import math
import logging
import posixpath
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from markupsafe import Markup

from .config import get_setting
from .exceptions import FieldConfigError, FieldValidationError
from .field_types import FieldType
from .form_field import BaseField, FileHandlerMixin, RelationalMixin
from .utils import check_upload, unique_filename
from .validation_rules import MESSAGES, Validator

logger = logging.getLogger(__name__)


def _parse_option(options, key, cast):
    """Reads and converts one tag option; missing or empty keys give None."""
    raw = options.get(key)
    if raw is None or raw == '':
        return None
    try:
        return cast(raw)
    except (TypeError, ValueError):
        raise FieldConfigError(f"Invalid value for '{key}': {raw!r}") from None


def _parse_list(raw):
    """'jpg, png' -> {'jpg', 'png'}"""
    return {part.strip().lower().lstrip('.') for part in raw.split(',') if part.strip()}


# ==========================================
# TEXT
# ==========================================

class TextField(BaseField):
    field_type = FieldType.TEXT
    template = 'text.html'

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.max_length = kwargs.get('max_length')
        self.placeholder = kwargs.get('placeholder', '')

    def configure(self, options):
        max_length = _parse_option(options, 'max_length', int)
        if max_length is not None:
            self.max_length = max_length
        if 'placeholder' in options:
            self.placeholder = options['placeholder']

    def validate(self, raw):
        Validator.check_length(raw, self.max_length)
        return raw

    def get_context(self, value):
        return {'max_length': self.max_length, 'placeholder': self.placeholder}


class TextAreaField(BaseField):
    field_type = FieldType.TEXTAREA
    template = 'textarea.html'

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.rows = kwargs.get('rows', 5)

    def configure(self, options):
        rows = _parse_option(options, 'rows', int)
        if rows is not None:
            self.rows = rows

    def get_context(self, value):
        return {'rows': self.rows}

    def render_string(self, value):
        # keep line breaks of multi-line text in list/detail views
        text = super().render_string(value)
        return Markup('<br>').join(text.splitlines())


# ==========================================
# NUMBERS
# ==========================================

class NumberField(BaseField):
    """Shared parts of IntField and FloatField"""

    template = 'number.html'
    cast = float
    default_step: Any = 'any'
    message_key = 'float'
    # what a browser number input posts; int()/float() alone also take '1_000' or '+5'
    pattern = re.compile(r'-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?')

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.min_val = kwargs.get('min_val')
        self.max_val = kwargs.get('max_val')
        self.step = kwargs.get('step', self.default_step)

    def configure(self, options):
        for key, attr in (('min', 'min_val'), ('max', 'max_val')):
            parsed = _parse_option(options, key, self.cast)
            if parsed is not None:
                setattr(self, attr, parsed)
        if options.get('step'):
            step = options['step']
            self.step = step if step == 'any' else _parse_option(options, 'step', self.cast)

    def validate(self, raw):
        raw = raw.strip()
        if not self.pattern.fullmatch(raw):
            raise FieldValidationError(MESSAGES[self.message_key])
        try:
            value = self.cast(raw)
        except ValueError:
            raise FieldValidationError(MESSAGES[self.message_key]) from None
        Validator.check_range(value, self.min_val, self.max_val)
        return value

    def get_context(self, value):
        return {'step': self.step, 'min': self.min_val, 'max': self.max_val}


class IntField(NumberField):
    field_type = FieldType.INT
    cast = int
    default_step = 1
    message_key = 'int'
    pattern = re.compile(r'-?\d+')


class FloatField(NumberField):
    field_type = FieldType.FLOAT

    def validate(self, raw):
        value = super().validate(raw)
        # float() accepts 'nan' and 'inf', which no database column wants
        if not math.isfinite(value):
            raise FieldValidationError(MESSAGES['float'])
        return value


# ==========================================
# BOOLEAN / CHOICES
# ==========================================

class BooleanField(BaseField):
    """
    Checkbox. An unchecked box posts nothing, so an empty raw value is a
    valid False rather than a missing value.
    """

    field_type = FieldType.BOOL
    template = 'checkbox.html'
    TRUE_VALUES = ('on', 'true', '1', 'yes', 'checked')

    def validate(self, raw):
        return raw.strip().lower() in self.TRUE_VALUES

    def render_string(self, value):
        return Markup(str(MESSAGES['yes'] if value else MESSAGES['no']))


class ChoiceField(BaseField):
    field_type = FieldType.CHOICE
    template = 'select.html'

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.choices: List[Tuple[str, str]] = list(kwargs.get('choices', []))

    def configure(self, options):
        """choices=draft:Draft,published:Published (labels optional)"""
        raw = options.get('choices')
        if not raw:
            return
        choices = []
        for item in raw.split(','):
            key, _, text = item.partition(':')
            key = key.strip()
            if not key:
                raise FieldConfigError(f"Invalid value for 'choices': {raw!r}")
            choices.append((key, text.strip() or key))
        self.choices = choices

    def validate(self, raw):
        if raw not in [str(key) for key, _ in self.choices]:
            raise FieldValidationError(MESSAGES['choice'])
        return raw

    def get_context(self, value):
        return {'choices': self.choices}

    def render_string(self, value):
        for key, text in self.choices:
            if str(key) == str(value):
                return super().render_string(text)
        return super().render_string(value)


# ==========================================
# DATE / TIME
# ==========================================

class TimeField(BaseField):
    field_type = FieldType.TIME
    template = 'text.html'
    DEFAULT_FORMAT = '%Y-%m-%dT%H:%M'

    # formats the browser has a native picker for
    INPUT_TYPES = {
        '%Y-%m-%dT%H:%M': 'datetime-local',
        '%Y-%m-%d': 'date',
        '%H:%M': 'time',
    }

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.format = kwargs.get('format', self.DEFAULT_FORMAT)

    def configure(self, options):
        if options.get('format'):
            self.format = options['format']

    def validate(self, raw):
        try:
            return datetime.strptime(raw.strip(), self.format)
        except ValueError:
            raise FieldValidationError(MESSAGES['time'].format(format=self.format)) from None

    def format_value(self, value):
        if isinstance(value, (date, datetime)):
            return value.strftime(self.format)
        return value

    def get_context(self, value):
        return {'input_type': self.INPUT_TYPES.get(self.format, 'text'), 'placeholder': self.format}

    def render_string(self, value):
        return super().render_string(self.format_value(value))


# ==========================================
# WEB
# ==========================================

class URLField(BaseField):
    field_type = FieldType.URL
    template = 'text.html'

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.schemes = tuple(kwargs.get('schemes', ('http', 'https')))

    def configure(self, options):
        if options.get('schemes'):
            self.schemes = tuple(sorted(_parse_list(options['schemes'])))

    def validate(self, raw):
        value = raw.strip()
        if not Validator.is_url(value, self.schemes):
            raise FieldValidationError(MESSAGES['url'])
        return value

    def get_context(self, value):
        return {'input_type': 'url', 'placeholder': 'https://'}

    def render_string(self, value):
        if not value:
            return Markup('')
        # never turn e.g. javascript: values into links
        if not Validator.is_url(str(value), self.schemes):
            return super().render_string(value)
        return Markup('<a href="{0}" target="_blank" rel="noopener">{0}</a>').format(value)


class FileField(FileHandlerMixin, BaseField):
    """
    Upload field. The stored value is the path of the saved file relative to
    UPLOAD_FOLDER; it is served from MEDIA_URL.
    """

    field_type = FieldType.FILE
    template = 'file.html'
    default_extensions: Optional[set] = None

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.upload_to = kwargs.get('upload_to', '')
        extensions = kwargs.get('extensions', self.default_extensions)
        self.extensions = set(extensions) if extensions else None
        self.max_size_mb = kwargs.get('max_size_mb')

    @property
    def upload_to(self) -> str:
        """Sub folder of UPLOAD_FOLDER, always relative and never leaving it"""
        return self._upload_to

    @upload_to.setter
    def upload_to(self, value: str) -> None:
        folder = (value or '').replace('\\', '/').strip('/')
        parts = [part for part in folder.split('/') if part not in ('', '.')]
        if '..' in parts or (parts and ':' in parts[0]):
            raise FieldConfigError(f"upload_to must stay inside the upload folder: {value!r}")
        self._upload_to = '/'.join(parts)

    def configure(self, options):
        if 'upload_to' in options:
            self.upload_to = options['upload_to']
        if options.get('extensions'):
            self.extensions = _parse_list(options['extensions'])
        max_size = _parse_option(options, 'max_size', float)
        if max_size is not None:
            self.max_size_mb = max_size

    def get_upload_folder(self) -> str:
        return os.path.join(get_setting('UPLOAD_FOLDER'), self.upload_to)

    def handle_file(self, upload) -> str:
        max_size_mb = self.max_size_mb if self.max_size_mb is not None else get_setting('MAX_FILE_SIZE_MB')
        is_safe, result = check_upload(upload, self.extensions, max_size_mb)
        if not is_safe:
            logger.warning(f"Upload for '{self.name}' rejected: {result}")
            raise FieldValidationError(result)

        folder = self.get_upload_folder()
        os.makedirs(folder, exist_ok=True)
        stored_name = unique_filename(result)
        upload.save(os.path.join(folder, stored_name))
        logger.info(f"Upload for '{self.name}' saved: {stored_name}")

        return posixpath.join(self.upload_to, stored_name) if self.upload_to else stored_name

    def file_url(self, value: str) -> str:
        return get_setting('MEDIA_URL').rstrip('/') + '/' + value.lstrip('/')

    def get_context(self, value):
        ctx: Dict[str, Any] = {'url': self.file_url(value) if value else ''}
        if self.extensions:
            ctx['accept'] = ','.join(f'.{ext}' for ext in sorted(self.extensions))
        return ctx

    def render_string(self, value):
        if not value:
            return Markup('')
        return Markup('<a href="{0}" target="_blank" rel="noopener">{1}</a>').format(
            self.file_url(value), posixpath.basename(value))


class ImageField(FileField):
    field_type = FieldType.IMAGE
    template = 'image.html'
    default_extensions = {'jpg', 'jpeg', 'png', 'gif', 'webp'}

    def render_string(self, value):
        if not value:
            return Markup('')
        return Markup('<img src="{0}" alt="{1}" class="img-thumbnail" style="max-height: 100px;">').format(
            self.file_url(value), posixpath.basename(value))


# ==========================================
# RELATIONS
# ==========================================

class ForeignKeyField(RelationalMixin, BaseField):
    """
    Points at a row of ``related_table`` by its integer id. The caller loads
    the related rows and hands them in with set_choices() before rendering;
    without choices a plain number input is shown.
    """

    field_type = FieldType.FOREIGN_KEY
    template = 'select.html'

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        super().__init__(name, label, **kwargs)
        self.choices: List[Tuple[Any, str]] = list(kwargs.get('choices', []))

    def configure(self, options):
        if options.get('table'):
            self.set_related_table(options['table'])
        if options.get('column'):
            self.set_list_column(options['column'])

    def set_choices(self, choices) -> 'ForeignKeyField':
        self.choices = list(choices)
        return self

    def validate(self, raw):
        raw = raw.strip()
        # with choices, the caller's keys decide (they may be slugs or uuids)
        if self.choices:
            for key, _ in self.choices:
                if str(key) == raw:
                    return key
            raise FieldValidationError(MESSAGES['foreign_key'])

        if not re.fullmatch(r'\d+', raw) or int(raw) <= 0:
            raise FieldValidationError(MESSAGES['foreign_key'])
        return int(raw)

    def render(self, value=None, error="", start_row=False):
        if self.choices:
            return super().render(value, error, start_row)
        ctx = {'step': 1, 'min': 1, 'max': None}
        return self.base_render('number.html', value, error, start_row, ctx)

    def get_context(self, value):
        return {'choices': self.choices}

    def render_string(self, value):
        for key, text in self.choices:
            if str(key) == str(value):
                return super().render_string(text)
        return super().render_string(value)
