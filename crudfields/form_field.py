# crudfields/form_field.py

import copy
import logging
from typing import Any, Dict, Optional

from jinja2 import TemplateError
from markupsafe import Markup, escape

from .config import get_setting
from .exceptions import FieldConfigError
from .templates import FIELD_WRAPPER, get_template
from .utils import sanitize_html

logger = logging.getLogger(__name__)


class BaseField:
    """
    Shared state and default behaviour of every field type.

    Concrete types set ``field_type`` and ``template`` and override
    ``validate`` / ``render_string`` / ``get_context`` as needed. A field
    instance holds configuration only; the value being edited is always
    passed in, so one instance can render and validate any number of records.
    """

    field_type = None
    template = None

    def __init__(self, name: str = "", label: str = "", **kwargs: Any) -> None:
        self.name = name
        self.label = label
        self.default_value = kwargs.get('default_value')
        self.blank = kwargs.get('blank', False)
        self.null = kwargs.get('null', False)
        self.column_name = kwargs.get('column_name', '')
        self.list = kwargs.get('list', False)
        self.searchable = kwargs.get('searchable', False)
        self.width = kwargs.get('width', 0)
        self.right = kwargs.get('right', False)
        self.help = kwargs.get('help', '')
        self.relation_table = kwargs.get('relation_table', '')

    def __repr__(self):
        return f"<{type(self).__name__} name={self.name!r}>"

    # --- CONTRACT ---

    def configure(self, options: Dict[str, str]) -> None:
        """Applies field specific options. The base field has none."""
        return None

    def validate(self, raw: str) -> Any:
        return raw

    def render_string(self, value: Any) -> Markup:
        if value is None:
            return Markup('')
        return escape(str(value))

    def attrs(self) -> 'BaseField':
        return self

    def render(self, value: Any = None, error: Any = "", start_row: bool = False) -> Markup:
        if self.template is None:
            raise NotImplementedError(f"{type(self).__name__} has no input template.")
        return self.base_render(self.template, self.format_value(value), error, start_row, self.get_context(value))

    # --- RENDER HELPERS ---

    def format_value(self, value: Any) -> Any:
        """Value as it should appear inside the input element"""
        return value

    def get_context(self, value: Any) -> Dict[str, Any]:
        """Extra template variables for the field's own template"""
        return {}

    def base_render(self, template, value: Any, error: Any = "", start_row: bool = False,
                    ctx: Optional[Dict[str, Any]] = None) -> Markup:
        if ctx is None:
            ctx = {}
        ctx['label'] = self.label
        ctx['blank'] = self.blank
        ctx['name'] = self.name
        ctx['value'] = '' if value is None else value
        ctx['error'] = str(error) if error else ''
        ctx['help'] = Markup(sanitize_html(self.help)) if self.help else ''
        ctx['startrow'] = start_row
        if not self.width:
            self.width = get_setting('DEFAULT_WIDTH')
        ctx['width'] = self.width

        try:
            ctx['field'] = Markup(get_template(template).render(ctx))
            return Markup(get_template(FIELD_WRAPPER).render(ctx))
        except TemplateError as e:
            logger.error(f"Field '{self.name}' could not be rendered: {e}")
            return Markup('')

    # --- BUILDER METHODS ---

    def update(self, **attrs: Any) -> 'BaseField':
        """Sets known attributes, rejecting typos."""
        for key, value in attrs.items():
            if not hasattr(self, key):
                raise FieldConfigError(f"{type(self).__name__} has no attribute '{key}'.")
            setattr(self, key, value)
        return self

    def copy(self, **overrides: Any) -> 'BaseField':
        """Independent copy of a (registered) prototype"""
        return copy.deepcopy(self).update(**overrides)


class FileHandlerMixin:
    """Fields that receive a multipart upload instead of a plain form value."""

    def handle_file(self, upload) -> str:
        """Stores the upload and returns the value to validate (usually the stored file name)."""
        raise NotImplementedError


class RelationalMixin:
    """Fields pointing at rows of another table."""

    related_table = ''
    list_column = ''
    model_slug = ''

    def set_related_table(self, table: str) -> 'RelationalMixin':
        self.related_table = table
        return self

    def get_related_table(self) -> str:
        return self.related_table

    def set_list_column(self, column: str) -> 'RelationalMixin':
        self.list_column = column
        return self

    def get_list_column(self) -> str:
        return self.list_column

    def set_model_slug(self, slug: str) -> 'RelationalMixin':
        self.model_slug = slug
        return self

    def get_model_slug(self) -> str:
        return self.model_slug

    def get_relation_table(self) -> str:
        return self.attrs().relation_table
