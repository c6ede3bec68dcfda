# crudfields/form_layout.py

from typing import Any, Dict, Iterable, Optional

from markupsafe import Markup

from .config import get_setting
from .form_field import BaseField

GRID_COLUMNS = 12


def render_fields(fields: Iterable[BaseField], values: Optional[Dict[str, Any]] = None,
                  errors: Optional[Dict[str, Any]] = None) -> Markup:
    """
    Renders fields in order on a Bootstrap grid.

    A new row is started whenever the next field would not fit into the
    12 columns left in the current one; the field wrapper closes the open
    row and opens a new one.
    """
    values = values or {}
    errors = errors or {}
    default_width = get_setting('DEFAULT_WIDTH')

    html_parts = [Markup('<div class="row">')]
    used = 0
    for field in fields:
        width = field.width or default_width
        start_row = used > 0 and used + width > GRID_COLUMNS
        if start_row:
            used = 0
        used += width

        value = values.get(field.name, field.default_value)
        html_parts.append(field.render(value, errors.get(field.name, ''), start_row))
    html_parts.append(Markup('</div>'))

    return Markup('\n').join(html_parts)


def render_row_strings(fields: Iterable[BaseField], record: Dict[str, Any]) -> Dict[str, Markup]:
    """Read-only representation of one record, e.g. for a list view row"""
    return {field.name: field.render_string(record.get(field.name)) for field in fields}
