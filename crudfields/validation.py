# crudfields/validation.py

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from .exceptions import FieldValidationError
from .form_field import BaseField, FileHandlerMixin
from .validation_rules import MESSAGES

logger = logging.getLogger(__name__)


def validate(field: BaseField, request, existing: Any = None) -> Any:
    """
    Validates one field of a submitted form.

    Args:
        field: the field to validate
        request: anything with ``.form`` and ``.files`` (Flask/werkzeug Request)
        existing: the currently stored value; file fields keep it when no new
            file was uploaded

    Returns the typed value, ``None`` for empty nullable fields or ``""`` for
    empty blank fields. Raises FieldValidationError otherwise.
    """
    field_name = field.attrs().name
    raw_value = request.form.get(field_name, '')

    # File fields: a new upload wins, otherwise keep the stored file
    if isinstance(field, FileHandlerMixin):
        upload = request.files.get(field_name)
        if upload is not None and upload.filename:
            raw_value = field.handle_file(upload)
        elif isinstance(existing, str):
            raw_value = existing

    error: Optional[FieldValidationError] = None
    try:
        value = field.validate(raw_value)
    except FieldValidationError as e:
        value, error = None, e

    # An unchecked checkbox posts nothing, so a bool result is never "empty"
    if len(raw_value) == 0 and not isinstance(value, bool):
        if field.attrs().blank:
            if field.attrs().null:
                return None
            return raw_value
        raise FieldValidationError(MESSAGES['required'])

    if error is not None:
        raise error
    return value


def validate_fields(fields: Iterable[BaseField], request,
                    existing: Optional[Dict[str, Any]] = None) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Runs validate() for every field.

    Returns (values, errors); both are keyed by field name and a field is
    in exactly one of them.
    """
    existing = existing or {}
    values: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    for field in fields:
        name = field.attrs().name
        try:
            values[name] = validate(field, request, existing.get(name))
        except FieldValidationError as e:
            errors[name] = str(e)

    if errors:
        logger.debug(f"Form validation failed for: {', '.join(errors)}")
    return values, errors
