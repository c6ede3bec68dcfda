# crudfields/validation_rules.py

from urllib.parse import urlsplit
from typing import Optional, Iterable

from flask_babel import lazy_gettext as _l

from .exceptions import FieldValidationError


MESSAGES = {
    'required': _l("This field can't be empty."),
    'max_length': _l('Enter at most {max} characters.'),
    'int': _l('Enter a whole number.'),
    'float': _l('Enter a number.'),
    'min_val': _l('Value must be {min} or greater.'),
    'max_val': _l('Value must be {max} or smaller.'),
    'time': _l('Enter a date/time in the format {format}.'),
    'url': _l('Enter a valid web address.'),
    'choice': _l('Select a valid choice.'),
    'foreign_key': _l('Select a valid related record.'),
    'invalid_filename': _l('Invalid file name.'),
    'file_type': _l('File type not allowed (allowed: {allowed}).'),
    'file_size': _l('File is too large (max: {max}MB).'),
    'yes': _l('Yes'),
    'no': _l('No'),
}


class Validator:
    """
    Shared checks used by the concrete field types.
    Every check raises FieldValidationError with a user facing message.
    """

    @staticmethod
    def check_length(value: str, max_length: Optional[int]) -> None:
        if max_length and len(value) > max_length:
            raise FieldValidationError(MESSAGES['max_length'].format(max=max_length))

    @staticmethod
    def check_range(value, min_val=None, max_val=None) -> None:
        """Numeric bounds, both inclusive"""
        if min_val is not None and value < min_val:
            raise FieldValidationError(MESSAGES['min_val'].format(min=min_val))
        if max_val is not None and value > max_val:
            raise FieldValidationError(MESSAGES['max_val'].format(max=max_val))

    @staticmethod
    def is_url(value: str, schemes: Iterable[str] = ('http', 'https')) -> bool:
        """Absolute URL with an allowed scheme and a host"""
        if not value or any(c.isspace() for c in value):
            return False
        try:
            parts = urlsplit(value)
        except ValueError:
            # e.g. malformed IPv6 host
            return False
        return parts.scheme.lower() in schemes and bool(parts.netloc)
