# crudfields/exceptions.py

from wtforms.validators import ValidationError


class FieldValidationError(ValidationError):
    """Raw form input could not be turned into a value for the field."""


class FieldConfigError(ValueError):
    """A field option (usually parsed from a model tag) is malformed."""


class FieldRegistryError(ValueError):
    pass
