# crudfields/templates.py
"""
Built-in Jinja2 templates for field inputs and the shared field wrapper.

Every field template receives the context built by BaseField.base_render
(name, label, value, error, help, blank, width, startrow) plus whatever the
field adds in get_context().
"""

from jinja2 import Environment, DictLoader, Template

FIELD_WRAPPER = 'field_wrapper.html'

TEMPLATES = {
    FIELD_WRAPPER: '''
{% if startrow %}</div><div class="row">{% endif %}
<div class="col-sm-{{ width }}">
    <div class="form-group">
        <label for="{{ name }}">{{ label }}{% if not blank %} *{% endif %}</label>
        {{ field }}
        {% if help %}<p class="help-block">{{ help }}</p>{% endif %}
        {% if error %}<p class="text-danger">{{ error }}</p>{% endif %}
    </div>
</div>
''',

    'text.html': (
        '<input id="{{ name }}" name="{{ name }}" type="{{ input_type|default("text") }}" value="{{ value }}"'
        '{% if max_length %} maxlength="{{ max_length }}"{% endif %}'
        '{% if placeholder %} placeholder="{{ placeholder }}"{% endif %}'
        ' class="form-control">'
    ),

    'textarea.html': (
        '<textarea id="{{ name }}" name="{{ name }}" rows="{{ rows }}" class="form-control">{{ value }}</textarea>'
    ),

    'number.html': (
        '<input id="{{ name }}" name="{{ name }}" type="number" step="{{ step }}"'
        '{% if min is not none %} min="{{ min }}"{% endif %}'
        '{% if max is not none %} max="{{ max }}"{% endif %}'
        ' value="{{ value }}" class="form-control">'
    ),

    'checkbox.html': (
        '<div class="checkbox">'
        '<input id="{{ name }}" name="{{ name }}" type="checkbox" value="on"{% if value %} checked{% endif %}>'
        '</div>'
    ),

    'select.html': '''
<select id="{{ name }}" name="{{ name }}" class="form-control">
    {% if blank %}<option value="">---------</option>{% endif %}
    {% for key, text in choices %}
    <option value="{{ key }}"{% if key|string == value|string %} selected{% endif %}>{{ text }}</option>
    {% endfor %}
</select>
''',

    'file.html': '''
{% if value %}<p class="form-control-static">
    <a href="{{ url }}" target="_blank" rel="noopener">{{ value }}</a>
</p>{% endif %}
<input id="{{ name }}" name="{{ name }}" type="file"{% if accept %} accept="{{ accept }}"{% endif %}>
''',

    'image.html': '''
{% if value %}<p class="form-control-static">
    <img src="{{ url }}" alt="{{ value }}" class="img-thumbnail" style="max-height: 150px;">
</p>{% endif %}
<input id="{{ name }}" name="{{ name }}" type="file" accept="{{ accept|default("image/*") }}">
''',
}

env = Environment(loader=DictLoader(TEMPLATES), autoescape=True, trim_blocks=True, lstrip_blocks=True)


def register_template(name, source):
    """Adds (or replaces) a named template, e.g. for a custom field type."""
    TEMPLATES[name] = source
    return env.get_template(name)


def get_template(template):
    """Accepts a template name or an already compiled jinja2.Template"""
    if isinstance(template, Template):
        return template
    return env.get_template(template)
