"""
Private Jinja2 Template Loader for MODGEN

This module provides the Jinja2 environment used to render TypeScript
artifacts. All template settings are centralized here.

IMPORTANT: This is a private module (prefixed with underscore) and should
only be imported by the renderer and use-case generator.
"""

from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined


TEMPLATES_DIR = Path(__file__).parent / "templates"


def ts_property(field) -> str:
    """Render a field as a TypeScript property line: ``qty?: number;``"""
    marker = "" if field.required else "?"
    return f"{field.name}{marker}: {field.type};"


def prop_options(field) -> str:
    """Arguments of the mongoose @Prop() decorator for a field."""
    return "{ required: true }" if field.required else ""


# Output is TypeScript, so HTML autoescaping would corrupt generics like Array<string>
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    auto_reload=False,
    undefined=StrictUndefined,  # Fail loudly on undefined variables
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

jinja_env.policies['ext.i18n.striped'] = True

jinja_env.filters['ts_property'] = ts_property
jinja_env.filters['prop_options'] = prop_options

# Templates only need a handful of harmless builtins
jinja_env.globals.clear()
jinja_env.globals.update({
    'range': range,
    'len': len,
    'str': str,
    'enumerate': enumerate,
})

__all__ = ['jinja_env', 'TEMPLATES_DIR']
