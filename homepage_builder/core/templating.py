"""
Template Environment
====================

Jinja2 environments for the text templates shipped with the package.
Templates produce prompts, CSS and HTML documents whose content is passed
through verbatim, so autoescaping is disabled.
"""

from functools import lru_cache
from pathlib import Path

import jinja2


@lru_cache(maxsize=None)
def get_environment(template_dir: Path) -> jinja2.Environment:
    """Get a cached Jinja2 environment for a template directory."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(template_dir: Path, name: str, **context: object) -> str:
    """Render a named template with the given context."""
    return get_environment(template_dir).get_template(name).render(**context)
