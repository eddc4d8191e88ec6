"""HTML page rendering with jinja2 templates.

The chart page inlines the annotated SVG and carries the tooltip element and
the small script that drives it; the error page is shown in its place when the
dataset cannot be loaded.
"""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, select_autoescape


PAGE_TEMPLATE = "heatmap.html.j2"
ERROR_TEMPLATE = "error.html.j2"


@lru_cache(maxsize=1)
def _template_env() -> Environment:
    return Environment(
        loader=PackageLoader("temp_heatmap", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html", "j2")),
        keep_trailing_newline=True,
    )


def render_page(svg: str, title: str, description: str) -> str:
    """Render the interactive chart page.

    Parameters
    ----------
    svg : str
        Annotated ``<svg>`` markup, inserted verbatim.
    title : str
        Page heading and ``<title>``.
    description : str
        Sub-heading shown under the title.

    Returns
    -------
    str
        Complete HTML document.
    """
    template = _template_env().get_template(PAGE_TEMPLATE)
    return template.render(svg=svg, title=title, description=description)


def render_error_page(title: str, message: str) -> str:
    """Render the page shown when the chart cannot be produced."""
    template = _template_env().get_template(ERROR_TEMPLATE)
    return template.render(title=title, message=message)
