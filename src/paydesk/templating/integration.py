"""Build the kida environment the payment pages render with."""

from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from paydesk.config import AppConfig
from paydesk.templating.filters import BUILTIN_FILTERS
from paydesk.templating.returns import Template


def create_environment(config: AppConfig, globals_: dict[str, Any]) -> Environment:
    """One environment per app, built when it freezes.

    Pages in ``config.template_dir`` shadow the bundled ones of the same
    name. Autoreload follows ``config.debug``.
    """
    search = [PackageLoader("paydesk", "templates")]
    if config.template_dir is not None:
        search.insert(0, FileSystemLoader(str(config.template_dir)))

    env = Environment(
        loader=ChoiceLoader(search),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )
    env.update_filters(BUILTIN_FILTERS)
    for name, value in globals_.items():
        env.add_global(name, value)
    return env


def render_template(env: Environment, page: Template) -> str:
    return env.get_template(page.name).render(page.context)
