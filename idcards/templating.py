import os

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .config import settings
from .schemas import BloodGroup
from .utils import get_flashed_messages, url_for

TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")

templates = Jinja2Templates(directory=TEMPLATE_DIR)


def render_template(request: Request, template_name: str, context: dict, status_code: int = 200):
    standard_context = {
        "config": settings,
        "url_for": lambda name, **params: url_for(request, name, **params),
        "get_flashed_messages": lambda with_categories=True: get_flashed_messages(
            request, with_categories=with_categories
        ),
        "blood_groups": BloodGroup.values(),
    }

    # Provided context takes precedence
    full_context = {**standard_context, **context}

    return templates.TemplateResponse(request, template_name, full_context, status_code=status_code)
