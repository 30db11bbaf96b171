"""
helpers module.
"""
from urllib.parse import quote

from config.settings import config
from services.export.render_backend import PlaywrightRenderBackend, RenderBackend


def get_render_backend() -> RenderBackend:
    """
    Dependency returning the render backend used by export and preview.

    Overridden in tests with a fake backend.
    """
    return PlaywrightRenderBackend.from_config(config)


def content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition header value.

    Non-ASCII names are sent through ``filename*`` with an ASCII fallback.
    """
    ascii_name = filename.encode('ascii', 'ignore').decode('ascii').replace('"', '') or "diagram"
    if ascii_name == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
