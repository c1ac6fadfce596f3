"""Template rendering for notice content.

Renderers are selected by ``SenderConfiguration.template_type``:

- ``text``: ``{{name}}`` placeholders, missing variables fail; single braces
  are literal text
- ``plain``: content sent unchanged
- ``jinja2``: sandboxed Jinja2 with strict undefined variables
"""

import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from jinja2 import StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from notice.dispatch.exceptions import TemplateRenderError

_PLACEHOLDER = re.compile(r"\{\{\s*(?P<name>[A-Za-z_][\w.]*)\s*\}\}")


class TemplateRenderer(ABC):
    """Turns template content plus variables into the message body."""

    @abstractmethod
    def render(self, content: str, variables: Mapping[str, Any]) -> str:
        """Render content.

        Raises:
            TemplateRenderError: The template cannot be rendered
        """
        pass


class TextTemplateRenderer(TemplateRenderer):
    """Placeholder interpolation.

    Dotted names walk nested mappings: ``{{user.name}}`` reads
    ``variables["user"]["name"]``.
    """

    @staticmethod
    def _lookup(name: str, variables: Mapping[str, Any]) -> Any:
        if name in variables:
            return variables[name]
        value: Any = variables
        for part in name.split("."):
            if not isinstance(value, Mapping) or part not in value:
                raise TemplateRenderError(f"Missing template variable: {name}")
            value = value[part]
        return value

    def render(self, content: str, variables: Mapping[str, Any]) -> str:
        def substitute(match: "re.Match[str]") -> str:
            return str(self._lookup(match.group("name"), variables))

        return _PLACEHOLDER.sub(substitute, content)


class PlainTemplateRenderer(TemplateRenderer):
    def render(self, content: str, variables: Mapping[str, Any]) -> str:
        return content


class Jinja2TemplateRenderer(TemplateRenderer):
    """Jinja2 rendering inside a sandbox.

    Undefined variables raise instead of rendering as empty strings.
    """

    def __init__(self):
        self._env = SandboxedEnvironment(undefined=StrictUndefined, autoescape=False)

    def render(self, content: str, variables: Mapping[str, Any]) -> str:
        try:
            return self._env.from_string(content).render(**dict(variables))
        except TemplateError as e:
            raise TemplateRenderError(f"Template rendering failed: {e}") from e


class TemplateRendererRegistry:
    """Template renderers keyed by case-insensitive template type."""

    def __init__(self, default_type: str = "text"):
        self.default_type = default_type.lower()
        self._renderers: Dict[str, TemplateRenderer] = {}
        self._lock = threading.Lock()

    def register(self, template_type: str, renderer: TemplateRenderer) -> None:
        with self._lock:
            self._renderers[template_type.strip().lower()] = renderer

    def get(self, template_type: Optional[str] = None) -> TemplateRenderer:
        """Return the renderer for a template type.

        Args:
            template_type: Renderer key; None or blank selects ``default_type``

        Raises:
            TemplateRenderError: No renderer is registered for the type
        """
        key = (template_type or "").strip().lower() or self.default_type
        with self._lock:
            renderer = self._renderers.get(key)
        if renderer is None:
            raise TemplateRenderError(f"Unknown template type: {template_type}")
        return renderer

    def types(self) -> List[str]:
        with self._lock:
            return sorted(self._renderers)


def create_default_renderers(default_type: str = "text") -> TemplateRendererRegistry:
    """Build a registry holding the text, plain and jinja2 renderers."""
    registry = TemplateRendererRegistry(default_type=default_type)
    registry.register("text", TextTemplateRenderer())
    registry.register("plain", PlainTemplateRenderer())
    registry.register("jinja2", Jinja2TemplateRenderer())
    return registry


_default_registry: Optional[TemplateRendererRegistry] = None
_default_registry_lock = threading.Lock()


def get_renderer(template_type: Optional[str] = None) -> TemplateRenderer:
    """Look up a renderer in the process-wide default registry."""
    global _default_registry
    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = create_default_renderers()
    return _default_registry.get(template_type)
