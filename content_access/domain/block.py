"""
Read helpers over loaded section content.
"""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from .options import RequestOptions


_VAR_PATTERN = re.compile(r"\{\{\s*([\w.-]+)\s*\}\}")


def lookup(content: Any, path: str) -> Any:
    """Resolve a dotted path inside nested content; None if any part is missing."""
    value = content
    for part in path.split("."):
        if isinstance(value, Mapping):
            value = value.get(part)
        elif isinstance(value, list) and part.isdigit() and int(part) < len(value):
            value = value[int(part)]
        else:
            return None
        if value is None:
            return None
    return value


def replace_vars(text: str, vars: Optional[Mapping[str, Any]] = None) -> str:
    """Substitute ``{{name}}`` placeholders; unknown names are left as they are."""
    if not vars:
        return text

    def _sub(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in vars:
            return str(vars[name])
        return match.group(0)

    return _VAR_PATTERN.sub(_sub, text)


class ContentBlock:
    """A view over loaded content rooted at a dotted path."""

    def __init__(
        self,
        app: str,
        path: Optional[str],
        content: Dict[str, Any],
        options: Optional[RequestOptions] = None,
    ):
        self.app = app
        self.path = path
        self.content = content
        self.options = options or RequestOptions()

    @property
    def draft(self) -> bool:
        return self.options.draft

    @property
    def lang(self) -> Optional[str]:
        return self.options.lang

    def id(self, path: Optional[str] = None) -> Optional[str]:
        """Full content id of a path relative to this block."""
        if not path:
            return self.path
        if not self.path:
            return path
        return f"{self.path}.{path}"

    def get(self, path: Optional[str] = None) -> Any:
        """Raw content at a relative path."""
        full_path = self.id(path)
        if not full_path:
            return self.content
        return lookup(self.content, full_path)

    def text(self, path: str, vars: Optional[Mapping[str, Any]] = None) -> str:
        """Text content with placeholders replaced.

        Missing text renders as ``[id]`` in draft mode so editors can spot it.
        """
        value = self.get(path)
        if value is None or isinstance(value, (Mapping, list)):
            return f"[{self.id(path)}]" if self.draft else ""
        return replace_vars(str(value), vars)

    def block(self, path: str, fn: Optional[Callable[["ContentBlock"], Any]] = None) -> Any:
        """Child block rooted at path, or ``fn(child)`` when fn is given."""
        child = ContentBlock(self.app, self.id(path), self.content, self.options)
        if fn is None:
            return child
        return fn(child)

    def map(self, path: str, fn: Callable[["ContentBlock", int], Any]) -> List[Any]:
        """Call ``fn(item_block, index)`` for each item of a list section.

        Dict items are visited in key order, list items in position order.
        """
        items = self.get(path)
        if isinstance(items, Mapping):
            keys = sorted(items)
        elif isinstance(items, list):
            keys = [str(index) for index in range(len(items))]
        else:
            return []

        return [
            fn(self.block(f"{path}.{key}"), index)
            for index, key in enumerate(keys)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.content)

    def __contains__(self, section_id: str) -> bool:
        return section_id in self.content

    def __repr__(self) -> str:
        return f"ContentBlock(app={self.app!r}, path={self.path!r}, sections={sorted(self.content)!r})"
