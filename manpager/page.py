"""Manual page documents.

A page is an immutable description of one manual topic. The pager only
ever borrows a page for the duration of a single ``display`` call.
"""

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional

from .errors import PageFormatError


@dataclass(frozen=True)
class Section:
    """A titled block of content lines, optionally with nested subsections.

    Attributes:
        title: Heading shown above the section
        content: Content lines; lines with a run of two or more spaces are
            rendered as ``name  description`` pairs
        subsections: Nested sections; rendered flattened into the parent
    """
    title: str
    content: tuple[str, ...] = ()
    subsections: tuple['Section', ...] = ()

    def walk(self) -> Iterator['Section']:
        """Yield this section's subsections depth-first (not the section itself)."""
        for sub in self.subsections:
            yield sub
            yield from sub.walk()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Section':
        if not isinstance(data, Mapping):
            raise PageFormatError(f"Section must be an object, got {type(data).__name__}")
        title = _require_str(data, 'title', 'section')
        content = _str_tuple(data.get('content', ()), 'section content')
        subsections = tuple(cls.from_dict(sub) for sub in _list(data.get('subsections', ()), 'subsections'))
        return cls(title=title, content=content, subsections=subsections)


@dataclass(frozen=True)
class Page:
    """A manual page document.

    Attributes:
        command: Command (topic) the page documents
        synopsis: One-line usage summary
        description: Description paragraphs, one string per line
        sections: Top-level sections in display order
        philosophy: Optional quotation block shown before the description
        see_also: Optional related topic names (ordered, without duplicates)
        author: Optional author credit
        version: Optional version string
    """
    command: str
    synopsis: str
    description: tuple[str, ...] = ()
    sections: tuple[Section, ...] = ()
    philosophy: Optional[tuple[str, ...]] = None
    see_also: Optional[tuple[str, ...]] = None
    author: Optional[str] = None
    version: Optional[str] = None

    @property
    def summary(self) -> str:
        """First description line, used in topic listings."""
        return self.description[0] if self.description else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Page':
        """Build a page from its JSON shape.

        Accepts both ``seeAlso`` (the manual database spelling) and
        ``see_also``. Unknown keys are ignored.

        Raises:
            PageFormatError: If a required key is missing or a value has
                the wrong type.
        """
        if not isinstance(data, Mapping):
            raise PageFormatError(f"Page must be an object, got {type(data).__name__}")
        command = _require_str(data, 'command', 'page')
        synopsis = _require_str(data, 'synopsis', 'page')
        description = _str_tuple(data.get('description', ()), 'description')
        sections = tuple(Section.from_dict(s) for s in _list(data.get('sections', ()), 'sections'))

        philosophy = data.get('philosophy')
        if philosophy is not None:
            philosophy = _str_tuple(philosophy, 'philosophy')

        see_also = data.get('seeAlso', data.get('see_also'))
        if see_also is not None:
            # Keep first occurrence order; topics form a set
            see_also = tuple(dict.fromkeys(_str_tuple(see_also, 'seeAlso')))

        author = _optional_str(data, 'author')
        version = _optional_str(data, 'version')
        return cls(
            command=command,
            synopsis=synopsis,
            description=description,
            sections=sections,
            philosophy=philosophy,
            see_also=see_also,
            author=author,
            version=version,
        )


def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    if key not in data:
        raise PageFormatError(f"Missing '{key}' in {where}")
    value = data[key]
    if not isinstance(value, str):
        raise PageFormatError(f"'{key}' in {where} must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise PageFormatError(f"'{key}' must be a string")
    return value


def _list(value: Any, what: str) -> list:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise PageFormatError(f"'{what}' must be a list")
    return list(value)


def _str_tuple(value: Any, what: str) -> tuple[str, ...]:
    items = _list(value, what)
    for item in items:
        if not isinstance(item, str):
            raise PageFormatError(f"Every entry of '{what}' must be a string")
    return tuple(items)
