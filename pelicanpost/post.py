from dataclasses import dataclass
from typing import Mapping, Optional

from pelicanpost.metadata import Metadata, MetadataValue, parse, serialize


DRAFT = 'draft'
PUBLISHED = 'published'
DEFAULT_STATUS = DRAFT


@dataclass(frozen=True)
class ToggleResult:
    new_text: str
    new_status: str


@dataclass(frozen=True)
class PostMetadata:
    """Typed view over the generic metadata of a post."""
    metadata: Mapping[str, MetadataValue]

    def _scalar(self, key: str) -> Optional[str]:
        value = self.metadata.get(key)
        if isinstance(value, list):
            return ', '.join(value)
        return value

    @property
    def title(self) -> Optional[str]:
        return self._scalar('title')

    @property
    def date(self) -> Optional[str]:
        return self._scalar('date')

    @property
    def slug(self) -> Optional[str]:
        return self._scalar('slug')

    @property
    def category(self) -> Optional[str]:
        return self._scalar('category')

    @property
    def summary(self) -> Optional[str]:
        return self._scalar('summary')

    @property
    def status(self) -> str:
        return self._scalar('status') or DEFAULT_STATUS

    @property
    def tags(self) -> list[str]:
        value = self.metadata.get('tags')
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)


def get_status(text: str) -> str:
    return PostMetadata(parse(text).metadata).status


def update_fields(text: str, partial: Metadata) -> str:
    document = parse(text)
    return serialize({**document.metadata, **partial}, document.body)


def toggle_draft_status(text: str) -> ToggleResult:
    new_status = PUBLISHED if get_status(text) == DRAFT else DRAFT
    return ToggleResult(update_fields(text, {'status': new_status}), new_status)


def is_recognized_post(text: str) -> bool:
    """Heuristic: any captured header key makes the text a post."""
    return len(parse(text).metadata) > 0
