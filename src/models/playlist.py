"""
Playlist data model
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional
import logging
import os

logger = logging.getLogger(__name__)


@dataclass
class Source:
    """
    One candidate media source of a playlist item
    """

    file: str = ""
    type: str = ""
    label: str = ""
    default: bool = False

    def __post_init__(self):
        if not self.type and self.file:
            self.type = self._type_from_file(self.file)

    @staticmethod
    def _type_from_file(file: str) -> str:
        """Guess the media type from the file extension ("video.mp4" -> "mp4")"""
        path = file.split('?', 1)[0].split('#', 1)[0]
        return os.path.splitext(path)[1].lstrip('.').lower()

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'file': self.file,
            'type': self.type,
            'label': self.label,
            'default': self.default,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Source':
        """Create Source object from dictionary"""
        return cls(
            file=data.get('file', ''),
            type=data.get('type', ''),
            label=data.get('label', ''),
            default=bool(data.get('default', False)),
        )


@dataclass
class PlaylistItem:
    """
    Playlist item data model

    Only ``sources[0]`` (the primary source) decides which provider plays
    the item.
    """

    sources: List[Source] = field(default_factory=list)
    title: str = ""
    description: str = ""
    image: Optional[str] = None
    mediaid: Optional[str] = None

    @property
    def primary_source(self) -> Optional[Source]:
        """First candidate source, or None when the item has none"""
        return self.sources[0] if self.sources else None

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'sources': [source.to_dict() for source in self.sources],
            'title': self.title,
            'description': self.description,
            'image': self.image,
            'mediaid': self.mediaid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PlaylistItem':
        """
        Create PlaylistItem object from dictionary

        A bare ``file`` key is accepted as shorthand for a single source.
        """
        raw_sources = data.get('sources') or []
        if not raw_sources and data.get('file'):
            raw_sources = [{'file': data['file'], 'type': data.get('type', '')}]

        sources = [
            s if isinstance(s, Source) else Source.from_dict(s)
            for s in raw_sources
        ]

        return cls(
            sources=sources,
            title=data.get('title', ''),
            description=data.get('description', ''),
            image=data.get('image'),
            mediaid=data.get('mediaid'),
        )


def coerce_items(items: Iterable[Any]) -> List[PlaylistItem]:
    """Accept PlaylistItem objects or plain dicts"""
    return [
        item if isinstance(item, PlaylistItem) else PlaylistItem.from_dict(item)
        for item in items
    ]


def filter_playlist(
    items: Iterable[PlaylistItem],
    choose: Callable[[Source], Optional[type]],
) -> List[PlaylistItem]:
    """
    Drop unplayable sources and items

    For each item, the first source some provider can play fixes the
    provider; only sources handled by that same provider are kept. Items
    left without sources are dropped.

    Args:
        items: Playlist items
        choose: Provider lookup, usually ``ProviderRegistry.choose``

    Returns:
        List[PlaylistItem]: New items; the input is not modified
    """
    playable: List[PlaylistItem] = []

    for item in items:
        provider_cls = None
        kept: List[Source] = []
        for source in item.sources:
            chosen = choose(source)
            if chosen is None:
                continue
            if provider_cls is None:
                provider_cls = chosen
            if chosen is provider_cls:
                kept.append(source)

        if not kept:
            logger.debug("Dropping playlist item without playable sources: %s", item.title)
            continue

        playable.append(PlaylistItem(
            sources=kept,
            title=item.title,
            description=item.description,
            image=item.image,
            mediaid=item.mediaid,
        ))

    return playable
