"""Run-wide tag registry"""
import threading
from typing import Dict, Iterator, Optional, Union

from featuregraph.models.feature import Feature, Scenario, Tag
from featuregraph.utils.helpers import strip_tag_marker
from featuregraph.utils.logger import setup_logger

logger = setup_logger(__name__)


class TagRegistry:
    """Finds or creates one Tag per canonical name for a whole run of documents"""

    def __init__(self):
        self._tags: Dict[str, Tag] = {}
        self._lock = threading.Lock()

    def resolve(self, tag_name: str, owner: Union[Feature, Scenario], file: str) -> Tag:
        """Find or create the tag and link it with its owner.

        Every call records ``(file, owner.line)`` as an occurrence. The owner is
        added to the tag and the tag to the owner only once.
        """
        name = strip_tag_marker(tag_name)

        with self._lock:
            tag = self._tags.get(name)
            if tag is None:
                tag = Tag(name=name, value=tag_name)
                self._tags[name] = tag
                logger.debug(f"Created tag {name}")

            tag.add_file(file, owner.line)
            tag.add_owner(owner)
            if not any(existing is tag for existing in owner.tags):
                owner.tags.append(tag)

        return tag

    def get(self, name: str) -> Optional[Tag]:
        return self._tags.get(strip_tag_marker(name))

    def clear(self) -> None:
        with self._lock:
            self._tags.clear()

    def __contains__(self, name: str) -> bool:
        return strip_tag_marker(name) in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(list(self._tags.values()))

    def __len__(self) -> int:
        return len(self._tags)
