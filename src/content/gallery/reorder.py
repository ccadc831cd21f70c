"""
Gallery ordering operations.

Every function here is a pure transition: it takes the current list of images and
returns a new list, leaving the input untouched. After any transition that changes
order, display_order equals the 1-based list position of each image.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Sequence
import logging

from .types import GalleryImage, GalleryImageId, DragEndEvent
from ..errors import GalleryError

logger = logging.getLogger(__name__)

OnChange = Callable[[List[GalleryImage]], None]


def renumber(images: Sequence[GalleryImage]) -> List[GalleryImage]:
    return [replace(img, display_order=index + 1) for index, img in enumerate(images)]


def normalize(images: Iterable[GalleryImage]) -> List[GalleryImage]:
    """Sort by stored display_order (missing treated as 0, ties keep input order) and renumber."""
    ordered = sorted(images, key=lambda img: img.display_order or 0)
    return renumber(ordered)


def array_move(items: Sequence, old_index: int, new_index: int) -> list:
    result = list(items)
    result.insert(new_index, result.pop(old_index))
    return result


def index_of(images: Sequence[GalleryImage], image_id: GalleryImageId) -> int:
    for index, img in enumerate(images):
        if img.id == image_id:
            return index
    return -1


def move(images: Sequence[GalleryImage], old_index: int, new_index: int) -> List[GalleryImage]:
    size = len(images)
    if not (0 <= old_index < size) or not (0 <= new_index < size):
        raise GalleryError(f"Cannot move image from {old_index} to {new_index} in a gallery of {size}")
    if old_index == new_index:
        return list(images)
    return renumber(array_move(images, old_index, new_index))


def reorder(images: Sequence[GalleryImage], event: DragEndEvent) -> List[GalleryImage]:
    """Apply a drag-end event. Dropping outside the grid or onto itself changes nothing."""
    if event.over_id is None or event.active_id == event.over_id:
        return list(images)

    old_index = index_of(images, event.active_id)
    new_index = index_of(images, event.over_id)
    if old_index == -1 or new_index == -1:
        logger.warning(f"Ignoring drag of {event.active_id!r} onto {event.over_id!r}: unknown image")
        return list(images)

    return move(images, old_index, new_index)


def set_feature(images: Sequence[GalleryImage], image_id: GalleryImageId) -> List[GalleryImage]:
    if index_of(images, image_id) == -1:
        raise GalleryError(f"Image {image_id!r} is not part of this gallery")
    return [replace(img, is_feature=(img.id == image_id)) for img in images]


def clear_feature(images: Sequence[GalleryImage]) -> List[GalleryImage]:
    return [replace(img, is_feature=False) for img in images]


def feature_image(images: Sequence[GalleryImage]) -> Optional[GalleryImage]:
    return next((img for img in images if img.is_feature), None)


def append_pending(
    images: Sequence[GalleryImage],
    files: Sequence[str],
    captions: Optional[Sequence[str]] = None,
) -> List[GalleryImage]:
    captions = list(captions or [])
    taken = {img.id for img in images}
    result = list(images)
    counter = len(images)
    for position, file_name in enumerate(files):
        # local ids only need to be unique within this gallery
        while f"pending-{counter}" in taken:
            counter += 1
        local_id = f"pending-{counter}"
        taken.add(local_id)
        result.append(GalleryImage(
            id=local_id,
            pending_file=file_name,
            caption=captions[position] if position < len(captions) else "",
            uploaded=False,
        ))
    return renumber(result)


def remove(images: Sequence[GalleryImage], image_id: GalleryImageId) -> List[GalleryImage]:
    index = index_of(images, image_id)
    if index == -1:
        raise GalleryError(f"Image {image_id!r} is not part of this gallery")
    remaining = [img for img in images if img.id != image_id]
    return renumber(remaining)


def mark_uploaded(
    images: Sequence[GalleryImage],
    local_id: GalleryImageId,
    image_url: str,
    persisted_id: Optional[int] = None,
) -> List[GalleryImage]:
    index = index_of(images, local_id)
    if index == -1:
        raise GalleryError(f"Image {local_id!r} is not part of this gallery")
    result = list(images)
    result[index] = replace(
        result[index],
        id=persisted_id if persisted_id is not None else local_id,
        image_url=image_url,
        pending_file=None,
        uploaded=True,
    )
    return result


class GalleryReorderController:
    """
    Holds a gallery's working list for an editing form.

    Each state change hands the full updated list to on_change; persisting it is the
    caller's job. Transitions that leave the list as it was do not notify.
    """

    def __init__(self, images: Iterable[GalleryImage] = (), on_change: Optional[OnChange] = None):
        self._images: List[GalleryImage] = normalize(images)
        self._on_change = on_change

    @property
    def images(self) -> List[GalleryImage]:
        return list(self._images)

    @property
    def feature(self) -> Optional[GalleryImage]:
        return feature_image(self._images)

    def _commit(self, updated: List[GalleryImage]) -> List[GalleryImage]:
        if updated == self._images:
            return self.images
        self._images = updated
        if self._on_change:
            self._on_change(self.images)
        return self.images

    def handle_drag_end(self, event: DragEndEvent) -> List[GalleryImage]:
        return self._commit(reorder(self._images, event))

    def move(self, old_index: int, new_index: int) -> List[GalleryImage]:
        return self._commit(move(self._images, old_index, new_index))

    def set_feature(self, image_id: GalleryImageId) -> List[GalleryImage]:
        return self._commit(set_feature(self._images, image_id))

    def clear_feature(self) -> List[GalleryImage]:
        return self._commit(clear_feature(self._images))

    def add_pending(self, files: Sequence[str], captions: Optional[Sequence[str]] = None) -> List[GalleryImage]:
        return self._commit(append_pending(self._images, files, captions))

    def remove(self, image_id: GalleryImageId) -> List[GalleryImage]:
        return self._commit(remove(self._images, image_id))

    def mark_uploaded(self, local_id: GalleryImageId, image_url: str, persisted_id: Optional[int] = None) -> List[GalleryImage]:
        return self._commit(mark_uploaded(self._images, local_id, image_url, persisted_id))

    def update_caption(self, image_id: GalleryImageId, caption: str) -> List[GalleryImage]:
        if index_of(self._images, image_id) == -1:
            raise GalleryError(f"Image {image_id!r} is not part of this gallery")
        return self._commit([
            replace(img, caption=caption) if img.id == image_id else img
            for img in self._images
        ])
