from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

GalleryImageId = Union[int, str]  # persisted ids are ints, client-local ids are "pending-<n>" strings


@dataclass
class GalleryImage:
    id: GalleryImageId
    image_url: Optional[str] = None
    pending_file: Optional[str] = None  # local file name while the upload is outstanding
    caption: str = ""
    display_order: int = 0
    is_feature: bool = False
    uploaded: bool = True
    owner_id: Optional[int] = None  # the project, service or blog post the gallery belongs to
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return not self.uploaded


@dataclass(frozen=True)
class DragEndEvent:
    """Result of a drag interaction: the item that moved and the item it was dropped on."""
    active_id: GalleryImageId
    over_id: Optional[GalleryImageId] = None  # None when dropped outside the grid
