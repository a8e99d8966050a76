"""Picture domain service."""

from typing import Any

from relstore.domain.entities import Picture
from relstore.domain.polymorphic import exists_in
from relstore.domain.store import EntityStore


class PictureService:
    """Service for pictures attached to imageable entities."""

    def __init__(self, store: EntityStore):
        """Initialize picture service.

        Args:
            store: EntityStore instance
        """
        self.store = store

    def register_imageable(self, entity_type: str) -> None:
        """Allow pictures to be attached to rows of ``entity_type``."""
        self.store.imageable.register(entity_type, exists_in(self.store.db, entity_type))

    def attach(self, name: str, imageable_type: str, imageable_id: int) -> int:
        """Attach a new picture to an entity.

        Args:
            name: Picture name
            imageable_type: Type tag of the target (e.g. "Employee")
            imageable_id: Target ID

        Returns:
            Picture ID

        Raises:
            UnknownTypeError: If the type is not registered as imageable
            DanglingReferenceError: If the target doesn't exist
        """
        return self.store.create(
            "Picture",
            {"name": name, "imageable_type": imageable_type, "imageable_id": imageable_id},
        )

    def pictures_for(self, imageable_type: str, imageable_id: int) -> list[Picture]:
        return self.store.find("Picture", imageable_type=imageable_type, imageable_id=imageable_id)

    def imageable(self, picture_id: int) -> Any:
        """Return the entity a picture is attached to, or None if it is unattached."""
        picture = self.store.get("Picture", picture_id)
        if picture.imageable_type is None:
            return None
        self.store.imageable.ensure(picture.imageable_type, picture.imageable_id)
        return self.store.get(picture.imageable_type, picture.imageable_id)
