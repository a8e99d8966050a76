"""Part and assembly domain service."""

from relstore.domain.entities import Assembly, Part
from relstore.domain.errors import NotFoundError, not_found
from relstore.domain.store import EntityStore


class PartService:
    """Service for assemblies, parts and the join rows between them.

    ``assemblies(part_id)`` reads through the scoped Part.assemblies
    association, so inactive assemblies are hidden. The scope only filters
    reads: ``attach`` links a part to any assembly, active or not.
    """

    def __init__(self, store: EntityStore):
        """Initialize part service.

        Args:
            store: EntityStore instance
        """
        self.store = store
        self.db = store.db

    def create_assembly(self, name: str, active: bool = True) -> int:
        return self.store.create("Assembly", {"name": name, "active": active})

    def create_part(self, part_number: str) -> int:
        return self.store.create("Part", {"part_number": part_number})

    def set_active(self, assembly_id: int, active: bool) -> None:
        self.store.update("Assembly", assembly_id, {"active": active})

    def attach(self, assembly_id: int, part_id: int) -> None:
        """Link a part to an assembly.

        Raises:
            NotFoundError: If the assembly or part doesn't exist
            ConflictError: If they are already linked
        """
        with self.db.transaction():
            self.store.get("Assembly", assembly_id)
            self.store.get("Part", part_id)
            self.db.link_assembly_part(assembly_id, part_id)

    def detach(self, assembly_id: int, part_id: int) -> None:
        """Unlink a part from an assembly.

        Raises:
            NotFoundError: If they are not linked
        """
        if self.db.unlink_assembly_part(assembly_id, part_id) == 0:
            raise NotFoundError(not_found("assemblies_parts row", (assembly_id, part_id)))

    def assemblies(self, part_id: int) -> list[Assembly]:
        """Active assemblies that use a part."""
        return self.store.associated("Part", part_id, "assemblies")

    def parts(self, assembly_id: int) -> list[Part]:
        return self.store.associated("Assembly", assembly_id, "parts")
