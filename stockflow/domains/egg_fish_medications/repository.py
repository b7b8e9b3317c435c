"""
Egg-fish medication repository for database operations.
"""
from stockflow.db.base_repository import BaseRepository
from stockflow.db.mongodb import EGG_FISH_MEDICATIONS, MEDICINES, PARENT_EGG_MIGRATIONS


class EggFishMedicationRepository(BaseRepository):
    """Repository for egg-fish medication data access."""

    def __init__(self):
        """Initialize with egg-fish medications collection."""
        super().__init__(EGG_FISH_MEDICATIONS)


class ParentEggMigrationRepository(BaseRepository):
    """Read access to parent egg migrations, which are managed elsewhere."""

    def __init__(self):
        super().__init__(PARENT_EGG_MIGRATIONS)


class MedicineRepository(BaseRepository):
    """Read access to the medicine catalogue."""

    def __init__(self):
        super().__init__(MEDICINES)
