"""
Egg-fish medication service for business logic.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from stockflow.core.errors import NotFoundError, ValidationError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.egg_fish_medications.repository import (EggFishMedicationRepository, MedicineRepository,
                                                               ParentEggMigrationRepository)
from stockflow.domains.employees.repository import EmployeeRepository
from stockflow.models.egg_fish_medication import EggFishMedicationModel
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)


class EggFishMedicationService:
    """
    Service for egg-fish medication records.
    """

    def __init__(
            self,
            medication_repo: Optional[EggFishMedicationRepository] = None,
            migration_repo: Optional[ParentEggMigrationRepository] = None,
            medicine_repo: Optional[MedicineRepository] = None,
            employee_repo: Optional[EmployeeRepository] = None
    ):
        self.medication_repo = medication_repo or EggFishMedicationRepository()
        self.migration_repo = migration_repo or ParentEggMigrationRepository()
        self.medicine_repo = medicine_repo or MedicineRepository()
        self.employee_repo = employee_repo or EmployeeRepository()

    async def create(self, data: Dict[str, Any], employee_id: str) -> Dict[str, Any]:
        """
        Record a medication dose given by the acting employee.

        Args:
            data: ``parent_egg_migration_id``, ``medication_id`` and optional ``quantity``
            employee_id: Acting employee

        Returns:
            Created record with migration, medicine and employee embedded

        Raises:
            ValidationError: If a reference is missing or does not exist
        """
        if not data.get("parent_egg_migration_id"):
            raise ValidationError("parent_egg_migration_id is required")
        if not data.get("medication_id"):
            raise ValidationError("medication_id is required")
        if not employee_id:
            raise ValidationError("employee_id is required")

        migration, medicine, employee = await asyncio.gather(
            self.migration_repo.find_by_id(data["parent_egg_migration_id"]),
            self.medicine_repo.find_by_id(data["medication_id"]),
            self.employee_repo.find_by_id(employee_id)
        )
        if not migration:
            raise ValidationError("Parent egg migration not found")
        if not medicine:
            raise ValidationError("Medicine not found")
        if not employee:
            raise ValidationError("Employee not found")

        record = EggFishMedicationModel(
            parent_egg_migration_id=data["parent_egg_migration_id"],
            medication_id=data["medication_id"],
            employee_id=employee_id,
            quantity=data.get("quantity") or 0
        )
        created = await self.medication_repo.create(record.model_dump())
        created = self._embed(created, migration, medicine, employee)

        logger.info(f"Recorded medication {data['medication_id']} for egg migration {data['parent_egg_migration_id']}")
        await broadcaster.publish(PermissionArea.EGG_FISH_MEDICATION, "eggFishMedicationCreated", created)
        return created

    async def find_all(self) -> List[Dict[str, Any]]:
        records = await self.medication_repo.find_many()
        return [await self._hydrate(record) for record in records]

    async def find_one(self, record_id: str) -> Dict[str, Any]:
        record = await self.medication_repo.find_by_id(record_id)
        if not record:
            raise NotFoundError("Egg-fish medication record not found")
        return await self._hydrate(record)

    async def update(self, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a record. Changed references must exist.
        """
        checks = []
        if data.get("parent_egg_migration_id"):
            checks.append(self._ensure_exists(self.migration_repo, data["parent_egg_migration_id"],
                                              "Parent egg migration not found"))
        if data.get("medication_id"):
            checks.append(self._ensure_exists(self.medicine_repo, data["medication_id"], "Medicine not found"))
        await asyncio.gather(*checks)

        updated = await self.medication_repo.update(record_id, data)
        if not updated:
            raise NotFoundError("Egg-fish medication record not found")

        updated = await self._hydrate(updated)
        await broadcaster.publish(PermissionArea.EGG_FISH_MEDICATION, "eggFishMedicationUpdated", updated)
        return updated

    async def remove(self, record_id: str) -> Dict[str, str]:
        if not await self.medication_repo.delete(record_id):
            raise NotFoundError("Egg-fish medication record not found")

        logger.info(f"Deleted egg-fish medication record {record_id}")
        await broadcaster.publish(PermissionArea.EGG_FISH_MEDICATION, "eggFishMedicationDeleted", {"id": record_id})
        return {"id": record_id}

    @staticmethod
    async def _ensure_exists(repo, record_id: str, message: str) -> None:
        if not await repo.exists(record_id):
            raise ValidationError(message)

    async def _hydrate(self, record: Dict[str, Any]) -> Dict[str, Any]:
        migration, medicine, employee = await asyncio.gather(
            self.migration_repo.find_by_id(record.get("parent_egg_migration_id")),
            self.medicine_repo.find_by_id(record.get("medication_id")),
            self.employee_repo.find_by_id(record.get("employee_id"))
        )
        return self._embed(record, migration, medicine, employee)

    @staticmethod
    def _embed(record, migration, medicine, employee) -> Dict[str, Any]:
        return dict(
            record,
            parent_egg_migration=migration,
            medication=medicine,
            employee=EmployeeRepository.summarize(employee)
        )


# Create global instance
egg_fish_medication_service = EggFishMedicationService()
