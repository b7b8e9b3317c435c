"""
Egg-fish medication API routes.
"""
from typing import List

from fastapi import APIRouter, Depends, status

from stockflow.core.permissions import Actor, has_permission
from stockflow.domains.egg_fish_medications.service import egg_fish_medication_service
from stockflow.schemas.egg_fish_medication import (EggFishMedicationCreate, EggFishMedicationResponse,
                                                   EggFishMedicationUpdate)

router = APIRouter()


@router.post("/", response_model=EggFishMedicationResponse, status_code=status.HTTP_201_CREATED)
async def create_medication(
        medication_data: EggFishMedicationCreate,
        actor: Actor = Depends(has_permission("egg_fish_medication:write"))
):
    """
    Record a medication dose. The authenticated actor is recorded as the employee.

    Args:
        medication_data: Migration, medicine and quantity
        actor: Authenticated actor

    Returns:
        Created record with related records embedded
    """
    return await egg_fish_medication_service.create(medication_data.model_dump(mode="json"), actor.id)


@router.get("/", response_model=List[EggFishMedicationResponse])
async def get_medications(actor: Actor = Depends(has_permission("egg_fish_medication:read"))):
    return await egg_fish_medication_service.find_all()


@router.get("/{record_id}", response_model=EggFishMedicationResponse)
async def get_medication(record_id: str, actor: Actor = Depends(has_permission("egg_fish_medication:read"))):
    return await egg_fish_medication_service.find_one(record_id)


@router.put("/{record_id}", response_model=EggFishMedicationResponse)
async def update_medication(
        record_id: str,
        medication_data: EggFishMedicationUpdate,
        actor: Actor = Depends(has_permission("egg_fish_medication:write"))
):
    return await egg_fish_medication_service.update(
        record_id, medication_data.model_dump(exclude_unset=True, mode="json")
    )


@router.delete("/{record_id}")
async def delete_medication(record_id: str, actor: Actor = Depends(has_permission("egg_fish_medication:delete"))):
    return await egg_fish_medication_service.remove(record_id)
