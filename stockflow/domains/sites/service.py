"""
Site service for business logic.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from stockflow.core.errors import NotFoundError, ValidationError
from stockflow.core.permissions import PermissionArea
from stockflow.domains.employees.repository import EmployeeRepository
from stockflow.domains.sites.repository import SiteRepository
from stockflow.models.site import SiteModel
from stockflow.realtime.broadcaster import broadcaster

logger = logging.getLogger(__name__)


class SiteService:
    """
    Service for site business logic. Manager and supervisor are employees.
    """

    def __init__(self, site_repo: Optional[SiteRepository] = None, employee_repo: Optional[EmployeeRepository] = None):
        self.site_repo = site_repo or SiteRepository()
        self.employee_repo = employee_repo or EmployeeRepository()

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a site.

        Raises:
            ValidationError: If the name is blank, manager equals supervisor, or either employee is unknown
        """
        if not (data.get("name") or "").strip():
            raise ValidationError("Site name is required")

        self._ensure_distinct(data.get("manager_id"), data.get("supervisor_id"))
        await self._ensure_employees_exist(data.get("manager_id"), data.get("supervisor_id"))

        site = SiteModel(**data)
        created = await self._hydrate(await self.site_repo.create(site.model_dump()))

        logger.info(f"Created site {created['name']}")
        await broadcaster.publish(PermissionArea.SITES, "siteCreated", created)
        return created

    async def find_all(self) -> List[Dict[str, Any]]:
        sites = await self.site_repo.find_many()
        return [await self._hydrate(site) for site in sites]

    async def find_one(self, site_id: str) -> Dict[str, Any]:
        site = await self.site_repo.find_by_id(site_id)
        if not site:
            raise NotFoundError("Site not found")
        return await self._hydrate(site)

    async def update(self, site_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update a site, checking the merged manager/supervisor pair.
        """
        existing = await self.site_repo.find_by_id(site_id)
        if not existing:
            raise NotFoundError("Site not found")

        if "name" in data and not (data["name"] or "").strip():
            raise ValidationError("Site name cannot be empty")

        manager_id = data.get("manager_id", existing.get("manager_id"))
        supervisor_id = data.get("supervisor_id", existing.get("supervisor_id"))
        self._ensure_distinct(manager_id, supervisor_id)
        await self._ensure_employees_exist(data.get("manager_id"), data.get("supervisor_id"))

        updated = await self._hydrate(await self.site_repo.update(site_id, data))
        await broadcaster.publish(PermissionArea.SITES, "siteUpdated", updated)
        return updated

    async def remove(self, site_id: str) -> Dict[str, str]:
        if not await self.site_repo.delete(site_id):
            raise NotFoundError("Site not found")

        logger.info(f"Deleted site {site_id}")
        await broadcaster.publish(PermissionArea.SITES, "siteDeleted", {"id": site_id})
        return {"id": site_id}

    @staticmethod
    def _ensure_distinct(manager_id: Optional[str], supervisor_id: Optional[str]) -> None:
        if manager_id and supervisor_id and manager_id == supervisor_id:
            raise ValidationError("Manager and Supervisor cannot be the same employee")

    async def _ensure_employees_exist(self, *employee_ids: Optional[str]) -> None:
        ids = [employee_id for employee_id in employee_ids if employee_id]
        found = await asyncio.gather(*(self.employee_repo.exists(employee_id) for employee_id in ids))
        for employee_id, exists in zip(ids, found):
            if not exists:
                raise ValidationError(f"Employee {employee_id} not found")

    async def _hydrate(self, site: Dict[str, Any]) -> Dict[str, Any]:
        manager, supervisor = await asyncio.gather(
            self.employee_repo.find_by_id(site.get("manager_id")),
            self.employee_repo.find_by_id(site.get("supervisor_id"))
        )
        return dict(
            site,
            manager=EmployeeRepository.summarize(manager),
            supervisor=EmployeeRepository.summarize(supervisor)
        )


# Create global instance
site_service = SiteService()
