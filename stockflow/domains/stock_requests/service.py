"""
Stock request service for business logic.

Implements the request lifecycle: create, approve / modify-approve, issue
materials, receive materials, reject, close and delete. Every operation reads
the aggregate, validates all of its input before writing anything, and then
commits the aggregate with a single version-guarded write.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from pymongo.errors import PyMongoError

from stockflow.core.config import settings
from stockflow.core.errors import (AppError, AuthorizationError, ConflictError, InsufficientStockError,
                                   InvalidTransitionError, NotFoundError, ValidationError)
from stockflow.core.permissions import Actor, PermissionArea
from stockflow.domains.sites.repository import SiteRepository
from stockflow.domains.stock_history.repository import StockHistoryRepository
from stockflow.domains.stock_items.repository import StockItemRepository
from stockflow.domains.stock_requests.repository import StockRequestRepository
from stockflow.models.stock import MovementType, SourceType, StockHistoryModel
from stockflow.models.stock_request import (APPROVABLE_STATUSES, CLOSABLE_STATUSES, ISSUABLE_STATUSES,
                                            MODIFIABLE_STATUSES, RECEIVABLE_STATUSES, CommentModel,
                                            RequestItemModel, RequestStatus, StockRequestModel)
from stockflow.realtime.broadcaster import broadcaster
from stockflow.schemas.base import build_pagination, page_to_skip
from stockflow.utils.datetime_handler import DateTimeHandler

logger = logging.getLogger(__name__)

REF_NO_ATTEMPTS = 5


class StockRequestService:
    """
    Service for the stock request lifecycle.
    """

    def __init__(
            self,
            request_repo: Optional[StockRequestRepository] = None,
            stock_item_repo: Optional[StockItemRepository] = None,
            site_repo: Optional[SiteRepository] = None,
            history_repo: Optional[StockHistoryRepository] = None
    ):
        """
        Initialize with repositories.

        Args:
            request_repo: Optional stock request repository instance
            stock_item_repo: Optional stock item repository instance
            site_repo: Optional site repository instance
            history_repo: Optional stock history repository instance
        """
        self.request_repo = request_repo or StockRequestRepository()
        self.stock_item_repo = stock_item_repo or StockItemRepository()
        self.site_repo = site_repo or SiteRepository()
        self.history_repo = history_repo or StockHistoryRepository()

    # Queries

    async def find_all(
            self,
            page: int = 1,
            limit: Optional[int] = None,
            site_id: Optional[str] = None,
            status: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get one page of requests, newest first.

        Args:
            page: Page number (1-based)
            limit: Page size, defaults to settings.DEFAULT_PAGE_SIZE
            site_id: Filter by site
            status: Filter by status

        Returns:
            ``{"requests": [...], "pagination": {...}}``
        """
        page = max(page, 1)
        limit = limit or settings.DEFAULT_PAGE_SIZE

        query = {}
        if site_id:
            query["site_id"] = site_id
        if status:
            query["status"] = self._parse_status(status).value

        total = await self.request_repo.count(query)
        documents = await self.request_repo.find_many(query, page_to_skip(page, limit), limit)
        requests = await self._hydrate_many([self._to_model(doc) for doc in documents])

        return {"requests": requests, "pagination": build_pagination(page, limit, total)}

    async def find_issuable(
            self,
            page: int = 1,
            limit: Optional[int] = None,
            site_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get requests that still have something to issue, oldest first.
        Each request only carries the items with an issuable balance.
        """
        page = max(page, 1)
        limit = limit or settings.DEFAULT_PAGE_SIZE

        query = {"status": {"$in": [s.value for s in ISSUABLE_STATUSES]}}
        if site_id:
            query["site_id"] = site_id

        total = await self.request_repo.count(query)
        documents = await self.request_repo.find_many(query, page_to_skip(page, limit), limit, sort_desc=False)

        requests = []
        for document in documents:
            request = self._to_model(document)
            request.items = [item for item in request.items if item.issuable_balance > 0]
            requests.append(request)

        return {
            "requests": await self._hydrate_many(requests),
            "pagination": build_pagination(page, limit, total)
        }

    async def find_one(self, request_id: str) -> Dict[str, Any]:
        """
        Get a request by ID with site and stock items embedded.

        Raises:
            NotFoundError: If the request does not exist
        """
        request = await self._load(request_id)
        return await self._hydrate(request)

    async def generate_ref_no(self) -> str:
        """
        Next reference number for the current month, e.g. ``REQ-202610-0007``.
        """
        month_start, _ = DateTimeHandler.get_month_boundaries()
        prefix = f"{settings.REF_NO_PREFIX}-{month_start.strftime('%Y%m')}-"

        last = await self.request_repo.find_last_ref_no(prefix)
        sequence = int(last[len(prefix):]) + 1 if last else 1
        return f"{prefix}{sequence:04d}"

    # Lifecycle

    async def create(
            self,
            site_id: str,
            requester: Actor,
            items: Sequence[Dict[str, Any]],
            notes: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a PENDING request.

        Args:
            site_id: Requesting site
            requester: Admin or employee raising the request
            items: ``[{"stock_in_id", "qty_requested"}]``
            notes: Free text

        Returns:
            Created request

        Raises:
            ValidationError: On empty items, bad quantities, duplicates, unknown site or stock item
        """
        if not items:
            raise ValidationError("At least one item is required")

        stock_ids = []
        for entry in items:
            stock_id = entry.get("stock_in_id")
            qty = entry.get("qty_requested")
            if not stock_id:
                raise ValidationError("stock_in_id is required for every item")
            if qty is None or qty <= 0:
                raise ValidationError(f"qty_requested must be greater than 0 for stock item {stock_id}")
            if stock_id in stock_ids:
                raise ValidationError(f"Stock item {stock_id} appears more than once in the request")
            stock_ids.append(stock_id)

        site_exists, stocks = await asyncio.gather(
            self.site_repo.exists(site_id),
            self.stock_item_repo.find_by_ids(stock_ids)
        )
        if not site_exists:
            raise ValidationError(f"Site {site_id} does not exist")
        self._ensure_stock_items_exist(stock_ids, stocks)

        request_items = [
            RequestItemModel(stock_in_id=entry["stock_in_id"], qty_requested=entry["qty_requested"])
            for entry in items
        ]

        document = None
        for _ in range(REF_NO_ATTEMPTS):
            request = StockRequestModel(
                ref_no=await self.generate_ref_no(),
                site_id=site_id,
                requested_by=requester,
                notes=notes,
                items=request_items
            )
            try:
                document = await self.request_repo.create(request.to_document())
                break
            except ConflictError:
                logger.warning(f"Reference number {request.ref_no} already taken, retrying")

        if document is None:
            raise ConflictError("Could not allocate a reference number, please retry")

        created = await self._hydrate(self._to_model(document))
        logger.info(f"Created stock request {created['ref_no']} for site {site_id} by {requester.kind} {requester.id}")
        await self._publish("requestCreated", created)
        return created

    async def approve(
            self,
            request_id: str,
            approver: Actor,
            item_modifications: Optional[Sequence[Dict[str, Any]]] = None,
            items_to_add: Optional[Sequence[Dict[str, Any]]] = None,
            items_to_remove: Optional[Sequence[str]] = None,
            comment: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Approve a PENDING request, optionally adjusting its items first.
        """
        return await self._apply_approval(
            request_id, approver, item_modifications, items_to_add, items_to_remove, comment,
            allowed_statuses=APPROVABLE_STATUSES, event="requestApproved"
        )

    async def modify_approve(
            self,
            request_id: str,
            approver: Actor,
            item_modifications: Optional[Sequence[Dict[str, Any]]] = None,
            items_to_add: Optional[Sequence[Dict[str, Any]]] = None,
            items_to_remove: Optional[Sequence[str]] = None,
            comment: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Adjust and (re)approve a request that has not been issued against yet.
        """
        return await self._apply_approval(
            request_id, approver, item_modifications, items_to_add, items_to_remove, comment,
            allowed_statuses=MODIFIABLE_STATUSES, event="requestUpdated"
        )

    async def _apply_approval(
            self,
            request_id: str,
            approver: Actor,
            item_modifications: Optional[Sequence[Dict[str, Any]]],
            items_to_add: Optional[Sequence[Dict[str, Any]]],
            items_to_remove: Optional[Sequence[str]],
            comment: Optional[str],
            allowed_statuses: Sequence[RequestStatus],
            event: str
    ) -> Dict[str, Any]:
        request = await self._load(request_id)
        self._ensure_status(request, allowed_statuses, "approve")

        leaving_pending = request.status == RequestStatus.PENDING
        items = {item.id: item.model_copy() for item in request.items}
        explicitly_approved = set()

        for item_id in dict.fromkeys(items_to_remove or []):
            item = items.get(item_id)
            if item is None:
                raise NotFoundError(f"Request item {item_id} not found")
            if item.qty_issued > 0:
                raise ValidationError(f"Request item {item_id} has already been issued and cannot be removed")
            del items[item_id]

        for modification in item_modifications or []:
            item_id = modification.get("request_item_id")
            item = items.get(item_id)
            if item is None:
                raise NotFoundError(f"Request item {item_id} not found")

            new_stock_id = modification.get("stock_in_id")
            if new_stock_id and new_stock_id != item.stock_in_id:
                if item.qty_issued > 0:
                    raise ValidationError(f"Request item {item_id} has already been issued; its stock item cannot change")
                item.stock_in_id = new_stock_id
            if modification.get("qty_requested") is not None:
                item.qty_requested = modification["qty_requested"]
            if modification.get("qty_approved") is not None:
                item.qty_approved = modification["qty_approved"]
                explicitly_approved.add(item_id)

        for addition in items_to_add or []:
            if not addition.get("stock_in_id"):
                raise ValidationError("stock_in_id is required for every added item")
            if addition.get("qty_requested") is None:
                raise ValidationError(f"qty_requested is required for added stock item {addition['stock_in_id']}")

            qty_approved = addition.get("qty_approved")
            item = RequestItemModel(
                stock_in_id=addition["stock_in_id"],
                qty_requested=addition["qty_requested"],
                qty_approved=addition["qty_requested"] if qty_approved is None else qty_approved
            )
            items[item.id] = item
            explicitly_approved.add(item.id)

        if leaving_pending:
            for item_id, item in items.items():
                if item_id not in explicitly_approved:
                    item.qty_approved = item.qty_requested

        if not items:
            raise ValidationError("A request must keep at least one item")

        stock_ids = []
        for item in items.values():
            if item.qty_requested <= 0:
                raise ValidationError(f"qty_requested must be greater than 0 for stock item {item.stock_in_id}")
            if item.qty_approved < 0:
                raise ValidationError(f"qty_approved cannot be negative for stock item {item.stock_in_id}")
            if item.qty_approved < item.qty_issued:
                raise ValidationError(
                    f"qty_approved for stock item {item.stock_in_id} cannot be below the {item.qty_issued} already issued"
                )
            if item.stock_in_id in stock_ids:
                raise ValidationError(f"Stock item {item.stock_in_id} appears more than once in the request")
            stock_ids.append(item.stock_in_id)

        if all(item.qty_approved == 0 for item in items.values()):
            raise ValidationError("At least one item must be approved with a quantity greater than 0")

        stocks = await self.stock_item_repo.find_by_ids(stock_ids)
        self._ensure_stock_items_exist(stock_ids, stocks)

        for item in items.values():
            item.refresh_remaining()

        now = DateTimeHandler.get_current_datetime()
        request.items = list(items.values())
        request.status = RequestStatus.APPROVED
        request.approved_by = approver
        request.approved_at = now
        if comment:
            request.comments.append(CommentModel(author=approver, text=comment, created_at=now))

        await self._commit(request)

        approved = await self._hydrate(request)
        logger.info(f"Approved stock request {request.ref_no} by {approver.kind} {approver.id}")
        await self._publish(event, approved)
        return approved

    async def issue_materials(self, request_id: str, issuer: Actor, items: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Issue approved quantities out of stock.

        Args:
            request_id: Request ID
            issuer: Admin issuing the goods
            items: ``[{"request_item_id", "qty_issued", "notes"}]``

        Returns:
            ``{"request", "issued_items", "stock_history_records"}``

        Raises:
            NotFoundError: Unknown request, request item or stock item
            ValidationError: Bad quantity, duplicate line or more than the approved balance
            InsufficientStockError: More than the on-hand stock
            InvalidTransitionError: Request is not APPROVED or PARTIALLY_ISSUED
            ConflictError: Another write to the request won
        """
        request = await self._load(request_id)
        self._ensure_status(request, ISSUABLE_STATUSES, "issue materials for")

        if not items:
            raise ValidationError("At least one item must be issued")

        planned = []
        for line in items:
            item_id = line.get("request_item_id")
            qty = line.get("qty_issued")
            if any(item.id == item_id for item, _, _ in planned):
                raise ValidationError(f"Request item {item_id} appears more than once")

            item = request.find_item(item_id)
            if item is None:
                raise NotFoundError(f"Request item {item_id} not found")
            if qty is None or qty <= 0:
                raise ValidationError(f"qty_issued must be greater than 0 for request item {item_id}")
            if qty > item.issuable_balance:
                raise ValidationError(
                    f"Cannot issue {qty} for request item {item_id}. Maximum allowed: {item.issuable_balance}"
                )
            planned.append((item, qty, line.get("notes")))

        needed = defaultdict(float)
        for item, qty, _ in planned:
            needed[item.stock_in_id] += qty

        stocks = await self.stock_item_repo.find_by_ids(list(needed))
        for stock_id, qty in needed.items():
            stock = stocks.get(stock_id)
            if stock is None:
                raise NotFoundError(f"Stock item {stock_id} not found")
            if qty > stock.get("quantity", 0):
                raise InsufficientStockError(
                    f"Insufficient stock for {stock.get('product_name', stock_id)}: "
                    f"requested {qty}, available {stock.get('quantity', 0)}",
                    details={"stock_in_id": stock_id, "requested": qty, "available": stock.get("quantity", 0)}
                )

        applied = await self._take_stock(needed)

        now = DateTimeHandler.get_current_datetime()
        remaining_after = {stock_id: after["quantity"] for stock_id, (_, after) in applied.items()}
        running = {stock_id: remaining_after[stock_id] + needed[stock_id] for stock_id in needed}
        history = []
        for item, qty, notes in planned:
            item.qty_issued += qty
            item.refresh_remaining()

            before = running[item.stock_in_id]
            running[item.stock_in_id] = before - qty
            history.append(StockHistoryModel(
                stock_in_id=item.stock_in_id,
                movement_type=MovementType.OUT,
                source_type=SourceType.ISSUE,
                source_id=request.id,
                qty_before=before,
                qty_change=-qty,
                qty_after=before - qty,
                unit_price=stocks[item.stock_in_id].get("unit_price"),
                notes=notes or f"Issued for request {request.ref_no}",
                created_by=issuer,
                created_at=now
            ).model_dump())

        request.status = request.derive_issue_status()
        request.issued_by = issuer
        request.issued_at = now

        try:
            await self._commit(request)
        except AppError:
            await self._return_stock(applied)
            raise

        records = await self._record_history(request, history)

        issued_ids = {item.id for item, _, _ in planned}
        hydrated = await self._hydrate(request)
        result = {
            "request": hydrated,
            "issued_items": [item for item in hydrated["items"] if item["_id"] in issued_ids],
            "stock_history_records": records,
        }

        logger.info(f"Issued {len(planned)} item(s) on stock request {request.ref_no}, status now {request.status}")
        await self._publish("materialsIssued", result)
        return result

    async def receive_materials(self, request_id: str, receiver: Actor, items: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Confirm receipt of issued quantities.

        Employees may only receive their own requests. When an ISSUED request
        has every item fully received it is closed.

        Args:
            request_id: Request ID
            receiver: Admin or the employee who raised the request
            items: ``[{"request_item_id", "qty_received"}]``

        Returns:
            ``{"request", "received_items", "stock_history_records"}``
        """
        request = await self._load(request_id)
        self._ensure_status(request, RECEIVABLE_STATUSES, "receive materials for")

        if not receiver.is_admin and (request.requested_by.kind, request.requested_by.id) != (receiver.kind, receiver.id):
            raise AuthorizationError("Only the requester can confirm receipt of this request")

        if not items:
            raise ValidationError("At least one item must be received")

        planned = []
        for line in items:
            item_id = line.get("request_item_id")
            qty = line.get("qty_received")
            if any(item.id == item_id for item, _ in planned):
                raise ValidationError(f"Request item {item_id} appears more than once")

            item = request.find_item(item_id)
            if item is None:
                raise NotFoundError(f"Request item {item_id} not found")
            if qty is None or qty <= 0:
                raise ValidationError(f"qty_received must be greater than 0 for request item {item_id}")
            if qty > item.unreceived_balance:
                raise ValidationError(
                    f"Cannot receive {qty} for request item {item_id}. Maximum allowed: {item.unreceived_balance}"
                )
            planned.append((item, qty))

        stocks = await self.stock_item_repo.find_by_ids([item.stock_in_id for item, _ in planned])

        now = DateTimeHandler.get_current_datetime()
        history = []
        for item, qty in planned:
            before = item.qty_received
            item.qty_received += qty
            history.append(StockHistoryModel(
                stock_in_id=item.stock_in_id,
                movement_type=MovementType.IN,
                source_type=SourceType.RECEIPT,
                source_id=request.id,
                qty_before=before,
                qty_change=qty,
                qty_after=item.qty_received,
                unit_price=(stocks.get(item.stock_in_id) or {}).get("unit_price"),
                notes=f"Received for request {request.ref_no}",
                created_by=receiver,
                created_at=now
            ).model_dump())

        request.received_at = now
        closed = request.status == RequestStatus.ISSUED and all(item.is_fully_received for item in request.items)
        if closed:
            request.status = RequestStatus.CLOSED
            request.closed_by = receiver
            request.closed_at = now

        await self._commit(request)
        records = await self._record_history(request, history)

        received_ids = {item.id for item, _ in planned}
        hydrated = await self._hydrate(request)
        result = {
            "request": hydrated,
            "received_items": [item for item in hydrated["items"] if item["_id"] in received_ids],
            "stock_history_records": records,
        }

        logger.info(f"Received {len(planned)} item(s) on stock request {request.ref_no}")
        await self._publish("materialsReceived", result)
        if closed:
            logger.info(f"Stock request {request.ref_no} fully received and closed")
            await self._publish("requestClosed", hydrated)
        return result

    async def reject(self, request_id: str, rejecter: Actor, reason: Optional[str] = None) -> Dict[str, Any]:
        """
        Reject a PENDING request. The reason replaces the notes when given.
        """
        request = await self._load(request_id)
        self._ensure_status(request, APPROVABLE_STATUSES, "reject")

        if reason:
            request.notes = reason
        request.status = RequestStatus.REJECTED
        request.rejected_by = rejecter
        request.rejected_at = DateTimeHandler.get_current_datetime()

        await self._commit(request)

        rejected = await self._hydrate(request)
        logger.info(f"Rejected stock request {request.ref_no} by {rejecter.kind} {rejecter.id}")
        await self._publish("requestRejected", rejected)
        return rejected

    async def close(self, request_id: str, closer: Actor) -> Dict[str, Any]:
        """
        Close an issued or partially issued request.
        """
        request = await self._load(request_id)
        self._ensure_status(request, CLOSABLE_STATUSES, "close")

        request.status = RequestStatus.CLOSED
        request.closed_by = closer
        request.closed_at = DateTimeHandler.get_current_datetime()

        await self._commit(request)

        closed = await self._hydrate(request)
        logger.info(f"Closed stock request {request.ref_no} by {closer.kind} {closer.id}")
        await self._publish("requestClosed", closed)
        return closed

    async def add_comment(self, request_id: str, author: Actor, text: str) -> Dict[str, Any]:
        if not text or not text.strip():
            raise ValidationError("Comment cannot be empty")

        request = await self._load(request_id)
        request.comments.append(CommentModel(author=author, text=text.strip()))

        await self._commit(request)

        updated = await self._hydrate(request)
        await self._publish("requestUpdated", updated)
        return updated

    async def delete(self, request_id: str) -> Dict[str, str]:
        """
        Delete a request that has not been issued against.

        Raises:
            NotFoundError: If the request does not exist
            ValidationError: If any quantity has been issued
        """
        request = await self._load(request_id)
        if any(item.qty_issued > 0 for item in request.items):
            raise ValidationError(f"Stock request {request.ref_no} has issued items and cannot be deleted")

        if not await self.request_repo.delete(request.id):
            raise NotFoundError(f"Stock request {request_id} not found")

        logger.info(f"Deleted stock request {request.ref_no}")
        await self._publish("requestDeleted", {"id": request.id})
        return {"id": request.id}

    # Helpers

    async def _load(self, request_id: str) -> StockRequestModel:
        document = await self.request_repo.find_by_id(request_id)
        if not document:
            raise NotFoundError(f"Stock request {request_id} not found")
        return self._to_model(document)

    @staticmethod
    def _to_model(document: Dict[str, Any]) -> StockRequestModel:
        return StockRequestModel.model_validate(document)

    @staticmethod
    def _parse_status(status: str) -> RequestStatus:
        try:
            return RequestStatus(status.upper())
        except ValueError:
            raise ValidationError(f"Unknown request status: {status}")

    @staticmethod
    def _ensure_status(request: StockRequestModel, allowed: Sequence[RequestStatus], action: str) -> None:
        if request.status not in allowed:
            logger.warning(f"Refused to {action} stock request {request.ref_no} in status {request.status}")
            raise InvalidTransitionError(
                f"Cannot {action} a request with status {request.status}. "
                f"Allowed: {', '.join(RequestStatus(s).value for s in allowed)}"
            )

    @staticmethod
    def _ensure_stock_items_exist(stock_ids: Sequence[str], stocks: Dict[str, Dict[str, Any]]) -> None:
        missing = [stock_id for stock_id in stock_ids if stock_id not in stocks]
        if missing:
            raise ValidationError(f"Stock items not found: {', '.join(missing)}")

    async def _commit(self, request: StockRequestModel) -> None:
        """
        Write the aggregate if its version is still the one that was read.

        Raises:
            ConflictError: If another write got there first
        """
        for item in request.items:
            problems = item.check_invariants()
            if problems:
                raise ValidationError(f"Request item {item.id} is inconsistent: {'; '.join(problems)}")

        request.updated_at = DateTimeHandler.get_current_datetime()
        saved = await self.request_repo.save_versioned(request.id, request.version, request.to_document())
        if not saved:
            logger.warning(f"Version conflict writing stock request {request.ref_no} at version {request.version}")
            raise ConflictError(f"Stock request {request.ref_no} was modified concurrently, please retry")
        request.version += 1

    async def _record_history(self, request: StockRequestModel, history: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Append movement records for an already committed request.

        The stock and request writes stand even if the ledger insert fails,
        so a failure is logged and an empty list returned.
        """
        try:
            return await self.history_repo.create_many(history)
        except PyMongoError as e:
            logger.error(f"Failed to record {len(history)} stock history row(s) for request {request.ref_no}: {str(e)}")
            return []

    async def _take_stock(self, needed: Dict[str, float]) -> Dict[str, Any]:
        """
        Atomically decrement each stock item, undoing earlier decrements if one fails.

        Returns:
            Mapping of stock ID to (quantity taken, stock item after the decrement)
        """
        applied = {}
        for stock_id, qty in needed.items():
            after = await self.stock_item_repo.decrement_quantity(stock_id, qty)
            if after is None:
                await self._return_stock(applied)
                raise InsufficientStockError(
                    f"Insufficient stock for stock item {stock_id}: it changed while issuing",
                    details={"stock_in_id": stock_id, "requested": qty}
                )
            applied[stock_id] = (qty, after)
        return applied

    async def _return_stock(self, applied: Dict[str, Any]) -> None:
        for stock_id, (qty, _) in applied.items():
            await self.stock_item_repo.increment_quantity(stock_id, qty)
            logger.info(f"Returned {qty} to stock item {stock_id}")

    async def _hydrate(self, request: StockRequestModel) -> Dict[str, Any]:
        return (await self._hydrate_many([request]))[0]

    async def _hydrate_many(self, requests: List[StockRequestModel]) -> List[Dict[str, Any]]:
        """Dump requests with their site and each item's stock item embedded."""
        site_ids = list({request.site_id for request in requests})
        stock_ids = list({item.stock_in_id for request in requests for item in request.items})

        sites, stocks = await asyncio.gather(
            self.site_repo.find_by_ids(site_ids),
            self.stock_item_repo.find_by_ids(stock_ids)
        )

        result = []
        for request in requests:
            data = request.model_dump(by_alias=True)
            data["site"] = sites.get(request.site_id)
            for item in data["items"]:
                item["stock_in"] = stocks.get(item["stock_in_id"])
            result.append(data)
        return result

    async def _publish(self, event: str, payload: Any) -> None:
        await broadcaster.publish(PermissionArea.STOCK_REQUESTS, event, payload)


# Create global instance
stock_request_service = StockRequestService()
