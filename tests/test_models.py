"""
Tests for request aggregate helpers and small utilities.
"""
from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from stockflow.domains.stock_items.service import generate_sku
from stockflow.models.actor import EmployeeActor
from stockflow.models.site import SiteModel
from stockflow.models.stock_request import RequestItemModel, RequestStatus, StockRequestModel
from stockflow.schemas.base import build_pagination
from stockflow.schemas.stock_request import StockRequestCreate
from stockflow.utils.datetime_handler import DateTimeHandler


def make_request(*items):
    return StockRequestModel(ref_no="REQ-202610-0001", site_id="s1", requested_by=EmployeeActor(id="e1"),
                             items=list(items))


def test_issuable_balance_falls_back_to_approved_minus_issued():
    item = RequestItemModel(stock_in_id="x", qty_requested=10, qty_approved=8, qty_issued=3)
    assert item.issuable_balance == 5

    item.refresh_remaining()
    assert item.qty_remaining == 5
    assert item.issuable_balance == 5


def test_check_invariants_reports_violations():
    assert RequestItemModel(stock_in_id="x", qty_requested=2, qty_approved=2, qty_issued=2,
                            qty_received=1).check_invariants() == []

    problems = RequestItemModel(stock_in_id="x", qty_requested=0, qty_approved=1, qty_issued=2,
                                qty_received=3).check_invariants()
    assert len(problems) == 3


def test_derive_issue_status():
    done = RequestItemModel(stock_in_id="a", qty_requested=2, qty_approved=2, qty_issued=2)
    open_line = RequestItemModel(stock_in_id="b", qty_requested=2, qty_approved=2, qty_issued=1)
    for item in (done, open_line):
        item.refresh_remaining()

    assert make_request(done).derive_issue_status() == RequestStatus.ISSUED
    assert make_request(done, open_line).derive_issue_status() == RequestStatus.PARTIALLY_ISSUED


def test_status_is_stored_as_plain_string():
    request = make_request(RequestItemModel(stock_in_id="a", qty_requested=1))
    request.status = RequestStatus.APPROVED

    document = request.to_document()
    assert document["status"] == "APPROVED"
    assert type(document["status"]) is str
    assert "_id" not in document
    assert document["items"][0]["_id"]
    assert document["requested_by"] == {"kind": "employee", "id": "e1"}


def test_create_schema_accepts_camel_and_snake_case():
    camel = StockRequestCreate.model_validate({"siteId": "s1", "items": [{"stockInId": "x", "qtyRequested": 2}]})
    snake = StockRequestCreate.model_validate({"site_id": "s1", "items": [{"stock_in_id": "x", "qty_requested": 2}]})
    assert camel.model_dump() == snake.model_dump()


def test_site_model_rejects_same_manager_and_supervisor():
    with pytest.raises(PydanticValidationError):
        SiteModel(name="Hatchery", manager_id="e1", supervisor_id="e1")


def test_month_boundaries_roll_over_year():
    start, end = DateTimeHandler.get_month_boundaries(datetime(2025, 12, 17, 9, 30))
    assert start == datetime(2025, 12, 1)
    assert end == datetime(2026, 1, 1)


def test_generate_sku_uses_initials():
    sku = generate_sku("fish feed pellets")
    assert sku[:3] == "FFP"
    assert len(sku) == 7


def test_build_pagination():
    assert build_pagination(1, 10, 0)["total_pages"] == 0
    assert build_pagination(3, 10, 21) == {"current_page": 3, "total_pages": 3, "total_items": 21,
                                           "items_per_page": 10}
