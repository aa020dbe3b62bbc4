from datetime import date
from decimal import Decimal

import pytest

from rental_market.core.errors import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from rental_market.db import crud_rental_requests
from rental_market.services import rental_items as item_service
from rental_market.services import rental_requests as request_service

TODAY = date(2024, 1, 1)


async def submit(db, renter, item, start=date(2024, 1, 1), end=date(2024, 1, 4), **kwargs):
    return await request_service.submit_request(
        db, renter.id, item.id, start, end, today=TODAY, **kwargs
    )


async def test_submit_snapshots_price_and_lister(db, item, owner, renter):
    rental_request = await submit(db, renter, item, message="  Weekend shoot  ")

    assert rental_request.status == "pending"
    assert rental_request.renter_id == renter.id
    assert rental_request.lister_id == owner.id
    assert rental_request.rental_item_id == item.id
    assert rental_request.total_days == 4
    assert rental_request.price_per_day == Decimal("45.00")
    assert rental_request.total_amount == Decimal("180.00")
    assert rental_request.currency == "USD"
    assert rental_request.message == "Weekend shoot"
    assert rental_request.response_message is None
    assert rental_request.responded_at is None
    assert rental_request.rental_item.title == "Pro Camera Kit"


async def test_item_price_change_does_not_touch_existing_requests(db, item, owner, renter):
    rental_request = await submit(db, renter, item)
    request_id = rental_request.id

    await item_service.update_item(
        db, item.id, owner.id, {"price_per_day": Decimal("99.00"), "currency": "EUR"}
    )

    reloaded = await request_service.view_request(db, renter.id, request_id)
    assert reloaded.price_per_day == Decimal("45.00")
    assert reloaded.total_amount == Decimal("180.00")
    assert reloaded.currency == "USD"


@pytest.mark.parametrize(
    "start,end",
    [
        (date(2024, 1, 5), date(2024, 1, 4)),
        (date(2024, 1, 5), date(2024, 1, 5)),
        (date(2024, 3, 1), date(2024, 1, 1)),
    ],
)
async def test_end_not_after_start_is_rejected(db, item, renter, start, end):
    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, item, start, end)

    assert "end_date" in exc.value.errors


async def test_start_in_the_past_is_rejected(db, item, renter):
    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, item, date(2023, 12, 31), date(2024, 1, 3))

    assert list(exc.value.errors) == ["start_date"]


async def test_span_shorter_than_minimum_is_rejected(db, make_item, renter):
    weekly = await make_item(minimum_rental_days=7)

    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, weekly, date(2024, 1, 2), date(2024, 1, 4))

    assert exc.value.errors == {"end_date": ["Minimum rental period is 7 days."]}


async def test_span_longer_than_maximum_is_rejected(db, make_item, renter):
    short_term = await make_item(minimum_rental_days=2, maximum_rental_days=5)

    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, short_term, date(2024, 1, 2), date(2024, 1, 7))
    assert exc.value.errors == {"end_date": ["Maximum rental period is 5 days."]}

    ok = await submit(db, renter, short_term, date(2024, 1, 2), date(2024, 1, 6))
    assert ok.total_days == 5


async def test_submit_for_missing_item_is_not_found(db, rental_types, renter):
    with pytest.raises(NotFoundError):
        await request_service.submit_request(
            db, renter.id, 999, date(2024, 1, 2), date(2024, 1, 4), today=TODAY
        )


async def test_owner_cannot_request_own_item(db, item, owner):
    with pytest.raises(ValidationError) as exc:
        await submit(db, owner, item)

    assert "rental_item_id" in exc.value.errors


async def test_unavailable_item_cannot_be_requested(db, make_item, renter):
    parked = await make_item(is_available=False)

    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, parked)

    assert "rental_item_id" in exc.value.errors


async def test_overly_long_message_is_rejected(db, item, renter):
    with pytest.raises(ValidationError) as exc:
        await submit(db, renter, item, message="x" * 1001)

    assert "message" in exc.value.errors


async def test_overlapping_requests_are_both_accepted(db, item, renter, other_user):
    first = await submit(db, renter, item, date(2024, 1, 2), date(2024, 1, 6))
    second = await submit(db, other_user, item, date(2024, 1, 4), date(2024, 1, 8))

    await request_service.respond_to_request(db, item.user_id, first.id, "approved")

    assert second.status == "pending"


@pytest.mark.parametrize("decision", ["approved", "rejected"])
async def test_lister_responds_once(db, item, owner, renter, decision):
    rental_request = await submit(db, renter, item)

    answered = await request_service.respond_to_request(
        db, owner.id, rental_request.id, decision, response_message="See you then"
    )

    assert answered.status == decision
    assert answered.response_message == "See you then"
    assert answered.responded_at is not None

    with pytest.raises(InvalidStateError):
        await request_service.respond_to_request(db, owner.id, rental_request.id, "approved")

    reloaded = await request_service.view_request(db, owner.id, rental_request.id)
    assert reloaded.status == decision


async def test_renter_cannot_respond_to_own_request(db, item, renter):
    rental_request = await submit(db, renter, item)

    with pytest.raises(AuthorizationError):
        await request_service.respond_to_request(db, renter.id, rental_request.id, "approved")


async def test_stranger_cannot_respond(db, item, renter, other_user):
    rental_request = await submit(db, renter, item)

    with pytest.raises(AuthorizationError):
        await request_service.respond_to_request(db, other_user.id, rental_request.id, "rejected")


async def test_invalid_decision_is_rejected(db, item, owner, renter):
    rental_request = await submit(db, renter, item)

    with pytest.raises(ValidationError) as exc:
        await request_service.respond_to_request(db, owner.id, rental_request.id, "cancelled")

    assert "status" in exc.value.errors
    assert (await request_service.view_request(db, owner.id, rental_request.id)).status == "pending"


async def test_respond_to_missing_request_is_not_found(db, owner):
    with pytest.raises(NotFoundError):
        await request_service.respond_to_request(db, owner.id, 999, "approved")


async def test_conditional_transition_only_wins_once(db, item, renter):
    rental_request = await submit(db, renter, item)
    request_id = rental_request.id

    first = await crud_rental_requests.transition_request(
        db,
        request_id,
        from_status="pending",
        to_status="approved",
        response_message=None,
        responded_at=rental_request.created_at,
    )
    second = await crud_rental_requests.transition_request(
        db,
        request_id,
        from_status="pending",
        to_status="rejected",
        response_message=None,
        responded_at=rental_request.created_at,
    )

    assert (first, second) == (True, False)
    assert (await crud_rental_requests.get_request(db, request_id)).status == "approved"


async def test_respond_loses_race_to_concurrent_answer(
    db, session_factory, item, owner, renter, monkeypatch
):
    rental_request = await submit(db, renter, item)
    request_id, owner_id = rental_request.id, owner.id
    load_request = crud_rental_requests.get_request
    answered_elsewhere = []

    async def load_then_answer_elsewhere(session, rid):
        loaded = await load_request(session, rid)
        if not answered_elsewhere:
            answered_elsewhere.append(rid)
            async with session_factory() as other:
                await request_service.respond_to_request(other, owner_id, rid, "approved")
        return loaded

    monkeypatch.setattr(crud_rental_requests, "get_request", load_then_answer_elsewhere)

    with pytest.raises(InvalidStateError) as exc:
        await request_service.respond_to_request(db, owner_id, request_id, "rejected")

    assert "already been responded to" in exc.value.message
    assert answered_elsewhere == [request_id]
    async with session_factory() as fresh:
        stored = await load_request(fresh, request_id)
        assert stored.status == "approved"
        assert stored.response_message is None


async def test_view_is_limited_to_renter_and_lister(db, item, owner, renter, other_user):
    rental_request = await submit(db, renter, item)

    assert (await request_service.view_request(db, renter.id, rental_request.id)).id == rental_request.id
    assert (await request_service.view_request(db, owner.id, rental_request.id)).id == rental_request.id
    with pytest.raises(AuthorizationError):
        await request_service.view_request(db, other_user.id, rental_request.id)
    with pytest.raises(NotFoundError):
        await request_service.view_request(db, renter.id, 999)


async def test_list_requests_splits_sent_and_received(db, make_item, owner, renter, other_user):
    owners_item = await make_item()
    renters_item = await make_item(user=renter, title="Roof box")

    sent = await submit(db, renter, owners_item)
    received = await submit(db, other_user, renters_item)

    sections = await request_service.list_requests_for_actor(db, renter.id)

    assert [r.id for r in sections["my_requests"]["items"]] == [sent.id]
    assert sections["my_requests"]["total"] == 1
    assert [r.id for r in sections["received_requests"]["items"]] == [received.id]
    assert sections["received_requests"]["total"] == 1
    assert sections["received_requests"]["per_page"] == 10


async def test_list_requests_pages_each_section_independently(db, item, owner, renter):
    created = [
        await submit(db, renter, item, date(2024, 2, d), date(2024, 2, d + 1))
        for d in range(1, 13)
    ]

    sections = await request_service.list_requests_for_actor(
        db, owner.id, sent_page=1, received_page=2
    )

    assert sections["my_requests"]["total"] == 0
    assert sections["received_requests"]["total"] == 12
    assert sections["received_requests"]["page"] == 2
    assert [r.id for r in sections["received_requests"]["items"]] == [created[1].id, created[0].id]
