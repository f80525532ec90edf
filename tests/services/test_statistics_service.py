"""Aggregates over confirmed and completed donations."""

from core.store import DocumentStore
from models import Donation
from schemas.donation import DonationCreate
from services.donation_service import DonationService
from services.statistics_service import StatisticsService


async def _donate(db, user, amount, status="confirmed", is_anonymous=False):
    return await DocumentStore(db).create(
        Donation, user_id=user.id, amount=amount, status=status, is_anonymous=is_anonymous,
    )


async def test_empty_store_has_zero_totals(test_db):
    totals = await StatisticsService(test_db).get_totals()
    assert totals.total_raised == 0
    assert totals.total_donations == 0
    assert totals.total_supporters == 0


async def test_pending_donation_counts_only_after_confirmation(test_db, donor, admin):
    donations = DonationService(test_db)
    stats = StatisticsService(test_db)

    donation = await donations.create_donation(DonationCreate(amount=500), donor)
    assert (await stats.get_totals()).total_raised == 0

    await donations.update_donation_status(donation.id, "confirmed", admin)
    totals = await stats.get_totals()
    assert totals.total_raised == 500
    assert totals.total_donations == 1
    assert totals.total_supporters == 1


async def test_totals_sum_per_donor(test_db, donor):
    await _donate(test_db, donor, 500)
    await _donate(test_db, donor, 700, status="completed")
    await _donate(test_db, donor, 900, status="cancelled")

    totals = await StatisticsService(test_db).get_totals()
    assert totals.total_raised == 1200
    assert totals.total_donations == 2
    assert totals.total_supporters == 1

    [supporter] = (await StatisticsService(test_db).get_top_supporters(page=1, limit=10)).supporters
    assert supporter.total_amount == 1200
    assert supporter.full_name == donor.full_name


async def test_top_supporters_ranked_by_amount(test_db, make_user):
    alice = await make_user("alice@example.com", full_name="Alice")
    bob = await make_user("bob@example.com", full_name="Bob")
    await _donate(test_db, alice, 500)
    await _donate(test_db, bob, 600)
    await _donate(test_db, alice, 500)
    await _donate(test_db, bob, 5000, status="pending")

    result = await StatisticsService(test_db).get_top_supporters(page=1, limit=10)

    assert [(s.full_name, s.total_amount) for s in result.supporters] == [("Alice", 1000), ("Bob", 600)]
    assert result.pagination.total == 2
    assert result.pagination.totalPages == 1


async def test_ties_are_ordered_by_user_id(test_db, make_user):
    users = [await make_user(f"u{i}@example.com", full_name=f"U{i}") for i in range(3)]
    for user in users:
        await _donate(test_db, user, 500)

    result = await StatisticsService(test_db).get_top_supporters()
    ids = [s.user_id for s in result.supporters]
    assert ids == sorted(u.id for u in users)


async def test_anonymous_donor_uses_placeholder_name(test_db, donor):
    await _donate(test_db, donor, 500)
    await _donate(test_db, donor, 500, is_anonymous=True)

    [supporter] = (await StatisticsService(test_db).get_top_supporters()).supporters
    assert supporter.full_name == "Anonymous"
    assert supporter.is_anonymous is True
    assert supporter.total_amount == 1000


async def test_donor_without_user_record_is_anonymous(test_db):
    await DocumentStore(test_db).create(Donation, user_id="deleted-user", amount=800, status="confirmed")

    [supporter] = (await StatisticsService(test_db).get_top_supporters()).supporters
    assert supporter.full_name == "Anonymous"


async def test_top_supporters_pagination(test_db, make_user):
    for i in range(3):
        user = await make_user(f"p{i}@example.com", full_name=f"P{i}")
        await _donate(test_db, user, 500 + i * 100)

    page = await StatisticsService(test_db).get_top_supporters(page=2, limit=2)
    assert [s.full_name for s in page.supporters] == ["P0"]
    assert page.pagination.totalPages == 2


async def test_user_totals(test_db, donor):
    await _donate(test_db, donor, 500)
    await _donate(test_db, donor, 600, status="completed")
    await _donate(test_db, donor, 700, status="pending")
    await _donate(test_db, donor, 800, status="cancelled")

    stats = await StatisticsService(test_db).get_user_totals(donor)
    assert stats.total_contributed == 1100
    assert stats.pending_amount == 700
    assert stats.confirmed_count == 2
    assert stats.pending_count == 1
    assert stats.cancelled_count == 1
    assert stats.total_donations == 4


async def test_admin_overview(test_db, donor, admin):
    donation = await DonationService(test_db).create_donation(DonationCreate(amount=750), donor)
    await DonationService(test_db).update_donation_status(donation.id, "confirmed", admin)
    await _donate(test_db, donor, 500, status="pending")

    overview = await StatisticsService(test_db).get_admin_overview()

    by_status = {b.status: b for b in overview.donations}
    assert by_status["confirmed"].total_amount == 750
    assert by_status["pending"].count == 1
    assert {b.role: b.count for b in overview.users} == {"user": 1, "admin": 1}
    assert {a.action for a in overview.recent_activity} == {"CREATE_DONATION", "UPDATE_DONATION_STATUS"}
    assert len(overview.monthly_trends) == 1
    assert overview.monthly_trends[0].total_amount == 750
