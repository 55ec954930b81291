"""
Tests for the seat allocation policy.

Verifies that AllocationPolicy:
- Picks the lowest free table when none is requested
- Grants a requested table only when it is free
- Reports a full venue, a missing floor, and an already seated entry
  as decisions rather than exceptions
- Rejects venues and floors outside the floor plan
"""

import pytest

from app.core.errors import UnknownFloorConfigurationError, UnknownVenueError
from app.services.seating.allocation import AllocationPolicy, SeatOutcome
from tests.utils.seating import TEST_CAPACITIES, EntryRecord, VisitRecord


class TestRequestSeat:
    def setup_method(self):
        self.policy = AllocationPolicy(TEST_CAPACITIES)

    # ------------------------------------------------------------------ #
    # Seat selection
    # ------------------------------------------------------------------ #

    def test_empty_venue_gets_table_one(self):
        decision = self.policy.request_seat("Sala 10", None, [])

        assert decision.ok
        assert decision.outcome == SeatOutcome.SEATED
        assert decision.table_number == 1
        assert decision.floor is None
        assert decision.message is None

    def test_lowest_free_table_is_chosen(self):
        visits = [VisitRecord(n) for n in (1, 2, 3)]

        decision = self.policy.request_seat("Sala 10", None, visits)

        assert decision.table_number == 4

    def test_requested_occupied_table_is_refused(self):
        visits = [VisitRecord(n) for n in (1, 2, 3)]

        decision = self.policy.request_seat(
            "Sala 10", None, visits, desired_table_number=2
        )

        assert decision.outcome == SeatOutcome.TABLE_OCCUPIED
        assert decision.table_number is None
        assert decision.free_tables == [4, 5, 6, 7, 8, 9, 10]
        assert "another table" in decision.message

    def test_requested_free_table_is_granted(self):
        visits = [VisitRecord(1)]

        decision = self.policy.request_seat(
            "Sala 10", None, visits, desired_table_number=6
        )

        assert decision.ok
        assert decision.table_number == 6

    def test_table_outside_floor_plan_is_refused(self):
        decision = self.policy.request_seat("Sala 10", None, [], desired_table_number=11)

        assert decision.outcome == SeatOutcome.TABLE_OCCUPIED

    def test_full_venue(self):
        visits = [VisitRecord(n, venue_id="Sala 3") for n in (1, 2, 3)]

        assert (
            self.policy.request_seat("Sala 3", None, visits).outcome
            == SeatOutcome.VENUE_FULL
        )
        assert (
            self.policy.request_seat("Sala 3", None, visits, desired_table_number=2).outcome
            == SeatOutcome.VENUE_FULL
        )

    def test_finished_visit_frees_its_table(self):
        visits = [VisitRecord(n, venue_id="Sala 3") for n in (1, 2, 3)]
        visits[1].status = "finished"

        decision = self.policy.request_seat("Sala 3", None, visits)

        assert decision.ok
        assert decision.table_number == 2

    # ------------------------------------------------------------------ #
    # Floors
    # ------------------------------------------------------------------ #

    def test_floored_venue_requires_a_floor(self):
        decision = self.policy.request_seat("Andares", None, [])

        assert decision.outcome == SeatOutcome.FLOOR_REQUIRED
        assert decision.free_tables == []

    def test_floored_venue_uses_the_selected_floor(self):
        visits = [VisitRecord(1, venue_id="Andares", floor="Mezanino")]

        decision = self.policy.request_seat("Andares", "Mezanino", visits)

        assert decision.table_number == 2
        assert decision.floor == "Mezanino"

    def test_floor_is_ignored_for_venue_without_floors(self):
        decision = self.policy.request_seat("Sala 10", "Térreo", [])

        assert decision.ok
        assert decision.floor is None

    # ------------------------------------------------------------------ #
    # Configuration errors
    # ------------------------------------------------------------------ #

    def test_unknown_venue_raises(self):
        with pytest.raises(UnknownVenueError):
            self.policy.request_seat("Sala 99", None, [])

    def test_unknown_floor_raises(self):
        with pytest.raises(UnknownFloorConfigurationError):
            self.policy.request_seat("Andares", "Subsolo", [])


class TestPromoteFromWaitlist:
    def setup_method(self):
        self.policy = AllocationPolicy(TEST_CAPACITIES)
        self.full = [VisitRecord(n, venue_id="Sala 3") for n in (1, 2, 3)]

    def test_full_venue_keeps_entry_waiting(self):
        decision = self.policy.promote_from_waitlist(EntryRecord(), None, self.full)

        assert decision.outcome == SeatOutcome.VENUE_FULL

    def test_promotion_after_a_table_frees(self):
        self.full[0].status = "finished"

        decision = self.policy.promote_from_waitlist(EntryRecord(), None, self.full)

        assert decision.ok
        assert decision.venue_id == "Sala 3"
        assert decision.table_number == 1

    def test_seated_entry_cannot_be_promoted_again(self):
        decision = self.policy.promote_from_waitlist(
            EntryRecord(status="seated"), None, []
        )

        assert decision.outcome == SeatOutcome.ALREADY_SEATED
        assert not decision.ok

    def test_entry_can_be_seated_in_another_venue(self):
        decision = self.policy.promote_from_waitlist(
            EntryRecord(), None, self.full, venue_id="Sala 10"
        )

        assert decision.ok
        assert decision.venue_id == "Sala 10"

    def test_seated_entry_with_unknown_venue_raises(self):
        with pytest.raises(UnknownVenueError):
            self.policy.promote_from_waitlist(
                EntryRecord(status="seated"), None, [], venue_id="Sala 99"
            )
