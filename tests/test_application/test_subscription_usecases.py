"""Tests for subscription use cases — gate before storage, pagination defaults, summary."""
from datetime import date
from uuid import uuid4

import pytest

from app.application.subscriptions import (
    CreateSubscriptionUseCase, GetSubscriptionUseCase, UpdateSubscriptionUseCase,
    DeleteSubscriptionUseCase, ListSubscriptionsUseCase, SummarizeSubscriptionsUseCase,
)
from app.domain.errors import InvalidPrice, InvalidDateRange, InvalidPeriod, InvalidIdentifier, NotFound
from app.domain.filters import SubscriptionFilter, SummaryFilter
from app.domain.subscription import Subscription


def _sub(user_id, service_name="Netflix", price=100, start=date(2025, 1, 1), end=None, sub_id=None):
    return Subscription(
        id=sub_id,
        user_id=user_id,
        service_name=service_name,
        price=price,
        start_date=start,
        end_date=end,
    )


# ======================================================================
# 1. Create
# ======================================================================

class TestCreateSubscription:
    def test_create_assigns_id_and_timestamps(self, fake_repo, user_id):
        created = CreateSubscriptionUseCase(fake_repo).execute(_sub(user_id))
        assert created.id is not None
        assert created.created_at is not None
        assert created.updated_at == created.created_at
        assert [c[0] for c in fake_repo.calls] == ["create"]

    def test_negative_price_never_reaches_storage(self, fake_repo, user_id):
        with pytest.raises(InvalidPrice, match="price must be >= 0"):
            CreateSubscriptionUseCase(fake_repo).execute(_sub(user_id, price=-100))
        assert fake_repo.calls == []

    def test_end_before_start_never_reaches_storage(self, fake_repo, user_id):
        with pytest.raises(InvalidDateRange, match="end_date cannot be before start_date"):
            CreateSubscriptionUseCase(fake_repo).execute(
                _sub(user_id, start=date(2025, 5, 1), end=date(2025, 4, 1))
            )
        assert fake_repo.calls == []


# ======================================================================
# 2. Get / Update / Delete
# ======================================================================

class TestUpdateSubscription:
    def test_update_changes_fields(self, fake_repo, user_id):
        created = CreateSubscriptionUseCase(fake_repo).execute(_sub(user_id))

        updated = UpdateSubscriptionUseCase(fake_repo).execute(
            _sub(user_id, service_name="Netflix Premium", price=250, sub_id=created.id)
        )
        assert updated.service_name == "Netflix Premium"
        assert updated.price == 250

        fetched = GetSubscriptionUseCase(fake_repo).execute(created.id)
        assert fetched.service_name == "Netflix Premium"
        assert fetched.price == 250
        assert fetched.created_at == created.created_at
        assert fetched.updated_at > created.updated_at

    def test_negative_price_never_reaches_storage(self, fake_repo, user_id):
        with pytest.raises(InvalidPrice):
            UpdateSubscriptionUseCase(fake_repo).execute(_sub(user_id, price=-1, sub_id=uuid4()))
        assert fake_repo.calls == []

    def test_end_before_start_never_reaches_storage(self, fake_repo, user_id):
        with pytest.raises(InvalidDateRange):
            UpdateSubscriptionUseCase(fake_repo).execute(
                _sub(user_id, start=date(2025, 5, 1), end=date(2024, 5, 1), sub_id=uuid4())
            )
        assert fake_repo.calls == []

    def test_missing_id_rejected(self, fake_repo, user_id):
        with pytest.raises(InvalidIdentifier):
            UpdateSubscriptionUseCase(fake_repo).execute(_sub(user_id))
        assert fake_repo.calls == []

    def test_unknown_id_not_found(self, fake_repo, user_id):
        with pytest.raises(NotFound):
            UpdateSubscriptionUseCase(fake_repo).execute(_sub(user_id, sub_id=uuid4()))


class TestDeleteSubscription:
    def test_delete_then_get_not_found(self, fake_repo, user_id):
        created = CreateSubscriptionUseCase(fake_repo).execute(_sub(user_id))
        DeleteSubscriptionUseCase(fake_repo).execute(created.id)

        with pytest.raises(NotFound):
            GetSubscriptionUseCase(fake_repo).execute(created.id)

    def test_delete_unknown_not_found(self, fake_repo):
        with pytest.raises(NotFound):
            DeleteSubscriptionUseCase(fake_repo).execute(uuid4())


# ======================================================================
# 3. List
# ======================================================================

class TestListSubscriptions:
    def test_default_limit_offset(self, fake_repo):
        """limit=0, offset=-1 доходят до storage как 20, 0"""
        result = ListSubscriptionsUseCase(fake_repo).execute(SubscriptionFilter(limit=0, offset=-1))

        assert result == []
        op, (passed_filter,) = fake_repo.calls[-1]
        assert op == "list"
        assert passed_filter.limit == 20
        assert passed_filter.offset == 0

    def test_filter_by_service_name_across_users(self, fake_repo, user_id, other_user_id):
        create = CreateSubscriptionUseCase(fake_repo)
        create.execute(_sub(user_id, service_name="Yandex"))
        create.execute(_sub(other_user_id, service_name="Yandex"))
        create.execute(_sub(user_id, service_name="Netflix"))

        result = ListSubscriptionsUseCase(fake_repo).execute(SubscriptionFilter(service_name="Yandex"))
        assert len(result) == 2
        assert {s.user_id for s in result} == {user_id, other_user_id}

    def test_newest_first(self, fake_repo, user_id):
        create = CreateSubscriptionUseCase(fake_repo)
        first = create.execute(_sub(user_id, service_name="First"))
        second = create.execute(_sub(user_id, service_name="Second"))

        result = ListSubscriptionsUseCase(fake_repo).execute(SubscriptionFilter(user_id=user_id))
        assert [s.id for s in result] == [second.id, first.id]


# ======================================================================
# 4. Summary
# ======================================================================

class TestSummarizeSubscriptions:
    @pytest.fixture
    def two_subscriptions(self, fake_repo, user_id):
        create = CreateSubscriptionUseCase(fake_repo)
        create.execute(_sub(user_id, service_name="Netflix", price=300, start=date(2025, 1, 1)))
        create.execute(_sub(user_id, service_name="Spotify", price=200, start=date(2025, 2, 1)))

    def test_overlapping_total(self, fake_repo, user_id, two_subscriptions):
        total = SummarizeSubscriptionsUseCase(fake_repo).execute(
            SummaryFilter(date(2025, 1, 1), date(2025, 3, 1), user_id=user_id)
        )
        assert total == 500

    def test_single_month_excludes_later_start(self, fake_repo, user_id, two_subscriptions):
        total = SummarizeSubscriptionsUseCase(fake_repo).execute(
            SummaryFilter(date(2025, 1, 1), date(2025, 1, 1), user_id=user_id)
        )
        assert total == 300

    def test_no_matches_is_zero(self, fake_repo, other_user_id, two_subscriptions):
        total = SummarizeSubscriptionsUseCase(fake_repo).execute(
            SummaryFilter(date(2025, 1, 1), date(2025, 12, 1), user_id=other_user_id)
        )
        assert total == 0

    def test_backwards_period_never_reaches_storage(self, fake_repo, user_id):
        with pytest.raises(InvalidPeriod):
            SummarizeSubscriptionsUseCase(fake_repo).execute(
                SummaryFilter(date(2025, 3, 1), date(2025, 1, 1), user_id=user_id)
            )
        assert fake_repo.calls == []
