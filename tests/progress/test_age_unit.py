"""Unit tests for onboarding issue age calculation."""

from datetime import timedelta

from sandbox_onboarding.progress.age import calculate_age, utc_now
from sandbox_onboarding.progress.models import AgeInfo


class TestCalculateAge:

    def test_whole_days(self, now):
        age = calculate_age(now - timedelta(days=100), now=now)

        assert age == AgeInfo(days=100, weeks=14, months=3)

    def test_partial_day_is_floored(self, now):
        age = calculate_age(now - timedelta(days=1, hours=23, minutes=59), now=now)

        assert age.days == 1

    def test_month_is_thirty_days(self, now):
        assert calculate_age(now - timedelta(days=29), now=now).months == 0
        assert calculate_age(now - timedelta(days=30), now=now).months == 1
        assert calculate_age(now - timedelta(days=365), now=now).months == 12

    def test_weeks(self, now):
        assert calculate_age(now - timedelta(days=6), now=now).weeks == 0
        assert calculate_age(now - timedelta(days=7), now=now).weeks == 1
        assert calculate_age(now - timedelta(days=335), now=now).weeks == 47

    def test_future_creation_time_yields_negative_age(self, now):
        age = calculate_age(now + timedelta(hours=1), now=now)

        assert age.days == -1
        assert age.weeks == -1
        assert age.months == -1

    def test_same_now_gives_same_result(self, now):
        created_at = now - timedelta(days=200, hours=5)

        assert calculate_age(created_at, now=now) == calculate_age(created_at, now=now)

    def test_defaults_to_current_time(self):
        age = calculate_age(utc_now() - timedelta(days=40))

        assert age.days == 40
        assert age.months == 1
