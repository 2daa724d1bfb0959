from decimal import Decimal

import pytest

from distro_ready.domain.models import WriterEarning, WriterSplit
from distro_ready.domain.policies import FeeSchedule, resolve_fee_schedule
from distro_ready.readiness_options import RevenueEventType, WriterRole
from distro_ready.revenue_split import (
    ValidationError,
    compute_fees,
    distribute_revenue,
    fan_out,
    validate_splits,
)


def _earnings(result):
    return {earning.writer_profile_id: earning.earnings_cents for earning in result}


def test_three_way_split_distributes_exactly():
    splits = [WriterSplit(1, 60.0), WriterSplit(2, 30.0), WriterSplit(3, 10.0)]

    result = fan_out(1000, splits)

    assert _earnings(result) == {1: 600, 2: 300, 3: 100}
    assert sum(earning.earnings_cents for earning in result) == 1000


def test_single_full_split_receives_everything():
    assert fan_out(1000, [WriterSplit(1, 100.0)]) == [WriterEarning(writer_profile_id=1, earnings_cents=1000)]


def test_floor_rounding_never_over_distributes():
    splits = [WriterSplit(1, 33.33), WriterSplit(2, 33.33), WriterSplit(3, 33.34)]

    result = fan_out(100, splits)

    assert _earnings(result) == {1: 33, 2: 33, 3: 33}
    assert sum(earning.earnings_cents for earning in result) <= 100


def test_splits_above_one_hundred_within_tolerance_never_over_pay():
    splits = [WriterSplit(1, 50.005), WriterSplit(2, 50.005)]
    validate_splits(splits)

    result = fan_out(1_000_000, splits)

    assert _earnings(result) == {1: 500_000, 2: 500_000}
    assert sum(earning.earnings_cents for earning in result) <= 1_000_000


def test_distribution_remainder_is_never_negative_for_over_hundred_splits():
    distribution = distribute_revenue(
        1_000_000,
        RevenueEventType.STREAM,
        [WriterSplit(1, 60.005), WriterSplit(2, 40.005)],
        owner_profile_id=1,
    )

    assert sum(earning.earnings_cents for earning in distribution.earnings) <= distribution.artist_net_cents
    assert distribution.undistributed_cents >= 0


def test_decimal_arithmetic_avoids_float_drift():
    splits = [WriterSplit(1, 29.0), WriterSplit(2, 71.0)]

    assert _earnings(fan_out(700, splits)) == {1: 203, 2: 497}


def test_invited_writers_and_zero_shares_are_skipped():
    result = fan_out(1000, [WriterSplit(1, 50.0), WriterSplit(None, 50.0, name="Invited co-writer")])
    assert _earnings(result) == {1: 500}

    result = fan_out(1000, [WriterSplit(1, 100.0), WriterSplit(2, 0.0, role=WriterRole.PRODUCER)])
    assert _earnings(result) == {1: 1000}


@pytest.mark.parametrize(
    ("splits", "code"),
    [
        ([WriterSplit(1, 50.0), WriterSplit(2, 40.0)], "split_sum_invalid"),
        ([WriterSplit(1, 100.02)], "percentage_out_of_range"),
        ([WriterSplit(1, 120.0), WriterSplit(2, -20.0)], "percentage_out_of_range"),
        ([WriterSplit(1, float("nan"))], "percentage_out_of_range"),
        ([], "split_sum_invalid"),
    ],
)
def test_validate_splits_rejects_invalid_input(splits, code):
    with pytest.raises(ValidationError) as exc_info:
        validate_splits(splits)

    assert exc_info.value.code == code
    assert exc_info.value.as_dict()["code"] == code


def test_validate_splits_tolerates_rounding():
    validate_splits([WriterSplit(1, 33.33), WriterSplit(2, 33.33), WriterSplit(3, 33.33)])


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError, match="must add up to 100%"):
        fan_out(1000, [WriterSplit(1, 90.0)])


@pytest.mark.parametrize("total", [-1, 10.5, True])
def test_fan_out_rejects_invalid_totals(total):
    with pytest.raises(ValidationError):
        fan_out(total, [WriterSplit(1, 100.0)])


def test_stream_keeps_ten_percent_platform_fee():
    distribution = distribute_revenue(
        1000,
        RevenueEventType.STREAM,
        [WriterSplit(7, 60.0), WriterSplit(8, 40.0)],
        owner_profile_id=7,
    )

    assert distribution.platform_fee_cents == 100
    assert distribution.processing_fee_cents == 0
    assert distribution.artist_net_cents == 900
    assert _earnings(distribution.earnings) == {7: 540, 8: 360}
    assert distribution.undistributed_cents == 0


def test_tip_without_splits_pays_owner_after_processing_fee():
    distribution = distribute_revenue(1000, RevenueEventType.TIP, [], owner_profile_id=42)

    assert distribution.platform_fee_cents == 0
    assert distribution.processing_fee_cents == 59
    assert distribution.artist_net_cents == 941
    assert _earnings(distribution.earnings) == {42: 941}


def test_sale_applies_platform_and_processing_fees():
    distribution = distribute_revenue(1000, RevenueEventType.SALE, [WriterSplit(3, 100.0)], owner_profile_id=3)

    assert (distribution.platform_fee_cents, distribution.processing_fee_cents) == (50, 59)
    assert distribution.artist_net_cents == 891


def test_fees_are_clamped_to_the_total():
    distribution = distribute_revenue(10, RevenueEventType.TIP, [], owner_profile_id=1)

    assert distribution.processing_fee_cents == 10
    assert distribution.artist_net_cents == 0
    assert _earnings(distribution.earnings) == {1: 0}


def test_distribute_revenue_validates_splits_before_fees():
    with pytest.raises(ValidationError):
        distribute_revenue(1000, RevenueEventType.STREAM, [WriterSplit(1, 70.0)], owner_profile_id=1)


def test_compute_fees_with_custom_schedule():
    schedule = FeeSchedule(policy_id="promo", platform_fee_rate=Decimal("0.15"))

    assert compute_fees(999, schedule) == (149, 0)


def test_resolve_fee_schedule_reports_missing_event():
    with pytest.raises(ValueError, match="No fee schedule"):
        resolve_fee_schedule(RevenueEventType.SALE, {})


def test_distribution_as_dict_uses_contract_keys():
    payload = distribute_revenue(1000, RevenueEventType.STREAM, [], owner_profile_id=5).as_dict()

    assert payload == {
        "eventType": "stream",
        "totalAmount": 1000,
        "platformFee": 100,
        "processingFee": 0,
        "artistNetAmount": 900,
        "undistributedAmount": 0,
        "distributions": [{"writerProfileId": 5, "earningsCents": 900}],
    }
