"""Tests for the customer report queries.

Covers the turnover filter, first order dates, both ranking variants, anomaly
flagging and per-city averages, including ordering and rounding edge cases.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from conftest import make_customer, make_order
from northwind_analytics.core.query import (
    city_profitability_and_intensity,
    customers_with_first_order_date,
    filter_by_turnover_threshold,
    flag_anomalous_customers,
    rank_customers_by_first_order_and_turnover,
    rank_customers_with_first_order_date,
)
from northwind_analytics.core.schemas import CityProfile
from northwind_analytics.core.utils import earliest_order_date, turnover


def names(customers):
    return [c.company_name for c in customers]


class TestFilterByTurnoverThreshold:
    """Tests for filter_by_turnover_threshold."""

    def test_keeps_input_order(self, sample_customers):
        result = filter_by_turnover_threshold(sample_customers, Decimal("800"))
        assert names(result) == ["Alfreds", "Around the Horn", "Seven Seas"]

    def test_threshold_is_strict(self, sample_customers):
        result = filter_by_turnover_threshold(sample_customers, Decimal("887.70"))
        assert names(result) == ["Alfreds", "Seven Seas"]

    def test_customers_without_orders_need_negative_limit(self, sample_customers):
        assert "Empty Shelf" not in names(filter_by_turnover_threshold(sample_customers, 0))
        assert "Empty Shelf" in names(filter_by_turnover_threshold(sample_customers, -1))

    @pytest.mark.parametrize("limit", [Decimal("-1"), Decimal("0"), Decimal("480"), Decimal("5000")])
    def test_partitions_by_limit(self, sample_customers, limit):
        result = filter_by_turnover_threshold(sample_customers, limit)
        assert all(turnover(c) > limit for c in result)
        rejected = [c for c in sample_customers if c not in result]
        assert all(turnover(c) <= limit for c in rejected)

    def test_accepts_one_shot_iterator(self, sample_customers):
        result = filter_by_turnover_threshold(iter(sample_customers), Decimal("800"))
        assert len(result) == 3

    def test_none_input_raises(self):
        with pytest.raises(ValueError, match="customers"):
            filter_by_turnover_threshold(None, Decimal("0"))


class TestCustomersWithFirstOrderDate:
    """Tests for customers_with_first_order_date."""

    def test_excludes_customers_without_orders(self, sample_customers):
        result = customers_with_first_order_date(sample_customers)
        assert [r.customer.company_name for r in result] == [
            "Alfreds",
            "Around the Horn",
            "Seven Seas",
            "B's Beverages",
        ]

    def test_first_order_date_is_minimum(self, sample_customers):
        result = customers_with_first_order_date(sample_customers)
        assert result[0].first_order_date == datetime(1997, 8, 25)
        assert result[1].first_order_date == datetime(1996, 11, 15)

    def test_unsorted_orders(self):
        customer = make_customer(
            "Late First",
            orders=[make_order("1998-01-01", 1), make_order("1996-07-04", 1), make_order("1997-01-01", 1)],
        )
        result = customers_with_first_order_date([customer])
        assert result[0].first_order_date == datetime(1996, 7, 4)


class TestRanking:
    """Tests for both ranking variants."""

    def test_variant_a_order(self, sample_customers):
        result = rank_customers_by_first_order_and_turnover(sample_customers, Decimal("0"))
        assert names(result) == ["B's Beverages", "Seven Seas", "Around the Horn", "Alfreds"]

    def test_variant_a_applies_limit(self, sample_customers):
        result = rank_customers_by_first_order_and_turnover(sample_customers, Decimal("500"))
        assert names(result) == ["Seven Seas", "Around the Horn", "Alfreds"]

    def test_variant_a_excludes_empty_even_with_negative_limit(self, sample_customers):
        result = rank_customers_by_first_order_and_turnover(sample_customers, Decimal("-1"))
        assert "Empty Shelf" not in names(result)

    def test_variant_a_adjacent_pairs_are_ordered(self, sample_customers):
        result = rank_customers_by_first_order_and_turnover(sample_customers, Decimal("0"))
        for x, y in zip(result, result[1:]):
            dx, dy = earliest_order_date(x), earliest_order_date(y)
            assert dx <= dy
            if dx == dy:
                assert turnover(x) >= turnover(y)
                if turnover(x) == turnover(y):
                    assert x.company_name <= y.company_name

    def test_name_breaks_ties_ordinally(self):
        orders = [make_order("1997-01-01", 100)]
        customers = [
            make_customer("beta", orders=orders),
            make_customer("Alpha", orders=orders),
            make_customer("alpha", orders=orders),
        ]
        result = rank_customers_by_first_order_and_turnover(customers, Decimal("0"))
        assert names(result) == ["Alpha", "alpha", "beta"]

    def test_full_ties_keep_input_order(self):
        orders = [make_order("1997-01-01", 100)]
        first = make_customer("Same", city="Lima", orders=orders)
        second = make_customer("Same", city="Quito", orders=orders)
        result = rank_customers_by_first_order_and_turnover([first, second], Decimal("0"))
        assert [c.city for c in result] == ["Lima", "Quito"]

    def test_date_outranks_turnover(self):
        customers = [
            make_customer("Rich", orders=[make_order("1997-02-01", 9000)]),
            make_customer("Early", orders=[make_order("1997-01-31", 1)]),
        ]
        result = rank_customers_by_first_order_and_turnover(customers, Decimal("0"))
        assert names(result) == ["Early", "Rich"]

    def test_no_year_month_grouping(self):
        # Same month, different days: the day still decides before turnover
        customers = [
            make_customer("Big", orders=[make_order("1997-03-20", 5000)]),
            make_customer("Small", orders=[make_order("1997-03-02", 10)]),
        ]
        result = rank_customers_by_first_order_and_turnover(customers, Decimal("0"))
        assert names(result) == ["Small", "Big"]

    def test_variant_b_keeps_all_ordering_customers(self, sample_customers):
        result = rank_customers_with_first_order_date(sample_customers)
        assert [r.customer.company_name for r in result] == [
            "B's Beverages",
            "Seven Seas",
            "Around the Horn",
            "Alfreds",
        ]
        assert result[0].first_order_date == datetime(1996, 8, 26)

    def test_variant_b_matches_variant_a_without_limit(self, sample_customers):
        ranked_a = rank_customers_by_first_order_and_turnover(sample_customers, Decimal("-1"))
        ranked_b = rank_customers_with_first_order_date(sample_customers)
        assert [r.customer for r in ranked_b] == ranked_a

    def test_idempotent(self, sample_customers):
        first = rank_customers_with_first_order_date(sample_customers)
        second = rank_customers_with_first_order_date(sample_customers)
        assert first == second


class TestFlagAnomalousCustomers:
    """Tests for flag_anomalous_customers."""

    @pytest.mark.parametrize(
        "postal_code, region, phone, flagged",
        [
            ("12A45", "WA", "(206)555-1212", True),
            ("12345", "", "(206)555-1212", True),
            ("12345", None, "(206)555-1212", True),
            ("12345", "WA", "206-555-1212", True),
            ("12345", "WA", "(206)555-1212", False),
            ("", "WA", "(206)555-1212", True),
            ("99999999999", "WA", "(206)555-1212", True),
            (" -42 ", "WA", "(206)555-1212", False),
        ],
        ids=[
            "letters_in_postal_code",
            "empty_region",
            "none_region",
            "no_parenthesis",
            "clean",
            "empty_postal_code",
            "postal_code_overflow",
            "signed_postal_code_with_spaces",
        ],
    )
    def test_rules(self, postal_code, region, phone, flagged):
        customer = make_customer(postal_code=postal_code, region=region, phone=phone)
        assert (flag_anomalous_customers([customer]) == [customer]) is flagged

    def test_multiple_violations_listed_once(self):
        customer = make_customer(postal_code="X", region="", phone="555")
        assert flag_anomalous_customers([customer]) == [customer]

    def test_keeps_input_order(self):
        a = make_customer("A", region="")
        b = make_customer("B")
        c = make_customer("C", phone="555-0100")
        assert names(flag_anomalous_customers([a, b, c])) == ["A", "C"]


class TestCityProfitabilityAndIntensity:
    """Tests for city_profitability_and_intensity."""

    def test_lima_example(self):
        customers = [
            make_customer("One", city="Lima", orders=[make_order("1997-01-01", 100)]),
            make_customer(
                "Two",
                city="Lima",
                orders=[
                    make_order("1997-01-01", 50),
                    make_order("1997-02-01", 50),
                    make_order("1997-03-01", 100),
                ],
            ),
        ]
        assert city_profitability_and_intensity(customers) == [
            CityProfile(city="Lima", average_income=150, average_intensity=2)
        ]

    def test_cities_in_first_appearance_order(self, sample_customers):
        result = city_profitability_and_intensity(sample_customers)
        assert result == [
            CityProfile(city="Berlin", average_income=1692, average_intensity=2),
            CityProfile(city="London", average_income=1613, average_intensity=1),
            CityProfile(city="Madrid", average_income=0, average_intensity=0),
        ]

    def test_customers_without_orders_count_as_zero(self):
        customers = [
            make_customer("Busy", city="Quito", orders=[make_order("1997-01-01", 300)] * 3),
            make_customer("Idle", city="Quito"),
        ]
        assert city_profitability_and_intensity(customers) == [
            CityProfile(city="Quito", average_income=450, average_intensity=2)
        ]

    @pytest.mark.parametrize(
        "totals, expected_income",
        [((1, 2), 2), ((2, 3), 2), ((Decimal("0.5"), Decimal("0.5")), 0), ((Decimal("1.5"), Decimal("1.5")), 2)],
        ids=["1.5_up", "2.5_down", "0.5_down", "1.5_exact"],
    )
    def test_income_rounds_half_to_even(self, totals, expected_income):
        customers = [
            make_customer(str(i), city="Lima", orders=[make_order("1997-01-01", t)])
            for i, t in enumerate(totals)
        ]
        assert city_profitability_and_intensity(customers)[0].average_income == expected_income

    @pytest.mark.parametrize(
        "order_counts, expected_intensity",
        [((0, 1), 0), ((1, 2), 2), ((2, 3), 2), ((3, 4), 4)],
    )
    def test_intensity_rounds_half_to_even(self, order_counts, expected_intensity):
        customers = [
            make_customer(str(i), city="Lima", orders=[make_order("1997-01-01", 1)] * n)
            for i, n in enumerate(order_counts)
        ]
        assert city_profitability_and_intensity(customers)[0].average_intensity == expected_intensity

    def test_empty_input(self):
        assert city_profitability_and_intensity([]) == []
