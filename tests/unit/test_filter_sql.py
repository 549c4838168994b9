"""Unit tests for compiling filter results into SQL."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql

from powerbill.filters.sql import (
    InvalidSortFieldError,
    apply_filters,
    apply_predicate,
    apply_sort,
    resolve_column,
)
from powerbill.filters.translator import translate
from powerbill.filters.types import (
    Contains,
    FilterConfigurationError,
    Predicate,
    Range,
    SortDirection,
    SortSpec,
)
from powerbill.models import Bill, Customer, Rate
from powerbill.repositories.bill_repository import CUSTOMER_ALIASES


def _sql(stmt, literal: bool = True) -> str:
    kwargs = {"literal_binds": True} if literal else {}
    return str(stmt.compile(dialect=postgresql.dialect(), compile_kwargs=kwargs))


def _params(stmt) -> list:
    return list(stmt.compile(dialect=postgresql.dialect()).params.values())


class TestResolveColumn:
    def test_plain_attribute(self):
        assert resolve_column(Customer, "watch_id") is Customer.watch_id

    def test_camel_case(self):
        assert resolve_column(Customer, "createdAt") is Customer.created_at

    def test_alias(self):
        assert resolve_column(Bill, "customer.name", CUSTOMER_ALIASES) is Customer.name

    def test_unknown(self):
        assert resolve_column(Customer, "shoe_size") is None


class TestApplyPredicate:
    def test_customers_scenario(self):
        result = translate({"status": "Active", "search": "john"}, "customers")
        sql = _sql(apply_predicate(select(Customer), Customer, result.predicate))
        assert "customers.status = 2" in sql
        assert "customers.name ILIKE" in sql
        assert " OR " in sql
        assert "customers.email ILIKE" in sql

    def test_empty_predicate_leaves_statement_alone(self):
        stmt = select(Customer)
        assert apply_predicate(stmt, Customer, Predicate()) is stmt

    def test_one_of(self):
        result = translate({"status": "Active,Suspended"}, "customers")
        sql = _sql(apply_predicate(select(Customer), Customer, result.predicate))
        assert "customers.status IN (2, 3)" in sql

    def test_range(self):
        predicate = Predicate(
            constraints={
                "effective_date": Range(
                    gte=datetime(2024, 1, 1, tzinfo=UTC), lte=datetime(2024, 6, 1, tzinfo=UTC)
                )
            }
        )
        sql = _sql(apply_predicate(select(Rate), Rate, predicate), literal=False)
        assert "rates.effective_date >=" in sql
        assert "rates.effective_date <=" in sql

    def test_contains_escapes_wildcards(self):
        predicate = Predicate(constraints={"name": Contains("50%_off")})
        stmt = apply_predicate(select(Customer), Customer, predicate)
        assert "%50\\%\\_off%" in _params(stmt)

    def test_contains_casts_non_text_columns(self):
        result = translate({"search": "2.5"}, "rates")
        sql = _sql(apply_predicate(select(Rate), Rate, result.predicate))
        assert "CAST(rates.rate_value AS VARCHAR)" in sql

    def test_joined_customer_search(self):
        result = translate({"search": "WATCH001"}, "bills")
        stmt = select(Bill, Customer).join(Customer, Bill.customer_id == Customer.id)
        sql = _sql(apply_predicate(stmt, Bill, result.predicate, CUSTOMER_ALIASES))
        assert "bills.code ILIKE" in sql
        assert "customers.watch_id ILIKE" in sql

    def test_unknown_field(self):
        predicate = Predicate(constraints={"shoe_size": Contains("9")})
        with pytest.raises(FilterConfigurationError):
            apply_predicate(select(Customer), Customer, predicate)


class TestApplySortAndPaging:
    def test_sort_desc(self):
        sql = _sql(apply_sort(select(Customer), Customer, SortSpec("createdAt")))
        assert "ORDER BY customers.created_at DESC" in sql

    def test_sort_asc(self):
        sql = _sql(apply_sort(select(Customer), Customer, SortSpec("name", SortDirection.asc)))
        assert "ORDER BY customers.name ASC" in sql

    def test_unknown_sort_field(self):
        with pytest.raises(InvalidSortFieldError, match="shoe_size"):
            apply_sort(select(Customer), Customer, SortSpec("shoe_size"))

    def test_apply_filters_pages(self):
        result = translate({"page": "3", "limit": "20"}, "customers")
        sql = _sql(apply_filters(select(Customer), Customer, result))
        assert "LIMIT 20" in sql
        assert "OFFSET 40" in sql

    def test_count_query(self):
        result = translate({"status": "Suspended"}, "customers")
        stmt = apply_predicate(
            select(func.count()).select_from(Customer), Customer, result.predicate
        )
        assert "count(*)" in _sql(stmt)
