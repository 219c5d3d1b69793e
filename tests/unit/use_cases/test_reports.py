"""Unit tests for the outstanding and aging report use cases"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.repositories.report_repository import (
    DeliveryReportRow,
    DeliveryTotals,
    OpenBalanceRow,
    TopCustomerRow,
)
from src.app.use_cases.reports.get_aging_report import GetAgingReport
from src.app.use_cases.reports.get_customer_analytics import GetCustomerAnalytics
from src.app.use_cases.reports.get_customer_outstanding import GetCustomerOutstanding
from src.app.use_cases.reports.get_delivery_report import GetDeliveryReport, completion_rate
from src.app.use_cases.reports.get_financial_summary import GetFinancialSummary

AS_OF = date(2024, 6, 30)


def open_row(customer_id, invoice_id, due_date, balance, name="Asha Patil"):
    return OpenBalanceRow(
        customer_id=customer_id,
        customer_code=f"CUST-{customer_id:05d}",
        customer_name=name,
        area_id=1,
        invoice_id=invoice_id,
        due_date=due_date,
        balance_amount=Decimal(balance),
    )


@pytest.fixture
def mock_report_repo():
    return MagicMock()


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=MagicMock(id=1))
    return repo


@pytest.mark.asyncio
class TestGetCustomerOutstanding:
    """Test per-customer aging buckets"""

    async def test_splits_balances_into_buckets(self, mock_customer_repo, mock_report_repo):
        """
        Given: Open invoices not yet due, 10, 45, 75 and 120 days overdue
        When: Outstanding is computed as of 2024-06-30
        Then: Each balance lands in its own bucket and the total is their sum
        """
        # Arrange
        mock_report_repo.get_open_balances = AsyncMock(
            return_value=[
                open_row(1, 1, date(2024, 7, 10), "100.00"),
                open_row(1, 2, date(2024, 6, 20), "20.00"),
                open_row(1, 3, date(2024, 5, 16), "30.00"),
                open_row(1, 4, date(2024, 4, 16), "40.00"),
                open_row(1, 5, date(2024, 3, 2), "50.00"),
            ]
        )
        use_case = GetCustomerOutstanding(mock_customer_repo, mock_report_repo)

        # Act
        result = await use_case.execute(1, as_of=AS_OF)

        # Assert
        assert result.is_ok()
        outstanding = result.value
        assert outstanding.current_amount == Decimal("100.00")
        assert outstanding.days_1_30 == Decimal("20.00")
        assert outstanding.days_31_60 == Decimal("30.00")
        assert outstanding.days_61_90 == Decimal("40.00")
        assert outstanding.days_90_plus == Decimal("50.00")
        assert outstanding.total_outstanding == Decimal("240.00")
        mock_report_repo.get_open_balances.assert_called_once_with(customer_id=1)

    async def test_customer_without_open_invoices_owes_nothing(
        self, mock_customer_repo, mock_report_repo
    ):
        mock_report_repo.get_open_balances = AsyncMock(return_value=[])
        use_case = GetCustomerOutstanding(mock_customer_repo, mock_report_repo)

        result = await use_case.execute(1, as_of=AS_OF)

        assert result.is_ok()
        assert result.value.total_outstanding == Decimal("0")
        assert result.value.days_90_plus == Decimal("0")

    async def test_empty_buckets_serialize_with_two_decimals(
        self, mock_customer_repo, mock_report_repo
    ):
        """Empty and filled buckets render in the same 0.00 shape"""
        mock_report_repo.get_open_balances = AsyncMock(
            return_value=[open_row(1, 1, date(2024, 6, 20), "30.00")]
        )
        use_case = GetCustomerOutstanding(mock_customer_repo, mock_report_repo)

        result = await use_case.execute(1, as_of=AS_OF)

        body = result.value.model_dump(mode="json")
        assert body["days_1_30"] == "30.00"
        assert body["current_amount"] == "0.00"
        assert body["days_90_plus"] == "0.00"
        assert body["total_outstanding"] == "30.00"

    async def test_unknown_customer(self, mock_customer_repo, mock_report_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)
        mock_report_repo.get_open_balances = AsyncMock()
        use_case = GetCustomerOutstanding(mock_customer_repo, mock_report_repo)

        result = await use_case.execute(42)

        assert result.is_err()
        assert result.error.code == "CUSTOMER_NOT_FOUND"
        mock_report_repo.get_open_balances.assert_not_called()


@pytest.mark.asyncio
class TestGetAgingReport:
    """Test receivables aging across customers"""

    async def test_groups_by_customer_and_orders_by_total(self, mock_report_repo):
        mock_report_repo.get_open_balances = AsyncMock(
            return_value=[
                open_row(1, 1, date(2024, 7, 15), "30.00"),
                open_row(2, 2, date(2024, 5, 1), "80.00", name="Ravi Kulkarni"),
                open_row(2, 3, date(2024, 6, 25), "20.00", name="Ravi Kulkarni"),
            ]
        )
        use_case = GetAgingReport(mock_report_repo)

        result = await use_case.execute(as_of=AS_OF)

        assert result.is_ok()
        report = result.value
        assert [row.customer_id for row in report.customers] == [2, 1]

        ravi = report.customers[0]
        assert ravi.open_invoices == 2
        assert ravi.total_outstanding == Decimal("100.00")
        assert ravi.days_31_60 == Decimal("80.00")
        assert ravi.days_1_30 == Decimal("20.00")

        assert report.totals.total_outstanding == Decimal("130.00")
        assert report.totals.current_amount == Decimal("30.00")

    async def test_empty_report(self, mock_report_repo):
        mock_report_repo.get_open_balances = AsyncMock(return_value=[])

        result = await GetAgingReport(mock_report_repo).execute(as_of=AS_OF)

        assert result.is_ok()
        assert result.value.customers == []
        assert result.value.totals.total_outstanding == Decimal("0")

    async def test_repository_failure(self, mock_report_repo):
        mock_report_repo.get_open_balances = AsyncMock(side_effect=Exception("timeout"))

        result = await GetAgingReport(mock_report_repo).execute(area_id=3)

        assert result.is_err()
        assert result.error.code == "AGING_REPORT_FAILED"


@pytest.mark.asyncio
class TestGetFinancialSummary:

    async def test_combines_revenue_collections_and_receivables(self, mock_report_repo):
        """
        Given: Delivered revenue, UPI and cash payments, two open invoices and three active plans
        When: The summary is built for March
        Then: Every payment method is listed and totals add up
        """
        # Arrange
        mock_report_repo.get_delivery_totals = AsyncMock(
            return_value=DeliveryTotals(
                total_deliveries=40,
                completed_deliveries=36,
                total_revenue=Decimal("2160.00"),
                total_quantity_delivered=Decimal("36.00"),
            )
        )
        mock_report_repo.get_payment_totals_by_method = AsyncMock(
            return_value={"upi": Decimal("1500.00"), "cash": Decimal("300.00")}
        )
        mock_report_repo.count_payments = AsyncMock(return_value=4)
        mock_report_repo.get_open_balances = AsyncMock(
            return_value=[
                open_row(1, 1, date(2024, 4, 5), "200.00"),
                open_row(2, 2, date(2024, 4, 5), "160.00", name="Ravi Kulkarni"),
            ]
        )
        mock_report_repo.get_active_subscription_counts = AsyncMock(
            return_value={"daily": 2, "weekly": 1}
        )

        # Act
        result = await GetFinancialSummary(mock_report_repo).execute(
            date_from=date(2024, 3, 1), date_to=date(2024, 3, 31)
        )

        # Assert
        assert result.is_ok()
        summary = result.value
        assert summary.revenue.total_revenue == Decimal("2160.00")
        assert summary.payments.total_collected == Decimal("1800.00")
        assert summary.payments.total_payments == 4
        assert summary.payments.by_method["cheque"] == Decimal("0")
        assert set(summary.payments.by_method) == {"cash", "upi", "card", "bank_transfer", "cheque"}
        assert summary.outstanding.total_outstanding == Decimal("360.00")
        assert summary.outstanding.outstanding_invoices == 2
        assert summary.subscriptions.active_subscriptions == 3
        assert summary.subscriptions.custom_plans == 0
        mock_report_repo.get_delivery_totals.assert_called_once_with(date(2024, 3, 1), date(2024, 3, 31))

    async def test_reversed_range(self, mock_report_repo):
        mock_report_repo.get_delivery_totals = AsyncMock()

        result = await GetFinancialSummary(mock_report_repo).execute(
            date_from=date(2024, 3, 31), date_to=date(2024, 3, 1)
        )

        assert result.is_err()
        assert result.error.code == "INVALID_DATE_RANGE"
        mock_report_repo.get_delivery_totals.assert_not_called()


@pytest.mark.asyncio
class TestGetDeliveryReport:

    async def test_rows_carry_completion_rate(self, mock_report_repo):
        mock_report_repo.get_delivery_report = AsyncMock(
            return_value=[
                DeliveryReportRow(
                    scheduled_date=date(2024, 3, 4),
                    group_id=3,
                    group_name="Kothrud",
                    total_deliveries=3,
                    completed=2,
                    missed=1,
                    cancelled=0,
                    total_quantity_scheduled=Decimal("4.00"),
                    total_quantity_delivered=Decimal("3.00"),
                    total_amount=Decimal("180.00"),
                )
            ]
        )

        result = await GetDeliveryReport(mock_report_repo).execute(group_by="area")

        assert result.is_ok()
        assert result.value.group_by == "area"
        row = result.value.rows[0]
        assert row.group_name == "Kothrud"
        assert row.completion_rate == Decimal("66.67")
        mock_report_repo.get_delivery_report.assert_called_once_with(
            group_by="area", date_from=None, date_to=None, area_id=None
        )

    async def test_completion_rate_of_empty_group(self):
        assert completion_rate(0, 0) == Decimal("0")
        assert completion_rate(4, 4) == Decimal("100.00")


@pytest.mark.asyncio
class TestGetCustomerAnalytics:

    async def test_growth_is_grouped_by_joining_month(self, mock_report_repo):
        mock_report_repo.get_customer_status_counts = AsyncMock(
            return_value={"active": 3, "suspended": 1}
        )
        mock_report_repo.get_joining_dates = AsyncMock(
            return_value=[date(2024, 1, 5), date(2024, 3, 2), date(2024, 3, 20), date(2024, 3, 31)]
        )
        mock_report_repo.get_top_customers = AsyncMock(
            return_value=[
                TopCustomerRow(
                    customer_id=1,
                    customer_code="CUST-00001",
                    customer_name="Asha Patil",
                    phone="9876500001",
                    area_name="Kothrud",
                    total_deliveries=30,
                    total_revenue=Decimal("1800.00"),
                    active_subscriptions=1,
                )
            ]
        )
        mock_report_repo.get_product_popularity = AsyncMock(return_value=[])

        result = await GetCustomerAnalytics(mock_report_repo).execute()

        assert result.is_ok()
        analytics = result.value
        assert analytics.customer_stats.total_customers == 4
        assert analytics.customer_stats.suspended_customers == 1
        assert analytics.customer_stats.inactive_customers == 0
        assert [(p.month, p.new_customers) for p in analytics.growth_trend] == [
            ("2024-03", 3),
            ("2024-01", 1),
        ]
        assert analytics.top_customers[0].total_revenue == Decimal("1800.00")
        assert analytics.product_popularity == []
