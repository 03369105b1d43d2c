"""Downstream aggregate tables built from the canonical dataset.

These are plain group-by and window computations over already-clean
records; nothing here disambiguates input. Only records with an order date,
an amount and a quantity take part.
"""

import statistics
from collections import Counter
from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from salesprep.models.aggregates import (
    CustomerSummary,
    DailySalesSummary,
    ExecutiveSummary,
    ProductPerformance,
    SalesFact,
    TopPerformer,
)
from salesprep.models.enums import (
    CustomerSegment,
    DayType,
    PerformanceCategory,
    Region,
    TransactionSize,
)
from salesprep.models.records import CanonicalDataset, NormalizedRecord
from salesprep.normalization.amount import CENTS

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

REGIONS: dict[str, Region] = {
    "United States": Region.NORTH_AMERICA,
    "Canada": Region.NORTH_AMERICA,
    "Mexico": Region.NORTH_AMERICA,
    "United Kingdom": Region.EUROPE,
    "Germany": Region.EUROPE,
    "France": Region.EUROPE,
    "Spain": Region.EUROPE,
    "Italy": Region.EUROPE,
    "Netherlands": Region.EUROPE,
    "Belgium": Region.EUROPE,
    "Japan": Region.ASIA,
    "South Korea": Region.ASIA,
    "India": Region.ASIA,
    "Australia": Region.OCEANIA,
}

MOVING_AVERAGE_WINDOW = 7
QUINTILES = 5

K = TypeVar("K", bound=Hashable)


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _group_by(
    records: Iterable[NormalizedRecord], key: Callable[[NormalizedRecord], K]
) -> dict[K, list[NormalizedRecord]]:
    groups: dict[K, list[NormalizedRecord]] = {}
    for record in records:
        groups.setdefault(key(record), []).append(record)
    return groups


def _mode(values: Iterable[str | None]) -> str | None:
    """Most frequent non-null value; ties go to the smallest value."""
    counts = Counter(v for v in values if v is not None)
    if not counts:
        return None
    return min(counts.items(), key=lambda item: (-item[1], item[0]))[0]


def ntile(count: int, buckets: int) -> list[int]:
    """Bucket numbers for ``count`` ordered rows, as SQL NTILE assigns them."""
    size, extra = divmod(count, buckets)
    assigned: list[int] = []
    for bucket in range(1, buckets + 1):
        assigned.extend([bucket] * (size + (1 if bucket <= extra else 0)))
    return assigned


def rank_desc(values: Sequence[Decimal | int]) -> list[int]:
    """SQL RANK() ordered descending: ties share a rank, gaps follow."""
    return [1 + sum(1 for other in values if other > value) for value in values]


def top_by_revenue(
    facts: Iterable[SalesFact], key: Callable[[SalesFact], str | None]
) -> TopPerformer | None:
    """The key with the highest summed amount; ties go to the smallest key."""
    totals: dict[str, Decimal] = {}
    for fact in facts:
        k = key(fact)
        if k is not None:
            totals[k] = totals.get(k, Decimal("0")) + fact.amount_usd
    if not totals:
        return None
    best, revenue = min(totals.items(), key=lambda item: (-item[1], item[0]))
    return TopPerformer(key=best, revenue_usd=_money(revenue))


def transaction_size(amount_usd: Decimal) -> TransactionSize:
    if amount_usd < 50:
        return TransactionSize.SMALL
    if amount_usd < 250:
        return TransactionSize.MEDIUM
    if amount_usd < 1000:
        return TransactionSize.LARGE
    return TransactionSize.ENTERPRISE


def region_for(country: str | None) -> Region:
    if country is None:
        return Region.OTHER
    return REGIONS.get(country, Region.OTHER)


def customer_segment(transactions: int) -> CustomerSegment:
    if transactions == 1:
        return CustomerSegment.ONE_TIME
    if transactions <= 3:
        return CustomerSegment.OCCASIONAL
    if transactions <= 6:
        return CustomerSegment.REGULAR
    return CustomerSegment.FREQUENT


@dataclass
class AggregateTables:
    sales_fact: list[SalesFact] = field(default_factory=list)
    customer_summary: list[CustomerSummary] = field(default_factory=list)
    product_performance: list[ProductPerformance] = field(default_factory=list)
    daily_sales_summary: list[DailySalesSummary] = field(default_factory=list)
    executive_summary: ExecutiveSummary | None = None


class Aggregator:
    """Builds the analysis tables from a canonical dataset.

    ``as_of`` stands in for the current date in recency metrics so a run is
    reproducible.
    """

    def __init__(self, as_of: date):
        self.as_of = as_of

    @staticmethod
    def eligible(dataset: CanonicalDataset) -> list[NormalizedRecord]:
        return [
            r for r in dataset.records
            if r.order_date is not None and r.amount_usd is not None and r.quantity is not None
        ]

    def build_all(self, dataset: CanonicalDataset) -> AggregateTables:
        facts = self.sales_fact(dataset)
        return AggregateTables(
            sales_fact=facts,
            customer_summary=self.customer_summary(dataset),
            product_performance=self.product_performance(dataset),
            daily_sales_summary=self.daily_sales_summary(dataset),
            executive_summary=self.executive_summary(facts),
        )

    def sales_fact(self, dataset: CanonicalDataset) -> list[SalesFact]:
        facts: list[SalesFact] = []
        for r in self.eligible(dataset):
            d = r.order_date
            facts.append(SalesFact(
                transaction_id=r.transaction_id,
                customer_id=r.customer_id,
                product_sku=r.product_sku,
                order_date=d,
                order_year=d.year,
                order_quarter=(d.month - 1) // 3 + 1,
                order_month=d.month,
                order_week=d.isocalendar()[1],
                order_month_name=MONTH_NAMES[d.month - 1],
                order_day_name=DAY_NAMES[d.weekday()],
                day_type=DayType.WEEKEND if d.weekday() >= 5 else DayType.WEEKDAY,
                quantity=r.quantity,
                amount_usd=r.amount_usd,
                total_amount_usd=_money(r.amount_usd * r.quantity),
                customer_email=r.customer_email,
                ship_country=r.ship_country,
                payment_method=r.payment_method,
                category=r.category,
                original_currency=r.currency_detected,
                email_was_inferred=r.email_was_inferred,
                quantity_was_adjusted=r.quantity_was_adjusted,
                transaction_size=transaction_size(r.amount_usd),
                region=region_for(r.ship_country),
            ))
        return facts

    def customer_summary(self, dataset: CanonicalDataset) -> list[CustomerSummary]:
        groups = _group_by(self.eligible(dataset), lambda r: r.customer_id)
        totals = {cid: sum((r.amount_usd for r in rs), Decimal("0")) for cid, rs in groups.items()}

        by_spend = sorted(groups, key=lambda cid: (totals[cid], cid))
        quintiles = dict(zip(by_spend, ntile(len(by_spend), QUINTILES)))

        summaries: list[CustomerSummary] = []
        for customer_id in sorted(groups):
            rs = groups[customer_id]
            first = min(r.order_date for r in rs)
            last = max(r.order_date for r in rs)
            transactions = len({r.transaction_id for r in rs})
            summaries.append(CustomerSummary(
                customer_id=customer_id,
                customer_email=min(r.customer_email for r in rs),
                total_transactions=transactions,
                unique_products_purchased=len({r.product_sku for r in rs}),
                unique_categories_purchased=len({r.category for r in rs}),
                total_items_purchased=sum(r.quantity for r in rs),
                total_spent_usd=_money(totals[customer_id]),
                avg_transaction_value=_money(totals[customer_id] / len(rs)),
                first_purchase_date=first,
                last_purchase_date=last,
                customer_lifetime_days=(last - first).days,
                primary_shipping_country=_mode(r.ship_country for r in rs),
                preferred_payment_method=_mode(r.payment_method for r in rs),
                customer_segment=customer_segment(transactions),
                days_since_last_purchase=(self.as_of - last).days,
                monetary_quintile=quintiles[customer_id],
            ))
        return summaries

    def product_performance(self, dataset: CanonicalDataset) -> list[ProductPerformance]:
        records = self.eligible(dataset)
        groups = _group_by(records, lambda r: (r.product_sku, r.category))
        keys = sorted(groups)

        revenue = [sum((r.amount_usd for r in groups[k]), Decimal("0")) for k in keys]
        orders = [len({r.transaction_id for r in groups[k]}) for k in keys]
        revenue_ranks = rank_desc(revenue)
        popularity_ranks = rank_desc(orders)

        per_sku = _group_by(records, lambda r: r.product_sku)
        sku_totals = [sum((r.amount_usd for r in rs), Decimal("0")) for rs in per_sku.values()]
        average_sku_total = sum(sku_totals, Decimal("0")) / len(sku_totals) if sku_totals else Decimal("0")

        rows: list[ProductPerformance] = []
        for i, (sku, category) in enumerate(keys):
            rs = groups[(sku, category)]
            prices = [r.amount_usd for r in rs]
            rows.append(ProductPerformance(
                product_sku=sku,
                category=category,
                times_ordered=orders[i],
                unique_customers=len({r.customer_id for r in rs}),
                total_quantity_sold=sum(r.quantity for r in rs),
                total_revenue_usd=_money(revenue[i]),
                avg_selling_price=_money(revenue[i] / len(rs)),
                min_selling_price=min(prices),
                max_selling_price=max(prices),
                price_volatility=_money(statistics.stdev(prices)) if len(prices) > 1 else None,
                revenue_rank=revenue_ranks[i],
                popularity_rank=popularity_ranks[i],
                performance_category=(
                    PerformanceCategory.ABOVE_AVERAGE
                    if revenue[i] > average_sku_total
                    else PerformanceCategory.BELOW_AVERAGE
                ),
            ))
        return rows

    def daily_sales_summary(self, dataset: CanonicalDataset) -> list[DailySalesSummary]:
        groups = _group_by(self.eligible(dataset), lambda r: r.order_date)

        rows: list[DailySalesSummary] = []
        daily_totals: list[Decimal] = []
        cumulative = Decimal("0")
        for order_date in sorted(groups):
            rs = groups[order_date]
            total = sum((r.amount_usd for r in rs), Decimal("0"))
            previous = daily_totals[-1] if daily_totals else None
            daily_totals.append(total)
            cumulative += total
            window = daily_totals[-MOVING_AVERAGE_WINDOW:]

            growth = None
            if previous:
                growth = ((total - previous) / previous * 100).quantize(CENTS, rounding=ROUND_HALF_UP)

            rows.append(DailySalesSummary(
                order_date=order_date,
                day_name=DAY_NAMES[order_date.weekday()],
                num_transactions=len({r.transaction_id for r in rs}),
                unique_customers=len({r.customer_id for r in rs}),
                items_sold=sum(r.quantity for r in rs),
                daily_revenue_usd=_money(total),
                avg_transaction_value=_money(total / len(rs)),
                cumulative_revenue=_money(cumulative),
                moving_avg_7day_revenue=_money(sum(window, Decimal("0")) / len(window)),
                previous_day_revenue=_money(previous) if previous is not None else None,
                day_over_day_growth_pct=growth,
            ))
        return rows

    @staticmethod
    def executive_summary(facts: Sequence[SalesFact]) -> ExecutiveSummary:
        """Totals and top performers by revenue over the sales fact rows."""
        dates = [f.order_date for f in facts]
        return ExecutiveSummary(
            total_transactions=len({f.transaction_id for f in facts}),
            first_order_date=min(dates) if dates else None,
            last_order_date=max(dates) if dates else None,
            total_revenue_usd=_money(sum((f.amount_usd for f in facts), Decimal("0"))),
            unique_customers=len({f.customer_id for f in facts}),
            unique_products=len({f.product_sku for f in facts}),
            countries_served=len({f.ship_country for f in facts if f.ship_country is not None}),
            top_customer=top_by_revenue(facts, lambda f: f.customer_id),
            top_product=top_by_revenue(facts, lambda f: f.product_sku),
            top_market=top_by_revenue(facts, lambda f: f.ship_country),
        )
