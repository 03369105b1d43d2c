"""Derived analysis tables built from the canonical dataset."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from salesprep.models.enums import (
    CustomerSegment,
    DayType,
    PerformanceCategory,
    Region,
    TransactionSize,
)


class SalesFact(BaseModel):
    transaction_id: str
    customer_id: str
    product_sku: str
    order_date: date
    order_year: int
    order_quarter: int
    order_month: int
    order_week: int
    order_month_name: str
    order_day_name: str
    day_type: DayType
    quantity: int
    amount_usd: Decimal
    total_amount_usd: Decimal
    customer_email: str
    ship_country: str | None
    payment_method: str | None
    category: str
    original_currency: str | None
    email_was_inferred: bool
    quantity_was_adjusted: bool
    transaction_size: TransactionSize
    region: Region


class CustomerSummary(BaseModel):
    customer_id: str
    customer_email: str
    total_transactions: int
    unique_products_purchased: int
    unique_categories_purchased: int
    total_items_purchased: int
    total_spent_usd: Decimal
    avg_transaction_value: Decimal
    first_purchase_date: date
    last_purchase_date: date
    customer_lifetime_days: int
    primary_shipping_country: str | None
    preferred_payment_method: str | None
    customer_segment: CustomerSegment
    days_since_last_purchase: int
    monetary_quintile: int


class ProductPerformance(BaseModel):
    product_sku: str
    category: str
    times_ordered: int
    unique_customers: int
    total_quantity_sold: int
    total_revenue_usd: Decimal
    avg_selling_price: Decimal
    min_selling_price: Decimal
    max_selling_price: Decimal
    price_volatility: Decimal | None
    revenue_rank: int
    popularity_rank: int
    performance_category: PerformanceCategory


class DailySalesSummary(BaseModel):
    order_date: date
    day_name: str
    num_transactions: int
    unique_customers: int
    items_sold: int
    daily_revenue_usd: Decimal
    avg_transaction_value: Decimal
    cumulative_revenue: Decimal
    moving_avg_7day_revenue: Decimal
    previous_day_revenue: Decimal | None
    day_over_day_growth_pct: Decimal | None


class TopPerformer(BaseModel):
    key: str
    revenue_usd: Decimal


class ExecutiveSummary(BaseModel):
    """Headline figures over the sales fact table."""

    total_transactions: int
    first_order_date: date | None
    last_order_date: date | None
    total_revenue_usd: Decimal
    unique_customers: int
    unique_products: int
    countries_served: int
    top_customer: TopPerformer | None
    top_product: TopPerformer | None
    top_market: TopPerformer | None
