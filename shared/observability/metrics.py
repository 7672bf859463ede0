from prometheus_client import Counter, Histogram

# Business Metrics
circula_payments_total = Counter(
    "circula_payments_total",
    "Total payment submissions processed",
    # Labels: "success", "error", or the rejecting error code
    # (item_sold_out, order_not_found, order_access_denied, invalid_card)
    ["status"]
)

circula_payment_duration_seconds = Histogram(
    "circula_payment_duration_seconds",
    "Payment transaction duration in seconds"
)

circula_orders_created_total = Counter(
    "circula_orders_created_total",
    "Total orders created"
)

circula_payment_status_overrides_total = Counter(
    "circula_payment_status_overrides_total",
    "Administrative payment status overrides",
    ["status"] # Labels: 'Success', 'Failed'
)
