from .setup import setup_observability
from .metrics import (
    circula_payments_total,
    circula_payment_duration_seconds,
    circula_orders_created_total,
    circula_payment_status_overrides_total
)
