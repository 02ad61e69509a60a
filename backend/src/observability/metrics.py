"""Prometheus metrics for DenimFlow allocation.

Defines operational counters for demand and allocation outcomes.
"""

from prometheus_client import Counter, Gauge

commitments_created_total = Counter(
    "denimflow_commitments_created_total",
    "Total commitments recorded",
)

commitment_units_created_total = Counter(
    "denimflow_commitment_units_created_total",
    "Total units of demand recorded across commitments",
)

allocation_attempts_total = Counter(
    "denimflow_allocation_attempts_total",
    "Inventory status change events processed by the matcher",
    ["outcome"]  # outcome: assigned|no_match|ignored|conflict
)

bin_selections_total = Counter(
    "denimflow_bin_selections_total",
    "Put-away bin selections",
    ["reason"]  # reason: same_sku|empty|space_available|none
)

open_commitment_units = Gauge(
    "denimflow_open_commitment_units",
    "Open units of demand at the last production demand query",
)
