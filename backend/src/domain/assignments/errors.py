"""Allocation errors."""


class AllocationConflictError(Exception):
    """Raised when the selected commitment changed before it could be resolved.

    The unit of work is rolled back, so no assignment is left behind and the
    inventory unit stays available for a later allocation attempt.
    """

    code = "ALLOCATION_CONFLICT"

    def __init__(self, commitment_id, inventory_item_id: str):
        self.message = (
            f"Commitment {commitment_id} disappeared before inventory item "
            f"{inventory_item_id} could be assigned"
        )
        super().__init__(self.message)
        self.commitment_id = commitment_id
        self.inventory_item_id = inventory_item_id
