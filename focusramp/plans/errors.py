"""Plan store error types."""


class PartialPersistenceFailure(RuntimeError):
    """Raised when a plan was stored but its training days were not all written.

    The plan row exists; days from batches that committed before the failure
    are kept. Regeneration or retry is the caller's decision.

    Attributes:
        plan_id: Identifier of the stored plan
        persisted_days: Number of days committed before the failure
        total_days: Number of days generated for the plan
    """

    def __init__(self, plan_id: str, persisted_days: int, total_days: int):
        self.plan_id = plan_id
        self.persisted_days = persisted_days
        self.total_days = total_days
        super().__init__(f"Plan {plan_id}: persisted {persisted_days} of {total_days} training days")
