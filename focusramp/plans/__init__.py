"""Plan store: durable plans, training days and session logs."""
