"""Default limits applied to ledger pagination and authorization batches."""

DEFAULT_LIMIT = 10
MAX_LIMIT = 30
MAX_BATCH_SIZE = 64
