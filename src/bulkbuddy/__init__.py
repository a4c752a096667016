"""BulkBuddy meal planning backend."""
