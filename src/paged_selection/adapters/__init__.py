"""Host adapters that render the selection model."""
