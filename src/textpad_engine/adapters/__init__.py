"""Host adapters for concrete UI toolkits."""
