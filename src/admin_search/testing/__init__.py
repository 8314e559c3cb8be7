"""Testing helpers – in-memory backend doubles for unit tests."""
