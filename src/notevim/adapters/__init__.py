"""Host adapters embedding the engine."""
