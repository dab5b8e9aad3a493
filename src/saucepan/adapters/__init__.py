"""Host adapters that embed the editor engine in a UI toolkit."""
