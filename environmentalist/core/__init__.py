"""Lists, naming conventions, fault handlers and file resolution."""
