"""Screen-level workflows built on the backend clients and workflow rules."""
