"""HTTP types — the immutable Request and Response the dispatcher speaks."""
