"""PDF layout engine for interview analysis reports."""
