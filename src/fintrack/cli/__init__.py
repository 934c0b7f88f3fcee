"""CLI package for fintrack."""
