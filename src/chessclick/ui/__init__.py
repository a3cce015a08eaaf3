"""PyQt6 board view and application shell."""
