"""Command line entry point (``python -m attendance_register.cli``)."""
