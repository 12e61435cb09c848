"""Domain layer — pure agreement models and validation rules.

The domain layer has no I/O and never imports from infrastructure,
services, or commands.
"""
