"""Built-in plugins registered by the application."""
