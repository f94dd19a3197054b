"""Built-in tool plugins. Importing a plugin package registers it."""
