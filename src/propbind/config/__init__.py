"""The CLI's own settings, config-file discovery, and logging setup."""
