"""LaunchBar Core - environment, result items, text processing and stores."""
