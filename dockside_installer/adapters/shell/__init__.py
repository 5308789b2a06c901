"""Shell command execution."""
