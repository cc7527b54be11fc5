"""relkit subcommands."""
