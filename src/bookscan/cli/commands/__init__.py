# ABOUTME: Subcommands of the bookscan CLI, one module per command.
# ABOUTME: Each module defines a single Click command registered in bookscan.cli.
