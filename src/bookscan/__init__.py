# ABOUTME: bookscan - scan ISBN barcodes into a personal book catalog.
# ABOUTME: Subpackages: lookup (remote resolution), db (persistence), core (scan state machine), cli.
