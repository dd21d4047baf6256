"""Papers list query controller: state, request building and fetch lifecycle."""
