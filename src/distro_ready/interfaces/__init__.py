"""Interface adapters for the command line tooling."""
