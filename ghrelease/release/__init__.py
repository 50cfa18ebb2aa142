"""Release drafting: version inference, branch ranking, commit diffing,
release message editing and the drafting state machine."""
