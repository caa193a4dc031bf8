"""Page object, step-flow model and helpers for the walk-in bath lead form."""
