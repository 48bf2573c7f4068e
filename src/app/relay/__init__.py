"""Generation relay: submit to the provider, resolve async tasks, normalise results."""
