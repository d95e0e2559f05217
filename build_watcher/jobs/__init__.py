"""Build jobs - client, poller, diagnostics."""
