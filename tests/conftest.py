"""Test configuration and fixtures."""

import logfire

# Keep spans local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)
