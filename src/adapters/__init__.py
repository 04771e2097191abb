"""Integration adapters: the Notion record store and HTTP notification channels."""
