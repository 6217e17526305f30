"""Framework adapters for gqlcache."""
