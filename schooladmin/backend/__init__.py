"""Backend package: API, CLI, schemas, services and core domain logic."""
