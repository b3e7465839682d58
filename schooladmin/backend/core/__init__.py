"""Domain logic: list controller, entity configuration and record stores."""
