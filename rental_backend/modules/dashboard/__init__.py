"""Role-scoped dashboard statistics and the admin summary."""
