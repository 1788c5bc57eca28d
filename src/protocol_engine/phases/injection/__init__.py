"""Events injected from outside the plan template (travel, user logs)."""
