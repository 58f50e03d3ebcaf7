"""Users bounded context - the User aggregate, its events and rules."""
