"""GraphQL API for the phonebook."""
