"""GraphQL API for the book catalog."""
