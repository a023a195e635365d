"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(hosted database client, error types, settings, logging, migrations). Keep
feature-specific queries and business logic in the corresponding feature
package (e.g. `posts/`).
"""
