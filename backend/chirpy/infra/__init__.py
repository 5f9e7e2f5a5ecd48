"""Infrastructure adapters: the JSON document store and the JWT provider."""
