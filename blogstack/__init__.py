"""blogstack: blog and entry REST API backed by a relational store and a search index."""
