"""Adapters – Elasticsearch (index) and MongoDB (store) search backends."""
