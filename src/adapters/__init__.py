"""Adaptadores de I/O (HTTP) hacia el API de dog.ceo."""
