"""Core: dominio, configuración y servicios puros del catálogo de razas."""
