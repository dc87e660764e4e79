"""Adaptadores: HTTP, interacciones grabadas y salida a archivos."""
