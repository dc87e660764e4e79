"""Core: configuración, dominio, render de HCL y lógica de generación.

Nada aquí hace I/O por sí mismo; los adaptadores se inyectan.
"""
